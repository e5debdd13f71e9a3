from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    COHERE_API_KEY: str | None = None
    # embed-english-light-v3.0 returns 384-dim vectors, matching EMBEDDING_DIM
    COHERE_MODEL: str = "embed-english-light-v3.0"
    COHERE_TIMEOUT: float = 10.0
    COHERE_MAX_RETRIES: int = 2  # connection-level retries inside httpx

    EMBEDDING_PROVIDER: str = "cohere"  # "cohere" | "local"
    LOCAL_MODEL: str = "sentence-transformers/all-MiniLM-L12-v2"
    EMBEDDING_DIM: int = 384
    EMBED_BATCH_SIZE: int = 96

    CATALOG_PATH: str = "booksummaries.txt"
    INDEX: str = "kd"  # "kd" | "brute"
    TOP_K: int = 10
    LOAD_CATALOG_ON_STARTUP: bool = True

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
