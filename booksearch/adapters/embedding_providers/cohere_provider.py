from __future__ import annotations
from typing import List, Sequence
import httpx
from booksearch.core.config import settings
from booksearch.core.errors import EmbeddingError

COHERE_EMBED_URL = "https://api.cohere.ai/v1/embed"


class CohereProvider:
    """Minimal Cohere embedder for this project."""
    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self.api_key = api_key or settings.COHERE_API_KEY
        self.model = model or settings.COHERE_MODEL
        self._client = client or httpx.Client(
            timeout=settings.COHERE_TIMEOUT,
            transport=httpx.HTTPTransport(retries=settings.COHERE_MAX_RETRIES),
        )

    def embed_texts(self, texts: Sequence[str], *, input_type: str = "search_document") -> List[List[float]]:
        if not self.api_key:
            raise EmbeddingError("COHERE_API_KEY not configured")
        if not texts:
            return []
        try:
            r = self._client.post(
                COHERE_EMBED_URL,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                json={
                    "texts": list(texts),
                    "model": self.model,
                    "input_type": input_type,  # Required for v3.0 models
                },
            )
            r.raise_for_status()
        except httpx.HTTPError as e:
            raise EmbeddingError(f"Cohere embed request failed: {e}") from e
        try:
            return r.json()["embeddings"]
        except (ValueError, KeyError, TypeError) as e:
            raise EmbeddingError("Cohere response has no 'embeddings' field") from e

    def close(self) -> None:
        self._client.close()
