from __future__ import annotations

from booksearch.core.config import settings

from .base import EmbeddingProvider, FunctionProvider
from .cohere_provider import CohereProvider


def get_provider(name: str | None = None) -> EmbeddingProvider:
    name = name or settings.EMBEDDING_PROVIDER
    if name == "cohere":
        return CohereProvider()
    if name == "local":
        from .sentence_transformer_provider import SentenceTransformerProvider
        return SentenceTransformerProvider()
    raise ValueError("EMBEDDING_PROVIDER must be 'cohere' or 'local'")


__all__ = ["CohereProvider", "EmbeddingProvider", "FunctionProvider", "get_provider"]
