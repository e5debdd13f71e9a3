from __future__ import annotations
import logging
from typing import List, Optional, Sequence
import numpy as np

from booksearch.adapters.embedding_providers import EmbeddingProvider, get_provider
from booksearch.core.config import settings
from booksearch.core.errors import EmbeddingError
from booksearch.indexing.base import LabeledVector
from booksearch.models.book import Book

logger = logging.getLogger(__name__)


class EmbeddingPipeline:
    """
    Maps books to LabeledVectors by embedding their titles.
    Calls the provider in batches; output order always matches input order.
    Any provider failure or malformed vector raises EmbeddingError; vectors
    are never truncated or padded.
    """

    def __init__(
        self,
        provider: Optional[EmbeddingProvider] = None,
        dim: Optional[int] = None,
        batch_size: Optional[int] = None,
    ) -> None:
        self.provider = provider or get_provider()
        self.dim = dim or settings.EMBEDDING_DIM
        self.batch_size = batch_size or settings.EMBED_BATCH_SIZE
        if self.batch_size <= 0:
            raise ValueError("batch_size must be positive")

    def _embed(self, texts: Sequence[str], input_type: str) -> List[np.ndarray]:
        try:
            raw = self.provider.embed_texts(texts, input_type=input_type)
        except EmbeddingError:
            raise
        except Exception as e:
            raise EmbeddingError(f"embedding provider failed: {e}") from e

        if len(raw) != len(texts):
            raise EmbeddingError(f"provider returned {len(raw)} vectors for {len(texts)} texts")
        out: List[np.ndarray] = []
        for text, vec in zip(texts, raw):
            try:
                arr = np.asarray(vec, dtype=np.float64)
            except (TypeError, ValueError) as e:
                raise EmbeddingError(f"non-numeric embedding for {text!r}") from e
            if arr.shape != (self.dim,):
                raise EmbeddingError(f"embedding for {text!r} has shape {arr.shape}, expected ({self.dim},)")
            if not np.isfinite(arr).all():
                raise EmbeddingError(f"embedding for {text!r} has non-finite values")
            out.append(arr)
        return out

    def embed_books(self, books: Sequence[Book]) -> List[LabeledVector]:
        rows: List[LabeledVector] = []
        for start in range(0, len(books), self.batch_size):
            batch = books[start:start + self.batch_size]
            vecs = self._embed([b.title for b in batch], "search_document")
            rows.extend(b.to_embedded(v) for b, v in zip(batch, vecs))
            logger.debug(f"Embedded {len(rows)}/{len(books)} titles")
        logger.info(f"Embedded {len(rows)} titles (dim={self.dim})")
        return rows

    def embed_query(self, text: str) -> np.ndarray:
        return self._embed([text], "search_query")[0]
