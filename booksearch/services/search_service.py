from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence
import numpy as np

from booksearch.core.config import settings
from booksearch.core.errors import IndexNotBuiltError
from booksearch.indexing import Index, make_index
from booksearch.ingestion.catalog import load_catalog
from booksearch.models.book import Book
from booksearch.services.embedding_pipeline import EmbeddingPipeline

logger = logging.getLogger(__name__)


class SearchService:
    """
    Orchestrates loading the catalog, embedding titles, building an index
    (kd|brute) once, and answering any number of top-k queries against it.

    A rebuild constructs a new index and swaps the reference, so concurrent
    searches always see one complete, read-only index.
    """
    _singleton: "SearchService | None" = None

    def __init__(
        self,
        pipeline: Optional[EmbeddingPipeline] = None,
        index: Optional[str] = None,
    ) -> None:
        self._pipeline = pipeline
        self.index_kind = index or settings.INDEX
        self._index: Optional[Index] = None

    @classmethod
    def instance(cls) -> "SearchService":
        if not cls._singleton:
            cls._singleton = cls()
        return cls._singleton

    @property
    def pipeline(self) -> EmbeddingPipeline:
        # created lazily so the service can exist before a provider is configured
        if self._pipeline is None:
            self._pipeline = EmbeddingPipeline()
        return self._pipeline

    @property
    def index(self) -> Index:
        if self._index is None:
            raise IndexNotBuiltError("no catalog has been indexed yet")
        return self._index

    def load_catalog(self, path: str | Path | None = None) -> int:
        return self.build(load_catalog(path or settings.CATALOG_PATH))

    def build(self, books: Sequence[Book]) -> int:
        rows = self.pipeline.embed_books(books)
        idx = make_index(self.index_kind, rows)
        self._index = idx
        logger.info(f"Built {self.index_kind} index over {len(idx)} books")
        return len(idx)

    def stats(self) -> Dict[str, Any]:
        idx = self._index
        return {
            "index": self.index_kind,
            "built": idx is not None,
            "size": len(idx) if idx is not None else 0,
            "dim": idx.dim if idx is not None else settings.EMBEDDING_DIM,
        }

    def search(
        self,
        *,
        query_text: Optional[str] = None,
        query_embedding: Optional[List[float]] = None,
        k: int = 5,
    ) -> Dict[str, Any]:
        idx = self.index

        if query_embedding is not None:
            q = np.asarray(query_embedding, dtype=np.float64)
        elif query_text is not None:
            q = self.pipeline.embed_query(query_text)
        else:
            raise ValueError("Provide either query_text or query_embedding")

        hits = idx.query(q, k)
        packed = [
            {
                "rank": rank,
                "title": h.item.title,
                "author": h.item.author,
                "squared_distance": h.squared_distance,
            }
            for rank, h in enumerate(hits, start=1)
        ]
        return {"hits": packed, "index": self.index_kind, "size": len(idx)}
