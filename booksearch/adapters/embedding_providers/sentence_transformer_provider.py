from __future__ import annotations
from typing import List, Sequence
from booksearch.core.config import settings


class SentenceTransformerProvider:
    """
    Local embedder (all-MiniLM-L12-v2 by default, 384 dims).
    Needs the `local` extra: pip install booksearch[local]
    """
    def __init__(self, model_name: str | None = None, batch_size: int | None = None) -> None:
        # Import here so the Cohere-only install does not pull in torch
        from sentence_transformers import SentenceTransformer

        self.model_name = model_name or settings.LOCAL_MODEL
        self.batch_size = batch_size or settings.EMBED_BATCH_SIZE
        self._model = SentenceTransformer(self.model_name)

    def embed_texts(self, texts: Sequence[str], *, input_type: str = "search_document") -> List[List[float]]:
        if not texts:
            return []
        vecs = self._model.encode(list(texts), batch_size=self.batch_size, convert_to_numpy=True)
        return vecs.tolist()
