from __future__ import annotations
from typing import Callable, List, Protocol, Sequence


class EmbeddingProvider(Protocol):
    """
    Anything that turns texts into vectors, one per text, in input order.
    `input_type` is "search_document" for catalog titles and
    "search_query" for user queries; providers may ignore it.
    """
    def embed_texts(self, texts: Sequence[str], *, input_type: str = "search_document") -> List[List[float]]:
        ...


class FunctionProvider:
    """Adapts a single-text `embed(text) -> vector` callable to the batched interface."""

    def __init__(self, fn: Callable[[str], Sequence[float]]) -> None:
        self._fn = fn

    def embed_texts(self, texts: Sequence[str], *, input_type: str = "search_document") -> List[List[float]]:
        return [list(self._fn(t)) for t in texts]
