from __future__ import annotations
from dataclasses import dataclass
from typing import Any, List, Protocol, Sequence
import numpy as np

from booksearch.core.errors import DimensionMismatchError, EmptyIndexError


@dataclass(frozen=True, eq=False)
class LabeledVector:
    """
    A searchable book title with its embedding.
    The embedding is copied to a read-only float64 array on creation,
    so a LabeledVector never changes after it is handed to an index.
    """
    title: str
    author: str
    embedding: np.ndarray

    def __post_init__(self) -> None:
        vec = np.array(self.embedding, dtype=np.float64)
        if vec.ndim != 1:
            raise ValueError(f"embedding must be 1-D, got shape {vec.shape}")
        vec.flags.writeable = False
        object.__setattr__(self, "embedding", vec)

    @property
    def dim(self) -> int:
        return int(self.embedding.shape[0])


@dataclass(frozen=True)
class Neighbor:
    """One query hit: the stored item and its squared Euclidean distance."""
    item: LabeledVector
    squared_distance: float


class Index(Protocol):
    """
    Interface for all vector indexes.
    Implementations are built once from a full batch and answer
    `query(target, k)` with at most k Neighbors, nearest first.
    """
    dim: int

    def query(self, target: Any, k: int) -> List[Neighbor]:
        ...

    def __len__(self) -> int:
        ...


def squared_distance(a: np.ndarray, b: np.ndarray) -> float:
    """Sum of squared per-dimension differences."""
    d = a - b
    return float(d @ d)


def stack_rows(rows: Sequence[LabeledVector]) -> np.ndarray:
    """Validate a build batch and return its embeddings as an (n, D) matrix."""
    if not rows:
        raise EmptyIndexError("cannot build an index from zero vectors")
    dim = rows[0].dim
    for r in rows:
        if r.dim != dim:
            raise DimensionMismatchError(dim, r.dim, what=f"vector for {r.title!r}")
    points = np.vstack([r.embedding for r in rows])
    if not np.isfinite(points).all():
        raise ValueError("embeddings must be finite")
    points.flags.writeable = False
    return points


def as_target(target: Any, dim: int) -> np.ndarray:
    """Coerce a query vector and check it against the index dimension."""
    q = np.asarray(target, dtype=np.float64)
    if q.ndim != 1:
        raise DimensionMismatchError(dim, q.size, what="query")
    if q.shape[0] != dim:
        raise DimensionMismatchError(dim, q.shape[0], what="query")
    if not np.isfinite(q).all():
        raise ValueError("query must be finite")
    return q
