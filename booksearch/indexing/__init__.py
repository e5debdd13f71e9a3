"""
Vector indexes for nearest-neighbour search over book embeddings.

- KDTreeIndex: balanced k-d tree with pruned exact k-NN search
- BruteForceIndex: linear scan, same results, used as a reference
"""

from __future__ import annotations
from typing import Any, List, Sequence

from .base import Index, LabeledVector, Neighbor, squared_distance
from .brute_force import BruteForceIndex
from .kd_tree import KDNode, KDTreeIndex


def build(vectors: Sequence[LabeledVector]) -> KDTreeIndex:
    """Build a k-d tree over a complete, non-empty batch."""
    return KDTreeIndex.build(vectors)


def query(index: Index, target: Any, k: int) -> List[Neighbor]:
    """Return the k nearest stored vectors to `target`, nearest first."""
    return index.query(target, k)


def make_index(kind: str, rows: Sequence[LabeledVector]) -> Index:
    if kind == "kd":
        return KDTreeIndex.build(rows)
    if kind == "brute":
        return BruteForceIndex.build(rows)
    raise ValueError("index must be 'kd' or 'brute'")


__all__ = [
    "BruteForceIndex",
    "Index",
    "KDNode",
    "KDTreeIndex",
    "LabeledVector",
    "Neighbor",
    "build",
    "make_index",
    "query",
    "squared_distance",
]
