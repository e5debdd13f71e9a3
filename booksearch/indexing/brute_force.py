from __future__ import annotations
import operator
from typing import Any, List, Sequence, Tuple
from .base import Index, LabeledVector, Neighbor, as_target, squared_distance, stack_rows


class BruteForceIndex(Index):
    """
    Exact squared-Euclidean search by linear scan.
    Build  : O(ND)   (stack into one matrix)
    Search : O(ND)   (N distances of length D)
    Space  : O(ND)
    Same ordering rules as KDTreeIndex: ascending distance, then build order.
    """

    def __init__(self, rows: Sequence[LabeledVector]) -> None:
        self.rows: List[LabeledVector] = list(rows)
        self._points = stack_rows(self.rows)
        self.dim = int(self._points.shape[1])

    @classmethod
    def build(cls, rows: Sequence[LabeledVector]) -> "BruteForceIndex":
        return cls(rows)

    def __len__(self) -> int:
        return len(self.rows)

    def query(self, target: Any, k: int) -> List[Neighbor]:
        q = as_target(target, self.dim)
        k = operator.index(k)
        if k <= 0:
            return []

        scores: List[Tuple[float, int]] = []
        for i, v in enumerate(self._points):
            scores.append((squared_distance(v, q), i))

        # top-k: sort by (distance, build position) ascending
        scores.sort()
        return [Neighbor(self.rows[i], d) for d, i in scores[:min(k, len(scores))]]
