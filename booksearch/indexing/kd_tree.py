from __future__ import annotations
from dataclasses import dataclass
from heapq import heappush, heapreplace
import logging
import operator
from typing import Any, Iterator, List, Optional, Sequence, Tuple
import numpy as np

from .base import Index, LabeledVector, Neighbor, as_target, squared_distance, stack_rows

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class KDNode:
    """
    One tree node. `row` is the position of the stored vector in the
    build batch; `value` is that vector's coordinate on `axis`.
    """
    row: int
    axis: int
    value: float
    left: Optional["KDNode"] = None
    right: Optional["KDNode"] = None


class KDTreeIndex(Index):
    """
    Exact k-nearest-neighbour search over squared Euclidean distance.

    Build  : O(N log N)  (introselect median per level, axis = depth mod D)
    Search : O(log N) nodes on well-spread data, O(N) worst case
    Space  : O(ND)

    Partition rule: the pivot is the median along the node's axis; when
    several vectors share the median value the earliest one in build
    order is the pivot and all other ties go left. So for every node,
    left subtree coords <= value < right subtree coords.

    Ties in distance are ordered by build position, which makes results
    reproducible across calls and identical to BruteForceIndex.
    """

    def __init__(self, rows: Sequence[LabeledVector]) -> None:
        self.rows: List[LabeledVector] = list(rows)
        self._points = stack_rows(self.rows)
        self.dim = int(self._points.shape[1])
        self.height = 0
        self.root = self._build()
        logger.debug(f"Built k-d tree: n={len(self.rows)}, dim={self.dim}, height={self.height}")

    @classmethod
    def build(cls, rows: Sequence[LabeledVector]) -> "KDTreeIndex":
        return cls(rows)

    def __len__(self) -> int:
        return len(self.rows)

    def _split(self, idx: np.ndarray, depth: int) -> Tuple[KDNode, np.ndarray, np.ndarray]:
        """Make the node for one subset; return it with its left/right subsets."""
        axis = depth % self.dim
        coords = self._points[idx, axis]
        mid = len(idx) // 2
        value = coords[np.argpartition(coords, mid)[mid]]
        pivot = int(np.flatnonzero(coords == value)[0])
        self.height = max(self.height, depth + 1)

        lower = coords <= value
        lower[pivot] = False
        node = KDNode(row=int(idx[pivot]), axis=axis, value=float(value))
        return node, idx[lower], idx[coords > value]

    def _build(self) -> KDNode:
        root, left_idx, right_idx = self._split(np.arange(len(self.rows)), 0)
        # explicit stack instead of recursion: duplicate-heavy data can go deep
        # entries: (batch positions in ascending order, depth, parent, is_left)
        work: List[Tuple[np.ndarray, int, KDNode, bool]] = [
            (left_idx, 1, root, True),
            (right_idx, 1, root, False),
        ]
        while work:
            idx, depth, parent, is_left = work.pop()
            if not idx.size:
                continue
            node, left_idx, right_idx = self._split(idx, depth)
            if is_left:
                parent.left = node
            else:
                parent.right = node
            work.append((left_idx, depth + 1, node, True))
            work.append((right_idx, depth + 1, node, False))
        return root

    def nodes(self) -> Iterator[KDNode]:
        """Pre-order walk over every node."""
        stack = [self.root]
        while stack:
            node = stack.pop()
            yield node
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)

    def query(self, target: Any, k: int) -> List[Neighbor]:
        q = as_target(target, self.dim)
        k = operator.index(k)
        if k <= 0:
            return []
        k = min(k, len(self.rows))

        # max-heap of the best k as (-dist, -row): heap[0] is the worst kept
        heap: List[Tuple[float, int]] = []
        # (node, lower bound on squared distance to anything under it)
        stack: List[Tuple[KDNode, float]] = [(self.root, 0.0)]
        while stack:
            node, bound = stack.pop()
            if len(heap) == k and bound > -heap[0][0]:
                continue

            cand = (-squared_distance(self._points[node.row], q), -node.row)
            if len(heap) < k:
                heappush(heap, cand)
            elif cand > heap[0]:
                heapreplace(heap, cand)

            diff = float(q[node.axis]) - node.value
            if diff <= 0.0:
                near, far = node.left, node.right
            else:
                near, far = node.right, node.left
            # far is pushed first so the near side is searched first;
            # its bound is re-checked when popped, against the tighter worst
            if far is not None:
                stack.append((far, max(bound, diff * diff)))
            if near is not None:
                stack.append((near, bound))

        return [Neighbor(self.rows[-neg_row], -neg_d) for neg_d, neg_row in sorted(heap, reverse=True)]
