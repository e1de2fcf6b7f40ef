"""
Tree-based neighbor search over an arbitrary metric.

A vantage-point tree splits points by their distance to a pivot, so it
only needs the distance callback (no coordinates). Search prunes subtrees
with the triangle inequality.
"""

from __future__ import annotations

import heapq
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

import numpy as np

from .base import DistanceFn, Neighbors, NeighborsStrategy


@dataclass
class _Node:
    index: int
    radius: float = 0.0
    inside: Optional["_Node"] = None
    outside: Optional["_Node"] = None


class VantagePointTreeNeighbors(NeighborsStrategy):
    """
    k-NN through a vantage-point tree.

    Registered for ``NeighborsMethod.COVER_TREE``. Results match brute
    force up to the ordering of equidistant points, so its descriptor is
    registered as inexact.
    """

    def find_neighbors(self, points: Sequence[Any], k: int, distance: DistanceFn) -> Neighbors:
        n = len(points)
        if not 0 < k < n:
            raise ValueError(f"k ({k}) must be in [1, n_points) with n_points={n}")

        def dist(i: int, j: int) -> float:
            return distance(points[i], points[j])

        root = self._build(list(range(n)), dist)
        return [self._query(root, i, k, dist) for i in range(n)]

    def _build(self, indices: List[int], dist) -> Optional[_Node]:
        if not indices:
            return None
        root = _Node(indices[0])
        # (node, remaining indices below it)
        pending = [(root, indices[1:])]
        while pending:
            node, rest = pending.pop()
            if not rest:
                continue
            distances = np.array([dist(node.index, j) for j in rest])
            node.radius = float(np.median(distances))
            inside = [j for j, d in zip(rest, distances) if d <= node.radius]
            outside = [j for j, d in zip(rest, distances) if d > node.radius]
            if inside:
                node.inside = _Node(inside[0])
                pending.append((node.inside, inside[1:]))
            if outside:
                node.outside = _Node(outside[0])
                pending.append((node.outside, outside[1:]))
        return root

    def _query(self, root: Optional[_Node], query: int, k: int, dist) -> List[int]:
        # max-heap of (-distance, -index) holding the best k so far
        best: list = []
        tau = np.inf
        stack = [root]
        while stack:
            node = stack.pop()
            if node is None:
                continue
            d = dist(query, node.index)
            if node.index != query:
                item = (-d, -node.index)
                if len(best) < k:
                    heapq.heappush(best, item)
                elif item > best[0]:
                    heapq.heapreplace(best, item)
                if len(best) == k:
                    tau = -best[0][0]
            # visit the more promising side last so it is popped first
            if d <= node.radius:
                if d + tau > node.radius:
                    stack.append(node.outside)
                if d - tau <= node.radius:
                    stack.append(node.inside)
            else:
                if d - tau <= node.radius:
                    stack.append(node.inside)
                if d + tau > node.radius:
                    stack.append(node.outside)
        ordered = sorted(((-neg_d, -neg_i) for neg_d, neg_i in best))
        return [int(i) for _, i in ordered]
