"""
Brute-force neighbor search: evaluates every pairwise distance.
"""

from typing import Any, Sequence

import numpy as np

from .base import DistanceFn, Neighbors, NeighborsStrategy


class BruteForceNeighbors(NeighborsStrategy):
    """
    Exact k-NN by exhaustive search.

    O(N^2) distance evaluations; deterministic, ties broken by index.
    """

    def find_neighbors(self, points: Sequence[Any], k: int, distance: DistanceFn) -> Neighbors:
        n = len(points)
        if not 0 < k < n:
            raise ValueError(f"k ({k}) must be in [1, n_points) with n_points={n}")

        D = np.zeros((n, n))
        for i in range(n):
            for j in range(i + 1, n):
                D[i, j] = D[j, i] = distance(points[i], points[j])

        neighbors: Neighbors = []
        for i in range(n):
            row = D[i].copy()
            row[i] = np.inf
            order = np.argsort(row, kind="stable")
            neighbors.append([int(j) for j in order[:k]])
        return neighbors
