"""
Base classes for neighbor search strategies.

A strategy receives opaque point handles and a pairwise distance function
and returns, for every point, the indices of its k nearest neighbors
(nearest first, the point itself excluded).
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, List, Sequence

import numpy as np
from scipy.sparse import coo_matrix
from scipy.sparse.csgraph import connected_components

Neighbors = List[List[int]]
DistanceFn = Callable[[Any, Any], float]


class NeighborsStrategy(ABC):
    """Abstract base class for k-nearest-neighbor search."""

    @abstractmethod
    def find_neighbors(self, points: Sequence[Any], k: int, distance: DistanceFn) -> Neighbors:
        """
        Find the *k* nearest neighbors of every point.

        Args:
            points: Point handles, passed through to *distance*
            k: Number of neighbors per point (< len(points))
            distance: Pairwise distance over point handles

        Returns:
            One list of k indices into *points* per point, nearest first
        """

    def get_strategy_name(self) -> str:
        return type(self).__name__


def distance_from_kernel(kernel: Callable[[Any, Any], float]) -> DistanceFn:
    """Kernel-induced distance ``sqrt(k(a,a) + k(b,b) - 2 k(a,b))``."""

    def distance(a: Any, b: Any) -> float:
        squared = kernel(a, a) + kernel(b, b) - 2.0 * kernel(a, b)
        return float(np.sqrt(max(squared, 0.0)))

    return distance


def is_connected(neighbors: Neighbors) -> bool:
    """Whether the symmetrised k-NN graph has a single connected component."""
    n = len(neighbors)
    if n == 0:
        return True
    rows = np.repeat(np.arange(n), [len(nbrs) for nbrs in neighbors])
    cols = np.fromiter((j for nbrs in neighbors for j in nbrs), dtype=np.int64, count=len(rows))
    graph = coo_matrix((np.ones(len(rows)), (rows, cols)), shape=(n, n))
    n_components, _ = connected_components(graph, directed=False)
    return n_components == 1
