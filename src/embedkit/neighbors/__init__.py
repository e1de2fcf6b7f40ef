"""
Neighbor search strategies.

All strategies implement NeighborsStrategy and return, for every point,
the indices of its k nearest other points ordered by distance.
"""

from .base import NeighborsStrategy, distance_from_kernel, is_connected
from .brute_force import BruteForceNeighbors
from .vp_tree import VantagePointTreeNeighbors
from .factory import NeighborsFactory

__all__ = [
    "NeighborsStrategy",
    "distance_from_kernel",
    "is_connected",
    "BruteForceNeighbors",
    "VantagePointTreeNeighbors",
    "NeighborsFactory",
]
