"""
Eigensolver strategies.

All solvers implement EigenSolver.solve and return eigenvectors as columns
together with their eigenvalues. Only ArpackSolver handles generalized
problems.
"""

from .base import EigenSolver
from .arpack import ArpackSolver
from .randomized import RandomizedSolver
from .dense import DenseSolver
from .factory import EigenSolverFactory

__all__ = [
    "EigenSolver",
    "ArpackSolver",
    "RandomizedSolver",
    "DenseSolver",
    "EigenSolverFactory",
]
