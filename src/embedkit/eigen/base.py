"""
Base class for eigensolver strategies.

A solver extracts ``target_dimension`` eigenpairs of a symmetric matrix
(or of a symmetric-definite pair for generalized problems) from either
end of the spectrum.
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple

import numpy as np
from scipy import sparse

EigenPairs = Tuple[np.ndarray, np.ndarray]


class EigenSolver(ABC):
    """Abstract base class for eigensolvers."""

    #: Whether ``solve`` accepts a right-hand matrix (A v = lambda B v)
    supports_generalized: bool = False

    @abstractmethod
    def solve(
        self,
        matrix,
        target_dimension: int,
        *,
        largest: bool,
        skip: int = 0,
        rhs=None,
        shift: float = 0.0,
        rng: Optional[np.random.Generator] = None,
    ) -> EigenPairs:
        """
        Compute eigenpairs of *matrix*.

        Args:
            matrix: Symmetric dense ndarray or scipy sparse matrix (n, n)
            target_dimension: Number of eigenpairs to return
            largest: Take the largest eigenvalues if True, else the smallest
            skip: Number of leading (smallest) eigenpairs to discard when
                ``largest`` is False, e.g. the constant vector of an
                alignment matrix
            rhs: Right-hand matrix of a generalized problem, or None
            shift: Diagonal regularisation for smallest-eigenvalue problems
            rng: Source of starting vectors / random projections

        Returns:
            Tuple of:
            - vectors: (n, target_dimension), one eigenvector per column
            - values: (target_dimension,), descending if ``largest`` else ascending

        Raises:
            ValueError: If the request cannot be satisfied (e.g. too many pairs)
        """

    def get_solver_name(self) -> str:
        return type(self).__name__

    def _check_request(self, matrix, target_dimension: int, skip: int, rhs) -> int:
        if rhs is not None and not self.supports_generalized:
            raise ValueError(f"{self.get_solver_name()} does not support generalized eigenproblems")
        n = matrix.shape[0]
        if matrix.shape != (n, n):
            raise ValueError(f"matrix must be square; got {matrix.shape}")
        if rhs is not None and rhs.shape != matrix.shape:
            raise ValueError(f"rhs shape {rhs.shape} does not match matrix shape {matrix.shape}")
        wanted = target_dimension + skip
        if target_dimension < 1 or wanted > n:
            raise ValueError(
                f"Cannot extract {target_dimension} eigenpairs (skipping {skip}) "
                f"from a {n}x{n} matrix"
            )
        return n


def to_dense(matrix) -> np.ndarray:
    if sparse.issparse(matrix):
        return matrix.toarray()
    return np.asarray(matrix, dtype=np.float64)
