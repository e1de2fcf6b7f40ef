"""
Dense self-adjoint eigensolver: full decomposition with LAPACK.

Useful for debugging and small problems.
"""

from typing import Optional

import numpy as np
from scipy import linalg

from .base import EigenPairs, EigenSolver, to_dense


class DenseSolver(EigenSolver):
    """Exact dense solver for standard symmetric problems."""

    supports_generalized = False

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
        n = self._check_request(matrix, target_dimension, skip, rhs)
        A = to_dense(matrix)
        A = (A + A.T) / 2.0
        if largest:
            subset = (n - target_dimension, n - 1)
        else:
            subset = (skip, skip + target_dimension - 1)
        values, vectors = linalg.eigh(A, subset_by_index=subset)
        if largest:
            values, vectors = values[::-1], vectors[:, ::-1]
        return vectors, values
