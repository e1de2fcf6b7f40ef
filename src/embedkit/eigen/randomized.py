"""
Randomized eigensolver.

Builds an orthonormal basis for the dominant range of the operator with a
Gaussian sketch plus power iterations, then solves the small projected
problem (Rayleigh-Ritz). Smallest eigenpairs are taken as the dominant
eigenpairs of the shifted inverse.
"""

from typing import Callable, Optional

import numpy as np
from scipy import linalg, sparse
from scipy.sparse.linalg import splu

from .base import EigenPairs, EigenSolver


class RandomizedSolver(EigenSolver):
    """Randomized range-finder solver; standard eigenproblems only."""

    supports_generalized = False

    def __init__(self, oversampling: int = 10, power_iterations: int = 4):
        self.oversampling = oversampling
        self.power_iterations = power_iterations

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
        skip = 0 if largest else skip
        k = target_dimension + skip
        rng = rng if rng is not None else np.random.default_rng(0)

        if largest:
            operator = _multiplier(matrix)
        else:
            operator = _shifted_inverse(matrix, shift)

        sketch_size = min(n, k + self.oversampling)
        Q, _ = np.linalg.qr(operator(rng.standard_normal((n, sketch_size))))
        for _ in range(self.power_iterations):
            Q, _ = np.linalg.qr(operator(Q))

        # Rayleigh-Ritz on the original matrix
        AQ = _multiplier(matrix)(Q)
        small = Q.T @ AQ
        small = (small + small.T) / 2.0
        values, U = linalg.eigh(small)
        vectors = Q @ U

        order = np.argsort(values)
        if largest:
            order = order[::-1]
        order = order[skip:skip + target_dimension]
        return vectors[:, order], values[order]


def _multiplier(matrix) -> Callable[[np.ndarray], np.ndarray]:
    if sparse.issparse(matrix):
        csr = matrix.tocsr()
        return lambda X: np.asarray(csr @ X)
    dense = np.asarray(matrix, dtype=np.float64)
    return lambda X: dense @ X


def _shifted_inverse(matrix, shift: float) -> Callable[[np.ndarray], np.ndarray]:
    n = matrix.shape[0]
    if sparse.issparse(matrix):
        lu = splu((matrix + shift * sparse.identity(n)).tocsc())
        return lu.solve
    factor = linalg.lu_factor(np.asarray(matrix, dtype=np.float64) + shift * np.eye(n))
    return lambda X: linalg.lu_solve(factor, X)
