"""
ARPACK eigensolver (implicitly restarted Lanczos via scipy).

Smallest eigenpairs are found in shift-invert mode around ``-shift`` so
that singular alignment matrices can still be factorised. Requests for
(nearly) the whole spectrum go to a dense ``eigh``, which ARPACK cannot serve.
"""

from typing import Optional

import numpy as np
from scipy.linalg import eigh
from scipy.sparse.linalg import eigsh

from .base import EigenPairs, EigenSolver, to_dense


class ArpackSolver(EigenSolver):
    """Lanczos solver for standard and generalized symmetric problems."""

    supports_generalized = True

    def __init__(self, tol: float = 0.0, maxiter: Optional[int] = None):
        self.tol = tol
        self.maxiter = maxiter

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
        if k >= n - 1:
            values, vectors = eigh(to_dense(matrix), None if rhs is None else to_dense(rhs))
        else:
            values, vectors = self._lanczos(matrix, k, largest, rhs, shift, n, rng)

        order = np.argsort(values)
        if largest:
            order = order[::-1]
        order = order[skip:skip + target_dimension]
        return vectors[:, order], values[order]

    def _lanczos(self, matrix, k, largest, rhs, shift, n, rng):
        rng = rng if rng is not None else np.random.default_rng(0)
        v0 = rng.uniform(-1.0, 1.0, size=n)

        if largest:
            values, vectors = eigsh(
                matrix, k=k, M=rhs, which="LA", v0=v0, tol=self.tol, maxiter=self.maxiter
            )
        else:
            values, vectors = eigsh(
                matrix,
                k=k,
                M=rhs,
                sigma=-shift,
                which="LM",
                v0=v0,
                tol=self.tol,
                maxiter=self.maxiter,
            )
        return values, vectors
