"""
Locally-linear family: kernel LLE, neighborhood preserving embedding and
Hessian LLE.

All three build a sparse alignment matrix from per-neighborhood kernel
Gram matrices and take its bottom eigenvectors.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
from scipy import linalg, sparse

from ..core.context import EmbeddingContext, EmbeddingResult
from ..core.projection import ProjectingImplementation
from .matrices import alignment_matrix, feature_matrix, linear_projection, local_gram

# Ridge added to the local Gram matrix, relative to its trace
REGULARIZATION = 1e-3


def reconstruction_weights(ctx: EmbeddingContext) -> sparse.csr_matrix:
    """
    Weights that best reconstruct each point from its neighbors in kernel space.

    For point i with neighbors N, the local Gram matrix of the differences
    x_j - x_i is G = K_NN - k_iN - k_Ni + k_ii; weights solve G w = 1 and
    are normalised to sum to one.
    """
    kernel = ctx.callbacks.kernel.kernel
    n = ctx.n_points
    rows, cols, vals = [], [], []
    for i, nbrs in enumerate(ctx.neighbors):
        xi = ctx.points[i]
        k_ii = kernel(xi, xi)
        k_iN = np.array([kernel(xi, ctx.points[j]) for j in nbrs])
        G = local_gram(ctx, nbrs) - k_iN[:, None] - k_iN[None, :] + k_ii
        trace = np.trace(G)
        G[np.diag_indices_from(G)] += REGULARIZATION * (trace if trace > 0 else 1.0)
        w = linalg.solve(G, np.ones(len(nbrs)), assume_a="sym")
        w /= w.sum()
        rows.extend([i] * len(nbrs))
        cols.extend(nbrs)
        vals.extend(w)
    return sparse.coo_matrix((vals, (rows, cols)), shape=(n, n)).tocsr()


def _lle_matrix(ctx: EmbeddingContext) -> sparse.csr_matrix:
    W = reconstruction_weights(ctx)
    I_W = sparse.identity(ctx.n_points, format="csr") - W
    return (I_W.T @ I_W).tocsr()


def kernel_locally_linear_embedding(
    ctx: EmbeddingContext,
) -> Tuple[EmbeddingResult, Optional[ProjectingImplementation]]:
    """Kernel LLE: bottom eigenvectors of (I - W)^T (I - W), skipping the constant one."""
    M = _lle_matrix(ctx)
    vectors, values = ctx.solve(M, ctx.target_dimension, largest=False, skip=1)
    return EmbeddingResult(vectors, values), None


def neighborhood_preserving_embedding(
    ctx: EmbeddingContext,
) -> Tuple[EmbeddingResult, Optional[ProjectingImplementation]]:
    """NPE: linear approximation of LLE, Xc^T M Xc v = lambda Xc^T Xc v."""
    M = _lle_matrix(ctx)
    X = feature_matrix(ctx)
    return linear_projection(ctx, X, M)


def hessian_locally_linear_embedding(
    ctx: EmbeddingContext,
) -> Tuple[EmbeddingResult, Optional[ProjectingImplementation]]:
    """
    Hessian LLE.

    Local tangent coordinates come from the top eigenvectors of each
    neighborhood's centered Gram matrix; the Hessian estimator is the
    orthogonal complement of [1, U, U_a * U_b] within the neighborhood.
    """
    d = ctx.target_dimension
    dp = d * (d + 1) // 2
    blocks = []
    for i, nbrs in enumerate(ctx.neighbors):
        m = len(nbrs)
        G = local_gram(ctx, nbrs)
        H = np.eye(m) - 1.0 / m
        _, U = linalg.eigh(H @ G @ H, subset_by_index=(m - d, m - 1))
        U = U[:, ::-1]

        Yi = np.empty((m, 1 + d + dp))
        Yi[:, 0] = 1.0
        Yi[:, 1:1 + d] = U
        column = 1 + d
        for a in range(d):
            for b in range(a, d):
                Yi[:, column] = U[:, a] * U[:, b]
                column += 1

        Q, _ = np.linalg.qr(Yi)
        w = Q[:, d + 1:]
        S = w.sum(axis=0)
        S[np.abs(S) < 1e-4] = 1.0
        w = w / S
        blocks.append((nbrs, w @ w.T))

    M = alignment_matrix(ctx.n_points, blocks)
    vectors, values = ctx.solve(M, d, largest=False, skip=1)
    return EmbeddingResult(vectors, values), None
