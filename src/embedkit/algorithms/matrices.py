"""
Matrix builders shared by the embedding routines.

Everything here talks to the data only through the callbacks held by an
``EmbeddingContext``.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Sequence, Tuple

import numpy as np
from scipy import sparse

from ..core.context import EmbeddingContext, EmbeddingResult, Neighbors
from ..core.errors import DimensionMismatch
from ..core.projection import MatrixProjection

Array2D = np.ndarray


def feature_matrix(ctx: EmbeddingContext) -> Array2D:
    """
    Stack the feature vectors of every point into an (n, D) matrix.

    Raises:
        DimensionMismatch: If vectors differ in length, or disagree with
            CURRENT_DIMENSION when it is set
    """
    features = ctx.callbacks.features
    rows = [np.asarray(features.vector(p), dtype=np.float64) for p in ctx.points]
    expected = ctx.arguments.current_dimension
    if expected is None:
        expected = features.dimension if features.dimension is not None else rows[0].shape[0]
    for row in rows:
        if row.ndim != 1 or row.shape[0] != expected:
            raise DimensionMismatch(expected, row.shape[0] if row.ndim == 1 else row.size)
    return np.stack(rows, axis=0)


def kernel_matrix(points: Sequence[Any], kernel: Callable[[Any, Any], float]) -> Array2D:
    """Symmetric (n, n) matrix of kernel values."""
    n = len(points)
    K = np.empty((n, n))
    for i in range(n):
        for j in range(i, n):
            K[i, j] = K[j, i] = kernel(points[i], points[j])
    return K


def distance_matrix(
    points: Sequence[Any],
    distance: Callable[[Any, Any], float],
    columns: Optional[Sequence[int]] = None,
) -> Array2D:
    """
    Pairwise distances.

    With *columns*, returns the (n, len(columns)) distances from every
    point to the points at those indices.
    """
    n = len(points)
    if columns is not None:
        D = np.empty((n, len(columns)))
        for i in range(n):
            for c, j in enumerate(columns):
                D[i, c] = 0.0 if i == j else distance(points[i], points[j])
        return D
    D = np.zeros((n, n))
    for i in range(n):
        for j in range(i + 1, n):
            D[i, j] = D[j, i] = distance(points[i], points[j])
    return D


def double_center(M: Array2D) -> Array2D:
    """Return H M H with H = I - 11^T / n."""
    row_mean = M.mean(axis=1, keepdims=True)
    col_mean = M.mean(axis=0, keepdims=True)
    return M - row_mean - col_mean + M.mean()


def local_gram(ctx: EmbeddingContext, indices: Sequence[int]) -> Array2D:
    """Kernel matrix restricted to the points at *indices*."""
    kernel = ctx.callbacks.kernel.kernel
    return kernel_matrix([ctx.points[i] for i in indices], kernel)


def neighbor_distances(ctx: EmbeddingContext) -> sparse.csr_matrix:
    """Sparse (n, n) matrix of distances along k-NN edges, symmetrised."""
    distance = ctx.callbacks.distance.distance
    n = ctx.n_points
    rows, cols, vals = [], [], []
    for i, nbrs in enumerate(ctx.neighbors):
        for j in nbrs:
            rows.append(i)
            cols.append(j)
            vals.append(distance(ctx.points[i], ctx.points[j]))
    graph = sparse.coo_matrix((vals, (rows, cols)), shape=(n, n)).tocsr()
    return graph.maximum(graph.T)


def heat_weights(ctx: EmbeddingContext) -> sparse.csr_matrix:
    """Heat-kernel weights ``exp(-d^2 / width)`` along symmetrised k-NN edges."""
    graph = neighbor_distances(ctx)
    weights = graph.copy()
    weights.data = np.exp(-(graph.data ** 2) / ctx.arguments.gaussian_kernel_width)
    return weights


def landmark_count(n_points: int, ratio: float) -> int:
    return int(round(n_points * ratio))


def select_landmarks(ctx: EmbeddingContext) -> np.ndarray:
    """Random, sorted landmark indices drawn with the context RNG."""
    m = landmark_count(ctx.n_points, ctx.arguments.landmark_ratio)
    return np.sort(ctx.rng.choice(ctx.n_points, size=m, replace=False))


def linear_projection(
    ctx: EmbeddingContext,
    X: Array2D,
    lhs: sparse.spmatrix | Array2D,
    rhs: sparse.spmatrix | Array2D | None = None,
) -> Tuple[EmbeddingResult, MatrixProjection]:
    """
    Solve ``Xc^T lhs Xc v = lambda Xc^T rhs Xc v`` for the smallest pairs.

    ``Xc`` is X centered on its mean; ``rhs`` defaults to the identity. The
    returned embedding is ``Xc @ V`` so that projecting a training point
    reproduces its row.
    """
    mean = X.mean(axis=0)
    Xc = X - mean
    A = Xc.T @ np.asarray(lhs @ Xc)
    B = Xc.T @ (Xc if rhs is None else np.asarray(rhs @ Xc))
    A = (A + A.T) / 2.0
    B = (B + B.T) / 2.0
    vectors, values = ctx.solve(A, ctx.target_dimension, largest=False, rhs=B)
    projection = MatrixProjection(vectors, mean)
    return EmbeddingResult(Xc @ vectors, values), projection


def alignment_matrix(n: int, blocks: Sequence[Tuple[Sequence[int], Array2D]]) -> sparse.csr_matrix:
    """Sum the local (m, m) blocks into an (n, n) sparse matrix at their indices."""
    rows, cols, vals = [], [], []
    for indices, block in blocks:
        idx = np.asarray(indices)
        rows.append(np.repeat(idx, len(idx)))
        cols.append(np.tile(idx, len(idx)))
        vals.append(np.asarray(block).ravel())
    if not rows:
        return sparse.csr_matrix((n, n))
    M = sparse.coo_matrix(
        (np.concatenate(vals), (np.concatenate(rows), np.concatenate(cols))), shape=(n, n)
    )
    # duplicate entries are summed on conversion
    return M.tocsr()


__all__ = [
    "Neighbors",
    "alignment_matrix",
    "distance_matrix",
    "double_center",
    "feature_matrix",
    "heat_weights",
    "kernel_matrix",
    "landmark_count",
    "linear_projection",
    "local_gram",
    "neighbor_distances",
    "select_landmarks",
]
