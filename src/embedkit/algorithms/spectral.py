"""
Spectral methods built on a heat-kernel affinity: Laplacian eigenmaps,
locality preserving projections and diffusion maps.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
from scipy import sparse

from ..core.context import EmbeddingContext, EmbeddingResult
from ..core.projection import ProjectingImplementation
from .matrices import distance_matrix, feature_matrix, heat_weights, linear_projection


def graph_laplacian(ctx: EmbeddingContext) -> Tuple[sparse.csr_matrix, sparse.csr_matrix]:
    """Return (L, D) with D the degree matrix of the k-NN heat graph and L = D - W."""
    W = heat_weights(ctx)
    degrees = np.asarray(W.sum(axis=1)).ravel()
    D = sparse.diags(degrees, format="csr")
    return (D - W).tocsr(), D


def laplacian_eigenmaps(
    ctx: EmbeddingContext,
) -> Tuple[EmbeddingResult, Optional[ProjectingImplementation]]:
    """Generalized problem L v = lambda D v, bottom pairs without the constant one."""
    L, D = graph_laplacian(ctx)
    vectors, values = ctx.solve(L, ctx.target_dimension, largest=False, skip=1, rhs=D)
    return EmbeddingResult(vectors, values), None


def locality_preserving_projections(
    ctx: EmbeddingContext,
) -> Tuple[EmbeddingResult, Optional[ProjectingImplementation]]:
    """LPP: Xc^T L Xc v = lambda Xc^T D Xc v."""
    L, D = graph_laplacian(ctx)
    X = feature_matrix(ctx)
    return linear_projection(ctx, X, L, D)


def diffusion_map(
    ctx: EmbeddingContext,
) -> Tuple[EmbeddingResult, Optional[ProjectingImplementation]]:
    """
    Diffusion map over the full heat-kernel affinity.

    The kernel is density-normalised, then symmetrically normalised into a
    Markov-equivalent operator. Coordinates are the non-trivial right
    eigenvectors scaled by eigenvalue^t.
    """
    args = ctx.arguments
    distances = distance_matrix(ctx.points, ctx.callbacks.distance.distance)
    K = np.exp(-(distances ** 2) / args.gaussian_kernel_width)

    p = K.sum(axis=1)
    K = K / np.outer(p, p)
    q = np.sqrt(K.sum(axis=1))
    A = K / np.outer(q, q)

    vectors, values = ctx.solve(A, ctx.target_dimension + 1, largest=True)
    psi = vectors / q[:, None]
    psi = psi / psi[:, :1]
    lambdas = values[1:]
    embedding = psi[:, 1:] * (lambdas ** args.diffusion_map_timesteps)
    return EmbeddingResult(embedding, lambdas), None
