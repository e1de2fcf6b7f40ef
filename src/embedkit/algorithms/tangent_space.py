"""
Local tangent space alignment, kernel and linear variants.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
from scipy import linalg, sparse

from ..core.context import EmbeddingContext, EmbeddingResult
from ..core.projection import ProjectingImplementation
from .matrices import alignment_matrix, feature_matrix, linear_projection, local_gram


def tangent_alignment_matrix(ctx: EmbeddingContext) -> sparse.csr_matrix:
    """
    Sum of I - G_i G_i^T over neighborhoods (point plus its neighbors), where
    G_i = [1/sqrt(m), top-d eigenvectors of the centered local Gram matrix].
    """
    d = ctx.target_dimension
    blocks = []
    for i, nbrs in enumerate(ctx.neighbors):
        indices = [i] + list(nbrs)
        m = len(indices)
        K = local_gram(ctx, indices)
        H = np.eye(m) - 1.0 / m
        top = min(d, m)
        _, V = linalg.eigh(H @ K @ H, subset_by_index=(m - top, m - 1))
        Gi = np.hstack([np.full((m, 1), 1.0 / np.sqrt(m)), V])
        blocks.append((indices, np.eye(m) - Gi @ Gi.T))
    return alignment_matrix(ctx.n_points, blocks)


def kernel_local_tangent_space_alignment(
    ctx: EmbeddingContext,
) -> Tuple[EmbeddingResult, Optional[ProjectingImplementation]]:
    """Bottom eigenvectors of the alignment matrix, skipping the constant one."""
    M = tangent_alignment_matrix(ctx)
    vectors, values = ctx.solve(M, ctx.target_dimension, largest=False, skip=1)
    return EmbeddingResult(vectors, values), None


def linear_local_tangent_space_alignment(
    ctx: EmbeddingContext,
) -> Tuple[EmbeddingResult, Optional[ProjectingImplementation]]:
    """Linear LTSA: Xc^T M Xc v = lambda Xc^T Xc v."""
    M = tangent_alignment_matrix(ctx)
    X = feature_matrix(ctx)
    return linear_projection(ctx, X, M)
