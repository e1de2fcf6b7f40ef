"""
Projection-based methods: PCA and kernel PCA.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from ..core.context import EmbeddingContext, EmbeddingResult
from ..core.projection import MatrixProjection, ProjectingImplementation
from .matrices import double_center, feature_matrix, kernel_matrix


def principal_component_analysis(
    ctx: EmbeddingContext,
) -> Tuple[EmbeddingResult, Optional[ProjectingImplementation]]:
    """
    PCA through the eigenvectors of the covariance matrix.

    Diagnostics are the explained variances of the kept components.
    """
    X = feature_matrix(ctx)
    mean = X.mean(axis=0)
    Xc = X - mean
    covariance = (Xc.T @ Xc) / X.shape[0]
    vectors, values = ctx.solve(covariance, ctx.target_dimension, largest=True)
    projection = MatrixProjection(vectors, mean)
    return EmbeddingResult(Xc @ vectors, values), projection


def kernel_pca(
    ctx: EmbeddingContext,
) -> Tuple[EmbeddingResult, Optional[ProjectingImplementation]]:
    """Top eigenvectors of the centered kernel matrix, scaled by sqrt(eigenvalue)."""
    K = kernel_matrix(ctx.points, ctx.callbacks.kernel.kernel)
    vectors, values = ctx.solve(double_center(K), ctx.target_dimension, largest=True)
    embedding = vectors * np.sqrt(np.maximum(values, 0.0))
    return EmbeddingResult(embedding, values), None
