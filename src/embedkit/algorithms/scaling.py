"""
Distance-preserving methods: classical MDS, landmark MDS and their
geodesic counterparts Isomap and landmark Isomap.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
from scipy.sparse.csgraph import shortest_path

from ..core.context import EmbeddingContext, EmbeddingResult
from ..core.projection import ProjectingImplementation
from .matrices import distance_matrix, double_center, neighbor_distances, select_landmarks


def classical_scaling(ctx: EmbeddingContext, distances: np.ndarray) -> EmbeddingResult:
    """Embed a full (n, n) distance matrix: top eigenpairs of -1/2 H D^2 H."""
    B = -0.5 * double_center(distances ** 2)
    vectors, values = ctx.solve(B, ctx.target_dimension, largest=True)
    embedding = vectors * np.sqrt(np.maximum(values, 0.0))
    return EmbeddingResult(embedding, values)


def landmark_scaling(
    ctx: EmbeddingContext, landmarks: np.ndarray, to_landmarks: np.ndarray
) -> EmbeddingResult:
    """
    Landmark MDS.

    Args:
        landmarks: Indices of the m landmark points
        to_landmarks: (n, m) distances from every point to every landmark
    """
    squared = to_landmarks ** 2
    landmark_squared = squared[landmarks]
    B = -0.5 * double_center(landmark_squared)
    vectors, values = ctx.solve(B, ctx.target_dimension, largest=True)
    if np.any(values <= 0):
        raise ValueError(f"Landmark MDS found non-positive eigenvalues: {values}")
    # distance-based triangulation of every point against the landmarks
    pseudo_inverse = vectors / np.sqrt(values)
    mean_squared = landmark_squared.mean(axis=0)
    embedding = -0.5 * (squared - mean_squared) @ pseudo_inverse
    return EmbeddingResult(embedding, values)


def _geodesics(ctx: EmbeddingContext, indices: Optional[np.ndarray] = None) -> np.ndarray:
    graph = neighbor_distances(ctx)
    geodesics = shortest_path(graph, method="D", directed=False, indices=indices)
    if np.isinf(geodesics).any():
        raise ValueError("Neighborhood graph is disconnected; increase NUMBER_OF_NEIGHBORS")
    return geodesics


def multidimensional_scaling(
    ctx: EmbeddingContext,
) -> Tuple[EmbeddingResult, Optional[ProjectingImplementation]]:
    distances = distance_matrix(ctx.points, ctx.callbacks.distance.distance)
    return classical_scaling(ctx, distances), None


def landmark_multidimensional_scaling(
    ctx: EmbeddingContext,
) -> Tuple[EmbeddingResult, Optional[ProjectingImplementation]]:
    landmarks = select_landmarks(ctx)
    to_landmarks = distance_matrix(ctx.points, ctx.callbacks.distance.distance, columns=landmarks)
    return landmark_scaling(ctx, landmarks, to_landmarks), None


def isomap(
    ctx: EmbeddingContext,
) -> Tuple[EmbeddingResult, Optional[ProjectingImplementation]]:
    """Classical scaling of shortest-path distances over the k-NN graph."""
    return classical_scaling(ctx, _geodesics(ctx)), None


def landmark_isomap(
    ctx: EmbeddingContext,
) -> Tuple[EmbeddingResult, Optional[ProjectingImplementation]]:
    """Landmark MDS of geodesic distances computed from the landmarks only."""
    landmarks = select_landmarks(ctx)
    to_landmarks = _geodesics(ctx, indices=landmarks).T
    return landmark_scaling(ctx, landmarks, to_landmarks), None
