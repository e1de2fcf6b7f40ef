"""
Stochastic proximity embedding.

Starts from a random layout and repeatedly nudges sampled pairs so that
their embedded distance approaches their input distance, with a learning
rate decaying linearly to zero.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from ..core.context import EmbeddingContext, EmbeddingResult
from ..core.projection import ProjectingImplementation


def stochastic_proximity_embedding(
    ctx: EmbeddingContext,
) -> Tuple[EmbeddingResult, Optional[ProjectingImplementation]]:
    """
    Global strategy samples arbitrary pairs; local strategy pairs each
    sampled point with one of its nearest neighbors.

    Diagnostics are empty: the method has no spectrum.
    """
    args = ctx.arguments
    rng = ctx.rng
    distance = ctx.callbacks.distance.distance
    n, d = ctx.n_points, ctx.target_dimension
    eps = args.spe_tolerance
    updates = args.spe_num_updates

    Y = rng.uniform(0.0, 1.0, size=(n, d))
    neighbors = None if args.spe_global_strategy else np.asarray(ctx.neighbors)

    learning_rate = 1.0
    step = 1.0 / args.max_iteration
    for _ in range(args.max_iteration):
        first = rng.integers(0, n, size=updates)
        if neighbors is None:
            second = rng.integers(0, n - 1, size=updates)
            second[second >= first] += 1
        else:
            second = neighbors[first, rng.integers(0, neighbors.shape[1], size=updates)]

        r = np.array([distance(ctx.points[i], ctx.points[j]) for i, j in zip(first, second)])
        diff = Y[first] - Y[second]
        dist = np.linalg.norm(diff, axis=1)
        scale = (learning_rate * 0.5 * (r - dist) / (dist + eps))[:, None] * diff

        np.add.at(Y, first, scale)
        np.add.at(Y, second, -scale)
        learning_rate = max(learning_rate - step, 0.0)

    return EmbeddingResult(Y, np.empty(0)), None
