"""
Typed argument bundle and result types passed between the dispatcher and
the embedding routines.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Callable, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .callbacks import CallbackSet
from .enums import EigenEmbeddingMethod, NeighborsMethod, ReductionMethod
from .parameters import PARAMETER_TYPES, ParametersMap

Neighbors = List[List[int]]

# solve(matrix, target_dimension, *, largest, skip=0, rhs=None) -> (vectors, values)
SolveFn = Callable[..., Tuple[np.ndarray, np.ndarray]]


@dataclass(frozen=True)
class Arguments:
    """
    Strongly-typed view of a validated ``ParametersMap``.

    Field names mirror ``ParameterKey`` members in lower case; absent
    optional keys are ``None``.
    """

    reduction_method: Optional[ReductionMethod] = None
    number_of_neighbors: Optional[int] = None
    target_dimension: Optional[int] = None
    current_dimension: Optional[int] = None
    eigen_embedding_method: Optional[EigenEmbeddingMethod] = None
    neighbors_method: Optional[NeighborsMethod] = None
    diffusion_map_timesteps: Optional[int] = None
    gaussian_kernel_width: Optional[float] = None
    max_iteration: Optional[int] = None
    spe_global_strategy: Optional[bool] = None
    spe_tolerance: Optional[float] = None
    spe_num_updates: Optional[int] = None
    landmark_ratio: Optional[float] = None
    eigenshift: Optional[float] = None

    @classmethod
    def from_parameters(cls, parameters: ParametersMap) -> "Arguments":
        """Read every present key with its documented type."""
        values = {}
        for key in parameters:
            values[key.name.lower()] = parameters.get(key, PARAMETER_TYPES[key])
        return cls(**values)

    def present(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}


@dataclass(frozen=True)
class EmbeddingResult:
    """Embedded coordinates plus a diagnostic vector (usually eigenvalues)."""

    embedding: np.ndarray
    diagnostics: np.ndarray

    def __iter__(self) -> Iterator[np.ndarray]:
        return iter((self.embedding, self.diagnostics))


@dataclass(frozen=True)
class EmbeddingContext:
    """Everything an embedding routine may use, assembled by the dispatcher."""

    method: ReductionMethod
    points: Sequence[Any]
    callbacks: CallbackSet
    arguments: Arguments
    solve: SolveFn
    rng: np.random.Generator
    neighbors: Optional[Neighbors] = None

    @property
    def n_points(self) -> int:
        return len(self.points)

    @property
    def target_dimension(self) -> int:
        return self.arguments.target_dimension


__all__ = [
    "Arguments",
    "EmbeddingContext",
    "EmbeddingResult",
    "Neighbors",
    "SolveFn",
]
