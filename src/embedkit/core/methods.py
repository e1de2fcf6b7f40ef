"""
Method registry.

Each reduction method, neighbor search and eigensolver has a static
descriptor recording what it needs: required and optional parameter keys,
callback capabilities, and structural flags the dispatcher validates
before any numerical work.

Usage:
    from embedkit.core.methods import describe, ReductionMethod

    descriptor = describe(ReductionMethod.ISOMAP)
    descriptor.required_keys    # (NUMBER_OF_NEIGHBORS, TARGET_DIMENSION)
    descriptor.capabilities     # frozenset({Capability.DISTANCE})
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional, Tuple, TypeVar, Union

from ..algorithms import (
    diffusion_map,
    hessian_locally_linear_embedding,
    isomap,
    kernel_local_tangent_space_alignment,
    kernel_locally_linear_embedding,
    kernel_pca,
    landmark_isomap,
    landmark_multidimensional_scaling,
    laplacian_eigenmaps,
    linear_local_tangent_space_alignment,
    locality_preserving_projections,
    multidimensional_scaling,
    neighborhood_preserving_embedding,
    principal_component_analysis,
    stochastic_proximity_embedding,
)
from ..algorithms.matrices import landmark_count
from .callbacks import Capability
from .context import Arguments
from .enums import EigenEmbeddingMethod, NeighborsMethod, ParameterKey, ReductionMethod
from .errors import InvalidParameterValue, UnknownMethod
from .parameters import ParametersMap

K = ParameterKey
E = TypeVar("E")

# Extra range checks run by the dispatcher: check(arguments, n_points)
MethodCheck = Callable[[Arguments, int], None]

_COMMON_OPTIONAL = (K.REDUCTION_METHOD, K.CURRENT_DIMENSION)
_EIGEN_OPTIONAL = (K.EIGEN_EMBEDDING_METHOD, K.EIGENSHIFT)
_LOCAL_OPTIONAL = (K.NEIGHBORS_METHOD,)


@dataclass(frozen=True)
class MethodDescriptor:
    """Static record describing one reduction method."""

    method: ReductionMethod
    name: str
    routine: Callable
    required_keys: Tuple[ParameterKey, ...]
    capabilities: frozenset
    optional_keys: Tuple[ParameterKey, ...] = ()
    neighbors_via: Optional[Capability] = None
    local: bool = False
    # bool key that, when True, makes a local method global
    local_unless: Optional[ParameterKey] = None
    generalized: bool = False
    # eigenproblem is (D, D) over the feature dimension rather than (n, n)
    feature_space: bool = False
    uses_eigensolver: bool = True
    projecting: bool = False
    check: Optional[MethodCheck] = None

    @property
    def allowed_keys(self) -> Tuple[ParameterKey, ...]:
        return self.required_keys + self.optional_keys

    def is_local(self, parameters: ParametersMap) -> bool:
        """Whether this run needs a neighbor search."""
        if not self.local:
            return False
        if self.local_unless is not None and parameters.has(self.local_unless):
            return not parameters.get(self.local_unless, bool)
        return True

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class NeighborsDescriptor:
    method: NeighborsMethod
    name: str
    exact: bool

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class EigenDescriptor:
    method: EigenEmbeddingMethod
    name: str
    supports_generalized: bool

    def __str__(self) -> str:
        return self.name


def _check_hessian(args: Arguments, n_points: int) -> None:
    d = args.target_dimension
    needed = d * (d + 3) // 2 + 1
    if args.number_of_neighbors < needed:
        raise InvalidParameterValue(
            K.NUMBER_OF_NEIGHBORS,
            args.number_of_neighbors,
            f"Hessian LLE needs at least {needed} neighbors for target dimension {d}",
        )


def _check_landmarks(args: Arguments, n_points: int) -> None:
    m = landmark_count(n_points, args.landmark_ratio)
    if m <= args.target_dimension:
        raise InvalidParameterValue(
            K.LANDMARK_RATIO,
            args.landmark_ratio,
            f"selects {m} of {n_points} points as landmarks; "
            f"need more than TARGET_DIMENSION={args.target_dimension}",
        )


def _local(
    method: ReductionMethod,
    name: str,
    routine: Callable,
    capabilities: Tuple[Capability, ...],
    via: Capability,
    extra_required: Tuple[ParameterKey, ...] = (),
    **flags,
) -> MethodDescriptor:
    return MethodDescriptor(
        method=method,
        name=name,
        routine=routine,
        required_keys=(K.NUMBER_OF_NEIGHBORS, K.TARGET_DIMENSION) + extra_required,
        optional_keys=_COMMON_OPTIONAL + _EIGEN_OPTIONAL + _LOCAL_OPTIONAL,
        capabilities=frozenset(capabilities),
        neighbors_via=via,
        local=True,
        **flags,
    )


def _global(
    method: ReductionMethod,
    name: str,
    routine: Callable,
    capabilities: Tuple[Capability, ...],
    extra_required: Tuple[ParameterKey, ...] = (),
    **flags,
) -> MethodDescriptor:
    return MethodDescriptor(
        method=method,
        name=name,
        routine=routine,
        required_keys=(K.TARGET_DIMENSION,) + extra_required,
        optional_keys=_COMMON_OPTIONAL + _EIGEN_OPTIONAL,
        capabilities=frozenset(capabilities),
        **flags,
    )


_KERNEL = Capability.KERNEL
_DISTANCE = Capability.DISTANCE
_FEATURES = Capability.FEATURES
M = ReductionMethod

_METHODS: Dict[ReductionMethod, MethodDescriptor] = {
    d.method: d
    for d in (
        _local(M.KERNEL_LOCALLY_LINEAR_EMBEDDING, "Kernel Locally Linear Embedding",
               kernel_locally_linear_embedding, (_KERNEL,), _KERNEL),
        _local(M.NEIGHBORHOOD_PRESERVING_EMBEDDING, "Neighborhood Preserving Embedding",
               neighborhood_preserving_embedding, (_KERNEL, _FEATURES), _KERNEL,
               generalized=True, feature_space=True, projecting=True),
        _local(M.KERNEL_LOCAL_TANGENT_SPACE_ALIGNMENT, "Kernel Local Tangent Space Alignment",
               kernel_local_tangent_space_alignment, (_KERNEL,), _KERNEL),
        _local(M.LINEAR_LOCAL_TANGENT_SPACE_ALIGNMENT, "Linear Local Tangent Space Alignment",
               linear_local_tangent_space_alignment, (_KERNEL, _FEATURES), _KERNEL,
               generalized=True, feature_space=True, projecting=True),
        _local(M.HESSIAN_LOCALLY_LINEAR_EMBEDDING, "Hessian Locally Linear Embedding",
               hessian_locally_linear_embedding, (_KERNEL,), _KERNEL,
               check=_check_hessian),
        _local(M.LAPLACIAN_EIGENMAPS, "Laplacian Eigenmaps",
               laplacian_eigenmaps, (_DISTANCE,), _DISTANCE,
               extra_required=(K.GAUSSIAN_KERNEL_WIDTH,), generalized=True),
        _local(M.LOCALITY_PRESERVING_PROJECTIONS, "Locality Preserving Projections",
               locality_preserving_projections, (_DISTANCE, _FEATURES), _DISTANCE,
               extra_required=(K.GAUSSIAN_KERNEL_WIDTH,), generalized=True, feature_space=True,
               projecting=True),
        _global(M.DIFFUSION_MAP, "Diffusion Map",
                diffusion_map, (_DISTANCE,),
                extra_required=(K.DIFFUSION_MAP_TIMESTEPS, K.GAUSSIAN_KERNEL_WIDTH)),
        _local(M.ISOMAP, "Isomap", isomap, (_DISTANCE,), _DISTANCE),
        _local(M.LANDMARK_ISOMAP, "Landmark Isomap",
               landmark_isomap, (_DISTANCE,), _DISTANCE,
               extra_required=(K.LANDMARK_RATIO,), check=_check_landmarks),
        _global(M.MULTIDIMENSIONAL_SCALING, "Multidimensional Scaling",
                multidimensional_scaling, (_DISTANCE,)),
        _global(M.LANDMARK_MULTIDIMENSIONAL_SCALING, "Landmark Multidimensional Scaling",
                landmark_multidimensional_scaling, (_DISTANCE,),
                extra_required=(K.LANDMARK_RATIO,), check=_check_landmarks),
        MethodDescriptor(
            method=M.STOCHASTIC_PROXIMITY_EMBEDDING,
            name="Stochastic Proximity Embedding",
            routine=stochastic_proximity_embedding,
            required_keys=(
                K.TARGET_DIMENSION,
                K.SPE_GLOBAL_STRATEGY,
                K.SPE_TOLERANCE,
                K.SPE_NUM_UPDATES,
                K.MAX_ITERATION,
            ),
            optional_keys=_COMMON_OPTIONAL + (K.NUMBER_OF_NEIGHBORS,) + _LOCAL_OPTIONAL,
            capabilities=frozenset((_DISTANCE,)),
            neighbors_via=_DISTANCE,
            local=True,
            local_unless=K.SPE_GLOBAL_STRATEGY,
            uses_eigensolver=False,
        ),
        _global(M.KERNEL_PCA, "Kernel PCA", kernel_pca, (_KERNEL,)),
        _global(M.PCA, "PCA", principal_component_analysis, (_FEATURES,),
                feature_space=True, projecting=True),
    )
}

_NEIGHBORS: Dict[NeighborsMethod, NeighborsDescriptor] = {
    NeighborsMethod.BRUTE_FORCE: NeighborsDescriptor(NeighborsMethod.BRUTE_FORCE, "Brute force", True),
    NeighborsMethod.COVER_TREE: NeighborsDescriptor(NeighborsMethod.COVER_TREE, "Cover tree", False),
}

_EIGEN: Dict[EigenEmbeddingMethod, EigenDescriptor] = {
    EigenEmbeddingMethod.ARPACK: EigenDescriptor(EigenEmbeddingMethod.ARPACK, "ARPACK", True),
    EigenEmbeddingMethod.RANDOMIZED: EigenDescriptor(
        EigenEmbeddingMethod.RANDOMIZED, "Randomized", False
    ),
    EigenEmbeddingMethod.EIGEN_DENSE_SELFADJOINT_SOLVER: EigenDescriptor(
        EigenEmbeddingMethod.EIGEN_DENSE_SELFADJOINT_SOLVER, "Dense self-adjoint", False
    ),
}

METHODS: Mapping[ReductionMethod, MethodDescriptor] = MappingProxyType(_METHODS)
NEIGHBORS_METHODS: Mapping[NeighborsMethod, NeighborsDescriptor] = MappingProxyType(_NEIGHBORS)
EIGEN_METHODS: Mapping[EigenEmbeddingMethod, EigenDescriptor] = MappingProxyType(_EIGEN)


def _lookup(table: Mapping[E, object], enum_type: type, method: Union[E, str]):
    if isinstance(method, str):
        try:
            method = enum_type(method.lower())
        except ValueError:
            raise UnknownMethod(method, [m.value for m in table]) from None
    try:
        return table[method]
    except (KeyError, TypeError):
        raise UnknownMethod(method, [m.value for m in table]) from None


def describe(method: Union[ReductionMethod, str]) -> MethodDescriptor:
    """
    Return the descriptor of a reduction method.

    Args:
        method: A ReductionMethod or its name, case-insensitive

    Raises:
        UnknownMethod: If the method is not registered
    """
    return _lookup(METHODS, ReductionMethod, method)


def describe_neighbors(method: Union[NeighborsMethod, str]) -> NeighborsDescriptor:
    return _lookup(NEIGHBORS_METHODS, NeighborsMethod, method)


def describe_eigen(method: Union[EigenEmbeddingMethod, str]) -> EigenDescriptor:
    return _lookup(EIGEN_METHODS, EigenEmbeddingMethod, method)


def available_methods() -> list[str]:
    """Return the names of every registered reduction method."""
    return [m.value for m in METHODS]
