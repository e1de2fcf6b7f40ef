"""
Dispatcher - validates a configuration and drives one embedding run.

Every check (method, parameters, callbacks, value ranges, method/solver
pairing) happens before the first neighbor search or eigendecomposition,
so an invalid configuration never starts expensive work.

Usage:
    from embedkit import embed, ParametersMap, ParameterKey, ReductionMethod
    from embedkit.core.callbacks import callbacks_from_array

    params = ParametersMap().set(ParameterKey.TARGET_DIMENSION, 2)
    result, projection = embed(
        ReductionMethod.PCA, params, callbacks_from_array(X), range(len(X))
    )
    result.embedding      # (n, 2)
    projection(X[0])      # same as result.embedding[0]
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from ..config import Config, config as default_config
from ..eigen.base import EigenSolver
from ..eigen.factory import EigenSolverFactory
from ..neighbors.base import NeighborsStrategy, distance_from_kernel, is_connected
from ..neighbors.factory import NeighborsFactory
from ..utils.logging_config import get_logger, log_duration
from .callbacks import CallbackSet, Capability, check_capabilities
from .context import Arguments, EmbeddingContext, EmbeddingResult, Neighbors
from .enums import EigenEmbeddingMethod, NeighborsMethod, ParameterKey, ReductionMethod
from .errors import (
    CollaboratorFailure,
    EmbedkitError,
    InvalidParameterValue,
    MissingParameter,
    TooFewPoints,
    UnknownMethod,
    UnsupportedCombination,
)
from .methods import MethodDescriptor, describe, describe_eigen
from .parameters import PARAMETER_TYPES, ParametersMap
from .projection import ProjectingFunction

logger = get_logger(__name__)

K = ParameterKey

# Smallest data set any method accepts
MIN_POINTS = 3


class Dispatcher:
    """
    Runs embeddings with a fixed set of neighbor-search and eigensolver
    strategies.

    The dispatcher keeps no state between ``embed`` calls; its strategy
    tables are only read.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        neighbors_strategies: Optional[Mapping[NeighborsMethod, NeighborsStrategy]] = None,
        eigen_solvers: Optional[Mapping[EigenEmbeddingMethod, EigenSolver]] = None,
    ):
        """
        Args:
            config: Defaults for strategy selection and seeding. Uses the
                global config if not provided.
            neighbors_strategies: Strategy per NeighborsMethod. Defaults to
                every strategy NeighborsFactory can create.
            eigen_solvers: Solver per EigenEmbeddingMethod. Defaults to
                every solver EigenSolverFactory can create.
        """
        self.config = config or default_config
        if neighbors_strategies is None:
            neighbors_strategies = NeighborsFactory().create_all()
        if eigen_solvers is None:
            eigen_solvers = EigenSolverFactory().create_all()
        self.neighbors_strategies: Dict[NeighborsMethod, NeighborsStrategy] = dict(neighbors_strategies)
        self.eigen_solvers: Dict[EigenEmbeddingMethod, EigenSolver] = dict(eigen_solvers)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def resolve_method(
        self, method: Union[ReductionMethod, str, None], parameters: ParametersMap
    ) -> MethodDescriptor:
        """
        Find the descriptor for *method*, or for REDUCTION_METHOD when *method* is None.

        Raises:
            UnknownMethod: If the method is not registered
            MissingParameter: If neither *method* nor REDUCTION_METHOD is given
            InvalidParameterValue: If *method* and REDUCTION_METHOD disagree
        """
        if method is None:
            method = parameters.get(K.REDUCTION_METHOD, ReductionMethod)
        descriptor = describe(method)
        if parameters.has(K.REDUCTION_METHOD):
            stored = parameters.get(K.REDUCTION_METHOD, ReductionMethod)
            if stored is not descriptor.method:
                raise InvalidParameterValue(
                    K.REDUCTION_METHOD,
                    stored,
                    f"conflicts with the requested method {descriptor.method.value}",
                )
        return descriptor

    def validate_parameters(self, descriptor: MethodDescriptor, parameters: ParametersMap) -> None:
        """
        Check that every required key is present and every present key is well-typed.

        Raises:
            MissingParameter: Naming the first missing required key
            TypeMismatch: Naming the offending key
        """
        for key in descriptor.required_keys:
            if not parameters.has(key):
                raise MissingParameter(key, descriptor)

        for key in parameters:
            parameters.get(key, PARAMETER_TYPES[key])
            if key not in descriptor.allowed_keys:
                logger.debug(f"Parameter {key.name} is not used by {descriptor}")

        if descriptor.is_local(parameters) and not parameters.has(K.NUMBER_OF_NEIGHBORS):
            raise MissingParameter(K.NUMBER_OF_NEIGHBORS, descriptor)

    def validate_values(
        self,
        descriptor: MethodDescriptor,
        arguments: Arguments,
        n_points: int,
        local: bool,
        feature_dimension: Optional[int] = None,
    ) -> None:
        """
        Range checks on well-typed values.

        Args:
            feature_dimension: Input dimension reported by the features
                callback, if known before any vector is read

        Raises:
            TooFewPoints: If there are fewer than MIN_POINTS points
            InvalidParameterValue: Naming the offending key
        """
        if n_points < MIN_POINTS:
            raise TooFewPoints(n_points, MIN_POINTS)

        target = arguments.target_dimension
        if target < 1 or target >= n_points - 1:
            raise InvalidParameterValue(
                K.TARGET_DIMENSION, target, f"must be in [1, {n_points - 1}) for {n_points} points"
            )
        if local:
            k = arguments.number_of_neighbors
            if k < 1 or k >= n_points - 1:
                raise InvalidParameterValue(
                    K.NUMBER_OF_NEIGHBORS,
                    k,
                    f"must be in [1, {n_points - 1}) for {n_points} points",
                )

        positive = (
            (K.GAUSSIAN_KERNEL_WIDTH, arguments.gaussian_kernel_width),
            (K.SPE_TOLERANCE, arguments.spe_tolerance),
        )
        for key, value in positive:
            if value is not None and not value > 0:
                raise InvalidParameterValue(key, value, "must be > 0")

        at_least_one = (
            (K.DIFFUSION_MAP_TIMESTEPS, arguments.diffusion_map_timesteps),
            (K.SPE_NUM_UPDATES, arguments.spe_num_updates),
            (K.MAX_ITERATION, arguments.max_iteration),
            (K.CURRENT_DIMENSION, arguments.current_dimension),
        )
        for key, value in at_least_one:
            if value is not None and value < 1:
                raise InvalidParameterValue(key, value, "must be >= 1")

        current = arguments.current_dimension
        if current is not None and target > current:
            raise InvalidParameterValue(
                K.TARGET_DIMENSION, target, f"exceeds CURRENT_DIMENSION={current}"
            )
        if descriptor.feature_space and feature_dimension is not None and target > feature_dimension:
            raise InvalidParameterValue(
                K.TARGET_DIMENSION,
                target,
                f"exceeds the feature dimension {feature_dimension} of {descriptor}",
            )

        ratio = arguments.landmark_ratio
        if ratio is not None and not 0.0 < ratio <= 1.0:
            raise InvalidParameterValue(K.LANDMARK_RATIO, ratio, "must be in (0, 1]")

        if arguments.eigenshift is not None and arguments.eigenshift < 0:
            raise InvalidParameterValue(K.EIGENSHIFT, arguments.eigenshift, "must be >= 0")

        if descriptor.check is not None:
            descriptor.check(arguments, n_points)

    def resolve_neighbors(self, arguments: Arguments) -> Tuple[NeighborsMethod, NeighborsStrategy]:
        method = arguments.neighbors_method
        if method is None:
            method = self.config.default_neighbors_method
            logger.debug(f"NEIGHBORS_METHOD not set, using default {method.value}")
        try:
            return method, self.neighbors_strategies[method]
        except KeyError:
            raise UnknownMethod(method, [m.value for m in self.neighbors_strategies]) from None

    def resolve_solver(
        self, descriptor: MethodDescriptor, arguments: Arguments
    ) -> Tuple[EigenEmbeddingMethod, EigenSolver]:
        """
        Pick the eigensolver and check it can handle the method's problem.

        Raises:
            UnknownMethod: If no solver is registered for the method
            UnsupportedCombination: If the method is generalized and the
                solver is standard-only
        """
        method = arguments.eigen_embedding_method
        if method is None:
            method = self.config.default_eigen_method
            logger.debug(f"EIGEN_EMBEDDING_METHOD not set, using default {method.value}")
        try:
            solver = self.eigen_solvers[method]
        except KeyError:
            raise UnknownMethod(method, [m.value for m in self.eigen_solvers]) from None
        if descriptor.generalized and not solver.supports_generalized:
            raise UnsupportedCombination(descriptor, describe_eigen(method))
        return method, solver

    # ------------------------------------------------------------------
    # Embedding
    # ------------------------------------------------------------------

    def embed(
        self,
        method: Union[ReductionMethod, str, None],
        parameters: ParametersMap,
        callbacks: CallbackSet,
        points: Sequence[Any],
    ) -> Tuple[EmbeddingResult, Optional[ProjectingFunction]]:
        """
        Embed *points* with *method*.

        Args:
            method: Reduction method, its name, or None to read REDUCTION_METHOD
            parameters: Configuration; read-only
            callbacks: Kernel / distance / feature callbacks over point handles
            points: Point handles passed to the callbacks

        Returns:
            Tuple of:
            - EmbeddingResult with (n, TARGET_DIMENSION) coordinates and diagnostics
            - ProjectingFunction for methods that support out-of-sample
              projection, else None

        Raises:
            UnknownMethod, MissingParameter, TypeMismatch, MissingCapability,
            TooFewPoints, InvalidParameterValue, UnsupportedCombination: Before
                any numerical work
            DimensionMismatch: If feature vectors disagree in length
            CollaboratorFailure: If neighbor search, the eigensolver or the
                embedding routine fails
        """
        if not isinstance(points, Sequence):
            points = list(points)
        n_points = len(points)

        descriptor = self.resolve_method(method, parameters)
        self.validate_parameters(descriptor, parameters)
        check_capabilities(descriptor, callbacks)

        local = descriptor.is_local(parameters)
        arguments = Arguments.from_parameters(parameters)
        feature_dimension = None
        if callbacks.features is not None:
            feature_dimension = callbacks.features.dimension
        self.validate_values(descriptor, arguments, n_points, local, feature_dimension)

        neighbors_strategy = None
        if local:
            neighbors_method, neighbors_strategy = self.resolve_neighbors(arguments)
            arguments = replace(arguments, neighbors_method=neighbors_method)
        solver = None
        if descriptor.uses_eigensolver:
            eigen_method, solver = self.resolve_solver(descriptor, arguments)
            shift = arguments.eigenshift
            if shift is None:
                shift = self.config.eigenshift
            arguments = replace(arguments, eigen_embedding_method=eigen_method, eigenshift=shift)

        logger.info(f"Embedding {n_points} points with {descriptor} ({arguments.present()})")
        rng = np.random.default_rng(self.config.seed)

        neighbors = None
        if local:
            neighbors = self._find_neighbors(
                descriptor, neighbors_strategy, points, callbacks, arguments.number_of_neighbors
            )

        ctx = EmbeddingContext(
            method=descriptor.method,
            points=points,
            callbacks=callbacks,
            arguments=arguments,
            solve=self._bind_solver(descriptor, solver, arguments, rng),
            rng=rng,
            neighbors=neighbors,
        )

        with log_duration(logger, f"{descriptor} embedding"):
            try:
                result, implementation = descriptor.routine(ctx)
            except EmbedkitError:
                raise
            except Exception as exc:
                raise CollaboratorFailure("embedding", descriptor, exc) from exc

        projection = None
        if descriptor.projecting and implementation is not None:
            projection = ProjectingFunction(implementation)
        return result, projection

    def _find_neighbors(
        self,
        descriptor: MethodDescriptor,
        strategy: NeighborsStrategy,
        points: Sequence[Any],
        callbacks: CallbackSet,
        k: int,
    ) -> Neighbors:
        if descriptor.neighbors_via is Capability.KERNEL:
            distance = distance_from_kernel(callbacks.kernel.kernel)
        else:
            distance = callbacks.distance.distance

        with log_duration(logger, f"{strategy.get_strategy_name()} neighbor search"):
            try:
                neighbors = strategy.find_neighbors(points, k, distance)
            except EmbedkitError:
                raise
            except Exception as exc:
                raise CollaboratorFailure("neighbors", descriptor, exc) from exc

        if not is_connected(neighbors):
            logger.warning(
                f"Neighborhood graph of {descriptor} with {k} neighbors is not connected"
            )
        return neighbors

    def _bind_solver(
        self,
        descriptor: MethodDescriptor,
        solver: Optional[EigenSolver],
        arguments: Arguments,
        rng: np.random.Generator,
    ):
        def solve(matrix, target_dimension: int, *, largest: bool, skip: int = 0, rhs=None):
            if solver is None:
                raise RuntimeError(f"{descriptor} is not configured with an eigensolver")
            if rhs is not None and not solver.supports_generalized:
                raise UnsupportedCombination(
                    descriptor, describe_eigen(arguments.eigen_embedding_method)
                )
            with log_duration(logger, f"{solver.get_solver_name()} eigendecomposition"):
                try:
                    return solver.solve(
                        matrix,
                        target_dimension,
                        largest=largest,
                        skip=skip,
                        rhs=rhs,
                        shift=arguments.eigenshift,
                        rng=rng,
                    )
                except EmbedkitError:
                    raise
                except Exception as exc:
                    raise CollaboratorFailure("eigendecomposition", descriptor, exc) from exc

        return solve


def embed(
    method: Union[ReductionMethod, str, None],
    parameters: ParametersMap,
    callbacks: CallbackSet,
    points: Sequence[Any],
) -> Tuple[EmbeddingResult, Optional[ProjectingFunction]]:
    """Embed *points* with a dispatcher using the default strategies and config."""
    return Dispatcher().embed(method, parameters, callbacks, points)
