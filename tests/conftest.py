"""
Pytest configuration and shared fixtures.

This file is automatically discovered by pytest and provides fixtures
available to all test modules.
"""

from typing import Any, Sequence

import numpy as np
import pytest

from embedkit.config import Config
from embedkit.core.callbacks import callbacks_from_array
from embedkit.core.context import Arguments, EmbeddingContext
from embedkit.core.dispatcher import Dispatcher
from embedkit.core.enums import (
    EigenEmbeddingMethod,
    NeighborsMethod,
    ParameterKey,
    ReductionMethod,
)
from embedkit.core.methods import describe
from embedkit.core.parameters import ParametersMap
from embedkit.eigen.base import EigenSolver
from embedkit.eigen.dense import DenseSolver
from embedkit.eigen.factory import EigenSolverFactory
from embedkit.neighbors.base import NeighborsStrategy
from embedkit.neighbors.factory import NeighborsFactory

K = ParameterKey


class SpyNeighbors(NeighborsStrategy):
    """Delegates to a real strategy and records every call."""

    def __init__(self, inner: NeighborsStrategy):
        self.inner = inner
        self.calls = []

    def find_neighbors(self, points: Sequence[Any], k: int, distance):
        self.calls.append({"n_points": len(points), "k": k})
        return self.inner.find_neighbors(points, k, distance)


class SpySolver(EigenSolver):
    """Delegates to a real solver and records every call."""

    def __init__(self, inner: EigenSolver):
        self.inner = inner
        self.supports_generalized = inner.supports_generalized
        self.calls = []

    def solve(self, matrix, target_dimension, *, largest, skip=0, rhs=None, shift=0.0, rng=None):
        self.calls.append(
            {
                "shape": matrix.shape,
                "target_dimension": target_dimension,
                "largest": largest,
                "skip": skip,
                "generalized": rhs is not None,
                "shift": shift,
            }
        )
        return self.inner.solve(
            matrix, target_dimension, largest=largest, skip=skip, rhs=rhs, shift=shift, rng=rng
        )


class FailingNeighbors(NeighborsStrategy):
    def find_neighbors(self, points, k, distance):
        raise RuntimeError("index corrupted")


class FailingSolver(EigenSolver):
    supports_generalized = True

    def solve(self, matrix, target_dimension, *, largest, skip=0, rhs=None, shift=0.0, rng=None):
        raise ArithmeticError("no convergence")


@pytest.fixture
def test_config():
    """Config with fixed defaults, independent of the environment."""
    return Config(
        default_eigen_method=EigenEmbeddingMethod.ARPACK,
        default_neighbors_method=NeighborsMethod.BRUTE_FORCE,
        seed=0,
        log_level="WARNING",
        eigenshift=1e-9,
    )


@pytest.fixture
def spy_dispatcher(test_config):
    """
    Dispatcher whose strategies are all spies around the real ones.

    Use ``collaborator_calls(dispatcher)`` to count how often any of them ran.
    """
    neighbors = {m: SpyNeighbors(s) for m, s in NeighborsFactory().create_all().items()}
    solvers = {m: SpySolver(s) for m, s in EigenSolverFactory().create_all().items()}
    return Dispatcher(config=test_config, neighbors_strategies=neighbors, eigen_solvers=solvers)


@pytest.fixture
def collaborator_calls():
    def count(dispatcher: Dispatcher) -> int:
        strategies = list(dispatcher.neighbors_strategies.values())
        strategies += list(dispatcher.eigen_solvers.values())
        return sum(len(s.calls) for s in strategies)

    return count


@pytest.fixture
def failing_neighbors():
    return FailingNeighbors()


@pytest.fixture
def failing_solver():
    return FailingSolver()


@pytest.fixture
def plane_data():
    """
    80 points near a 2-D plane in 5-D space.

    Full rank (small noise) so linear methods have a definite right-hand side.
    """
    rng = np.random.default_rng(7)
    t = rng.uniform(0.0, 1.0, size=(80, 2))
    basis, _ = np.linalg.qr(rng.standard_normal((5, 2)))
    return t @ basis.T + 0.05 * rng.standard_normal((80, 5))


@pytest.fixture
def pca_data():
    """100 points in 10 dimensions with distinct per-axis variances."""
    rng = np.random.default_rng(42)
    return rng.standard_normal((100, 10)) * np.arange(10, 0, -1)


@pytest.fixture
def plane_callbacks(plane_data):
    return callbacks_from_array(plane_data)


def _valid_parameters(method: ReductionMethod) -> ParametersMap:
    values = {
        K.TARGET_DIMENSION: 2,
        K.NUMBER_OF_NEIGHBORS: 10,
        K.GAUSSIAN_KERNEL_WIDTH: 1.0,
        K.DIFFUSION_MAP_TIMESTEPS: 1,
        K.LANDMARK_RATIO: 0.5,
        K.SPE_GLOBAL_STRATEGY: True,
        K.SPE_TOLERANCE: 1e-5,
        K.SPE_NUM_UPDATES: 40,
        K.MAX_ITERATION: 20,
    }
    descriptor = describe(method)
    return ParametersMap({key: values[key] for key in descriptor.required_keys})


@pytest.fixture
def valid_parameters():
    """
    Build a minimal valid ParametersMap for a method: exactly its required keys.

    Usage:
        params = valid_parameters(ReductionMethod.ISOMAP)
    """
    return _valid_parameters


@pytest.fixture
def make_context():
    """
    Build an EmbeddingContext over the rows of a data matrix.

    Usage:
        ctx = make_context(X, neighbors=..., target_dimension=2)
    """

    def build(X, neighbors=None, solver=None, callbacks=None, **arguments):
        solver = solver or DenseSolver()
        rng = np.random.default_rng(0)

        def solve(matrix, target_dimension, *, largest, skip=0, rhs=None):
            return solver.solve(
                matrix, target_dimension, largest=largest, skip=skip, rhs=rhs, rng=rng
            )

        return EmbeddingContext(
            method=ReductionMethod.PCA,
            points=range(len(X)),
            callbacks=callbacks or callbacks_from_array(X),
            arguments=Arguments(**arguments),
            solve=solve,
            rng=rng,
            neighbors=neighbors,
        )

    return build
