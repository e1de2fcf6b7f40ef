"""
Callback capability contracts.

The data set is only reachable through caller-supplied callbacks over
opaque point handles. A method declares which kinds of callback
(capabilities) it needs; ``check_capabilities`` verifies, before any
numerical work, that the supplied ``CallbackSet`` covers them.

Usage:
    from embedkit.core.callbacks import CallbackSet, callbacks_from_array

    callbacks = callbacks_from_array(X)          # kernel, distance, features
    callbacks = CallbackSet(distance=my_metric)  # plain callables work too
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Union

import numpy as np

from .errors import MissingCapability


class Capability(Enum):
    """Kinds of callback a method may require."""

    KERNEL = "kernel"
    DISTANCE = "distance"
    FEATURES = "features"


class KernelCallback(ABC):
    """Mercer kernel between two point handles."""

    @abstractmethod
    def kernel(self, a: Any, b: Any) -> float:
        """Return k(a, b)."""


class DistanceCallback(ABC):
    """Metric distance between two point handles."""

    @abstractmethod
    def distance(self, a: Any, b: Any) -> float:
        """Return d(a, b)."""


class FeatureCallback(ABC):
    """Dense feature-vector access for a point handle."""

    @abstractmethod
    def vector(self, a: Any) -> np.ndarray:
        """Return the feature vector of *a* as a 1-D float array."""

    @property
    def dimension(self) -> Optional[int]:
        """Feature dimension if known up front, else ``None``."""
        return None


class _FunctionKernel(KernelCallback):
    def __init__(self, fn: Callable[[Any, Any], float]):
        self._fn = fn

    def kernel(self, a: Any, b: Any) -> float:
        return self._fn(a, b)


class _FunctionDistance(DistanceCallback):
    def __init__(self, fn: Callable[[Any, Any], float]):
        self._fn = fn

    def distance(self, a: Any, b: Any) -> float:
        return self._fn(a, b)


class _FunctionFeatures(FeatureCallback):
    def __init__(self, fn: Callable[[Any], np.ndarray]):
        self._fn = fn

    def vector(self, a: Any) -> np.ndarray:
        return np.asarray(self._fn(a), dtype=np.float64)


KernelLike = Union[KernelCallback, Callable[[Any, Any], float]]
DistanceLike = Union[DistanceCallback, Callable[[Any, Any], float]]
FeaturesLike = Union[FeatureCallback, Callable[[Any], np.ndarray]]


def _adapt(value, base, wrapper, name):
    if value is None or isinstance(value, base):
        return value
    if callable(value):
        return wrapper(value)
    raise TypeError(f"{name} callback must be a {base.__name__} or callable, got {type(value).__name__}")


@dataclass(frozen=True)
class CallbackSet:
    """
    The callbacks a caller supplies for one embedding run.

    Plain callables are wrapped into the matching callback class.
    """

    kernel: Optional[KernelCallback] = None
    distance: Optional[DistanceCallback] = None
    features: Optional[FeatureCallback] = None

    def __init__(
        self,
        kernel: Optional[KernelLike] = None,
        distance: Optional[DistanceLike] = None,
        features: Optional[FeaturesLike] = None,
    ):
        object.__setattr__(self, "kernel", _adapt(kernel, KernelCallback, _FunctionKernel, "kernel"))
        object.__setattr__(
            self, "distance", _adapt(distance, DistanceCallback, _FunctionDistance, "distance")
        )
        object.__setattr__(
            self, "features", _adapt(features, FeatureCallback, _FunctionFeatures, "features")
        )

    def capabilities(self) -> frozenset[Capability]:
        present = set()
        if self.kernel is not None:
            present.add(Capability.KERNEL)
        if self.distance is not None:
            present.add(Capability.DISTANCE)
        if self.features is not None:
            present.add(Capability.FEATURES)
        return frozenset(present)


def check_capabilities(descriptor, callbacks: CallbackSet) -> None:
    """
    Verify that *callbacks* covers every capability *descriptor* requires.

    Raises:
        MissingCapability: Naming every missing capability, in enum order
    """
    supplied = callbacks.capabilities()
    missing = [cap for cap in Capability if cap in descriptor.capabilities and cap not in supplied]
    if missing:
        raise MissingCapability(descriptor.method, missing)


# ----------------------------------------------------------------------
# Stock callbacks over an in-memory data matrix (handles are row indices)
# ----------------------------------------------------------------------


class RowFeatures(FeatureCallback):
    """Feature access where the point handle is a row index of *X*."""

    def __init__(self, X: np.ndarray):
        self.X = np.asarray(X, dtype=np.float64)
        if self.X.ndim != 2:
            raise ValueError(f"X must be 2-D (n_samples, n_features); got {self.X.shape}")

    def vector(self, a: int) -> np.ndarray:
        return self.X[a]

    @property
    def dimension(self) -> int:
        return self.X.shape[1]


class LinearKernel(KernelCallback):
    """Dot-product kernel over rows of *X*."""

    def __init__(self, X: np.ndarray):
        self.X = np.asarray(X, dtype=np.float64)

    def kernel(self, a: int, b: int) -> float:
        return float(self.X[a] @ self.X[b])


class GaussianKernel(KernelCallback):
    """exp(-||x_a - x_b||^2 / width) over rows of *X*."""

    def __init__(self, X: np.ndarray, width: float = 1.0):
        if width <= 0:
            raise ValueError(f"width must be > 0, got {width}")
        self.X = np.asarray(X, dtype=np.float64)
        self.width = width

    def kernel(self, a: int, b: int) -> float:
        diff = self.X[a] - self.X[b]
        return float(np.exp(-(diff @ diff) / self.width))


class EuclideanDistance(DistanceCallback):
    """Euclidean distance over rows of *X*."""

    def __init__(self, X: np.ndarray):
        self.X = np.asarray(X, dtype=np.float64)

    def distance(self, a: int, b: int) -> float:
        return float(np.linalg.norm(self.X[a] - self.X[b]))


def callbacks_from_array(X: np.ndarray) -> CallbackSet:
    """Build linear-kernel, Euclidean-distance and row-feature callbacks for *X*."""
    X = np.asarray(X, dtype=np.float64)
    return CallbackSet(
        kernel=LinearKernel(X),
        distance=EuclideanDistance(X),
        features=RowFeatures(X),
    )
