"""
Parameter map: the single configuration object threaded through embedding.

Usage:
    from embedkit.core.parameters import ParametersMap, ParameterKey

    params = (
        ParametersMap()
        .set(ParameterKey.NUMBER_OF_NEIGHBORS, 10)
        .set(ParameterKey.TARGET_DIMENSION, 2)
    )
    k = params.get(ParameterKey.NUMBER_OF_NEIGHBORS, int)

The map never fills in missing values. Expected types per key are listed
in ``PARAMETER_TYPES`` and enforced by the dispatcher, not by the map.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, Mapping, Type, TypeVar

from .enums import EigenEmbeddingMethod, NeighborsMethod, ParameterKey, ReductionMethod
from .errors import MissingParameter, TypeMismatch
from .value import AnyValue

T = TypeVar("T")

PARAMETER_TYPES: Dict[ParameterKey, type] = {
    ParameterKey.REDUCTION_METHOD: ReductionMethod,
    ParameterKey.NUMBER_OF_NEIGHBORS: int,
    ParameterKey.TARGET_DIMENSION: int,
    ParameterKey.CURRENT_DIMENSION: int,
    ParameterKey.EIGEN_EMBEDDING_METHOD: EigenEmbeddingMethod,
    ParameterKey.NEIGHBORS_METHOD: NeighborsMethod,
    ParameterKey.DIFFUSION_MAP_TIMESTEPS: int,
    ParameterKey.GAUSSIAN_KERNEL_WIDTH: float,
    ParameterKey.MAX_ITERATION: int,
    ParameterKey.SPE_GLOBAL_STRATEGY: bool,
    ParameterKey.SPE_TOLERANCE: float,
    ParameterKey.SPE_NUM_UPDATES: int,
    ParameterKey.LANDMARK_RATIO: float,
    ParameterKey.EIGENSHIFT: float,
}


class ParametersMap:
    """
    Mapping from ``ParameterKey`` to a type-erased ``AnyValue``.

    Copying a map copies every stored value; the pipeline only ever reads
    from the map it is given.
    """

    def __init__(self, values: Mapping[ParameterKey, Any] | None = None):
        self._values: Dict[ParameterKey, AnyValue] = {}
        if values:
            for key, value in values.items():
                self.set(key, value)

    def set(self, key: ParameterKey, value: Any) -> "ParametersMap":
        """
        Insert or overwrite *key*.

        Returns:
            The map itself, so calls can be chained

        Raises:
            TypeError: If *key* is not a ParameterKey
        """
        if not isinstance(key, ParameterKey):
            raise TypeError(f"Parameter keys must be ParameterKey, got {type(key).__name__}")
        self._values[key] = value.copy() if isinstance(value, AnyValue) else AnyValue(value)
        return self

    def get(self, key: ParameterKey, expected: Type[T]) -> T:
        """
        Look up *key* and read it as *expected*.

        Raises:
            MissingParameter: If *key* is absent
            TypeMismatch: If the stored value is not exactly of type *expected*
        """
        try:
            stored = self._values[key]
        except KeyError:
            raise MissingParameter(key) from None
        try:
            return stored.read(expected)
        except TypeMismatch as exc:
            raise TypeMismatch(exc.expected, exc.actual, key=key) from None

    def get_value(self, key: ParameterKey) -> AnyValue:
        """Return the raw ``AnyValue`` stored under *key*."""
        try:
            return self._values[key]
        except KeyError:
            raise MissingParameter(key) from None

    def has(self, key: ParameterKey) -> bool:
        return key in self._values

    def remove(self, key: ParameterKey) -> None:
        if key not in self._values:
            raise MissingParameter(key)
        del self._values[key]

    def keys(self) -> list[ParameterKey]:
        return list(self._values)

    def items(self) -> list[tuple[ParameterKey, Any]]:
        """Return ``(key, unwrapped value)`` pairs."""
        return [(key, stored.value) for key, stored in self._values.items()]

    def copy(self) -> "ParametersMap":
        duplicate = ParametersMap()
        for key, stored in self._values.items():
            duplicate._values[key] = stored.copy()
        return duplicate

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[ParameterKey]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParametersMap):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        inner = ", ".join(f"{key.name}={stored.value!r}" for key, stored in self._values.items())
        return f"ParametersMap({inner})"
