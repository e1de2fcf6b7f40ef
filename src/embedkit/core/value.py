"""
Type-erased value container.

``AnyValue`` holds exactly one value whose type is fixed at construction
and hands it back only to a reader asking for that exact type.
"""

from __future__ import annotations

import copy
from typing import Any, Type, TypeVar

from .errors import TypeMismatch

T = TypeVar("T")


class AnyValue:
    """
    A single value of any type with checked reads.

    ``read(T)`` succeeds only when the stored value's type *is* ``T``.
    Subclasses do not match their bases (``True`` is not an ``int``) and
    numbers are never widened (``1`` is not a ``float``).

    Usage:
        value = AnyValue(10)
        value.read(int)    # 10
        value.read(float)  # raises TypeMismatch
    """

    __slots__ = ("_value",)

    def __init__(self, value: Any):
        if isinstance(value, AnyValue):
            value = copy.deepcopy(value._value)
        self._value = value

    @property
    def type(self) -> type:
        """Runtime type of the stored value."""
        return type(self._value)

    @property
    def value(self) -> Any:
        """The stored value, unchecked. Prefer ``read``."""
        return self._value

    def read(self, expected: Type[T]) -> T:
        """
        Return the stored value if its type is exactly *expected*.

        Raises:
            TypeMismatch: If the stored type differs from *expected*
        """
        if type(self._value) is not expected:
            raise TypeMismatch(expected, type(self._value))
        return self._value

    def copy(self) -> "AnyValue":
        return AnyValue(copy.deepcopy(self._value))

    def __copy__(self) -> "AnyValue":
        return self.copy()

    def __deepcopy__(self, memo) -> "AnyValue":
        return AnyValue(copy.deepcopy(self._value, memo))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AnyValue):
            return NotImplemented
        return self.type is other.type and self._value == other._value

    def __repr__(self) -> str:
        return f"AnyValue({self._value!r})"
