"""
Error hierarchy for embedkit.

Every error raised by the configuration and dispatch layer derives from
``EmbedkitError``. Validation errors additionally inherit from the closest
built-in exception so that callers catching ``KeyError`` / ``TypeError`` /
``ValueError`` keep working.
"""

from typing import Any, Iterable, Optional


class EmbedkitError(Exception):
    """Base class for all embedkit errors."""


class UnknownMethod(EmbedkitError, ValueError):
    """Raised when a method identifier is not registered."""

    def __init__(self, method: Any, available: Optional[Iterable[str]] = None):
        self.method = method
        message = f"Unknown method: {method!r}."
        if available:
            message += f" Available methods: {', '.join(available)}"
        super().__init__(message)


class MissingParameter(EmbedkitError, KeyError):
    """Raised when a required parameter key is absent from a ParametersMap."""

    def __init__(self, key: Any, method: Any = None):
        self.key = key
        self.method = method
        suffix = f" (required by {method})" if method is not None else ""
        super().__init__(f"Missing parameter {_key_name(key)}{suffix}")

    def __str__(self) -> str:
        # KeyError would otherwise wrap the message in quotes
        return self.args[0]


class TypeMismatch(EmbedkitError, TypeError):
    """Raised when a stored value is read as a type it does not have."""

    def __init__(self, expected: type, actual: type, key: Any = None):
        self.key = key
        self.expected = expected
        self.actual = actual
        where = f" for parameter {_key_name(key)}" if key is not None else ""
        super().__init__(
            f"Type mismatch{where}: expected {expected.__name__}, "
            f"got {actual.__name__}"
        )


class MissingCapability(EmbedkitError):
    """Raised when the supplied callbacks lack a capability the method needs."""

    def __init__(self, method: Any, missing: Iterable[Any]):
        self.method = method
        self.missing = tuple(missing)
        names = ", ".join(_key_name(cap) for cap in self.missing)
        super().__init__(f"{method} requires callback capabilities: {names}")


class InvalidParameterValue(EmbedkitError, ValueError):
    """Raised when a parameter is well-typed but out of its valid range."""

    def __init__(self, key: Any, value: Any, reason: str):
        self.key = key
        self.value = value
        super().__init__(f"Invalid value {value!r} for {_key_name(key)}: {reason}")


class TooFewPoints(EmbedkitError, ValueError):
    """Raised when the data set is too small for any method."""

    def __init__(self, n_points: int, minimum: int):
        self.n_points = n_points
        self.minimum = minimum
        super().__init__(f"At least {minimum} points are required, got {n_points}")


class UnsupportedCombination(EmbedkitError):
    """Raised when a method needs a generalized eigenproblem the solver can't do."""

    def __init__(self, method: Any, solver: Any):
        self.method = method
        self.solver = solver
        super().__init__(
            f"{method} produces a generalized eigenproblem but {solver} "
            f"only supports standard eigenproblems"
        )


class DimensionMismatch(EmbedkitError, ValueError):
    """Raised when a vector's length disagrees with the expected dimension."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Dimension mismatch: expected {expected}, got {actual}")


class CollaboratorFailure(EmbedkitError):
    """Wraps an error raised by neighbor search, an eigensolver or a routine.

    The original exception is available as ``__cause__``.
    """

    def __init__(self, step: str, method: Any, cause: BaseException):
        self.step = step
        self.method = method
        super().__init__(
            f"{step} failed while embedding with {method}: "
            f"{type(cause).__name__}: {cause}"
        )


def _key_name(key: Any) -> str:
    return getattr(key, "name", str(key))
