"""
Configuration and dispatch layer.

Holds the parameter map, the method enumerations and registry, callback
interfaces, projection types and the error hierarchy. The dispatcher lives
in ``embedkit.core.dispatcher`` and is re-exported from ``embedkit``.
"""

from .enums import EigenEmbeddingMethod, NeighborsMethod, ParameterKey, ReductionMethod
from .errors import (
    CollaboratorFailure,
    DimensionMismatch,
    EmbedkitError,
    InvalidParameterValue,
    MissingCapability,
    MissingParameter,
    TooFewPoints,
    TypeMismatch,
    UnknownMethod,
    UnsupportedCombination,
)
from .value import AnyValue
from .parameters import PARAMETER_TYPES, ParametersMap
from .callbacks import CallbackSet, Capability
from .projection import MatrixProjection, ProjectingFunction, ProjectingImplementation
from .context import Arguments, EmbeddingContext, EmbeddingResult

__all__ = [
    "EigenEmbeddingMethod",
    "NeighborsMethod",
    "ParameterKey",
    "ReductionMethod",
    "CollaboratorFailure",
    "DimensionMismatch",
    "EmbedkitError",
    "InvalidParameterValue",
    "MissingCapability",
    "MissingParameter",
    "TooFewPoints",
    "TypeMismatch",
    "UnknownMethod",
    "UnsupportedCombination",
    "AnyValue",
    "PARAMETER_TYPES",
    "ParametersMap",
    "CallbackSet",
    "Capability",
    "MatrixProjection",
    "ProjectingFunction",
    "ProjectingImplementation",
    "Arguments",
    "EmbeddingContext",
    "EmbeddingResult",
]
