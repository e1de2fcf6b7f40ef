"""
embedkit - Core Package

Configuration and dispatch for dimensionality reduction: build a
ParametersMap, supply kernel / distance / feature callbacks, and call
``embed`` to get an embedding plus, for linear methods, a projection of
new points.

This package provides:
- Typed parameter maps and the method registry
- Neighbor search and eigensolver strategies
- Fifteen embedding routines
"""

__version__ = "0.1.0"

from .core import (
    AnyValue,
    CallbackSet,
    Capability,
    CollaboratorFailure,
    DimensionMismatch,
    EigenEmbeddingMethod,
    EmbeddingResult,
    EmbedkitError,
    InvalidParameterValue,
    MissingCapability,
    MissingParameter,
    NeighborsMethod,
    ParameterKey,
    ParametersMap,
    ProjectingFunction,
    ReductionMethod,
    TooFewPoints,
    TypeMismatch,
    UnknownMethod,
    UnsupportedCombination,
)
from .core.dispatcher import Dispatcher, embed
from .core.methods import available_methods, describe

from . import algorithms
from . import eigen
from . import neighbors
from . import utils

__all__ = [
    "embed",
    "Dispatcher",
    "describe",
    "available_methods",
    "AnyValue",
    "CallbackSet",
    "Capability",
    "EmbeddingResult",
    "ParameterKey",
    "ParametersMap",
    "ProjectingFunction",
    "ReductionMethod",
    "NeighborsMethod",
    "EigenEmbeddingMethod",
    "EmbedkitError",
    "UnknownMethod",
    "MissingParameter",
    "TypeMismatch",
    "MissingCapability",
    "InvalidParameterValue",
    "UnsupportedCombination",
    "DimensionMismatch",
    "TooFewPoints",
    "CollaboratorFailure",
    "algorithms",
    "eigen",
    "neighbors",
    "utils",
]
