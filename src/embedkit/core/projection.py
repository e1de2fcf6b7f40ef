"""
Out-of-sample projection.

A fitted linear method hands back a ``ProjectingFunction`` that maps new
feature vectors into the embedding space. The function *borrows* its
``ProjectingImplementation``: it keeps a reference and never copies or
mutates the fitted state.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from .errors import DimensionMismatch


class ProjectingImplementation(ABC):
    """Fitted transform applied by a ``ProjectingFunction``."""

    @property
    @abstractmethod
    def input_dimension(self) -> int:
        """Dimension of the feature vectors seen at fit time."""

    @property
    @abstractmethod
    def output_dimension(self) -> int:
        """Dimension of the embedding."""

    @abstractmethod
    def project(self, vector: np.ndarray) -> np.ndarray:
        """Map one feature vector to its embedded coordinates."""


class MatrixProjection(ProjectingImplementation):
    """Linear projection ``(x - mean) @ P``."""

    def __init__(self, projection_matrix: np.ndarray, mean_vector: np.ndarray):
        projection_matrix = np.array(projection_matrix, dtype=np.float64)
        mean_vector = np.array(mean_vector, dtype=np.float64)
        if projection_matrix.ndim != 2:
            raise ValueError(f"projection_matrix must be 2-D; got {projection_matrix.shape}")
        if mean_vector.shape != (projection_matrix.shape[0],):
            raise DimensionMismatch(projection_matrix.shape[0], mean_vector.shape[0])
        projection_matrix.setflags(write=False)
        mean_vector.setflags(write=False)
        self.projection_matrix = projection_matrix
        self.mean_vector = mean_vector

    @property
    def input_dimension(self) -> int:
        return self.projection_matrix.shape[0]

    @property
    def output_dimension(self) -> int:
        return self.projection_matrix.shape[1]

    def project(self, vector: np.ndarray) -> np.ndarray:
        return (vector - self.mean_vector) @ self.projection_matrix


class ProjectingFunction:
    """
    Callable wrapper around a fitted ``ProjectingImplementation``.

    Usage:
        result, projection = embed(ReductionMethod.PCA, params, callbacks, points)
        z = projection(x_new)   # or projection.apply(x_new)
    """

    def __init__(self, implementation: ProjectingImplementation):
        self.implementation = implementation

    @property
    def input_dimension(self) -> int:
        return self.implementation.input_dimension

    @property
    def output_dimension(self) -> int:
        return self.implementation.output_dimension

    def apply(self, vector) -> np.ndarray:
        """
        Project one feature vector.

        Raises:
            DimensionMismatch: If len(vector) differs from the fit-time dimension
        """
        vector = np.asarray(vector, dtype=np.float64)
        if vector.ndim != 1:
            raise ValueError(f"Expected a 1-D feature vector; got shape {vector.shape}")
        if vector.shape[0] != self.implementation.input_dimension:
            raise DimensionMismatch(self.implementation.input_dimension, vector.shape[0])
        return self.implementation.project(vector)

    def __call__(self, vector) -> np.ndarray:
        return self.apply(vector)

    def __repr__(self) -> str:
        return (
            f"ProjectingFunction({type(self.implementation).__name__}, "
            f"{self.input_dimension} -> {self.output_dimension})"
        )
