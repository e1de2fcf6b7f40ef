"""
Eigensolver Factory - Creates eigensolver strategies by method.
"""

from typing import Union

from ..core.enums import EigenEmbeddingMethod
from ..core.errors import UnknownMethod
from .arpack import ArpackSolver
from .base import EigenSolver
from .dense import DenseSolver
from .randomized import RandomizedSolver


class EigenSolverFactory:
    """
    Factory for eigensolvers.

    Usage:
        factory = EigenSolverFactory()
        solver = factory.create("arpack")
    """

    def create(self, method: Union[EigenEmbeddingMethod, str]) -> EigenSolver:
        """
        Create a solver instance.

        Raises:
            UnknownMethod: If *method* is not a known eigen-embedding method
        """
        if isinstance(method, str):
            try:
                method = EigenEmbeddingMethod(method.lower())
            except ValueError:
                raise UnknownMethod(method, self.get_available_methods()) from None

        if method is EigenEmbeddingMethod.ARPACK:
            return ArpackSolver()
        elif method is EigenEmbeddingMethod.RANDOMIZED:
            return RandomizedSolver()
        elif method is EigenEmbeddingMethod.EIGEN_DENSE_SELFADJOINT_SOLVER:
            return DenseSolver()
        else:
            raise UnknownMethod(method, self.get_available_methods())

    def create_all(self) -> dict:
        return {method: self.create(method) for method in EigenEmbeddingMethod}

    @staticmethod
    def get_available_methods() -> list[str]:
        return [method.value for method in EigenEmbeddingMethod]
