"""
Neighbors Factory - Creates neighbor search strategies by method.

Lets the dispatcher pick a strategy from a ``NeighborsMethod`` (or its
name) without importing the strategy classes directly.
"""

from typing import Union

from ..core.enums import NeighborsMethod
from ..core.errors import UnknownMethod
from .base import NeighborsStrategy
from .brute_force import BruteForceNeighbors
from .vp_tree import VantagePointTreeNeighbors


class NeighborsFactory:
    """
    Factory for neighbor search strategies.

    Usage:
        factory = NeighborsFactory()
        strategy = factory.create(NeighborsMethod.COVER_TREE)
        strategies = factory.create_all()   # {method: strategy}
    """

    def create(self, method: Union[NeighborsMethod, str]) -> NeighborsStrategy:
        """
        Create a strategy instance.

        Raises:
            UnknownMethod: If *method* is not a known neighbors method
        """
        if isinstance(method, str):
            try:
                method = NeighborsMethod(method.lower())
            except ValueError:
                raise UnknownMethod(method, self.get_available_methods()) from None

        if method is NeighborsMethod.BRUTE_FORCE:
            return BruteForceNeighbors()
        elif method is NeighborsMethod.COVER_TREE:
            return VantagePointTreeNeighbors()
        else:
            raise UnknownMethod(method, self.get_available_methods())

    def create_all(self) -> dict:
        return {method: self.create(method) for method in NeighborsMethod}

    @staticmethod
    def get_available_methods() -> list[str]:
        return [method.value for method in NeighborsMethod]
