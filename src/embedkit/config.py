"""
Configuration management for embedkit.

Loads defaults from environment variables (typically from a .env file).
Uses python-dotenv to load .env automatically.

These values are only used by the dispatcher when a ParametersMap leaves a
strategy selector unset; the map itself never receives defaults.

Usage:
    from embedkit.config import config

    config.default_eigen_method      # EigenEmbeddingMethod.ARPACK
    config.default_neighbors_method  # NeighborsMethod.BRUTE_FORCE
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from .core.enums import EigenEmbeddingMethod, NeighborsMethod

# Look for .env in project root (parent of src/)
_env_path = Path(__file__).parent.parent.parent / ".env"
if _env_path.exists():
    load_dotenv(_env_path)

DEFAULT_EIGEN_METHOD = "arpack"
DEFAULT_NEIGHBORS_METHOD = "brute_force"
DEFAULT_SEED = 0
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_EIGENSHIFT = 1e-9


@dataclass(frozen=True)
class Config:
    """
    Defaults for embedding runs.

    Environment variables:
        EMBEDKIT_EIGEN_METHOD      arpack | randomized | eigen_dense_selfadjoint_solver
        EMBEDKIT_NEIGHBORS_METHOD  brute_force | cover_tree
        EMBEDKIT_SEED              seed for randomized solvers, landmarks and SPE
        EMBEDKIT_LOG_LEVEL         DEBUG | INFO | WARNING | ...
        EMBEDKIT_EIGENSHIFT        diagonal shift for smallest-eigenvalue problems
    """

    default_eigen_method: EigenEmbeddingMethod = EigenEmbeddingMethod.ARPACK
    default_neighbors_method: NeighborsMethod = NeighborsMethod.BRUTE_FORCE
    seed: int = DEFAULT_SEED
    log_level: str = DEFAULT_LOG_LEVEL
    eigenshift: float = DEFAULT_EIGENSHIFT

    def __post_init__(self):
        """Validate values that came from the environment."""
        if self.eigenshift < 0:
            raise ValueError(f"eigenshift must be >= 0, got {self.eigenshift}")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown log level: {self.log_level}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        """
        Build a Config from environment variables.

        Raises:
            ValueError: If a variable holds an unknown method name or a bad number
        """
        env = os.environ if environ is None else environ
        eigen_name = env.get("EMBEDKIT_EIGEN_METHOD", DEFAULT_EIGEN_METHOD).lower()
        neighbors_name = env.get("EMBEDKIT_NEIGHBORS_METHOD", DEFAULT_NEIGHBORS_METHOD).lower()
        try:
            eigen_method = EigenEmbeddingMethod(eigen_name)
        except ValueError:
            available = ", ".join(m.value for m in EigenEmbeddingMethod)
            raise ValueError(
                f"Unknown EMBEDKIT_EIGEN_METHOD: {eigen_name}. Available: {available}"
            ) from None
        try:
            neighbors_method = NeighborsMethod(neighbors_name)
        except ValueError:
            available = ", ".join(m.value for m in NeighborsMethod)
            raise ValueError(
                f"Unknown EMBEDKIT_NEIGHBORS_METHOD: {neighbors_name}. Available: {available}"
            ) from None

        return cls(
            default_eigen_method=eigen_method,
            default_neighbors_method=neighbors_method,
            seed=int(env.get("EMBEDKIT_SEED", DEFAULT_SEED)),
            log_level=env.get("EMBEDKIT_LOG_LEVEL", DEFAULT_LOG_LEVEL),
            eigenshift=float(env.get("EMBEDKIT_EIGENSHIFT", DEFAULT_EIGENSHIFT)),
        )


# Global config instance
config = Config.from_env()
