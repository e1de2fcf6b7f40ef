"""
Tests for environment-driven configuration.
"""

import pytest

from embedkit.config import Config
from embedkit.core.enums import EigenEmbeddingMethod, NeighborsMethod


def test_defaults_from_empty_environment():
    config = Config.from_env({})
    assert config.default_eigen_method is EigenEmbeddingMethod.ARPACK
    assert config.default_neighbors_method is NeighborsMethod.BRUTE_FORCE
    assert config.seed == 0
    assert config.log_level == "WARNING"
    assert config.eigenshift == pytest.approx(1e-9)


def test_values_from_environment():
    config = Config.from_env(
        {
            "EMBEDKIT_EIGEN_METHOD": "RANDOMIZED",
            "EMBEDKIT_NEIGHBORS_METHOD": "cover_tree",
            "EMBEDKIT_SEED": "17",
            "EMBEDKIT_LOG_LEVEL": "debug",
            "EMBEDKIT_EIGENSHIFT": "1e-6",
        }
    )
    assert config.default_eigen_method is EigenEmbeddingMethod.RANDOMIZED
    assert config.default_neighbors_method is NeighborsMethod.COVER_TREE
    assert config.seed == 17
    assert config.log_level == "debug"
    assert config.eigenshift == pytest.approx(1e-6)


def test_unknown_eigen_method():
    with pytest.raises(ValueError, match="Unknown EMBEDKIT_EIGEN_METHOD"):
        Config.from_env({"EMBEDKIT_EIGEN_METHOD": "lobpcg"})


def test_unknown_neighbors_method():
    with pytest.raises(ValueError, match="Unknown EMBEDKIT_NEIGHBORS_METHOD"):
        Config.from_env({"EMBEDKIT_NEIGHBORS_METHOD": "kd_tree"})


def test_bad_numbers():
    with pytest.raises(ValueError):
        Config.from_env({"EMBEDKIT_SEED": "seven"})
    with pytest.raises(ValueError, match="eigenshift"):
        Config.from_env({"EMBEDKIT_EIGENSHIFT": "-1"})


def test_unknown_log_level():
    with pytest.raises(ValueError, match="Unknown log level"):
        Config(log_level="CHATTY")


def test_config_is_frozen():
    config = Config()
    with pytest.raises(AttributeError):
        config.seed = 3
