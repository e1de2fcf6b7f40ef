"""
Tests for the shared matrix builders.
"""

import numpy as np
import pytest

from embedkit.algorithms.matrices import (
    alignment_matrix,
    distance_matrix,
    double_center,
    feature_matrix,
    heat_weights,
    kernel_matrix,
    landmark_count,
    neighbor_distances,
    select_landmarks,
)
from embedkit.core.callbacks import CallbackSet
from embedkit.core.errors import DimensionMismatch
from embedkit.neighbors import BruteForceNeighbors


@pytest.fixture
def data():
    return np.random.default_rng(5).standard_normal((12, 3))


def full_distances(X):
    return np.linalg.norm(X[:, None, :] - X[None, :, :], axis=-1)


def test_double_center(data):
    C = double_center(data @ data.T)
    np.testing.assert_allclose(C.mean(axis=0), 0.0, atol=1e-12)
    np.testing.assert_allclose(C.mean(axis=1), 0.0, atol=1e-12)


def test_kernel_matrix(data):
    K = kernel_matrix(range(12), lambda a, b: float(data[a] @ data[b]))
    np.testing.assert_allclose(K, data @ data.T)


def test_distance_matrix(data):
    distance = lambda a, b: float(np.linalg.norm(data[a] - data[b]))  # noqa: E731
    expected = full_distances(data)

    np.testing.assert_allclose(distance_matrix(range(12), distance), expected)
    np.testing.assert_allclose(
        distance_matrix(range(12), distance, columns=[0, 5]), expected[:, [0, 5]]
    )


def test_feature_matrix(make_context, data):
    np.testing.assert_array_equal(feature_matrix(make_context(data)), data)


def test_feature_matrix_checks_current_dimension(make_context, data):
    with pytest.raises(DimensionMismatch) as exc_info:
        feature_matrix(make_context(data, current_dimension=4))
    assert exc_info.value.expected == 4
    assert exc_info.value.actual == 3


def test_feature_matrix_rejects_ragged_vectors(make_context, data):
    callbacks = CallbackSet(features=lambda a: np.ones(2 if a == 7 else 3))
    with pytest.raises(DimensionMismatch):
        feature_matrix(make_context(data, callbacks=callbacks))


def test_neighbor_graph_is_symmetric(make_context, data):
    distance = lambda a, b: float(np.linalg.norm(data[a] - data[b]))  # noqa: E731
    neighbors = BruteForceNeighbors().find_neighbors(range(12), 3, distance)
    ctx = make_context(data, neighbors=neighbors, gaussian_kernel_width=2.0)

    graph = neighbor_distances(ctx).toarray()
    np.testing.assert_allclose(graph, graph.T)
    expected = full_distances(data)
    for i, nbrs in enumerate(neighbors):
        np.testing.assert_allclose(graph[i, nbrs], expected[i, nbrs])

    weights = heat_weights(ctx).toarray()
    mask = graph > 0
    np.testing.assert_allclose(weights[mask], np.exp(-(graph[mask] ** 2) / 2.0))
    assert np.all(weights[~mask] == 0)


def test_landmarks(make_context, data):
    assert landmark_count(80, 0.5) == 40
    assert landmark_count(10, 1.0) == 10

    landmarks = select_landmarks(make_context(data, landmark_ratio=0.5))
    assert len(landmarks) == 6
    assert len(set(landmarks)) == 6
    assert np.all(np.diff(landmarks) > 0)


def test_alignment_matrix_sums_overlaps():
    blocks = [([0, 1], np.ones((2, 2))), ([1, 2], 2 * np.ones((2, 2)))]
    M = alignment_matrix(3, blocks).toarray()
    expected = np.array([[1.0, 1.0, 0.0], [1.0, 3.0, 2.0], [0.0, 2.0, 2.0]])
    np.testing.assert_array_equal(M, expected)


def test_alignment_matrix_empty():
    assert alignment_matrix(4, []).shape == (4, 4)
