"""
End-to-end tests of the embedding routines through the dispatcher.
"""

import numpy as np
import pytest

from embedkit.core.callbacks import CallbackSet, LinearKernel, RowFeatures, callbacks_from_array
from embedkit.core.dispatcher import Dispatcher
from embedkit.core.enums import EigenEmbeddingMethod, ParameterKey, ReductionMethod
from embedkit.core.methods import describe
from embedkit.core.parameters import ParametersMap

K = ParameterKey
M = ReductionMethod
DENSE = EigenEmbeddingMethod.EIGEN_DENSE_SELFADJOINT_SOLVER


def pairwise(Y):
    return np.linalg.norm(Y[:, None, :] - Y[None, :, :], axis=-1)


@pytest.fixture
def dispatcher(test_config):
    return Dispatcher(config=test_config)


@pytest.fixture
def flat_data():
    """30 points with exactly two degrees of freedom."""
    return np.random.default_rng(11).uniform(0.0, 1.0, size=(30, 2))


@pytest.fixture
def line_data():
    """40 evenly spaced points on a straight line in 3-D, plus their line coordinate."""
    t = np.linspace(0.0, 10.0, 40)
    direction = np.array([1.0, 2.0, -1.0]) / np.sqrt(6.0)
    return t[:, None] * direction, t


@pytest.fixture
def noisy_line_data(line_data):
    """The line with small transverse noise, so only the constant vector is exactly null."""
    X, t = line_data
    return X + 0.01 * np.random.default_rng(4).standard_normal(X.shape), t


@pytest.mark.parametrize("method", list(ReductionMethod))
def test_every_method_embeds(method, dispatcher, valid_parameters, plane_data, plane_callbacks):
    result, projection = dispatcher.embed(
        method, valid_parameters(method), plane_callbacks, range(len(plane_data))
    )

    assert result.embedding.shape == (80, 2)
    assert np.all(np.isfinite(result.embedding))
    assert (projection is not None) == describe(method).projecting


@pytest.mark.parametrize(
    "method",
    [
        M.NEIGHBORHOOD_PRESERVING_EMBEDDING,
        M.LINEAR_LOCAL_TANGENT_SPACE_ALIGNMENT,
        M.LOCALITY_PRESERVING_PROJECTIONS,
    ],
)
def test_linear_methods_project_training_rows(
    method, dispatcher, valid_parameters, plane_data, plane_callbacks
):
    result, projection = dispatcher.embed(
        method, valid_parameters(method), plane_callbacks, range(80)
    )

    assert projection.input_dimension == 5
    assert projection.output_dimension == 2
    for i in (0, 40, 79):
        np.testing.assert_allclose(projection(plane_data[i]), result.embedding[i], atol=1e-9)


def test_mds_preserves_distances(dispatcher, flat_data):
    params = ParametersMap().set(K.TARGET_DIMENSION, 2)
    result, _ = dispatcher.embed(
        M.MULTIDIMENSIONAL_SCALING, params, callbacks_from_array(flat_data), range(30)
    )
    np.testing.assert_allclose(pairwise(result.embedding), pairwise(flat_data), atol=1e-8)


def test_landmark_mds_preserves_distances(dispatcher, flat_data):
    """For exactly 2-D data, triangulation from landmarks is exact."""
    params = ParametersMap().set(K.TARGET_DIMENSION, 2).set(K.LANDMARK_RATIO, 0.5)
    result, _ = dispatcher.embed(
        M.LANDMARK_MULTIDIMENSIONAL_SCALING, params, callbacks_from_array(flat_data), range(30)
    )
    np.testing.assert_allclose(pairwise(result.embedding), pairwise(flat_data), atol=1e-6)


def test_kernel_pca_with_linear_kernel_matches_pca(dispatcher, pca_data):
    params = ParametersMap().set(K.TARGET_DIMENSION, 2)
    pca, _ = dispatcher.embed(M.PCA, params, CallbackSet(features=RowFeatures(pca_data)), range(100))
    kpca, _ = dispatcher.embed(
        M.KERNEL_PCA, params, CallbackSet(kernel=LinearKernel(pca_data)), range(100)
    )

    np.testing.assert_allclose(np.abs(kpca.embedding), np.abs(pca.embedding), atol=1e-6)
    np.testing.assert_allclose(kpca.diagnostics, 100 * pca.diagnostics, rtol=1e-6)


def test_isomap_unrolls_a_line(dispatcher, line_data):
    X, t = line_data
    params = ParametersMap().set(K.TARGET_DIMENSION, 1).set(K.NUMBER_OF_NEIGHBORS, 4)
    result, _ = dispatcher.embed(M.ISOMAP, params, callbacks_from_array(X), range(40))

    np.testing.assert_allclose(np.abs(result.embedding[:, 0]), np.abs(t - t.mean()), atol=1e-6)


@pytest.mark.parametrize(
    "method",
    [M.KERNEL_LOCALLY_LINEAR_EMBEDDING, M.KERNEL_LOCAL_TANGENT_SPACE_ALIGNMENT],
)
def test_local_methods_recover_line_order(method, dispatcher, noisy_line_data):
    X, t = noisy_line_data
    params = (
        ParametersMap()
        .set(K.TARGET_DIMENSION, 1)
        .set(K.NUMBER_OF_NEIGHBORS, 4)
        .set(K.EIGEN_EMBEDDING_METHOD, DENSE)
    )
    result, _ = dispatcher.embed(method, params, callbacks_from_array(X), range(40))

    correlation = np.corrcoef(result.embedding[:, 0], t)[0, 1]
    assert abs(correlation) > 0.9


def test_laplacian_eigenmaps_spectrum(dispatcher, valid_parameters, plane_callbacks):
    result, _ = dispatcher.embed(
        M.LAPLACIAN_EIGENMAPS, valid_parameters(M.LAPLACIAN_EIGENMAPS), plane_callbacks, range(80)
    )
    assert np.all(result.diagnostics > -1e-8)
    assert np.all(np.diff(result.diagnostics) >= 0)


def test_diffusion_map_spectrum(dispatcher, valid_parameters, plane_callbacks):
    result, _ = dispatcher.embed(
        M.DIFFUSION_MAP, valid_parameters(M.DIFFUSION_MAP), plane_callbacks, range(80)
    )
    assert result.diagnostics.shape == (2,)
    assert np.all(result.diagnostics < 1.0 + 1e-9)
    assert np.all(np.diff(result.diagnostics) <= 0)


def test_diffusion_map_timesteps_scale_coordinates(dispatcher, valid_parameters, plane_callbacks):
    params = valid_parameters(M.DIFFUSION_MAP)
    one, _ = dispatcher.embed(M.DIFFUSION_MAP, params, plane_callbacks, range(80))
    two, _ = dispatcher.embed(
        M.DIFFUSION_MAP, params.copy().set(K.DIFFUSION_MAP_TIMESTEPS, 2), plane_callbacks, range(80)
    )
    np.testing.assert_allclose(two.embedding, one.embedding * one.diagnostics, rtol=1e-8, atol=1e-12)


def test_randomized_solver_matches_arpack(dispatcher, plane_callbacks):
    params = ParametersMap().set(K.TARGET_DIMENSION, 2)
    arpack, _ = dispatcher.embed(M.MULTIDIMENSIONAL_SCALING, params, plane_callbacks, range(80))
    randomized, _ = dispatcher.embed(
        M.MULTIDIMENSIONAL_SCALING,
        params.copy().set(K.EIGEN_EMBEDDING_METHOD, EigenEmbeddingMethod.RANDOMIZED),
        plane_callbacks,
        range(80),
    )
    np.testing.assert_allclose(randomized.diagnostics, arpack.diagnostics, rtol=1e-6)


def test_spe_local_strategy(dispatcher, plane_callbacks):
    params = ParametersMap(
        {
            K.TARGET_DIMENSION: 2,
            K.NUMBER_OF_NEIGHBORS: 8,
            K.SPE_GLOBAL_STRATEGY: False,
            K.SPE_TOLERANCE: 1e-5,
            K.SPE_NUM_UPDATES: 40,
            K.MAX_ITERATION: 30,
        }
    )
    result, projection = dispatcher.embed(
        M.STOCHASTIC_PROXIMITY_EMBEDDING, params, plane_callbacks, range(80)
    )
    assert result.embedding.shape == (80, 2)
    assert result.diagnostics.size == 0
    assert projection is None


def test_spe_is_seeded(dispatcher, valid_parameters, plane_callbacks):
    params = valid_parameters(M.STOCHASTIC_PROXIMITY_EMBEDDING)
    first, _ = dispatcher.embed(M.STOCHASTIC_PROXIMITY_EMBEDDING, params, plane_callbacks, range(80))
    second, _ = dispatcher.embed(M.STOCHASTIC_PROXIMITY_EMBEDDING, params, plane_callbacks, range(80))
    np.testing.assert_array_equal(first.embedding, second.embedding)
