"""
Closed enumerations shared by the configuration layer.

``ParameterKey`` names every configurable parameter; the three method
enumerations select the reduction algorithm, the neighbor search and the
eigensolver. Descriptors for each member live in ``embedkit.core.methods``.
"""

from enum import Enum


class ParameterKey(Enum):
    """Keys of a ``ParametersMap``. Expected types are in ``PARAMETER_TYPES``."""

    REDUCTION_METHOD = "reduction_method"
    NUMBER_OF_NEIGHBORS = "number_of_neighbors"
    TARGET_DIMENSION = "target_dimension"
    CURRENT_DIMENSION = "current_dimension"
    EIGEN_EMBEDDING_METHOD = "eigen_embedding_method"
    NEIGHBORS_METHOD = "neighbors_method"
    DIFFUSION_MAP_TIMESTEPS = "diffusion_map_timesteps"
    GAUSSIAN_KERNEL_WIDTH = "gaussian_kernel_width"
    MAX_ITERATION = "max_iteration"
    SPE_GLOBAL_STRATEGY = "spe_global_strategy"
    SPE_TOLERANCE = "spe_tolerance"
    SPE_NUM_UPDATES = "spe_num_updates"
    LANDMARK_RATIO = "landmark_ratio"
    EIGENSHIFT = "eigenshift"


class ReductionMethod(Enum):
    """Dimensionality reduction algorithms."""

    KERNEL_LOCALLY_LINEAR_EMBEDDING = "kernel_locally_linear_embedding"
    NEIGHBORHOOD_PRESERVING_EMBEDDING = "neighborhood_preserving_embedding"
    KERNEL_LOCAL_TANGENT_SPACE_ALIGNMENT = "kernel_local_tangent_space_alignment"
    LINEAR_LOCAL_TANGENT_SPACE_ALIGNMENT = "linear_local_tangent_space_alignment"
    HESSIAN_LOCALLY_LINEAR_EMBEDDING = "hessian_locally_linear_embedding"
    LAPLACIAN_EIGENMAPS = "laplacian_eigenmaps"
    LOCALITY_PRESERVING_PROJECTIONS = "locality_preserving_projections"
    DIFFUSION_MAP = "diffusion_map"
    ISOMAP = "isomap"
    LANDMARK_ISOMAP = "landmark_isomap"
    MULTIDIMENSIONAL_SCALING = "multidimensional_scaling"
    LANDMARK_MULTIDIMENSIONAL_SCALING = "landmark_multidimensional_scaling"
    STOCHASTIC_PROXIMITY_EMBEDDING = "stochastic_proximity_embedding"
    KERNEL_PCA = "kernel_pca"
    PCA = "pca"


class NeighborsMethod(Enum):
    """Nearest-neighbor search strategies."""

    # Exhaustive O(N^2) search, exact
    BRUTE_FORCE = "brute_force"
    # Metric tree over the distance callback
    COVER_TREE = "cover_tree"


class EigenEmbeddingMethod(Enum):
    """Eigensolvers used to extract the embedding."""

    # Implicitly restarted Lanczos; standard and generalized problems
    ARPACK = "arpack"
    # Randomized range finder; standard problems only
    RANDOMIZED = "randomized"
    # Full dense decomposition; slow for large problems
    EIGEN_DENSE_SELFADJOINT_SOLVER = "eigen_dense_selfadjoint_solver"
