"""
Embedding routines.

Each routine takes an ``EmbeddingContext`` assembled by the dispatcher and
returns ``(EmbeddingResult, ProjectingImplementation or None)``. Routines
assume a validated configuration and never read a ParametersMap directly.
"""

from .locally_linear import (
    hessian_locally_linear_embedding,
    kernel_locally_linear_embedding,
    neighborhood_preserving_embedding,
)
from .tangent_space import (
    kernel_local_tangent_space_alignment,
    linear_local_tangent_space_alignment,
)
from .spectral import diffusion_map, laplacian_eigenmaps, locality_preserving_projections
from .scaling import (
    isomap,
    landmark_isomap,
    landmark_multidimensional_scaling,
    multidimensional_scaling,
)
from .proximity import stochastic_proximity_embedding
from .pca import kernel_pca, principal_component_analysis

__all__ = [
    # Local reconstruction
    "kernel_locally_linear_embedding",
    "neighborhood_preserving_embedding",
    "hessian_locally_linear_embedding",
    # Tangent space alignment
    "kernel_local_tangent_space_alignment",
    "linear_local_tangent_space_alignment",
    # Graph spectral
    "laplacian_eigenmaps",
    "locality_preserving_projections",
    "diffusion_map",
    # Scaling
    "multidimensional_scaling",
    "landmark_multidimensional_scaling",
    "isomap",
    "landmark_isomap",
    # Other
    "stochastic_proximity_embedding",
    "kernel_pca",
    "principal_component_analysis",
]
