"""Cosmological models and the machinery that tabulates their inverses."""
from .cosmology import (
    CosmologicalModel,
    CosmologyParameters,
    CosmologyPlanck,
    DarkEnergy,
    Geometry,
    cosmology_planck,
)
from .inverse import InverseIndex, MonotoneBranch
from .sampler import normalize_redshift_samples, prepare_redshift_samples

__all__ = [
    'CosmologicalModel',
    'CosmologyParameters',
    'CosmologyPlanck',
    'DarkEnergy',
    'Geometry',
    'InverseIndex',
    'MonotoneBranch',
    'cosmology_planck',
    'normalize_redshift_samples',
    'prepare_redshift_samples',
]
