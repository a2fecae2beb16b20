"""Derived background quantities and component densities."""

from .background import (
    age_of_universe,
    comoving_volume,
    comoving_volume_element,
    dimensionless_hubble_parameter,
    hubble_constant,
    hubble_distance,
    hubble_parameter,
    hubble_time,
    scale_factor,
)
from .densities import (
    compute_baryon_density,
    compute_critical_density,
    compute_curvature_density,
    compute_dark_energy_density,
    compute_matter_density,
    compute_neutrino_density,
    compute_photon_density,
    compute_radiation_density,
)

__all__ = [
    "age_of_universe",
    "comoving_volume",
    "comoving_volume_element",
    "compute_baryon_density",
    "compute_critical_density",
    "compute_curvature_density",
    "compute_dark_energy_density",
    "compute_matter_density",
    "compute_neutrino_density",
    "compute_photon_density",
    "compute_radiation_density",
    "dimensionless_hubble_parameter",
    "hubble_constant",
    "hubble_distance",
    "hubble_parameter",
    "hubble_time",
    "scale_factor",
]
