"""Energy densities of the components of a cosmological model.

Densities are physical mass densities (kg/m³) at redshift ``z``: each
component's density parameter at ``z`` times the critical density at ``z``.
At ``z = 0`` this reduces to ``Ω0 ρc0``.
"""
from __future__ import annotations

import numpy as np
from astropy import units as u

from cosmos.measures.forward import redshift_values
from cosmos.utils.cosmology import (
    DENSITY_UNIT,
    GRAVITATIONAL_CONSTANT,
    N_EFF,
    OMEGA_RADIATION_NEUTRINO_FACTOR,
    RADIATION_DENSITY_CONSTANT,
    T_CMB,
)
from cosmos.utils.validation import UnsupportedOperationError, require_non_negative

from .background import hubble_parameter


def _density(quantity, dtype):
    return u.Quantity(np.asarray(quantity.to_value(DENSITY_UNIT), dtype=dtype), DENSITY_UNIT, dtype=dtype)


def _critical(model, z):
    values, dtype = redshift_values(z)
    dtype = np.result_type(model.dtype, dtype)
    hubble = hubble_parameter(model, values.astype(np.float64))
    return values, dtype, 3.0 * hubble ** 2 / (8.0 * np.pi * GRAVITATIONAL_CONSTANT)


def compute_critical_density(model, z=0.0) -> u.Quantity:
    """Critical density ``ρc = 3 H(z)² / 8πG``."""
    _, dtype, rho_c = _critical(model, z)
    return _density(rho_c, dtype)


def compute_matter_density(model, z=0.0) -> u.Quantity:
    values, dtype, rho_c = _critical(model, z)
    return _density(model.engine.Om(values) * rho_c, dtype)


def compute_radiation_density(model, z=0.0) -> u.Quantity:
    """Photons plus relativistic neutrinos."""
    values, dtype, rho_c = _critical(model, z)
    engine = model.engine
    return _density((engine.Ogamma(values) + engine.Onu(values)) * rho_c, dtype)


def compute_curvature_density(model, z=0.0) -> u.Quantity:
    """Equivalent density of the curvature term; negative for closed geometries."""
    values, dtype, rho_c = _critical(model, z)
    return _density(model.engine.Ok(values) * rho_c, dtype)


def compute_dark_energy_density(model, z=0.0) -> u.Quantity:
    values, dtype, rho_c = _critical(model, z)
    return _density(model.engine.Ode(values) * rho_c, dtype)


def compute_baryon_density(model, z=0.0) -> u.Quantity:
    """Baryon density, available only when the model was given ``omega_b``.

    Raises
    ------
    UnsupportedOperationError
        If the baryon fraction was not provided to the model.
    """
    if model.parameters.omega_b < 0:
        raise UnsupportedOperationError(
            "Cannot compute the baryon density because the baryon fraction was not provided to the model."
        )
    values, dtype = redshift_values(z)
    dtype = np.result_type(model.dtype, dtype)
    rho_c0 = compute_critical_density(model).astype(np.float64)
    return _density(model.parameters.omega_b * (1.0 + values) ** 3 * rho_c0, dtype)


def compute_photon_density(t_cmb=T_CMB) -> u.Quantity:
    """Mass density of a black-body photon gas, ``a T⁴ / c²``."""
    if isinstance(t_cmb, u.Quantity):
        t_cmb = t_cmb.to_value(u.K, equivalencies=u.temperature())
    t_cmb = require_non_negative(t_cmb, "t_cmb")
    return (RADIATION_DENSITY_CONSTANT * (t_cmb * u.K) ** 4).to(DENSITY_UNIT)


def compute_neutrino_density(n_eff=N_EFF, t_cmb=T_CMB) -> u.Quantity:
    """Mass density of ``n_eff`` massless neutrino species at photon temperature ``t_cmb``."""
    n_eff = require_non_negative(n_eff, "n_eff")
    return n_eff * OMEGA_RADIATION_NEUTRINO_FACTOR * compute_photon_density(t_cmb)


__all__ = [
    "compute_baryon_density",
    "compute_critical_density",
    "compute_curvature_density",
    "compute_dark_energy_density",
    "compute_matter_density",
    "compute_neutrino_density",
    "compute_photon_density",
    "compute_radiation_density",
]
