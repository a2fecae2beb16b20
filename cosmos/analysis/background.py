"""Background (homogeneous) quantities of a cosmological model."""
from __future__ import annotations

import numpy as np
from astropy import units as u

from cosmos.measures.forward import redshift_values
from cosmos.utils.cosmology import DISTANCE_UNIT, HUBBLE_UNIT, TIME_UNIT

VOLUME_UNIT = DISTANCE_UNIT ** 3
VOLUME_ELEMENT_UNIT = DISTANCE_UNIT ** 3 / u.sr


def _as_dtype(quantity, unit, dtype):
    return u.Quantity(np.asarray(quantity.to_value(unit), dtype=dtype), unit, dtype=dtype)


def _redshifts(model, z):
    values, dtype = redshift_values(z)
    return values, np.result_type(model.dtype, dtype)


def hubble_constant(model) -> u.Quantity:
    """H0 in km/s/Mpc."""
    return _as_dtype(model.engine.H0, HUBBLE_UNIT, model.dtype)


def dimensionless_hubble_parameter(model, z):
    """E(z) = H(z) / H0, normalised so that E(0) is exactly one."""
    values, dtype = _redshifts(model, z)
    engine = model.engine
    ratio = np.asarray(engine.efunc(values), dtype=np.float64) / float(engine.efunc(0.0))
    ratio = np.where(values == 0, 1.0, ratio)
    return ratio.astype(dtype)[()]


def hubble_parameter(model, z) -> u.Quantity:
    """H(z) in km/s/Mpc."""
    values, dtype = _redshifts(model, z)
    h0 = float(model.engine.H0.to_value(HUBBLE_UNIT))
    efunc = dimensionless_hubble_parameter(model, values).astype(np.float64)
    return u.Quantity(np.asarray(h0 * efunc, dtype=dtype), HUBBLE_UNIT, dtype=dtype)


def hubble_distance(model) -> u.Quantity:
    """c / H0 in Mpc."""
    return _as_dtype(model.engine.hubble_distance, DISTANCE_UNIT, model.dtype)


def hubble_time(model) -> u.Quantity:
    """1 / H0 in Gyr."""
    return _as_dtype(model.engine.hubble_time, TIME_UNIT, model.dtype)


def age_of_universe(model, z=0.0) -> u.Quantity:
    """Age of the universe at redshift ``z`` (today by default), in Gyr."""
    values, dtype = _redshifts(model, z)
    return _as_dtype(model.engine.age(values), TIME_UNIT, dtype)


def scale_factor(z):
    """``a = 1 / (1 + z)`` at the precision of ``z``."""
    values, dtype = redshift_values(z)
    return (1.0 / (1.0 + values.astype(np.float64))).astype(dtype)[()]


def comoving_volume(model, z) -> u.Quantity:
    """Comoving volume of the sphere out to redshift ``z``, in Mpc³."""
    values, dtype = _redshifts(model, z)
    return _as_dtype(model.engine.comoving_volume(values), VOLUME_UNIT, dtype)


def comoving_volume_element(model, z) -> u.Quantity:
    """Differential comoving volume ``dV / dz dΩ`` at redshift ``z``, in Mpc³/sr."""
    values, dtype = _redshifts(model, z)
    return _as_dtype(model.engine.differential_comoving_volume(values), VOLUME_ELEMENT_UNIT, dtype)


__all__ = [
    "age_of_universe",
    "comoving_volume",
    "comoving_volume_element",
    "dimensionless_hubble_parameter",
    "hubble_constant",
    "hubble_distance",
    "hubble_parameter",
    "hubble_time",
    "scale_factor",
]
