"""Forward (redshift → measure) and inverse (measure → redshift) functions.

The forward functions are thin, stateless wrappers around the model's astropy
cosmology engine, which evaluates the line-of-sight integrals. The inverse
functions query the monotone interpolants each model builds at construction.

All forward functions share the signature ``f(model, z, z0=None)``: with one
redshift they measure from today (``z0 = 0``); with two they measure between
the near redshift ``z0`` and the far redshift ``z``. Redshifts may be given as
numbers, arrays, :class:`~cosmos.measures.redshift.Redshift` or
:class:`~cosmos.measures.redshift.ScaleFactor`. Distances are returned in Mpc,
times in Gyr, at the wider of the model's and the input's precision.

For more information see "Distance measures in cosmology", D. Hogg,
arXiv:astro-ph/9905116.
"""
from __future__ import annotations

import numpy as np
from astropy import units as u

from cosmos.utils.cosmology import DISTANCE_UNIT, SPEED_OF_LIGHT, TIME_UNIT
from cosmos.utils.validation import DomainError, DimensionMismatchError, float_dtype, require_redshift, strip_units

from .kinds import MeasureKind
from .redshift import Redshift, ScaleFactor


def redshift_values(z):
    """Return ``(array, dtype)`` for a redshift-like input, validating ``z > -1``."""
    if isinstance(z, ScaleFactor):
        z = Redshift(z)
    if isinstance(z, Redshift):
        return np.asarray(z.value), z.dtype
    if isinstance(z, u.Quantity):
        try:
            z = z.to_value(u.dimensionless_unscaled)
        except u.UnitConversionError as exc:
            raise DimensionMismatchError(f"Redshift must be dimensionless, got unit '{z.unit}'") from exc
    array = require_redshift(z)
    return array.astype(float_dtype(array)), float_dtype(array)


def _prepare(model, z, z0):
    z_values, dtype = redshift_values(z)
    if z0 is None:
        return z_values, None, np.result_type(model.dtype, dtype)
    z0_values, dtype0 = redshift_values(z0)
    return z_values, z0_values, np.result_type(model.dtype, dtype, dtype0)


def _require_ordered(z_values, z0_values):
    if np.any(z0_values > z_values):
        raise DomainError("The near redshift z0 must not exceed the far redshift z.")


def _finish(quantity, unit, dtype):
    magnitude = quantity.to_value(unit)
    return u.Quantity(np.asarray(magnitude, dtype=dtype), unit, dtype=dtype)


def _transverse_between(engine, z_values, z0_values):
    """Comoving transverse distance between two redshifts, D_M(z0, z)."""
    _require_ordered(z_values, z0_values)
    return engine.angular_diameter_distance_z1z2(z0_values, z_values) * (1.0 + z_values)


def comoving_distance(model, z, z0=None):
    """Line-of-sight comoving distance, ``d_c = R_H ∫ dz / E(z)``."""
    z_values, z0_values, dtype = _prepare(model, z, z0)
    distance = model.engine.comoving_distance(z_values)
    if z0_values is not None:
        distance = distance - model.engine.comoving_distance(z0_values)
    return _finish(distance, DISTANCE_UNIT, dtype)


def comoving_transverse_distance(model, z, z0=None):
    """Transverse comoving distance: equal to the comoving distance when ``Ωk = 0``."""
    z_values, z0_values, dtype = _prepare(model, z, z0)
    if z0_values is None:
        distance = model.engine.comoving_transverse_distance(z_values)
    else:
        distance = _transverse_between(model.engine, z_values, z0_values)
    return _finish(distance, DISTANCE_UNIT, dtype)


def angular_diameter_distance(model, z, z0=None):
    """Ratio of an object's transverse size to its angular size, ``d_a = d_m / (1 + z)``."""
    z_values, z0_values, dtype = _prepare(model, z, z0)
    if z0_values is None:
        distance = model.engine.comoving_transverse_distance(z_values) / (1.0 + z_values)
    else:
        _require_ordered(z_values, z0_values)
        distance = model.engine.angular_diameter_distance_z1z2(z0_values, z_values)
    return _finish(distance, DISTANCE_UNIT, dtype)


def luminosity_distance(model, z, z0=None):
    """Luminosity distance, ``d_L = sqrt(L / 4πΦ)``.

    Between two redshifts this is the luminosity distance measured by an
    observer at ``z0``: ``(1 + z) / (1 + z0)**2 * D_M(z0, z)``. Luminosity
    distances do not subtract.
    """
    z_values, z0_values, dtype = _prepare(model, z, z0)
    if z0_values is None:
        distance = model.engine.luminosity_distance(z_values)
    else:
        transverse = _transverse_between(model.engine, z_values, z0_values)
        distance = transverse * (1.0 + z_values) / (1.0 + z0_values) ** 2
    return _finish(distance, DISTANCE_UNIT, dtype)


def lookback_time(model, z, z0=None):
    """Difference between the age of the universe at ``z0`` and at ``z``."""
    z_values, z0_values, dtype = _prepare(model, z, z0)
    time = model.engine.lookback_time(z_values)
    if z0_values is not None:
        time = time - model.engine.lookback_time(z0_values)
    return _finish(time, TIME_UNIT, dtype)


def light_travel_distance(model, z, z0=None):
    """Distance light covers during the lookback time, ``d = c t_L``."""
    z_values, z0_values, dtype = _prepare(model, z, z0)
    time = model.engine.lookback_time(z_values)
    if z0_values is not None:
        time = time - model.engine.lookback_time(z0_values)
    return _finish(time * SPEED_OF_LIGHT, DISTANCE_UNIT, dtype)


def conformal_time(model, z, z0=None):
    """Time in the frame of the Hubble flow, ``t_c = ∫ dt / a = d_c / c``."""
    z_values, z0_values, dtype = _prepare(model, z, z0)
    distance = model.engine.comoving_distance(z_values)
    if z0_values is not None:
        distance = distance - model.engine.comoving_distance(z0_values)
    return _finish(distance / SPEED_OF_LIGHT, TIME_UNIT, dtype)


FORWARD_MEASURES = {
    MeasureKind.LIGHT_TRAVEL: light_travel_distance,
    MeasureKind.COMOVING: comoving_distance,
    MeasureKind.LUMINOSITY: luminosity_distance,
    MeasureKind.ANGULAR_DIAMETER: angular_diameter_distance,
    MeasureKind.COMOVING_TRANSVERSE: comoving_transverse_distance,
    MeasureKind.LOOKBACK: lookback_time,
    MeasureKind.CONFORMAL: conformal_time,
}


def forward(model, kind: MeasureKind, z, z0=None):
    """Evaluate the forward measure ``kind`` at ``z`` (optionally relative to ``z0``)."""
    return FORWARD_MEASURES[kind](model, z, z0)


def invert(model, kind: MeasureKind, value):
    """Redshift at which measure ``kind`` (counted from today) equals ``value``.

    ``value`` may be a dimensioned quantity of the right physical type or a bare
    number in the base unit (Mpc for distances, Gyr for times). Values outside
    the sampled grid are extrapolated with reduced accuracy.
    """
    magnitude = strip_units(value, kind.base_unit, description=f"{kind.label} {kind.category.value}")
    dtype = np.result_type(model.dtype, magnitude.dtype)
    redshift = model.inverse(kind)(magnitude)
    return np.asarray(redshift, dtype=dtype)[()]


def redshift_from_light_travel_distance(model, distance):
    return invert(model, MeasureKind.LIGHT_TRAVEL, distance)


def redshift_from_comoving_distance(model, distance):
    return invert(model, MeasureKind.COMOVING, distance)


def redshift_from_luminosity_distance(model, distance):
    return invert(model, MeasureKind.LUMINOSITY, distance)


def redshift_from_angular_diameter_distance(model, distance):
    """Redshift on the near side of the angular-diameter turnover.

    Angular-diameter distance is not monotone in redshift; use
    ``model.inverse(MeasureKind.ANGULAR_DIAMETER).roots(value)`` for every candidate.
    """
    return invert(model, MeasureKind.ANGULAR_DIAMETER, distance)


def redshift_from_comoving_transverse_distance(model, distance):
    return invert(model, MeasureKind.COMOVING_TRANSVERSE, distance)


def redshift_from_lookback_time(model, time):
    return invert(model, MeasureKind.LOOKBACK, time)


def redshift_from_conformal_time(model, time):
    return invert(model, MeasureKind.CONFORMAL, time)


__all__ = [
    "FORWARD_MEASURES",
    "angular_diameter_distance",
    "comoving_distance",
    "comoving_transverse_distance",
    "conformal_time",
    "forward",
    "invert",
    "light_travel_distance",
    "lookback_time",
    "luminosity_distance",
    "redshift_from_angular_diameter_distance",
    "redshift_from_comoving_distance",
    "redshift_from_comoving_transverse_distance",
    "redshift_from_conformal_time",
    "redshift_from_light_travel_distance",
    "redshift_from_lookback_time",
    "redshift_from_luminosity_distance",
    "redshift_values",
]
