"""Redshift and scale-factor value objects.

``Redshift`` is the hub of every conversion: distances and times are turned
into a redshift through the owning model's inverse index, and back into any
other measure through the forward functions.
"""
from __future__ import annotations

from functools import total_ordering

import numpy as np
from astropy import units as u

from cosmos.utils.validation import DimensionMismatchError, DomainError, float_dtype


def _scalar(value, dtype, name):
    if isinstance(value, u.Quantity):
        try:
            value = value.to_value(u.dimensionless_unscaled)
        except u.UnitConversionError as exc:
            raise DimensionMismatchError(f"{name} must be dimensionless, got unit '{value.unit}'") from exc
    if np.ndim(value) != 0:
        raise TypeError(f"Expected a scalar value, got an array of shape {np.shape(value)}")
    array = np.asarray(value)
    if array.dtype.kind not in "fiu":
        raise TypeError(f"Expected a real number, got {value!r}")
    dtype = float_dtype(value) if dtype is None else np.dtype(dtype)
    return dtype.type(array)


@total_ordering
class Redshift:
    """Immutable redshift ``z > -1``.

    Accepts a real number, another ``Redshift``, a :class:`ScaleFactor`, or any
    distance/time measure (which is inverted through its model).
    """

    __slots__ = ("_value",)

    def __init__(self, value, dtype=None):
        if isinstance(value, Redshift):
            z = value.value
        elif isinstance(value, ScaleFactor):
            a = value.value
            z = a.dtype.type(1.0) / a - a.dtype.type(1.0)
        elif hasattr(value, "to_redshift"):
            z = value.to_redshift().value
        else:
            z = value
        z = _scalar(z, dtype, "Redshift")
        if np.isnan(z) or z <= -1.0:
            raise DomainError(f"Redshift cannot be less than or equal to -1, got {z}.")
        object.__setattr__(self, "_value", z)

    def __setattr__(self, name, value):
        raise AttributeError("Redshift is immutable")

    @property
    def value(self):
        return self._value

    @property
    def dtype(self) -> np.dtype:
        return self._value.dtype

    @classmethod
    def from_measure(cls, measure) -> "Redshift":
        """Redshift at which ``measure`` (counted from today) is reached in its model."""
        return measure.to_redshift()

    def astype(self, dtype) -> "Redshift":
        return Redshift(self._value, dtype=dtype)

    def to_scale_factor(self) -> "ScaleFactor":
        return ScaleFactor(self)

    def __float__(self):
        return float(self._value)

    def __eq__(self, other):
        if not isinstance(other, Redshift):
            return NotImplemented
        return bool(self._value == other._value)

    def __lt__(self, other):
        if not isinstance(other, Redshift):
            return NotImplemented
        return bool(self._value < other._value)

    def __hash__(self):
        return hash(("Redshift", float(self._value)))

    def __repr__(self):
        return f"Redshift({float(self._value)!r})"

    def __reduce__(self):
        return (Redshift, (self._value,))


@total_ordering
class ScaleFactor:
    """Immutable scale factor ``a = 1 / (1 + z) > 0``."""

    __slots__ = ("_value",)

    def __init__(self, value, dtype=None):
        if isinstance(value, ScaleFactor):
            a = value.value
        elif isinstance(value, Redshift):
            z = value.value
            a = z.dtype.type(1.0) / (z.dtype.type(1.0) + z)
        elif hasattr(value, "to_redshift"):
            a = ScaleFactor(value.to_redshift()).value
        else:
            a = value
        a = _scalar(a, dtype, "Scale factor")
        if np.isnan(a) or a <= 0.0:
            raise DomainError(f"Scale factor cannot be negative or zero, got {a}.")
        object.__setattr__(self, "_value", a)

    def __setattr__(self, name, value):
        raise AttributeError("ScaleFactor is immutable")

    @property
    def value(self):
        return self._value

    @property
    def dtype(self) -> np.dtype:
        return self._value.dtype

    def astype(self, dtype) -> "ScaleFactor":
        return ScaleFactor(self._value, dtype=dtype)

    def to_redshift(self) -> Redshift:
        return Redshift(self)

    def __float__(self):
        return float(self._value)

    def __eq__(self, other):
        if not isinstance(other, ScaleFactor):
            return NotImplemented
        return bool(self._value == other._value)

    def __lt__(self, other):
        if not isinstance(other, ScaleFactor):
            return NotImplemented
        return bool(self._value < other._value)

    def __hash__(self):
        return hash(("ScaleFactor", float(self._value)))

    def __repr__(self):
        return f"ScaleFactor({float(self._value)!r})"

    def __reduce__(self):
        return (ScaleFactor, (self._value,))


__all__ = ["Redshift", "ScaleFactor"]
