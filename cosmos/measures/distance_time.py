"""Dimensioned distance and time measures tied to a cosmological model.

Every measure is convertible to a :class:`~cosmos.measures.redshift.Redshift`
through its model, and from there to any other measure of the same category.
Distances and times never convert into each other implicitly; the light-speed
relation between lookback time and light-travel distance is exposed through
explicit constructors.
"""
from __future__ import annotations

from typing import Dict, Optional, Type

import numpy as np
from astropy import units as u

from cosmos.utils.cosmology import SPEED_OF_LIGHT
from cosmos.utils.validation import (
    DomainError,
    ModelMismatchError,
    UnsupportedOperationError,
    float_dtype,
    strip_units,
)

from .forward import forward, invert
from .kinds import MeasureCategory, MeasureKind
from .redshift import Redshift, ScaleFactor


class Measure:
    """Scalar distance or time measure of a given :class:`MeasureKind`.

    Parameters
    ----------
    model : CosmologicalModel
        Model the measure lives in. Only measures of compatible models can be
        compared or combined.
    value : astropy.units.Quantity or float
        A dimensioned value, or a bare number interpreted in the base unit of
        the kind (Mpc or Gyr).
    kind : MeasureKind, optional
        Required for the generic classes; fixed by the named subclasses.
    """

    __slots__ = ("_model", "_value", "_kind")

    _fixed_kind: Optional[MeasureKind] = None
    _category: Optional[MeasureCategory] = None

    def __init__(self, model, value, kind: Optional[MeasureKind] = None):
        kind = type(self)._resolve_kind(kind)
        if not hasattr(model, "is_compatible") or not hasattr(model, "inverse"):
            raise TypeError(f"Expected a cosmological model, got {type(model).__name__}")
        magnitude = strip_units(value, kind.base_unit, description=f"{kind.label} {kind.category.value}")
        if np.ndim(magnitude) != 0:
            raise TypeError(f"{type(self).__name__} holds a scalar, got an array of shape {np.shape(magnitude)}")
        if not np.isfinite(magnitude):
            raise DomainError(f"{type(self).__name__} must be finite, got {magnitude}")
        dtype = np.result_type(model.dtype, magnitude.dtype)
        object.__setattr__(self, "_model", model)
        object.__setattr__(self, "_kind", kind)
        object.__setattr__(self, "_value", u.Quantity(magnitude.astype(dtype), kind.base_unit, dtype=dtype))

    @classmethod
    def _resolve_kind(cls, kind: Optional[MeasureKind]) -> MeasureKind:
        fixed = cls._fixed_kind
        if fixed is not None:
            if kind is not None and kind is not fixed:
                raise ValueError(f"{cls.__name__} measures {fixed.label}, not {kind.label}")
            return fixed
        if kind is None:
            raise TypeError(f"{cls.__name__} requires an explicit measure kind")
        if isinstance(kind, str):
            kind = MeasureKind.from_label(kind)
        category = cls._category
        if category is not None and kind.category is not category:
            raise UnsupportedOperationError(
                f"{cls.__name__} cannot hold a {kind.category.value} measure ({kind.label})"
            )
        return kind

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (type(self), (self._model, self._value, self._kind))

    # Constructors ---------------------------------------------------------
    @classmethod
    def from_redshift(cls, model, z, z0=None, kind: Optional[MeasureKind] = None):
        """Measure at redshift ``z``, from today or from the near redshift ``z0``."""
        kind = cls._resolve_kind(kind)
        return cls(model, forward(model, kind, z, z0), kind)

    @classmethod
    def from_scale_factor(cls, model, a, a0=None, kind: Optional[MeasureKind] = None):
        a = a if isinstance(a, ScaleFactor) else ScaleFactor(a)
        if a0 is not None and not isinstance(a0, ScaleFactor):
            a0 = ScaleFactor(a0)
        return cls.from_redshift(model, a, a0, kind=kind)

    @classmethod
    def convert(cls, measure: "Measure", kind: Optional[MeasureKind] = None):
        """Express ``measure`` as this measure kind in the same model, via its redshift."""
        if not isinstance(measure, Measure):
            raise TypeError(f"Expected a measure, got {type(measure).__name__}")
        kind = cls._resolve_kind(kind)
        if kind.category is not measure.kind.category:
            raise UnsupportedOperationError(
                f"Cannot convert a {measure.kind.category.value} ({measure.kind.label}) "
                f"into a {kind.category.value} ({kind.label})"
            )
        if kind is measure.kind:
            return cls(measure.model, measure.value, kind)
        return cls.from_redshift(measure.model, measure.to_redshift(), kind=kind)

    # Accessors ------------------------------------------------------------
    @property
    def model(self):
        return self._model

    @property
    def kind(self) -> MeasureKind:
        return self._kind

    @property
    def category(self) -> MeasureCategory:
        return self._kind.category

    @property
    def value(self) -> u.Quantity:
        return self._value

    @property
    def magnitude(self):
        """Bare value in the base unit (Mpc or Gyr)."""
        return self._value.value[()]

    @property
    def unit(self) -> u.UnitBase:
        return self._value.unit

    @property
    def dtype(self) -> np.dtype:
        return self._value.dtype

    # Conversions ----------------------------------------------------------
    def to_redshift(self) -> Redshift:
        return Redshift(invert(self._model, self._kind, self._value), dtype=self.dtype)

    def to_scale_factor(self) -> ScaleFactor:
        return ScaleFactor(self.to_redshift())

    def to(self, target: Type["Measure"], kind: Optional[MeasureKind] = None) -> "Measure":
        return target.convert(self, kind=kind)

    def astype(self, dtype) -> "Measure":
        model = self._model.astype(dtype)
        return type(self)(model, self._value.value.astype(dtype), self._kind)

    def __float__(self):
        return float(self._value.value)

    # Comparison and arithmetic --------------------------------------------
    def _require_combinable(self, other: "Measure", operation: str):
        if other._kind is not self._kind:
            raise TypeError(
                f"Cannot {operation} measures of different kinds: {self._kind.label} and {other._kind.label}"
            )
        if not self._model.is_compatible(other._model):
            raise ModelMismatchError(
                f"Cannot {operation} {self._kind.label} measures from incompatible models"
            )

    def _with_value(self, quantity: u.Quantity, other_model=None) -> "Measure":
        dtype = quantity.dtype
        model = self._model
        if other_model is not None and other_model.dtype == dtype:
            model = other_model
        return type(self)(model.astype(dtype), quantity, self._kind)

    def __eq__(self, other):
        if not isinstance(other, Measure) or other._kind is not self._kind:
            return NotImplemented
        self._require_combinable(other, "compare")
        return bool(self._value == other._value)

    def __lt__(self, other):
        if not isinstance(other, Measure):
            return NotImplemented
        self._require_combinable(other, "compare")
        return bool(self._value < other._value)

    def __le__(self, other):
        if not isinstance(other, Measure):
            return NotImplemented
        self._require_combinable(other, "compare")
        return bool(self._value <= other._value)

    def __gt__(self, other):
        if not isinstance(other, Measure):
            return NotImplemented
        self._require_combinable(other, "compare")
        return bool(self._value > other._value)

    def __ge__(self, other):
        if not isinstance(other, Measure):
            return NotImplemented
        self._require_combinable(other, "compare")
        return bool(self._value >= other._value)

    def __hash__(self):
        return hash((self._kind, float(self._value.value), self._model.parameters))

    def __add__(self, other):
        if not isinstance(other, Measure):
            return NotImplemented
        self._require_combinable(other, "add")
        return self._with_value(self._value + other._value, other._model)

    def __sub__(self, other):
        if not isinstance(other, Measure):
            return NotImplemented
        self._require_combinable(other, "subtract")
        return self._with_value(self._value - other._value, other._model)

    def __neg__(self):
        return self._with_value(-self._value)

    def __abs__(self):
        return self._with_value(abs(self._value))

    def __mul__(self, factor):
        if isinstance(factor, (Measure, u.Quantity)):
            return NotImplemented
        factor = _scalar_factor(factor)
        dtype = np.result_type(self.dtype, factor.dtype)
        return self._with_value((self._value * factor).astype(dtype))

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, Measure):
            self._require_combinable(other, "divide")
            return (self._value / other._value).to_value(u.dimensionless_unscaled)[()]
        if isinstance(other, u.Quantity):
            return NotImplemented
        factor = _scalar_factor(other)
        dtype = np.result_type(self.dtype, factor.dtype)
        return self._with_value((self._value / factor).astype(dtype))

    def __repr__(self):
        return f"{type(self).__name__}({float(self)!r} {self.unit}, kind={self._kind.label})"


def _scalar_factor(value):
    array = np.asarray(value)
    if array.dtype.kind not in "fiu" or array.ndim != 0:
        raise TypeError(f"Measures can only be scaled by real scalars, got {value!r}")
    return array.astype(float_dtype(value))


class DistanceMeasure(Measure):
    __slots__ = ()
    _category = MeasureCategory.DISTANCE


class TimeMeasure(Measure):
    __slots__ = ()
    _category = MeasureCategory.TIME


class DistanceLightTravel(DistanceMeasure):
    """Distance light travels during the lookback time."""

    __slots__ = ()
    _fixed_kind = MeasureKind.LIGHT_TRAVEL

    @classmethod
    def from_lookback_time(cls, time: "TimeLookback") -> "DistanceLightTravel":
        """``d = c t``: the one sanctioned route from a time to a distance."""
        if not isinstance(time, Measure) or time.kind is not MeasureKind.LOOKBACK:
            raise UnsupportedOperationError("Light-travel distance can only be derived from a lookback time")
        return cls(time.model, (time.value * SPEED_OF_LIGHT).to(cls._fixed_kind.base_unit))


class DistanceComoving(DistanceMeasure):
    __slots__ = ()
    _fixed_kind = MeasureKind.COMOVING


class DistanceLuminosity(DistanceMeasure):
    __slots__ = ()
    _fixed_kind = MeasureKind.LUMINOSITY


class DistanceAngularDiameter(DistanceMeasure):
    """Angular-diameter distance; its redshift is taken on the near side of the turnover."""

    __slots__ = ()
    _fixed_kind = MeasureKind.ANGULAR_DIAMETER


class DistanceComovingTransverse(DistanceMeasure):
    __slots__ = ()
    _fixed_kind = MeasureKind.COMOVING_TRANSVERSE


class TimeLookback(TimeMeasure):
    __slots__ = ()
    _fixed_kind = MeasureKind.LOOKBACK

    @classmethod
    def from_light_travel_distance(cls, distance: DistanceLightTravel) -> "TimeLookback":
        """``t = d / c``."""
        if not isinstance(distance, Measure) or distance.kind is not MeasureKind.LIGHT_TRAVEL:
            raise UnsupportedOperationError("Lookback time can only be derived from a light-travel distance")
        return cls(distance.model, (distance.value / SPEED_OF_LIGHT).to(cls._fixed_kind.base_unit))


class TimeConformal(TimeMeasure):
    __slots__ = ()
    _fixed_kind = MeasureKind.CONFORMAL


MEASURE_CLASSES: Dict[MeasureKind, Type[Measure]] = {
    cls._fixed_kind: cls
    for cls in (
        DistanceLightTravel,
        DistanceComoving,
        DistanceLuminosity,
        DistanceAngularDiameter,
        DistanceComovingTransverse,
        TimeLookback,
        TimeConformal,
    )
}


def measure_class(kind: MeasureKind) -> Type[Measure]:
    """Named measure class for ``kind``."""
    return MEASURE_CLASSES[kind]


__all__ = [
    "DistanceAngularDiameter",
    "DistanceComoving",
    "DistanceComovingTransverse",
    "DistanceLightTravel",
    "DistanceLuminosity",
    "DistanceMeasure",
    "MEASURE_CLASSES",
    "Measure",
    "TimeConformal",
    "TimeLookback",
    "TimeMeasure",
    "measure_class",
]
