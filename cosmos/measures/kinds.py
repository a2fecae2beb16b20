"""Measure kinds and their categories."""
from __future__ import annotations

from enum import Enum

from astropy import units as u

from cosmos.utils.cosmology import DISTANCE_UNIT, TIME_UNIT


class MeasureCategory(Enum):
    """Physical category of a measure; conversions never cross categories."""

    DISTANCE = "distance"
    TIME = "time"

    @property
    def base_unit(self) -> u.UnitBase:
        if self is MeasureCategory.DISTANCE:
            return DISTANCE_UNIT
        return TIME_UNIT


class MeasureKind(Enum):
    """Every redshift-equivalent distance or time measure."""

    LIGHT_TRAVEL = ("light_travel", MeasureCategory.DISTANCE)
    COMOVING = ("comoving", MeasureCategory.DISTANCE)
    LUMINOSITY = ("luminosity", MeasureCategory.DISTANCE)
    ANGULAR_DIAMETER = ("angular_diameter", MeasureCategory.DISTANCE)
    COMOVING_TRANSVERSE = ("comoving_transverse", MeasureCategory.DISTANCE)
    LOOKBACK = ("lookback", MeasureCategory.TIME)
    CONFORMAL = ("conformal", MeasureCategory.TIME)

    def __init__(self, label: str, category: MeasureCategory):
        self.label = label
        self.category = category

    @property
    def base_unit(self) -> u.UnitBase:
        return self.category.base_unit

    @classmethod
    def from_label(cls, label: str) -> "MeasureKind":
        for kind in cls:
            if kind.label == label:
                return kind
        raise ValueError(f"Unknown measure kind '{label}'")


DISTANCE_KINDS = tuple(kind for kind in MeasureKind if kind.category is MeasureCategory.DISTANCE)
TIME_KINDS = tuple(kind for kind in MeasureKind if kind.category is MeasureCategory.TIME)


__all__ = ["DISTANCE_KINDS", "MeasureCategory", "MeasureKind", "TIME_KINDS"]
