"""Conversions between redshift, distances and times in FLRW cosmologies."""

from .measures import (
    DistanceAngularDiameter,
    DistanceComoving,
    DistanceComovingTransverse,
    DistanceLightTravel,
    DistanceLuminosity,
    DistanceMeasure,
    MeasureKind,
    Redshift,
    ScaleFactor,
    TimeConformal,
    TimeLookback,
    TimeMeasure,
)
from .models import CosmologicalModel, CosmologyPlanck, cosmology_planck
from .utils import (
    CosmosConfig,
    CosmosError,
    DimensionMismatchError,
    DomainError,
    InvalidParameterError,
    ModelMismatchError,
    StructuredLogger,
    UnsupportedOperationError,
)

__version__ = "0.1.0"

__all__ = [
    "CosmologicalModel",
    "CosmologyPlanck",
    "CosmosConfig",
    "CosmosError",
    "DimensionMismatchError",
    "DistanceAngularDiameter",
    "DistanceComoving",
    "DistanceComovingTransverse",
    "DistanceLightTravel",
    "DistanceLuminosity",
    "DistanceMeasure",
    "DomainError",
    "InvalidParameterError",
    "MeasureKind",
    "ModelMismatchError",
    "Redshift",
    "ScaleFactor",
    "StructuredLogger",
    "TimeConformal",
    "TimeLookback",
    "TimeMeasure",
    "UnsupportedOperationError",
    "cosmology_planck",
]
