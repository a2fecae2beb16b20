"""Redshift, scale factor and the distance/time measures derived from them."""
from .distance_time import (
    DistanceAngularDiameter,
    DistanceComoving,
    DistanceComovingTransverse,
    DistanceLightTravel,
    DistanceLuminosity,
    DistanceMeasure,
    Measure,
    TimeConformal,
    TimeLookback,
    TimeMeasure,
    measure_class,
)
from .forward import (
    angular_diameter_distance,
    comoving_distance,
    comoving_transverse_distance,
    conformal_time,
    light_travel_distance,
    lookback_time,
    luminosity_distance,
    redshift_from_angular_diameter_distance,
    redshift_from_comoving_distance,
    redshift_from_comoving_transverse_distance,
    redshift_from_conformal_time,
    redshift_from_light_travel_distance,
    redshift_from_lookback_time,
    redshift_from_luminosity_distance,
)
from .kinds import MeasureCategory, MeasureKind
from .redshift import Redshift, ScaleFactor

__all__ = [
    'DistanceAngularDiameter',
    'DistanceComoving',
    'DistanceComovingTransverse',
    'DistanceLightTravel',
    'DistanceLuminosity',
    'DistanceMeasure',
    'Measure',
    'MeasureCategory',
    'MeasureKind',
    'Redshift',
    'ScaleFactor',
    'TimeConformal',
    'TimeLookback',
    'TimeMeasure',
    'angular_diameter_distance',
    'comoving_distance',
    'comoving_transverse_distance',
    'conformal_time',
    'light_travel_distance',
    'lookback_time',
    'luminosity_distance',
    'measure_class',
    'redshift_from_angular_diameter_distance',
    'redshift_from_comoving_distance',
    'redshift_from_comoving_transverse_distance',
    'redshift_from_conformal_time',
    'redshift_from_light_travel_distance',
    'redshift_from_lookback_time',
    'redshift_from_luminosity_distance',
]
