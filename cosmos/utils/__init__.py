"""Utility exports for constants, configuration, validation and logging."""
from .config import CosmosConfig, SamplingConfig
from .cosmology import (
    COSMO_CONSTANTS_VERSION,
    DISTANCE_UNIT,
    N_EFF,
    PLANCK_H,
    PLANCK_OMEGA_M,
    SPEED_OF_LIGHT,
    TIME_UNIT,
    T_CMB,
    omega_radiation_fraction,
)
from .logging_config import StructuredLogger
from .validation import (
    ConfigValidationError,
    CosmosError,
    DimensionMismatchError,
    DomainError,
    InvalidParameterError,
    ModelMismatchError,
    UnsupportedOperationError,
)

__all__ = [
    'COSMO_CONSTANTS_VERSION',
    'ConfigValidationError',
    'CosmosConfig',
    'CosmosError',
    'DISTANCE_UNIT',
    'DimensionMismatchError',
    'DomainError',
    'InvalidParameterError',
    'ModelMismatchError',
    'N_EFF',
    'PLANCK_H',
    'PLANCK_OMEGA_M',
    'SPEED_OF_LIGHT',
    'SamplingConfig',
    'StructuredLogger',
    'TIME_UNIT',
    'T_CMB',
    'UnsupportedOperationError',
    'omega_radiation_fraction',
]
