"""Error taxonomy and validation helpers shared across the package."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import numpy as np
from astropy import units as u


class CosmosError(Exception):
    """Base class for every error raised by :mod:`cosmos`."""


class DomainError(CosmosError, ValueError):
    """Raised when a physically invalid value is supplied (``z <= -1``, ``a <= 0``...)."""


class InvalidParameterError(DomainError):
    """Raised when a cosmological model receives an invalid parameter."""


class DimensionMismatchError(CosmosError, ValueError):
    """Raised when a dimensioned quantity has the wrong physical dimension."""


class UnsupportedOperationError(CosmosError, RuntimeError):
    """Raised when a quantity or conversion is not available for a model."""


class ModelMismatchError(CosmosError, ValueError):
    """Raised when measures interpreted by different models are combined."""


class ConfigValidationError(CosmosError, RuntimeError):
    """Raised when configuration-provided resources are invalid."""


def resolve_path(path: str | Path, base_dir: Optional[str | Path] = None) -> Path:
    """Return the absolute :class:`~pathlib.Path` for ``path``.

    Parameters
    ----------
    path:
        Path (absolute or relative) to resolve.
    base_dir:
        Optional base directory that relative paths should be resolved against.
    """
    if path is None:
        raise ConfigValidationError("No path provided for resolution")
    raw = Path(path)
    if raw.expanduser().is_absolute():
        return raw.expanduser().resolve()
    base = Path(base_dir) if base_dir is not None else Path.cwd()
    return (base / raw).expanduser().resolve()


def require_existing_file(path: str | Path,
                          base_dir: Optional[str | Path] = None,
                          description: str | None = None) -> str:
    """Ensure that ``path`` points to an existing file and return it resolved.

    Raises
    ------
    ConfigValidationError
        If ``path`` does not exist or is not a file.
    """
    description = description or "file"
    resolved = resolve_path(path, base_dir=base_dir)
    if not resolved.exists():
        raise ConfigValidationError(f"Configured {description} not found: {resolved}")
    if not resolved.is_file():
        raise ConfigValidationError(f"Configured {description} is not a file: {resolved}")
    return str(resolved)


def _as_finite_float(value, name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidParameterError(f"{name} must be a real number, got {value!r}") from exc
    if not np.isfinite(number):
        raise InvalidParameterError(f"{name} must be finite, got {value!r}")
    return number


def require_positive(value, name: str) -> float:
    """Return ``value`` as a float, raising :class:`InvalidParameterError` unless ``> 0``."""
    number = _as_finite_float(value, name)
    if number <= 0:
        raise InvalidParameterError(f"{name} must be positive, got {number}")
    return number


def require_non_negative(value, name: str) -> float:
    """Return ``value`` as a float, raising :class:`InvalidParameterError` when ``< 0``."""
    number = _as_finite_float(value, name)
    if number < 0:
        raise InvalidParameterError(f"{name} cannot be negative, got {number}")
    return number


def require_finite(value, name: str) -> float:
    return _as_finite_float(value, name)


def require_redshift(values) -> np.ndarray:
    """Validate that every element of ``values`` lies strictly above ``z = -1``."""
    array = np.asarray(values)
    if array.dtype.kind not in "fiu":
        raise TypeError(f"Redshifts must be real numbers, got dtype {array.dtype}")
    if np.any(np.isnan(array)):
        raise DomainError("Redshift cannot be NaN.")
    if np.any(array <= -1.0):
        raise DomainError("Redshift cannot be less than or equal to -1.")
    return array


def float_dtype(value) -> np.dtype:
    """Floating dtype carried by ``value``; integers and Python scalars map to float64."""
    dtype = getattr(value, "dtype", None)
    if dtype is None:
        dtype = np.asarray(value).dtype
    dtype = np.dtype(dtype)
    if dtype.kind != "f":
        return np.dtype(np.float64)
    return dtype


def require_dimension(value, unit: u.UnitBase, description: str = "quantity") -> None:
    """Raise :class:`DimensionMismatchError` unless ``value`` is bare or convertible to ``unit``."""
    if isinstance(value, u.Quantity) and not value.unit.is_equivalent(unit):
        raise DimensionMismatchError(
            f"Dimension of provided {description} is {value.unit.physical_type}, "
            f"expected {unit.physical_type}."
        )


def strip_units(value, unit: u.UnitBase, description: str = "quantity") -> np.ndarray:
    """Express ``value`` in ``unit`` and return the bare magnitude.

    Dimensioned inputs are checked before conversion; bare numbers are taken to
    already be expressed in ``unit``. The floating precision of the input is kept.

    Raises
    ------
    DimensionMismatchError
        If ``value`` carries a unit that cannot be converted to ``unit``.
    """
    dtype = float_dtype(value)
    require_dimension(value, unit, description)
    if isinstance(value, u.Quantity):
        magnitude = value.to_value(unit)
    else:
        magnitude = value
    array = np.asarray(magnitude)
    if array.dtype.kind not in "fiu":
        raise TypeError(f"{description} must be numeric, got {value!r}")
    return array.astype(dtype)


__all__ = [
    "ConfigValidationError",
    "CosmosError",
    "DimensionMismatchError",
    "DomainError",
    "InvalidParameterError",
    "ModelMismatchError",
    "UnsupportedOperationError",
    "float_dtype",
    "require_dimension",
    "require_existing_file",
    "require_finite",
    "require_non_negative",
    "require_positive",
    "require_redshift",
    "resolve_path",
    "strip_units",
]
