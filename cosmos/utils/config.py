"""Configuration data structures.

A :class:`CosmosConfig` is created once (from code or from a YAML file) and
passed explicitly to the call sites that need it; nothing in the package
keeps a process-wide default cosmology.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import numpy as np
import yaml

from .cosmology import N_EFF, OMEGA_B_UNSET, PLANCK_H, PLANCK_OMEGA_M, T_CMB
from .logging_config import StructuredLogger
from .validation import ConfigValidationError, require_existing_file


@dataclass(frozen=True)
class SamplingConfig:
    """Layout of the redshift grid used to build the inverse interpolants."""

    # -(1 - 10**x): dense towards the z = -1 singularity
    singular_log_range: Tuple[float, float] = (-4.0, 0.0)
    singular_samples: int = 121
    # -10**x: negative-log-spaced towards z = 0
    negative_log_range: Tuple[float, float] = (-3.0, 0.0)
    negative_samples: int = 91
    # fine linear band around the present epoch
    present_half_width: float = 1e-3
    present_samples: int = 31
    # moderate redshifts
    linear_max: float = 10.0
    linear_samples: int = 81
    intermediate_range: Tuple[float, float] = (1.0, 2.0)
    intermediate_samples: int = 21
    # 10**x out to the large-redshift cutoff
    positive_log_range: Tuple[float, float] = (-3.0, 4.0)
    positive_samples: int = 61

    def __post_init__(self):
        for name in (
            "singular_samples",
            "negative_samples",
            "present_samples",
            "linear_samples",
            "intermediate_samples",
            "positive_samples",
        ):
            if getattr(self, name) < 2:
                raise ConfigValidationError(f"{name} must be at least 2")
        if self.present_half_width <= 0:
            raise ConfigValidationError("present_half_width must be positive")
        if self.linear_max <= self.present_half_width:
            raise ConfigValidationError("linear_max must exceed present_half_width")
        for name in ("singular_log_range", "negative_log_range", "positive_log_range", "intermediate_range"):
            low, high = getattr(self, name)
            if high <= low:
                raise ConfigValidationError(f"{name} must be an increasing pair")

    @classmethod
    def from_mapping(cls, mapping: Optional[Mapping[str, Any]]) -> "SamplingConfig":
        if not mapping:
            return cls()
        known = {item.name for item in fields(cls)}
        unknown = set(mapping) - known
        if unknown:
            raise ConfigValidationError(f"Unknown sampling options: {sorted(unknown)}")
        values = {}
        for key, value in mapping.items():
            if key.endswith("_range"):
                if not isinstance(value, (list, tuple)) or len(value) != 2:
                    raise ConfigValidationError(f"{key} must be a pair of numbers")
                value = (float(value[0]), float(value[1]))
            values[key] = value
        return cls(**values)


@dataclass(frozen=True)
class CosmosConfig:
    """Default model parameters plus construction settings."""

    h: float = PLANCK_H
    omega_m: float = PLANCK_OMEGA_M
    omega_k: Optional[float] = None
    omega_r: Optional[float] = None
    omega_b: float = OMEGA_B_UNSET
    w0: float = -1.0
    wa: float = 0.0
    t_cmb: Optional[float] = T_CMB
    n_eff: float = N_EFF
    sampling: SamplingConfig = field(default_factory=SamplingConfig)
    workers: int = 1
    dtype: str = "float64"
    logger: Optional[StructuredLogger] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        if int(self.workers) < 1:
            raise ConfigValidationError("workers must be a positive integer")
        try:
            resolved = np.dtype(self.dtype)
        except TypeError as exc:
            raise ConfigValidationError(f"Unknown dtype '{self.dtype}'") from exc
        if resolved.kind != "f":
            raise ConfigValidationError(f"dtype must be a floating type, got '{self.dtype}'")

    @property
    def numpy_dtype(self) -> np.dtype:
        return np.dtype(self.dtype)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any], logger: Optional[StructuredLogger] = None) -> "CosmosConfig":
        """Build a configuration from a mapping shaped like ``config/default_config.yaml``."""
        data = copy.deepcopy(dict(mapping))
        cosmology = data.pop("cosmology", {}) or {}
        sampling = data.pop("sampling", {}) or {}
        run = data.pop("run", {}) or {}
        if data:
            raise ConfigValidationError(f"Unknown configuration sections: {sorted(data)}")
        for name, section in (("cosmology", cosmology), ("sampling", sampling), ("run", run)):
            if not isinstance(section, dict):
                raise ConfigValidationError(f"Section '{name}' must be a mapping")

        allowed = {"h", "omega_m", "omega_k", "omega_r", "omega_b", "w0", "wa", "t_cmb", "n_eff"}
        unknown = set(cosmology) - allowed
        if unknown:
            raise ConfigValidationError(f"Unknown cosmology parameters: {sorted(unknown)}")
        unknown = set(run) - {"workers", "dtype"}
        if unknown:
            raise ConfigValidationError(f"Unknown run options: {sorted(unknown)}")

        return cls(
            sampling=SamplingConfig.from_mapping(sampling),
            logger=logger,
            **cosmology,
            **run,
        )

    @classmethod
    def from_yaml(cls, path: str | Path, logger: Optional[StructuredLogger] = None) -> "CosmosConfig":
        resolved = require_existing_file(path, description="cosmos configuration file")
        return cls.from_mapping(_safe_load_yaml(resolved), logger=logger)

    def model_parameters(self) -> Dict[str, Any]:
        return {
            "h": self.h,
            "omega_m": self.omega_m,
            "omega_k": self.omega_k,
            "omega_r": self.omega_r,
            "omega_b": self.omega_b,
            "w_eos": (self.w0, self.wa),
            "t_cmb": self.t_cmb if self.omega_r is None else None,
            "n_eff": self.n_eff,
        }

    def build_model(self):
        """Construct the :class:`~cosmos.models.cosmology.CosmologicalModel` described here."""
        from cosmos.models.cosmology import CosmologicalModel

        return CosmologicalModel(dtype=self.numpy_dtype, config=self, **self.model_parameters())


def _safe_load_yaml(path):
    with open(path, "r", encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle)
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigValidationError(
            f"YAML file {path} must contain a mapping at the top level"
        )
    return loaded


__all__ = ["CosmosConfig", "SamplingConfig"]
