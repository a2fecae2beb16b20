"""Cosmological model definition and construction."""

from __future__ import annotations

import logging
import time
import warnings
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Dict, Iterable, Optional, Tuple

import numpy as np
from astropy import units as u
from astropy.cosmology import FlatLambdaCDM, Flatw0waCDM, LambdaCDM, w0waCDM

from cosmos.measures.forward import FORWARD_MEASURES
from cosmos.measures.kinds import MeasureKind
from cosmos.utils.config import CosmosConfig
from cosmos.utils.cosmology import (
    COSMO_CONSTANTS_VERSION,
    N_EFF,
    OMEGA_B_UNSET,
    PLANCK_H,
    PLANCK_OMEGA_M,
    T_CMB,
    equivalent_cmb_temperature,
    omega_radiation_fraction,
)
from cosmos.utils.validation import (
    InvalidParameterError,
    require_finite,
    require_non_negative,
    require_positive,
)

from .inverse import InverseIndex
from .sampler import normalize_redshift_samples, prepare_redshift_samples

logger = logging.getLogger(__name__)


class Geometry(Enum):
    FLAT = "flat"
    OPEN = "open"
    CLOSED = "closed"

    @classmethod
    def from_curvature(cls, omega_k: float) -> "Geometry":
        if omega_k > 0:
            return cls.OPEN
        if omega_k < 0:
            return cls.CLOSED
        return cls.FLAT


class DarkEnergy(Enum):
    LCDM = "LCDM"
    WCDM = "WCDM"

    @classmethod
    def from_eos(cls, w_eos: Tuple[float, float]) -> "DarkEnergy":
        if tuple(w_eos) == (-1.0, 0.0):
            return cls.LCDM
        return cls.WCDM


@dataclass(frozen=True)
class CosmologyParameters:
    """Physical parameters identifying a model; two models with equal records are interchangeable."""

    h: float
    omega_m: float
    omega_r: float
    omega_k: float
    omega_lambda: float
    omega_b: float
    w0: float
    wa: float
    t_cmb: float
    n_eff: float


def _build_engine(geometry, dark_energy, h, omega_m, omega_k, omega_r, omega_b, w_eos, t_cmb, n_eff):
    """Instantiate the astropy cosmology evaluating the line-of-sight integrals."""
    common = {
        "H0": 100.0 * h,
        "Om0": omega_m,
        "Tcmb0": t_cmb * u.K,
        "Neff": n_eff,
    }
    if omega_b >= 0:
        common["Ob0"] = omega_b
    omega_lambda = 1.0 - omega_m - omega_r - omega_k
    w0, wa = w_eos

    if dark_energy is DarkEnergy.LCDM:
        if geometry is Geometry.FLAT:
            return FlatLambdaCDM(**common)
        return LambdaCDM(Ode0=omega_lambda, **common)
    if geometry is Geometry.FLAT:
        return Flatw0waCDM(w0=w0, wa=wa, **common)
    return w0waCDM(Ode0=omega_lambda, w0=w0, wa=wa, **common)


class CosmologicalModel:
    """FLRW cosmology with tabulated inverse mappings.

    Any cosmology can be built from the following parameters:

    * ``h``: dimensionless Hubble constant;
    * ``omega_m``: matter density;
    * ``omega_k``: curvature density (0 or omitted: flat);
    * ``omega_r``: radiation density (omitted: derived from ``t_cmb`` if given, else 0);
    * ``w_eos``: ``(w0, wa)`` of the dark-energy equation of state
      ``w = w0 + wa (1 - a)``;
    * ``omega_b``: baryon density (optional, ``-1`` means unset).

    The dark-energy density is always derived so that
    ``Ωm + Ωr + Ωk + ΩΛ = 1``. The model is immutable: all inverse
    interpolants are built eagerly during construction.
    """

    def __init__(
        self,
        h: float,
        omega_m: float,
        omega_k: Optional[float] = None,
        omega_r: Optional[float] = None,
        *,
        w_eos: Tuple[float, float] = (-1.0, 0.0),
        omega_b: float = OMEGA_B_UNSET,
        t_cmb: Optional[float] = None,
        n_eff: Optional[float] = None,
        redshifts: Optional[Iterable[float]] = None,
        dtype=np.float64,
        config: Optional[CosmosConfig] = None,
    ):
        started = time.perf_counter()
        self._set("_config", config or CosmosConfig())

        h = require_positive(h, "h")
        omega_m = require_non_negative(omega_m, "omega_m")
        omega_k = 0.0 if omega_k is None else require_finite(omega_k, "omega_k")
        n_eff = N_EFF if n_eff is None else require_non_negative(n_eff, "n_eff")
        w_eos = (require_finite(w_eos[0], "w0"), require_finite(w_eos[1], "wa"))
        omega_b = require_finite(omega_b, "omega_b")
        if omega_b >= 0 and omega_b > omega_m:
            raise InvalidParameterError("omega_b cannot be larger than omega_m")

        if omega_r is not None:
            if t_cmb is not None:
                raise InvalidParameterError("Provide either omega_r or t_cmb, not both")
            omega_r = require_non_negative(omega_r, "omega_r")
            t_cmb = equivalent_cmb_temperature(omega_r, h, n_eff)
        else:
            t_cmb = 0.0 if t_cmb is None else require_non_negative(t_cmb, "t_cmb")
            omega_r = omega_radiation_fraction(h, t_cmb, n_eff)

        dtype = np.dtype(dtype)
        if dtype.kind != "f":
            raise InvalidParameterError(f"dtype must be a floating type, got {dtype}")

        geometry = Geometry.from_curvature(omega_k)
        dark_energy = DarkEnergy.from_eos(w_eos)
        engine = _build_engine(geometry, dark_energy, h, omega_m, omega_k, omega_r, omega_b, w_eos, t_cmb, n_eff)

        if dark_energy is DarkEnergy.WCDM:
            omega_lambda = float(engine.Ode0)
        else:
            omega_lambda = 1.0 - omega_m - omega_r - omega_k

        self._set("_parameters", CosmologyParameters(
            h=h,
            omega_m=omega_m,
            omega_r=omega_r,
            omega_k=omega_k,
            omega_lambda=omega_lambda,
            omega_b=omega_b,
            w0=w_eos[0],
            wa=w_eos[1],
            t_cmb=float(engine.Tcmb0.to_value(u.K)),
            n_eff=n_eff,
        ))
        self._set("_geometry", geometry)
        self._set("_dark_energy", dark_energy)
        self._set("_engine", engine)
        self._set("_dtype", dtype)

        if redshifts is None:
            samples = prepare_redshift_samples(config=self._config.sampling)
        else:
            samples = normalize_redshift_samples(redshifts)
        if samples.size < 2:
            raise InvalidParameterError("At least two valid redshift samples (z > -1) are required")
        self._set("_samples", samples)

        if self._config.logger is not None:
            self._config.logger.log_event(
                "model.build.start",
                {
                    "parameters": asdict(self._parameters),
                    "samples": int(samples.size),
                    "constants_version": COSMO_CONSTANTS_VERSION,
                },
            )
        self._set("_inverse", self._build_inverse_indices(samples, int(self._config.workers)))

        elapsed = time.perf_counter() - started
        logger.info(
            "Built %s %s model (h=%.4g, Ωm=%.4g, Ωk=%.4g) from %d samples in %.2fs",
            geometry.value,
            dark_energy.value,
            h,
            omega_m,
            omega_k,
            samples.size,
            elapsed,
        )
        if self._config.logger is not None:
            self._config.logger.log_event(
                "model.build.complete",
                {
                    "geometry": geometry.value,
                    "dark_energy": dark_energy.value,
                    "elapsed_seconds": elapsed,
                    "branches": {kind.label: index.branch_count for kind, index in self._inverse.items()},
                },
            )

    def _set(self, name, value):
        object.__setattr__(self, name, value)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def _evaluate_samples(self, kind: MeasureKind, samples: np.ndarray) -> Tuple[MeasureKind, np.ndarray]:
        measure = FORWARD_MEASURES[kind]
        try:
            values = measure(self, samples).to_value(kind.base_unit)
        except (TypeError, ValueError, ArithmeticError) as exc:
            # evolving dark energy diverges close to z = -1; keep what the engine can integrate
            logger.debug("%s failed on the full grid (%s); evaluating sample by sample", kind.label, exc)
            values = np.array([self._evaluate_sample(measure, kind, z) for z in samples])
            dropped = int(np.count_nonzero(~np.isfinite(values)))
            if dropped:
                logger.info("%s: dropped %d of %d samples the engine could not integrate", kind.label, dropped, values.size)
        return kind, np.asarray(values, dtype=np.float64)

    def _evaluate_sample(self, measure, kind: MeasureKind, z: float) -> float:
        """One tabulated value, NaN where the engine fails or warns about the integral."""
        with warnings.catch_warnings(), np.errstate(over="raise", invalid="raise"):
            warnings.simplefilter("error")
            try:
                return float(measure(self, z).to_value(kind.base_unit))
            except (TypeError, ValueError, ArithmeticError, Warning):
                return np.nan

    def _build_inverse_indices(self, samples: np.ndarray, workers: int) -> Dict[MeasureKind, InverseIndex]:
        kinds = list(MeasureKind)
        if workers > 1:
            with ThreadPoolExecutor(max_workers=min(workers, len(kinds))) as pool:
                futures = [pool.submit(self._evaluate_samples, kind, samples) for kind in kinds]
                # every measure must be tabulated before any interpolant is built
                tabulated = [future.result() for future in futures]
        else:
            tabulated = [self._evaluate_samples(kind, samples) for kind in kinds]

        return {kind: InverseIndex.from_samples(kind, samples, values) for kind, values in tabulated}

    # Parameters -----------------------------------------------------------
    @property
    def parameters(self) -> CosmologyParameters:
        return self._parameters

    def _cast(self, value):
        return self._dtype.type(value)

    @property
    def h(self):
        return self._cast(self._parameters.h)

    @property
    def omega_m(self):
        return self._cast(self._parameters.omega_m)

    @property
    def omega_r(self):
        return self._cast(self._parameters.omega_r)

    @property
    def omega_k(self):
        return self._cast(self._parameters.omega_k)

    @property
    def omega_lambda(self):
        return self._cast(self._parameters.omega_lambda)

    @property
    def omega_b(self):
        return self._cast(self._parameters.omega_b)

    @property
    def w_eos(self) -> Tuple[float, float]:
        return self._cast(self._parameters.w0), self._cast(self._parameters.wa)

    @property
    def t_cmb(self):
        return self._cast(self._parameters.t_cmb)

    @property
    def n_eff(self):
        return self._cast(self._parameters.n_eff)

    @property
    def geometry(self) -> Geometry:
        return self._geometry

    @property
    def dark_energy(self) -> DarkEnergy:
        return self._dark_energy

    @property
    def engine(self):
        """The astropy cosmology evaluating the analytic integrals."""
        return self._engine

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    @property
    def redshift_samples(self) -> np.ndarray:
        return self._samples.copy()

    @property
    def config(self) -> CosmosConfig:
        return self._config

    @property
    def is_flat(self) -> bool:
        return self._geometry is Geometry.FLAT

    @property
    def is_open(self) -> bool:
        return self._geometry is Geometry.OPEN

    @property
    def is_closed(self) -> bool:
        return self._geometry is Geometry.CLOSED

    @property
    def is_lcdm(self) -> bool:
        return self._dark_energy is DarkEnergy.LCDM

    @property
    def is_wcdm(self) -> bool:
        return self._dark_energy is DarkEnergy.WCDM

    # Conversions ----------------------------------------------------------
    def inverse(self, kind: MeasureKind) -> InverseIndex:
        """Monotone interpolant mapping values of ``kind`` back to redshift."""
        return self._inverse[kind]

    def is_compatible(self, other: "CosmologicalModel") -> bool:
        """Whether measures of ``self`` and ``other`` may be combined (numeric precision aside)."""
        if other is self:
            return True
        return isinstance(other, CosmologicalModel) and other._parameters == self._parameters

    def astype(self, dtype) -> "CosmologicalModel":
        """The same cosmology evaluated at another floating precision."""
        dtype = np.dtype(dtype)
        if dtype.kind != "f":
            raise InvalidParameterError(f"dtype must be a floating type, got {dtype}")
        if dtype == self._dtype:
            return self
        # interpolants are float64 and shared; only the output precision changes
        clone = object.__new__(CosmologicalModel)
        for name in ("_config", "_parameters", "_geometry", "_dark_energy", "_engine", "_samples", "_inverse"):
            object.__setattr__(clone, name, getattr(self, name))
        object.__setattr__(clone, "_dtype", dtype)
        return clone

    def __repr__(self):
        params = self._parameters
        return (
            f"CosmologicalModel(geometry={self._geometry.value}, dark_energy={self._dark_energy.value}, "
            f"h={params.h:.4g}, omega_m={params.omega_m:.4g}, omega_k={params.omega_k:.4g}, "
            f"omega_r={params.omega_r:.4g}, omega_lambda={params.omega_lambda:.4g}, "
            f"w_eos=({params.w0:.3g}, {params.wa:.3g}), dtype={self._dtype.name})"
        )


def cosmology_planck(
    redshifts: Optional[Iterable[float]] = None,
    dtype=np.float64,
    config: Optional[CosmosConfig] = None,
) -> CosmologicalModel:
    """Default flat ΛCDM model: h = 0.69, Ωm = 0.29, radiation from T_cmb = 2.7255 K."""
    return CosmologicalModel(
        PLANCK_H,
        PLANCK_OMEGA_M,
        t_cmb=T_CMB,
        n_eff=N_EFF,
        redshifts=redshifts,
        dtype=dtype,
        config=config,
    )


CosmologyPlanck = cosmology_planck


__all__ = [
    "CosmologicalModel",
    "CosmologyParameters",
    "CosmologyPlanck",
    "DarkEnergy",
    "Geometry",
    "cosmology_planck",
]
