"""Monotone measure → redshift interpolants."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np
from scipy.interpolate import PchipInterpolator

from cosmos.measures.kinds import MeasureKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class MonotoneBranch:
    """Redshift interval over which a measure is strictly monotone."""

    values: np.ndarray
    redshifts: np.ndarray
    increasing: bool
    interpolant: PchipInterpolator
    edge_slopes: Tuple[float, float]

    @classmethod
    def build(cls, redshifts: np.ndarray, values: np.ndarray) -> "MonotoneBranch":
        """``redshifts`` ascending, ``values`` strictly monotone in either direction."""
        increasing = bool(values[-1] > values[0])
        if not increasing:
            redshifts = redshifts[::-1]
            values = values[::-1]
        interpolant = PchipInterpolator(values, redshifts, extrapolate=False)
        slopes = interpolant([values[0], values[-1]], 1)
        return cls(
            values=values,
            redshifts=redshifts,
            increasing=increasing,
            interpolant=interpolant,
            edge_slopes=(float(slopes[0]), float(slopes[1])),
        )

    @property
    def value_range(self) -> Tuple[float, float]:
        return float(self.values[0]), float(self.values[-1])

    @property
    def redshift_range(self) -> Tuple[float, float]:
        return float(np.min(self.redshifts)), float(np.max(self.redshifts))

    def covers(self, value: float) -> bool:
        low, high = self.value_range
        return low <= value <= high

    def contains_redshift(self, z: float) -> bool:
        low, high = self.redshift_range
        return low <= z <= high

    def __call__(self, x) -> np.ndarray:
        x = np.asarray(x, dtype=np.float64)
        low, high = self.value_range
        z = self.interpolant(x)
        below = x < low
        above = x > high
        if np.any(below) or np.any(above):
            logger.debug("Extrapolating %d value(s) outside [%g, %g]", int(np.sum(below | above)), low, high)
            z = np.where(below, self.redshifts[0] + self.edge_slopes[0] * (x - low), z)
            z = np.where(above, self.redshifts[-1] + self.edge_slopes[1] * (x - high), z)
        return z


def split_monotone(redshifts: np.ndarray, values: np.ndarray) -> List[np.ndarray]:
    """Split z-ordered samples into maximal strictly monotone runs.

    Returns index arrays; consecutive runs share their turning point. Samples
    that repeat the previous value are skipped.
    """
    runs: List[List[int]] = [[0]]
    direction = 0
    for index in range(1, len(values)):
        step = values[index] - values[runs[-1][-1]]
        if step == 0 or not np.isfinite(values[index]):
            continue
        sign = 1 if step > 0 else -1
        if direction in (0, sign):
            runs[-1].append(index)
            direction = sign
        else:
            runs.append([runs[-1][-1], index])
            direction = sign
    return [np.asarray(run) for run in runs if len(run) >= 2]


class InverseIndex:
    """Maps a measure's value back to redshift.

    The index is built from ``(z, value)`` samples. Because a measure need not
    be monotone over the whole grid (the angular-diameter distance turns over
    at ``z ≈ 1.6``; luminosity distance has a minimum at negative redshift;
    closed geometries may turn over at very high ``z``), the samples are split
    into strictly monotone branches, each with its own shape-preserving PCHIP
    interpolant. Calling the index inverts on the *primary* branch, the one
    containing today (``z = 0``); :meth:`roots` lists the candidates from every
    branch.

    Values outside the primary branch are extrapolated linearly with the edge
    slope. That is an accuracy degradation, not an error; results are never
    allowed below the smallest sampled redshift.
    """

    def __init__(self, kind: MeasureKind, branches: Sequence[MonotoneBranch], primary: int):
        if not branches:
            raise ValueError(f"No monotone branch could be built for {kind.label}")
        self.kind = kind
        self.branches = tuple(branches)
        self.primary = self.branches[primary]
        self.z_floor = min(branch.redshift_range[0] for branch in self.branches)

    @classmethod
    def from_samples(cls, kind: MeasureKind, redshifts, values) -> "InverseIndex":
        redshifts = np.asarray(redshifts, dtype=np.float64)
        values = np.asarray(values, dtype=np.float64)
        if redshifts.shape != values.shape:
            raise ValueError("redshifts and values must have the same shape")
        order = np.argsort(redshifts, kind="stable")
        redshifts = redshifts[order]
        values = values[order]
        finite = np.isfinite(values)
        redshifts = redshifts[finite]
        values = values[finite]

        branches = [
            MonotoneBranch.build(redshifts[run], values[run])
            for run in split_monotone(redshifts, values)
        ]
        primary = _primary_branch(branches)
        if len(branches) > 1:
            logger.debug(
                "%s is not monotone over the grid: %d branches, primary covers z in [%g, %g]",
                kind.label,
                len(branches),
                *branches[primary].redshift_range,
            )
        return cls(kind, branches, primary)

    @property
    def is_monotone(self) -> bool:
        return len(self.branches) == 1

    @property
    def branch_count(self) -> int:
        return len(self.branches)

    @property
    def domain(self) -> Tuple[float, float]:
        """Value range over which the primary branch interpolates."""
        return self.primary.value_range

    @property
    def redshift_range(self) -> Tuple[float, float]:
        return self.primary.redshift_range

    def __call__(self, value):
        z = np.maximum(self.primary(value), self.z_floor)
        return z[()] if np.ndim(z) == 0 else z

    def roots(self, value: float) -> np.ndarray:
        """Every redshift at which the measure takes ``value``, ascending."""
        value = float(value)
        candidates = [float(branch(value)) for branch in self.branches if branch.covers(value)]
        if not candidates:
            return np.asarray([float(self(value))])
        return np.unique(np.asarray(candidates))

    def __repr__(self):
        low, high = self.domain
        return (
            f"InverseIndex(kind={self.kind.label}, branches={self.branch_count}, "
            f"domain=[{low:.6g}, {high:.6g}])"
        )


def _primary_branch(branches: Sequence[MonotoneBranch]) -> int:
    for index, branch in enumerate(branches):
        if branch.contains_redshift(0.0):
            return index
    distances = [min(abs(low), abs(high)) for low, high in (b.redshift_range for b in branches)]
    return int(np.argmin(distances))


__all__ = ["InverseIndex", "MonotoneBranch", "split_monotone"]
