"""Redshift grid used to tabulate the forward measures."""
from __future__ import annotations

import logging
from typing import Iterable, Optional

import numpy as np

from cosmos.utils.config import SamplingConfig

logger = logging.getLogger(__name__)


def normalize_redshift_samples(redshifts: Iterable[float], dtype=np.float64) -> np.ndarray:
    """Drop unphysical (``z <= -1``) and non-finite samples, deduplicate and sort ascending."""
    z = np.asarray(list(redshifts) if not isinstance(redshifts, np.ndarray) else redshifts, dtype=dtype)
    z = z[np.isfinite(z)]
    z = z[z > -1.0]
    return np.unique(z)


def prepare_redshift_samples(dtype=np.float64, config: Optional[SamplingConfig] = None) -> np.ndarray:
    """Prepare the redshift samples used to build the inverse interpolants.

    The grid combines three regimes so that both the near field and the far
    field of every measure are resolved:

    * ``(-1, 0)``: log-spaced towards the ``z = -1`` singularity and
      negative-log-spaced towards the present;
    * around ``z = 0``: a fine linear band, since the present epoch is queried
      most often;
    * ``(0, z_max]``: linear up to moderate redshifts, then log-spaced out to
      the large-redshift cutoff.
    """
    config = config or SamplingConfig()
    pieces = [
        -(1.0 - np.logspace(*config.singular_log_range, config.singular_samples)),
        -np.logspace(*config.negative_log_range, config.negative_samples),
        np.linspace(-config.present_half_width, config.present_half_width, config.present_samples),
        np.linspace(config.present_half_width, config.linear_max, config.linear_samples),
        np.linspace(*config.intermediate_range, config.intermediate_samples),
        np.logspace(*config.positive_log_range, config.positive_samples),
    ]
    z = normalize_redshift_samples(np.concatenate(pieces), dtype=np.float64)
    logger.debug("Prepared %d redshift samples spanning [%g, %g]", z.size, z[0], z[-1])
    return z.astype(dtype)


__all__ = ["normalize_redshift_samples", "prepare_redshift_samples"]
