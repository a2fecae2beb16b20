"""Common cosmology constants and helper functions.

This module centralises the physical constants and the default parameter set
used throughout the package so that every model built from defaults stays
reproducible. ``COSMO_CONSTANTS_VERSION`` should be bumped whenever any of the
numerical values below are updated.
"""
from __future__ import annotations

import numpy as np
from astropy import constants as const
from astropy import units as u
from astropy.cosmology import FlatLambdaCDM

COSMO_CONSTANTS_VERSION = "2024-05-cosmocalc"
SPEED_OF_LIGHT = const.c
GRAVITATIONAL_CONSTANT = const.G
# Radiation constant divided by c^2, used for mass densities of relativistic species.
RADIATION_DENSITY_CONSTANT = 4.0 * const.sigma_sb / const.c ** 3

# Base units: interpolants and bare numbers are always expressed in these.
DISTANCE_UNIT = u.Mpc
TIME_UNIT = u.Gyr
HUBBLE_UNIT = u.km / u.s / u.Mpc
DENSITY_UNIT = u.kg / u.m ** 3

# Default (Planck-like) cosmology, matching the values used by the online
# CosmoCalc reference calculator.
PLANCK_H = 0.69
PLANCK_OMEGA_M = 0.29
T_CMB = 2.7255  # K, COBE/FIRAS with Planck 2018 convention
N_EFF = 3.04
OMEGA_RADIATION_NEUTRINO_FACTOR = 0.22710731766  # 7/8 (4/11)^(4/3)

# Marker for "baryon density not supplied".
OMEGA_B_UNSET = -1.0


def radiation_per_kelvin4(h: float, n_eff: float = N_EFF) -> float:
    """Return Ω_r for a CMB temperature of 1 K (massless neutrinos).

    Ω_r scales as ``T_cmb**4``, so an explicit radiation fraction can be mapped
    onto the equivalent temperature understood by the astropy engine.
    """
    probe = FlatLambdaCDM(H0=100.0 * h, Om0=0.0, Tcmb0=1.0 * u.K, Neff=n_eff)
    return float(probe.Ogamma0 + probe.Onu0)


def omega_radiation_fraction(h: float, t_cmb: float = T_CMB, n_eff: float = N_EFF) -> float:
    """Return Ω_r for a reduced Hubble constant ``h`` and CMB temperature ``t_cmb``."""
    if h <= 0:
        return 0.0
    return radiation_per_kelvin4(h, n_eff) * t_cmb ** 4


def equivalent_cmb_temperature(omega_r: float, h: float, n_eff: float = N_EFF) -> float:
    """CMB temperature (K) whose photons and neutrinos give a radiation fraction ``omega_r``."""
    if omega_r <= 0:
        return 0.0
    return float(np.power(omega_r / radiation_per_kelvin4(h, n_eff), 0.25))


__all__ = [
    "COSMO_CONSTANTS_VERSION",
    "DENSITY_UNIT",
    "DISTANCE_UNIT",
    "GRAVITATIONAL_CONSTANT",
    "HUBBLE_UNIT",
    "N_EFF",
    "OMEGA_B_UNSET",
    "OMEGA_RADIATION_NEUTRINO_FACTOR",
    "PLANCK_H",
    "PLANCK_OMEGA_M",
    "RADIATION_DENSITY_CONSTANT",
    "SPEED_OF_LIGHT",
    "TIME_UNIT",
    "T_CMB",
    "equivalent_cmb_temperature",
    "omega_radiation_fraction",
    "radiation_per_kelvin4",
]
