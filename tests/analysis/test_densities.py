import numpy as np
import pytest
from astropy import units as u
from astropy.constants import G

from cosmos.analysis import densities
from cosmos.models.cosmology import CosmologicalModel
from cosmos.utils.validation import UnsupportedOperationError


def test_critical_density_today(flat_model):
    h0 = (70.0 * u.km / u.s / u.Mpc).to(1 / u.s)
    expected = (3 * h0 ** 2 / (8 * np.pi * G)).to_value(u.kg / u.m ** 3)

    rho_c = densities.compute_critical_density(flat_model)
    assert rho_c.unit == u.kg / u.m ** 3
    assert rho_c.value == pytest.approx(expected)
    assert rho_c.value == pytest.approx(9.2e-27, rel=1e-2)


def test_component_densities_sum_to_critical(planck, open_model, closed_model):
    for model in (planck, open_model, closed_model):
        for z in (0.0, 1.0):
            total = (
                densities.compute_matter_density(model, z)
                + densities.compute_radiation_density(model, z)
                + densities.compute_curvature_density(model, z)
                + densities.compute_dark_energy_density(model, z)
            )
            assert total.value == pytest.approx(densities.compute_critical_density(model, z).value, rel=1e-9)


def test_densities_today_are_fractions_of_critical(planck):
    rho_c = densities.compute_critical_density(planck).value

    assert densities.compute_matter_density(planck).value == pytest.approx(0.29 * rho_c)
    assert densities.compute_radiation_density(planck).value == pytest.approx(float(planck.omega_r) * rho_c)
    assert densities.compute_dark_energy_density(planck).value == pytest.approx(float(planck.omega_lambda) * rho_c)


def test_matter_density_dilutes_with_volume(flat_model):
    today = densities.compute_matter_density(flat_model).value
    earlier = densities.compute_matter_density(flat_model, 1.0).value

    assert earlier == pytest.approx(8.0 * today)


def test_curvature_density_sign(open_model, closed_model):
    assert densities.compute_curvature_density(open_model).value > 0
    assert densities.compute_curvature_density(closed_model).value < 0


def test_baryon_density_requires_fraction(flat_model, coarse_config):
    with pytest.raises(UnsupportedOperationError):
        densities.compute_baryon_density(flat_model)

    model = CosmologicalModel(0.7, 0.3, omega_b=0.05, config=coarse_config)
    rho_c = densities.compute_critical_density(model).value
    assert densities.compute_baryon_density(model).value == pytest.approx(0.05 * rho_c)
    assert densities.compute_baryon_density(model, 1.0).value == pytest.approx(0.4 * rho_c)


def test_photon_and_neutrino_densities():
    photons = densities.compute_photon_density(2.7255)

    assert photons.unit == u.kg / u.m ** 3
    assert photons.value == pytest.approx(4.64e-31, rel=1e-2)
    assert densities.compute_photon_density(2.7255 * u.K) == photons
    neutrinos = densities.compute_neutrino_density(3.04, 2.7255)
    assert neutrinos.value == pytest.approx(3.04 * 0.22710731766 * photons.value)


def test_photon_density_matches_engine(planck):
    rho_c = densities.compute_critical_density(planck).value
    photons = densities.compute_photon_density(float(planck.t_cmb)).value

    assert photons == pytest.approx(float(planck.engine.Ogamma0) * rho_c, rel=1e-4)
