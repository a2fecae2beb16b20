import warnings

import numpy as np
import pytest

from cosmos.measures.forward import FORWARD_MEASURES
from cosmos.measures.kinds import MeasureKind
from cosmos.models.cosmology import CosmologicalModel, DarkEnergy, Geometry, cosmology_planck
from cosmos.utils.cosmology import COSMO_CONSTANTS_VERSION, omega_radiation_fraction
from cosmos.utils.logging_config import StructuredLogger
from cosmos.utils.config import CosmosConfig
from cosmos.utils.validation import DomainError, InvalidParameterError


def _closure(model):
    return model.omega_m + model.omega_r + model.omega_k + model.omega_lambda


def test_planck_defaults_are_flat_lcdm_with_radiation(planck):
    assert planck.is_flat and planck.is_lcdm
    assert planck.h == pytest.approx(0.69)
    assert planck.omega_m == pytest.approx(0.29)
    assert planck.omega_k == 0.0
    assert planck.omega_r == pytest.approx(omega_radiation_fraction(0.69, 2.7255, 3.04))
    assert planck.omega_r > 0
    assert abs(_closure(planck) - 1.0) < 1e-9


def test_two_parameter_model_has_no_radiation(flat_model):
    assert flat_model.omega_r == 0.0
    assert flat_model.t_cmb == 0.0
    assert flat_model.omega_lambda == pytest.approx(0.7)


def test_geometry_follows_curvature_sign(open_model, closed_model, flat_model):
    assert open_model.geometry is Geometry.OPEN and open_model.is_open
    assert closed_model.geometry is Geometry.CLOSED and closed_model.is_closed
    assert flat_model.geometry is Geometry.FLAT
    assert open_model.omega_lambda == pytest.approx(0.65)
    for model in (open_model, closed_model):
        assert abs(_closure(model) - 1.0) < 1e-9


def test_equation_of_state_selects_wcdm(wcdm_model):
    assert wcdm_model.dark_energy is DarkEnergy.WCDM
    assert wcdm_model.is_wcdm and not wcdm_model.is_lcdm
    assert wcdm_model.w_eos == pytest.approx((-0.9, 0.1))
    assert abs(_closure(wcdm_model) - 1.0) < 1e-9


@pytest.mark.parametrize("omega_k", [None, 0.05, -0.05])
def test_evolving_dark_energy_builds_on_default_grid(omega_k):
    model = CosmologicalModel(0.7, 0.3, omega_k, w_eos=(-0.9, 0.1))

    assert model.is_wcdm
    for kind in (MeasureKind.COMOVING, MeasureKind.LOOKBACK):
        index = model.inverse(kind)
        assert index.redshift_range[0] < -0.9
        value = FORWARD_MEASURES[kind](model, 1.0).to_value(kind.base_unit)
        assert index(value) == pytest.approx(1.0, rel=1e-3)


def test_model_construction_emits_no_warnings():
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        CosmologicalModel(0.7, 0.3)

    assert [str(w.message) for w in caught] == []


def test_explicit_radiation_maps_to_engine(coarse_config):
    model = CosmologicalModel(0.7, 0.3, 0.0, 1e-4, config=coarse_config)
    engine_radiation = float(model.engine.Ogamma0 + model.engine.Onu0)

    assert model.omega_r == pytest.approx(1e-4)
    assert engine_radiation == pytest.approx(1e-4, rel=1e-9)
    assert model.t_cmb > 0
    assert abs(_closure(model) - 1.0) < 1e-9


@pytest.mark.parametrize(
    "args, kwargs",
    [
        ((0.0, 0.3), {}),
        ((-0.7, 0.3), {}),
        ((0.7, -0.1), {}),
        ((0.7, 0.3, 0.0, -1e-5), {}),
        ((0.7, float("nan")), {}),
        ((0.7, 0.3), {"omega_b": 0.5}),
        ((0.7, 0.3), {"t_cmb": -1.0}),
        ((0.7, 0.3, 0.0, 1e-4), {"t_cmb": 2.7}),
        ((0.7, 0.3), {"dtype": np.int32}),
    ],
)
def test_invalid_parameters_are_rejected(args, kwargs):
    with pytest.raises(InvalidParameterError):
        CosmologicalModel(*args, **kwargs)


def test_invalid_parameter_is_a_domain_error():
    with pytest.raises(DomainError):
        CosmologicalModel(0.7, -0.3)


def test_model_is_immutable(flat_model):
    with pytest.raises(AttributeError):
        flat_model.h = 0.5
    with pytest.raises(AttributeError):
        flat_model._engine = None


def test_every_kind_has_an_inverse(flat_model):
    for kind in MeasureKind:
        index = flat_model.inverse(kind)
        assert index.kind is kind
        assert index(0.0) == pytest.approx(0.0, abs=1e-6)


def test_astype_keeps_identity_and_changes_precision(flat_model):
    single = flat_model.astype(np.float32)

    assert single.dtype == np.float32
    assert single.h.dtype == np.float32
    assert single.is_compatible(flat_model)
    assert flat_model.astype(np.float64) is flat_model
    assert single.inverse(MeasureKind.COMOVING) is flat_model.inverse(MeasureKind.COMOVING)


def test_compatibility_is_by_parameters(flat_model, coarse_config):
    twin = CosmologicalModel(0.7, 0.3, config=coarse_config)
    other = CosmologicalModel(0.7, 0.31, config=coarse_config)

    assert twin is not flat_model
    assert twin.is_compatible(flat_model)
    assert not other.is_compatible(flat_model)


def test_explicit_redshift_samples_are_filtered():
    model = CosmologicalModel(0.7, 0.3, redshifts=[5.0, -2.0, 0.0, 1.0, 1.0, float("inf"), 2.0])

    np.testing.assert_allclose(model.redshift_samples, [0.0, 1.0, 2.0, 5.0])


def test_too_few_samples_are_rejected():
    with pytest.raises(InvalidParameterError):
        CosmologicalModel(0.7, 0.3, redshifts=[-3.0, 0.5])


def test_parallel_build_matches_serial(flat_model, coarse_sampling):
    config = CosmosConfig(sampling=coarse_sampling, workers=4)
    parallel = CosmologicalModel(0.7, 0.3, config=config)

    for kind in MeasureKind:
        value = 0.5 * flat_model.inverse(kind).domain[1]
        assert parallel.inverse(kind)(value) == pytest.approx(flat_model.inverse(kind)(value))


def test_build_events_are_logged(tmp_path, coarse_sampling):
    logger = StructuredLogger(run_id="build", base_dir=tmp_path)
    config = CosmosConfig(sampling=coarse_sampling, logger=logger)
    CosmologicalModel(0.7, 0.3, config=config)

    start = logger.find_events("model.build.start")
    complete = logger.find_events("model.build.complete")
    assert len(start) == 1 and len(complete) == 1
    assert start[0]["payload"]["parameters"]["h"] == pytest.approx(0.7)
    assert start[0]["payload"]["constants_version"] == COSMO_CONSTANTS_VERSION
    assert complete[0]["payload"]["geometry"] == "flat"
    assert (tmp_path / "build" / "events.jsonl").exists()


def test_repr_names_variant(planck):
    text = repr(planck)
    assert "flat" in text and "LCDM" in text


def test_planck_accepts_precision(coarse_config):
    model = cosmology_planck(dtype=np.float32, config=coarse_config)
    assert model.dtype == np.float32
    assert model.omega_m.dtype == np.float32
