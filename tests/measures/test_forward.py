import warnings

import numpy as np
import pytest
from astropy import units as u

from cosmos.measures import forward
from cosmos.measures.kinds import MeasureKind
from cosmos.measures.redshift import Redshift, ScaleFactor
from cosmos.utils.validation import DimensionMismatchError, DomainError


def test_units_and_shapes(flat_model):
    z = np.array([0.5, 1.0, 2.0])

    distance = forward.comoving_distance(flat_model, z)
    time = forward.lookback_time(flat_model, z)

    assert distance.unit == u.Mpc
    assert time.unit == u.Gyr
    assert distance.shape == (3,)
    assert np.all(np.diff(distance.value) > 0)


def test_forward_functions_agree_with_engine(flat_model):
    engine = flat_model.engine
    z = 1.2

    assert forward.comoving_distance(flat_model, z).value == pytest.approx(engine.comoving_distance(z).to_value(u.Mpc))
    assert forward.luminosity_distance(flat_model, z).value == pytest.approx(engine.luminosity_distance(z).to_value(u.Mpc))
    assert forward.angular_diameter_distance(flat_model, z).value == pytest.approx(
        engine.angular_diameter_distance(z).to_value(u.Mpc)
    )
    assert forward.lookback_time(flat_model, z).value == pytest.approx(engine.lookback_time(z).to_value(u.Gyr))


def test_distance_relations_in_flat_model(flat_model):
    z = 0.8
    comoving = forward.comoving_distance(flat_model, z)

    assert forward.comoving_transverse_distance(flat_model, z).value == pytest.approx(comoving.value)
    assert forward.luminosity_distance(flat_model, z).value == pytest.approx((1 + z) * comoving.value)
    assert forward.angular_diameter_distance(flat_model, z).value == pytest.approx(comoving.value / (1 + z))


def test_light_travel_and_conformal_use_speed_of_light(flat_model):
    z = 2.0
    lookback = forward.lookback_time(flat_model, z)
    comoving = forward.comoving_distance(flat_model, z)

    light_travel = forward.light_travel_distance(flat_model, z)
    conformal = forward.conformal_time(flat_model, z)

    mpc_per_gyr = (1.0 * u.Gyr * 299792.458 * u.km / u.s).to_value(u.Mpc)
    assert light_travel.value == pytest.approx(lookback.value * mpc_per_gyr)
    assert conformal.value == pytest.approx(comoving.value / mpc_per_gyr)


def test_relative_forms(flat_model):
    z0, z = 0.5, 1.5

    comoving = forward.comoving_distance(flat_model, z, z0)
    assert comoving.value == pytest.approx(
        forward.comoving_distance(flat_model, z).value - forward.comoving_distance(flat_model, z0).value
    )
    lookback = forward.lookback_time(flat_model, z, z0)
    assert lookback.value == pytest.approx(
        forward.lookback_time(flat_model, z).value - forward.lookback_time(flat_model, z0).value
    )
    transverse = forward.comoving_transverse_distance(flat_model, z, z0)
    assert transverse.value == pytest.approx(comoving.value)
    luminosity = forward.luminosity_distance(flat_model, z, z0)
    assert luminosity.value == pytest.approx((1 + z) / (1 + z0) ** 2 * comoving.value)
    angular = forward.angular_diameter_distance(flat_model, z, z0)
    assert angular.value == pytest.approx(comoving.value / (1 + z))


def test_relative_forms_from_today_match_absolute(flat_model):
    z = 1.0
    for kind in MeasureKind:
        absolute = forward.forward(flat_model, kind, z)
        relative = forward.forward(flat_model, kind, z, 0.0)
        assert relative.value == pytest.approx(absolute.value, rel=1e-9, abs=1e-9)


def test_relative_forms_require_ordered_redshifts(flat_model):
    for function in (
        forward.comoving_transverse_distance,
        forward.angular_diameter_distance,
        forward.luminosity_distance,
    ):
        with pytest.raises(DomainError):
            function(flat_model, 0.5, 1.0)


def test_redshift_and_scale_factor_inputs(flat_model):
    expected = forward.comoving_distance(flat_model, 1.0).value

    assert forward.comoving_distance(flat_model, Redshift(1.0)).value == pytest.approx(expected)
    assert forward.comoving_distance(flat_model, ScaleFactor(0.5)).value == pytest.approx(expected)


def test_invalid_redshift_rejected(flat_model):
    with pytest.raises(DomainError):
        forward.comoving_distance(flat_model, -1.0)
    with pytest.raises(DomainError):
        forward.lookback_time(flat_model, np.array([0.5, -2.0]))
    with pytest.raises(DimensionMismatchError):
        forward.comoving_distance(flat_model, 1.0 * u.Mpc)


def test_precision_promotion(flat_model):
    single = flat_model.astype(np.float32)

    assert forward.comoving_distance(single, np.float32(1.0)).dtype == np.float32
    assert forward.comoving_distance(single, 1.0).dtype == np.float64
    assert forward.comoving_distance(flat_model, np.float32(1.0)).dtype == np.float64


def test_inverse_functions_round_trip(planck):
    z = 1.3
    pairs = [
        (forward.comoving_distance, forward.redshift_from_comoving_distance),
        (forward.luminosity_distance, forward.redshift_from_luminosity_distance),
        (forward.angular_diameter_distance, forward.redshift_from_angular_diameter_distance),
        (forward.comoving_transverse_distance, forward.redshift_from_comoving_transverse_distance),
        (forward.light_travel_distance, forward.redshift_from_light_travel_distance),
        (forward.lookback_time, forward.redshift_from_lookback_time),
        (forward.conformal_time, forward.redshift_from_conformal_time),
    ]
    for to_measure, to_redshift in pairs:
        assert to_redshift(planck, to_measure(planck, z)) == pytest.approx(z, rel=1e-3)


def test_inverse_accepts_bare_numbers_and_other_units(planck):
    distance = forward.comoving_distance(planck, 0.7)

    from_quantity = forward.redshift_from_comoving_distance(planck, distance.to(u.Gpc))
    from_number = forward.redshift_from_comoving_distance(planck, distance.value)

    assert from_quantity == pytest.approx(from_number)
    assert from_number == pytest.approx(0.7, rel=1e-3)


def test_inverse_rejects_wrong_dimension(planck):
    with pytest.raises(DimensionMismatchError):
        forward.redshift_from_comoving_distance(planck, 3.0 * u.Gyr)
    with pytest.raises(DimensionMismatchError):
        forward.redshift_from_lookback_time(planck, 3.0 * u.Mpc)


def test_angular_diameter_inverse_picks_near_side(planck):
    near = forward.angular_diameter_distance(planck, 0.8)
    index = planck.inverse(MeasureKind.ANGULAR_DIAMETER)

    assert forward.redshift_from_angular_diameter_distance(planck, near) == pytest.approx(0.8, rel=1e-3)
    roots = index.roots(near.value)
    assert roots[0] == pytest.approx(0.8, rel=1e-3)
    assert np.any(roots > 1.6)


def test_angular_diameter_distance_before_today_is_quiet(flat_model):
    engine = flat_model.engine
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        distance = forward.angular_diameter_distance(flat_model, -0.5)

    assert caught == []
    assert distance.value == pytest.approx(engine.comoving_transverse_distance(-0.5).to_value(u.Mpc) / 0.5)
    assert distance.value < 0
