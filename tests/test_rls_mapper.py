import logging

import numpy as np
import pytest

from pydaptivemapper import (
    SCALAR_ALGEBRA,
    MapperState,
    MappingResult,
    ModelNotEstablishedError,
    NumericalInstabilityError,
    RLSMapper,
    weighted_tuple_algebra,
)


def test_untrained_mapper_fails():
    mapper = RLSMapper()
    assert mapper.state is MapperState.UNINITIALIZED
    with pytest.raises(ModelNotEstablishedError):
        mapper.map_x_to_y(1.0)
    with pytest.raises(ModelNotEstablishedError):
        mapper.map_y_to_x(1.0)


def test_reset_returns_to_uninitialized(trained_mapper):
    assert trained_mapper.state is MapperState.TRAINED
    trained_mapper.reset()

    assert trained_mapper.state is MapperState.UNINITIALIZED
    assert trained_mapper.n_updates == 0
    assert trained_mapper.weights == []
    assert trained_mapper.regressors == []
    np.testing.assert_allclose(trained_mapper.covariance, trained_mapper.inv_delta * np.eye(1))
    assert len(trained_mapper.w_history) == 1
    with pytest.raises(ModelNotEstablishedError):
        trained_mapper.map_x_to_y(0.0)


def test_warm_up_states():
    mapper = RLSMapper(tap_count=3, forgetting_factor=0.99, delta=1.0, algebra=SCALAR_ALGEBRA)
    mapper.update(1.0, 0.5)
    assert mapper.state is MapperState.WARMING
    assert len(mapper.regressors) == 1
    assert len(mapper.weights) == 3

    mapper.update(2.0, 1.0)
    assert mapper.state is MapperState.WARMING
    # a prediction is already available while warming up
    assert np.isfinite(mapper.map_x_to_y(3.0))

    mapper.update(3.0, 1.5)
    assert mapper.state is MapperState.TRAINED
    assert mapper.regressors == [3.0, 2.0, 1.0]

    mapper.update(4.0, 2.0)
    assert mapper.state is MapperState.TRAINED
    assert mapper.regressors == [4.0, 3.0, 2.0]


def test_single_tap_is_trained_after_first_update():
    mapper = RLSMapper(tap_count=1)
    mapper.update(2.0, 5.0)
    assert mapper.state is MapperState.TRAINED
    assert mapper.n_updates == 1


def test_update_returns_a_priori_error():
    mapper = RLSMapper(tap_count=1, forgetting_factor=0.9, delta=1.0)
    assert mapper.update(2.0, 5.0) == pytest.approx(5.0)
    expected = 7.0 - mapper.map_x_to_y(3.0)
    assert mapper.update(3.0, 7.0) == pytest.approx(expected)


def test_map_x_to_y_does_not_change_state(trained_mapper):
    before_w = trained_mapper.weights
    before_x = trained_mapper.regressors
    before_p = trained_mapper.covariance
    trained_mapper.map_x_to_y(12.0)
    trained_mapper.map_y_to_x(12.0)
    trained_mapper.predict([1.0, 2.0])
    assert trained_mapper.weights == before_w
    assert trained_mapper.regressors == before_x
    np.testing.assert_array_equal(trained_mapper.covariance, before_p)


def test_predict_matches_map_x_to_y(trained_mapper):
    xs = np.array([-1.0, 0.0, 2.5])
    np.testing.assert_allclose(
        trained_mapper.predict(xs), [trained_mapper.map_x_to_y(v) for v in xs]
    )


def test_multi_tap_inversion_unsupported():
    mapper = RLSMapper(tap_count=2, algebra=SCALAR_ALGEBRA)
    mapper.update(1.0, 2.0)
    with pytest.raises(NotImplementedError):
        mapper.map_y_to_x(2.0)


def test_zero_slope_inversion_is_reported():
    mapper = RLSMapper(tap_count=1)
    # x = 0 only ever corrects the bias component, leaving K exactly 0
    mapper.update(0.0, 4.0)
    with pytest.raises(NumericalInstabilityError):
        mapper.map_y_to_x(4.0)


@pytest.mark.parametrize("bad_x", [np.inf, np.nan])
def test_non_finite_gain_denominator_is_reported(bad_x):
    mapper = RLSMapper(tap_count=1)
    with pytest.raises(NumericalInstabilityError):
        mapper.update(bad_x, 1.0)


def test_failed_update_leaves_state_unchanged():
    mapper = RLSMapper(tap_count=3, forgetting_factor=0.99, delta=1.0, algebra=SCALAR_ALGEBRA)
    for x, y in [(1.0, 0.5), (2.0, 1.0), (3.0, 1.5)]:
        mapper.update(x, y)

    before_x = mapper.regressors
    before_w = mapper.weights
    before_p = mapper.covariance
    before_y = mapper.map_x_to_y(4.0)

    with pytest.raises(NumericalInstabilityError):
        mapper.update(np.inf, 1.0)

    assert mapper.regressors == before_x == [3.0, 2.0, 1.0]
    assert mapper.weights == before_w
    np.testing.assert_array_equal(mapper.covariance, before_p)
    assert mapper.n_updates == 3
    assert mapper.state is MapperState.TRAINED
    assert np.isfinite(mapper.map_x_to_y(4.0))
    assert mapper.map_x_to_y(4.0) == before_y

    # the mapper keeps learning after the rejected sample
    mapper.update(4.0, 2.0)
    assert mapper.regressors == [4.0, 3.0, 2.0]


def test_weighted_tuple_round_trip(linear_data_clean):
    alg = weighted_tuple_algebra(weights=(2.0, 0.5), bias=1.0)
    mapper = RLSMapper(tap_count=1, forgetting_factor=0.1, delta=0.01, algebra=alg)
    mapper.optimize(linear_data_clean["x"], linear_data_clean["y"])
    assert mapper.map_x_to_y(0.25) == pytest.approx(7.0 * 0.25 + 3.0, abs=1e-6)
    assert mapper.map_y_to_x(10.0) == pytest.approx(1.0, abs=1e-6)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"tap_count": 0},
        {"tap_count": 1.5},
        {"forgetting_factor": 0.0},
        {"forgetting_factor": -0.5},
        {"forgetting_factor": 1.01},
        {"forgetting_factor": np.nan},
        {"delta": 0.0},
        {"delta": -1.0},
        {"delta": np.inf},
    ],
)
def test_invalid_configuration(kwargs):
    with pytest.raises(ValueError):
        RLSMapper(**kwargs)


def test_optimize_shapes(linear_data_noisy):
    x, y = linear_data_noisy["x"], linear_data_noisy["y"]
    mapper = RLSMapper(tap_count=1, forgetting_factor=0.9, delta=1.0)
    res = mapper.optimize(x, y)

    assert isinstance(res, MappingResult)
    assert res.algorithm == "RLSMapper"
    assert res.error_type == "a_priori"
    assert res.outputs.shape == (x.size,)
    assert res.errors.shape == (x.size,)
    assert res.coefficients.shape == (x.size + 1, 2)
    assert res.extra["outputs_posteriori"].shape == (x.size,)
    np.testing.assert_allclose(res.outputs + res.errors, y)
    np.testing.assert_allclose(res.coefficients[0], [0.0, 0.0])
    np.testing.assert_allclose(res.coefficients[-1], mapper.weights[0])
    assert res.mse_db().shape == (x.size,)
    assert res.runtime_ms >= 0.0


def test_optimize_scalar_history_width(fir_data_real):
    mapper = RLSMapper(tap_count=3, algebra=SCALAR_ALGEBRA)
    res = mapper.optimize(x=fir_data_real["x"][:50], y=fir_data_real["d"][:50])
    assert res.coefficients.shape == (51, 3)


def test_optimize_input_validation():
    mapper = RLSMapper()
    with pytest.raises(ValueError):
        mapper.optimize([1.0, 2.0, 3.0], [1.0, 2.0])
    with pytest.raises(TypeError):
        mapper.optimize(np.array([1.0 + 1j]), np.array([1.0]))
    with pytest.raises(TypeError):
        mapper.optimize([1.0, 2.0])


def test_optimize_verbose(capsys):
    mapper = RLSMapper()
    mapper.optimize([1.0, 2.0], [3.0, 5.0], verbose=True)
    assert "[RLSMapper] Completed in" in capsys.readouterr().out


def test_reset_is_logged(caplog):
    caplog.set_level(logging.DEBUG, logger="pydaptivemapper.rls.rls_mapper")
    RLSMapper(tap_count=2, algebra=SCALAR_ALGEBRA)
    assert any("RLSMapper reset" in r.getMessage() for r in caplog.records)


def test_independent_instances_share_nothing():
    a = RLSMapper()
    b = RLSMapper()
    a.update(1.0, 10.0)
    assert b.state is MapperState.UNINITIALIZED
    assert b.weights == []


def test_repr(trained_mapper):
    text = repr(trained_mapper)
    assert "taps=1" in text and "trained" in text
