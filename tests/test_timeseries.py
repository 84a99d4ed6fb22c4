import numpy as np
import pytest

from hydrostats import timeseries
from hydrostats.errors import DataError, DomainError


def test_acf_lag_zero_is_one(flows):
    assert timeseries.autocorrelation(flows, 0) == pytest.approx(1.0)
    values = timeseries.acf(flows, 4)
    assert values[0] == pytest.approx(1.0)
    assert values[2] == pytest.approx(timeseries.autocorrelation(flows, 2))


def test_autocorrelation_has_no_wraparound():
    x = np.array([1.0, 2.0, 3.0, 4.0])
    c = x - x.mean()
    expected = np.sum(c[:-1] * c[1:]) / np.sum(c**2)
    assert timeseries.autocorrelation(x, 1) == pytest.approx(expected)


def test_acf_rejects_bad_lag_and_constant_series(flows):
    with pytest.raises(DomainError):
        timeseries.acf(flows, len(flows))
    with pytest.raises(DataError):
        timeseries.acf([2.0, 2.0, 2.0], 1)


def test_pacf_matches_yule_walker_solution(noisy_series):
    rho = timeseries.acf(noisy_series, 3)
    partial = timeseries.pacf(noisy_series, 3)
    assert partial[1] == pytest.approx(rho[1])
    # phi_33 is the last coefficient of the order-3 Yule-Walker system
    r = timeseries.autocorrelation_matrix(noisy_series, 2)
    phi = np.linalg.solve(r, rho[1:4])
    assert partial[3] == pytest.approx(phi[-1])
    assert timeseries.partial_autocorrelation(noisy_series, 3) == pytest.approx(partial[3])


def test_autocorrelation_matrix_is_symmetric_toeplitz(flows):
    r = timeseries.autocorrelation_matrix(flows, 2)
    assert r.shape == (3, 3)
    assert np.allclose(r, r.T)
    assert np.allclose(np.diag(r), 1.0)


def test_differencing_inverts_cumulative_sum(flows):
    cumulative = timeseries.cumulative_sum(flows)
    assert np.allclose(timeseries.differencing(cumulative, 1), flows[1:])
    assert timeseries.differencing([1.0, 4.0, 9.0, 16.0], 2).tolist() == [8.0, 12.0]
    with pytest.raises(DomainError):
        timeseries.differencing([1.0, 2.0], 2)


def test_moving_averages_agree(noisy_series):
    simple = timeseries.simple_moving_average(noisy_series, 7)
    running = timeseries.linear_moving_average(noisy_series, 7)
    assert len(simple) == len(noisy_series) - 6
    assert np.allclose(simple, running)
    with pytest.raises(DomainError):
        timeseries.simple_moving_average([1.0, 2.0], 3)


def test_exponential_moving_average_seeded_with_first_value():
    ema = timeseries.exponential_moving_average([10.0, 20.0, 20.0], 0.5)
    assert ema.tolist() == [10.0, 15.0, 17.5]
    with pytest.raises(DomainError):
        timeseries.exponential_moving_average([1.0, 2.0], 0.0)


def test_fast_fourier_pads_to_power_of_two():
    spectrum = timeseries.fast_fourier([1.0, 2.0, 3.0, 4.0, 5.0])
    assert len(spectrum) == 8
    assert spectrum[0].real == pytest.approx(15.0)
