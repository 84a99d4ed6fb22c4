import math

import numpy as np
import pytest
from scipy import special as sp
from scipy import stats

from hydrostats import special
from hydrostats.errors import DomainError, NumericalError


@pytest.mark.parametrize("x", [0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 20.0, 35.0, 50.0, -0.5, -1.5])
def test_gamma_matches_math_gamma(x):
    assert special.gamma(x) == pytest.approx(math.gamma(x), rel=1e-10)


@pytest.mark.parametrize("x", [142.5, 160.0, 171.0])
def test_gamma_stays_finite_up_to_float_limit(x):
    assert special.gamma(x) == pytest.approx(math.gamma(x), rel=1e-9)


def test_gamma_beyond_float_range_raises():
    with pytest.raises(NumericalError):
        special.gamma(172.0)


def test_gamma_poles_raise():
    for pole in (0, -1, -2):
        with pytest.raises(DomainError):
            special.gamma(pole)


def test_log_gamma_matches_lgamma():
    for x in (0.3, 1.0, 7.5, 50.0):
        assert special.log_gamma(x) == pytest.approx(math.lgamma(x), rel=1e-10, abs=1e-12)


@pytest.mark.parametrize("a,x", [(0.5, 0.2), (2.0, 1.0), (3.0, 5.0), (5.0, 20.0)])
def test_regularized_gamma_matches_scipy(a, x):
    assert special.regularized_lower_gamma(a, x) == pytest.approx(sp.gammainc(a, x), abs=1e-7)
    assert special.regularized_upper_gamma(a, x) == pytest.approx(sp.gammaincc(a, x), abs=1e-7)


def test_regularized_gamma_non_convergence_raises():
    with pytest.raises(NumericalError):
        special.regularized_lower_gamma(50.0, 40.0, max_iter=2)


def test_normal_cdf_scalar_and_vector():
    assert special.normal_cdf(0.0) == pytest.approx(0.5, abs=1e-7)
    assert isinstance(special.normal_cdf(1.0), float)
    z = np.array([-2.0, -1.0, 1.0, 2.0])
    assert special.normal_cdf(z) == pytest.approx(stats.norm.cdf(z), abs=1e-6)


def test_normal_ppf_inverts_cdf():
    for p in (0.01, 0.2, 0.5, 0.9, 0.999):
        assert special.normal_ppf(p) == pytest.approx(stats.norm.ppf(p), abs=1e-6)
    with pytest.raises(DomainError):
        special.normal_ppf(1.0)


def test_binomial_coefficient():
    assert special.binomial_coefficient(5, 2) == 10
    assert special.binomial_coefficient(10, 0) == 1
    assert special.binomial_coefficient(3, 5) == 0


def test_chi_square_series_bounds():
    assert special.chi_square_cdf_series(0.0, 3) == 0.0
    value = special.chi_square_cdf_series(4.0, 3)
    assert 0.0 <= value <= 1.0
    assert special.chi_square_cdf_series(3.0, 2) == pytest.approx(1.0 - math.exp(-1.5) * (1.0 + 0.75))
    with pytest.raises(DomainError):
        special.chi_square_cdf_series(1.0, 0)
