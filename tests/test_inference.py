import threading

import numpy as np
import pytest
from scipy import stats

from hydrostats import inference
from hydrostats.errors import DataError, OperationCancelled
from hydrostats.inference.normality import anderson_darling_pvalue
from hydrostats.inference.trend import mann_kendall_s, mann_kendall_variance


# -- trend ------------------------------------------------------------------


def test_mann_kendall_strictly_increasing():
    result = inference.mann_kendall(list(range(1, 11)))
    assert result.statistic == 45
    assert result.variance == pytest.approx(125.0)
    assert result.trend == "increasing"
    assert result.significant


def test_mann_kendall_decreasing_and_flat():
    assert inference.mann_kendall(list(range(10, 0, -1))).trend == "decreasing"
    flat = inference.mann_kendall([4.0] * 6)
    assert flat.trend == "no trend"
    assert flat.p_value == pytest.approx(1.0, abs=1e-6)
    assert not flat.significant


def test_mann_kendall_tie_correction_only_for_short_series():
    short = [1, 2, 2, 3, 4]
    assert mann_kendall_variance(short) == pytest.approx((5 * 4 * 15 - 2 * 1 * 9) / 18.0)
    long = [1, 2, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11]
    n = len(long)
    assert mann_kendall_variance(long) == pytest.approx(n * (n - 1) * (2 * n + 5) / 18.0)


def test_mann_kendall_honours_cancellation():
    cancel = threading.Event()
    cancel.set()
    with pytest.raises(OperationCancelled):
        mann_kendall_s(range(20), cancel=cancel)


# -- nonparametric ----------------------------------------------------------


def test_ks_identical_and_disjoint_samples():
    same = inference.ks_two_sample([1, 2, 3, 4], [1, 2, 3, 4])
    assert same.statistic == 0.0
    assert same.p_value == 1.0
    assert not same.reject

    apart = inference.ks_two_sample(np.arange(1, 21), np.arange(101, 121))
    assert apart.statistic == pytest.approx(1.0)
    assert apart.reject


def test_midranks_average_ties():
    ranks, groups = inference.midranks([10, 20, 20, 30])
    assert ranks.tolist() == [1.0, 2.5, 2.5, 4.0]
    assert sorted(groups.tolist()) == [1.0, 1.0, 2.0]


def test_mann_whitney_matches_scipy_asymptotic():
    a = np.arange(1, 11, dtype=float)
    b = np.arange(6, 16, dtype=float) + 0.5
    result = inference.mann_whitney_u(a, b)
    ref = stats.mannwhitneyu(a, b, use_continuity=False, method="asymptotic")
    assert result.statistic == pytest.approx(min(ref.statistic, len(a) * len(b) - ref.statistic))
    assert result.p_value == pytest.approx(ref.pvalue, abs=1e-5)


def test_mann_whitney_warns_for_small_samples():
    with pytest.warns(RuntimeWarning):
        inference.mann_whitney_u([1, 2, 3], [4, 5, 6])


def test_wilcoxon_signed_rank_statistic():
    first = [5, 7, 9, 11, 13, 15, 17, 19]
    second = [6, 5, 6, 7, 8, 9, 10, 11]
    result = inference.wilcoxon_signed_rank(first, second)
    assert result.statistic == 1.0
    assert result.p_value < 0.05
    with pytest.raises(DataError):
        inference.wilcoxon_signed_rank([1, 2, 3], [1, 2])


# -- parametric -------------------------------------------------------------


def test_t_tests_match_scipy(flows):
    other = flows[::-1] + np.linspace(0.0, 1.1, len(flows))
    one = inference.t_test_one_sample(flows, mu=14.0)
    assert one.statistic == pytest.approx(stats.ttest_1samp(flows, 14.0).statistic)
    assert one.df == len(flows) - 1

    two = inference.t_test_two_sample(flows, other)
    assert two.statistic == pytest.approx(stats.ttest_ind(flows, other).statistic)

    paired = inference.t_test_paired(flows, other)
    assert paired.statistic == pytest.approx(stats.ttest_rel(flows, other).statistic)
    p = inference.t_distribution_pvalue(paired.statistic, paired.df)
    assert p == pytest.approx(stats.ttest_rel(flows, other).pvalue)


def test_f_test_and_anova():
    a = [1.0, 2.0, 3.0, 4.0]
    b = [2.0, 4.0, 6.0, 8.0]
    f = inference.f_test(a, b)
    assert f.statistic == pytest.approx(0.25)
    assert (f.df1, f.df2) == (3, 3)

    groups = [[1.0, 2.0, 3.0], [2.0, 3.0, 4.0], [5.0, 6.0, 7.0]]
    result = inference.anova_one_way(*groups)
    assert result.statistic == pytest.approx(stats.f_oneway(*groups).statistic)
    assert inference.anova_one_way(groups).statistic == pytest.approx(result.statistic)
    p = inference.f_distribution_pvalue(result.statistic, result.df_between, result.df_within)
    assert p == pytest.approx(stats.f_oneway(*groups).pvalue)


def test_anova_needs_two_groups():
    with pytest.raises(DataError):
        inference.anova_one_way([1.0, 2.0, 3.0])


# -- normality --------------------------------------------------------------


def test_shapiro_wilk_separates_normal_from_skewed(noisy_series):
    normal = inference.shapiro_wilk(noisy_series)
    assert normal.approximate
    assert normal.statistic > 0.97

    skewed = np.random.default_rng(5).exponential(1.0, size=200)
    result = inference.shapiro_wilk(skewed)
    assert result.statistic < normal.statistic
    assert result.p_value < 0.01


def test_shapiro_wilk_warns_outside_calibrated_range():
    with pytest.warns(RuntimeWarning):
        inference.shapiro_wilk([1.0, 2.5, 2.0, 4.0])


def test_anderson_darling_statistic_matches_scipy(noisy_series):
    n = len(noisy_series)
    result = inference.anderson_darling(noisy_series)
    expected = stats.anderson(noisy_series).statistic * (1 + 0.75 / n + 2.25 / n**2)
    assert result.statistic == pytest.approx(expected, rel=1e-3)

    skewed = np.random.default_rng(5).exponential(1.0, size=200)
    assert inference.anderson_darling(skewed).p_value < 0.01


def test_anderson_darling_pvalue_bands_are_monotone():
    values = [anderson_darling_pvalue(a) for a in (0.1, 0.3, 0.5, 1.0, 2.0)]
    assert values == sorted(values, reverse=True)


# -- heteroscedasticity -----------------------------------------------------


def _fanning_residuals():
    rng = np.random.default_rng(11)
    x = np.linspace(1.0, 10.0, 200)
    return rng.normal(0.0, x), x


def test_breusch_pagan_and_white_detect_fanning_residuals():
    resid, x = _fanning_residuals()
    bp = inference.breusch_pagan_test(resid, x)
    assert bp.df == 1
    assert bp.approximate
    assert bp.p_value < 0.01

    white = inference.whites_test(resid, x)
    assert white.df == 2
    assert white.p_value < 0.01


def test_goldfeld_quandt_ratio_above_one_for_fanning_residuals():
    resid, x = _fanning_residuals()
    result = inference.goldfeld_quandt_test(resid, x)
    assert result.statistic > 1.0
    assert result.df == 79


def test_heteroscedasticity_length_mismatch():
    with pytest.raises(DataError):
        inference.breusch_pagan_test([0.1, -0.2, 0.3], [1.0, 2.0])
