"""
Parametric location and variance tests.

The t-test variants return only the statistic and degrees of freedom; a
p-value is a separate step through :func:`t_distribution_pvalue`.
"""

from __future__ import annotations

import math

import numpy as np
from scipy import stats as scipy_stats

from ..errors import DataError, DomainError
from ..schema import AnovaResult, FTestResult, TTestResult
from ..series import as_pair, as_series


def _sample_variance(arr: np.ndarray) -> float:
    return float(np.var(arr, ddof=1))


def t_test_one_sample(series, mu: float = 0.0) -> TTestResult:
    """``t = (mean - mu) / (s / sqrt(n))`` with ``n - 1`` degrees of freedom."""
    arr = as_series(series, min_length=2)
    n = len(arr)
    se = math.sqrt(_sample_variance(arr) / n)
    if se == 0.0:
        raise DataError("t statistic is undefined for a constant sample.")
    return TTestResult(statistic=float((np.mean(arr) - mu) / se), df=n - 1)


def t_test_two_sample(first, second) -> TTestResult:
    """Pooled-variance two-sample t statistic with ``n1 + n2 - 2`` df."""
    a = as_series(first, "first", min_length=2)
    b = as_series(second, "second", min_length=2)
    n1, n2 = len(a), len(b)
    df = n1 + n2 - 2
    pooled = ((n1 - 1) * _sample_variance(a) + (n2 - 1) * _sample_variance(b)) / df
    se = math.sqrt(pooled * (1.0 / n1 + 1.0 / n2))
    if se == 0.0:
        raise DataError("t statistic is undefined when both samples are constant.")
    return TTestResult(statistic=float((np.mean(a) - np.mean(b)) / se), df=df)


def t_test_paired(first, second) -> TTestResult:
    """One-sample t-test on the paired differences ``first - second``.

    Raises:
        DataError: If the samples have different lengths.
    """
    a, b = as_pair(first, second, names=("first", "second"), min_length=2)
    return t_test_one_sample(a - b, mu=0.0)


def f_test(first, second) -> FTestResult:
    """Variance ratio ``s1**2 / s2**2`` with ``(n1 - 1, n2 - 1)`` df."""
    a = as_series(first, "first", min_length=2)
    b = as_series(second, "second", min_length=2)
    var_b = _sample_variance(b)
    if var_b == 0.0:
        raise DataError("F statistic is undefined when the second sample is constant.")
    return FTestResult(
        statistic=float(_sample_variance(a) / var_b), df1=len(a) - 1, df2=len(b) - 1
    )


def anova_one_way(*groups) -> AnovaResult:
    """One-way ANOVA F statistic over ``k`` groups.

    Raises:
        DataError: With fewer than two groups, an empty group, no within-group
            degrees of freedom, or zero within-group variation.
    """
    if len(groups) == 1 and len(groups[0]) > 0 and np.ndim(groups[0][0]) == 1:
        groups = tuple(groups[0])
    arrays = [as_series(g, f"group {i}") for i, g in enumerate(groups)]
    k = len(arrays)
    if k < 2:
        raise DataError("ANOVA needs at least two groups.")
    n_total = sum(len(g) for g in arrays)
    grand = float(np.sum([np.sum(g) for g in arrays]) / n_total)

    ss_between = float(sum(len(g) * (np.mean(g) - grand) ** 2 for g in arrays))
    ss_within = float(sum(np.sum((g - np.mean(g)) ** 2) for g in arrays))
    df_between = k - 1
    df_within = n_total - k
    if df_within <= 0:
        raise DataError("ANOVA needs more observations than groups.")
    if ss_within == 0.0:
        raise DataError("F statistic is undefined with zero within-group variation.")
    statistic = (ss_between / df_between) / (ss_within / df_within)
    return AnovaResult(
        statistic=float(statistic),
        df_between=df_between,
        df_within=df_within,
        ss_between=ss_between,
        ss_within=ss_within,
    )


def t_distribution_pvalue(t: float, df: float, tails: int = 2) -> float:
    """Student t tail probability for a statistic from one of the t-tests."""
    if df <= 0:
        raise DomainError("df must be positive.")
    if tails == 2:
        return float(2.0 * scipy_stats.t.sf(abs(t), df))
    if tails == 1:
        return float(scipy_stats.t.sf(t, df))
    raise DomainError("tails must be 1 or 2.")


def f_distribution_pvalue(f: float, df1: float, df2: float) -> float:
    """Upper-tail probability of an F statistic."""
    if df1 <= 0 or df2 <= 0:
        raise DomainError("df1 and df2 must be positive.")
    return float(scipy_stats.f.sf(f, df1, df2))
