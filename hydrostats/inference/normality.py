"""Normality tests: Shapiro-Francia form of Shapiro-Wilk, and Anderson-Darling."""

from __future__ import annotations

import math
import warnings

import numpy as np

from ..errors import DataError
from ..schema import NormalityResult
from ..series import as_series
from ..special import normal_cdf, normal_ppf

# Stephens (1974) / D'Agostino-Stephens bands for the corrected A*^2 statistic:
# (lower breakpoint, use complement, c0, c1, c2) with p = exp(c0 + c1 A + c2 A^2)
# or 1 - exp(...) when the complement flag is set.
ANDERSON_DARLING_BANDS = (
    (0.6, False, 1.2937, -5.709, 0.0186),
    (0.34, False, 0.9177, -4.279, -1.38),
    (0.2, True, -8.318, 42.796, -59.938),
    (-math.inf, True, -13.436, 101.14, -223.73),
)

SHAPIRO_FRANCIA_VALID_N = (5, 5000)


def blom_scores(n: int) -> np.ndarray:
    """Expected normal order statistics approximated by ``probit((i - 3/8) / (n + 1/4))``."""
    return np.array([normal_ppf((i - 0.375) / (n + 0.25)) for i in range(1, n + 1)])


def shapiro_wilk(series) -> NormalityResult:
    """Shapiro-Wilk W via the Shapiro-Francia simplification.

    Weights are the normalized Blom scores instead of Royston's coefficient
    tables. ``W`` is the authoritative output. The p-value uses Royston's
    (1993) normal approximation for the Shapiro-Francia statistic and is
    flagged ``approximate=True``.

    Raises:
        DataError: With fewer than three values or a constant series.
    """
    arr = np.sort(as_series(series, min_length=3))
    n = len(arr)
    ss = float(np.sum((arr - np.mean(arr)) ** 2))
    if ss == 0.0:
        raise DataError("Shapiro-Wilk is undefined for a constant series.")
    m = blom_scores(n)
    weights = m / math.sqrt(float(np.sum(m**2)))
    w = float(np.sum(weights * arr) ** 2 / ss)

    low, high = SHAPIRO_FRANCIA_VALID_N
    if not low <= n <= high:
        warnings.warn(
            f"Shapiro-Francia p-value approximation is calibrated for {low} <= n <= {high}.",
            RuntimeWarning,
            stacklevel=2,
        )
    u = math.log(n)
    v = math.log(u) if u > 0 else 0.0
    mu = -1.2725 + 1.0521 * (v - u)
    sigma = 1.0308 - 0.26758 * (v + 2.0 / u)
    if w >= 1.0:
        p_value = 1.0
    else:
        z = (math.log(1.0 - w) - mu) / sigma
        p_value = float(1.0 - normal_cdf(z))
    return NormalityResult(statistic=w, p_value=p_value, approximate=True)


def anderson_darling_pvalue(a_star: float) -> float:
    for lower, complement, c0, c1, c2 in ANDERSON_DARLING_BANDS:
        if a_star >= lower:
            value = math.exp(c0 + c1 * a_star + c2 * a_star**2)
            p = 1.0 - value if complement else value
            return float(min(1.0, max(0.0, p)))
    return 1.0


def anderson_darling(series) -> NormalityResult:
    """Anderson-Darling normality test with estimated mean and variance.

    ``A^2 = -n - (1/n) sum (2i - 1)[ln F(z_i) + ln(1 - F(z_{n+1-i}))]``,
    corrected by ``(1 + 0.75/n + 2.25/n**2)`` before the Stephens p-value
    bands are applied. ``statistic`` is the corrected value.
    """
    arr = np.sort(as_series(series, min_length=3))
    n = len(arr)
    sd = float(np.std(arr, ddof=1))
    if sd == 0.0:
        raise DataError("Anderson-Darling is undefined for a constant series.")
    cdf = np.clip(normal_cdf((arr - np.mean(arr)) / sd), 1e-15, 1.0 - 1e-15)
    i = np.arange(1, n + 1)
    a2 = -n - float(np.sum((2 * i - 1) * (np.log(cdf) + np.log(1.0 - cdf[::-1])))) / n
    a_star = a2 * (1.0 + 0.75 / n + 2.25 / n**2)
    return NormalityResult(statistic=float(a_star), p_value=anderson_darling_pvalue(a_star))
