"""
Descriptive statistics for hydrological series.

All functions accept any 1-D array-like and raise :class:`DataError` when the
statistic is undefined for the input (empty series, zero variance, too few
points) instead of returning NaN.
"""

from __future__ import annotations

import math
from dataclasses import astuple
from typing import Dict, Mapping

import numpy as np
import pandas as pd

from .errors import DataError, DomainError
from .schema import SummaryLabels
from .series import as_pair, as_series

LABELS = SummaryLabels()


def total(series) -> float:
    return float(np.sum(as_series(series)))


def minimum(series) -> float:
    return float(np.min(as_series(series)))


def maximum(series) -> float:
    return float(np.max(as_series(series)))


def mean(series) -> float:
    """Arithmetic mean."""
    arr = as_series(series)
    return float(np.sum(arr) / len(arr))


def median(series) -> float:
    """Middle order statistic, averaging the two central values for even n."""
    return quantile(series, 0.5)


def variance(series, ddof: int = 0) -> float:
    """Variance with ``ddof`` delta degrees of freedom (population by default).

    Raises:
        DataError: If the series has ``ddof`` or fewer observations.
    """
    arr = as_series(series)
    if len(arr) <= ddof:
        raise DataError(
            f"variance with ddof={ddof} needs more than {ddof} values, got {len(arr)}."
        )
    mu = float(np.mean(arr))
    return float(np.sum((arr - mu) ** 2) / (len(arr) - ddof))


def stddev(series, ddof: int = 0) -> float:
    return math.sqrt(variance(series, ddof=ddof))


def sum_of_squares(series) -> float:
    """Sum of squared deviations from the mean."""
    arr = as_series(series)
    return float(np.sum((arr - np.mean(arr)) ** 2))


def _sample_sd(arr: np.ndarray, label: str) -> float:
    sd = float(np.std(arr, ddof=1))
    if sd == 0.0:
        raise DataError(f"{label} is undefined for a constant series.")
    return sd


def skewness(series) -> float:
    """Adjusted Fisher-Pearson sample skewness.

    ``n / ((n-1)(n-2)) * sum(((x - mean) / s)**3)`` with ``s`` the sample
    standard deviation. Requires at least three values.
    """
    arr = as_series(series, min_length=3)
    n = len(arr)
    sd = _sample_sd(arr, "skewness")
    z = (arr - np.mean(arr)) / sd
    return float(n / ((n - 1) * (n - 2)) * np.sum(z**3))


def kurtosis(series) -> float:
    """Bias-corrected sample excess kurtosis. Requires at least four values."""
    arr = as_series(series, min_length=4)
    n = len(arr)
    sd = _sample_sd(arr, "kurtosis")
    z = (arr - np.mean(arr)) / sd
    lead = n * (n + 1) / ((n - 1) * (n - 2) * (n - 3))
    tail = 3 * (n - 1) ** 2 / ((n - 2) * (n - 3))
    return float(lead * np.sum(z**4) - tail)


def quantile(series, q: float) -> float:
    """Quantile by linear interpolation between order statistics.

    With ``p = (n - 1) * q``, an integral ``p`` returns that order statistic;
    otherwise the value is interpolated between the floor and ceiling
    neighbours.

    Raises:
        DomainError: If ``q`` is outside ``[0, 1]``.
    """
    if not 0.0 <= q <= 1.0:
        raise DomainError(f"quantile q must lie in [0, 1], got {q}.")
    ordered = np.sort(as_series(series))
    p = (len(ordered) - 1) * q
    lower = int(math.floor(p))
    rest = p - lower
    if rest == 0.0 or lower + 1 >= len(ordered):
        return float(ordered[lower])
    return float(ordered[lower] + rest * (ordered[lower + 1] - ordered[lower]))


def value_range(series, n: int | None = None) -> np.ndarray:
    """Evenly spaced grid of ``n + 1`` points from the minimum to the maximum."""
    arr = as_series(series)
    steps = len(arr) if n is None else int(n)
    if steps < 1:
        raise DomainError("value_range needs at least one step.")
    return np.linspace(float(np.min(arr)), float(np.max(arr)), steps + 1)


def unique(series) -> np.ndarray:
    """Distinct values in order of first appearance."""
    arr = as_series(series)
    _, first = np.unique(arr, return_index=True)
    return arr[np.sort(first)]


def frequency(series) -> Dict[float, int]:
    """Occurrence count of each distinct value."""
    values, counts = np.unique(as_series(series), return_counts=True)
    return {float(v): int(c) for v, c in zip(values, counts)}


def standardize(series) -> np.ndarray:
    """z-scores using the population standard deviation."""
    arr = as_series(series)
    sd = float(np.std(arr))
    if sd == 0.0:
        raise DataError("Cannot standardize a constant series.")
    return (arr - np.mean(arr)) / sd


def correlation(x, y) -> float:
    """Pearson product-moment correlation of two equal-length series."""
    a, b = as_pair(x, y, names=("x", "y"), min_length=2)
    da = a - np.mean(a)
    db = b - np.mean(b)
    denom = math.sqrt(float(np.sum(da**2)) * float(np.sum(db**2)))
    if denom == 0.0:
        raise DataError("correlation is undefined when either series is constant.")
    return float(np.sum(da * db) / denom)


def summary(series) -> pd.Series:
    """Basic statistics table for one series.

    Shape statistics that are undefined for the input (too short or
    constant) are reported as NaN in the table rather than raising, so a
    summary can always be produced for a non-empty series.
    """
    arr = as_series(series)
    values = [
        float(len(arr)),
        minimum(arr),
        maximum(arr),
        total(arr),
        mean(arr),
        median(arr),
        stddev(arr),
        variance(arr),
        _or_nan(skewness, arr),
        _or_nan(kurtosis, arr),
    ]
    return pd.Series(values, index=list(astuple(LABELS)), name="Value")


def summary_table(columns: Mapping[str, object]) -> pd.DataFrame:
    """Basic statistics for several named series, one column per series."""
    if isinstance(columns, pd.DataFrame):
        columns = {name: columns[name].to_numpy(dtype=float) for name in columns.columns}
    if not columns:
        raise DataError("summary_table needs at least one series.")
    frame = pd.DataFrame({name: summary(values) for name, values in columns.items()})
    frame.index.name = "Metric"
    return frame


def _or_nan(func, arr: np.ndarray) -> float:
    try:
        return func(arr)
    except DataError:
        return math.nan
