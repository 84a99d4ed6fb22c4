"""
Gap detection, gap filling and outlier screening.

This is the only layer that accepts missing values. A value counts as a gap
when it matches one of the configured sentinels; ``NaN`` and ``None`` are
matched through ``numpy.isnan`` after float coercion.
"""

# Algorithm summary: build a boolean gap mask from the sentinel set, then
# either drop the masked positions (together with a parallel time axis),
# fill them from neighbours or a central value, or carry the last valid
# observation forward. Outlier screens reuse the descriptive quantile and
# standardize helpers.

from __future__ import annotations

import logging
import math
from typing import Iterable, List, Sequence, Tuple

import numpy as np
import pandas as pd

from .config import DEFAULTS
from .descriptive import quantile, standardize
from .errors import DataError, DomainError
from .series import as_series

logger = logging.getLogger(__name__)

FILL_METHODS = ("interpolate", "mean", "median")


def _raw_array(values) -> np.ndarray:
    try:
        arr = np.asarray(values, dtype=float)
    except (TypeError, ValueError) as exc:
        raise DataError("series must contain numeric values or gap sentinels.") from exc
    if arr.ndim != 1:
        raise DataError(f"series must be one-dimensional, got shape {arr.shape}.")
    return arr


def gap_mask(values, sentinels: Iterable | None = None) -> np.ndarray:
    """Boolean mask that is True where ``values`` holds a gap sentinel."""
    arr = _raw_array(values)
    sentinels = DEFAULTS.gap_sentinels if sentinels is None else tuple(sentinels)
    mask = np.zeros(len(arr), dtype=bool)
    for sentinel in sentinels:
        if sentinel is None or (isinstance(sentinel, float) and math.isnan(sentinel)):
            mask |= np.isnan(arr)
        else:
            mask |= arr == float(sentinel)
    return mask


def count_gaps(values, sentinels: Iterable | None = None) -> int:
    return int(np.sum(gap_mask(values, sentinels)))


def remove_gaps(values, time: Sequence | None = None, sentinels: Iterable | None = None):
    """Drop gap positions from a series and its optional time axis.

    Returns:
        numpy.ndarray, or ``(time, values)`` when a time axis is given.
    """
    arr = _raw_array(values)
    keep = ~gap_mask(arr, sentinels)
    if time is None:
        return arr[keep]
    time_arr = np.asarray(time)
    if len(time_arr) != len(arr):
        raise DataError("time and values must have equal length.")
    return time_arr[keep], arr[keep]


def find_time_gaps(times: Sequence, timestep: float) -> List:
    """Return interior timestamps whose neighbour spacing differs from ``timestep``.

    Args:
        times: Numeric offsets in minutes, or anything ``pandas.to_datetime``
            parses (strings, datetimes).
        timestep: Expected spacing in minutes.
    """
    if timestep <= 0:
        raise DomainError("timestep must be positive.")
    raw = list(times)
    if len(raw) < 3:
        return []
    if isinstance(raw[0], (int, float, np.integer, np.floating)):
        minutes = np.asarray(raw, dtype=float)
    else:
        stamps = pd.to_datetime(pd.Series(raw))
        minutes = ((stamps - stamps.iloc[0]) / pd.Timedelta(minutes=1)).to_numpy(dtype=float)

    steps = np.abs(np.diff(minutes))
    off = ~np.isclose(steps, float(timestep))
    flagged = [raw[i] for i in range(1, len(raw) - 1) if off[i - 1] or off[i]]
    logger.debug("Found %d irregular timestamps out of %d", len(flagged), len(raw))
    return flagged


def fill_gaps(
    values, method: str = "interpolate", sentinels: Iterable | None = None
) -> np.ndarray:
    """Replace gap sentinels using the chosen strategy.

    Args:
        values: Series that may contain gap sentinels.
        method: ``"interpolate"`` averages the nearest valid neighbour on each
            side (or copies the single neighbour at a boundary); ``"mean"``
            and ``"median"`` fill with that statistic of the valid values.
        sentinels: Values treated as gaps. Defaults to NaN, None and -9999.

    Raises:
        DomainError: If ``method`` is unknown.
        DataError: If the series has no valid values at all.
    """
    if method not in FILL_METHODS:
        raise DomainError(f"Unknown fill method '{method}'. Choose from {FILL_METHODS}.")
    arr = _raw_array(values).copy()
    mask = gap_mask(arr, sentinels)
    if not mask.any():
        return arr
    valid_idx = np.flatnonzero(~mask)
    if len(valid_idx) == 0:
        raise DataError("Cannot fill gaps in a series with no valid values.")

    if method == "mean":
        arr[mask] = float(np.mean(arr[valid_idx]))
    elif method == "median":
        arr[mask] = quantile(arr[valid_idx], 0.5)
    else:
        for i in np.flatnonzero(mask):
            pos = int(np.searchsorted(valid_idx, i))
            left = arr[valid_idx[pos - 1]] if pos > 0 else None
            right = arr[valid_idx[pos]] if pos < len(valid_idx) else None
            if left is not None and right is not None:
                arr[i] = 0.5 * (left + right)
            else:
                arr[i] = left if left is not None else right
    logger.debug("Filled %d gaps using method=%s", int(mask.sum()), method)
    return arr


def forward_fill(
    values, sentinels: Iterable | None = None
) -> Tuple[np.ndarray, List[int]]:
    """Carry the last valid observation forward over gaps.

    Leading gaps have no predecessor and stay NaN.

    Returns:
        tuple: Filled array and the indices that were replaced.
    """
    arr = _raw_array(values).copy()
    mask = gap_mask(arr, sentinels)
    replaced: List[int] = []
    previous = None
    for i in range(len(arr)):
        if not mask[i]:
            previous = arr[i]
        elif previous is not None:
            arr[i] = previous
            replaced.append(i)
        else:
            arr[i] = math.nan
    return arr, replaced


def iqr_bounds(values, q1: float = 0.25, q3: float = 0.75) -> Tuple[float, float]:
    """Tukey fences ``[Q1 - 1.5*IQR, Q3 + 1.5*IQR]``."""
    if q1 >= q3:
        raise DomainError("q1 must be smaller than q3.")
    arr = as_series(values)
    lower_q = quantile(arr, q1)
    upper_q = quantile(arr, q3)
    iqr = upper_q - lower_q
    return lower_q - 1.5 * iqr, upper_q + 1.5 * iqr


def interoutliers(values, q1: float = 0.25, q2: float = 0.75, time: Sequence | None = None):
    """Keep values inside the interquartile fences.

    Returns:
        numpy.ndarray, or ``(time, values)`` when a time axis is given.
    """
    arr = as_series(values)
    low, high = iqr_bounds(arr, q1, q2)
    keep = (arr >= low) & (arr <= high)
    return _select(arr, keep, time)


def normoutliers(
    values, lower: float = -0.5, upper: float = 0.5, time: Sequence | None = None
):
    """Return the values whose z-score falls outside ``[lower, upper]``."""
    if lower >= upper:
        raise DomainError("lower bound must be smaller than upper bound.")
    arr = as_series(values)
    z = standardize(arr)
    flagged = (z < lower) | (z > upper)
    return _select(arr, flagged, time)


def remove_outliers(
    values,
    method: str = "iqr",
    low: float | None = None,
    high: float | None = None,
    time: Sequence | None = None,
):
    """Drop outliers using IQR fences or z-score bounds.

    ``low``/``high`` are the quantiles for ``method="iqr"`` (default 0.25 and
    0.75) and the z-score bounds for ``method="normalized"`` (default -0.5
    and 0.5).
    """
    arr = as_series(values)
    if method == "iqr":
        bounds = iqr_bounds(arr, 0.25 if low is None else low, 0.75 if high is None else high)
        keep = (arr >= bounds[0]) & (arr <= bounds[1])
    elif method == "normalized":
        lower = -0.5 if low is None else low
        upper = 0.5 if high is None else high
        z = standardize(arr)
        keep = (z >= lower) & (z <= upper)
    else:
        raise DomainError(f"Unknown outlier method '{method}'.")
    logger.debug("Removed %d outliers using method=%s", int((~keep).sum()), method)
    return _select(arr, keep, time)


def _select(arr: np.ndarray, keep: np.ndarray, time: Sequence | None):
    if time is None:
        return arr[keep]
    time_arr = np.asarray(time)
    if len(time_arr) != len(arr):
        raise DataError("time and values must have equal length.")
    return time_arr[keep], arr[keep]
