"""Mann-Kendall monotonic trend test."""

from __future__ import annotations

import logging
import math

import numpy as np

from ..config import DEFAULTS
from ..errors import raise_if_cancelled
from ..schema import MannKendallResult
from ..series import as_series
from ..special import normal_cdf

logger = logging.getLogger(__name__)

TIE_CORRECTION_MAX_N = 10


def mann_kendall_s(series, cancel=None) -> int:
    """``S = sum_{i<j} sign(x_j - x_i)``, accumulated one row at a time."""
    arr = as_series(series, min_length=2)
    s = 0
    for i in range(len(arr) - 1):
        raise_if_cancelled(cancel, "mann_kendall")
        s += int(np.sum(np.sign(arr[i + 1 :] - arr[i])))
    return s


def mann_kendall_variance(series) -> float:
    """Variance of S under the null hypothesis.

    Short series (``n <= 10``) subtract the tie correction
    ``sum t(t-1)(2t+5)`` over tied groups; longer series use the plain
    asymptotic ``n(n-1)(2n+5)/18``.
    """
    arr = as_series(series, min_length=2)
    n = len(arr)
    base = n * (n - 1) * (2 * n + 5)
    if n <= TIE_CORRECTION_MAX_N:
        _, counts = np.unique(arr, return_counts=True)
        ties = counts[counts > 1]
        base -= int(np.sum(ties * (ties - 1) * (2 * ties + 5)))
    return base / 18.0


def mann_kendall(series, alpha: float = DEFAULTS.alpha, cancel=None) -> MannKendallResult:
    """Mann-Kendall trend test with continuity-corrected normal approximation.

    Args:
        series (array-like): Observations in time order (at least two).
        alpha (float): Significance level for the ``significant`` flag.
        cancel: Optional object with ``is_set()`` checked between rows.

    Returns:
        MannKendallResult: ``S``, its variance, z, the two-tailed p-value, a
        trend label (``"increasing"``, ``"decreasing"`` or ``"no trend"``)
        and ``significant = p < alpha``.

    Note:
        The double loop is O(n**2). Ties are only corrected for ``n <= 10``.
    """
    arr = as_series(series, min_length=2)
    s = mann_kendall_s(arr, cancel=cancel)
    var_s = mann_kendall_variance(arr)

    if var_s <= 0 or s == 0:
        z = 0.0
    elif s > 0:
        z = (s - 1) / math.sqrt(var_s)
    else:
        z = (s + 1) / math.sqrt(var_s)

    p_value = 2.0 * (1.0 - normal_cdf(abs(z)))
    if z > 0:
        trend = "increasing"
    elif z < 0:
        trend = "decreasing"
    else:
        trend = "no trend"

    logger.debug("Mann-Kendall n=%d S=%d z=%.4f p=%.4g", len(arr), s, z, p_value)
    return MannKendallResult(
        statistic=int(s),
        variance=float(var_s),
        z=float(z),
        p_value=float(p_value),
        trend=trend,
        significant=bool(p_value < alpha),
        alpha=float(alpha),
    )
