"""
Rank and distribution-free two-sample tests.

Mann-Whitney U and Wilcoxon signed-rank use midranks for ties and a normal
approximation for the p-value. The approximation is reasonable for moderate
to large samples; it is not an exact small-sample distribution.
"""

from __future__ import annotations

import logging
import math
import warnings
from typing import Tuple

import numpy as np

from ..config import DEFAULTS
from ..errors import DataError, DomainError
from ..schema import KSResult, RankTestResult
from ..series import as_pair, as_series
from ..special import normal_cdf

logger = logging.getLogger(__name__)

SMALL_SAMPLE_WARNING_N = 8


def midranks(values) -> Tuple[np.ndarray, np.ndarray]:
    """Rank values from 1, giving tied values the average of their ranks.

    Returns:
        tuple: The ranks in input order and the sizes of every tie group
        (groups of one included).
    """
    arr = np.asarray(values, dtype=float)
    order = np.argsort(arr, kind="mergesort")
    sorted_vals = arr[order]
    ranks = np.empty(len(arr), dtype=float)
    group_sizes = []
    start = 0
    while start < len(arr):
        stop = start
        while stop + 1 < len(arr) and sorted_vals[stop + 1] == sorted_vals[start]:
            stop += 1
        ranks[order[start : stop + 1]] = 0.5 * (start + stop) + 1.0
        group_sizes.append(stop - start + 1)
        start = stop + 1
    return ranks, np.asarray(group_sizes, dtype=float)


def _two_sided_p(z: float) -> float:
    return float(min(1.0, 2.0 * normal_cdf(-abs(z))))


def ks_two_sample(
    first,
    second,
    alpha: float = DEFAULTS.alpha,
    grid_points: int = DEFAULTS.ks_grid_points,
) -> KSResult:
    """Two-sample Kolmogorov-Smirnov test on a fixed evaluation grid.

    Both empirical CDFs are evaluated on ``grid_points`` equally spaced
    points spanning the combined range; ``D`` is their largest absolute
    difference and ``p = 2 exp(-2 D**2 n m / (n + m))`` (capped at 1).
    """
    if grid_points < 2:
        raise DomainError("grid_points must be at least 2.")
    a = np.sort(as_series(first, "first"))
    b = np.sort(as_series(second, "second"))
    n, m = len(a), len(b)
    grid = np.linspace(min(a[0], b[0]), max(a[-1], b[-1]), int(grid_points))
    cdf_a = np.searchsorted(a, grid, side="right") / n
    cdf_b = np.searchsorted(b, grid, side="right") / m
    d = float(np.max(np.abs(cdf_a - cdf_b)))
    p_value = min(1.0, 2.0 * math.exp(-2.0 * d * d * (n * m) / (n + m)))
    return KSResult(statistic=d, p_value=p_value, reject=bool(p_value < alpha), alpha=float(alpha))


def mann_whitney_u(first, second) -> RankTestResult:
    """Mann-Whitney U test with tie-corrected normal approximation.

    ``statistic`` is ``min(U1, U2)``.
    """
    a = as_series(first, "first")
    b = as_series(second, "second")
    n1, n2 = len(a), len(b)
    if min(n1, n2) < SMALL_SAMPLE_WARNING_N:
        warnings.warn(
            "Mann-Whitney normal approximation is unreliable for samples below "
            f"{SMALL_SAMPLE_WARNING_N}.",
            RuntimeWarning,
            stacklevel=2,
        )
    ranks, ties = midranks(np.concatenate([a, b]))
    n = n1 + n2
    u1 = float(np.sum(ranks[:n1]) - n1 * (n1 + 1) / 2.0)
    u = min(u1, n1 * n2 - u1)

    tie_term = float(np.sum(ties**3 - ties)) / (n * (n - 1))
    sigma = math.sqrt(n1 * n2 / 12.0 * ((n + 1) - tie_term))
    if sigma == 0.0:
        raise DataError("Mann-Whitney U is undefined when all values are tied.")
    z = (u - n1 * n2 / 2.0) / sigma
    return RankTestResult(statistic=u, z=float(z), p_value=_two_sided_p(z))


def wilcoxon_signed_rank(first, second=None) -> RankTestResult:
    """Wilcoxon signed-rank test on ``first - second`` (or ``first`` alone).

    Zero differences are dropped; ``statistic`` is ``min(W+, W-)``.

    Raises:
        DataError: On mismatched lengths or when every difference is zero.
    """
    if second is None:
        diffs = as_series(first, "first")
    else:
        a, b = as_pair(first, second, names=("first", "second"))
        diffs = a - b
    diffs = diffs[diffs != 0]
    n = len(diffs)
    if n == 0:
        raise DataError("Wilcoxon test needs at least one non-zero difference.")
    if n < SMALL_SAMPLE_WARNING_N:
        warnings.warn(
            "Wilcoxon normal approximation is unreliable for fewer than "
            f"{SMALL_SAMPLE_WARNING_N} non-zero differences.",
            RuntimeWarning,
            stacklevel=2,
        )
    ranks, ties = midranks(np.abs(diffs))
    w_plus = float(np.sum(ranks[diffs > 0]))
    w_minus = float(np.sum(ranks[diffs < 0]))
    w = min(w_plus, w_minus)

    mean_w = n * (n + 1) / 4.0
    var_w = n * (n + 1) * (2 * n + 1) / 24.0 - float(np.sum(ties**3 - ties)) / 48.0
    if var_w <= 0:
        raise DataError("Wilcoxon variance vanished; differences are degenerate.")
    z = (w - mean_w) / math.sqrt(var_w)
    logger.debug("Wilcoxon n=%d W+=%.1f W-=%.1f z=%.4f", n, w_plus, w_minus, z)
    return RankTestResult(statistic=w, z=float(z), p_value=_two_sided_p(z))
