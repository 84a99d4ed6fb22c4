"""Bootstrap resampling over a closed registry of statistics."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Dict

import numpy as np

from . import descriptive
from .config import DEFAULTS
from .errors import DataError, DomainError, raise_if_cancelled
from .schema import BootstrapResult
from .series import as_series, make_rng

logger = logging.getLogger(__name__)


class Statistic(str, Enum):
    """Statistics that :func:`bootstrap` can resample."""

    MEAN = "mean"
    MEDIAN = "median"
    STDDEV = "stddev"
    VARIANCE = "variance"
    SKEWNESS = "skewness"
    KURTOSIS = "kurtosis"
    MINIMUM = "min"
    MAXIMUM = "max"

    @classmethod
    def parse(cls, value) -> "Statistic":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError as exc:
            raise DomainError(
                f"Unknown statistic '{value}'. Choose from {[s.value for s in cls]}."
            ) from exc


STATISTICS: Dict[Statistic, Callable[[np.ndarray], float]] = {
    Statistic.MEAN: descriptive.mean,
    Statistic.MEDIAN: descriptive.median,
    Statistic.STDDEV: descriptive.stddev,
    Statistic.VARIANCE: descriptive.variance,
    Statistic.SKEWNESS: descriptive.skewness,
    Statistic.KURTOSIS: descriptive.kurtosis,
    Statistic.MINIMUM: descriptive.minimum,
    Statistic.MAXIMUM: descriptive.maximum,
}


def bootstrap(
    series,
    statistic="mean",
    iterations: int = DEFAULTS.bootstrap_iterations,
    alpha: float = DEFAULTS.alpha,
    rng=None,
    cancel=None,
) -> BootstrapResult:
    """Nonparametric bootstrap of a registered statistic.

    Draws ``n`` values with replacement ``iterations`` times and evaluates
    the statistic on each resample.

    Args:
        series (array-like): Observations.
        statistic (str | Statistic): Name from :class:`Statistic`.
        iterations (int): Number of resamples.
        alpha (float): The percentile interval spans ``alpha/2`` to
            ``1 - alpha/2``.
        rng: Seed or ``numpy.random.Generator`` for reproducible draws.
        cancel: Optional object with ``is_set()`` checked between rounds.

    Returns:
        BootstrapResult: Original statistic, resampled mean,
        ``bias = mean(resampled) - original``, standard error (sample SD of
        the replicates) and the percentile confidence interval. Resamples
        on which the statistic is undefined are stored as NaN, counted in
        ``undefined`` and left out of the summary.

    Raises:
        DataError: If the statistic is undefined on the series itself or on
            all but one of the resamples.
    """
    if iterations < 2:
        raise DomainError("bootstrap needs at least two iterations.")
    if not 0.0 < alpha < 1.0:
        raise DomainError("alpha must lie in (0, 1).")
    kind = Statistic.parse(statistic)
    func = STATISTICS[kind]
    arr = as_series(series)
    generator = make_rng(rng)

    original = func(arr)
    replicates = np.empty(int(iterations))
    n = len(arr)
    for i in range(int(iterations)):
        raise_if_cancelled(cancel, "bootstrap")
        try:
            replicates[i] = func(arr[generator.integers(0, n, size=n)])
        except DataError:
            # e.g. skewness of a resample that drew one value n times
            replicates[i] = np.nan

    defined = replicates[~np.isnan(replicates)]
    undefined = int(iterations) - len(defined)
    if len(defined) < 2:
        raise DataError(
            f"bootstrap {kind.value} is undefined on {undefined} of {iterations} resamples."
        )
    if undefined:
        logger.warning(
            "Bootstrap %s undefined on %d of %d resamples; summarizing the rest",
            kind.value,
            undefined,
            iterations,
        )

    boot_mean = float(np.mean(defined))
    lower = descriptive.quantile(defined, alpha / 2.0)
    upper = descriptive.quantile(defined, 1.0 - alpha / 2.0)
    result = BootstrapResult(
        statistic=kind.value,
        original=float(original),
        mean=boot_mean,
        bias=boot_mean - float(original),
        standard_error=float(np.std(defined, ddof=1)),
        ci_lower=lower,
        ci_upper=upper,
        alpha=float(alpha),
        iterations=int(iterations),
        replicates=replicates,
        undefined=undefined,
    )
    logger.debug(
        "Bootstrap %s: %d iterations, CI=[%.4g, %.4g]", kind.value, iterations, lower, upper
    )
    return result
