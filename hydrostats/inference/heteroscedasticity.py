"""
Heteroscedasticity tests on regression residuals.

All three tests report p-values from :func:`chi_square_cdf_series`, a
truncated series rather than the exact chi-square distribution, and mark
their results ``approximate=True``.
"""

from __future__ import annotations

import math
from itertools import combinations_with_replacement

import numpy as np

from ..errors import DataError, DomainError
from ..regression import ols
from ..schema import HeteroscedasticityResult
from ..series import as_matrix, as_series
from ..special import chi_square_cdf_series


def _regressors(regressors, n: int) -> np.ndarray:
    try:
        raw = np.asarray(regressors, dtype=float)
    except (TypeError, ValueError) as exc:
        raise DataError("regressor rows must all have the same length.") from exc
    if raw.ndim == 1:
        raw = raw.reshape(-1, 1)
    matrix = as_matrix(raw, "regressors")
    if matrix.shape[0] != n:
        raise DataError(
            f"residuals and regressors must have the same length ({n} != {matrix.shape[0]})."
        )
    return matrix


def _lm_result(squared: np.ndarray, aux: np.ndarray) -> HeteroscedasticityResult:
    n, k = aux.shape
    if n <= k + 1:
        raise DataError(f"Need more than {k + 1} observations for {k} auxiliary regressors.")
    fit = ols(aux, squared)
    r2 = 0.0 if math.isnan(fit.r_squared) else fit.r_squared
    statistic = n * r2
    p_value = 1.0 - chi_square_cdf_series(statistic, k)
    return HeteroscedasticityResult(statistic=float(statistic), p_value=float(p_value), df=k)


def whites_test(residuals, regressors) -> HeteroscedasticityResult:
    """White's test: ``n R^2`` from regressing squared residuals on the
    regressors, their squares and cross products.
    """
    resid = as_series(residuals, "residuals")
    x = _regressors(regressors, len(resid))
    columns = [x[:, j] for j in range(x.shape[1])]
    columns += [x[:, i] * x[:, j] for i, j in combinations_with_replacement(range(x.shape[1]), 2)]
    aux = np.column_stack(columns)
    # drop duplicated columns (for example a dummy regressor equal to its square)
    _, keep = np.unique(np.round(aux, 12), axis=1, return_index=True)
    return _lm_result(resid**2, aux[:, np.sort(keep)])


def breusch_pagan_test(residuals, regressors) -> HeteroscedasticityResult:
    """Breusch-Pagan (Koenker studentized) LM test: ``n R^2`` of squared
    residuals on the regressors.
    """
    resid = as_series(residuals, "residuals")
    x = _regressors(regressors, len(resid))
    return _lm_result(resid**2, x)


def goldfeld_quandt_test(
    residuals, independent, fraction: float = 0.4
) -> HeteroscedasticityResult:
    """Goldfeld-Quandt split test.

    Observations are ordered by ``independent``; the lowest and highest
    ``fraction`` of them form two subsets, and the statistic is the ratio of
    their mean squared residuals (high over low). ``df`` is the subset size
    minus one.
    """
    if not 0.0 < fraction <= 0.5:
        raise DomainError("fraction must lie in (0, 0.5].")
    resid = as_series(residuals, "residuals")
    order_by = as_series(independent, "independent")
    if len(resid) != len(order_by):
        raise DataError("residuals and independent must have the same length.")
    k = int(math.floor(len(resid) * fraction))
    if k < 2:
        raise DataError("Goldfeld-Quandt needs at least two observations per subset.")
    order = np.argsort(order_by, kind="mergesort")
    low = resid[order[:k]]
    high = resid[order[-k:]]
    low_ms = float(np.mean(low**2))
    if low_ms == 0.0:
        raise DataError("Goldfeld-Quandt is undefined when the low subset has zero residuals.")
    statistic = float(np.mean(high**2)) / low_ms
    p_value = 1.0 - chi_square_cdf_series(statistic, k - 1)
    return HeteroscedasticityResult(statistic=statistic, p_value=float(p_value), df=k - 1)
