"""Provide least-squares regression through the normal equations.

This module supports:
- single-target OLS with an automatically prepended intercept column,
- multi-target regression sharing one design matrix, and
- residual-based error summaries used by the heteroscedasticity tests.
"""

from __future__ import annotations

import math
from typing import List

import numpy as np
import pandas as pd

from .errors import DataError
from .linalg import matrix_inverse, matrix_multiply, transpose
from .schema import RegressionResult
from .series import as_matrix, as_pair, as_series


def design_matrix(X) -> np.ndarray:
    """Return ``X`` as an ``n x k`` matrix with a leading column of ones."""
    if isinstance(X, pd.DataFrame):
        X = X.to_numpy(dtype=float)
    try:
        raw = np.asarray(X, dtype=float)
    except (TypeError, ValueError) as exc:
        raise DataError("X rows must all have the same length.") from exc
    if raw.ndim == 1:
        raw = raw.reshape(-1, 1)
    predictors = as_matrix(raw, "X")
    return np.column_stack([np.ones(predictors.shape[0]), predictors])


def ols(X, y) -> RegressionResult:
    """Fit ``y = b0 + X b`` by ordinary least squares.

    Solves ``beta = (X'X)^-1 X'y`` with the Gauss-Jordan inverse.

    Args:
        X (array-like): Predictor matrix ``n x p`` or a single predictor of
            length ``n``.
        y (array-like): Response of length ``n``.

    Returns:
        RegressionResult: Coefficients (intercept first), fitted values,
        residuals and the coefficient of determination (NaN when ``y`` is
        constant).

    Raises:
        DataError: If the lengths disagree or there are fewer observations
            than coefficients.
        NumericalError: If ``X'X`` is singular (collinear predictors).
    """
    design = design_matrix(X)
    response = as_series(y, "y")
    n, k = design.shape
    if len(response) != n:
        raise DataError(f"X has {n} rows but y has {len(response)} values.")
    if n < k:
        raise DataError(f"Need at least {k} observations for {k} coefficients, got {n}.")

    xt = transpose(design)
    xtx_inv = matrix_inverse(matrix_multiply(xt, design))
    beta = matrix_multiply(xtx_inv, matrix_multiply(xt, response)).ravel()

    fitted = design @ beta
    resid = response - fitted
    ss_res = float(np.sum(resid**2))
    ss_tot = float(np.sum((response - response.mean()) ** 2))
    r2 = 1.0 - ss_res / ss_tot if ss_tot > 0 else math.nan
    return RegressionResult(coefficients=beta, fitted=fitted, residuals=resid, r_squared=r2)


def multiregression(X, Y) -> List[RegressionResult]:
    """Run :func:`ols` independently for each target.

    Args:
        X: Shared predictor matrix.
        Y: A sequence of target series, or a DataFrame whose columns are the
            targets.
    """
    if isinstance(Y, pd.DataFrame):
        targets = [Y[col].to_numpy(dtype=float) for col in Y.columns]
    else:
        targets = list(Y)
    if not targets:
        raise DataError("multiregression needs at least one target.")
    return [ols(X, target) for target in targets]


def residual_variance(residuals) -> float:
    """Mean squared residual ``sum(e**2) / n``; needs at least two residuals."""
    resid = as_series(residuals, "residuals", min_length=2)
    return float(np.sum(resid**2) / len(resid))


def mean_squared_error(first, second) -> float:
    a, b = as_pair(first, second, names=("first", "second"))
    return float(np.mean((a - b) ** 2))
