"""Small dense linear-algebra kernels used by the regression engine."""

from __future__ import annotations

import logging

import numpy as np

from .config import DEFAULTS
from .errors import DataError, NumericalError
from .series import as_matrix, as_series

logger = logging.getLogger(__name__)


def transpose(matrix) -> np.ndarray:
    return as_matrix(matrix).T.copy()


def matrix_multiply(left, right) -> np.ndarray:
    """Product of two matrices; a 1-D ``right`` is treated as a column."""
    a = as_matrix(left, "left")
    right_arr = np.asarray(right, dtype=float)
    b = as_matrix(right_arr.reshape(-1, 1) if right_arr.ndim == 1 else right_arr, "right")
    if a.shape[1] != b.shape[0]:
        raise DataError(
            f"Cannot multiply {a.shape[0]}x{a.shape[1]} by {b.shape[0]}x{b.shape[1]}."
        )
    result = np.zeros((a.shape[0], b.shape[1]))
    for k in range(a.shape[1]):
        result += np.outer(a[:, k], b[k, :])
    return result


def dot(a, b) -> float:
    x = as_series(a, "a")
    y = as_series(b, "b")
    if len(x) != len(y):
        raise DataError("Input vectors must have the same length.")
    return float(np.sum(x * y))


def identity(n: int) -> np.ndarray:
    return np.eye(int(n))


def matrix_inverse(matrix, tol: float = DEFAULTS.singular_tolerance) -> np.ndarray:
    """Invert a square matrix by Gauss-Jordan elimination.

    Each column picks the largest remaining pivot (partial pivoting), the
    pivot row is normalized, and the pivot column is eliminated from every
    other row of the augmented ``[A | I]`` system.

    Raises:
        DataError: If the matrix is not square.
        NumericalError: If a pivot is numerically zero (singular matrix).
    """
    a = as_matrix(matrix)
    n, m = a.shape
    if n != m:
        raise DataError(f"Only square matrices can be inverted, got {n}x{m}.")
    work = a.copy()
    inverse = np.eye(n)
    threshold = tol * max(1.0, float(np.max(np.abs(a))))

    for col in range(n):
        pivot_row = col + int(np.argmax(np.abs(work[col:, col])))
        pivot = work[pivot_row, col]
        if abs(pivot) < threshold:
            raise NumericalError(f"Matrix is singular: pivot {pivot:.3e} in column {col}.")
        if pivot_row != col:
            work[[col, pivot_row]] = work[[pivot_row, col]]
            inverse[[col, pivot_row]] = inverse[[pivot_row, col]]
        work[col] /= pivot
        inverse[col] /= pivot
        for row in range(n):
            if row == col:
                continue
            factor = work[row, col]
            if factor != 0.0:
                work[row] -= factor * work[col]
                inverse[row] -= factor * inverse[col]

    logger.debug("Inverted %dx%d matrix", n, n)
    return inverse
