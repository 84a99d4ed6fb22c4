"""Coerce caller-supplied sequences into validated float arrays."""

from __future__ import annotations

from typing import Tuple

import numpy as np

from .errors import DataError


def as_series(values, name: str = "series", min_length: int = 1) -> np.ndarray:
    """Return ``values`` as a finite 1-D float array.

    Args:
        values: Any 1-D array-like (list, tuple, ndarray, pandas Series).
        name: Label used in error messages.
        min_length: Minimum number of observations required.

    Raises:
        DataError: If the input is not 1-D, is shorter than ``min_length``,
            or contains non-numeric or non-finite values.
    """
    try:
        arr = np.asarray(values, dtype=float)
    except (TypeError, ValueError) as exc:
        raise DataError(f"{name} must contain only numeric values.") from exc
    if arr.ndim != 1:
        raise DataError(f"{name} must be one-dimensional, got shape {arr.shape}.")
    if len(arr) < min_length:
        if min_length == 1:
            raise DataError(f"{name} is empty.")
        raise DataError(
            f"{name} needs at least {min_length} values, got {len(arr)}."
        )
    if not np.all(np.isfinite(arr)):
        raise DataError(f"{name} contains NaN or infinite values; clean gaps first.")
    return arr


def as_pair(
    first, second, names: Tuple[str, str] = ("observed", "modeled"), min_length: int = 1
) -> Tuple[np.ndarray, np.ndarray]:
    """Coerce two paired series and require equal length."""
    a = as_series(first, names[0], min_length=min_length)
    b = as_series(second, names[1], min_length=min_length)
    if len(a) != len(b):
        raise DataError(
            f"{names[0]} and {names[1]} must have equal length "
            f"({len(a)} != {len(b)})."
        )
    return a, b


def as_matrix(values, name: str = "matrix") -> np.ndarray:
    """Return ``values`` as a finite 2-D float array with equal-length rows."""
    try:
        arr = np.asarray(values, dtype=float)
    except (TypeError, ValueError) as exc:
        raise DataError(f"{name} rows must all have the same length.") from exc
    if arr.ndim != 2 or arr.shape[0] == 0 or arr.shape[1] == 0:
        raise DataError(f"{name} must be a non-empty 2-D matrix, got shape {arr.shape}.")
    if not np.all(np.isfinite(arr)):
        raise DataError(f"{name} contains NaN or infinite values.")
    return arr


def make_rng(rng=None) -> np.random.Generator:
    """Build a Generator from a seed, an existing Generator or ``None``."""
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)
