"""
Time-series diagnostics: autocorrelation, differencing and smoothing.

Lagged sums run over the valid overlap only; there is no wraparound.
"""

from __future__ import annotations

import math

import numpy as np
from scipy.linalg import toeplitz

from .errors import DataError, DomainError
from .series import as_series


def _centered(series, name: str = "series") -> np.ndarray:
    arr = as_series(series, name, min_length=2)
    centered = arr - np.mean(arr)
    if not np.any(centered):
        raise DataError("Autocorrelation is undefined for a constant series.")
    return centered


def _check_lag(lag: int, n: int) -> int:
    lag = int(lag)
    if lag < 0 or lag >= n:
        raise DomainError(f"lag must lie in [0, {n - 1}], got {lag}.")
    return lag


def autocorrelation(series, lag: int = 1) -> float:
    """Sample autocorrelation at one lag.

    ``sum_t (x_t - m)(x_{t+k} - m) / sum_t (x_t - m)**2``.
    """
    centered = _centered(series)
    lag = _check_lag(lag, len(centered))
    denom = float(np.sum(centered**2))
    return float(np.sum(centered[: len(centered) - lag] * centered[lag:]) / denom)


def acf(series, max_lag: int) -> np.ndarray:
    """Autocorrelations for lags ``0..max_lag``."""
    centered = _centered(series)
    max_lag = _check_lag(max_lag, len(centered))
    denom = float(np.sum(centered**2))
    n = len(centered)
    return np.array(
        [float(np.sum(centered[: n - k] * centered[k:]) / denom) for k in range(max_lag + 1)]
    )


def pacf(series, max_lag: int) -> np.ndarray:
    """Partial autocorrelations for lags ``0..max_lag`` (Durbin-Levinson).

    The AR(k) coefficient vector is grown one order at a time from the
    autocorrelations, so the whole sequence costs O(max_lag**2).
    """
    rho = acf(series, max_lag)
    out = np.zeros(max_lag + 1)
    out[0] = 1.0
    if max_lag == 0:
        return out
    phi = np.array([rho[1]])
    out[1] = rho[1]
    for k in range(2, max_lag + 1):
        num = rho[k] - float(np.sum(phi * rho[k - 1 : 0 : -1]))
        den = 1.0 - float(np.sum(phi * rho[1:k]))
        if den == 0.0:
            raise DataError(f"Durbin-Levinson recursion degenerated at lag {k}.")
        phi_kk = num / den
        phi = np.append(phi - phi_kk * phi[::-1], phi_kk)
        out[k] = phi_kk
    return out


def partial_autocorrelation(series, lag: int = 1) -> float:
    return float(pacf(series, lag)[lag])


def autocorrelation_matrix(series, lags: int = 2) -> np.ndarray:
    """Toeplitz autocorrelation matrix of size ``(lags + 1) x (lags + 1)``."""
    return toeplitz(acf(series, lags))


def differencing(series, order: int = 1) -> np.ndarray:
    """Lag-``order`` difference ``x[d:] - x[:-d]``.

    Raises:
        DomainError: If ``order < 1`` or ``order >= len(series)``.
    """
    arr = as_series(series)
    order = int(order)
    if order < 1 or order >= len(arr):
        raise DomainError(f"Invalid order {order} for differencing a series of {len(arr)}.")
    return arr[order:] - arr[:-order]


def cumulative_sum(series) -> np.ndarray:
    return np.cumsum(as_series(series))


def _check_window(window_size: int, n: int) -> int:
    window_size = int(window_size)
    if window_size <= 0 or window_size > n:
        raise DomainError(f"Invalid window size {window_size} for a series of {n}.")
    return window_size


def simple_moving_average(series, window_size: int) -> np.ndarray:
    """Mean of each full window; output length ``n - window_size + 1``."""
    arr = as_series(series)
    window_size = _check_window(window_size, len(arr))
    return np.array(
        [float(np.mean(arr[i : i + window_size])) for i in range(len(arr) - window_size + 1)]
    )


def linear_moving_average(series, window_size: int) -> np.ndarray:
    """Same windows as :func:`simple_moving_average`, kept as a running sum."""
    arr = as_series(series)
    window_size = _check_window(window_size, len(arr))
    running = float(np.sum(arr[:window_size]))
    out = [running / window_size]
    for i in range(window_size, len(arr)):
        running += arr[i] - arr[i - window_size]
        out.append(running / window_size)
    return np.asarray(out)


def exponential_moving_average(series, alpha: float) -> np.ndarray:
    """``ema_t = alpha * x_t + (1 - alpha) * ema_{t-1}`` seeded with ``x_0``.

    The output is aligned with the input, so ``ema[0] == x[0]``.
    """
    if not 0.0 < alpha <= 1.0:
        raise DomainError(f"alpha must lie in (0, 1], got {alpha}.")
    arr = as_series(series)
    out = np.empty_like(arr)
    out[0] = arr[0]
    for t in range(1, len(arr)):
        out[t] = alpha * arr[t] + (1.0 - alpha) * out[t - 1]
    return out


def fast_fourier(series) -> np.ndarray:
    """Complex FFT of the series zero-padded to the next power of two."""
    arr = as_series(series)
    size = 1 << int(math.ceil(math.log2(len(arr)))) if len(arr) > 1 else 1
    return np.fft.fft(np.pad(arr, (0, size - len(arr))))
