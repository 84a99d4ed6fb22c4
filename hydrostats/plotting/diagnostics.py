"""Diagnostic figures: correlogram, observed-vs-modeled and bootstrap histogram.

Functions receive precomputed inputs or call the engine for the values they
draw; they never alter the data. Each returns the Matplotlib figure and,
when ``savepath`` is given, also writes it to disk.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure

from ..efficiency import efficiencies
from ..schema import BootstrapResult
from ..series import as_pair, as_series
from ..timeseries import acf, pacf
from .style import (
    BAND_COLOR,
    MODELED_COLOR,
    OBSERVED_COLOR,
    STYLE,
    apply_global_style,
    save_figure,
)

logger = logging.getLogger(__name__)


def _finish(fig: Figure, savepath: str | Path | None) -> Figure:
    if savepath is not None:
        path = save_figure(fig, Path(savepath).with_suffix(""))
        logger.info("Saved figure to %s", path)
    return fig


def plot_correlogram(series, max_lag: int = 20, savepath: str | Path | None = None) -> Figure:
    """Side-by-side ACF and PACF stems with ``±1.96/sqrt(n)`` bands."""
    arr = as_series(series, min_length=3)
    max_lag = min(int(max_lag), len(arr) - 1)
    apply_global_style()
    lags = np.arange(max_lag + 1)
    band = 1.96 / math.sqrt(len(arr))

    fig, (ax_acf, ax_pacf) = plt.subplots(1, 2, figsize=STYLE.FIGSIZE_WIDE)
    for ax, values, title in (
        (ax_acf, acf(arr, max_lag), "Autocorrelation"),
        (ax_pacf, pacf(arr, max_lag), "Partial autocorrelation"),
    ):
        ax.vlines(lags, 0.0, values, color=OBSERVED_COLOR, linewidth=STYLE.LINEWIDTH_THIN)
        ax.plot(lags, values, "o", color=OBSERVED_COLOR)
        ax.axhspan(-band, band, color=BAND_COLOR, alpha=STYLE.ALPHA_BAND)
        ax.axhline(0.0, color=OBSERVED_COLOR, linewidth=0.8)
        ax.set_title(title)
        ax.set_xlabel("Lag")
    ax_acf.set_ylabel("Correlation")
    fig.tight_layout()
    return _finish(fig, savepath)


def plot_model_fit(
    observed, modeled, time=None, savepath: str | Path | None = None
) -> Figure:
    """Observed and modeled series over time, annotated with NSE."""
    obs, mod = as_pair(observed, modeled)
    x = np.arange(len(obs)) if time is None else np.asarray(time)
    apply_global_style()

    fig, ax = plt.subplots(figsize=STYLE.FIGSIZE_SINGLE)
    ax.plot(x, obs, color=OBSERVED_COLOR, label="Observed")
    ax.plot(x, mod, color=MODELED_COLOR, linestyle="--", label="Modeled")
    metrics = efficiencies(obs, mod, "all")
    ax.set_title(f"NSE = {metrics['NSE']:.3f}, RMSE = {metrics['RMSE']:.3g}")
    ax.set_xlabel("Time")
    ax.set_ylabel("Value")
    ax.legend(frameon=False)
    fig.tight_layout()
    return _finish(fig, savepath)


def plot_bootstrap_distribution(
    result: BootstrapResult, bins: int = 30, savepath: str | Path | None = None
) -> Figure:
    """Histogram of bootstrap replicates with the original value and CI."""
    apply_global_style()
    fig, ax = plt.subplots(figsize=STYLE.FIGSIZE_SINGLE)
    replicates = result.replicates[~np.isnan(result.replicates)]
    ax.hist(replicates, bins=bins, color=BAND_COLOR, alpha=0.7)
    ax.axvline(result.original, color=OBSERVED_COLOR, label="Original")
    for bound in (result.ci_lower, result.ci_upper):
        ax.axvline(bound, color=MODELED_COLOR, linestyle="--")
    ax.axvspan(
        result.ci_lower,
        result.ci_upper,
        color=MODELED_COLOR,
        alpha=STYLE.ALPHA_BAND,
        label=f"{100 * (1 - result.alpha):.0f}% CI",
    )
    ax.set_xlabel(f"Bootstrap {result.statistic}")
    ax.set_ylabel("Count")
    ax.legend(frameon=False)
    fig.tight_layout()
    return _finish(fig, savepath)
