import matplotlib.pyplot as plt

from hydrostats.plotting import (
    plot_bootstrap_distribution,
    plot_correlogram,
    plot_model_fit,
)
from hydrostats.resampling import bootstrap


def test_correlogram_has_acf_and_pacf_panels(noisy_series, tmp_path):
    fig = plot_correlogram(noisy_series, max_lag=10, savepath=tmp_path / "correlogram.png")
    try:
        assert len(fig.axes) == 2
        assert fig.axes[0].get_title() == "Autocorrelation"
        assert (tmp_path / "correlogram.png").exists()
    finally:
        plt.close(fig)


def test_correlogram_clamps_lag_to_series_length():
    fig = plot_correlogram([1.0, 3.0, 2.0, 5.0, 4.0], max_lag=50)
    try:
        assert len(fig.axes) == 2
    finally:
        plt.close(fig)


def test_model_fit_title_reports_nse(flows):
    fig = plot_model_fit(flows, flows)
    try:
        assert "NSE = 1.000" in fig.axes[0].get_title()
        assert len(fig.axes[0].get_lines()) == 2
    finally:
        plt.close(fig)


def test_bootstrap_histogram_saved(flows, tmp_path):
    result = bootstrap(flows, iterations=100, rng=0)
    fig = plot_bootstrap_distribution(result, savepath=tmp_path / "boot.png")
    try:
        assert fig.axes[0].get_xlabel() == "Bootstrap mean"
        assert (tmp_path / "boot.png").exists()
    finally:
        plt.close(fig)
