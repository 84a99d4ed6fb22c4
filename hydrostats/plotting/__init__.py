"""
Matplotlib figures for the statistics engine.

Modules:
    style:
        Global rcParams, colors and the ``save_figure`` helper.

    diagnostics:
        Correlogram (ACF and PACF), observed-vs-modeled fit and bootstrap
        replicate histogram.

Plotting code performs no statistics of its own beyond calling the engine
for the values it draws.
"""

from .diagnostics import plot_bootstrap_distribution, plot_correlogram, plot_model_fit
from .style import apply_global_style, save_figure

__all__ = [
    "plot_correlogram",
    "plot_model_fit",
    "plot_bootstrap_distribution",
    "apply_global_style",
    "save_figure",
]
