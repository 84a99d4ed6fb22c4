"""Engine-wide default settings.

Each public routine takes its own keyword arguments; the values below are
only the defaults those arguments fall back to.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class EngineDefaults:
    """Container for default numerical settings.

    Attributes:
        alpha: Significance level used by hypothesis tests.
        ks_grid_points: Number of evaluation points for the two-sample
            Kolmogorov-Smirnov empirical CDF grid.
        special_tolerance: Relative tolerance for the incomplete Gamma
            series and continued fraction.
        special_max_iterations: Iteration cap for the same expansions.
        singular_tolerance: Pivots with absolute value below this (scaled
            by the matrix magnitude) are treated as zero.
        gap_sentinels: Values treated as missing by the cleaning layer.
        bootstrap_iterations: Default number of bootstrap resamples.
        simulation_iterations: Default Monte Carlo / MCMC iteration count.
        transition_row_tolerance: Allowed deviation of a transition-matrix
            row sum from one.
    """

    alpha: float = 0.05
    ks_grid_points: int = 1000
    special_tolerance: float = 1e-8
    special_max_iterations: int = 100
    singular_tolerance: float = 1e-12
    gap_sentinels: tuple = (math.nan, None, -9999)
    bootstrap_iterations: int = 1000
    simulation_iterations: int = 100
    transition_row_tolerance: float = 1e-6


DEFAULTS = EngineDefaults()
