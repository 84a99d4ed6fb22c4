"""
Statistics and numerics for hydrological time series.

Subpackages and modules:
    descriptive, cleaning:
        Summary statistics, gap handling and outlier screening.

    special, distributions:
        Gamma-family special functions, normal CDF and probit, and
        densities and samplers for hydrological distributions.

    inference:
        Trend, parametric, rank, normality and heteroscedasticity tests.

    linalg, regression:
        Gauss-Jordan inversion and ordinary least squares.

    timeseries:
        ACF/PACF, differencing, moving averages and FFT.

    resampling, simulation, efficiency:
        Bootstrap, Monte Carlo and Markov-chain drivers, random walks and
        model goodness-of-fit metrics.

    api:
        ``call(operation, data, params)`` dispatch over every operation.

All numerical inputs are coerced to ``numpy`` float arrays; invalid input
raises one of the exceptions in :mod:`hydrostats.errors`.
"""

__version__ = "0.1.0"

from .api import call
from .errors import (
    DataError,
    DomainError,
    HydroStatsError,
    NumericalError,
    OperationCancelled,
)

__all__ = [
    "call",
    "HydroStatsError",
    "DataError",
    "DomainError",
    "NumericalError",
    "OperationCancelled",
    "__version__",
]
