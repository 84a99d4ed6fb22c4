"""
``data`` + ``params`` calling convention.

Collaborators call ``call("mann_kendall", data=flows, params={"alpha": 0.1})``
instead of importing individual functions. The operation table records
which function serves each name and how ``data`` is unpacked:

* ``series``: one sequence, passed as the first argument.
* ``pair``: ``[first, second]``, passed as two arguments.
* ``groups``: a list of sequences, passed as ``*groups``.
* ``regression``: a mapping with ``X`` and ``y`` (or ``Y``) keys.
* ``residuals``: a mapping with ``residuals`` and ``regressors`` keys.
* ``markov``: a mapping with ``transition_matrix`` and ``initial_state``.
* ``none``: ``data`` is ignored; everything comes from ``params``.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional

from . import (
    cleaning,
    descriptive,
    distributions,
    efficiency,
    inference,
    linalg,
    regression,
    resampling,
    simulation,
    timeseries,
)
from .errors import DataError, DomainError

logger = logging.getLogger(__name__)

# camelCase option names accepted from collaborators
PARAM_ALIASES = {
    "type": "metric",
    "windowSize": "window_size",
    "maxLag": "max_lag",
    "initialState": "initial_state",
    "transitionMatrix": "transition_matrix",
    "lowerBound": "lower",
    "upperBound": "upper",
}


@dataclass(frozen=True)
class Operation:
    func: Callable
    unpack: str = "series"


OPERATIONS: Dict[str, Operation] = {
    # descriptive
    "sum": Operation(descriptive.total),
    "min": Operation(descriptive.minimum),
    "max": Operation(descriptive.maximum),
    "mean": Operation(descriptive.mean),
    "median": Operation(descriptive.median),
    "variance": Operation(descriptive.variance),
    "stddev": Operation(descriptive.stddev),
    "sum_of_squares": Operation(descriptive.sum_of_squares),
    "skewness": Operation(descriptive.skewness),
    "kurtosis": Operation(descriptive.kurtosis),
    "quantile": Operation(descriptive.quantile),
    "range": Operation(descriptive.value_range),
    "unique": Operation(descriptive.unique),
    "frequency": Operation(descriptive.frequency),
    "standardize": Operation(descriptive.standardize),
    "correlation": Operation(descriptive.correlation, "pair"),
    "summary": Operation(descriptive.summary),
    # cleaning
    "gaps": Operation(cleaning.count_gaps),
    "remove_gaps": Operation(cleaning.remove_gaps),
    "fill_gaps": Operation(cleaning.fill_gaps),
    "forward_fill": Operation(cleaning.forward_fill),
    "interoutliers": Operation(cleaning.interoutliers),
    "normoutliers": Operation(cleaning.normoutliers),
    "remove_outliers": Operation(cleaning.remove_outliers),
    # distributions
    "density": Operation(distributions.density, "none"),
    "return_period": Operation(distributions.return_period, "none"),
    "poisson_process": Operation(distributions.poisson_process, "none"),
    # inference
    "mann_kendall": Operation(inference.mann_kendall),
    "ks_test": Operation(inference.ks_two_sample, "pair"),
    "mann_whitney": Operation(inference.mann_whitney_u, "pair"),
    "wilcoxon": Operation(inference.wilcoxon_signed_rank, "pair"),
    "t_test": Operation(inference.t_test_one_sample),
    "t_test_two_sample": Operation(inference.t_test_two_sample, "pair"),
    "t_test_paired": Operation(inference.t_test_paired, "pair"),
    "f_test": Operation(inference.f_test, "pair"),
    "anova": Operation(inference.anova_one_way, "groups"),
    "shapiro_wilk": Operation(inference.shapiro_wilk),
    "anderson_darling": Operation(inference.anderson_darling),
    "whites_test": Operation(inference.whites_test, "residuals"),
    "breusch_pagan": Operation(inference.breusch_pagan_test, "residuals"),
    "goldfeld_quandt": Operation(inference.goldfeld_quandt_test, "residuals"),
    # linear algebra and regression
    "transpose": Operation(linalg.transpose),
    "matrix_inverse": Operation(linalg.matrix_inverse),
    "multiply_matrices": Operation(linalg.matrix_multiply, "pair_raw"),
    "regression": Operation(regression.ols, "regression"),
    "multiregression": Operation(regression.multiregression, "regression"),
    # time series
    "autocorrelation": Operation(timeseries.autocorrelation),
    "acf": Operation(timeseries.acf),
    "pacf": Operation(timeseries.pacf),
    "partial_autocorrelation": Operation(timeseries.partial_autocorrelation),
    "autocorrelation_matrix": Operation(timeseries.autocorrelation_matrix),
    "differencing": Operation(timeseries.differencing),
    "cumulative_sum": Operation(timeseries.cumulative_sum),
    "simple_moving_average": Operation(timeseries.simple_moving_average),
    "linear_moving_average": Operation(timeseries.linear_moving_average),
    "exponential_moving_average": Operation(timeseries.exponential_moving_average),
    "fast_fourier": Operation(timeseries.fast_fourier),
    # resampling and simulation
    "bootstrap": Operation(resampling.bootstrap),
    "monte_carlo": Operation(simulation.run_monte_carlo, "raw"),
    "vegas": Operation(simulation.run_vegas, "raw"),
    "markov_chain": Operation(simulation.run_markov_chain, "markov"),
    "random_walk": Operation(simulation.random_walk, "none"),
    "efficiencies": Operation(efficiency.efficiencies, "pair"),
}


def normalize_params(params: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Copy ``params`` translating camelCase aliases to keyword names."""
    out: Dict[str, Any] = {}
    for key, value in (params or {}).items():
        out[PARAM_ALIASES.get(key, key)] = value
    return out


def _unpack(name: str, unpack: str, data) -> tuple:
    if unpack == "none":
        return ()
    if data is None:
        raise DataError(f"Operation '{name}' requires data.")
    if unpack in ("series", "raw"):
        return (data,)
    if unpack in ("pair", "pair_raw"):
        if len(data) != 2:
            raise DataError(f"Operation '{name}' expects data as [first, second].")
        return (data[0], data[1])
    if unpack == "groups":
        return tuple(data)
    if not isinstance(data, Mapping):
        raise DataError(f"Operation '{name}' expects a mapping as data.")
    data = normalize_params(data)
    try:
        if unpack == "regression":
            return (data["X"], data["y"] if "y" in data else data["Y"])
        if unpack == "residuals":
            second = data["regressors"] if "regressors" in data else data["independent"]
            return (data["residuals"], second)
        if unpack == "markov":
            return (data["transition_matrix"], data["initial_state"])
    except KeyError as exc:
        raise DataError(f"Operation '{name}' data is missing key {exc}.") from exc
    raise DomainError(f"Operation '{name}' has an unknown unpack mode '{unpack}'.")


def call(operation: str, data=None, params: Optional[Mapping[str, Any]] = None):
    """Dispatch ``operation`` with ``data`` unpacked and ``params`` as keywords.

    Raises:
        DomainError: For an unknown operation name or params the operation
            does not accept.
        DataError: When ``data`` does not have the shape the operation needs.
    """
    try:
        entry = OPERATIONS[operation]
    except KeyError as exc:
        raise DomainError(
            f"Unknown operation '{operation}'. Available: {sorted(OPERATIONS)}"
        ) from exc
    args = _unpack(operation, entry.unpack, data)
    kwargs = normalize_params(params)
    try:
        inspect.signature(entry.func).bind(*args, **kwargs)
    except TypeError as exc:
        raise DomainError(f"Invalid params for operation '{operation}': {exc}") from exc
    logger.debug("api.call %s with params %s", operation, sorted(kwargs))
    return entry.func(*args, **kwargs)


def available_operations() -> list:
    return sorted(OPERATIONS)
