"""
Monte Carlo, Markov-chain and random-walk drivers.

Each driver is a plain loop that either calls a caller-supplied callback
once per iteration or falls back to a built-in generator. All randomness
comes from a ``numpy.random.Generator`` so runs are reproducible from a
seed.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, List, Optional

import numpy as np

from .config import DEFAULTS
from .errors import DataError, DomainError, raise_if_cancelled
from .series import as_matrix, as_series, make_rng

logger = logging.getLogger(__name__)


def _check_iterations(iterations: int) -> int:
    if int(iterations) != iterations or iterations < 1:
        raise DomainError(f"iterations must be a positive integer, got {iterations}.")
    return int(iterations)


def run_simulation(data, multiplier: float = 1.0, rng=None) -> float:
    """Draw one value from ``Normal(mean(data), multiplier * sd(data))``.

    ``data`` may be a single series or a list of series; nested series are
    flattened before the moments are taken.
    """
    if multiplier < 0:
        raise DomainError("multiplier must be non-negative.")
    values = as_series(_flatten(data), "data")
    generator = make_rng(rng)
    return float(generator.normal(np.mean(values), np.std(values) * multiplier))


def _flatten(data):
    if len(data) > 0 and np.ndim(data[0]) > 0:
        return np.concatenate([np.ravel(np.asarray(row, dtype=float)) for row in data])
    return data


def run_monte_carlo(
    data,
    iterations: int = DEFAULTS.simulation_iterations,
    callback: Optional[Callable] = None,
    multiplier: float = 1.0,
    rng=None,
    cancel=None,
) -> List:
    """Repeat a simulation ``iterations`` times and collect the results.

    Args:
        data: Payload handed to ``callback`` or to :func:`run_simulation`.
        iterations (int): Number of repetitions.
        callback: Optional ``callback(data, rng)`` returning one result.
        multiplier (float): Spread passed to :func:`run_simulation`.
        rng: Seed or Generator.
        cancel: Optional object with ``is_set()``.

    Returns:
        list: One entry per iteration.
    """
    count = _check_iterations(iterations)
    generator = make_rng(rng)
    results = []
    for _ in range(count):
        raise_if_cancelled(cancel, "run_monte_carlo")
        if callback is not None:
            results.append(callback(data, generator))
        else:
            results.append(run_simulation(data, multiplier=multiplier, rng=generator))
    logger.debug("Monte Carlo finished %d iterations", count)
    return results


def run_vegas(
    data,
    iterations: int = DEFAULTS.simulation_iterations,
    callback: Optional[Callable] = None,
    multiplier: float = 1.0,
    rng=None,
    cancel=None,
) -> List:
    """Monte Carlo over several series at once.

    Without a callback each iteration draws one value per series of
    ``data`` with :func:`run_simulation`, so every entry of the result is a
    list as long as ``data``. ``callback(data, rng)`` replaces that step.
    """
    if len(data) == 0:
        raise DataError("run_vegas needs at least one series.")
    count = _check_iterations(iterations)
    generator = make_rng(rng)
    results = []
    for _ in range(count):
        raise_if_cancelled(cancel, "run_vegas")
        if callback is not None:
            results.append(callback(data, generator))
        else:
            results.append(
                [run_simulation(row, multiplier=multiplier, rng=generator) for row in data]
            )
    logger.debug("Vegas run finished %d iterations over %d series", count, len(data))
    return results


def validate_transition_matrix(
    transition_matrix, tol: float = DEFAULTS.transition_row_tolerance
) -> np.ndarray:
    """Return the matrix as floats after checking it is square and row-stochastic."""
    matrix = as_matrix(transition_matrix, "transition_matrix")
    if matrix.shape[0] != matrix.shape[1]:
        raise DataError(f"transition_matrix must be square, got shape {matrix.shape}.")
    if np.any(matrix < 0):
        raise DomainError("transition probabilities must be non-negative.")
    row_sums = matrix.sum(axis=1)
    if np.any(np.abs(row_sums - 1.0) > tol):
        raise DomainError(f"transition_matrix rows must sum to 1, got {row_sums.tolist()}.")
    return matrix


def next_state(transition_matrix, current_state: int, rng=None) -> int:
    """Select the next state by inverse-CDF sampling of the current row."""
    matrix = np.asarray(transition_matrix, dtype=float)
    n_states = matrix.shape[0]
    if int(current_state) != current_state or not 0 <= current_state < n_states:
        raise DomainError(f"state must be an integer in [0, {n_states}), got {current_state}.")
    generator = make_rng(rng)
    u = generator.random()
    cumulative = np.cumsum(matrix[int(current_state)])
    state = int(np.searchsorted(cumulative, u, side="right"))
    # rows that sum to just under 1 can leave u past the last edge
    return min(state, n_states - 1)


def run_markov_chain(
    transition_matrix,
    initial_state: int,
    iterations: int = DEFAULTS.simulation_iterations,
    callback: Optional[Callable] = None,
    rng=None,
    cancel=None,
) -> List[int]:
    """Thread a discrete state through ``iterations`` transitions.

    ``callback(matrix, current_state, rng)``, when given, replaces the
    built-in :func:`next_state` step. The initial state is not included in
    the returned path.
    """
    matrix = validate_transition_matrix(transition_matrix)
    count = _check_iterations(iterations)
    generator = make_rng(rng)
    current = int(initial_state)
    if current != initial_state or not 0 <= current < matrix.shape[0]:
        raise DomainError(f"initial_state must index a row of transition_matrix, got {initial_state}.")
    path = []
    for _ in range(count):
        raise_if_cancelled(cancel, "run_markov_chain")
        if callback is not None:
            current = callback(matrix, current, generator)
        else:
            current = next_state(matrix, current, generator)
        path.append(current)
    return path


def box_muller(generator: np.random.Generator) -> float:
    """One standard normal deviate from two uniforms."""
    u1 = 1.0 - generator.random()
    u2 = generator.random()
    return math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)


def random_walk(
    steps: int,
    start: float = 0.0,
    drift: float = 0.0,
    volatility: float = 1.0,
    rng=None,
    cancel=None,
) -> np.ndarray:
    """Gaussian random walk ``x_t = x_{t-1} + drift + volatility * z_t``.

    Returns ``steps + 1`` positions, beginning with ``start``.
    """
    if int(steps) != steps or steps < 0:
        raise DomainError(f"steps must be a non-negative integer, got {steps}.")
    if volatility < 0:
        raise DomainError("volatility must be non-negative.")
    generator = make_rng(rng)
    path = np.empty(int(steps) + 1)
    path[0] = start
    for t in range(1, int(steps) + 1):
        raise_if_cancelled(cancel, "random_walk")
        path[t] = path[t - 1] + drift + volatility * box_muller(generator)
    return path
