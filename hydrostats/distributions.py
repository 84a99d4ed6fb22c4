"""
Probability density and mass functions, samplers and event generators.

Distributions are stateless: parameters are passed on every call. Densities
return 0 outside the support; parameters that would produce non-finite
results (non-positive scale, probabilities outside their range) raise
:class:`DomainError`.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Dict, List, Sequence

import numpy as np

from .errors import DataError, DomainError
from .series import make_rng
from .special import binomial_coefficient, gamma, log_gamma

logger = logging.getLogger(__name__)

SQRT_2PI = math.sqrt(2 * math.pi)
# largest argument math.exp accepts with room to spare
MAX_EXP_ARGUMENT = 700.0


def _positive(value: float, name: str) -> None:
    if value is None or not value > 0 or not math.isfinite(value):
        raise DomainError(f"{name} must be a positive finite number, got {value}.")


def _probability(p: float, name: str = "p", open_low: bool = False, open_high: bool = False) -> None:
    low_ok = p > 0 if open_low else p >= 0
    high_ok = p < 1 if open_high else p <= 1
    if not (low_ok and high_ok):
        raise DomainError(f"{name} must be a probability in range, got {p}.")


def normal_pdf(x: float, mu: float = 0.0, sigma: float = 1.0) -> float:
    _positive(sigma, "sigma")
    z = (x - mu) / sigma
    return math.exp(-0.5 * z * z) / (sigma * SQRT_2PI)


def lognormal_pdf(x: float, mu: float = 0.0, sigma: float = 1.0) -> float:
    _positive(sigma, "sigma")
    if x <= 0:
        return 0.0
    z = (math.log(x) - mu) / sigma
    return math.exp(-0.5 * z * z) / (x * sigma * SQRT_2PI)


def exponential_pdf(x: float, rate: float = 1.0) -> float:
    _positive(rate, "rate")
    if x < 0:
        return 0.0
    return rate * math.exp(-rate * x)


def gamma_pdf(x: float, shape: float, scale: float = 1.0) -> float:
    """Gamma density with shape ``k`` and scale ``theta``.

    At ``x == 0`` the density is 0 for ``shape > 1``, ``1/scale`` for
    ``shape == 1`` and infinite for ``shape < 1``.
    """
    _positive(shape, "shape")
    _positive(scale, "scale")
    if x < 0:
        return 0.0
    if x == 0:
        if shape > 1:
            return 0.0
        return 1.0 / scale if shape == 1 else math.inf
    log_pdf = (shape - 1) * math.log(x) - x / scale - log_gamma(shape) - shape * math.log(scale)
    return math.exp(log_pdf)


def beta_pdf(x: float, a: float, b: float) -> float:
    _positive(a, "a")
    _positive(b, "b")
    if x < 0 or x > 1:
        return 0.0
    if x == 0 or x == 1:
        edge_shape = a if x == 0 else b
        if edge_shape > 1:
            return 0.0
        if edge_shape < 1:
            return math.inf
        return 1.0 / _beta_function(a, b)
    log_pdf = (a - 1) * math.log(x) + (b - 1) * math.log(1 - x)
    return math.exp(log_pdf - math.log(_beta_function(a, b)))


def _beta_function(a: float, b: float) -> float:
    if a + b < 50:
        return gamma(a) * gamma(b) / gamma(a + b)
    return math.exp(log_gamma(a) + log_gamma(b) - log_gamma(a + b))


def weibull_pdf(x: float, shape: float, scale: float = 1.0) -> float:
    _positive(shape, "shape")
    _positive(scale, "scale")
    if x < 0:
        return 0.0
    if x == 0:
        if shape > 1:
            return 0.0
        return 1.0 / scale if shape == 1 else math.inf
    ratio = x / scale
    return (shape / scale) * ratio ** (shape - 1) * math.exp(-(ratio**shape))


def _gumbel_kernel(z: float) -> float:
    # exp(-z) overflows far in the left tail, where the density is 0
    if -z > MAX_EXP_ARGUMENT:
        return 0.0
    return math.exp(-(z + math.exp(-z)))


def gumbel_pdf(x: float, mu: float = 0.0, beta: float = 1.0) -> float:
    _positive(beta, "beta")
    return _gumbel_kernel((x - mu) / beta) / beta


def gev_pdf(x: float, mu: float = 0.0, sigma: float = 1.0, xi: float = 0.0) -> float:
    """Generalized Extreme Value density.

    ``xi == 0`` reduces to the Gumbel density; otherwise points where
    ``1 + xi * z <= 0`` lie outside the support and return 0.
    """
    _positive(sigma, "sigma")
    z = (x - mu) / sigma
    if xi == 0:
        return _gumbel_kernel(z) / sigma
    t = 1.0 + xi * z
    if t <= 0:
        return 0.0
    log_t = math.log(t)
    inner = -log_t / xi
    if inner > MAX_EXP_ARGUMENT:
        return 0.0
    return math.exp(-(1.0 / xi + 1.0) * log_t - math.exp(inner)) / sigma


def uniform_pdf(x: float, a: float = 0.0, b: float = 1.0) -> float:
    if not b > a:
        raise DomainError("uniform_pdf requires b > a.")
    return 1.0 / (b - a) if a <= x <= b else 0.0


def bernoulli_pmf(k: int, p: float) -> float:
    _probability(p)
    if k == 1:
        return p
    if k == 0:
        return 1.0 - p
    return 0.0


def binomial_pmf(k: int, n: int, p: float) -> float:
    _probability(p)
    if n < 0:
        raise DomainError("binomial_pmf requires n >= 0.")
    if k < 0 or k > n:
        return 0.0
    return binomial_coefficient(n, k) * p**k * (1 - p) ** (n - k)


def geometric_pmf(k: int, p: float) -> float:
    """Probability that the first success occurs on trial ``k`` (k >= 1)."""
    _probability(p, open_low=True)
    if k < 1:
        return 0.0
    return (1 - p) ** (k - 1) * p


def log_series_pmf(k: int, p: float) -> float:
    """Logarithmic series mass ``-p**k / (k ln(1 - p))`` for ``k >= 1``."""
    _probability(p, open_low=True, open_high=True)
    if k < 1:
        return 0.0
    return -(p**k) / (k * math.log(1 - p))


def multinomial_pmf(counts: Sequence[int], probabilities: Sequence[float]) -> float:
    probs = _validated_probabilities(probabilities)
    counts = [int(c) for c in counts]
    if len(counts) != len(probs):
        raise DataError("counts and probabilities must have equal length.")
    if any(c < 0 for c in counts):
        return 0.0
    n = sum(counts)
    log_pmf = log_gamma(n + 1)
    for c, p in zip(counts, probs):
        if c == 0:
            continue
        if p == 0:
            return 0.0
        log_pmf += c * math.log(p) - log_gamma(c + 1)
    return math.exp(log_pmf)


def multinomial_sample(
    n: int, probabilities: Sequence[float], size: int = 1, rng=None
) -> np.ndarray:
    """Draw ``size`` multinomial count vectors of ``n`` trials each."""
    if n < 0 or size < 1:
        raise DomainError("multinomial_sample requires n >= 0 and size >= 1.")
    probs = _validated_probabilities(probabilities)
    return make_rng(rng).multinomial(n, probs, size=size)


def _validated_probabilities(probabilities: Sequence[float]) -> np.ndarray:
    probs = np.asarray(probabilities, dtype=float)
    if probs.ndim != 1 or len(probs) == 0:
        raise DataError("probabilities must be a non-empty 1-D sequence.")
    if np.any(probs < 0) or not math.isclose(float(np.sum(probs)), 1.0, abs_tol=1e-9):
        raise DomainError("probabilities must be non-negative and sum to 1.")
    return probs


def poisson_process(
    rate: float | None,
    horizon: float,
    mode: str = "time",
    rng=None,
    rate_function: Callable[[float], float] | None = None,
    max_rate: float | None = None,
):
    """Generate Poisson-process events on ``[0, horizon)``.

    Inter-arrival times are drawn as ``-ln(U) / rate``. With ``rate_function``
    the process is non-homogeneous: candidates are drawn at ``max_rate`` and
    kept with probability ``rate_function(t) / max_rate`` (thinning).

    Args:
        rate: Constant event rate per unit time (ignored with
            ``rate_function``).
        horizon: End of the observation window.
        mode: ``"time"`` returns event timestamps; ``"count"`` returns the
            number of events in each unit interval ``[i, i + 1)``.
        rng: Seed or ``numpy.random.Generator``.
    """
    _positive(horizon, "horizon")
    if mode not in ("time", "count"):
        raise DomainError(f"Unknown poisson_process mode '{mode}'.")
    generator = make_rng(rng)
    if rate_function is None:
        _positive(rate, "rate")
        envelope = float(rate)
    else:
        if max_rate is None:
            raise DomainError("max_rate is required with rate_function.")
        _positive(max_rate, "max_rate")
        envelope = float(max_rate)

    events: List[float] = []
    t = 0.0
    while True:
        u = 1.0 - generator.random()
        t += -math.log(u) / envelope
        if t >= horizon:
            break
        if rate_function is not None:
            intensity = float(rate_function(t))
            if intensity > envelope:
                raise DomainError(f"rate_function({t}) exceeds max_rate.")
            if generator.random() > intensity / envelope:
                continue
        events.append(t)
    logger.debug("Generated %d Poisson events over horizon %.3f", len(events), horizon)

    if mode == "time":
        return np.asarray(events, dtype=float)
    bins = int(math.ceil(horizon))
    counts = np.zeros(bins, dtype=int)
    for event in events:
        counts[int(math.floor(event))] += 1
    return counts


def log_pearson3_sample(
    mu: float, sigma: float, skew: float, size: int = 10, rng=None
) -> np.ndarray:
    """Draw values whose logarithm follows the scaled-normal Pearson III shortcut.

    Each draw is ``exp(mu + sigma * z / sqrt(skew))`` with ``z`` a standard
    normal deviate.
    """
    _positive(sigma, "sigma")
    _positive(skew, "skew")
    z = make_rng(rng).standard_normal(int(size))
    return np.exp(mu + sigma * (z / math.sqrt(skew)))


def boxplot_sample(
    minimum: float,
    q1: float,
    median: float,
    q3: float,
    maximum: float,
    size: int = 10,
    rng=None,
) -> np.ndarray:
    """Draw values uniformly within the quartile band chosen at random."""
    if not minimum <= q1 <= median <= q3 <= maximum:
        raise DomainError("box-plot summary must be non-decreasing.")
    generator = make_rng(rng)
    edges = np.array([minimum, q1, median, q3, maximum], dtype=float)
    band = generator.integers(0, 4, size=int(size))
    offset = generator.random(int(size))
    return edges[band] + (edges[band + 1] - edges[band]) * offset


def return_period(probability: float) -> float:
    """Return period ``1 / p`` of an annual exceedance probability."""
    _probability(probability, "probability", open_low=True, open_high=True)
    return 1.0 / probability


PDF_REGISTRY: Dict[str, Callable[..., float]] = {
    "normal": normal_pdf,
    "lognormal": lognormal_pdf,
    "exponential": exponential_pdf,
    "gamma": gamma_pdf,
    "beta": beta_pdf,
    "weibull": weibull_pdf,
    "gumbel": gumbel_pdf,
    "gev": gev_pdf,
    "uniform": uniform_pdf,
    "bernoulli": bernoulli_pmf,
    "binomial": binomial_pmf,
    "geometric": geometric_pmf,
    "logseries": log_series_pmf,
}


def density(name: str, x: float, **params) -> float:
    """Evaluate a named PDF/PMF from :data:`PDF_REGISTRY`."""
    try:
        func = PDF_REGISTRY[name]
    except KeyError as exc:
        raise DomainError(
            f"Unknown distribution '{name}'. Available: {sorted(PDF_REGISTRY)}"
        ) from exc
    return func(x, **params)
