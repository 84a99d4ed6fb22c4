"""Define result records and standardized summary labels."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field

import numpy as np


@dataclass(frozen=True)
class SummaryLabels:
    """Row labels used by :func:`hydrostats.descriptive.summary`.

    Rows run from count and extremes through central tendency and spread
    to shape.
    """

    count: str = "Number of values"
    minimum: str = "Minimum value"
    maximum: str = "Maximum value"
    total: str = "Sum"
    mean: str = "Mean"
    median: str = "Median"
    stddev: str = "Standard deviation"
    variance: str = "Variance"
    skewness: str = "Skewness"
    kurtosis: str = "Kurtosis"


class _Record:
    def as_dict(self) -> dict:
        out = asdict(self)
        for key, value in out.items():
            if isinstance(value, np.ndarray):
                out[key] = value.tolist()
        return out


@dataclass(frozen=True)
class MannKendallResult(_Record):
    """Mann-Kendall trend test outcome."""

    statistic: int
    variance: float
    z: float
    p_value: float
    trend: str
    significant: bool
    alpha: float


@dataclass(frozen=True)
class KSResult(_Record):
    """Two-sample Kolmogorov-Smirnov outcome with asymptotic p-value."""

    statistic: float
    p_value: float
    reject: bool
    alpha: float


@dataclass(frozen=True)
class TTestResult(_Record):
    """Student t statistic and its degrees of freedom.

    No p-value is attached; combine with
    :func:`hydrostats.inference.parametric.t_distribution_pvalue` if needed.
    """

    statistic: float
    df: int


@dataclass(frozen=True)
class FTestResult(_Record):
    statistic: float
    df1: int
    df2: int


@dataclass(frozen=True)
class AnovaResult(_Record):
    """One-way ANOVA partition."""

    statistic: float
    df_between: int
    df_within: int
    ss_between: float
    ss_within: float


@dataclass(frozen=True)
class RankTestResult(_Record):
    """Rank-based test statistic with normal-approximation p-value."""

    statistic: float
    z: float
    p_value: float


@dataclass(frozen=True)
class NormalityResult(_Record):
    statistic: float
    p_value: float
    approximate: bool = False


@dataclass(frozen=True)
class HeteroscedasticityResult(_Record):
    """Heteroscedasticity statistic; p-values use the chi-square series."""

    statistic: float
    p_value: float
    df: int
    approximate: bool = True


@dataclass(frozen=True)
class RegressionResult(_Record):
    """Ordinary least squares fit with intercept first in ``coefficients``."""

    coefficients: np.ndarray
    fitted: np.ndarray
    residuals: np.ndarray
    r_squared: float

    @property
    def intercept(self) -> float:
        return float(self.coefficients[0])

    @property
    def slopes(self) -> np.ndarray:
        return self.coefficients[1:]


@dataclass(frozen=True)
class BootstrapResult(_Record):
    """Bootstrap estimate summary with a percentile confidence interval."""

    statistic: str
    original: float
    mean: float
    bias: float
    standard_error: float
    ci_lower: float
    ci_upper: float
    alpha: float
    iterations: int
    replicates: np.ndarray = field(repr=False)
    undefined: int = 0

    @property
    def ci_width(self) -> float:
        return self.ci_upper - self.ci_lower
