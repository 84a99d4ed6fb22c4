"""
Goodness-of-fit metrics for modeled against observed series.

Every metric takes ``(observed, modeled)`` of equal length. A perfect model
scores NSE = 1 and index of agreement = 1; predicting the observed mean
scores NSE = 0.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Union

import numpy as np

from .errors import DataError, DomainError
from .series import as_pair


class EfficiencyMetric(str, Enum):
    NSE = "NSE"
    DETERMINATION = "determination"
    AGREEMENT = "agreement"
    RMSE = "RMSE"
    MAE = "MAE"
    MAPE = "MAPE"
    MSE = "MSE"

    @classmethod
    def parse(cls, value) -> "EfficiencyMetric":
        if isinstance(value, cls):
            return value
        aliases = {"r2": cls.DETERMINATION, "d": cls.AGREEMENT}
        key = str(value)
        if key in aliases:
            return aliases[key]
        for member in cls:
            if member.value.lower() == key.lower():
                return member
        raise DomainError(
            f"Unknown efficiency metric '{value}'. Choose from "
            f"{[m.value for m in cls] + ['all']}."
        )


def nse(observed, modeled) -> float:
    """Nash-Sutcliffe efficiency ``1 - sum((m - o)^2) / sum((o - mean(o))^2)``.

    Raises:
        DataError: If ``observed`` is constant.
    """
    obs, mod = as_pair(observed, modeled)
    denom = float(np.sum((obs - np.mean(obs)) ** 2))
    if denom == 0.0:
        raise DataError("NSE is undefined for a constant observed series.")
    return 1.0 - float(np.sum((mod - obs) ** 2)) / denom


def coefficient_of_determination(observed, modeled) -> float:
    """Squared Pearson correlation of modeled against observed."""
    obs, mod = as_pair(observed, modeled)
    do = obs - np.mean(obs)
    dm = mod - np.mean(mod)
    denom = float(np.sqrt(np.sum(dm**2)) * np.sqrt(np.sum(do**2)))
    if denom == 0.0:
        raise DataError("Coefficient of determination is undefined for a constant series.")
    return (float(np.sum(dm * do)) / denom) ** 2


def index_of_agreement(observed, modeled) -> float:
    """Willmott's index of agreement ``d``."""
    obs, mod = as_pair(observed, modeled)
    mean_obs = np.mean(obs)
    denom = float(np.sum((np.abs(mod - mean_obs) + np.abs(obs - mean_obs)) ** 2))
    if denom == 0.0:
        raise DataError("Index of agreement is undefined when both series equal the observed mean.")
    return 1.0 - float(np.sum((obs - mod) ** 2)) / denom


def mse(observed, modeled) -> float:
    obs, mod = as_pair(observed, modeled)
    return float(np.mean((obs - mod) ** 2))


def rmse(observed, modeled) -> float:
    return float(np.sqrt(mse(observed, modeled)))


def mae(observed, modeled) -> float:
    obs, mod = as_pair(observed, modeled)
    return float(np.mean(np.abs(obs - mod)))


def mape(observed, modeled) -> float:
    """Mean absolute percentage error, in percent.

    Raises:
        DomainError: If any observed value is zero.
    """
    obs, mod = as_pair(observed, modeled)
    if np.any(obs == 0):
        raise DomainError("MAPE is undefined when an observed value is zero.")
    return float(np.mean(np.abs((obs - mod) / obs)) * 100.0)


METRICS = {
    EfficiencyMetric.NSE: nse,
    EfficiencyMetric.DETERMINATION: coefficient_of_determination,
    EfficiencyMetric.AGREEMENT: index_of_agreement,
    EfficiencyMetric.RMSE: rmse,
    EfficiencyMetric.MAE: mae,
    EfficiencyMetric.MAPE: mape,
    EfficiencyMetric.MSE: mse,
}


def efficiencies(observed, modeled, metric="NSE") -> Union[float, Dict[str, float]]:
    """Evaluate one metric, or every metric when ``metric="all"``.

    With ``"all"`` the result is keyed by metric value, plus the short
    keys ``r2`` and ``d`` for determination and agreement; metrics that are
    undefined for the data (for example MAPE with a zero observation) are
    reported as NaN instead of aborting the whole table.
    """
    if str(metric).lower() == "all":
        as_pair(observed, modeled)
        table = {}
        for kind, func in METRICS.items():
            try:
                table[kind.value] = func(observed, modeled)
            except (DataError, DomainError):
                table[kind.value] = float("nan")
        table["r2"] = table[EfficiencyMetric.DETERMINATION.value]
        table["d"] = table[EfficiencyMetric.AGREEMENT.value]
        return table
    return METRICS[EfficiencyMetric.parse(metric)](observed, modeled)
