import math

import numpy as np
import pytest

from hydrostats import efficiency
from hydrostats.errors import DataError, DomainError


def test_nse_perfect_and_mean_models():
    obs = [1.0, 2.0, 3.0]
    assert efficiency.efficiencies(obs, [1.0, 2.0, 3.0], "NSE") == 1.0
    assert efficiency.efficiencies(obs, [2.0, 2.0, 2.0], "NSE") == 0.0


def test_nse_constant_observations_raise():
    with pytest.raises(DataError):
        efficiency.nse([2.0, 2.0, 2.0], [1.0, 2.0, 3.0])


def test_determination_is_squared_pearson(flows):
    modeled = flows * 0.8 + np.sin(np.arange(len(flows)))
    r = np.corrcoef(flows, modeled)[0, 1]
    assert efficiency.coefficient_of_determination(flows, modeled) == pytest.approx(r**2)
    assert efficiency.efficiencies(flows, modeled, "r2") == pytest.approx(r**2)


def test_index_of_agreement_bounds(flows):
    assert efficiency.index_of_agreement(flows, flows) == 1.0
    d = efficiency.index_of_agreement(flows, flows + 1.0)
    assert 0.0 <= d < 1.0


def test_error_metrics():
    obs = [2.0, 4.0, 5.0]
    mod = [1.0, 4.0, 7.0]
    assert efficiency.mse(obs, mod) == pytest.approx(5.0 / 3.0)
    assert efficiency.rmse(obs, mod) == pytest.approx(math.sqrt(5.0 / 3.0))
    assert efficiency.mae(obs, mod) == pytest.approx(1.0)
    assert efficiency.mape(obs, mod) == pytest.approx((0.5 + 0.0 + 0.4) / 3 * 100)


def test_mape_with_zero_observation_raises():
    with pytest.raises(DomainError):
        efficiency.mape([0.0, 1.0], [1.0, 1.0])


def test_all_metrics_table_marks_undefined_as_nan():
    table = efficiency.efficiencies([0.0, 1.0, 2.0], [0.0, 1.0, 2.5], "all")
    assert set(table) == {m.value for m in efficiency.EfficiencyMetric} | {"r2", "d"}
    assert table["r2"] == table["determination"]
    assert table["d"] == table["agreement"]
    assert math.isnan(table["MAPE"])
    assert table["NSE"] == pytest.approx(1.0 - 0.25 / 2.0)


def test_length_mismatch_and_unknown_metric():
    with pytest.raises(DataError):
        efficiency.efficiencies([1.0, 2.0], [1.0], "NSE")
    with pytest.raises(DataError):
        efficiency.efficiencies([1.0, 2.0], [1.0], "all")
    with pytest.raises(DomainError):
        efficiency.efficiencies([1.0, 2.0], [1.0, 2.0], "KGE")
