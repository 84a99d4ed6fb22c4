import numpy as np
import pytest

import hydrostats
from hydrostats import api
from hydrostats.errors import DataError, DomainError


def test_call_series_operation():
    assert hydrostats.call("mean", [1, 2, 3, 4, 5]) == 3.0
    assert api.call("quantile", [10, 20, 30], {"q": 0.5}) == 20.0


def test_call_translates_camel_case_params():
    smoothed = api.call("simple_moving_average", [1.0, 2.0, 3.0, 4.0], {"windowSize": 2})
    assert smoothed.tolist() == [1.5, 2.5, 3.5]
    assert api.call("efficiencies", [[1, 2, 3], [1, 2, 3]], {"type": "NSE"}) == 1.0


def test_call_pair_and_groups():
    result = api.call("t_test_paired", [[1.0, 2.0, 4.0], [1.5, 2.0, 3.0]])
    assert result.df == 2
    anova = api.call("anova", [[1.0, 2.0, 3.0], [4.0, 5.0, 6.5]])
    assert anova.df_between == 1


def test_call_regression_mapping():
    x = np.arange(8, dtype=float)
    fit = api.call("regression", {"X": x, "y": 1.0 + 2.0 * x})
    assert fit.slopes[0] == pytest.approx(2.0)
    with pytest.raises(DataError):
        api.call("regression", {"X": x})


def test_call_markov_and_param_only_operations():
    path = api.call(
        "markov_chain",
        {"transitionMatrix": [[0.0, 1.0], [1.0, 0.0]], "initialState": 0},
        {"iterations": 3, "rng": 0},
    )
    assert path == [1, 0, 1]
    walk = api.call("random_walk", params={"steps": 4, "rng": 1})
    assert len(walk) == 5
    assert api.call("density", params={"name": "uniform", "x": 0.5}) == 1.0


def test_unknown_operation_and_missing_data():
    with pytest.raises(DomainError):
        api.call("nonexistent", [1, 2, 3])
    with pytest.raises(DataError):
        api.call("mean")
    with pytest.raises(DataError):
        api.call("correlation", [[1, 2, 3]])


def test_available_operations_sorted():
    names = api.available_operations()
    assert names == sorted(names)
    assert {"mann_kendall", "bootstrap", "efficiencies"} <= set(names)


def test_outlier_params_use_collaborator_names():
    values = [10, 11, 12, 11, 10, 12, 11, 100]
    kept = api.call("interoutliers", values, {"q1": 0.1, "q2": 0.9})
    assert 100 not in kept.tolist()
    flagged = api.call(
        "normoutliers", [0.0, 0.0, 0.0, 0.0, 10.0], {"lowerBound": -1.5, "upperBound": 1.5}
    )
    assert flagged.tolist() == [10.0]


def test_unknown_param_raises_domain_error():
    with pytest.raises(DomainError, match="mean"):
        api.call("mean", [1.0, 2.0, 3.0], {"window": 3})


def test_call_vegas_over_several_series():
    results = api.call("vegas", [[1.0, 2.0, 3.0], [4.0, 5.0]], {"iterations": 2, "multiplier": 0.0})
    assert results == [[2.0, 4.5], [2.0, 4.5]]
