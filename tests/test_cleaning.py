import math

import numpy as np
import pytest

from hydrostats import cleaning
from hydrostats.errors import DataError, DomainError


def test_gap_mask_matches_all_default_sentinels():
    mask = cleaning.gap_mask([1.0, float("nan"), None, -9999, 5.0])
    assert mask.tolist() == [False, True, True, True, False]
    assert cleaning.count_gaps([1, -9999, 3]) == 1


def test_remove_gaps_keeps_time_axis_aligned():
    time, values = cleaning.remove_gaps([1.0, -9999, 3.0], time=["t0", "t1", "t2"])
    assert time.tolist() == ["t0", "t2"]
    assert values.tolist() == [1.0, 3.0]


def test_fill_gaps_interpolate_uses_neighbours():
    filled = cleaning.fill_gaps([1.0, -9999, 3.0, float("nan")])
    assert filled.tolist() == [1.0, 2.0, 3.0, 3.0]


def test_fill_gaps_mean_and_unknown_method():
    filled = cleaning.fill_gaps([2.0, -9999, 4.0], method="mean")
    assert filled[1] == 3.0
    with pytest.raises(DomainError):
        cleaning.fill_gaps([1.0, 2.0], method="spline")
    with pytest.raises(DataError):
        cleaning.fill_gaps([-9999, -9999])


def test_forward_fill_reports_replaced_positions():
    filled, replaced = cleaning.forward_fill([-9999, 1.0, -9999, -9999, 4.0])
    assert math.isnan(filled[0])
    assert filled[1:].tolist() == [1.0, 1.0, 1.0, 4.0]
    assert replaced == [2, 3]


def test_find_time_gaps_numeric_and_datetime():
    assert cleaning.find_time_gaps([0, 15, 30, 60, 75], 15) == [30, 60]
    stamps = ["2024-01-01 00:00", "2024-01-01 01:00", "2024-01-01 02:00", "2024-01-01 03:00"]
    assert cleaning.find_time_gaps(stamps, 60) == []


def test_interoutliers_drops_extreme_value():
    values = [10, 11, 12, 11, 10, 12, 11, 100]
    kept = cleaning.interoutliers(values)
    assert 100 not in kept.tolist()
    assert len(kept) == 7


def test_normoutliers_returns_outliers_only():
    values = np.array([0.0, 0.0, 0.0, 0.0, 10.0])
    flagged = cleaning.normoutliers(values, lower=-1.5, upper=1.5)
    assert flagged.tolist() == [10.0]


def test_remove_outliers_methods():
    values = [10, 11, 12, 11, 10, 12, 11, 100]
    assert 100 not in cleaning.remove_outliers(values, method="iqr").tolist()
    assert 100 not in cleaning.remove_outliers(values, method="normalized", low=-2, high=2).tolist()
    with pytest.raises(DomainError):
        cleaning.remove_outliers(values, method="hampel")
