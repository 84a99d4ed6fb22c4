import math

import numpy as np
import pandas as pd
import pytest

from hydrostats import descriptive
from hydrostats.errors import DataError, DomainError


def test_mean_and_median_basic_cases():
    assert descriptive.mean([1, 2, 3, 4, 5]) == 3.0
    assert descriptive.median([1, 2, 3, 4]) == 2.5
    assert descriptive.median([5, 1, 3]) == 3.0


def test_population_stddev_textbook_example():
    assert descriptive.stddev([2, 4, 4, 4, 5, 5, 7, 9]) == pytest.approx(2.0)
    assert descriptive.variance([2, 4, 4, 4, 5, 5, 7, 9], ddof=1) == pytest.approx(32 / 7)


def test_single_value_series():
    assert descriptive.mean([7.0]) == 7.0
    assert descriptive.median([7.0]) == 7.0
    assert descriptive.stddev([7.0]) == 0.0


def test_empty_series_raises():
    with pytest.raises(DataError):
        descriptive.mean([])
    with pytest.raises(ValueError):
        descriptive.median([])


def test_non_finite_input_raises():
    with pytest.raises(DataError):
        descriptive.mean([1.0, float("nan"), 3.0])


def test_quantile_interpolates_and_validates():
    data = [10, 20, 30, 40]
    assert descriptive.quantile(data, 0.0) == 10
    assert descriptive.quantile(data, 1.0) == 40
    assert descriptive.quantile(data, 0.5) == pytest.approx(25.0)
    assert descriptive.quantile(data, 0.25) == pytest.approx(np.quantile(data, 0.25))
    with pytest.raises(DomainError):
        descriptive.quantile(data, 1.5)


def test_shape_statistics_match_reference_formulas(noisy_series):
    from scipy import stats

    assert descriptive.skewness(noisy_series) == pytest.approx(
        stats.skew(noisy_series, bias=False)
    )
    assert descriptive.kurtosis(noisy_series) == pytest.approx(
        stats.kurtosis(noisy_series, bias=False)
    )


def test_skewness_of_constant_series_raises():
    with pytest.raises(DataError):
        descriptive.skewness([3, 3, 3, 3])


def test_unique_keeps_first_appearance_order():
    assert descriptive.unique([3, 1, 3, 2, 1]).tolist() == [3.0, 1.0, 2.0]
    assert descriptive.frequency([3, 1, 3]) == {1.0: 1, 3.0: 2}


def test_standardize_and_correlation():
    z = descriptive.standardize([1, 2, 3, 4, 5])
    assert np.mean(z) == pytest.approx(0.0)
    assert np.std(z) == pytest.approx(1.0)
    assert descriptive.correlation([1, 2, 3], [2, 4, 6]) == pytest.approx(1.0)
    with pytest.raises(DataError):
        descriptive.correlation([1, 2, 3], [1, 2])


def test_value_range_spans_extremes():
    grid = descriptive.value_range([4, 1, 9], 4)
    assert len(grid) == 5
    assert grid[0] == 1 and grid[-1] == 9


def test_summary_reports_nan_for_undefined_shape():
    table = descriptive.summary([1.0, 2.0])
    assert isinstance(table, pd.Series)
    assert table["Mean"] == 1.5
    assert table["Number of values"] == 2
    assert math.isnan(table["Skewness"])
    assert math.isnan(table["Kurtosis"])


def test_summary_table_one_column_per_series(flows):
    frame = descriptive.summary_table({"gauge_a": flows, "gauge_b": flows * 2})
    assert list(frame.columns) == ["gauge_a", "gauge_b"]
    assert frame.index.name == "Metric"
    assert frame.loc["Mean", "gauge_b"] == pytest.approx(2 * frame.loc["Mean", "gauge_a"])
