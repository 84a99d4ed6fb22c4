"""Tests for the CSV export layer."""

import pandas as pd

from hydrostats.inference import mann_kendall
from hydrostats.output import results_to_frame, save_results_csv
from hydrostats.resampling import bootstrap


def test_results_to_frame_one_row_per_record(flows):
    results = {
        "gauge_a": mann_kendall(flows),
        "gauge_b": mann_kendall(flows[::-1]),
    }
    frame = results_to_frame(results)
    assert frame.index.name == "Test"
    assert frame.loc["gauge_a", "trend"] == "increasing"
    assert frame.loc["gauge_b", "trend"] == "decreasing"


def test_array_fields_are_left_out_of_the_table(flows):
    frame = results_to_frame([bootstrap(flows, iterations=20, rng=0)])
    assert "replicates" not in frame.columns
    assert "ci_lower" in frame.columns


def test_save_results_csv_round_trips_mapping(flows, tmp_path):
    path = save_results_csv({"gauge": mann_kendall(flows)}, "trend.csv", str(tmp_path / "out"))
    loaded = pd.read_csv(path, index_col=0)
    assert loaded.loc["gauge", "statistic"] == mann_kendall(flows).statistic
