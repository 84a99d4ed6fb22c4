"""Pytest configuration: repository-relative imports, headless plotting and shared series."""

import os
import sys

import matplotlib
import numpy as np
import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

matplotlib.use("Agg")


@pytest.fixture
def flows():
    """A short daily discharge record with a mild upward drift."""
    return np.array(
        [12.1, 13.4, 11.8, 14.2, 15.0, 14.6, 16.3, 15.9, 17.2, 18.0, 17.5, 19.1]
    )


@pytest.fixture
def noisy_series():
    rng = np.random.default_rng(42)
    return rng.normal(10.0, 2.0, size=200)
