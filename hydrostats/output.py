"""Write result records and summary tables to CSV files."""

from __future__ import annotations

import logging
import os
from typing import Iterable, Mapping, Union

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)


def _as_row(result) -> dict:
    if hasattr(result, "as_dict"):
        row = result.as_dict()
    elif isinstance(result, Mapping):
        row = dict(result)
    else:
        row = {"value": result}
    # array fields (replicates, fitted values) do not fit in a table cell
    return {k: v for k, v in row.items() if np.ndim(v) == 0}


def results_to_frame(results: Union[Mapping[str, object], Iterable]) -> pd.DataFrame:
    """Flatten result records into one row per result.

    Args:
        results: A mapping of label to result, or an iterable of results.
            Results may be frozen records from :mod:`hydrostats.schema`,
            plain mappings or scalars.

    Returns:
        pandas.DataFrame: One row per result; a mapping's keys become the
        ``Test`` index.
    """
    if isinstance(results, Mapping):
        rows = [_as_row(r) for r in results.values()]
        index = pd.Index(list(results.keys()), name="Test")
        return pd.DataFrame(rows, index=index)
    return pd.DataFrame([_as_row(r) for r in results])


def save_results_csv(
    table: Union[pd.DataFrame, pd.Series, Mapping[str, object]],
    filename: str,
    output_dir: str = "output",
) -> str:
    """Save a table to ``output_dir/filename`` and return the path.

    Mappings of results are flattened with :func:`results_to_frame` first.
    """
    if isinstance(table, pd.Series):
        frame = table.to_frame()
    elif isinstance(table, pd.DataFrame):
        frame = table
    else:
        frame = results_to_frame(table)
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, filename)
    frame.to_csv(path)
    logger.info("Saved %d rows to %s", len(frame), path)
    return path
