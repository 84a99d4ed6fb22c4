"""Command-line front end: read a CSV with pandas and run engine operations."""

from __future__ import annotations

import argparse
import json
import logging
from typing import Dict, List

import numpy as np
import pandas as pd

from . import api
from .cleaning import gap_mask, remove_gaps
from .config import DEFAULTS
from .descriptive import summary_table
from .efficiency import efficiencies
from .errors import DataError, HydroStatsError
from .inference import mann_kendall
from .output import results_to_frame, save_results_csv

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = "output"


def load_table(path: str) -> pd.DataFrame:
    """Read a CSV into a DataFrame, raising :class:`DataError` when unreadable."""
    try:
        frame = pd.read_csv(path)
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise DataError(f"Could not read '{path}': {exc}") from exc
    logger.info("Loaded %s with shape %s", path, frame.shape)
    return frame


def column_values(frame: pd.DataFrame, column: str, drop_gaps: bool = True) -> np.ndarray:
    """Numeric values of one column, with gap sentinels removed."""
    if column not in frame.columns:
        raise DataError(f"Column '{column}' not found. Available: {list(frame.columns)}")
    values = pd.to_numeric(frame[column], errors="coerce").to_numpy(dtype=float)
    if drop_gaps:
        values = remove_gaps(values)
    return values


def parse_params(pairs: List[str] | None) -> Dict[str, object]:
    """Turn ``key=value`` strings into a params mapping.

    Values are decoded as JSON where possible (``alpha=0.1``,
    ``q=[0.25]``); anything else stays a string.
    """
    params: Dict[str, object] = {}
    for pair in pairs or []:
        key, sep, raw = pair.partition("=")
        if not sep or not key:
            raise DataError(f"Parameter '{pair}' must look like key=value.")
        try:
            params[key] = json.loads(raw)
        except json.JSONDecodeError:
            params[key] = raw
    return params


def _cmd_summary(args: argparse.Namespace) -> int:
    frame = load_table(args.input)
    names = args.columns or [
        c for c in frame.columns if pd.api.types.is_numeric_dtype(frame[c])
    ]
    if not names:
        raise DataError("No numeric columns to summarize.")
    table = summary_table({name: column_values(frame, name) for name in names})
    print(table.to_string())
    path = save_results_csv(table, "summary.csv", args.output_dir)
    print(f"Wrote summary table to {path}")
    return 0


def _cmd_trend(args: argparse.Namespace) -> int:
    frame = load_table(args.input)
    results = {
        name: mann_kendall(column_values(frame, name), alpha=args.alpha)
        for name in args.columns
    }
    table = results_to_frame(results)
    print(table.to_string())
    if args.output_dir:
        save_results_csv(table, "trend.csv", args.output_dir)
    return 0


def _cmd_efficiency(args: argparse.Namespace) -> int:
    frame = load_table(args.input)
    missing = {args.observed, args.modeled} - set(frame.columns)
    if missing:
        raise DataError(f"Columns {sorted(missing)} not found in {args.input}.")
    obs, mod = aligned_columns(frame, [args.observed, args.modeled])
    result = efficiencies(obs, mod, args.metric)
    if isinstance(result, dict):
        for name, value in result.items():
            print(f"{name}: {value:.6g}")
    else:
        print(f"{args.metric}: {result:.6g}")
    return 0


def aligned_columns(frame: pd.DataFrame, columns: List[str]) -> List[np.ndarray]:
    """Values of several columns with every row that has a gap in any of them removed."""
    values = [column_values(frame, name, drop_gaps=False) for name in columns]
    keep = np.ones(len(frame), dtype=bool)
    for column in values:
        keep &= ~gap_mask(column)
    dropped = int((~keep).sum())
    if dropped:
        logger.info("Dropped %d rows with gaps across %s", dropped, columns)
    return [column[keep] for column in values]


def _cmd_run(args: argparse.Namespace) -> int:
    frame = load_table(args.input)
    if api.OPERATIONS[args.operation].unpack in ("pair", "pair_raw"):
        # paired operations compare row by row
        columns = aligned_columns(frame, args.columns)
    else:
        columns = [column_values(frame, name) for name in args.columns]
    data = columns[0] if len(columns) == 1 else columns
    result = api.call(args.operation, data, parse_params(args.param))
    if hasattr(result, "as_dict"):
        for key, value in result.as_dict().items():
            if np.ndim(value) == 0:
                print(f"{key}: {value}")
    elif isinstance(result, (pd.Series, pd.DataFrame)):
        print(result.to_string())
    else:
        print(result)
    return 0


def _build_arg_parser() -> argparse.ArgumentParser:
    """Build command-line parser for module execution."""
    parser = argparse.ArgumentParser(
        prog="hydrostats", description="Statistics for hydrological time series."
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_summary = sub.add_parser("summary", help="Basic statistics per column.")
    p_summary.add_argument("--input", required=True, help="Path to input CSV file.")
    p_summary.add_argument("--columns", nargs="+", default=None, help="Columns to summarize.")
    p_summary.add_argument(
        "--output-dir",
        default=DEFAULT_OUTPUT_DIR,
        help=f"Output directory (default: {DEFAULT_OUTPUT_DIR}).",
    )
    p_summary.set_defaults(handler=_cmd_summary)

    p_trend = sub.add_parser("trend", help="Mann-Kendall trend test per column.")
    p_trend.add_argument("--input", required=True, help="Path to input CSV file.")
    p_trend.add_argument("--columns", nargs="+", required=True)
    p_trend.add_argument("--alpha", type=float, default=DEFAULTS.alpha)
    p_trend.add_argument("--output-dir", default=None, help="Also write trend.csv here.")
    p_trend.set_defaults(handler=_cmd_trend)

    p_eff = sub.add_parser("efficiency", help="Goodness of fit of a modeled column.")
    p_eff.add_argument("--input", required=True, help="Path to input CSV file.")
    p_eff.add_argument("--observed", required=True)
    p_eff.add_argument("--modeled", required=True)
    p_eff.add_argument("--metric", default="all", help="NSE, determination, agreement, RMSE, MAE, MAPE, MSE or all.")
    p_eff.set_defaults(handler=_cmd_efficiency)

    p_run = sub.add_parser("run", help="Run any registered operation.")
    p_run.add_argument("operation", choices=api.available_operations())
    p_run.add_argument("--input", required=True, help="Path to input CSV file.")
    p_run.add_argument("--columns", nargs="+", required=True)
    p_run.add_argument("--param", action="append", help="Operation option as key=value.")
    p_run.set_defaults(handler=_cmd_run)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint; returns 0 on success and 1 on a reported error."""
    parser = _build_arg_parser()
    args = parser.parse_args(argv)
    try:
        return args.handler(args)
    except HydroStatsError as exc:
        logger.error("%s failed: %s", args.command, exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
