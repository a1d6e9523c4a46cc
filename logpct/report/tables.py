# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the license found in the
# LICENSE file in the root directory of this source tree.

"""
Tabular views and file export of analysis results.

Every frame is built from the result dataclasses, so the tables and the
exported summary always agree with what the charts draw.
"""

import json
import math
from dataclasses import asdict
from pathlib import Path
from typing import Any, Optional, Union

import pandas as pd
import yaml

from logpct.analysis.buckets import TimeSeries
from logpct.analysis.grouping import AnalysisResult


def rows_frame(result: AnalysisResult) -> pd.DataFrame:
    """Percentile rows as a long table: group, percentile, value."""
    return pd.DataFrame(
        [asdict(r) for r in result.rows], columns=["group", "percentile", "value"]
    )


def boxes_frame(result: AnalysisResult) -> pd.DataFrame:
    return pd.DataFrame(
        [asdict(b) for b in result.boxes],
        columns=["group", "min", "q1", "q2", "q3", "max"],
    )


def medians_frame(result: AnalysisResult) -> pd.DataFrame:
    return pd.DataFrame([asdict(m) for m in result.medians], columns=["group", "value"])


def buckets_frame(series: Optional[TimeSeries]) -> pd.DataFrame:
    buckets = series.buckets if series is not None else []
    return pd.DataFrame(
        [asdict(b) for b in buckets], columns=["start_ms", "label", "value", "count"]
    )


def counters_frame(result: AnalysisResult) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "total_lines": result.total_lines,
                "total_matched": result.total_matched,
                "total_valid": result.total_valid,
            }
        ]
    )


def print_table(title: str, df: pd.DataFrame) -> None:
    """Print a formatted table with title."""
    print("\n" + "=" * 80)
    print(f" {title}")
    print("=" * 80)
    if df.empty:
        print("(no data)")
    else:
        print(df.to_string(index=False))
    print()


def _clean(value: Any) -> Any:
    # nan is not valid JSON
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def summary_dict(
    result: AnalysisResult, series: Optional[TimeSeries] = None
) -> dict[str, Any]:
    """Plain-data summary of one run, suitable for JSON or YAML."""
    summary: dict[str, Any] = {
        "method": result.method,
        "percentiles": list(result.percentiles),
        "counters": {
            "total_lines": result.total_lines,
            "total_matched": result.total_matched,
            "total_valid": result.total_valid,
        },
        "boxes": [{k: _clean(v) for k, v in asdict(b).items()} for b in result.boxes],
        "rows": [{k: _clean(v) for k, v in asdict(r).items()} for r in result.rows],
        "medians": [
            {k: _clean(v) for k, v in asdict(m).items()} for m in result.medians
        ],
    }
    if series is not None:
        summary["time_series"] = {
            "bucket_minutes": series.bucket_minutes,
            "percentile": series.percentile,
            "error": series.error,
            "buckets": [
                {k: _clean(v) for k, v in asdict(b).items()} for b in series.buckets
            ],
        }
    return summary


def write_summary(
    result: AnalysisResult,
    series: Optional[TimeSeries],
    path: Union[str, Path],
) -> Path:
    """Write the run summary as JSON, or YAML for `.yaml`/`.yml` paths."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    summary = summary_dict(result, series)
    with open(path, "w") as f:
        if path.suffix in (".yaml", ".yml"):
            yaml.safe_dump(summary, f, sort_keys=False, default_flow_style=False)
        else:
            json.dump(summary, f, indent=2)
    return path
