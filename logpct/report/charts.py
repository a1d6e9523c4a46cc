# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the license found in the
# LICENSE file in the root directory of this source tree.

"""PNG charts for the median, box and time-series views of an analysis."""

import os
from pathlib import Path
from typing import Optional, Union

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402

from logpct.analysis.buckets import TimeSeries  # noqa: E402
from logpct.analysis.grouping import AnalysisResult  # noqa: E402
from logpct.utils.logging import get_logger  # noqa: E402

logger = get_logger(__name__)

HISTOGRAM_FILE = "histogram.png"
BOXPLOT_FILE = "boxplot.png"
TIMESERIES_FILE = "timeseries.png"


def plot_medians(result: AnalysisResult, output_path: Union[str, Path]) -> Path:
    """Bar chart of the p50 value of every group."""
    fig, ax = plt.subplots(figsize=(10, 5))
    labels = [m.group for m in result.medians]
    ax.bar(range(len(labels)), [m.value for m in result.medians], label="Median (p50)")
    ax.set_xticks(range(len(labels)))
    ax.set_xticklabels(labels, rotation=45, ha="right")
    ax.set_ylim(bottom=0)
    ax.set_ylabel(result.method)
    ax.legend()
    fig.tight_layout()
    return _save(fig, output_path)


def plot_boxes(result: AnalysisResult, output_path: Union[str, Path]) -> Path:
    """Box plot drawn from the precomputed min/q1/median/q3/max of every group."""
    fig, ax = plt.subplots(figsize=(10, 5))
    stats = [
        {
            "label": b.group,
            "whislo": b.min,
            "q1": b.q1,
            "med": b.q2,
            "q3": b.q3,
            "whishi": b.max,
            "fliers": [],
        }
        for b in result.boxes
    ]
    if stats:
        ax.bxp(stats, showfliers=False)
    ax.set_ylim(bottom=0)
    ax.set_title("Boxplot (min-Q1-median-Q3-max)")
    fig.tight_layout()
    return _save(fig, output_path)


def plot_time_series(
    series: Optional[TimeSeries], output_path: Union[str, Path]
) -> Optional[Path]:
    """Line chart of the bucketed percentile, annotated with bucket sizes."""
    if series is None or not series.buckets:
        return None
    fig, ax = plt.subplots(figsize=(12, 5))
    x = list(range(len(series.buckets)))
    y = [b.value for b in series.buckets]
    ax.plot(
        x,
        y,
        color="#f97316",
        marker="o",
        markersize=3,
        label=f"p{series.percentile:g} ({series.bucket_minutes:g} min buckets)",
    )
    ax.fill_between(x, y, color="#f97316", alpha=0.15)
    for xi, bucket in zip(x, series.buckets):
        ax.annotate(
            f"N={bucket.count}",
            (xi, bucket.value),
            textcoords="offset points",
            xytext=(0, 5),
            ha="center",
            fontsize=7,
        )
    # thin out tick labels on long series
    step = max(1, len(x) // 20)
    ax.set_xticks(x[::step])
    ax.set_xticklabels([b.label for b in series.buckets][::step], rotation=45, ha="right")
    ax.set_ylim(bottom=0)
    ax.set_title(f"Percentile per {series.bucket_minutes:g} minute bucket")
    ax.legend()
    fig.tight_layout()
    return _save(fig, output_path)


def save_charts(
    result: AnalysisResult,
    series: Optional[TimeSeries],
    output_dir: Union[str, Path],
) -> list[Path]:
    """Write every available chart into `output_dir` and return the written paths."""
    os.makedirs(output_dir, exist_ok=True)
    output_dir = Path(output_dir)
    paths = [
        plot_medians(result, output_dir / HISTOGRAM_FILE),
        plot_boxes(result, output_dir / BOXPLOT_FILE),
    ]
    timeseries_path = plot_time_series(series, output_dir / TIMESERIES_FILE)
    if timeseries_path is not None:
        paths.append(timeseries_path)
    for path in paths:
        logger.info(f"Chart saved to {path}")
    return paths


def _save(fig, output_path: Union[str, Path]) -> Path:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=140)
    plt.close(fig)
    return output_path
