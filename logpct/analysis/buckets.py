# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the license found in the
# LICENSE file in the root directory of this source tree.

"""Fixed-width time buckets over the filtered timeline of an analysis."""

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Sequence

import numpy as np

from logpct.analysis.grouping import ROUND_DIGITS, TimelinePoint
from logpct.parsing.timestamps import to_number
from logpct.stats.percentiles import get_picker, round_half_up

MS_PER_MINUTE = 60_000
LABEL_FORMAT = "%d/%m %H:%M"


@dataclass
class TimeBucket:
    start_ms: float
    label: str
    value: float
    count: int


@dataclass
class TimeSeries:
    bucket_minutes: Any
    percentile: Any
    buckets: list[TimeBucket] = field(default_factory=list)
    # set when the width or percentile was rejected
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def validate_bucket_minutes(bucket_minutes: Any) -> Optional[str]:
    minutes = to_number(bucket_minutes)
    if not math.isfinite(minutes) or minutes <= 0:
        return f"Bucket width must be greater than 0 minutes, got {bucket_minutes!r}."
    return None


def validate_percentile(percentile: Any) -> Optional[str]:
    p = to_number(percentile)
    if not math.isfinite(p) or p <= 0 or p > 100:
        return f"Percentile must be in (0, 100], got {percentile!r}."
    return None


def format_bucket_label(start_ms: float) -> str:
    """Format a bucket start as `DD/MM HH:MM` in local time."""
    try:
        return datetime.fromtimestamp(start_ms / 1000).strftime(LABEL_FORMAT)
    except (OverflowError, OSError, ValueError):
        return str(start_ms)


def compute_time_buckets(
    points: Sequence[TimelinePoint],
    bucket_minutes: Any,
    percentile: Any,
    method: str,
) -> TimeSeries:
    """
    Pick one percentile per fixed-width time window.

    Invalid width or percentile yields an empty series carrying `error`
    instead of raising.
    """
    series = TimeSeries(bucket_minutes=bucket_minutes, percentile=percentile)
    series.error = validate_bucket_minutes(bucket_minutes) or validate_percentile(
        percentile
    )
    if series.error:
        return series

    series.bucket_minutes = to_number(bucket_minutes)
    series.percentile = p = to_number(percentile)
    if not points:
        return series
    width_ms = series.bucket_minutes * MS_PER_MINUTE
    picker = get_picker(method)

    timestamps = np.fromiter((pt.ts for pt in points), dtype=np.float64, count=len(points))
    starts = np.floor(timestamps / width_ms) * width_ms

    accumulated: dict[float, list[float]] = {}
    for start, point in zip(starts.tolist(), points):
        accumulated.setdefault(start, []).append(point.value)

    for start in sorted(accumulated):
        values = sorted(accumulated[start])
        value = picker(values, p)
        if not math.isfinite(value):
            continue
        start_ms = int(start) if float(start).is_integer() else start
        series.buckets.append(
            TimeBucket(
                start_ms=start_ms,
                label=format_bucket_label(start_ms),
                value=round_half_up(value, ROUND_DIGITS),
                count=len(values),
            )
        )
    return series
