# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the license found in the
# LICENSE file in the root directory of this source tree.

"""
Filter decoded log records and compute per-service percentile statistics.

One pass over the lines of a file:
1. decode the embedded JSON object of each line
2. apply the service code, error code and date window filters
3. coerce the configured field to a number and group it by `serviceCode`
4. sort each group once and compute boxes, percentile rows and medians
"""

import math
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from logpct.analysis.config import AnalysisConfig
from logpct.parsing.extract import extract_json, split_lines
from logpct.parsing.timestamps import extract_timestamp_ms, parse_date_ms, to_number
from logpct.stats.percentiles import (
    get_picker,
    nearest_rank,
    parse_percentiles,
    round_half_up,
)

UNKNOWN_GROUP = "unknown"
ROUND_DIGITS = 6


@dataclass
class TimelinePoint:
    ts: int
    value: float


@dataclass
class Box:
    group: str
    min: float
    q1: float
    q2: float
    q3: float
    max: float


@dataclass
class PercentileRow:
    group: str
    percentile: float
    value: float


@dataclass
class MedianSummary:
    group: str
    value: float


@dataclass
class AnalysisResult:
    method: str
    percentiles: list[float] = field(default_factory=list)
    groups: dict[str, list[float]] = field(default_factory=dict)
    boxes: list[Box] = field(default_factory=list)
    rows: list[PercentileRow] = field(default_factory=list)
    medians: list[MedianSummary] = field(default_factory=list)
    timeline: list[TimelinePoint] = field(default_factory=list)
    # non-blank lines in the file
    total_lines: int = 0
    # lines holding a decodable JSON object
    total_matched: int = 0
    # records that passed every filter and carried a numeric field value
    total_valid: int = 0


def format_code(value: Any) -> str:
    """Render a JSON scalar the way it is written in a log line."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def group_key(record: dict[str, Any]) -> str:
    code = record.get("serviceCode")
    if code is None or code is False or code == "" or code == 0:
        return UNKNOWN_GROUP
    return format_code(code)


def box_of(group: str, values: list[float]) -> Box:
    return Box(
        group=group,
        min=values[0],
        q1=nearest_rank(values, 25),
        q2=nearest_rank(values, 50),
        q3=nearest_rank(values, 75),
        max=values[-1],
    )


def analyze_lines(lines: Iterable[str], config: AnalysisConfig) -> AnalysisResult:
    field_name = (config.field_name or "duration").strip() or "duration"
    service_filter = (config.service_filter or "").strip()
    error_filter = (config.error_filter or "").strip()
    from_ms: Optional[int] = parse_date_ms(config.from_date)
    to_ms: Optional[int] = parse_date_ms(config.to_date)
    percentiles = parse_percentiles(config.percentiles)
    picker = get_picker(config.method)

    result = AnalysisResult(method=config.method, percentiles=percentiles)
    groups = result.groups

    for line in lines:
        if line.strip():
            result.total_lines += 1
        record = extract_json(line)
        if record is None:
            continue
        result.total_matched += 1

        if service_filter and record.get("serviceCode") != service_filter:
            continue
        if error_filter and (
            "errorCode" not in record or format_code(record["errorCode"]) != error_filter
        ):
            continue

        # records without a resolvable timestamp are never excluded by the window
        ts = extract_timestamp_ms(record)
        if from_ms is not None and ts is not None and ts < from_ms:
            continue
        if to_ms is not None and ts is not None and ts > to_ms:
            continue

        value = to_number(record.get(field_name))
        if not math.isfinite(value):
            continue

        groups.setdefault(group_key(record), []).append(value)
        result.total_valid += 1
        if ts is not None:
            result.timeline.append(TimelinePoint(ts=ts, value=value))

    for group, values in groups.items():
        values.sort()
        result.boxes.append(box_of(group, values))
        for p in percentiles:
            v = picker(values, p)
            result.rows.append(
                PercentileRow(
                    group=group, percentile=p, value=round_half_up(v, ROUND_DIGITS)
                )
            )
            if p == 50:
                result.medians.append(MedianSummary(group=group, value=v))

    return result


def analyze_text(text: str, config: AnalysisConfig) -> AnalysisResult:
    """Run one analysis pass over the in-memory content of a log file."""
    return analyze_lines(split_lines(text), config)
