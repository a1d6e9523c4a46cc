# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the license found in the
# LICENSE file in the root directory of this source tree.

"""
Timestamp normalization for decoded log records.

Every resolved timestamp is an integer number of milliseconds since the epoch.
Raw numbers are classified by magnitude:

- above 1e12: already milliseconds
- above 1e9: seconds, scaled by 1000
- anything smaller is rejected

Other strings go through pandas' date parser.
"""

import math
from numbers import Real
from typing import Any, Mapping, Optional

import pandas as pd

TIMESTAMP_KEYS = (
    "timestamp",
    "time",
    "eventTime",
    "eventTimestamp",
    "startTime",
    "endTime",
    "requestTime",
    "responseTime",
)

EPOCH_MS_THRESHOLD = 1e12
EPOCH_S_THRESHOLD = 1e9

# resolved by pandas against the current clock
RELATIVE_DATE_WORDS = frozenset({"now", "today"})


def to_number(value: Any) -> float:
    """Coerce a JSON scalar to float, returning nan when it is not numeric."""
    if isinstance(value, bool) or value is None:
        return math.nan
    if isinstance(value, Real):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    if isinstance(value, str):
        text = value.strip()
        # float() also accepts digit grouping such as "1_000"
        if not text or "_" in text:
            return math.nan
        try:
            return float(text)
        except ValueError:
            return math.nan
    return math.nan


def normalize_epoch(num: float) -> Optional[int]:
    if not math.isfinite(num):
        return None
    if num > EPOCH_MS_THRESHOLD:
        return int(num)
    if num > EPOCH_S_THRESHOLD:
        return int(num * 1000)
    return None


def parse_date_ms(text: str) -> Optional[int]:
    """
    Parse a date/time string to epoch milliseconds.

    Strings without a zone are read as local time. Returns None if pandas
    cannot parse the string.
    """
    if not text or not text.strip():
        return None
    if text.strip().lower() in RELATIVE_DATE_WORDS:
        return None
    try:
        ts = pd.to_datetime(text.strip(), errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return None
    if ts is None or pd.isna(ts):
        return None
    if ts.tzinfo is not None:
        return int(ts.value // 1_000_000)
    try:
        return int(ts.to_pydatetime(warn=False).timestamp() * 1000)
    except (OverflowError, OSError, ValueError):
        return None


def normalize_timestamp(value: Any) -> Optional[int]:
    """Normalize one raw field value to epoch milliseconds, or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Real):
        return normalize_epoch(to_number(value))
    if isinstance(value, str):
        num = to_number(value)
        if not math.isnan(num):
            # numeric strings never fall back to date parsing
            return normalize_epoch(num)
        return parse_date_ms(value)
    return None


def extract_timestamp_ms(record: Mapping[str, Any]) -> Optional[int]:
    """Return the first candidate key that normalizes to a timestamp."""
    if not isinstance(record, Mapping):
        return None
    for key in TIMESTAMP_KEYS:
        if key not in record:
            continue
        ms = normalize_timestamp(record[key])
        if ms is not None:
            return ms
    return None
