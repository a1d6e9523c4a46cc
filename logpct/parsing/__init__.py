# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the license found in the
# LICENSE file in the root directory of this source tree.

from logpct.parsing.extract import extract_json, split_lines
from logpct.parsing.timestamps import (
    TIMESTAMP_KEYS,
    extract_timestamp_ms,
    normalize_timestamp,
    parse_date_ms,
    to_number,
)

__all__ = [
    "TIMESTAMP_KEYS",
    "extract_json",
    "extract_timestamp_ms",
    "normalize_timestamp",
    "parse_date_ms",
    "split_lines",
    "to_number",
]
