# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the license found in the
# LICENSE file in the root directory of this source tree.

"""
logpct: percentile statistics over JSON records embedded in log lines.

Typical use:

    from logpct import AnalysisSession, load_config

    session = AnalysisSession(load_config(method="linear"))
    session.set_file("service.log")
    result = await session.analyze()
    series = session.refresh_time_series(bucket_minutes=1, percentile=95)
"""

from logpct.analysis import (
    AnalysisConfig,
    AnalysisResult,
    AnalysisSession,
    TimeSeries,
    analyze_text,
    compute_time_buckets,
    load_config,
    run_analysis,
)
from logpct.cli import Cli
from logpct.exceptions import ConfigError, LogPctError, MissingInputError
from logpct.parsing import extract_json, normalize_timestamp
from logpct.stats import linear_interp, nearest_rank, parse_percentiles

__version__ = "0.1.0"

__all__ = [
    "AnalysisConfig",
    "AnalysisResult",
    "AnalysisSession",
    "Cli",
    "ConfigError",
    "LogPctError",
    "MissingInputError",
    "TimeSeries",
    "analyze_text",
    "compute_time_buckets",
    "extract_json",
    "linear_interp",
    "load_config",
    "nearest_rank",
    "normalize_timestamp",
    "parse_percentiles",
    "run_analysis",
]
