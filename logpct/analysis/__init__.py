# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the license found in the
# LICENSE file in the root directory of this source tree.

from logpct.analysis.buckets import TimeBucket, TimeSeries, compute_time_buckets
from logpct.analysis.config import AnalysisConfig, config_to_yaml, load_config
from logpct.analysis.grouping import (
    AnalysisResult,
    Box,
    MedianSummary,
    PercentileRow,
    TimelinePoint,
    analyze_lines,
    analyze_text,
)
from logpct.analysis.session import AnalysisSession, run_analysis

__all__ = [
    "AnalysisConfig",
    "AnalysisResult",
    "AnalysisSession",
    "Box",
    "MedianSummary",
    "PercentileRow",
    "TimeBucket",
    "TimeSeries",
    "TimelinePoint",
    "analyze_lines",
    "analyze_text",
    "compute_time_buckets",
    "config_to_yaml",
    "load_config",
    "run_analysis",
]
