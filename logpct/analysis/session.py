# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the license found in the
# LICENSE file in the root directory of this source tree.

import asyncio
import time
from pathlib import Path
from typing import Any, Optional, Union

from logpct.analysis.buckets import TimeSeries, compute_time_buckets
from logpct.analysis.config import AnalysisConfig
from logpct.analysis.grouping import AnalysisResult, analyze_text
from logpct.exceptions import MissingInputError
from logpct.utils.logging import get_logger

logger = get_logger(__name__)


def read_log_file(path: Union[str, Path]) -> str:
    return Path(path).read_text(encoding="utf-8", errors="replace")


class AnalysisSession:
    """
    Holds the selected log file and the outcome of the latest analysis run.

    The time series can be recomputed with a new width or percentile from the
    retained timeline, without reading the file again.
    """

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or AnalysisConfig()
        self.path: Optional[Path] = None
        self.result: Optional[AnalysisResult] = None
        self.time_series: Optional[TimeSeries] = None

    def set_file(self, path: Optional[Union[str, Path]]) -> None:
        self.path = Path(path) if path else None

    async def analyze(self) -> AnalysisResult:
        """
        Read the selected file and run one analysis pass over it.

        Raises:
            MissingInputError: no file was selected, or it does not exist.
        """
        if self.path is None:
            raise MissingInputError("No log file selected.")
        if not self.path.is_file():
            raise MissingInputError(f"Log file not found: {self.path}")

        text = await asyncio.to_thread(read_log_file, self.path)

        start_time = time.time()
        result = analyze_text(text, self.config)
        self.result = result
        self.time_series = None
        logger.info(
            f"Analyzed {self.path}",
            total_lines=result.total_lines,
            total_matched=result.total_matched,
            total_valid=result.total_valid,
            num_groups=len(result.groups),
            duration_seconds=round(time.time() - start_time, 3),
        )

        if self.config.time_series:
            self.refresh_time_series(silent=True)
        return result

    def refresh_time_series(
        self,
        bucket_minutes: Any = None,
        percentile: Any = None,
        silent: bool = False,
    ) -> TimeSeries:
        """
        Recompute the bucketed percentile series from the retained timeline.

        Args:
            bucket_minutes: Bucket width, defaults to the configured width
            percentile: Percentile picked per bucket, defaults to the configured one
            silent: Do not log a rejected width or percentile
        """
        if bucket_minutes is None:
            bucket_minutes = self.config.bucket_minutes
        if percentile is None:
            percentile = self.config.bucket_percentile

        points = self.result.timeline if self.result is not None else []
        series = compute_time_buckets(
            points, bucket_minutes, percentile, self.config.method
        )
        if series.error and not silent:
            logger.warning(series.error)
        self.time_series = series
        return series


def run_analysis(
    path: Union[str, Path], config: Optional[AnalysisConfig] = None
) -> AnalysisSession:
    """Synchronously analyze one file and return the populated session."""
    session = AnalysisSession(config)
    session.set_file(path)
    asyncio.run(session.analyze())
    return session
