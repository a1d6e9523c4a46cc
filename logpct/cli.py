# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the license found in the
# LICENSE file in the root directory of this source tree.

import asyncio
from typing import Any, Optional

import fire

from logpct.analysis.config import AnalysisConfig, config_to_yaml, load_config
from logpct.analysis.session import AnalysisSession
from logpct.exceptions import ConfigError, MissingInputError
from logpct.report import tables
from logpct.utils.logging import get_logger

logger = get_logger(__name__)


def _as_text(value: Any) -> Optional[str]:
    # fire turns "50,99" into a tuple and "99" into an int
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    return str(value)


def _as_list(value: Any) -> list:
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


class Cli:
    """Percentile statistics over JSON records embedded in log lines."""

    def _session(self, file: Optional[str], config: Optional[str], **overrides):
        overrides["percentiles"] = _as_text(overrides.get("percentiles"))
        for key in ("service_filter", "error_filter", "from_date", "to_date"):
            overrides[key] = _as_text(overrides.get(key))
        try:
            cfg: AnalysisConfig = load_config(config, **overrides)
        except ConfigError as e:
            raise SystemExit(str(e)) from e
        logger.debug(f"Configuration:\n{config_to_yaml(cfg)}")

        session = AnalysisSession(cfg)
        session.set_file(file)
        try:
            asyncio.run(session.analyze())
        except MissingInputError as e:
            logger.error(str(e))
            raise SystemExit(1) from e
        return session

    def analyze(
        self,
        file: Optional[str] = None,
        config: Optional[str] = None,
        field_name: Optional[str] = None,
        service_filter: Optional[str] = None,
        error_filter: Optional[str] = None,
        from_date: Optional[str] = None,
        to_date: Optional[str] = None,
        percentiles: Optional[str] = None,
        method: Optional[str] = None,
        bucket_minutes: Optional[float] = None,
        bucket_percentile: Optional[float] = None,
        time_series: Optional[bool] = None,
        output_dir: Optional[str] = None,
        summary: Optional[str] = None,
    ) -> None:
        """
        Analyze a log file and print per-service percentiles.

        Args:
            file: Log file whose lines embed JSON objects
            config: YAML file with analysis options, overridden by the flags below
            field_name: Numeric field to aggregate (default: duration)
            service_filter: Keep only records with this exact `serviceCode`
            error_filter: Keep only records with this `errorCode`
            from_date: Drop records timestamped before this date/time
            to_date: Drop records timestamped after this date/time
            percentiles: Percentile list, e.g. "50,90,99"
            method: `nearest` or `linear`
            bucket_minutes: Width of the time-series buckets
            bucket_percentile: Percentile picked per time bucket
            time_series: Compute the bucketed time series
            output_dir: Directory to write PNG charts into
            summary: Write a JSON (or .yaml) summary of the run to this path
        """
        session = self._session(
            file,
            config,
            field_name=field_name,
            service_filter=service_filter,
            error_filter=error_filter,
            from_date=from_date,
            to_date=to_date,
            percentiles=percentiles,
            method=method,
            bucket_minutes=bucket_minutes,
            bucket_percentile=bucket_percentile,
            time_series=time_series,
        )
        result = session.result
        assert result is not None
        series = session.time_series

        tables.print_table("RUN COUNTERS", tables.counters_frame(result))
        tables.print_table(
            f"PERCENTILES ({result.method})", tables.rows_frame(result)
        )
        tables.print_table("MEDIANS (p50)", tables.medians_frame(result))
        tables.print_table("BOXES (nearest rank)", tables.boxes_frame(result))
        if series is not None:
            if series.error:
                print(series.error)
            else:
                tables.print_table(
                    f"TIME SERIES p{series.percentile:g} / {series.bucket_minutes:g} min",
                    tables.buckets_frame(series),
                )

        if output_dir:
            from logpct.report.charts import save_charts

            save_charts(result, series, output_dir)
        if summary:
            path = tables.write_summary(result, series, summary)
            logger.info(f"Summary written to {path}")

    def timeseries(
        self,
        file: Optional[str] = None,
        bucket_minutes: Any = 5,
        bucket_percentile: Optional[float] = None,
        config: Optional[str] = None,
        field_name: Optional[str] = None,
        service_filter: Optional[str] = None,
        error_filter: Optional[str] = None,
        from_date: Optional[str] = None,
        to_date: Optional[str] = None,
        method: Optional[str] = None,
    ) -> None:
        """
        Analyze a log file once and print a bucketed series for every width.

        Args:
            file: Log file whose lines embed JSON objects
            bucket_minutes: One width or a comma list of widths, e.g. 1,5,15
            bucket_percentile: Percentile picked per time bucket
        """
        session = self._session(
            file,
            config,
            field_name=field_name,
            service_filter=service_filter,
            error_filter=error_filter,
            from_date=from_date,
            to_date=to_date,
            method=method,
            bucket_percentile=bucket_percentile,
            time_series=False,
        )
        for width in _as_list(bucket_minutes):
            series = session.refresh_time_series(bucket_minutes=width)
            if series.error:
                print(series.error)
                continue
            tables.print_table(
                f"TIME SERIES p{series.percentile:g} / {series.bucket_minutes:g} min",
                tables.buckets_frame(series),
            )


def main():
    fire.Fire(Cli)


if __name__ == "__main__":
    main()
