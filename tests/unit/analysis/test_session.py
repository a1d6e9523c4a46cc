# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the license found in the
# LICENSE file in the root directory of this source tree.

import json
from unittest.mock import patch

import pytest

from logpct.analysis.config import AnalysisConfig
from logpct.analysis.session import AnalysisSession, run_analysis
from logpct.exceptions import MissingInputError

BASE_S = 1700000100  # aligned on a 5 minute boundary


@pytest.fixture
def log_file(tmp_path):
    lines = [
        "boot sequence started",
        json.dumps({"serviceCode": "A", "duration": 10, "timestamp": BASE_S}),
        "WARN " + json.dumps({"serviceCode": "A", "duration": 30, "timestamp": BASE_S + 60}),
        json.dumps({"serviceCode": "B", "duration": 5, "timestamp": BASE_S + 400}),
        json.dumps({"serviceCode": "B", "duration": "n/a", "timestamp": BASE_S + 500}),
        "",
    ]
    path = tmp_path / "service.log"
    path.write_text("\n".join(lines), encoding="utf-8")
    return path


@pytest.mark.asyncio
async def test_analyze_without_file():
    session = AnalysisSession()
    with pytest.raises(MissingInputError):
        await session.analyze()
    assert session.result is None


@pytest.mark.asyncio
async def test_analyze_missing_path(tmp_path):
    session = AnalysisSession()
    session.set_file(tmp_path / "nope.log")
    with pytest.raises(MissingInputError, match="not found"):
        await session.analyze()


@pytest.mark.asyncio
async def test_analyze_file(log_file):
    session = AnalysisSession(AnalysisConfig(percentiles="50, 99"))
    session.set_file(log_file)
    result = await session.analyze()

    assert session.result is result
    assert result.total_lines == 5
    assert result.total_matched == 4
    assert result.total_valid == 3
    assert result.groups == {"A": [10.0, 30.0], "B": [5.0]}

    series = session.time_series
    assert series is not None and series.error is None
    assert [(b.count, b.value) for b in series.buckets] == [(2, 30.0), (1, 5.0)]


@pytest.mark.asyncio
async def test_time_series_flag_off(log_file):
    session = AnalysisSession(AnalysisConfig(time_series=False))
    session.set_file(log_file)
    await session.analyze()
    assert session.time_series is None


@pytest.mark.asyncio
async def test_refresh_reuses_timeline_without_reading(log_file):
    session = AnalysisSession()
    session.set_file(log_file)
    await session.analyze()
    log_file.unlink()

    with patch("logpct.analysis.session.read_log_file") as mock_read:
        series = session.refresh_time_series(bucket_minutes=60, percentile=50)
        mock_read.assert_not_called()

    assert len(series.buckets) == 1
    assert series.buckets[0].count == 3
    assert session.time_series is series


@pytest.mark.asyncio
async def test_invalid_config_after_analysis_is_silent(log_file):
    session = AnalysisSession(AnalysisConfig(bucket_minutes=0))
    session.set_file(log_file)
    with patch("logpct.analysis.session.logger") as mock_logger:
        result = await session.analyze()
        mock_logger.warning.assert_not_called()

    assert result.total_valid == 3
    assert session.time_series.buckets == []
    assert session.time_series.error is not None


@pytest.mark.asyncio
async def test_rerun_replaces_result(log_file, tmp_path):
    session = AnalysisSession()
    session.set_file(log_file)
    first = await session.analyze()

    other = tmp_path / "other.log"
    other.write_text(json.dumps({"serviceCode": "C", "duration": 1}))
    session.set_file(other)
    second = await session.analyze()

    assert second is not first
    assert second.groups == {"C": [1.0]}
    assert session.time_series.buckets == []


def test_refresh_invalid_logs_warning(log_file):
    session = run_analysis(log_file)
    with patch("logpct.analysis.session.logger") as mock_logger:
        series = session.refresh_time_series(bucket_minutes=-1)
        mock_logger.warning.assert_called_once()
    assert series.buckets == []
    # the grouped view is untouched
    assert session.result.groups["A"] == [10.0, 30.0]


def test_refresh_before_analysis():
    series = AnalysisSession().refresh_time_series()
    assert series.buckets == []
    assert series.error is None


def test_run_analysis(log_file):
    session = run_analysis(log_file, AnalysisConfig(method="linear", percentiles="50"))
    assert [(r.group, r.value) for r in session.result.rows] == [("A", 20.0), ("B", 5.0)]
