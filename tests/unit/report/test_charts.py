# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the license found in the
# LICENSE file in the root directory of this source tree.

import json

from logpct.analysis.buckets import TimeSeries, compute_time_buckets
from logpct.analysis.config import AnalysisConfig
from logpct.analysis.grouping import analyze_lines
from logpct.report import charts


def _result():
    lines = [
        json.dumps({"serviceCode": svc, "duration": v, "timestamp": 1700000100 + 60 * v})
        for svc, v in [("A", 1), ("A", 5), ("B", 3), ("B", 9), ("B", 12)]
    ]
    return analyze_lines(lines, AnalysisConfig())


def test_save_charts(tmp_path):
    result = _result()
    series = compute_time_buckets(result.timeline, 5, 99, result.method)
    paths = charts.save_charts(result, series, tmp_path / "charts")
    assert [p.name for p in paths] == [
        charts.HISTOGRAM_FILE,
        charts.BOXPLOT_FILE,
        charts.TIMESERIES_FILE,
    ]
    for path in paths:
        assert path.exists()
        assert path.stat().st_size > 0


def test_time_series_chart_skipped_without_buckets(tmp_path):
    result = _result()
    assert charts.plot_time_series(None, tmp_path / "ts.png") is None
    empty = TimeSeries(bucket_minutes=0, percentile=99, error="Bucket width must be greater than 0 minutes, got 0.")
    assert charts.plot_time_series(empty, tmp_path / "ts.png") is None

    paths = charts.save_charts(result, empty, tmp_path)
    assert len(paths) == 2
    assert not (tmp_path / charts.TIMESERIES_FILE).exists()


def test_charts_with_no_groups(tmp_path):
    result = analyze_lines(["nothing here"], AnalysisConfig())
    paths = charts.save_charts(result, None, tmp_path)
    assert all(p.exists() for p in paths)
