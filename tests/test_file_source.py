"""Tests for the JSON export backed wearable source."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

import polyline
import pytest

from referee_analytics.errors import PayloadFormatError, WorkoutNotFoundError
from referee_analytics.wearable.file_source import JsonExportSource
from referee_analytics.wearable.source import Aggregation, Metric

GPX = """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" xmlns="http://www.topografix.com/GPX/1/1">
  <trk><trkseg>
    <trkpt lat="40.4170" lon="-3.7040"/>
    <trkpt lat="40.4171" lon="-3.7041"/>
  </trkseg></trk>
</gpx>
"""


def _export(workout_id: str, start: str, end: str) -> dict:
    return {
        "summary": {"id": workout_id, "start": start, "end": end, "total_distance_m": 9100},
        "routes": [
            {"id": "first", "latlng": [[40.4168, -3.7038], [40.4169, -3.7039]]},
            {"id": "second", "polyline": polyline.encode([(40.41, -3.70)])},
            {"id": "third", "gpx": "third.gpx"},
        ],
        "heart_rate": [
            {"time": start, "bpm": 120},
            {"time": end, "bpm": 160},
        ],
        "stats": {"heart_rate": {"average": 148}, "running_speed": {"max": 7.0}},
    }


@pytest.fixture
def export_dir(tmp_path: Path) -> Path:
    (tmp_path / "third.gpx").write_text(GPX, encoding="utf-8")
    (tmp_path / "early.json").write_text(
        json.dumps(_export("early", "2025-03-01T10:00:00Z", "2025-03-01T11:30:00Z")),
        encoding="utf-8",
    )
    (tmp_path / "late.json").write_text(
        json.dumps(_export("late", "2025-03-08T10:00:00Z", "2025-03-08T11:30:00Z")),
        encoding="utf-8",
    )
    return tmp_path


def test_summary_and_route_segments(export_dir: Path) -> None:
    source = JsonExportSource(export_dir)

    summary = source.fetch_workout_summary("early")
    segments = source.list_route_segments("early")

    assert summary.total_distance_m == 9100
    assert segments == ["first", "second", "third"]
    assert source.fetch_route_segment("early", "first") == [(40.4168, -3.7038), (40.4169, -3.7039)]
    assert len(source.fetch_route_segment("early", "second")) == 1
    assert source.fetch_route_segment("early", "third") == [(40.4170, -3.7040), (40.4171, -3.7041)]


def test_exports_are_cached(export_dir: Path) -> None:
    source = JsonExportSource(export_dir)
    first = source.load("early")
    (export_dir / "early.json").unlink()
    assert source.load("early") is first


def test_missing_workout_raises_not_found(export_dir: Path) -> None:
    source = JsonExportSource(export_dir)
    with pytest.raises(WorkoutNotFoundError):
        source.fetch_workout_summary("missing")
    assert source.list_route_segments("missing") == []


def test_heart_rate_and_stats_are_filtered_by_time(export_dir: Path) -> None:
    source = JsonExportSource(export_dir)
    start = datetime(2025, 3, 8, 9, 0, tzinfo=timezone.utc)
    end = datetime(2025, 3, 8, 12, 0, tzinfo=timezone.utc)

    samples = source.fetch_heart_rate_samples(start, end)

    assert [s.bpm for s in samples] == [120.0, 160.0]
    assert source.fetch_scalar_stat(Metric.HEART_RATE, Aggregation.AVERAGE, start, end) == 148.0
    assert source.fetch_scalar_stat(Metric.STEP_COUNT, Aggregation.SUM, start, end) is None


def test_recent_workouts_skip_malformed_exports(
    export_dir: Path, caplog: pytest.LogCaptureFixture
) -> None:
    (export_dir / "broken.json").write_text(json.dumps({"summary": {"id": "x"}}), encoding="utf-8")
    source = JsonExportSource(export_dir)

    recent = source.list_recent_workouts(5)

    assert [s.workout_id for s in recent] == ["late", "early"]
    assert "Skipping malformed export broken.json" in caplog.text
    assert source.list_recent_workouts(1)[0].workout_id == "late"


def test_malformed_export_is_not_cached(export_dir: Path) -> None:
    (export_dir / "bad.json").write_text("{not json", encoding="utf-8")
    source = JsonExportSource(export_dir)
    with pytest.raises(PayloadFormatError):
        source.load("bad")
    with pytest.raises(PayloadFormatError):
        source.load("bad")


@pytest.mark.parametrize(
    "name, content",
    [
        ("list_stats.json", json.dumps({**_export("x", "2025-03-02T10:00:00Z", "2025-03-02T11:00:00Z"), "stats": [1, 2]})),
        ("list_routes.json", json.dumps({**_export("y", "2025-03-02T10:00:00Z", "2025-03-02T11:00:00Z"), "routes": {"id": "r"}})),
    ],
)
def test_one_bad_export_does_not_break_the_others(
    export_dir: Path, caplog: pytest.LogCaptureFixture, name: str, content: str
) -> None:
    (export_dir / name).write_text(content, encoding="utf-8")
    source = JsonExportSource(export_dir)
    start = datetime(2025, 3, 8, 9, 0, tzinfo=timezone.utc)
    end = datetime(2025, 3, 8, 12, 0, tzinfo=timezone.utc)

    assert [s.workout_id for s in source.list_recent_workouts(5)] == ["late", "early"]
    assert len(source.fetch_heart_rate_samples(start, end)) == 2
    assert f"Skipping malformed export {name}" in caplog.text


def test_non_utf8_export_is_rejected(export_dir: Path, caplog: pytest.LogCaptureFixture) -> None:
    (export_dir / "latin.json").write_bytes(b'{"summary": {"id": "caf\xe9"}}')
    source = JsonExportSource(export_dir)

    with pytest.raises(PayloadFormatError):
        source.load("latin")
    assert len(source.list_recent_workouts(5)) == 2
    assert "Skipping malformed export latin.json" in caplog.text


def test_offset_less_timestamps_mix_with_utc_exports(export_dir: Path) -> None:
    local = _export("local", "2025-03-15T10:00:00", "2025-03-15T11:30:00")
    (export_dir / "local.json").write_text(json.dumps(local), encoding="utf-8")
    source = JsonExportSource(export_dir)
    start = datetime(2025, 3, 1, 0, 0, tzinfo=timezone.utc)
    end = datetime(2025, 3, 31, 0, 0, tzinfo=timezone.utc)

    samples = source.fetch_heart_rate_samples(start, end)

    assert len(samples) == 6
    assert samples[-1].timestamp == datetime(2025, 3, 15, 11, 30, tzinfo=timezone.utc)
    assert source.list_recent_workouts(1)[0].workout_id == "local"
