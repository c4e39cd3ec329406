"""Tests for the match analysis orchestration."""

from __future__ import annotations

import logging

import pytest

from referee_analytics.services.analysis_service import (
    STATUS_NO_DATA_LINKED,
    STATUS_NOT_FOUND,
    STATUS_READY,
    STATUS_UNREADABLE,
    MatchAnalysisService,
    resolve_workout_id,
)
from referee_analytics.wearable.source import Metric


def test_missing_link_reports_no_data(fake_source) -> None:
    analysis = MatchAnalysisService(fake_source).analyze(None)
    assert analysis.status == STATUS_NO_DATA_LINKED
    assert not analysis.ready
    assert "assign one manually" in analysis.message


def test_unknown_workout_reports_not_found(fake_source) -> None:
    analysis = MatchAnalysisService(fake_source).analyze("missing")
    assert analysis.status == STATUS_NOT_FOUND
    assert analysis.heat_map is None


def test_full_analysis(fake_source) -> None:
    analysis = MatchAnalysisService(fake_source).analyze("w1")

    assert analysis.status == STATUS_READY
    assert analysis.duration_label == "1h 35m 00s"
    assert analysis.average_hr == 151.0
    assert analysis.max_speed_kmh == pytest.approx(27.0)
    assert analysis.step_count == 11230
    # Six 5 s intervals of the seven fake samples
    assert analysis.zone_durations.total_minutes == pytest.approx(30 / 60)
    assert analysis.heat_map is not None
    assert analysis.heat_map.result.geographic_bins


def test_failed_metrics_degrade_to_unavailable(
    fake_source, caplog: pytest.LogCaptureFixture
) -> None:
    fake_source.failing.update({"hr_samples", Metric.RUNNING_SPEED, "routes"})

    with caplog.at_level(logging.WARNING):
        analysis = MatchAnalysisService(fake_source).analyze("w1")

    assert analysis.ready
    assert analysis.max_speed_kmh is None
    assert analysis.average_hr == 151.0
    assert analysis.zone_durations.total_minutes == 0.0
    assert analysis.heat_map.result.geographic_bins == []
    assert "Max speed unavailable" in caplog.text
    assert "Heart-rate samples unavailable" in caplog.text


def test_recent_workouts_and_manual_pick(fake_source) -> None:
    recent = MatchAnalysisService(fake_source).recent_workouts(5)

    assert [s.workout_id for s in recent] == ["w1"]
    assert resolve_workout_id("linked", recent) == "linked"
    assert resolve_workout_id(None, recent, 0) == "w1"
    assert resolve_workout_id(None, recent, 3) is None
    assert resolve_workout_id(None, recent) is None


def test_unreadable_summary_is_reported_not_raised(
    fake_source, caplog: pytest.LogCaptureFixture
) -> None:
    fake_source.failing.add("summary")

    with caplog.at_level(logging.ERROR):
        analysis = MatchAnalysisService(fake_source).analyze("w1")

    assert analysis.status == STATUS_UNREADABLE
    assert not analysis.ready
    (record,) = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert record.exc_info is not None
    assert "could not be loaded" in record.getMessage()
