"""Tests for the heat-map pipeline and calibration session."""

from __future__ import annotations

import pytest

from referee_analytics.errors import CalibrationError
from referee_analytics.geometry.models import CalibrationCorners
from referee_analytics.services.heatmap_service import (
    MODE_AUTOMATIC,
    MODE_CALIBRATED,
    HeatMapSession,
    compute_heat_map,
)

from conftest import ORIGIN, offset_point


def test_empty_trace_gives_empty_result() -> None:
    result = compute_heat_map([])
    assert result.geographic_bins == []
    assert result.virtual_bins == []
    assert result.mode == MODE_AUTOMATIC


def test_outliers_are_excluded_before_binning(pitch_trace) -> None:
    far = offset_point(ORIGIN, 5000, 5000)
    result = compute_heat_map(pitch_trace + [far])
    assert far not in result.sanitized_trace
    assert sum(b.count for b in result.geographic_bins) == len(pitch_trace)


def test_mode_follows_corner_count(pitch_trace, pitch_corners) -> None:
    assert compute_heat_map(pitch_trace, pitch_corners[:2]).mode == MODE_AUTOMATIC
    assert compute_heat_map(pitch_trace, pitch_corners).mode == MODE_CALIBRATED


def test_calibrated_bins_cover_the_pitch(pitch_trace, pitch_corners) -> None:
    result = compute_heat_map(pitch_trace, pitch_corners)
    assert result.virtual_bins
    for heat_bin in result.virtual_bins:
        assert 0 <= heat_bin.key.x < 40
        assert 0 <= heat_bin.key.y < 60
        assert 0.0 < heat_bin.intensity <= 1.0


def test_recalibration_only_replaces_virtual_bins(pitch_trace, pitch_corners) -> None:
    session = HeatMapSession(pitch_trace)
    before = session.result

    after = session.set_calibration_corners(pitch_corners)

    assert after is not None
    assert after.mode == MODE_CALIBRATED
    assert after.geographic_bins == before.geographic_bins
    assert session.corners.is_complete


def test_too_many_corners_raise(pitch_trace, pitch_corners) -> None:
    session = HeatMapSession(pitch_trace)
    with pytest.raises(CalibrationError):
        session.set_calibration_corners(pitch_corners + [ORIGIN])


def test_stale_recompute_is_discarded(pitch_trace, pitch_corners) -> None:
    session = HeatMapSession(pitch_trace)
    stale = session.begin_recompute()
    latest = session.begin_recompute()
    corners = CalibrationCorners.from_points(pitch_corners)

    assert session.publish(stale, corners, [], MODE_CALIBRATED) is False
    assert session.result.mode == MODE_AUTOMATIC
    assert session.publish(latest, corners, [], MODE_CALIBRATED) is True
    assert session.result.mode == MODE_CALIBRATED
    assert session.result.virtual_bins == []
