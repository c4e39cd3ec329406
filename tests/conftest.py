"""Global pytest fixtures & helpers.

Adds project root to path and provides synthetic traces and a fake wearable
data source shared across the test modules.
"""
from __future__ import annotations

import math
import os
import sys
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from referee_analytics.errors import PayloadFormatError, WorkoutNotFoundError
from referee_analytics.models import HeartRateSample, WorkoutSummary

ORIGIN = (40.4168, -3.7038)
METRES_PER_DEG_LAT = 111_320.0


# --- Factory helpers -------------------------------------------------
def offset_point(origin, east_m: float, north_m: float):
    """Return the lat/lon ``east_m``/``north_m`` metres away from ``origin``."""
    lat0, lon0 = origin
    lat = lat0 + north_m / METRES_PER_DEG_LAT
    lon = lon0 + east_m / (METRES_PER_DEG_LAT * math.cos(math.radians(lat0)))
    return (lat, lon)


def make_pitch_trace(width_m=60.0, length_m=100.0, step_m=2.5, origin=ORIGIN):
    """Dense lawn-mower trace covering a width x length rectangle."""
    points = []
    x = 0.0
    while x <= width_m:
        y = 0.0
        while y <= length_m:
            points.append(offset_point(origin, x - width_m / 2, y - length_m / 2))
            y += step_m
        x += step_m
    return points


def make_hr_samples(start: datetime, bpms: List[float], spacing_s: float = 5.0):
    return [
        HeartRateSample(timestamp=start + timedelta(seconds=i * spacing_s), bpm=bpm)
        for i, bpm in enumerate(bpms)
    ]


class FakeWearableSource:
    """In-memory wearable source with switchable failures."""

    def __init__(self) -> None:
        start = datetime(2025, 3, 1, 10, 0, tzinfo=timezone.utc)
        self.summary = WorkoutSummary(
            workout_id="w1",
            start=start,
            end=start + timedelta(minutes=95),
            duration_s=95 * 60,
            total_energy_kcal=820.0,
            total_distance_m=9800.0,
        )
        self.segments: Dict[str, List] = {
            "s1": make_pitch_trace(width_m=60, length_m=50, origin=offset_point(ORIGIN, 0, -25)),
            "s2": make_pitch_trace(width_m=60, length_m=50, origin=offset_point(ORIGIN, 0, 25)),
        }
        self.samples = make_hr_samples(start, [100, 100, 130, 150, 170, 180, 180])
        self.stats: Dict[tuple, Optional[float]] = {
            ("heart_rate", "average"): 151.0,
            ("running_speed", "max"): 7.5,
            ("step_count", "sum"): 11230.0,
        }
        self.failing: set[str] = set()

    def fetch_workout_summary(self, workout_id):
        if "summary" in self.failing:
            raise PayloadFormatError("Missing required field 'end'")
        if workout_id != self.summary.workout_id:
            raise WorkoutNotFoundError(workout_id)
        return self.summary

    def list_route_segments(self, workout_id):
        if "routes" in self.failing:
            raise RuntimeError("route query failed")
        return list(self.segments)

    def fetch_route_segment(self, workout_id, segment_id):
        if segment_id in self.failing:
            raise RuntimeError(f"segment {segment_id} failed")
        return self.segments[segment_id]

    def fetch_heart_rate_samples(self, start, end):
        if "hr_samples" in self.failing:
            raise RuntimeError("heart rate sample query failed")
        return list(self.samples)

    def fetch_scalar_stat(self, metric, aggregation, start, end):
        if metric in self.failing:
            raise RuntimeError(f"{metric} query failed")
        return self.stats.get((metric, aggregation))

    def list_recent_workouts(self, limit):
        return [self.summary][:limit]


# --- Fixtures --------------------------------------------------------
@pytest.fixture
def pitch_trace():
    return make_pitch_trace()


@pytest.fixture
def pitch_corners():
    """Top-left, top-right, bottom-left of a 60 x 100 m pitch around ORIGIN."""
    return [
        offset_point(ORIGIN, -30, 50),
        offset_point(ORIGIN, 30, 50),
        offset_point(ORIGIN, -30, -50),
    ]


@pytest.fixture
def fake_source():
    return FakeWearableSource()
