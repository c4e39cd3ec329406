"""Referee match analytics package."""

from .main import main
from .models import HeartRateSample, WorkoutSummary, ZoneDurations, ZoneThresholds
from .errors import (
    CalibrationError,
    PayloadFormatError,
    WearableDataError,
    WorkoutNotFoundError,
)
from .heart_rate import compute_zone_durations
from .services.heatmap_service import HeatMapSession, compute_heat_map

__all__ = [
    "main",
    "HeartRateSample",
    "WorkoutSummary",
    "ZoneDurations",
    "ZoneThresholds",
    "CalibrationError",
    "PayloadFormatError",
    "WearableDataError",
    "WorkoutNotFoundError",
    "compute_zone_durations",
    "HeatMapSession",
    "compute_heat_map",
]
