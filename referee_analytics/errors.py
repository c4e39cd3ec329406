"""Central error types used across the application."""

from __future__ import annotations


class WearableDataError(RuntimeError):
    """Base error for wearable data source failures."""


class WorkoutNotFoundError(WearableDataError):
    """Raised when a workout summary does not exist in the data source."""


class PayloadFormatError(WearableDataError):
    """Raised when an exported or synced payload lacks required fields."""


class CalibrationError(ValueError):
    """Raised when calibration corners are invalid or too many were supplied."""


__all__ = [
    "WearableDataError",
    "WorkoutNotFoundError",
    "PayloadFormatError",
    "CalibrationError",
]
