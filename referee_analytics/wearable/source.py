"""Interface of the wearable health-data collaborator."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Protocol, Sequence

from ..geometry.models import LatLon
from ..models import HeartRateSample, WorkoutSummary


class Metric:
    HEART_RATE = "heart_rate"
    RUNNING_SPEED = "running_speed"  # m/s
    STEP_COUNT = "step_count"


class Aggregation:
    AVERAGE = "average"
    MAX = "max"
    SUM = "sum"


class WearableDataSource(Protocol):
    """Query surface consumed by the analysis services.

    Implementations raise :class:`~referee_analytics.errors.WorkoutNotFoundError`
    for unknown workouts. Any other exception from a fetch is treated by the
    services as "data unavailable" rather than a fatal error.
    """

    def fetch_workout_summary(self, workout_id: str) -> WorkoutSummary:
        ...

    def list_route_segments(self, workout_id: str) -> Sequence[str]:
        ...

    def fetch_route_segment(self, workout_id: str, segment_id: str) -> List[LatLon]:
        ...

    def fetch_heart_rate_samples(
        self, start: datetime, end: datetime
    ) -> List[HeartRateSample]:
        ...

    def fetch_scalar_stat(
        self, metric: str, aggregation: str, start: datetime, end: datetime
    ) -> Optional[float]:
        ...

    def list_recent_workouts(self, limit: int) -> List[WorkoutSummary]:
        ...


__all__ = ["Metric", "Aggregation", "WearableDataSource"]
