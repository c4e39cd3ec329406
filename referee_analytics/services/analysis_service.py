"""Match analysis service.

Loads the workout linked to a match from the wearable data source and builds
every metric shown on the match detail screen: summary figures, scalar
statistics, heart-rate zones and the heat-map session. Individual fetch
failures degrade to "metric unavailable" instead of aborting the analysis.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Callable, List, Optional, TypeVar

from ..config import DEFAULT_MAX_HR, RECENT_WORKOUTS_LIMIT
from ..errors import WearableDataError, WorkoutNotFoundError
from ..geometry.models import CalibrationCorners
from ..heart_rate import compute_zone_durations, default_thresholds
from ..models import WorkoutSummary, ZoneDurations, ZoneThresholds
from ..utils import format_duration
from ..wearable.source import Aggregation, Metric, WearableDataSource
from .heatmap_service import HeatMapSession
from .route_service import RouteService, RouteServiceConfig

STATUS_READY = "ready"
STATUS_NO_DATA_LINKED = "no_data_linked"
STATUS_NOT_FOUND = "not_found"
STATUS_UNREADABLE = "unreadable"

NO_DATA_LINKED_MESSAGE = "No workout linked to this match. You can assign one manually."
NOT_FOUND_MESSAGE = "The linked workout was not found in the health data store."
UNREADABLE_MESSAGE = "The linked workout could not be read from the health data store."

T = TypeVar("T")


@dataclass(slots=True)
class MatchAnalysis:
    status: str
    message: str | None = None
    summary: WorkoutSummary | None = None
    duration_label: str = "--"
    average_hr: float | None = None
    max_speed_kmh: float | None = None
    step_count: int | None = None
    zone_durations: ZoneDurations = field(default_factory=ZoneDurations)
    heat_map: HeatMapSession | None = None

    @property
    def ready(self) -> bool:
        return self.status == STATUS_READY


@dataclass(slots=True)
class MatchAnalysisConfig:
    max_hr: float = DEFAULT_MAX_HR
    thresholds: ZoneThresholds = field(default_factory=default_thresholds)
    route: RouteServiceConfig = field(default_factory=RouteServiceConfig)
    logger: logging.Logger | None = None


class MatchAnalysisService:
    def __init__(self, source: WearableDataSource, config: MatchAnalysisConfig | None = None):
        self.source = source
        self.config = config or MatchAnalysisConfig()
        self._log = self.config.logger or logging.getLogger(self.__class__.__name__)
        self._routes = RouteService(source, self.config.route)

    def _degrade(self, label: str, fetch: Callable[[], T], fallback: T) -> T:
        try:
            return fetch()
        except Exception as exc:
            self._log.warning("%s unavailable: %s", label, exc)
            return fallback

    def analyze(
        self,
        workout_id: str | None,
        corners: CalibrationCorners | None = None,
    ) -> MatchAnalysis:
        """Build the full analysis for a linked workout."""

        if not workout_id:
            return MatchAnalysis(status=STATUS_NO_DATA_LINKED, message=NO_DATA_LINKED_MESSAGE)
        try:
            summary = self.source.fetch_workout_summary(workout_id)
        except WorkoutNotFoundError as exc:
            self._log.warning("Workout %s not found: %s", workout_id, exc)
            return MatchAnalysis(status=STATUS_NOT_FOUND, message=NOT_FOUND_MESSAGE)
        except WearableDataError:
            self._log.error("Workout %s could not be loaded", workout_id, exc_info=True)
            return MatchAnalysis(status=STATUS_UNREADABLE, message=UNREADABLE_MESSAGE)

        start, end = summary.start, summary.end
        average_hr = self._degrade(
            "Average heart rate",
            lambda: self.source.fetch_scalar_stat(Metric.HEART_RATE, Aggregation.AVERAGE, start, end),
            None,
        )
        max_speed = self._degrade(
            "Max speed",
            lambda: self.source.fetch_scalar_stat(Metric.RUNNING_SPEED, Aggregation.MAX, start, end),
            None,
        )
        steps = self._degrade(
            "Step count",
            lambda: self.source.fetch_scalar_stat(Metric.STEP_COUNT, Aggregation.SUM, start, end),
            None,
        )
        samples = self._degrade(
            "Heart-rate samples",
            lambda: self.source.fetch_heart_rate_samples(start, end),
            [],
        )
        zones = compute_zone_durations(samples, self.config.thresholds, self.config.max_hr)
        trace = self._routes.fetch_trace(workout_id)

        analysis = MatchAnalysis(
            status=STATUS_READY,
            summary=summary,
            duration_label=format_duration(summary.duration_s),
            average_hr=average_hr,
            max_speed_kmh=max_speed * 3.6 if max_speed is not None else None,
            step_count=int(steps) if steps is not None else None,
            zone_durations=zones,
            heat_map=HeatMapSession(trace, corners),
        )
        self._log.info(
            "Analysed workout %s: %d route points, %.1f zone minutes",
            workout_id,
            len(trace),
            zones.total_minutes,
        )
        return analysis

    def recent_workouts(self, limit: int = RECENT_WORKOUTS_LIMIT) -> List[WorkoutSummary]:
        """Most recent workouts, newest first, for linking to a match by hand."""

        return self._degrade(
            "Recent workouts",
            lambda: list(self.source.list_recent_workouts(limit)),
            [],
        )


def resolve_workout_id(
    linked_id: Optional[str], recent: List[WorkoutSummary], pick: Optional[int] = None
) -> Optional[str]:
    """Return the linked workout id, or the ``pick``-th recent workout's id."""

    if linked_id:
        return linked_id
    if pick is None or not (0 <= pick < len(recent)):
        return None
    return recent[pick].workout_id


__all__ = [
    "STATUS_READY",
    "STATUS_NO_DATA_LINKED",
    "STATUS_NOT_FOUND",
    "STATUS_UNREADABLE",
    "MatchAnalysis",
    "MatchAnalysisConfig",
    "MatchAnalysisService",
    "resolve_workout_id",
]
