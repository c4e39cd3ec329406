"""Wearable data source backed by a directory of JSON workout exports.

Each workout lives in ``<workout_id>.json``::

    {
        "summary": {"id": "...", "start": "...", "end": "...",
                    "duration_s": 5400, "total_energy_kcal": 820,
                    "total_distance_m": 9800},
        "routes": [
            {"id": "r1", "latlng": [[40.1, -3.2], ...]},
            {"id": "r2", "polyline": "..."},
            {"id": "r3", "gpx": "second_half.gpx"}
        ],
        "heart_rate": [{"time": "...", "bpm": 151}, ...],
        "stats": {"heart_rate": {"average": 148.0},
                  "running_speed": {"max": 7.1},
                  "step_count": {"sum": 11230}}
    }
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from threading import RLock
from typing import Any, Dict, List, Optional, Union

from cachetools import TTLCache

from ..config import WORKOUT_CACHE_SIZE, WORKOUT_CACHE_TTL_S
from ..errors import PayloadFormatError, WorkoutNotFoundError
from ..geometry.models import LatLon
from ..models import HeartRateSample, WorkoutSummary
from .gpx import load_gpx_segments
from .payloads import parse_heart_rate_samples, parse_route_segment, parse_workout_summary

LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass(slots=True)
class WorkoutExport:
    """Parsed contents of one export file."""

    summary: WorkoutSummary
    routes: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    heart_rate: List[HeartRateSample] = field(default_factory=list)
    stats: Dict[str, Dict[str, float]] = field(default_factory=dict)


class JsonExportSource:
    """Serve workouts, routes and heart-rate data from exported JSON files."""

    def __init__(
        self,
        directory: PathLike,
        *,
        cache_size: int = WORKOUT_CACHE_SIZE,
        cache_ttl_s: int = WORKOUT_CACHE_TTL_S,
    ) -> None:
        self.directory = Path(directory)
        self._cache: TTLCache[str, WorkoutExport] = TTLCache(
            maxsize=max(1, cache_size), ttl=max(1, cache_ttl_s)
        )
        self._lock = RLock()

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def _path_for(self, workout_id: str) -> Path:
        return self.directory / f"{workout_id}.json"

    def load(self, workout_id: str) -> WorkoutExport:
        with self._lock:
            cached = self._cache.get(workout_id)
        if cached is not None:
            return cached

        path = self._path_for(workout_id)
        if not path.is_file():
            raise WorkoutNotFoundError(f"No export found for workout {workout_id}")
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise PayloadFormatError(f"Export {path} is not valid UTF-8 JSON") from exc
        export = self._parse_export(payload, path)
        with self._lock:
            self._cache[workout_id] = export
        return export

    def _parse_export(self, payload: Any, path: Path) -> WorkoutExport:
        if not isinstance(payload, dict):
            raise PayloadFormatError(f"Export {path} must contain an object")
        summary = parse_workout_summary(payload.get("summary") or {})
        raw_routes = payload.get("routes") or []
        if not isinstance(raw_routes, list):
            raise PayloadFormatError(f"Routes in {path} must be a list")
        routes: Dict[str, Dict[str, Any]] = {}
        for index, route in enumerate(raw_routes):
            if not isinstance(route, dict):
                raise PayloadFormatError(f"Route {index} in {path} must be an object")
            routes[str(route.get("id", index))] = route
        heart_rate = parse_heart_rate_samples(payload.get("heart_rate") or [])
        raw_stats = payload.get("stats") or {}
        if not isinstance(raw_stats, dict):
            raise PayloadFormatError(f"Stats in {path} must be an object")
        stats: Dict[str, Dict[str, float]] = {}
        for metric, values in raw_stats.items():
            if not isinstance(values, dict):
                raise PayloadFormatError(f"Stats for '{metric}' in {path} must be an object")
            try:
                stats[str(metric)] = {
                    str(aggregation): float(value)
                    for aggregation, value in values.items()
                    if value is not None
                }
            except (TypeError, ValueError) as exc:
                raise PayloadFormatError(f"Stats for '{metric}' in {path} are not numeric") from exc
        return WorkoutExport(summary=summary, routes=routes, heart_rate=heart_rate, stats=stats)

    def _all_exports(self) -> List[WorkoutExport]:
        exports: List[WorkoutExport] = []
        for path in sorted(self.directory.glob("*.json")):
            try:
                exports.append(self.load(path.stem))
            except PayloadFormatError as exc:
                LOGGER.warning("Skipping malformed export %s: %s", path.name, exc)
        return exports

    # ------------------------------------------------------------------
    # WearableDataSource
    # ------------------------------------------------------------------
    def fetch_workout_summary(self, workout_id: str) -> WorkoutSummary:
        return self.load(workout_id).summary

    def list_route_segments(self, workout_id: str) -> List[str]:
        try:
            return list(self.load(workout_id).routes)
        except WorkoutNotFoundError:
            return []

    def fetch_route_segment(self, workout_id: str, segment_id: str) -> List[LatLon]:
        route = self.load(workout_id).routes[segment_id]
        if route.get("gpx"):
            gpx_path = self.directory / str(route["gpx"])
            return [point for segment in load_gpx_segments(gpx_path) for point in segment]
        return parse_route_segment(route)

    def fetch_heart_rate_samples(
        self, start: datetime, end: datetime
    ) -> List[HeartRateSample]:
        samples = [
            sample
            for export in self._all_exports()
            for sample in export.heart_rate
            if start <= sample.timestamp <= end
        ]
        samples.sort(key=lambda sample: sample.timestamp)
        return samples

    def fetch_scalar_stat(
        self, metric: str, aggregation: str, start: datetime, end: datetime
    ) -> Optional[float]:
        for export in self._all_exports():
            summary = export.summary
            if summary.start <= end and start <= summary.end:
                value = export.stats.get(metric, {}).get(aggregation)
                if value is not None:
                    return value
        return None

    def list_recent_workouts(self, limit: int) -> List[WorkoutSummary]:
        summaries = [export.summary for export in self._all_exports()]
        summaries.sort(key=lambda summary: summary.start, reverse=True)
        return summaries[: max(0, limit)]


__all__ = ["WorkoutExport", "JsonExportSource"]
