"""Route trace loading.

Fetches every recorded route segment of a workout in parallel and joins them
into one raw trace. The trace is only handed on once every segment fetch has
finished; a failing segment contributes zero points.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
import logging
from typing import Dict, List, Sequence

from ..config import ROUTE_FETCH_MAX_PARALLELISM
from ..geometry.models import LatLon
from ..wearable.source import WearableDataSource


@dataclass(slots=True)
class RouteServiceConfig:
    max_parallelism: int = ROUTE_FETCH_MAX_PARALLELISM
    logger: logging.Logger | None = None


class RouteService:
    def __init__(self, source: WearableDataSource, config: RouteServiceConfig | None = None):
        self.source = source
        self.config = config or RouteServiceConfig()
        self._log = self.config.logger or logging.getLogger(self.__class__.__name__)

    def fetch_trace(self, workout_id: str) -> List[LatLon]:
        """Return the concatenated points of all route segments, in segment order."""

        try:
            segment_ids: Sequence[str] = list(self.source.list_route_segments(workout_id))
        except Exception as exc:
            self._log.warning(
                "Route listing failed for workout=%s; using empty trace: %s",
                workout_id,
                exc,
            )
            return []
        if not segment_ids:
            self._log.info("Workout %s has no recorded route", workout_id)
            return []

        results: Dict[str, List[LatLon]] = {}

        def fetch_segment(segment_id: str) -> List[LatLon]:
            try:
                return list(self.source.fetch_route_segment(workout_id, segment_id) or [])
            except Exception as exc:
                self._log.warning(
                    "Route segment %s of workout=%s failed; contributes no points: %s",
                    segment_id,
                    workout_id,
                    exc,
                )
                return []

        max_workers = max(1, min(self.config.max_parallelism, len(segment_ids)))
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            future_map = {
                executor.submit(fetch_segment, segment_id): segment_id
                for segment_id in segment_ids
            }
            for future in as_completed(future_map):
                results[future_map[future]] = future.result()

        trace = [point for segment_id in segment_ids for point in results[segment_id]]
        self._log.info(
            "Loaded %d points from %d route segments for workout=%s",
            len(trace),
            len(segment_ids),
            workout_id,
        )
        return trace


__all__ = ["RouteService", "RouteServiceConfig"]
