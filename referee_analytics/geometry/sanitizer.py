"""Drop GPS drift and multipath points far from the activity centroid."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import numpy as np

from ..config import SANITIZER_RADIUS_M
from .models import LatLon
from .projection import haversine_m

logger = logging.getLogger(__name__)


def trace_centroid(points: Sequence[LatLon]) -> Optional[LatLon]:
    """Arithmetic mean of latitudes and longitudes, or ``None`` when empty."""

    if not points:
        return None
    coords = np.asarray(points, dtype=float)
    return float(coords[:, 0].mean()), float(coords[:, 1].mean())


def sanitize_trace(
    points: Sequence[LatLon],
    *,
    radius_m: float = SANITIZER_RADIUS_M,
) -> List[LatLon]:
    """Keep the points strictly closer than ``radius_m`` to the centroid.

    A single pass with a fixed centroid; order is preserved.
    """

    centroid = trace_centroid(points)
    if centroid is None:
        return []
    distances = haversine_m(points, centroid)
    kept = [
        (float(pt[0]), float(pt[1]))
        for pt, distance in zip(points, distances)
        if distance < radius_m
    ]
    dropped = len(points) - len(kept)
    if dropped:
        logger.debug(
            "Dropped %d of %d points beyond %.1f m of centroid",
            dropped,
            len(points),
            radius_m,
        )
    return kept


__all__ = ["trace_centroid", "sanitize_trace"]
