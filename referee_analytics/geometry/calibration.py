"""Validation and display helpers for user-picked pitch corners."""

from __future__ import annotations

import math
from typing import List, Sequence

import numpy as np

from ..errors import CalibrationError
from .models import LatLon
from .projection import to_geo, to_planar

MAX_CORNERS = 3


def validate_corners(points: Sequence[Sequence[float]]) -> List[LatLon]:
    """Return corners as lat/lon tuples, rejecting malformed or extra points."""

    if len(points) > MAX_CORNERS:
        raise CalibrationError(
            f"At most {MAX_CORNERS} calibration corners are collected, got {len(points)}"
        )
    corners: List[LatLon] = []
    for index, point in enumerate(points):
        if len(point) != 2:
            raise CalibrationError(f"Corner {index} is not a lat/lon pair")
        lat, lon = float(point[0]), float(point[1])
        if not (math.isfinite(lat) and math.isfinite(lon)):
            raise CalibrationError(f"Corner {index} has non-finite coordinates")
        if not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
            raise CalibrationError(f"Corner {index} is outside lat/lon range")
        corners.append((lat, lon))
    return corners


def complete_parallelogram(corners: Sequence[LatLon]) -> List[LatLon]:
    """Return the display outline ``[P0, P1, P3, P2]``.

    ``P3 = P2 + (P1 - P0)`` is derived in planar metres, never measured.
    """

    if len(corners) != MAX_CORNERS:
        raise CalibrationError("Three corners are required to draw the pitch outline")
    planar = to_planar(list(corners))
    p0, p1, p2 = planar
    p3 = p2 + (p1 - p0)
    (fourth,) = to_geo(np.asarray([p3]))
    return [corners[0], corners[1], fourth, corners[2]]


__all__ = ["MAX_CORNERS", "validate_corners", "complete_parallelogram"]
