"""Project a GPS trace onto a normalised portrait "virtual pitch".

Two projectors are available. The automatic one estimates the trace's
dominant axis, rotates and bounds the cloud, and re-orients it to portrait.
The calibrated one decomposes each point in the oblique basis spanned by three
user-picked corners (top-left, top-right, bottom-left). Both feed the same
40 x 60 grid aggregation.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

import numpy as np

from ..config import CALIBRATION_MARGIN, VIRTUAL_GRID_COLUMNS, VIRTUAL_GRID_ROWS
from .binning import bin_virtual
from .models import LatLon, VirtualHeatBin
from .orientation import estimate_rotation, planar_centroid, rotate_points
from .projection import MetricArray, to_map_points, to_planar

logger = logging.getLogger(__name__)


def automatic_coordinates(planar: MetricArray) -> MetricArray:
    """Normalised portrait coordinates for every point, or an empty array.

    The result is empty when the rotated cloud's bounding box has no area.
    """

    array = np.asarray(planar, dtype=float).reshape(-1, 2)
    if array.shape[0] == 0:
        return np.empty((0, 2), dtype=float)
    center = planar_centroid(array)
    angle = estimate_rotation(array, center)
    rotated = rotate_points(array, center, angle)

    min_x, min_y = rotated.min(axis=0)
    max_x, max_y = rotated.max(axis=0)
    width = float(max_x - min_x)
    height = float(max_y - min_y)
    if width <= 0.0 or height <= 0.0:
        logger.info("Rotated trace has a zero-area bounding box; skipping projection")
        return np.empty((0, 2), dtype=float)

    norm_x = (rotated[:, 0] - min_x) / width
    norm_y = (rotated[:, 1] - min_y) / height
    if width > height:
        # Landscape cloud: the long axis becomes the pitch length.
        norm_x, norm_y = norm_y, 1.0 - norm_x
    else:
        norm_y = 1.0 - norm_y
    return np.column_stack((norm_x, norm_y))


def calibrated_coordinates(
    planar: MetricArray,
    corners_planar: MetricArray,
    *,
    margin: float = CALIBRATION_MARGIN,
) -> MetricArray:
    """Oblique-basis (u, v) for the points inside the calibrated footprint.

    ``U = P1 - P0`` spans the width and ``V = P2 - P0`` the length. Points
    whose projections fall outside ``[-margin, 1 + margin]`` are dropped. A
    zero-length basis vector yields an empty array.
    """

    array = np.asarray(planar, dtype=float).reshape(-1, 2)
    p0, p1, p2 = np.asarray(corners_planar, dtype=float).reshape(3, 2)
    vector_u = p1 - p0
    vector_v = p2 - p0
    len_u_sq = float(vector_u @ vector_u)
    len_v_sq = float(vector_v @ vector_v)
    if len_u_sq == 0.0 or len_v_sq == 0.0:
        logger.warning("Calibration corners are degenerate; skipping projection")
        return np.empty((0, 2), dtype=float)
    if array.shape[0] == 0:
        return np.empty((0, 2), dtype=float)

    offsets = array - p0
    proj_u = (offsets @ vector_u) / len_u_sq
    proj_v = (offsets @ vector_v) / len_v_sq
    lower, upper = -margin, 1.0 + margin
    inside = (proj_u >= lower) & (proj_u <= upper) & (proj_v >= lower) & (proj_v <= upper)
    return np.column_stack((proj_u[inside], proj_v[inside]))


def project_automatic(
    points: Sequence[LatLon],
    *,
    columns: int = VIRTUAL_GRID_COLUMNS,
    rows: int = VIRTUAL_GRID_ROWS,
) -> List[VirtualHeatBin]:
    """Virtual pitch bins using the estimated orientation of the trace.

    Orientation and the portrait flip are evaluated on map points (y south).
    """

    coordinates = automatic_coordinates(to_map_points(points))
    return bin_virtual(map(tuple, coordinates), columns=columns, rows=rows)


def project_calibrated(
    points: Sequence[LatLon],
    corners: Sequence[LatLon],
    *,
    margin: float = CALIBRATION_MARGIN,
    columns: int = VIRTUAL_GRID_COLUMNS,
    rows: int = VIRTUAL_GRID_ROWS,
) -> List[VirtualHeatBin]:
    """Virtual pitch bins using the three calibration corners."""

    if len(corners) != 3:
        raise ValueError("Calibrated projection needs exactly three corners")
    coordinates = calibrated_coordinates(
        to_planar(points), to_planar(list(corners)), margin=margin
    )
    return bin_virtual(map(tuple, coordinates), columns=columns, rows=rows)


__all__ = [
    "automatic_coordinates",
    "calibrated_coordinates",
    "project_automatic",
    "project_calibrated",
]
