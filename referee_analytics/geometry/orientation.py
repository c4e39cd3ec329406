"""Principal-axis orientation estimate for uncalibrated point clouds."""

from __future__ import annotations

import math
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np

from .projection import MetricArray


def planar_centroid(points: MetricArray) -> Tuple[float, float]:
    array = np.asarray(points, dtype=float).reshape(-1, 2)
    if array.shape[0] == 0:
        raise ValueError("Cannot compute the centroid of an empty point set")
    return float(array[:, 0].mean()), float(array[:, 1].mean())


def estimate_rotation(
    points: MetricArray | Sequence[Iterable[float]],
    center: Optional[Tuple[float, float]] = None,
) -> float:
    """Return the rotation angle (radians) aligning the cloud's second moments.

    Uses ``0.5 * atan2(sum(dx^2 - dy^2), sum(2 dx dy))`` around ``center``
    (the centroid by default). A cloud with no spread yields 0.
    """

    array = np.asarray(points, dtype=float).reshape(-1, 2)
    if array.shape[0] == 0:
        return 0.0
    cx, cy = center if center is not None else planar_centroid(array)
    dx = array[:, 0] - cx
    dy = array[:, 1] - cy
    numerator = float(np.sum(2.0 * dx * dy))
    denominator = float(np.sum(dx * dx - dy * dy))
    if numerator == 0.0 and denominator == 0.0:
        return 0.0
    return 0.5 * math.atan2(denominator, numerator)


def rotate_points(
    points: MetricArray,
    center: Tuple[float, float],
    angle: float,
) -> MetricArray:
    """Rotate points counter-clockwise by ``angle`` radians about ``center``."""

    array = np.asarray(points, dtype=float).reshape(-1, 2)
    cos_a, sin_a = math.cos(angle), math.sin(angle)
    dx = array[:, 0] - center[0]
    dy = array[:, 1] - center[1]
    x_rot = dx * cos_a - dy * sin_a
    y_rot = dx * sin_a + dy * cos_a
    return np.column_stack((center[0] + x_rot, center[1] + y_rot))


__all__ = ["planar_centroid", "estimate_rotation", "rotate_points"]
