"""Coordinate conversions between lat/lon, Web Mercator metres and distances."""

from __future__ import annotations

from functools import lru_cache
from typing import List, Sequence

import numpy as np
from numpy.typing import NDArray
from pyproj import CRS, Transformer

from .models import LatLon

MetricArray = NDArray[np.float64]

EARTH_RADIUS_M = 6_371_008.8


@lru_cache(maxsize=1)
def _forward_transformer() -> Transformer:
    return Transformer.from_crs(CRS.from_epsg(4326), CRS.from_epsg(3857), always_xy=True)


@lru_cache(maxsize=1)
def _inverse_transformer() -> Transformer:
    return Transformer.from_crs(CRS.from_epsg(3857), CRS.from_epsg(4326), always_xy=True)


def to_planar(points: Sequence[LatLon]) -> MetricArray:
    """Project lat/lon pairs into Web Mercator metres as an ``(N, 2)`` array."""

    if not points:
        return np.empty((0, 2), dtype=float)
    lats = np.asarray([pt[0] for pt in points], dtype=float)
    lons = np.asarray([pt[1] for pt in points], dtype=float)
    xs, ys = _forward_transformer().transform(lons, lats)
    return np.column_stack((xs, ys)).astype(float, copy=False)


def to_map_points(points: Sequence[LatLon]) -> MetricArray:
    """Web Mercator metres with y growing southwards, as on a screen map."""

    planar = to_planar(points)
    planar[:, 1] *= -1.0
    return planar


def to_geo(points: MetricArray) -> List[LatLon]:
    """Convert Web Mercator metres back to lat/lon tuples."""

    array = np.asarray(points, dtype=float).reshape(-1, 2)
    if array.shape[0] == 0:
        return []
    lons, lats = _inverse_transformer().transform(array[:, 0], array[:, 1])
    return [(float(lat), float(lon)) for lat, lon in zip(np.atleast_1d(lats), np.atleast_1d(lons))]


def haversine_m(points: Sequence[LatLon], origin: LatLon) -> NDArray[np.float64]:
    """Great-circle distance in metres from every point to ``origin``."""

    if not points:
        return np.empty(0, dtype=float)
    coords = np.radians(np.asarray(points, dtype=float))
    lat0, lon0 = np.radians(origin[0]), np.radians(origin[1])
    dlat = coords[:, 0] - lat0
    dlon = coords[:, 1] - lon0
    a = np.sin(dlat / 2.0) ** 2 + np.cos(lat0) * np.cos(coords[:, 0]) * np.sin(dlon / 2.0) ** 2
    return 2.0 * EARTH_RADIUS_M * np.arcsin(np.sqrt(np.clip(a, 0.0, 1.0)))


__all__ = ["MetricArray", "EARTH_RADIUS_M", "to_planar", "to_map_points", "to_geo", "haversine_m"]
