"""Dataclasses describing GPS traces, grid cells and heat-map bins."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple


LatLon = Tuple[float, float]
GridCounts = Dict["GridKey", int]


@dataclass(frozen=True, slots=True)
class GridKey:
    """Integer cell address in either the geographic or the virtual grid."""

    x: int
    y: int


@dataclass(frozen=True, slots=True)
class GeoHeatBin:
    """Populated geographic cell, centred on a lat/lon position."""

    key: GridKey
    center: LatLon
    count: int
    intensity: float

    def polygon(self, grid_size_deg: float) -> List[LatLon]:
        """Return the four corners of the cell square around ``center``."""

        half = grid_size_deg / 2.0
        lat, lon = self.center
        return [
            (lat - half, lon - half),
            (lat - half, lon + half),
            (lat + half, lon + half),
            (lat + half, lon - half),
        ]


@dataclass(frozen=True, slots=True)
class VirtualHeatBin:
    """Populated virtual pitch cell with normalised (x, y) in [0, 1]."""

    key: GridKey
    x: float
    y: float
    count: int
    intensity: float


@dataclass(frozen=True, slots=True)
class CalibrationCorners:
    """User-picked pitch corners in the order top-left, top-right, bottom-left."""

    points: Tuple[LatLon, ...] = ()

    @property
    def is_complete(self) -> bool:
        return len(self.points) == 3

    @classmethod
    def from_points(cls, points: Sequence[Sequence[float]] | None) -> "CalibrationCorners":
        # Local import keeps models free of the calibration validation rules.
        from .calibration import validate_corners

        return cls(points=tuple(validate_corners(points or [])))


def intensity_band(intensity: float) -> str:
    """Bucket an intensity into the three colour bands used by the map."""

    if intensity > 0.75:
        return "high"
    if intensity > 0.40:
        return "medium"
    return "low"


__all__ = [
    "LatLon",
    "GridCounts",
    "GridKey",
    "GeoHeatBin",
    "VirtualHeatBin",
    "CalibrationCorners",
    "intensity_band",
]
