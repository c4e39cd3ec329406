"""Grid aggregation and intensity tone mapping for heat maps."""

from __future__ import annotations

import math
from collections import defaultdict
from typing import Iterable, List, Sequence, Tuple

from ..config import (
    GEO_GRID_SIZE_DEG,
    SATURATION_FLOOR,
    SATURATION_RATIO,
    VIRTUAL_GRID_COLUMNS,
    VIRTUAL_GRID_ROWS,
)
from .models import GeoHeatBin, GridCounts, GridKey, LatLon, VirtualHeatBin


def saturation_threshold(
    max_count: int,
    *,
    ratio: float = SATURATION_RATIO,
    floor: float = SATURATION_FLOOR,
) -> float:
    """Count at which a cell reaches full intensity."""

    return max(ratio * float(max_count), floor)


def intensity_for(count: int, threshold: float) -> float:
    """Map a visit count to [0, 1] given the saturation threshold."""

    return min(float(count) / threshold, 1.0)


def count_cells(keys: Iterable[GridKey]) -> GridCounts:
    """Count occurrences of each grid key."""

    counts: GridCounts = defaultdict(int)
    for key in keys:
        counts[key] += 1
    return dict(counts)


def geo_cell_key(point: LatLon, grid_size_deg: float = GEO_GRID_SIZE_DEG) -> GridKey:
    """Geographic cell containing ``point`` (floor toward negative infinity)."""

    lat, lon = point
    return GridKey(math.floor(lat / grid_size_deg), math.floor(lon / grid_size_deg))


def bin_geographic(
    points: Sequence[LatLon],
    *,
    grid_size_deg: float = GEO_GRID_SIZE_DEG,
) -> List[GeoHeatBin]:
    """Aggregate points into a lat/lon grid and emit one bin per populated cell."""

    if not points:
        return []
    counts = count_cells(geo_cell_key(pt, grid_size_deg) for pt in points)
    threshold = saturation_threshold(max(counts.values()))
    half = grid_size_deg / 2.0
    bins = [
        GeoHeatBin(
            key=key,
            center=(key.x * grid_size_deg + half, key.y * grid_size_deg + half),
            count=count,
            intensity=intensity_for(count, threshold),
        )
        for key, count in counts.items()
    ]
    bins.sort(key=lambda b: (b.key.x, b.key.y))
    return bins


def virtual_cell_key(
    x: float,
    y: float,
    *,
    columns: int = VIRTUAL_GRID_COLUMNS,
    rows: int = VIRTUAL_GRID_ROWS,
) -> GridKey:
    """Virtual cell for a normalised coordinate, clipped to the grid."""

    cx = min(max(math.floor(x * columns), 0), columns - 1)
    cy = min(max(math.floor(y * rows), 0), rows - 1)
    return GridKey(cx, cy)


def bin_virtual(
    coordinates: Iterable[Tuple[float, float]],
    *,
    columns: int = VIRTUAL_GRID_COLUMNS,
    rows: int = VIRTUAL_GRID_ROWS,
) -> List[VirtualHeatBin]:
    """Aggregate normalised pitch coordinates into the virtual grid."""

    counts = count_cells(
        virtual_cell_key(x, y, columns=columns, rows=rows) for x, y in coordinates
    )
    if not counts:
        return []
    threshold = saturation_threshold(max(counts.values()))
    bins = [
        VirtualHeatBin(
            key=key,
            x=(key.x + 0.5) / columns,
            y=(key.y + 0.5) / rows,
            count=count,
            intensity=intensity_for(count, threshold),
        )
        for key, count in counts.items()
    ]
    bins.sort(key=lambda b: (b.key.x, b.key.y))
    return bins


__all__ = [
    "saturation_threshold",
    "intensity_for",
    "count_cells",
    "geo_cell_key",
    "bin_geographic",
    "virtual_cell_key",
    "bin_virtual",
]
