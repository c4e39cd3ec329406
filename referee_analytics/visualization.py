"""Render the geographic heat map and calibration outline on a folium map."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence, Union

import folium  # Using folium to build an interactive Leaflet map.

from .config import GEO_GRID_SIZE_DEG
from .geometry.calibration import complete_parallelogram
from .geometry.models import CalibrationCorners, LatLon, intensity_band
from .geometry.sanitizer import trace_centroid
from .services.heatmap_service import HeatMapResult

PathLike = Union[str, Path]

BAND_STYLES = {
    "high": ("#d73027", 0.6),
    "medium": ("#fc8d59", 0.5),
    "low": ("#fee08b", 0.4),
}
_TRACE_COLOR = "#2c7bb6"
_CALIBRATION_COLOR = "#1a9641"


def build_heatmap_map(
    result: HeatMapResult,
    *,
    corners: Optional[CalibrationCorners] = None,
    grid_size_deg: float = GEO_GRID_SIZE_DEG,
    show_trace: bool = False,
    output_html_path: Optional[PathLike] = None,
) -> folium.Map:
    """Create an interactive map with one coloured square per geographic bin.

    Args:
        result: Output of :func:`compute_heat_map` or a session snapshot.
        corners: Calibration corners; a complete set is drawn as the derived
            parallelogram outline.
        grid_size_deg: Cell size used when the bins were computed.
        show_trace: Also draw the sanitised trace as a thin polyline.
        output_html_path: Optional path to persist the map as an HTML file.

    Returns:
        A :class:`folium.Map` instance containing the overlay.
    """

    center: Optional[LatLon] = trace_centroid(result.sanitized_trace)
    if center is None and corners is not None and corners.points:
        center = corners.points[0]
    if center is None:
        center = (0.0, 0.0)

    folium_map = folium.Map(
        location=center, zoom_start=18, max_zoom=21, control_scale=True
    )

    for heat_bin in result.geographic_bins:
        color, opacity = BAND_STYLES[intensity_band(heat_bin.intensity)]
        folium.Polygon(
            locations=heat_bin.polygon(grid_size_deg),
            color=color,
            weight=0,
            fill=True,
            fill_color=color,
            fill_opacity=opacity,
            tooltip=f"{heat_bin.count} samples ({heat_bin.intensity:.0%})",
        ).add_to(folium_map)

    if show_trace and len(result.sanitized_trace) >= 2:
        folium.PolyLine(
            result.sanitized_trace,
            color=_TRACE_COLOR,
            weight=2,
            opacity=0.5,
            tooltip="Recorded trace",
        ).add_to(folium_map)

    if corners is not None and corners.is_complete:
        outline: Sequence[LatLon] = complete_parallelogram(corners.points)
        folium.Polygon(
            locations=list(outline),
            color=_CALIBRATION_COLOR,
            weight=3,
            fill=False,
            tooltip="Calibrated pitch",
        ).add_to(folium_map)
        for label, point in zip(("Top left", "Top right", "Bottom left"), corners.points):
            folium.CircleMarker(
                location=point,
                radius=5,
                color=_CALIBRATION_COLOR,
                fill=True,
                tooltip=label,
            ).add_to(folium_map)

    if output_html_path is not None:
        output_path = Path(output_html_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        folium_map.save(str(output_path))

    return folium_map


__all__ = ["BAND_STYLES", "build_heatmap_map"]
