"""Tests for the folium heat-map rendering."""

from __future__ import annotations

import folium

from referee_analytics.geometry.models import CalibrationCorners
from referee_analytics.services.heatmap_service import compute_heat_map
from referee_analytics.visualization import build_heatmap_map


def test_map_is_built_and_saved(tmp_path, pitch_trace, pitch_corners) -> None:
    corners = CalibrationCorners.from_points(pitch_corners)
    result = compute_heat_map(pitch_trace, corners)
    output = tmp_path / "maps" / "match.html"

    folium_map = build_heatmap_map(result, corners=corners, output_html_path=output)

    assert isinstance(folium_map, folium.Map)
    html = output.read_text(encoding="utf-8")
    assert "Calibrated pitch" in html
    assert "Top left" in html


def test_empty_result_still_renders() -> None:
    folium_map = build_heatmap_map(compute_heat_map([]), show_trace=True)
    assert isinstance(folium_map, folium.Map)
    assert folium_map.location == [0.0, 0.0]
