"""Tests for GPX route loading."""

from __future__ import annotations

import pytest

from referee_analytics.errors import PayloadFormatError
from referee_analytics.wearable.gpx import load_gpx_segments

TWO_SEGMENTS = """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" xmlns="http://www.topografix.com/GPX/1/1">
  <trk>
    <trkseg>
      <trkpt lat="40.4168" lon="-3.7038"><time>2025-03-01T10:00:00Z</time></trkpt>
      <trkpt lat="40.4169" lon="-3.7039"/>
    </trkseg>
    <trkseg>
      <trkpt lat="40.4170"/>
      <trkpt lat="40.4171" lon="-3.7041"/>
    </trkseg>
  </trk>
</gpx>
"""


def test_segments_keep_order_and_skip_bad_points(tmp_path, caplog) -> None:
    path = tmp_path / "match.gpx"
    path.write_text(TWO_SEGMENTS, encoding="utf-8")

    segments = load_gpx_segments(path)

    assert segments == [
        [(40.4168, -3.7038), (40.4169, -3.7039)],
        [(40.4171, -3.7041)],
    ]
    assert "Skipped 1 malformed track points" in caplog.text


def test_invalid_xml_raises(tmp_path) -> None:
    path = tmp_path / "broken.gpx"
    path.write_text("<gpx><trk>", encoding="utf-8")
    with pytest.raises(PayloadFormatError):
        load_gpx_segments(path)
