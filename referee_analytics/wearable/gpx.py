"""Read route segments from GPX files recorded by a watch or exported apps."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Union

from defusedxml import ElementTree as ET

from ..errors import PayloadFormatError
from ..geometry.models import LatLon

LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]


def load_gpx_segments(path: PathLike) -> List[List[LatLon]]:
    """Return one ordered point list per ``<trkseg>`` in the file.

    Track points without valid ``lat``/``lon`` attributes are skipped.
    """

    try:
        tree = ET.parse(str(path))
    except ET.ParseError as exc:
        raise PayloadFormatError(f"Invalid GPX file {path}: {exc}") from exc
    root = tree.getroot()
    segments: List[List[LatLon]] = []
    for trkseg in root.iterfind(".//{*}trkseg"):
        points: List[LatLon] = []
        skipped = 0
        for trkpt in trkseg.findall("{*}trkpt"):
            try:
                points.append((float(trkpt.attrib["lat"]), float(trkpt.attrib["lon"])))
            except (KeyError, ValueError):
                skipped += 1
        if skipped:
            LOGGER.warning("Skipped %d malformed track points in %s", skipped, path)
        segments.append(points)
    return segments


__all__ = ["load_gpx_segments"]
