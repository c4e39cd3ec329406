"""Access to wearable workout data: interface, payload parsing and sources."""

from .source import Aggregation, Metric, WearableDataSource
from .payloads import (
    decode_polyline,
    parse_heart_rate_samples,
    parse_route_segment,
    parse_workout_summary,
)
from .gpx import load_gpx_segments
from .file_source import JsonExportSource, WorkoutExport

__all__ = [
    "Aggregation",
    "Metric",
    "WearableDataSource",
    "decode_polyline",
    "parse_heart_rate_samples",
    "parse_route_segment",
    "parse_workout_summary",
    "load_gpx_segments",
    "JsonExportSource",
    "WorkoutExport",
]
