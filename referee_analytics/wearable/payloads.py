"""Parse exported workout payloads into typed models.

Every parser validates the whole payload before building anything and raises
:class:`PayloadFormatError` on missing or malformed required fields.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, List, Mapping, Sequence

from polyline import decode as polyline_decode

from ..errors import PayloadFormatError
from ..geometry.models import LatLon
from ..models import HeartRateSample, WorkoutSummary


def _as_utc(value: datetime) -> datetime:
    # Offset-less timestamps are recorded in UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_timestamp(value: Any) -> datetime:
    """Parse ISO-8601 strings (``Z`` suffix allowed) or epoch seconds.

    Always returns an aware datetime; values without an offset are UTC.
    """

    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(float(value), tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as exc:
            raise PayloadFormatError(f"Invalid timestamp: {value!r}") from exc
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return _as_utc(datetime.fromisoformat(text))
        except ValueError as exc:
            raise PayloadFormatError(f"Invalid timestamp: {value!r}") from exc
    raise PayloadFormatError(f"Invalid timestamp: {value!r}")


def _require(payload: Mapping[str, Any], key: str) -> Any:
    if key not in payload or payload[key] is None:
        raise PayloadFormatError(f"Missing required field '{key}'")
    return payload[key]


def _as_float(value: Any, key: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise PayloadFormatError(f"Field '{key}' is not numeric: {value!r}") from exc


def parse_workout_summary(payload: Mapping[str, Any]) -> WorkoutSummary:
    """Build a :class:`WorkoutSummary` from an export mapping."""

    if not isinstance(payload, Mapping):
        raise PayloadFormatError("Workout summary payload must be an object")
    workout_id = str(_require(payload, "id"))
    start = parse_timestamp(_require(payload, "start"))
    end = parse_timestamp(_require(payload, "end"))
    if end < start:
        raise PayloadFormatError(f"Workout {workout_id} ends before it starts")
    metadata = payload.get("metadata") or {}
    if not isinstance(metadata, Mapping):
        raise PayloadFormatError(f"Workout {workout_id} metadata must be an object")
    duration = payload.get("duration_s")
    duration_s = (
        _as_float(duration, "duration_s")
        if duration is not None
        else (end - start).total_seconds()
    )
    return WorkoutSummary(
        workout_id=workout_id,
        start=start,
        end=end,
        duration_s=duration_s,
        total_energy_kcal=_as_float(payload.get("total_energy_kcal") or 0.0, "total_energy_kcal"),
        total_distance_m=_as_float(payload.get("total_distance_m") or 0.0, "total_distance_m"),
        metadata=dict(metadata),
    )


def _normalize_point(point: Sequence[Any]) -> LatLon:
    """Convert a raw lat/lon pair to a typed tuple."""

    if not isinstance(point, (list, tuple)) or len(point) != 2:
        raise PayloadFormatError("Expected lat/lon pair in route segment")
    lat = _as_float(point[0], "latlng")
    lon = _as_float(point[1], "latlng")
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
        raise PayloadFormatError(f"Coordinate out of range: {lat}, {lon}")
    return lat, lon


def decode_polyline(encoded: str) -> List[LatLon]:
    """Decode an encoded polyline string into a list of (lat, lon) tuples."""

    if not encoded:
        return []
    try:
        decoded = polyline_decode(encoded)
    except (ValueError, TypeError, IndexError) as exc:
        raise PayloadFormatError("Unable to decode polyline") from exc
    return [(float(lat), float(lon)) for lat, lon in decoded]


def parse_route_segment(payload: Mapping[str, Any]) -> List[LatLon]:
    """Return the ordered points of one route segment.

    Accepts either a ``latlng`` list of pairs or an encoded ``polyline``.
    """

    if not isinstance(payload, Mapping):
        raise PayloadFormatError("Route segment payload must be an object")
    if payload.get("latlng") is not None:
        raw = payload["latlng"]
        if not isinstance(raw, list):
            raise PayloadFormatError("Field 'latlng' must be a list")
        return [_normalize_point(pair) for pair in raw]
    if payload.get("polyline") is not None:
        return decode_polyline(str(payload["polyline"]))
    raise PayloadFormatError("Route segment needs 'latlng' or 'polyline'")


def parse_heart_rate_samples(payload: Sequence[Any]) -> List[HeartRateSample]:
    """Parse ``[{"time": ..., "bpm": ...}, ...]`` into time-sorted samples."""

    if not isinstance(payload, list):
        raise PayloadFormatError("Heart-rate payload must be a list")
    samples = []
    for entry in payload:
        if not isinstance(entry, Mapping):
            raise PayloadFormatError("Heart-rate sample must be an object")
        samples.append(
            HeartRateSample(
                timestamp=parse_timestamp(_require(entry, "time")),
                bpm=_as_float(_require(entry, "bpm"), "bpm"),
            )
        )
    samples.sort(key=lambda sample: sample.timestamp)
    return samples


__all__ = [
    "parse_timestamp",
    "parse_workout_summary",
    "decode_polyline",
    "parse_route_segment",
    "parse_heart_rate_samples",
]
