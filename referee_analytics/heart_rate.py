"""Heart-rate zone classification and time-in-zone aggregation."""

from __future__ import annotations

from typing import List, Optional, Sequence

from .config import DEFAULT_MAX_HR, HR_SAMPLE_GAP_CAP_S
from .models import ZONE_KEYS, HeartRateSample, ZoneDurations, ZoneThresholds


def default_thresholds() -> ZoneThresholds:
    return ZoneThresholds.from_config()


def classify_zone(fraction: float, thresholds: ZoneThresholds) -> int:
    """Return the zone index (0-4) for a fraction of max heart rate."""

    for index, bound in enumerate(thresholds.as_tuple()):
        if fraction < bound:
            return index
    return len(ZONE_KEYS) - 1


def compute_zone_durations(
    samples: Sequence[HeartRateSample],
    thresholds: Optional[ZoneThresholds] = None,
    max_hr: float = DEFAULT_MAX_HR,
    *,
    gap_cap_s: float = HR_SAMPLE_GAP_CAP_S,
) -> ZoneDurations:
    """Accumulate minutes per zone from time-sorted samples.

    Each sample accounts for the interval until the next one, capped at
    ``gap_cap_s`` seconds; the last sample accounts for nothing.
    """

    if max_hr <= 0:
        raise ValueError("max_hr must be greater than zero")
    thresholds = thresholds or default_thresholds()
    seconds = [0.0] * len(ZONE_KEYS)
    ordered = list(samples)
    for current, following in zip(ordered, ordered[1:]):
        elapsed = (following.timestamp - current.timestamp).total_seconds()
        duration = min(max(elapsed, 0.0), gap_cap_s)
        zone = classify_zone(current.bpm / max_hr, thresholds)
        seconds[zone] += duration
    minutes = tuple(value / 60.0 for value in seconds)
    return ZoneDurations(minutes=minutes)  # type: ignore[arg-type]


def zone_bpm_ranges(
    max_hr: float = DEFAULT_MAX_HR,
    thresholds: Optional[ZoneThresholds] = None,
) -> List[str]:
    """Display labels with the bpm range of each zone."""

    thresholds = thresholds or default_thresholds()
    bounds = [int(round(max_hr * fraction)) for fraction in thresholds.as_tuple()]
    labels = [f"Zone 1 (< {bounds[0]} bpm)"]
    for index in range(1, len(bounds)):
        labels.append(f"Zone {index + 1} ({bounds[index - 1]}-{bounds[index]} bpm)")
    labels.append(f"Zone {len(ZONE_KEYS)} (> {bounds[-1]} bpm)")
    return labels


__all__ = [
    "default_thresholds",
    "classify_zone",
    "compute_zone_durations",
    "zone_bpm_ranges",
]
