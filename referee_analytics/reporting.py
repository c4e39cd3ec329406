"""Tabular views of analysis outputs for CSV export."""

from __future__ import annotations

from typing import Optional, Sequence

import pandas as pd

from .geometry.models import VirtualHeatBin, intensity_band
from .heart_rate import zone_bpm_ranges
from .models import ZONE_KEYS, ZoneDurations, ZoneThresholds

VIRTUAL_BIN_COLUMNS = ["cell_x", "cell_y", "x", "y", "count", "intensity", "band"]


def virtual_bins_frame(bins: Sequence[VirtualHeatBin]) -> pd.DataFrame:
    rows = [
        {
            "cell_x": b.key.x,
            "cell_y": b.key.y,
            "x": b.x,
            "y": b.y,
            "count": b.count,
            "intensity": b.intensity,
            "band": intensity_band(b.intensity),
        }
        for b in bins
    ]
    return pd.DataFrame(rows, columns=VIRTUAL_BIN_COLUMNS)


def zone_durations_frame(
    durations: ZoneDurations,
    max_hr: float,
    thresholds: Optional[ZoneThresholds] = None,
) -> pd.DataFrame:
    """One row per zone with its bpm label and minutes."""

    labels = zone_bpm_ranges(max_hr, thresholds)
    return pd.DataFrame(
        {
            "Zone": list(ZONE_KEYS),
            "Range": labels,
            "Minutes": [round(value, 2) for value in durations.minutes],
        }
    )


__all__ = ["VIRTUAL_BIN_COLUMNS", "virtual_bins_frame", "zone_durations_frame"]
