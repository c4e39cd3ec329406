"""Central configuration for the referee match analytics package.

All values are constants imported by the rest of the package. Each one can be
overridden through an environment variable of the same name (optionally via a
local `.env`). The pure geometry and heart-rate functions also accept these
values as keyword arguments, so callers rarely need to touch the environment.
"""

from __future__ import annotations

import importlib
import os
from typing import Tuple


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


def _env_fractions(key: str, default: Tuple[float, ...]) -> Tuple[float, ...]:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        parsed = tuple(float(part) for part in value.split(",") if part.strip())
    except ValueError:
        return default
    if len(parsed) != len(default):
        return default
    return parsed


# Load .env variables when python-dotenv is available.
_load_dotenv = None
try:
    _dotenv_mod = importlib.import_module("dotenv")
    _load_dotenv = getattr(_dotenv_mod, "load_dotenv", None)
except Exception:
    _load_dotenv = None

if callable(_load_dotenv):
    # Load .env from the current directory or any parent folder.
    _load_dotenv()


# ---------------------------------------------------------------------------
# Trace sanitising
# ---------------------------------------------------------------------------
# Points at or beyond this great-circle distance (metres) from the trace
# centroid are dropped. One pitch plus a margin for the technical area.
SANITIZER_RADIUS_M = _env_float("SANITIZER_RADIUS_M", 85.0)


# ---------------------------------------------------------------------------
# Heat-map grids
# ---------------------------------------------------------------------------
# Geographic cell edge in degrees (roughly 2 m at mid latitudes).
GEO_GRID_SIZE_DEG = _env_float("GEO_GRID_SIZE_DEG", 0.00002)

# Virtual pitch resolution: columns across the width, rows along the length.
VIRTUAL_GRID_COLUMNS = _env_int("VIRTUAL_GRID_COLUMNS", 40)
VIRTUAL_GRID_ROWS = _env_int("VIRTUAL_GRID_ROWS", 60)

# Intensity tone mapping: a cell saturates at SATURATION_RATIO of the busiest
# cell, but never below SATURATION_FLOOR visits.
SATURATION_RATIO = _env_float("SATURATION_RATIO", 0.30)
SATURATION_FLOOR = _env_float("SATURATION_FLOOR", 2.0)

# Fraction of the calibrated width/length accepted outside the picked corners.
CALIBRATION_MARGIN = _env_float("CALIBRATION_MARGIN", 0.1)


# ---------------------------------------------------------------------------
# Heart rate
# ---------------------------------------------------------------------------
# Longest interval (seconds) a single sample may account for.
HR_SAMPLE_GAP_CAP_S = _env_float("HR_SAMPLE_GAP_CAP_S", 10.0)

DEFAULT_MAX_HR = _env_float("DEFAULT_MAX_HR", 190.0)

# Zone boundaries as fractions of max HR (Z1/Z2, Z2/Z3, Z3/Z4, Z4/Z5).
DEFAULT_ZONE_THRESHOLDS = _env_fractions(
    "DEFAULT_ZONE_THRESHOLDS", (0.60, 0.70, 0.80, 0.90)
)


# ---------------------------------------------------------------------------
# Wearable data access
# ---------------------------------------------------------------------------
# Parallel route segment fetches per workout.
ROUTE_FETCH_MAX_PARALLELISM = _env_int("ROUTE_FETCH_MAX_PARALLELISM", 4)

# Parsed workout exports kept in memory by the JSON export source.
WORKOUT_CACHE_SIZE = _env_int("WORKOUT_CACHE_SIZE", 32)
WORKOUT_CACHE_TTL_S = _env_int("WORKOUT_CACHE_TTL_S", 3600)

# Workouts offered for manual linking when a match has none.
RECENT_WORKOUTS_LIMIT = _env_int("RECENT_WORKOUTS_LIMIT", 15)


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------
# Directory (absolute or relative) where HTML maps and CSV tables are written.
HEATMAP_OUTPUT_DIR = os.getenv("HEATMAP_OUTPUT_DIR", "maps")

# Append _YYYYMMDD_HHMMSS to output file names when True.
OUTPUT_FILE_TIMESTAMP_ENABLED = _env_bool("OUTPUT_FILE_TIMESTAMP_ENABLED", False)
