"""GPS geometry processing for match heat maps.

This package sanitises a recorded trace, bins it into a geographic grid, and
projects it onto a normalised virtual pitch either automatically or from three
user-picked corners.
"""

from .models import (
    CalibrationCorners,
    GeoHeatBin,
    GridKey,
    LatLon,
    VirtualHeatBin,
    intensity_band,
)
from .sanitizer import sanitize_trace, trace_centroid
from .binning import bin_geographic, bin_virtual, saturation_threshold
from .orientation import estimate_rotation, rotate_points
from .virtual import project_automatic, project_calibrated
from .calibration import complete_parallelogram, validate_corners

__all__ = [
    "CalibrationCorners",
    "GeoHeatBin",
    "GridKey",
    "LatLon",
    "VirtualHeatBin",
    "intensity_band",
    "sanitize_trace",
    "trace_centroid",
    "bin_geographic",
    "bin_virtual",
    "saturation_threshold",
    "estimate_rotation",
    "rotate_points",
    "project_automatic",
    "project_calibrated",
    "complete_parallelogram",
    "validate_corners",
]
