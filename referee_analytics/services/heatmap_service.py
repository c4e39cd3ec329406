"""Heat-map pipeline: sanitise, bin geographically, project onto the pitch.

`compute_heat_map` is the pure entry point. `HeatMapSession` keeps the
sanitised trace of one analysis so calibration changes only recompute the
virtual pitch, replacing the previous virtual output wholesale.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import threading
from typing import List, Optional, Sequence, Tuple, Union

from ..geometry.binning import bin_geographic
from ..geometry.models import CalibrationCorners, GeoHeatBin, LatLon, VirtualHeatBin
from ..geometry.sanitizer import sanitize_trace
from ..geometry.virtual import project_automatic, project_calibrated

MODE_AUTOMATIC = "automatic"
MODE_CALIBRATED = "calibrated"

CornersInput = Union[CalibrationCorners, Sequence[Sequence[float]], None]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HeatMapResult:
    geographic_bins: List[GeoHeatBin] = field(default_factory=list)
    virtual_bins: List[VirtualHeatBin] = field(default_factory=list)
    mode: str = MODE_AUTOMATIC
    sanitized_trace: List[LatLon] = field(default_factory=list)


def _as_corners(corners: CornersInput) -> CalibrationCorners:
    if isinstance(corners, CalibrationCorners):
        return corners
    return CalibrationCorners.from_points(corners)


def project_virtual(
    sanitized: Sequence[LatLon], corners: CalibrationCorners
) -> Tuple[List[VirtualHeatBin], str]:
    """Pick the calibrated projector when three corners exist, else automatic."""

    if corners.is_complete:
        return project_calibrated(sanitized, corners.points), MODE_CALIBRATED
    return project_automatic(sanitized), MODE_AUTOMATIC


def compute_heat_map(trace: Sequence[LatLon], corners: CornersInput = None) -> HeatMapResult:
    """Run the full pipeline over a raw trace."""

    calibration = _as_corners(corners)
    sanitized = sanitize_trace(trace)
    geographic = bin_geographic(sanitized)
    virtual, mode = project_virtual(sanitized, calibration)
    logger.debug(
        "Heat map: %d/%d points kept, %d geo bins, %d virtual bins (%s)",
        len(sanitized),
        len(trace),
        len(geographic),
        len(virtual),
        mode,
    )
    return HeatMapResult(
        geographic_bins=geographic,
        virtual_bins=virtual,
        mode=mode,
        sanitized_trace=sanitized,
    )


class HeatMapSession:
    """Heat-map state for one analysis session.

    Every virtual recompute takes a generation number; only the newest
    generation may publish, so a slow stale recompute never overwrites a newer
    calibration's output.
    """

    def __init__(self, trace: Sequence[LatLon], corners: CornersInput = None):
        self._lock = threading.Lock()
        self._generation = 0
        initial = compute_heat_map(trace, corners)
        self._corners = _as_corners(corners)
        self._sanitized = initial.sanitized_trace
        self._geographic = initial.geographic_bins
        self._virtual = initial.virtual_bins
        self._mode = initial.mode

    @property
    def corners(self) -> CalibrationCorners:
        with self._lock:
            return self._corners

    @property
    def result(self) -> HeatMapResult:
        with self._lock:
            return HeatMapResult(
                geographic_bins=list(self._geographic),
                virtual_bins=list(self._virtual),
                mode=self._mode,
                sanitized_trace=list(self._sanitized),
            )

    def begin_recompute(self) -> int:
        with self._lock:
            self._generation += 1
            return self._generation

    def publish(
        self,
        generation: int,
        corners: CalibrationCorners,
        virtual_bins: List[VirtualHeatBin],
        mode: str,
    ) -> bool:
        """Store a recompute's output unless a newer one has started since."""

        with self._lock:
            if generation != self._generation:
                logger.debug(
                    "Discarding stale virtual heat map (generation %d, latest %d)",
                    generation,
                    self._generation,
                )
                return False
            self._corners = corners
            self._virtual = list(virtual_bins)
            self._mode = mode
            return True

    def set_calibration_corners(self, points: CornersInput) -> Optional[HeatMapResult]:
        """Recompute the virtual bins for new corners; geographic bins are kept.

        Returns the new result, or ``None`` when a newer calibration won.
        """

        corners = _as_corners(points)
        generation = self.begin_recompute()
        virtual, mode = project_virtual(self._sanitized, corners)
        if not self.publish(generation, corners, virtual, mode):
            return None
        return self.result


__all__ = [
    "MODE_AUTOMATIC",
    "MODE_CALIBRATED",
    "HeatMapResult",
    "HeatMapSession",
    "compute_heat_map",
    "project_virtual",
]
