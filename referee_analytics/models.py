from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Tuple

from .config import DEFAULT_ZONE_THRESHOLDS

ZONE_KEYS: Tuple[str, ...] = ("Z1", "Z2", "Z3", "Z4", "Z5")


@dataclass
class WorkoutSummary:
    workout_id: str
    start: datetime
    end: datetime
    duration_s: float
    total_energy_kcal: float = 0.0
    total_distance_m: float = 0.0
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class HeartRateSample:
    timestamp: datetime
    bpm: float


@dataclass(frozen=True)
class ZoneThresholds:
    """Four zone boundaries as fractions of max heart rate."""

    z1: float
    z2: float
    z3: float
    z4: float

    def __post_init__(self) -> None:
        values = self.as_tuple()
        if values[0] <= 0:
            raise ValueError("Zone thresholds must be positive")
        if any(lower >= upper for lower, upper in zip(values, values[1:])):
            raise ValueError(f"Zone thresholds must be strictly increasing: {values}")

    @classmethod
    def from_sequence(cls, values: Tuple[float, ...] | list[float]) -> "ZoneThresholds":
        if len(values) != 4:
            raise ValueError(f"Expected 4 zone thresholds, got {len(values)}")
        return cls(*(float(v) for v in values))

    @classmethod
    def from_config(cls) -> "ZoneThresholds":
        """Thresholds from ``DEFAULT_ZONE_THRESHOLDS`` (env overridable)."""

        return cls.from_sequence(DEFAULT_ZONE_THRESHOLDS)

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.z1, self.z2, self.z3, self.z4)


@dataclass(frozen=True)
class ZoneDurations:
    """Minutes spent in each of the five heart-rate zones."""

    minutes: Tuple[float, float, float, float, float] = (0.0, 0.0, 0.0, 0.0, 0.0)

    @property
    def total_minutes(self) -> float:
        return float(sum(self.minutes))

    def as_dict(self) -> Dict[str, float]:
        return dict(zip(ZONE_KEYS, self.minutes))
