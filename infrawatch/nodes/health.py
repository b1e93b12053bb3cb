"""Node health classification.

Status is a pure function of the continuous health score. It is computed
wherever a status is needed and never stored next to the score, so the two
cannot disagree.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class HealthStatus(Enum):
    """Discrete health classification of a node."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    DOWN = "down"


@dataclass(frozen=True)
class HealthThresholds:
    """Lower bounds of the healthy and degraded bands.

    Attributes:
        healthy_min: Scores at or above this are healthy.
        degraded_min: Scores at or above this (and below healthy_min) are
            degraded. Anything lower is down.
    """

    healthy_min: float = 80.0
    degraded_min: float = 40.0

    def __post_init__(self) -> None:
        if self.degraded_min > self.healthy_min:
            raise ValueError(
                f"degraded_min ({self.degraded_min}) exceeds healthy_min ({self.healthy_min})"
            )


DEFAULT_THRESHOLDS = HealthThresholds()

STATUS_COLORS: dict[HealthStatus, str] = {
    HealthStatus.HEALTHY: "#10b981",
    HealthStatus.DEGRADED: "#f59e0b",
    HealthStatus.DOWN: "#ef4444",
}


def status_for_health(
    health: float, thresholds: HealthThresholds = DEFAULT_THRESHOLDS
) -> HealthStatus:
    """Classify a health score (no hysteresis)."""
    if health >= thresholds.healthy_min:
        return HealthStatus.HEALTHY
    if health >= thresholds.degraded_min:
        return HealthStatus.DEGRADED
    return HealthStatus.DOWN
