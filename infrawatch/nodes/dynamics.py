"""Tunable constants of the node health process."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class NodeDynamics:
    """Parameters for seeding and evolving a node population.

    Initial health is a three-tier mixture: ``healthy_share`` of nodes start
    in ``healthy_range``; the rest split ``degraded_share`` into
    ``degraded_range`` and the remainder into ``down_range``.

    On each tick a down node gets a recovery boost with probability
    ``recovery_probability`` and a degraded node an extra decline with
    probability ``decline_probability``.
    """

    initial_load_range: tuple[float, float] = (30.0, 70.0)
    healthy_share: float = 0.85
    degraded_share: float = 0.5
    healthy_range: tuple[float, float] = (85.0, 100.0)
    degraded_range: tuple[float, float] = (50.0, 75.0)
    down_range: tuple[float, float] = (15.0, 35.0)

    load_noise: float = 4.0
    health_noise: float = 1.5
    recovery_probability: float = 0.3
    recovery_factor: float = 2.0
    decline_probability: float = 0.1
    decline_factor: float = 1.5

    def __post_init__(self) -> None:
        for name in ("healthy_share", "degraded_share", "recovery_probability", "decline_probability"):
            p = getattr(self, name)
            if not 0.0 <= p <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {p}")
        for name in ("initial_load_range", "healthy_range", "degraded_range", "down_range"):
            low, high = getattr(self, name)
            if low > high:
                raise ValueError(f"{name} range is inverted: ({low}, {high})")


DEFAULT_DYNAMICS = NodeDynamics()
