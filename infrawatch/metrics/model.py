"""Tunable constants of the correlated metrics model.

The defaults reproduce the dashboard's established behavior; changing them
changes the character of the generated telemetry, not its invariants.
"""

from __future__ import annotations

from dataclasses import dataclass


def _check_range(name: str, low: float, high: float) -> None:
    if low > high:
        raise ValueError(f"{name} range is inverted: ({low}, {high})")


def _check_probability(name: str, p: float) -> None:
    if not 0.0 <= p <= 1.0:
        raise ValueError(f"{name} must be within [0, 1], got {p}")


@dataclass(frozen=True)
class MetricsModel:
    """Parameters for MetricsGenerator.

    Noise terms are half-widths of symmetric uniform draws, so
    ``cpu_noise=4.0`` means ``uniform(-4, 4)``. Trend steps follow the
    same rule: each tick the CPU trend moves by ``uniform(-1.0, 1.0)`` and
    the memory trend by ``uniform(-0.75, 0.75)`` under the defaults, before
    clamping to ``cpu_trend_limit`` / ``memory_trend_limit``. Latency factors are
    (low, high) ranges whose lower bound must be above 1 to keep
    ``p50 <= p95 <= p99``.

    Raises:
        ValueError: If a range is inverted, a probability falls outside
            [0, 1], or a latency factor could shrink a percentile.
    """

    cpu_baseline: float = 45.0
    memory_baseline: float = 60.0

    cpu_trend_step: float = 1.0
    memory_trend_step: float = 0.75
    cpu_trend_limit: float = 15.0
    memory_trend_limit: float = 10.0

    cpu_noise: float = 4.0
    memory_noise: float = 3.0

    base_rps: float = 1200.0
    rps_load_slope: float = 0.8
    rps_noise: float = 100.0

    latency_base_ms: float = 45.0
    latency_load_penalty_ms: float = 80.0
    latency_noise_ms: float = 7.5
    latency_floor_ms: float = 5.0
    p95_factor: tuple[float, float] = (2.2, 2.6)
    p99_factor: tuple[float, float] = (1.8, 2.1)

    error_base: float = 0.05
    error_load_slope: float = 0.15
    error_noise: float = 0.1

    spike_probability: float = 0.02
    spike_range: tuple[float, float] = (2.0, 5.0)
    spike_cooldown: int = 15
    plateau_below: int = 5
    plateau_range: tuple[float, float] = (0.5, 1.5)

    def __post_init__(self) -> None:
        _check_range("p95_factor", *self.p95_factor)
        _check_range("p99_factor", *self.p99_factor)
        _check_range("spike_range", *self.spike_range)
        _check_range("plateau_range", *self.plateau_range)
        _check_probability("spike_probability", self.spike_probability)
        if self.p95_factor[0] < 1.0 or self.p99_factor[0] < 1.0:
            raise ValueError("latency factors must be >= 1")
        if self.latency_floor_ms <= 0:
            raise ValueError("latency_floor_ms must be positive")
        if self.spike_cooldown < 0:
            raise ValueError("spike_cooldown must be non-negative")


DEFAULT_MODEL = MetricsModel()
