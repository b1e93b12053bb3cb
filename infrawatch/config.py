"""Dashboard configuration.

DashboardConfig gathers every recognized option with its default. Values
can be overridden in code or, for the scalar options, from environment
variables via ``DashboardConfig.from_env()``:

    IW_POPULATION_SIZE     number of simulated nodes (default 24)
    IW_REGIONS             comma-separated region names
    IW_METRIC_INTERVAL_MS  metrics tick cadence (default 2000)
    IW_NODE_INTERVAL_MS    node tick cadence (default 3000)
    IW_TIME_RANGE          retention label: 5m, 15m, 30m or 1h
    IW_ERROR_THRESHOLD     error-rate alert threshold in percent (default 1.0)
    IW_SEED                seed for reproducible runs
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Mapping

from infrawatch.dashboard.time_range import TIME_RANGES, TimeRange, time_range_for
from infrawatch.metrics.model import DEFAULT_MODEL, MetricsModel
from infrawatch.metrics.sample import DEFAULT_ERROR_RATE_THRESHOLD
from infrawatch.nodes.dynamics import DEFAULT_DYNAMICS, NodeDynamics
from infrawatch.nodes.health import (
    DEFAULT_THRESHOLDS,
    STATUS_COLORS,
    HealthStatus,
    HealthThresholds,
)
from infrawatch.nodes.population import DEFAULT_POPULATION_SIZE, DEFAULT_REGIONS

logger = logging.getLogger(__name__)

DEFAULT_METRIC_INTERVAL_MS = 2000
DEFAULT_NODE_INTERVAL_MS = 3000


@dataclass(frozen=True)
class DashboardConfig:
    """All options recognized by the dashboard driver.

    Degenerate values are accepted: a zero population size or an empty
    region set yields an empty fleet, and a non-positive interval disables
    that cadence.

    Attributes:
        population_size: Number of simulated nodes.
        regions: Region names, assigned round-robin.
        metric_interval_ms: Spacing of metric samples.
        node_interval_ms: Spacing of node ticks.
        time_range: Retention of the sliding window.
        error_rate_threshold: Error rate (percent) above which a sample alerts.
        status_colors: Color per health status for consumers to reuse.
        health_thresholds: Bands used to derive node status.
        metrics_model: Constants of the metrics generator.
        node_dynamics: Constants of the node health process.
        seed: Seed for reproducible runs, None for fresh entropy.
    """

    population_size: int = DEFAULT_POPULATION_SIZE
    regions: tuple[str, ...] = DEFAULT_REGIONS
    metric_interval_ms: int = DEFAULT_METRIC_INTERVAL_MS
    node_interval_ms: int = DEFAULT_NODE_INTERVAL_MS
    time_range: TimeRange = TIME_RANGES[0]
    error_rate_threshold: float = DEFAULT_ERROR_RATE_THRESHOLD
    status_colors: Mapping[HealthStatus, str] = field(default_factory=lambda: dict(STATUS_COLORS))
    health_thresholds: HealthThresholds = DEFAULT_THRESHOLDS
    metrics_model: MetricsModel = DEFAULT_MODEL
    node_dynamics: NodeDynamics = DEFAULT_DYNAMICS
    seed: int | None = None

    @property
    def max_samples(self) -> int:
        """Window capacity implied by time_range and metric_interval_ms."""
        return self.time_range.max_samples(self.metric_interval_ms)

    def color_for(self, status: HealthStatus) -> str:
        return self.status_colors[status]

    def with_overrides(self, **changes: Any) -> DashboardConfig:
        return replace(self, **changes)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> DashboardConfig:
        """Build a config from IW_* variables; unset variables keep defaults.

        Raises:
            ValueError: If a variable is set to an unparseable value.
        """
        env = os.environ if environ is None else environ
        changes: dict[str, Any] = {}

        _read(env, "IW_POPULATION_SIZE", int, changes, "population_size")
        _read(env, "IW_METRIC_INTERVAL_MS", int, changes, "metric_interval_ms")
        _read(env, "IW_NODE_INTERVAL_MS", int, changes, "node_interval_ms")
        _read(env, "IW_ERROR_THRESHOLD", float, changes, "error_rate_threshold")
        _read(env, "IW_SEED", int, changes, "seed")
        _read(env, "IW_TIME_RANGE", time_range_for, changes, "time_range")
        _read(env, "IW_REGIONS", _parse_regions, changes, "regions")

        if changes:
            logger.debug("Config overrides from environment: %s", sorted(changes))
        return cls(**changes)


def _parse_regions(raw: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def _read(
    env: Mapping[str, str],
    name: str,
    parse: Callable[[str], Any],
    changes: dict[str, Any],
    key: str,
) -> None:
    raw = env.get(name)
    if raw is None or raw == "":
        return
    try:
        changes[key] = parse(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid value for {name}: {raw!r} ({exc})") from exc
