"""Cooperative driver that keeps a live dashboard fed.

The Dashboard owns one MetricsGenerator, one NodeSimulator, the sliding
window of recent samples and the current node population. It backfills
history when started or when the retention range changes, then fires two
independent cadences: metric ticks (default every 2 s) and node ticks
(default every 3 s).

Nothing here sleeps or spawns threads. The caller supplies the current time
to ``advance`` from whatever loop it already runs, and every due tick fires
synchronously in order. The two cadences touch disjoint state, so no
ordering between them is implied.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from infrawatch.config import DashboardConfig
from infrawatch.dashboard.time_range import TimeRange
from infrawatch.metrics.generator import MetricsGenerator, now_ms
from infrawatch.metrics.sample import DEFAULT_ERROR_RATE_THRESHOLD, MetricSample
from infrawatch.metrics.window import SlidingWindow
from infrawatch.nodes.health import STATUS_COLORS, HealthStatus
from infrawatch.nodes.population import NodePopulation, NodeSimulator, PopulationStats
from infrawatch.random_source import RandomSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardSnapshot:
    """Everything a renderer needs for one frame.

    ``error_rate_threshold`` and ``status_colors`` are the values the
    producing dashboard was configured with, so ``alerts`` and the
    serialized frame always agree.
    """

    time_range: TimeRange
    is_live: bool
    samples: tuple[MetricSample, ...]
    population: NodePopulation
    stats: PopulationStats
    latest: MetricSample | None
    alerts: tuple[MetricSample, ...]
    error_rate_threshold: float = DEFAULT_ERROR_RATE_THRESHOLD
    status_colors: Mapping[HealthStatus, str] = field(default_factory=lambda: dict(STATUS_COLORS))

    def color_for(self, status: HealthStatus) -> str:
        return self.status_colors[status]

    def to_dict(self) -> dict[str, Any]:
        """JSON-safe rendering of the snapshot, including status colors."""
        return {
            "time_range": self.time_range.label,
            "is_live": self.is_live,
            "samples": [s.to_dict() for s in self.samples],
            "nodes": [
                {**node.to_dict(), "color": self.color_for(node.status)}
                for node in self.population
            ],
            "stats": {
                "size": self.stats.size,
                "healthy": self.stats.healthy,
                "degraded": self.stats.degraded,
                "down": self.stats.down,
                "mean_load": self.stats.mean_load,
                "mean_health": self.stats.mean_health,
            },
            "latest": self.latest.to_dict() if self.latest else None,
            "alert_count": len(self.alerts),
            "error_rate_threshold": self.error_rate_threshold,
        }


class Dashboard:
    """Two-cadence driver for the metrics generator and node simulator.

    Args:
        config: Options; defaults to ``DashboardConfig()``.
        metrics_rng: Randomness for the metrics generator.
        nodes_rng: Randomness for the node simulator.
        clock: Callable returning epoch milliseconds, used when a method
            is called without an explicit ``now``.

    When an rng is omitted it is seeded from ``config.seed``, so a seeded
    config reproduces a whole session.
    """

    def __init__(
        self,
        config: DashboardConfig | None = None,
        metrics_rng: RandomSource | None = None,
        nodes_rng: RandomSource | None = None,
        clock: Callable[[], int] | None = None,
    ):
        self.config = config or DashboardConfig()
        seeder = random.Random(self.config.seed)
        if metrics_rng is None:
            metrics_rng = random.Random(seeder.randint(0, 2**31))
        if nodes_rng is None:
            nodes_rng = random.Random(seeder.randint(0, 2**31))

        self.generator = MetricsGenerator(self.config.metrics_model, rng=metrics_rng)
        self.simulator = NodeSimulator(
            self.config.node_dynamics,
            rng=nodes_rng,
            thresholds=self.config.health_thresholds,
        )
        self._clock = clock or now_ms
        self._time_range = self.config.time_range
        self.window = SlidingWindow(self._capacity())
        self._population = NodePopulation()
        self._live = True
        self._started = False
        self._next_metrics_at: int | None = None
        self._next_nodes_at: int | None = None

    @property
    def time_range(self) -> TimeRange:
        return self._time_range

    @property
    def population(self) -> NodePopulation:
        return self._population

    @property
    def is_live(self) -> bool:
        return self._live

    @property
    def started(self) -> bool:
        return self._started

    def _capacity(self) -> int:
        return self._time_range.max_samples(self.config.metric_interval_ms)

    def _now(self, now: int | None) -> int:
        return self._clock() if now is None else now

    def _arm(self, now: int) -> None:
        self._next_metrics_at = now + self.config.metric_interval_ms
        self._next_nodes_at = now + self.config.node_interval_ms

    def _backfill(self, now: int) -> None:
        history = self.generator.backfill(
            self._time_range.minutes, self.config.metric_interval_ms, now=now
        )
        self.window.replace(history)

    def start(self, now: int | None = None) -> None:
        """Backfill the selected range and seed the node population."""
        now = self._now(now)
        self._backfill(now)
        self._population = self.simulator.create_population(
            self.config.population_size, self.config.regions
        )
        self._started = True
        self._arm(now)
        logger.info(
            "Dashboard started: %s range, %d samples, %d nodes",
            self._time_range.label,
            len(self.window),
            len(self._population),
        )

    def on_metrics_tick(self, now: int | None = None) -> MetricSample:
        """Produce one live sample and append it to the window."""
        sample = self.generator.next_sample(self._now(now))
        self.window.append(sample)
        if sample.is_error_alert(self.config.error_rate_threshold):
            logger.debug(
                "Error rate %.2f%% above threshold at %d",
                sample.error_rate_percent,
                sample.timestamp,
            )
        return sample

    def on_nodes_tick(self) -> NodePopulation:
        """Advance the node population one step."""
        self._population = self.simulator.tick(self._population)
        return self._population

    def select_range(self, time_range: TimeRange, now: int | None = None) -> None:
        """Switch retention and re-backfill it.

        The generator keeps its state, so the new history continues the
        trends of the old one rather than starting afresh.
        """
        now = self._now(now)
        self._time_range = time_range
        self.window.resize(self._capacity())
        self._backfill(now)
        if self._started:
            self._arm(now)
        logger.info("Range changed to %s (%d samples)", time_range.label, len(self.window))

    def pause(self) -> None:
        self._live = False
        logger.info("Live updates paused")

    def resume(self, now: int | None = None) -> None:
        """Resume live updates; the next ticks are scheduled from ``now``."""
        self._live = True
        if self._started:
            self._arm(self._now(now))
        logger.info("Live updates resumed")

    def advance(self, now: int | None = None) -> int:
        """Fire every metric and node tick due at or before ``now``.

        Does nothing while paused or before ``start``. A cadence whose
        interval is not positive never fires.

        Returns:
            Number of ticks fired.
        """
        if not self._live or not self._started:
            return 0
        now = self._now(now)
        fired = 0

        metric_interval = self.config.metric_interval_ms
        if metric_interval > 0:
            while self._next_metrics_at <= now:
                self.on_metrics_tick(self._next_metrics_at)
                self._next_metrics_at += metric_interval
                fired += 1

        node_interval = self.config.node_interval_ms
        if node_interval > 0:
            while self._next_nodes_at <= now:
                self.on_nodes_tick()
                self._next_nodes_at += node_interval
                fired += 1

        return fired

    def snapshot(self) -> DashboardSnapshot:
        return DashboardSnapshot(
            time_range=self._time_range,
            is_live=self._live,
            samples=self.window.samples,
            population=self._population,
            stats=self._population.stats,
            latest=self.window.latest,
            alerts=tuple(self.window.error_alerts(self.config.error_rate_threshold)),
            error_rate_threshold=self.config.error_rate_threshold,
            status_colors=dict(self.config.status_colors),
        )
