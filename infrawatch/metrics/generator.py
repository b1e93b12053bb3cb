"""Correlated synthetic metrics generator.

Each tick produces one MetricSample whose fields move together the way a
real service's telemetry does:

- CPU and memory follow slow, bounded random-walk trends (baseline drift)
  plus per-tick noise.
- Throughput and latency are driven by CPU load. Tail latencies are built
  multiplicatively from p50, so ``p50 <= p95 <= p99`` holds for every draw.
- The error rate is small and load-dependent, except during an error spike:
  a rare spike is followed by a cooldown during which no new spike can
  start, ending in a short partial-recovery plateau.

The transition is a pure function, ``advance``, over an explicit
``GeneratorState``. ``MetricsGenerator`` is the single owner that threads the
state through successive ticks; live ticking and historical backfill both go
through it, so a backfilled history is indistinguishable from a live one.
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass

from infrawatch.metrics.model import DEFAULT_MODEL, MetricsModel
from infrawatch.metrics.sample import MetricSample
from infrawatch.random_source import RandomSource, chance, resolve_rng, symmetric
from infrawatch.rounding import round_half_up

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratorState:
    """Rolling state carried between ticks.

    Attributes:
        cpu_trend: CPU baseline drift, within +/- cpu_trend_limit.
        memory_trend: Memory baseline drift, within +/- memory_trend_limit.
        error_spike_cooldown: Ticks remaining before another spike may start.
    """

    cpu_trend: float = 0.0
    memory_trend: float = 0.0
    error_spike_cooldown: int = 0


INITIAL_STATE = GeneratorState()


def _clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


def advance(
    state: GeneratorState,
    timestamp: int,
    rng: RandomSource,
    model: MetricsModel = DEFAULT_MODEL,
) -> tuple[GeneratorState, MetricSample]:
    """Compute the next sample and the state that follows it.

    Random draws happen in a fixed order, so a seeded ``rng`` reproduces the
    same sequence. The spike roll is drawn only when the cooldown has
    reached zero.

    Args:
        state: State after the previous tick.
        timestamp: Epoch milliseconds to stamp on the sample.
        rng: Source of randomness.
        model: Model constants.

    Returns:
        A ``(new_state, sample)`` tuple. ``state`` itself is not modified.
    """
    cpu_trend = _clamp(
        state.cpu_trend + symmetric(rng, model.cpu_trend_step),
        -model.cpu_trend_limit,
        model.cpu_trend_limit,
    )
    memory_trend = _clamp(
        state.memory_trend + symmetric(rng, model.memory_trend_step),
        -model.memory_trend_limit,
        model.memory_trend_limit,
    )

    cpu = _clamp(model.cpu_baseline + cpu_trend + symmetric(rng, model.cpu_noise), 0.0, 100.0)
    memory = _clamp(
        model.memory_baseline + memory_trend + symmetric(rng, model.memory_noise), 0.0, 100.0
    )

    load_factor = cpu / 100.0
    rps = max(
        0.0,
        model.base_rps * (0.5 + load_factor * model.rps_load_slope)
        + symmetric(rng, model.rps_noise),
    )

    p50 = max(
        model.latency_floor_ms,
        model.latency_base_ms
        + load_factor * model.latency_load_penalty_ms
        + symmetric(rng, model.latency_noise_ms),
    )
    p95 = p50 * rng.uniform(*model.p95_factor)
    p99 = p95 * rng.uniform(*model.p99_factor)

    error_rate = (
        model.error_base
        + load_factor * model.error_load_slope
        + rng.uniform(0.0, model.error_noise)
    )

    cooldown = state.error_spike_cooldown
    if cooldown > 0:
        cooldown -= 1

    if cooldown == 0 and chance(rng, model.spike_probability):
        error_rate = rng.uniform(*model.spike_range)
        cooldown = model.spike_cooldown
        logger.debug("Error spike at %d: %.2f%%", timestamp, error_rate)
    elif 0 < cooldown < model.plateau_below:
        error_rate = rng.uniform(*model.plateau_range)

    sample = MetricSample(
        timestamp=timestamp,
        cpu_percent=cpu,
        memory_percent=memory,
        requests_per_second=round_half_up(rps),
        p50_ms=round_half_up(p50, 1),
        p95_ms=round_half_up(p95, 1),
        p99_ms=round_half_up(p99, 1),
        error_rate_percent=round_half_up(error_rate, 2),
    )
    return GeneratorState(cpu_trend, memory_trend, cooldown), sample


def sample_count(duration_minutes: float, interval_ms: int) -> int:
    """Number of samples covering ``duration_minutes`` at ``interval_ms``.

    Zero for a non-positive duration or interval.
    """
    if duration_minutes <= 0 or interval_ms <= 0:
        return 0
    return math.floor(duration_minutes * 60_000 / interval_ms)


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class MetricsGenerator:
    """Stateful producer of correlated MetricSamples.

    Args:
        model: Model constants. Defaults to DEFAULT_MODEL.
        rng: Source of randomness. Defaults to a new ``random.Random(seed)``.
        seed: Seed used only when ``rng`` is not given.
    """

    def __init__(
        self,
        model: MetricsModel | None = None,
        rng: RandomSource | None = None,
        seed: int | None = None,
    ):
        self._model = model or DEFAULT_MODEL
        self._rng = resolve_rng(rng, seed)
        self._state = INITIAL_STATE

    @property
    def model(self) -> MetricsModel:
        return self._model

    @property
    def state(self) -> GeneratorState:
        """Snapshot of the rolling state. Read-only."""
        return self._state

    def reset(self) -> None:
        """Return to the initial state (zero trends, no cooldown)."""
        self._state = INITIAL_STATE

    def next_sample(self, timestamp: int) -> MetricSample:
        """Advance one tick and return the new sample."""
        self._state, sample = advance(self._state, timestamp, self._rng, self._model)
        return sample

    def backfill(
        self,
        duration_minutes: float,
        interval_ms: int,
        now: int | None = None,
    ) -> list[MetricSample]:
        """Generate a history ending at ``now``.

        Produces ``floor(duration_minutes * 60000 / interval_ms)`` samples
        spaced ``interval_ms`` apart, the last one stamped ``now``. Each is
        produced by ``next_sample``, so trends and cooldown carry on into
        subsequent live ticks.

        Args:
            duration_minutes: Length of the history. Non-positive yields [].
            interval_ms: Spacing between samples. Non-positive yields [].
            now: Timestamp of the last sample. Defaults to the wall clock.
        """
        count = sample_count(duration_minutes, interval_ms)
        if count == 0:
            return []

        end = now_ms() if now is None else now
        samples = [
            self.next_sample(end - (count - 1 - i) * interval_ms) for i in range(count)
        ]
        logger.debug(
            "Backfilled %d samples (%s min @ %d ms) ending at %d",
            count,
            duration_minutes,
            interval_ms,
            end,
        )
        return samples
