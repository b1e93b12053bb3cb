"""A single correlated telemetry snapshot."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

DEFAULT_ERROR_RATE_THRESHOLD = 1.0


@dataclass(frozen=True)
class MetricSample:
    """One timestamped, internally consistent set of service metrics.

    Produced by MetricsGenerator on each tick and never mutated afterwards.
    The generator keeps no history; samples live only in caller-owned
    windows.

    Attributes:
        timestamp: Epoch milliseconds.
        cpu_percent: CPU utilization, 0-100.
        memory_percent: Memory utilization, 0-100.
        requests_per_second: Throughput, correlated with CPU.
        p50_ms: Median latency, one decimal.
        p95_ms: 95th percentile latency, never below p50_ms.
        p99_ms: 99th percentile latency, never below p95_ms.
        error_rate_percent: Error rate, two decimals.
    """

    timestamp: int
    cpu_percent: float
    memory_percent: float
    requests_per_second: int
    p50_ms: float
    p95_ms: float
    p99_ms: float
    error_rate_percent: float

    def is_error_alert(self, threshold: float = DEFAULT_ERROR_RATE_THRESHOLD) -> bool:
        """True when the error rate is strictly above ``threshold``."""
        return self.error_rate_percent > threshold

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


METRIC_FIELDS: tuple[str, ...] = (
    "cpu_percent",
    "memory_percent",
    "requests_per_second",
    "p50_ms",
    "p95_ms",
    "p99_ms",
    "error_rate_percent",
)
