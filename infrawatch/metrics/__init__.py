"""Correlated time-series metrics generation."""

from infrawatch.metrics.generator import (
    INITIAL_STATE,
    GeneratorState,
    MetricsGenerator,
    advance,
    sample_count,
)
from infrawatch.metrics.model import DEFAULT_MODEL, MetricsModel
from infrawatch.metrics.sample import (
    DEFAULT_ERROR_RATE_THRESHOLD,
    METRIC_FIELDS,
    MetricSample,
)
from infrawatch.metrics.window import SlidingWindow

__all__ = [
    "DEFAULT_ERROR_RATE_THRESHOLD",
    "DEFAULT_MODEL",
    "GeneratorState",
    "INITIAL_STATE",
    "METRIC_FIELDS",
    "MetricSample",
    "MetricsGenerator",
    "MetricsModel",
    "SlidingWindow",
    "advance",
    "sample_count",
]
