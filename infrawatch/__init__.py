"""infrawatch: synthetic, correlated infrastructure telemetry for live dashboards.

Two independent stochastic processes feed a dashboard:

- MetricsGenerator produces correlated samples of CPU, memory, throughput,
  latency percentiles and error rate.
- The node simulator evolves the health of a fixed fleet of nodes.

Dashboard drives both on their own cadences and keeps a bounded window of
recent samples. The library is silent by default; see
``infrawatch.logging_config`` to enable logging.
"""

import logging

from infrawatch.metrics import (
    DEFAULT_ERROR_RATE_THRESHOLD,
    GeneratorState,
    MetricSample,
    MetricsGenerator,
    MetricsModel,
    SlidingWindow,
    advance,
)
from infrawatch.nodes import (
    DEFAULT_REGIONS,
    STATUS_COLORS,
    HealthStatus,
    HealthThresholds,
    Node,
    NodeDynamics,
    NodePopulation,
    NodeSimulator,
    PopulationStats,
    create_population,
    status_for_health,
    tick,
)
from infrawatch.dashboard import (
    TIME_RANGES,
    TimeRange,
    format_latency,
    format_percent,
    format_rps,
)
from infrawatch.config import DashboardConfig
from infrawatch.dashboard.driver import Dashboard, DashboardSnapshot
from infrawatch.random_source import RandomSource
from infrawatch.rounding import round_half_up
from infrawatch.logging_config import (
    configure_from_env,
    disable_logging,
    enable_console_logging,
    enable_file_logging,
    enable_json_file_logging,
    enable_json_logging,
    enable_timed_file_logging,
    set_level,
    set_module_level,
)

logging.getLogger("infrawatch").addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Metrics
    "DEFAULT_ERROR_RATE_THRESHOLD",
    "GeneratorState",
    "MetricSample",
    "MetricsGenerator",
    "MetricsModel",
    "SlidingWindow",
    "advance",
    # Nodes
    "DEFAULT_REGIONS",
    "STATUS_COLORS",
    "HealthStatus",
    "HealthThresholds",
    "Node",
    "NodeDynamics",
    "NodePopulation",
    "NodeSimulator",
    "PopulationStats",
    "create_population",
    "status_for_health",
    "tick",
    # Dashboard
    "Dashboard",
    "DashboardConfig",
    "DashboardSnapshot",
    "TIME_RANGES",
    "TimeRange",
    "format_latency",
    "format_percent",
    "format_rps",
    "RandomSource",
    "round_half_up",
    # Logging
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "enable_json_file_logging",
    "enable_json_logging",
    "enable_timed_file_logging",
    "set_level",
    "set_module_level",
]
