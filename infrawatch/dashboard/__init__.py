"""Dashboard-facing helpers: retention ranges and label formatting.

The driver itself lives in ``infrawatch.dashboard.driver`` and is
re-exported from the top-level package.
"""

from infrawatch.dashboard.formatting import format_latency, format_percent, format_rps
from infrawatch.dashboard.time_range import TIME_RANGES, TimeRange, time_range_for

__all__ = [
    "TIME_RANGES",
    "TimeRange",
    "format_latency",
    "format_percent",
    "format_rps",
    "time_range_for",
]
