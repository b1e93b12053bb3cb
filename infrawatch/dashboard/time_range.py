"""Selectable retention ranges for the metrics window."""

from __future__ import annotations

from dataclasses import dataclass

from infrawatch.metrics.generator import sample_count


@dataclass(frozen=True)
class TimeRange:
    """A named retention duration, e.g. ``TimeRange("15m", 15)``."""

    label: str
    minutes: float

    def max_samples(self, interval_ms: int) -> int:
        """Window capacity for this range at ``interval_ms``."""
        return sample_count(self.minutes, interval_ms)


TIME_RANGES: tuple[TimeRange, ...] = (
    TimeRange("5m", 5),
    TimeRange("15m", 15),
    TimeRange("30m", 30),
    TimeRange("1h", 60),
)


def time_range_for(label: str) -> TimeRange:
    """Look up one of TIME_RANGES by label.

    Raises:
        ValueError: If no range has that label.
    """
    for time_range in TIME_RANGES:
        if time_range.label == label:
            return time_range
    known = ", ".join(r.label for r in TIME_RANGES)
    raise ValueError(f"Unknown time range {label!r} (expected one of: {known})")
