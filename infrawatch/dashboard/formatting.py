"""Label formatting shared by dashboard consumers."""

from __future__ import annotations


def format_latency(ms: float) -> str:
    """Render a latency: microseconds below 1 ms, seconds from 1000 ms."""
    if ms < 1:
        return f"{ms * 1000:.0f}μs"
    if ms < 1000:
        return f"{ms:.1f}ms"
    return f"{ms / 1000:.2f}s"


def format_rps(rps: float) -> str:
    """Render throughput, abbreviating thousands (``1.2k``)."""
    if rps >= 1000:
        return f"{rps / 1000:.1f}k"
    return f"{rps:.0f}"


def format_percent(value: float) -> str:
    return f"{value:.2f}%"
