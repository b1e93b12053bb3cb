"""Unit tests for dashboard label formatting."""

import pytest

from infrawatch.dashboard import format_latency, format_percent, format_rps


class TestFormatLatency:

    @pytest.mark.parametrize(
        "ms,expected",
        [(0.25, "250μs"), (45.04, "45.0ms"), (999.9, "999.9ms"), (1000, "1.00s"), (2500, "2.50s")],
    )
    def test_units(self, ms, expected):
        assert format_latency(ms) == expected


class TestFormatRps:

    def test_thousands_abbreviated(self):
        assert format_rps(1234) == "1.2k"
        assert format_rps(1000) == "1.0k"

    def test_below_thousand(self):
        assert format_rps(999) == "999"
        assert format_rps(0) == "0"


class TestFormatPercent:

    def test_two_decimals(self):
        assert format_percent(0.1) == "0.10%"
        assert format_percent(3.456) == "3.46%"
