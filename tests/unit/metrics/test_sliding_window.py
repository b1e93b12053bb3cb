"""Unit tests for SlidingWindow and MetricSample helpers."""

import pytest

from infrawatch.metrics import METRIC_FIELDS, MetricSample, MetricsGenerator, SlidingWindow


def _sample(ts: int, error_rate: float = 0.1) -> MetricSample:
    return MetricSample(
        timestamp=ts,
        cpu_percent=50.0,
        memory_percent=60.0,
        requests_per_second=1000,
        p50_ms=80.0,
        p95_ms=190.0,
        p99_ms=380.0,
        error_rate_percent=error_rate,
    )


class TestSlidingWindowCapacity:

    def test_for_retention_sizes_window(self):
        assert SlidingWindow.for_retention(5, 2000).max_samples == 150
        assert SlidingWindow.for_retention(60, 2000).max_samples == 1800

    def test_degenerate_retention_holds_nothing(self):
        window = SlidingWindow.for_retention(0, 2000)
        window.append(_sample(1))
        assert len(window) == 0
        assert window.latest is None

    def test_rejects_negative_capacity(self):
        with pytest.raises(ValueError, match="non-negative"):
            SlidingWindow(-1)

    def test_append_evicts_oldest_first(self):
        window = SlidingWindow(3)
        for ts in range(5):
            window.append(_sample(ts))

        assert [s.timestamp for s in window] == [2, 3, 4]
        assert window.latest.timestamp == 4

    def test_length_stays_flat_under_live_ticking(self):
        gen = MetricsGenerator(seed=1)
        window = SlidingWindow(150)
        window.replace(gen.backfill(5, 2000, now=1_000_000))
        for i in range(1_000):
            window.append(gen.next_sample(1_000_000 + (i + 1) * 2000))
            assert len(window) == 150

    def test_resize_keeps_newest(self):
        window = SlidingWindow(10)
        window.extend(_sample(ts) for ts in range(10))

        window.resize(4)
        assert [s.timestamp for s in window] == [6, 7, 8, 9]

        window.resize(20)
        assert window.max_samples == 20
        assert len(window) == 4

    def test_replace_discards_previous_contents(self):
        window = SlidingWindow(5)
        window.extend(_sample(ts) for ts in range(5))
        window.replace([_sample(100), _sample(101)])
        assert [s.timestamp for s in window] == [100, 101]

    def test_samples_is_an_immutable_copy(self):
        window = SlidingWindow(5)
        window.append(_sample(1))
        snapshot = window.samples
        window.append(_sample(2))
        assert len(snapshot) == 1


class TestSlidingWindowQueries:

    def test_error_alerts(self):
        window = SlidingWindow(10)
        window.extend([_sample(1, 0.2), _sample(2, 3.5), _sample(3, 1.0), _sample(4, 1.01)])

        assert [s.timestamp for s in window.error_alerts()] == [2, 4]
        assert [s.timestamp for s in window.error_alerts(threshold=2.0)] == [2]

    def test_to_dataframe(self):
        pytest.importorskip("pandas")
        window = SlidingWindow(10)
        window.extend(_sample(ts * 2000) for ts in range(4))

        df = window.to_dataframe()

        assert len(df) == 4
        assert list(df.columns) == ["timestamp", *METRIC_FIELDS]
        assert df.index.name == "time"
        assert df["timestamp"].tolist() == [0, 2000, 4000, 6000]

    def test_to_dataframe_empty(self):
        pytest.importorskip("pandas")
        df = SlidingWindow(10).to_dataframe()
        assert df.empty
        assert "cpu_percent" in df.columns


class TestMetricSample:

    def test_is_frozen(self):
        sample = _sample(1)
        with pytest.raises(AttributeError):
            sample.cpu_percent = 1.0  # type: ignore[misc]

    def test_to_dict(self):
        data = _sample(5).to_dict()
        assert data["timestamp"] == 5
        assert set(data) == {"timestamp", *METRIC_FIELDS}
