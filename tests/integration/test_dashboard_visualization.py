"""Visual end-to-end test of a dashboard session.

Runs a seeded session on a simulated clock (30 minute backfill followed by
20 live minutes), checks the cross-subsystem properties that only show up
over a long run, and saves charts + raw CSV under test_output/.

Run:
    pytest tests/integration/test_dashboard_visualization.py -v

Output:
    test_output/test_dashboard_visualization/<test_name>/...
"""

from __future__ import annotations

import pytest

from infrawatch import Dashboard, DashboardConfig, HealthStatus
from infrawatch.dashboard import time_range_for

START = 1_700_000_000_000


def _run_session(live_minutes: float = 20.0) -> Dashboard:
    config = DashboardConfig(seed=2024, time_range=time_range_for("30m"))
    dashboard = Dashboard(config)
    dashboard.start(now=START)
    dashboard.advance(START + int(live_minutes * 60_000))
    return dashboard


def test_long_session_invariants():
    dashboard = _run_session()
    samples = dashboard.window.samples

    assert len(samples) == 900
    assert samples[-1].timestamp == START + 20 * 60_000
    assert all(b.timestamp - a.timestamp == 2000 for a, b in zip(samples, samples[1:]))
    for s in samples:
        assert 0 <= s.cpu_percent <= 100
        assert 0 <= s.memory_percent <= 100
        assert 0 < s.p50_ms <= s.p95_ms <= s.p99_ms

    population = dashboard.population
    assert len(population) == 24
    for node in population:
        assert 0 <= node.load <= 100
        assert 0 <= node.health <= 100


def test_dashboard_charts(test_output_dir):
    matplotlib = pytest.importorskip("matplotlib")
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    dashboard = _run_session()
    df = dashboard.window.to_dataframe()
    df.to_csv(test_output_dir / "metrics.csv")

    fig, axes = plt.subplots(3, 1, figsize=(12, 10), sharex=True)
    axes[0].plot(df.index, df["cpu_percent"], label="CPU %")
    axes[0].plot(df.index, df["memory_percent"], label="Memory %")
    axes[0].set_ylim(0, 100)
    axes[0].legend(loc="upper right")
    axes[0].set_title("CPU & Memory")

    for column in ("p50_ms", "p95_ms", "p99_ms"):
        axes[1].plot(df.index, df[column], label=column)
    axes[1].legend(loc="upper right")
    axes[1].set_title("Latency")

    axes[2].plot(df.index, df["error_rate_percent"], color="#ef4444")
    axes[2].axhline(dashboard.config.error_rate_threshold, color="gray", linestyle="--")
    axes[2].set_title("Error Rate")

    fig.tight_layout()
    fig.savefig(test_output_dir / "metrics.png", dpi=100)
    plt.close(fig)

    statuses = [node.status for node in dashboard.population]
    fig, ax = plt.subplots(figsize=(10, 3))
    ax.bar(
        [node.node_id for node in dashboard.population],
        [node.health for node in dashboard.population],
        color=[dashboard.config.color_for(status) for status in statuses],
    )
    ax.axhline(80, color="gray", linestyle=":")
    ax.axhline(40, color="gray", linestyle=":")
    ax.set_ylim(0, 100)
    ax.tick_params(axis="x", rotation=90)
    ax.set_title("Node health")
    fig.tight_layout()
    fig.savefig(test_output_dir / "node_health.png", dpi=100)
    plt.close(fig)

    assert (test_output_dir / "metrics.csv").exists()
    assert (test_output_dir / "metrics.png").exists()
    assert (test_output_dir / "node_health.png").exists()
    assert set(statuses) <= set(HealthStatus)
