"""Drive an infrawatch dashboard session and chart the result.

This example plays the role of the presentation layer: it starts a
Dashboard (backfilling the selected retention range and seeding the node
fleet), then advances a simulated clock so both cadences fire exactly as
they would under real timers:

```
    t=0            start(): backfill window, create 24 nodes
    every 2s       on_metrics_tick(): one correlated sample, oldest evicted
    every 3s       on_nodes_tick(): functional update of the fleet
```

At the end it prints a fleet/metrics summary and writes:

- ``metrics_overview.png``: CPU/memory, throughput, latency percentiles and
  error rate with the alert threshold.
- ``node_health.png``: node health heat map, one cell per node, grouped
  by region and colored by status.
- ``metrics.csv``: the sliding window as exported by pandas.

Run:
    python examples/live_dashboard.py --range 15m --live-minutes 10 --seed 7
    python examples/live_dashboard.py --realtime --live-minutes 1
"""

from __future__ import annotations

import time
from pathlib import Path

from infrawatch import (
    Dashboard,
    DashboardConfig,
    HealthStatus,
    configure_from_env,
    enable_console_logging,
    format_latency,
    format_percent,
    format_rps,
)
from infrawatch.dashboard import time_range_for


def run_session(
    config: DashboardConfig,
    live_minutes: float,
    realtime: bool = False,
) -> Dashboard:
    """Start a dashboard and keep it live for ``live_minutes``."""
    if realtime:
        dashboard = Dashboard(config)
        dashboard.start()
        deadline = time.monotonic() + live_minutes * 60
        while time.monotonic() < deadline:
            dashboard.advance()
            time.sleep(0.1)
        return dashboard

    start = 1_700_000_000_000
    dashboard = Dashboard(config, clock=lambda: start)
    dashboard.start(now=start)
    dashboard.advance(start + int(live_minutes * 60_000))
    return dashboard


def print_summary(dashboard: Dashboard) -> None:
    snap = dashboard.snapshot()
    stats = snap.stats

    print("\n" + "=" * 60)
    print("INFRAWATCH SESSION")
    print("=" * 60)
    print(f"  Range: {snap.time_range.label} ({len(snap.samples)} samples)")
    print(f"  Fleet: {stats.size} nodes | healthy={stats.healthy} "
          f"degraded={stats.degraded} down={stats.down}")
    print(f"  Mean load: {stats.mean_load:.1f}% | mean health: {stats.mean_health:.1f}")

    if snap.latest is not None:
        latest = snap.latest
        print("\nLatest sample:")
        print(f"  CPU {format_percent(latest.cpu_percent)} | memory {format_percent(latest.memory_percent)}")
        print(f"  Throughput {format_rps(latest.requests_per_second)} req/s")
        print(f"  Latency p50 {format_latency(latest.p50_ms)} / p95 {format_latency(latest.p95_ms)}"
              f" / p99 {format_latency(latest.p99_ms)}")
        print(f"  Error rate {format_percent(latest.error_rate_percent)}")

    print(f"\nSamples above {format_percent(dashboard.config.error_rate_threshold)} error rate: "
          f"{len(snap.alerts)}")
    print("=" * 60)


def visualize(dashboard: Dashboard, output_dir: Path) -> None:
    import matplotlib.pyplot as plt

    output_dir.mkdir(parents=True, exist_ok=True)
    df = dashboard.window.to_dataframe()
    df.to_csv(output_dir / "metrics.csv")
    print(f"Saved: {output_dir / 'metrics.csv'}")

    fig, axes = plt.subplots(4, 1, figsize=(14, 14), sharex=True)

    ax = axes[0]
    ax.plot(df.index, df["cpu_percent"], color="#3b82f6", label="CPU %")
    ax.plot(df.index, df["memory_percent"], color="#8b5cf6", label="Memory %")
    ax.set_ylim(0, 100)
    ax.set_ylabel("Utilization (%)")
    ax.set_title("CPU & Memory")
    ax.legend(loc="upper right")
    ax.grid(True, alpha=0.3)

    ax = axes[1]
    ax.plot(df.index, df["requests_per_second"], color="#10b981")
    ax.set_ylabel("req/s")
    ax.set_title("Throughput")
    ax.grid(True, alpha=0.3)

    ax = axes[2]
    ax.plot(df.index, df["p50_ms"], color="#10b981", label="p50")
    ax.plot(df.index, df["p95_ms"], color="#f59e0b", label="p95")
    ax.plot(df.index, df["p99_ms"], color="#ef4444", label="p99")
    ax.set_ylabel("Latency (ms)")
    ax.set_title("Latency Percentiles")
    ax.legend(loc="upper right")
    ax.grid(True, alpha=0.3)

    ax = axes[3]
    threshold = dashboard.config.error_rate_threshold
    ax.fill_between(df.index, df["error_rate_percent"], color="#ef4444", alpha=0.3)
    ax.plot(df.index, df["error_rate_percent"], color="#ef4444")
    ax.axhline(y=threshold, color="gray", linestyle="--", label=f"Threshold ({threshold}%)")
    ax.set_ylabel("Error rate (%)")
    ax.set_title("Error Rate")
    ax.legend(loc="upper right")
    ax.grid(True, alpha=0.3)

    fig.tight_layout()
    fig.savefig(output_dir / "metrics_overview.png", dpi=150)
    plt.close(fig)
    print(f"Saved: {output_dir / 'metrics_overview.png'}")

    groups = dashboard.population.by_region()
    columns = max((len(nodes) for nodes in groups.values()), default=0)
    fig, ax = plt.subplots(figsize=(max(6, columns * 1.2), max(3, len(groups) * 1.0)))
    for row, (region, nodes) in enumerate(groups.items()):
        for col, node in enumerate(nodes):
            ax.add_patch(plt.Rectangle(
                (col, row), 0.9, 0.9,
                color=dashboard.config.color_for(node.status),
                alpha=0.35 + 0.65 * node.health / 100,
            ))
            ax.text(col + 0.45, row + 0.45, f"{node.node_id}\n{node.health:.0f}",
                    ha="center", va="center", fontsize=7)
    ax.set_xlim(0, max(columns, 1))
    ax.set_ylim(0, max(len(groups), 1))
    ax.set_yticks([i + 0.45 for i in range(len(groups))])
    ax.set_yticklabels(list(groups))
    ax.set_xticks([])
    handles = [
        plt.Rectangle((0, 0), 1, 1, color=dashboard.config.color_for(status))
        for status in HealthStatus
    ]
    ax.legend(handles, [s.value for s in HealthStatus], loc="upper right", fontsize=8)
    ax.set_title("Node Health")

    fig.tight_layout()
    fig.savefig(output_dir / "node_health.png", dpi=150)
    plt.close(fig)
    print(f"Saved: {output_dir / 'node_health.png'}")


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Synthetic infrastructure dashboard session")
    parser.add_argument("--range", type=str, default="5m", help="Retention range: 5m, 15m, 30m or 1h")
    parser.add_argument("--live-minutes", type=float, default=5.0, help="Minutes of live ticking after backfill")
    parser.add_argument("--nodes", type=int, default=24, help="Population size")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (use -1 for random)")
    parser.add_argument("--realtime", action="store_true", help="Tick on the wall clock instead of a simulated one")
    parser.add_argument("--output", type=str, default="output/live_dashboard", help="Output directory")
    parser.add_argument("--no-viz", action="store_true", help="Skip chart generation")
    parser.add_argument("--verbose", action="store_true", help="Log dashboard activity to stderr")
    args = parser.parse_args()

    if args.verbose:
        enable_console_logging(level="DEBUG")
    else:
        configure_from_env()

    config = DashboardConfig.from_env().with_overrides(
        time_range=time_range_for(args.range),
        population_size=args.nodes,
        seed=None if args.seed == -1 else args.seed,
    )

    print("Running infrawatch session...")
    print(f"  Range: {config.time_range.label}, live for {args.live_minutes} min")
    print(f"  Random seed: {config.seed if config.seed is not None else 'random'}")

    dashboard = run_session(config, args.live_minutes, realtime=args.realtime)
    print_summary(dashboard)

    if not args.no_viz:
        output_dir = Path(args.output)
        visualize(dashboard, output_dir)
        print(f"\nVisualizations saved to: {output_dir.absolute()}")
