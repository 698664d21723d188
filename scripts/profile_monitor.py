#!/usr/bin/env python3
"""Headless monitor profiler.

Usage:
    python scripts/profile_monitor.py --ticks 6000 --seed 42
    python scripts/profile_monitor.py --ticks 6000 --agents 10 --cprofile monitor.prof

Reports:
    - Per-tick timing statistics (min, mean, p50, p95, p99, max)
    - Breakdown by which periodic passes ran on the tick
    - Messages delivered per channel
    - Throughput (ticks/sec)
    - Optional: cProfile dump
"""

from __future__ import annotations

import argparse
import cProfile
import io
import os
import pstats
import statistics
import sys
import time
from collections import Counter, defaultdict

# Ensure project root is on path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from scoutwatch.config import MonitorConfig
from scoutwatch.engine.context import MonitorContext
from scoutwatch.engine.monitor_loop import MonitorLoop
from scoutwatch.sim import build_world
from scoutwatch.systems.clock import ManualClock
from scoutwatch.utils.notification_log import NotificationLog


def _run_monitor(cfg: MonitorConfig) -> dict:
    """Tick the monitor to completion and collect per-tick timing."""
    clock = ManualClock()
    ctx = MonitorContext(cfg, clock)
    world = build_world(cfg)
    log = NotificationLog(maxlen=1_000_000)
    loop = MonitorLoop(ctx, world, log, events=world)
    log.bind_tick_source(lambda: loop.tick)
    loop.start()

    tick_times: list[float] = []
    by_passes: dict[str, list[float]] = defaultdict(list)

    while True:
        before = {t.name: t.runs for t in loop.scheduler.tasks}
        t0 = time.perf_counter()
        if not loop.tick_once():
            break
        elapsed = time.perf_counter() - t0
        clock.advance(cfg.tick_duration_ms)

        ran = [t.name for t in loop.scheduler.tasks if t.runs != before.get(t.name)]
        tick_times.append(elapsed)
        by_passes["+".join(ran) or "(idle)"].append(elapsed)

    channels = Counter(n.channel.value for n in log.latest(len(log)))
    return {
        "tick_times": tick_times,
        "by_passes": by_passes,
        "channels": channels,
        "stats": ctx.metrics.stats(),
    }


def _percentile(data: list[float], p: float) -> float:
    if not data:
        return 0.0
    sorted_data = sorted(data)
    k = (len(sorted_data) - 1) * (p / 100.0)
    f = int(k)
    c = f + 1
    if c >= len(sorted_data):
        return sorted_data[f]
    return sorted_data[f] + (k - f) * (sorted_data[c] - sorted_data[f])


def _print_report(data: dict, wall_time: float) -> None:
    tick_times = data["tick_times"]
    num_ticks = len(tick_times)
    if num_ticks == 0:
        print("No ticks executed.")
        return

    print("\n" + "=" * 70)
    print("  MONITOR PERFORMANCE REPORT")
    print("=" * 70)

    print(f"\n  Ticks executed:    {num_ticks}")
    print(f"  Wall clock time:   {wall_time:.3f}s")
    print(f"  Throughput:        {num_ticks / wall_time:.1f} ticks/sec")
    print(f"  Avg tick time:     {statistics.mean(tick_times) * 1000:.3f}ms")
    stats = data["stats"]
    print(f"  Scan passes:       {stats.updates} (avg {stats.avg_process_ms:.2f}ms)")
    print(f"  Errors:            {stats.errors}")

    print(f"\n  {'Metric':<16} {'Time (ms)':>10}")
    print(f"  {'-' * 16} {'-' * 10}")
    print(f"  {'Min':<16} {min(tick_times) * 1000:>10.3f}")
    print(f"  {'P50 (median)':<16} {_percentile(tick_times, 50) * 1000:>10.3f}")
    print(f"  {'P95':<16} {_percentile(tick_times, 95) * 1000:>10.3f}")
    print(f"  {'P99':<16} {_percentile(tick_times, 99) * 1000:>10.3f}")
    print(f"  {'Max':<16} {max(tick_times) * 1000:>10.3f}")

    total_sum = sum(tick_times)
    print(f"\n  {'Passes':<36} {'Ticks':>6} {'Avg (ms)':>10} {'% Total':>9}")
    print(f"  {'-' * 36} {'-' * 6} {'-' * 10} {'-' * 9}")
    ranked = sorted(data["by_passes"].items(), key=lambda kv: sum(kv[1]), reverse=True)
    for name, times in ranked:
        pct = sum(times) / total_sum * 100 if total_sum > 0 else 0
        print(f"  {name:<36} {len(times):>6} {statistics.mean(times) * 1000:>10.3f} {pct:>8.1f}%")

    print(f"\n  {'Channel':<16} {'Messages':>10}")
    print(f"  {'-' * 16} {'-' * 10}")
    for channel, count in data["channels"].most_common():
        print(f"  {channel:<16} {count:>10}")

    print("\n" + "=" * 70)


def main() -> None:
    parser = argparse.ArgumentParser(description="Profile the monitor loop against the simulated world")
    parser.add_argument("--ticks", type=int, default=6000, help="Number of ticks to run")
    parser.add_argument("--seed", type=int, default=42, help="World seed")
    parser.add_argument("--agents", type=int, default=3, help="Simulated agent count")
    parser.add_argument("--cprofile", type=str, default=None, help="Save cProfile output to file")
    args = parser.parse_args()

    cfg = MonitorConfig(world_seed=args.seed, max_ticks=args.ticks, agent_count=args.agents,
                        log_level="WARNING")
    print(f"Profiling: {args.ticks} ticks, seed={args.seed}, agents={args.agents}")

    profiler = None
    if args.cprofile:
        profiler = cProfile.Profile()
        profiler.enable()

    wall_start = time.perf_counter()
    data = _run_monitor(cfg)
    wall_time = time.perf_counter() - wall_start

    if profiler:
        profiler.disable()

    _print_report(data, wall_time)

    if profiler and args.cprofile:
        profiler.dump_stats(args.cprofile)
        print(f"\n  cProfile data saved to: {args.cprofile}")
        print(f"\n  Top 20 functions by cumulative time:")
        stream = io.StringIO()
        ps = pstats.Stats(profiler, stream=stream)
        ps.sort_stats("cumulative")
        ps.print_stats(20)
        print(stream.getvalue())


if __name__ == "__main__":
    main()
