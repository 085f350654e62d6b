#!/usr/bin/env python3
"""
Performance benchmarking script for the dune simulation.

Runs the simulation headless (no rendering) with a steady pour of sand to
measure pure simulation performance: tick times, per-system breakdown and
the resulting dune profile.
"""
from __future__ import annotations

import sys
from pathlib import Path

# Add repository root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import argparse
import cProfile
import io
import pstats
import time
from statistics import mean, median, stdev
from typing import Dict, List, Tuple

from config import TICK_MS, SPAWN_RATE
from main import request_spawn, step_particle
from sim_state import SimulationState, build_initial_state
from simulation.config import RELAX_PASSES, RELAX_INTERVAL_TICKS, PARTICLE_MAX_LIFETIME_MS
from simulation.profile import profile_stats
from simulation.relaxation import relax
from simulation.stability import process_grain_stability

REPORT_WIDTH = 80


def tick_time_stats(times: List[float]) -> Tuple[float, float, float, float, float]:
    """Returns (mean, median, stdev, min, max) of tick durations in seconds."""
    if not times:
        return (0.0, 0.0, 0.0, 0.0, 0.0)
    return (mean(times), median(times), stdev(times) if len(times) > 1 else 0.0, min(times), max(times))


def print_metric(label: str, value: str) -> None:
    print(f"  {label:<25} {value}")


def ms(seconds: float) -> str:
    return f"{seconds * 1000:.2f}ms"


class PerformanceMetrics:
    """Tracks performance metrics during simulation."""

    def __init__(self):
        self.tick_times: List[float] = []
        self.system_times: Dict[str, List[float]] = {
            'particles': [],
            'relaxation': [],
            'stability': [],
        }
        self.start_time: float = 0
        self.end_time: float = 0

    def record_system_time(self, system: str, duration: float):
        """Record timing for a specific subsystem."""
        if system in self.system_times:
            self.system_times[system].append(duration)

    def get_total_time(self) -> float:
        return self.end_time - self.start_time

    def print_report(self, state: SimulationState):
        """Print a performance report plus the final terrain summary."""
        print("\n" + "=" * REPORT_WIDTH)
        print("DUNE SIMULATION PERFORMANCE REPORT")
        print("=" * REPORT_WIDTH)
        print_metric("Viewport:", f"{state.width}x{state.height} ({state.cols} columns)")

        total_time = self.get_total_time()
        total_ticks = len(self.tick_times)
        print_metric("Total runtime:", f"{total_time:.2f}s")
        print_metric("Total ticks:", str(total_ticks))
        if total_time > 0:
            print_metric("Average TPS:", f"{total_ticks / total_time:.1f} ticks/sec")

        avg, med, dev, lo, hi = tick_time_stats(self.tick_times)
        print_metric("Tick mean:", ms(avg))
        print_metric("Tick median:", ms(med))
        print_metric("Tick std dev:", ms(dev))
        print_metric("Tick min / max:", f"{ms(lo)} / {ms(hi)}")

        print("\n  System breakdown (average times)")
        for system, times in self.system_times.items():
            if times and avg > 0:
                pct = mean(times) / avg * 100
                print(f"    {system:20s} {mean(times) * 1000:6.2f}ms  ({pct:5.1f}%)")

        stats = profile_stats(state.columns.heights)
        print("\n  Terrain")
        print_metric("Settled particles:", str(state.ledger.settled_count))
        print_metric("Force-settled:", str(state.ledger.forced_count))
        print_metric("Mobile grains:", str(state.mobile_grain_count))
        print_metric("Peak height:", f"{stats.peak:.1f}px")
        print_metric("Max slope:", f"{stats.max_slope:.2f}px")
        print_metric("Roughness:", f"{stats.roughness:.2f}px")
        print_metric("Conservation error:", f"{state.ledger.discrepancy(state.columns.total()):.6f}px")
        print("=" * REPORT_WIDTH)


def simulate_tick_profiled(state: SimulationState, metrics: PerformanceMetrics, spawn_x: float) -> None:
    """Run one simulation tick with per-system timing.

    Mirrors main.simulate_tick, with a fixed spawn point.
    """
    tick_start = time.perf_counter()
    state.time_ms += TICK_MS
    state.tick_count += 1

    for _ in range(SPAWN_RATE):
        request_spawn(state, spawn_x, state.height * 0.1)

    part_start = time.perf_counter()
    particles = state.particles
    for i in range(len(particles) - 1, -1, -1):
        if step_particle(state, particles[i]):
            particles.pop(i)
    metrics.record_system_time('particles', time.perf_counter() - part_start)

    relax_start = time.perf_counter()
    if state.relaxation_due(RELAX_INTERVAL_TICKS):
        relax(state, RELAX_PASSES)
    metrics.record_system_time('relaxation', time.perf_counter() - relax_start)

    stab_start = time.perf_counter()
    process_grain_stability(state)
    metrics.record_system_time('stability', time.perf_counter() - stab_start)

    metrics.tick_times.append(time.perf_counter() - tick_start)


def run_benchmark(num_ticks: int = 2000, seed: int = 1, profile_hotspots: bool = False) -> PerformanceMetrics:
    """
    Run a headless simulation benchmark.

    Args:
        num_ticks: Number of simulation ticks to run
        seed: Random seed (runs with the same seed are identical)
        profile_hotspots: If True, run cProfile to identify hot code paths

    Returns:
        PerformanceMetrics object with collected data
    """
    state = build_initial_state(seed=seed)
    metrics = PerformanceMetrics()
    spawn_x = state.width / 2

    print(f"\nRunning {num_ticks} ticks ({num_ticks * TICK_MS / PARTICLE_MAX_LIFETIME_MS:.1f} particle lifetimes)...")
    profiler = cProfile.Profile() if profile_hotspots else None
    if profiler:
        profiler.enable()

    metrics.start_time = time.perf_counter()
    for i in range(num_ticks):
        simulate_tick_profiled(state, metrics, spawn_x)
        if i % 100 == 0:
            print(f"    Ticks: {i / num_ticks * 100:.0f}% ({i}/{num_ticks})", end="\r")
    metrics.end_time = time.perf_counter()
    print(f"    Ticks: 100% ({num_ticks}/{num_ticks})")

    if profiler:
        profiler.disable()

    metrics.print_report(state)

    if profiler:
        print("\nHOT CODE PATHS (Top 20 functions by cumulative time)")
        s = io.StringIO()
        pstats.Stats(profiler, stream=s).sort_stats('cumulative').print_stats(20)
        for line in s.getvalue().split('\n')[:30]:
            if line.strip():
                print(line)

    return metrics


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Headless simulation benchmark for the dune simulator"
    )
    parser.add_argument(
        "--num-ticks", type=int, default=2000,
        help="Number of simulation ticks to run (default: 2000)"
    )
    parser.add_argument(
        "--seed", type=int, default=1,
        help="Random seed (default: 1)"
    )
    parser.add_argument(
        "--profile", action="store_true",
        help="Run cProfile and print hot code paths"
    )
    args = parser.parse_args()
    run_benchmark(num_ticks=args.num_ticks, seed=args.seed, profile_hotspots=args.profile)


if __name__ == "__main__":
    main()
