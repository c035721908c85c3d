#!/usr/bin/env python3
"""Batch battle profiler.

Usage:
    python scripts/profile_simulation.py --battles 500 --seed 42
    python scripts/profile_simulation.py --battles 200 --players 6 --cprofile profile.prof

Runs one headless battle per seed (seed, seed+1, ...) and reports:
    - Per-battle timing statistics (min, max, mean, p50, p95, p99)
    - Turn count distribution
    - Decisive vs. inconclusive outcomes
    - Optional: cProfile dump for flame graph generation
"""

from __future__ import annotations

import argparse
import cProfile
import io
import logging
import os
import pstats
import statistics
import sys
import time
from collections import Counter

# Ensure project root is on path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from battlers.config import SimulationConfig
from battlers.core.names import random_players
from battlers.engine.game import simulate
from battlers.systems.rng import DiceRNG


def _run_battles(cfg: SimulationConfig, seed: int, num_battles: int) -> dict:
    """Run battles and collect per-battle timing and outcome data."""
    battle_times: list[float] = []
    turn_counts: list[int] = []
    outcomes: Counter[str] = Counter()

    for i in range(num_battles):
        rng = DiceRNG(seed + i)
        players = random_players(cfg.player_count, rng, cfg.arena_min, cfg.arena_max)

        t_start = time.perf_counter()
        outcome = simulate(players, cfg, rng)
        battle_times.append(time.perf_counter() - t_start)

        turn_counts.append(outcome.turns)
        outcomes[outcome.kind.name] += 1

    return {
        "battle_times": battle_times,
        "turn_counts": turn_counts,
        "outcomes": outcomes,
    }


def _percentile(data: list[float], p: float) -> float:
    """Simple percentile calculation."""
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
    """Print a formatted performance and outcome report."""
    battle_times = data["battle_times"]
    turn_counts = data["turn_counts"]
    outcomes = data["outcomes"]
    num_battles = len(battle_times)

    if num_battles == 0:
        print("No battles executed.")
        return

    print("\n" + "=" * 70)
    print("  BATTLE BATCH REPORT")
    print("=" * 70)

    # --- Overview ---
    print(f"\n  Battles executed:  {num_battles}")
    print(f"  Wall clock time:   {wall_time:.3f}s")
    print(f"  Throughput:        {num_battles / wall_time:.1f} battles/sec")
    print(f"  Avg battle time:   {statistics.mean(battle_times) * 1000:.2f}ms")

    # --- Battle time distribution ---
    print(f"\n  {'Metric':<16} {'Time (ms)':>10} {'Turns':>8}")
    print(f"  {'-' * 16} {'-' * 10} {'-' * 8}")
    turns = [float(t) for t in turn_counts]
    print(f"  {'Min':<16} {min(battle_times) * 1000:>10.3f} {min(turns):>8.0f}")
    print(f"  {'P50 (median)':<16} {_percentile(battle_times, 50) * 1000:>10.3f} {_percentile(turns, 50):>8.0f}")
    print(f"  {'P95':<16} {_percentile(battle_times, 95) * 1000:>10.3f} {_percentile(turns, 95):>8.0f}")
    print(f"  {'P99':<16} {_percentile(battle_times, 99) * 1000:>10.3f} {_percentile(turns, 99):>8.0f}")
    print(f"  {'Max':<16} {max(battle_times) * 1000:>10.3f} {max(turns):>8.0f}")

    # --- Outcomes ---
    print(f"\n  {'Outcome':<16} {'Count':>10} {'% Total':>10}")
    print(f"  {'-' * 16} {'-' * 10} {'-' * 10}")
    for name, count in outcomes.most_common():
        print(f"  {name:<16} {count:>10} {count / num_battles * 100:>9.1f}%")

    print("\n" + "=" * 70)


def main() -> None:
    parser = argparse.ArgumentParser(description="Profile the battle engine over many seeds")
    parser.add_argument("--battles", type=int, default=500, help="Number of battles to run")
    parser.add_argument("--seed", type=int, default=42, help="First seed")
    parser.add_argument("--players", type=int, default=2, help="Players per battle")
    parser.add_argument("--max-turns", type=int, default=256, help="Turn cap per battle")
    parser.add_argument("--cprofile", type=str, default=None, help="Save cProfile output to file")
    args = parser.parse_args()

    # Battle narration would swamp the report
    logging.disable(logging.WARNING)

    cfg = SimulationConfig(seed=args.seed, player_count=args.players, max_turns=args.max_turns)

    print(f"Profiling: {args.battles} battles, seed={args.seed}, "
          f"players={args.players}, max_turns={args.max_turns}")

    # --- Optional: cProfile ---
    profiler = None
    if args.cprofile:
        profiler = cProfile.Profile()
        profiler.enable()

    wall_start = time.perf_counter()
    data = _run_battles(cfg, args.seed, args.battles)
    wall_time = time.perf_counter() - wall_start

    if profiler:
        profiler.disable()

    _print_report(data, wall_time)

    # --- cProfile output ---
    if profiler and args.cprofile:
        profiler.dump_stats(args.cprofile)
        print(f"\n  cProfile data saved to: {args.cprofile}")
        print(f"  View with: python -m pstats {args.cprofile}")

        print(f"\n  Top 20 functions by cumulative time:")
        stream = io.StringIO()
        ps = pstats.Stats(profiler, stream=stream)
        ps.sort_stats("cumulative")
        ps.print_stats(20)
        print(stream.getvalue())


if __name__ == "__main__":
    main()
