"""
Performance Benchmark
=====================

Measures headless engine and score store throughput.

Usage:
    python -m tools.benchmark_speed [--steps S] [--commits C] [--quick]
"""

from __future__ import annotations

import argparse
import sys
import tempfile
import time
from pathlib import Path

import numpy as np

from termplay.core.config_loader import load_config
from termplay.core.grid_engine import GridEngine
from termplay.core.rng import RandomSource
from termplay.core.rules import Direction
from termplay.core.snake_engine import SnakeEngine
from termplay.scoreboard.record import Score
from termplay.scoreboard.store import ScoreStore

DIRECTIONS = list(Direction)


def benchmark_grid(num_steps: int = 1000, seed: int = 42) -> dict:
    """
    Benchmark 2048 moves with random directions.

    A stuck board is restarted, since the engine never ends a game itself.

    Args:
        num_steps: Number of moves to apply.
        seed: Random seed.

    Returns:
        Dict with timing results.
    """
    config = load_config()
    rng = np.random.default_rng(seed)
    engine = GridEngine(config, RandomSource(seed))
    engine.start()

    start = time.perf_counter()
    restarts = 0
    for _ in range(num_steps):
        engine.step(DIRECTIONS[rng.integers(len(DIRECTIONS))])
        if not engine.has_moves():
            engine = GridEngine(config, RandomSource(seed + restarts + 1))
            engine.start()
            restarts += 1
    elapsed = time.perf_counter() - start

    return {
        "mode": "grid",
        "num_steps": num_steps,
        "restarts": restarts,
        "elapsed_seconds": elapsed,
        "steps_per_second": num_steps / elapsed,
        "ms_per_step": (elapsed * 1000) / num_steps,
    }


def benchmark_snake(num_steps: int = 1000, seed: int = 42) -> dict:
    """
    Benchmark snake ticks with random steering.

    Args:
        num_steps: Number of ticks.
        seed: Random seed.

    Returns:
        Dict with timing results.
    """
    config = load_config()
    rng = np.random.default_rng(seed)
    engine = SnakeEngine(config, RandomSource(seed))

    start = time.perf_counter()
    games = 1
    for _ in range(num_steps):
        if rng.random() < 0.2:
            engine.steer(DIRECTIONS[rng.integers(len(DIRECTIONS))])
        engine.tick()
        if engine.is_over:
            engine.reset()
            games += 1
    elapsed = time.perf_counter() - start

    return {
        "mode": "snake",
        "num_steps": num_steps,
        "games": games,
        "elapsed_seconds": elapsed,
        "steps_per_second": num_steps / elapsed,
        "ms_per_step": (elapsed * 1000) / num_steps,
    }


def benchmark_commits(num_commits: int = 200, seed: int = 42) -> dict:
    """
    Benchmark locked commits to a full-size board file.

    Args:
        num_commits: Number of records to commit.
        seed: Random seed for the scores.

    Returns:
        Dict with timing results.
    """
    config = load_config()
    rng = np.random.default_rng(seed)
    scores = rng.integers(1, 100000, size=num_commits)

    with tempfile.TemporaryDirectory() as tmp:
        with ScoreStore.open(Path(tmp) / "bench.scores", config) as store:
            start = time.perf_counter()
            for points in scores:
                store.commit(Score.now(int(points), "bench"))
            elapsed = time.perf_counter() - start

    return {
        "mode": "commit",
        "num_steps": num_commits,
        "elapsed_seconds": elapsed,
        "steps_per_second": num_commits / elapsed,
        "ms_per_step": (elapsed * 1000) / num_commits,
    }


def run_all_benchmarks(steps: int = 2000, commits: int = 200) -> list:
    """Run every benchmark and print a summary."""
    results = []

    print("=" * 60)
    print("TERMPLAY PERFORMANCE BENCHMARK")
    print("=" * 60)
    print()

    for label, bench, count in [
        ("GridEngine moves", benchmark_grid, steps),
        ("SnakeEngine ticks", benchmark_snake, steps),
        ("ScoreStore commits", benchmark_commits, commits),
    ]:
        print(f"Benchmarking {label}...")
        result = bench(count)
        results.append(result)
        print(f"  Steps/sec: {result['steps_per_second']:.1f}")
        print(f"  ms/step:   {result['ms_per_step']:.3f}")
        print()

    print("=" * 60)
    print("SUMMARY")
    print("=" * 60)
    print()
    print(f"{'Mode':<20} {'Steps':>8} {'Steps/s':>12} {'ms/step':>10}")
    print("-" * 52)
    for r in results:
        print(
            f"{r['mode']:<20} {r['num_steps']:>8} "
            f"{r['steps_per_second']:>12.1f} {r['ms_per_step']:>10.3f}"
        )

    return results


def main():
    parser = argparse.ArgumentParser(description="Benchmark termplay engines and score store")
    parser.add_argument("--steps", type=int, default=2000, help="Moves/ticks per engine benchmark")
    parser.add_argument("--commits", type=int, default=200, help="Commits for the store benchmark")
    parser.add_argument("--quick", action="store_true", help="Quick benchmark (fewer steps)")

    args = parser.parse_args()

    if args.quick:
        run_all_benchmarks(steps=200, commits=20)
    else:
        run_all_benchmarks(steps=args.steps, commits=args.commits)

    return 0


if __name__ == "__main__":
    sys.exit(main())
