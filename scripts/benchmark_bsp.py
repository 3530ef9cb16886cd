#!/usr/bin/env python3
"""Benchmark BSP dungeon generation across map sizes."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from delve.environment.generators import BSPConfig, BSPDungeonGenerator
from delve.util.performance import (
    enable_performance_tracking,
    perf_tracker,
    reset_performance_data,
)

# (width, height, depth)
MAP_CASES: tuple[tuple[int, int, int], ...] = (
    (40, 30, 4),
    (80, 48, 5),
    (160, 96, 7),
    (320, 200, 9),
)

PHASES: tuple[str, ...] = ("bsp.tree", "bsp.rooms", "bsp.paint_rooms", "bsp.corridors")


class BSPBenchmark:
    """Benchmark runner for the BSP generator."""

    def __init__(self, iterations: int) -> None:
        self.iterations = iterations
        self.results: dict[str, dict[str, float]] = {}

    def _run_case(self, width: int, height: int, depth: int) -> dict[str, float]:
        """Run one benchmark case and return average phase times in milliseconds."""
        reset_performance_data()
        config = BSPConfig(size=(width, height), depth=depth)

        for i in range(self.iterations):
            seed = (width * 1_000_000) + (height * 1_000) + i
            BSPDungeonGenerator(config, seed=seed).generate()

        timings: dict[str, float] = {}
        for phase in PHASES:
            stats = perf_tracker.get_stats(phase)
            timings[phase] = stats.avg_time * 1000.0 if stats else 0.0
        timings["total_ms"] = sum(timings.values())
        return timings

    def run(self) -> None:
        """Run all configured map-size benchmarks."""
        enable_performance_tracking()

        print("BSP Generation Benchmark")
        print("=" * 72)
        print(f"Iterations per size: {self.iterations}")
        print()
        header = "".join(f"{phase.removeprefix('bsp.'):>12}" for phase in PHASES)
        print(f"{'Size':>14}{header}{'Total (ms)':>12}")
        print("-" * 72)

        for width, height, depth in MAP_CASES:
            timings = self._run_case(width, height, depth)

            size_key = f"{width}x{height}@{depth}"
            self.results[size_key] = timings

            row = "".join(f"{timings[phase]:12.3f}" for phase in PHASES)
            print(f"{size_key:>14}{row}{timings['total_ms']:12.3f}")

    def save_results(self, filename: str) -> None:
        """Save benchmark output to a JSON file."""
        with Path(filename).open("w") as f:
            json.dump(self.results, f, indent=2)
        print(f"\nSaved benchmark results to {filename}")

    def compare_with_baseline(self, baseline_file: str) -> None:
        """Compare current run with a saved baseline JSON file."""
        try:
            with Path(baseline_file).open() as f:
                baseline: dict[str, dict[str, float]] = json.load(f)
        except FileNotFoundError:
            print(f"\nBaseline file not found: {baseline_file}")
            return

        print(f"\nComparison vs baseline: {baseline_file}")
        print("=" * 72)

        for size_key, current in self.results.items():
            if size_key not in baseline:
                continue

            old_total = baseline[size_key].get("total_ms", 0.0)
            new_total = current["total_ms"]
            if old_total <= 0:
                continue

            delta_pct = ((new_total - old_total) / old_total) * 100.0
            speed_ratio = old_total / new_total if new_total > 0 else 0.0
            trend = "faster" if speed_ratio > 1.0 else "slower"

            print(
                f"{size_key:>14}: {new_total:8.3f}ms "
                f"vs {old_total:8.3f}ms | {speed_ratio:5.2f}x {trend} "
                f"({delta_pct:+6.1f}%)"
            )


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Benchmark BSP dungeon generation")
    parser.add_argument(
        "--iterations",
        type=int,
        default=20,
        help="Number of runs per map size (default: 20)",
    )
    parser.add_argument("--save", type=str, help="Save current results to JSON")
    parser.add_argument(
        "--compare",
        type=str,
        help="Compare current results against baseline JSON",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Print one 80x48 layout before benchmarking",
    )
    args = parser.parse_args(argv)

    if args.show:
        data = BSPDungeonGenerator(BSPConfig(size=(80, 48))).generate()
        print("\n".join(data.grid.to_lines()))
        print()

    benchmark = BSPBenchmark(iterations=args.iterations)
    benchmark.run()

    if args.save:
        benchmark.save_results(args.save)

    if args.compare:
        benchmark.compare_with_baseline(args.compare)


if __name__ == "__main__":
    main()
