"""
Timing measurement for generation phases.

Provides a context manager for measuring how long each phase of a generation
run takes, with optional aggregation across runs and a text report.

Usage Examples:
    # Enable aggregation (timing of the block itself always works)
    enable_performance_tracking()

    with measure_block("bsp.tree") as timing:
        tree.generate(rng)
    logger.debug("tree took %.2fms", timing.elapsed_ms)

    # Get results
    report = get_performance_report()
    print(report)
"""

import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass


@dataclass
class PerformanceStats:
    """Statistics for a measured operation."""

    name: str
    call_count: int = 0
    total_time: float = 0.0
    min_time: float = float("inf")
    max_time: float = 0.0

    def add_measurement(self, duration: float) -> None:
        """Add a new timing measurement."""
        self.call_count += 1
        self.total_time += duration
        self.min_time = min(self.min_time, duration)
        self.max_time = max(self.max_time, duration)

    @property
    def avg_time(self) -> float:
        """Average time per call across all measurements."""
        return self.total_time / self.call_count if self.call_count > 0 else 0.0


@dataclass
class BlockTiming:
    """Duration of a single measured block, filled in when the block exits."""

    name: str
    elapsed: float = 0.0

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed * 1000.0


class PerformanceTracker:
    """Aggregates timing statistics for named operations.

    Each measured block always reports its own duration through the yielded
    BlockTiming. Statistics are only accumulated while the tracker is enabled.
    """

    def __init__(self) -> None:
        self.stats: dict[str, PerformanceStats] = {}
        self.enabled = False

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    def reset(self) -> None:
        """Reset all collected statistics."""
        self.stats.clear()

    @contextmanager
    def measure_block(self, name: str) -> Iterator[BlockTiming]:
        """Context manager to measure a block of code.

        Args:
            name: Unique identifier for this measurement, e.g. "bsp.corridors".
        """
        timing = BlockTiming(name)
        start_time = time.perf_counter()
        try:
            yield timing
        finally:
            timing.elapsed = time.perf_counter() - start_time
            if self.enabled:
                if name not in self.stats:
                    self.stats[name] = PerformanceStats(name)
                self.stats[name].add_measurement(timing.elapsed)

    def get_stats(self, name: str) -> PerformanceStats | None:
        return self.stats.get(name)

    def get_report(self, filter_prefix: str = "") -> str:
        """Generate a formatted performance report sorted by total time.

        Args:
            filter_prefix: If provided, only include measurements whose names
                          start with this prefix.
        """
        stats_to_show = [
            stats
            for name, stats in self.stats.items()
            if name.startswith(filter_prefix)
        ]
        if not stats_to_show:
            return "No performance data collected."

        title = "Performance Report"
        if filter_prefix:
            title = f"{title} (filtered by '{filter_prefix}')"

        lines = [title, "=" * len(title)]
        lines.append(f"{'Name':<25} {'Calls':<8} {'Total(ms)':<10} {'Avg(ms)':<10}")
        lines.append("-" * 56)
        lines.extend(
            f"{stat.name:<25} "
            f"{stat.call_count:<8} "
            f"{stat.total_time * 1000:<10.2f} "
            f"{stat.avg_time * 1000:<10.3f}"
            for stat in sorted(stats_to_show, key=lambda s: s.total_time, reverse=True)
        )
        return "\n".join(lines)


# Global performance tracker instance
perf_tracker = PerformanceTracker()


def enable_performance_tracking() -> None:
    """Enable global performance tracking."""
    perf_tracker.enable()


def disable_performance_tracking() -> None:
    """Disable global performance tracking."""
    perf_tracker.disable()


def reset_performance_data() -> None:
    """Reset all collected performance data."""
    perf_tracker.reset()


def measure_block(name: str):
    """Context manager for measuring code block performance.

    See PerformanceTracker.measure_block() for detailed documentation.
    """
    return perf_tracker.measure_block(name)


def get_performance_report(filter_prefix: str = "") -> str:
    """Get a formatted performance report."""
    return perf_tracker.get_report(filter_prefix)
