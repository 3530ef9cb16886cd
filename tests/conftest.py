from __future__ import annotations

from collections.abc import Iterator

import pytest

from delve.util.performance import perf_tracker


class MidpointRNG:
    """Deterministic stand-in for an RNG stream.

    Always returns the middle of the requested range and records every call,
    so tests can assert on exact layouts and on how many draws were made.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[float, ...]]] = []

    def random(self) -> float:
        self.calls.append(("random", ()))
        return 0.5

    def uniform(self, a: float, b: float) -> float:
        self.calls.append(("uniform", (a, b)))
        return (a + b) / 2

    def randint(self, a: int, b: int) -> int:
        self.calls.append(("randint", (a, b)))
        return (a + b) // 2


@pytest.fixture
def midpoint_rng() -> MidpointRNG:
    return MidpointRNG()


@pytest.fixture(autouse=True)
def reset_performance_tracker() -> Iterator[None]:
    """Clear global timing statistics before and after each test."""
    perf_tracker.reset()
    perf_tracker.disable()
    yield
    perf_tracker.reset()
    perf_tracker.disable()
