# MIT License (see LICENSE)
"""
Lightweight timing and event counting for the simulation driver.

Example:
    profiler = Profiler()
    sim = Simulation(profiler=profiler)
    sim.advance_to(10.0)
    print(profiler.stats.summary())
"""
from __future__ import annotations
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator


@dataclass
class ProfileStats:
    """
    Timing samples per named section, plus plain counters.

    Attributes:
        samples: Section name -> elapsed seconds of every run.
        counters: Counter name -> running total.
    """
    samples: dict[str, list[float]] = field(default_factory=dict)
    counters: dict[str, int] = field(default_factory=dict)

    def add(self, name: str, dt: float) -> None:
        """Record a timing sample (in seconds) for a named section."""
        self.samples.setdefault(name, []).append(dt)

    def count(self, name: str, n: int = 1) -> None:
        self.counters[name] = self.counters.get(name, 0) + n

    def summary(self) -> dict[str, dict[str, float]]:
        """
        Summary statistics for all recorded sections.

        Returns:
            Dict mapping section name to a dict with keys
            - 'n': sample count
            - 'mean_ms': average time in milliseconds
            - 'max_ms': maximum time in milliseconds
            and, for every counter, counter name to {'total': value}.
        """
        out: dict[str, dict[str, float]] = {}
        for name, times in self.samples.items():
            n = len(times)
            out[name] = {
                "n": n,
                "mean_ms": 1e3 * (sum(times) / n),
                "max_ms": 1e3 * max(times),
            }
        for name, total in self.counters.items():
            out.setdefault(name, {})["total"] = total
        return out


class Profiler:
    """
    Context-manager based profiler for timing code sections.

    Usage:
        profiler = Profiler()
        with profiler.section("events"):
            root.resolve_until(t)
        profiler.count("events", resolved)
    """

    def __init__(self) -> None:
        self.stats = ProfileStats()

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Time the enclosed block and record it under name."""
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.stats.add(name, time.perf_counter() - t0)

    def count(self, name: str, n: int = 1) -> None:
        self.stats.count(name, n)
