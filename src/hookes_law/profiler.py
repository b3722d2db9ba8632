# MIT License (see LICENSE)
"""
Lightweight timing of setter propagation.

Measures how long setter calls take to settle a spring or system and how
many change notifications each call fires, without external dependencies.

Example:
    profiler = Profiler()
    profiler.watch(system)
    with profiler.section("set_applied_force"):
        system.set_applied_force(50)
    print(profiler.stats.summary())
"""
from __future__ import annotations
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from .model.systems import SpringSystem


@dataclass
class ProfileStats:
    """
    Timing samples per named section, plus notifications fired inside each.
    """
    samples: dict[str, list[float]] = field(default_factory=dict)
    notifications: dict[str, int] = field(default_factory=dict)

    def add(self, name: str, dt: float, fired: int = 0) -> None:
        """Record one timing sample (seconds) and its notification count."""
        self.samples.setdefault(name, []).append(dt)
        self.notifications[name] = self.notifications.get(name, 0) + fired

    def summary(self) -> dict[str, dict[str, float]]:
        """
        Summary statistics per section.

        Returns:
            Dict mapping section name to:
            - 'n': sample count
            - 'mean_us': average time in microseconds
            - 'max_us': maximum time in microseconds
            - 'notifications_per_call': average listener notifications per sample
        """
        out = {}
        for name, times in self.samples.items():
            n = len(times)
            out[name] = {
                "n": n,
                "mean_us": 1e6 * (sum(times) / n),
                "max_us": 1e6 * max(times),
                "notifications_per_call": self.notifications.get(name, 0) / n,
            }
        return out


class Profiler:
    """
    Times sections of code and counts the value notifications they trigger.

    Notifications are only counted for systems registered with watch().
    """

    def __init__(self) -> None:
        self.stats = ProfileStats()
        self._fired = 0
        self._watched: list = []

    def _count(self, new, old) -> None:
        self._fired += 1

    def watch(self, system: "SpringSystem") -> None:
        """Count notifications from every controllable and derived value of a system."""
        for spring in system.all_springs():
            for cell in (
                spring.spring_constant_property,
                spring.applied_force_property,
                spring.displacement_property,
                spring.length_property,
                spring.spring_force_property,
                spring.potential_energy_property,
            ):
                cell.subscribe(self._count)
                self._watched.append(cell)

    def unwatch(self) -> None:
        """Stop counting notifications."""
        for cell in self._watched:
            cell.unsubscribe(self._count)
        self._watched.clear()

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """
        Time the enclosed code under `name`.

        A section that raises is still recorded.
        """
        fired0 = self._fired
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.stats.add(name, time.perf_counter() - t0, self._fired - fired0)
