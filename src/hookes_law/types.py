# MIT License (see LICENSE)
"""
Core type definitions shared across the model.

Defines Range, the closed interval [min, max] used for every validated
quantity (spring constant, applied force, displacement). UI controls read
ranges to configure sliders and clamp input before calling a setter.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any

from .errors import ConfigurationError
from .util import approx_equal, f64, is_finite


@dataclass(frozen=True)
class Range:
    """
    Closed numeric interval [min, max].

    Attributes:
        min: Lower bound (inclusive).
        max: Upper bound (inclusive). Must satisfy min <= max.

    Raises:
        ConfigurationError: If a bound is not finite or min > max.
    """
    min: float
    max: float

    def __post_init__(self) -> None:
        """Coerce bounds to float64 and check ordering."""
        try:
            lo, hi = f64(self.min), f64(self.max)
        except TypeError as e:
            raise ConfigurationError(f"invalid range bounds ({self.min!r}, {self.max!r}): {e}") from e
        if not (is_finite(lo) and is_finite(hi)):
            raise ConfigurationError(f"range bounds must be finite, got [{lo}, {hi}]")
        if lo > hi:
            raise ConfigurationError(f"range min {lo} is greater than max {hi}")
        object.__setattr__(self, "min", lo)
        object.__setattr__(self, "max", hi)

    @classmethod
    def coerce(cls, value: Any) -> "Range":
        """
        Build a Range from a Range, a (min, max) pair or a {"min", "max"} mapping.

        Used for keyword arguments and configuration files.
        """
        if isinstance(value, Range):
            return value
        if isinstance(value, dict):
            try:
                return cls(value["min"], value["max"])
            except KeyError as e:
                raise ConfigurationError(f"range mapping is missing key {e}") from e
        try:
            lo, hi = value
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"cannot interpret {value!r} as a range") from e
        return cls(lo, hi)

    @property
    def length(self) -> float:
        """Width of the interval, max - min."""
        return self.max - self.min

    def contains(self, value: float) -> bool:
        """True if min <= value <= max."""
        return self.min <= value <= self.max

    def clamp(self, value: float) -> float:
        """Constrain value to the interval."""
        return min(max(value, self.min), self.max)

    def snap(self, value: float, tol: float) -> float:
        """
        Pull a value that overshoots a bound by rounding error back onto it.

        Values inside the interval, and values genuinely past a bound, are
        returned unchanged (the latter still fail contains()).
        """
        if self.contains(value):
            return value
        bound = self.clamp(value)
        if approx_equal(value, bound, tol):
            return bound
        return value

    def intersection(self, other: "Range") -> "Range | None":
        """Overlap of two ranges, or None if they are disjoint."""
        lo = max(self.min, other.min)
        hi = min(self.max, other.max)
        if lo > hi:
            return None
        return Range(lo, hi)

    def to_list(self) -> list[float]:
        """[min, max] as a JSON-friendly list."""
        return [self.min, self.max]

    def __str__(self) -> str:
        return f"[{self.min:g}, {self.max:g}]"
