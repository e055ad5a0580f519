"""Domain bounds for phase-space axes: static or growing with observed data."""

from typing import Tuple


class StaticRange:
    """
    Fixed domain [lo, hi].

    Used both for bounds derived from configured parameter ranges and for
    constants calibrated by eye (e.g. speed 0..10).
    """

    def __init__(self, lo: float, hi: float) -> None:
        self.lo = float(lo)
        self.hi = float(hi)

    @property
    def bounds(self) -> Tuple[float, float]:
        return self.lo, self.hi

    @property
    def span(self) -> float:
        return self.hi - self.lo

    def observe(self, value: float) -> None:
        """Static ranges ignore observations."""

    def reset(self) -> None:
        """Nothing to reset."""

    def __repr__(self) -> str:
        return f"StaticRange({self.lo!r}, {self.hi!r})"


class DynamicRange(StaticRange):
    """
    Domain whose upper bound tracks the largest value observed so far.

    The bound only grows; ``reset`` restores the initial upper bound.
    """

    def __init__(self, lo: float = 0.0, initial_hi: float = 1.0) -> None:
        super().__init__(lo, initial_hi)
        self._initial_hi = float(initial_hi)

    def observe(self, value: float) -> None:
        if value > self.hi:
            self.hi = float(value)

    def reset(self) -> None:
        self.hi = self._initial_hi

    def __repr__(self) -> str:
        return f"DynamicRange({self.lo!r}, hi={self.hi!r})"


def symmetric_range(limit: float) -> StaticRange:
    """[-limit, +limit]."""
    limit = abs(float(limit))
    return StaticRange(-limit, limit)
