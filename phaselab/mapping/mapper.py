"""
Linear projection of raw phase-space quantities into plot coordinates.

``map_range`` is unclamped: values outside the domain land outside the output
range and callers draw them as they are. A zero-span domain maps everything to
the middle of the output range.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

import numpy as np

from phaselab.mapping.ranges import StaticRange

Number = Union[float, np.ndarray]


def map_range(
    value: Number,
    domain_min: float,
    domain_max: float,
    range_min: float,
    range_max: float,
) -> Number:
    """range_min + (value - domain_min) / (domain_max - domain_min) * (range_max - range_min)."""
    span = domain_max - domain_min
    if span == 0:
        mid = 0.5 * (range_min + range_max)
        if np.ndim(value):
            return np.full(np.shape(value), mid, dtype=float)
        return mid
    scale = (range_max - range_min) / span
    if np.ndim(value):
        return range_min + (np.asarray(value, dtype=float) - domain_min) * scale
    return range_min + (float(value) - domain_min) * scale


@dataclass
class PlotViewport:
    """
    Output rectangle of a phase plot.

    Defaults to the unit square. A y-down screen passes y_min > y_max so that
    larger values are drawn higher up.
    """

    x_min: float = 0.0
    x_max: float = 1.0
    y_min: float = 0.0
    y_max: float = 1.0

    @classmethod
    def screen(cls, width: float, height: float, margin: float = 50.0) -> "PlotViewport":
        """Pixel rectangle with a margin and the y axis pointing down."""
        return cls(margin, width - margin, height - margin, margin)


class PhaseSpaceMapper:
    """
    Maps (x, y) phase samples into a viewport using one range per axis.

    Ranges are read at call time, so a DynamicRange that grew since a sample
    was recorded rescales the whole polyline consistently.
    """

    def __init__(
        self,
        x_range: StaticRange,
        y_range: StaticRange,
        viewport: Optional[PlotViewport] = None,
    ) -> None:
        self.x_range = x_range
        self.y_range = y_range
        self.viewport = viewport or PlotViewport()

    def map_x(self, value: Number) -> Number:
        vp = self.viewport
        return map_range(value, self.x_range.lo, self.x_range.hi, vp.x_min, vp.x_max)

    def map_y(self, value: Number) -> Number:
        vp = self.viewport
        return map_range(value, self.y_range.lo, self.y_range.hi, vp.y_min, vp.y_max)

    def map_point(self, x: float, y: float) -> Tuple[float, float]:
        return float(self.map_x(x)), float(self.map_y(y))

    def map_samples(self, samples: np.ndarray) -> np.ndarray:
        """(N, 2) raw samples -> (N, 2) plot coordinates."""
        arr = np.asarray(samples, dtype=float).reshape(-1, 2)
        if arr.shape[0] == 0:
            return np.empty((0, 2))
        return np.column_stack([self.map_x(arr[:, 0]), self.map_y(arr[:, 1])])

    def axis_ticks(self, axis: str = "x", n: int = 5) -> List[Tuple[float, float]]:
        """
        ``n + 1`` evenly spaced (value, plot position) pairs for axis labels.

        Args:
            axis: "x" or "y".
            n: number of intervals.
        """
        if axis not in ("x", "y"):
            raise ValueError(f"axis must be 'x' or 'y', got {axis!r}")
        if n < 1:
            raise ValueError("n must be >= 1")
        rng = self.x_range if axis == "x" else self.y_range
        fn = self.map_x if axis == "x" else self.map_y
        values = np.linspace(rng.lo, rng.hi, n + 1)
        return [(float(v), float(fn(v))) for v in values]
