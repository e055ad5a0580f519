"""
Toroidal height field for the energy landscape.

All wraparound arithmetic lives here: ``wrap_coordinate`` for continuous
positions, ``wrap_index`` for grid lookups and ``toroidal_delta`` for
shortest separations across the seam.
"""

import logging
import math
from typing import List, Optional, Sequence, Tuple

import numpy as np

logger = logging.getLogger(__name__)

# ((center_x, center_y), radius) of a circular hill or pit
Spot = Tuple[Tuple[int, int], float]


def wrap_coordinate(value: float, size: float) -> float:
    """Continuous coordinate wrapped into [0, size)."""
    wrapped = value % size
    # -1e-17 % 10 == 10.0 in floating point
    return 0.0 if wrapped >= size else wrapped


def wrap_index(value: float, size: int) -> int:
    """Grid index of a coordinate: floor, then wrap into [0, size)."""
    return int(math.floor(value)) % size


def toroidal_delta(a: float, b: float, size: float) -> float:
    """Shortest absolute separation between two coordinates on a ring."""
    d = abs(a - b) % size
    return min(d, size - d)


def toroidal_distance(p: np.ndarray, q: np.ndarray, shape: Tuple[float, float]) -> float:
    dx = toroidal_delta(float(p[0]), float(q[0]), shape[0])
    dy = toroidal_delta(float(p[1]), float(q[1]), shape[1])
    return math.hypot(dx, dy)


class HeightField:
    """
    Discrete height map indexed as ``heights[x, y]``, wrapping on both axes.
    """

    def __init__(self, heights: np.ndarray) -> None:
        h = np.asarray(heights, dtype=float)
        if h.ndim != 2 or h.shape[0] < 3 or h.shape[1] < 3:
            raise ValueError(f"heights must be a 2D array of at least 3x3, got shape {h.shape}")
        self.heights = h

    @property
    def width(self) -> int:
        return self.heights.shape[0]

    @property
    def height(self) -> int:
        return self.heights.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self.width, self.height

    def height_at(self, x: float, y: float) -> float:
        return float(self.heights[wrap_index(x, self.width), wrap_index(y, self.height)])

    def gradient(self, x: float, y: float) -> np.ndarray:
        """Central-difference gradient at the cell containing (x, y)."""
        x0 = wrap_index(x, self.width)
        y0 = wrap_index(y, self.height)
        h = self.heights
        dx = (h[(x0 + 1) % self.width, y0] - h[(x0 - 1) % self.width, y0]) / 2.0
        dy = (h[x0, (y0 + 1) % self.height] - h[x0, (y0 - 1) % self.height]) / 2.0
        return np.array([dx, dy])

    def wrap(self, position: np.ndarray) -> np.ndarray:
        return np.array([
            wrap_coordinate(float(position[0]), self.width),
            wrap_coordinate(float(position[1]), self.height),
        ])

    def contains(self, x: float, y: float) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def brightness(self) -> np.ndarray:
        """Grayscale image (uint8, same indexing) with floor(h * 255) clipped to 0..255."""
        return np.clip(np.floor(self.heights * 255), 0, 255).astype(np.uint8)


def _spot_mask(
    width: int,
    height: int,
    center: Tuple[int, int],
    radius: float,
) -> Tuple[np.ndarray, np.ndarray]:
    """(inside mask, normalized distance) of a circular spot on the torus."""
    xs = np.arange(width)[:, np.newaxis]
    ys = np.arange(height)[np.newaxis, :]
    dx = np.abs(xs - center[0])
    dx = np.minimum(dx, width - dx)
    dy = np.abs(ys - center[1])
    dy = np.minimum(dy, height - dy)
    dist = np.sqrt(dx * dx + dy * dy)
    return dist <= radius, dist / radius


def paint_spots(
    width: int,
    height: int,
    highs: Sequence[Spot],
    lows: Sequence[Spot],
    high_value: float = 5.0,
    low_value: float = -5.0,
    base: float = 0.5,
    exponent: float = 2.0,
) -> np.ndarray:
    """
    Height map of circular hills and pits on a flat base.

    Inside a hill: h = high - (d/r)^e * (high - base).
    Inside a pit:  h = low + (d/r)^e * (base - low).
    The first hill containing a cell wins; a pit containing it overrides.
    """
    heights = np.full((int(width), int(height)), float(base))
    # Reverse order so the first matching spot is written last
    for center, radius in reversed(list(highs)):
        inside, nd = _spot_mask(width, height, center, radius)
        heights[inside] = high_value - nd[inside] ** exponent * (high_value - base)
    for center, radius in reversed(list(lows)):
        inside, nd = _spot_mask(width, height, center, radius)
        heights[inside] = low_value + nd[inside] ** exponent * (base - low_value)
    return heights


def generate_landscape(
    width: int,
    height: int,
    rng: Optional[np.random.Generator] = None,
    n_high: int = 3,
    n_low: int = 2,
    high_value: float = 5.0,
    low_value: float = -5.0,
    base: float = 0.5,
    radius_range: Sequence[float] = (20.0, 40.0),
    exponent: float = 2.0,
) -> HeightField:
    """Random terrain: ``n_high`` hills and ``n_low`` pits drawn uniformly, see ``paint_spots``."""
    rng = rng if rng is not None else np.random.default_rng()
    width, height = int(width), int(height)

    def spots(n: int) -> List[Spot]:
        return [
            ((int(rng.integers(width)), int(rng.integers(height))), float(rng.uniform(*radius_range)))
            for _ in range(n)
        ]

    highs = spots(n_high)
    lows = spots(n_low)
    heights = paint_spots(width, height, highs, lows, high_value, low_value, base, exponent)
    logger.info("Generated %dx%d landscape (%d hills, %d pits)", width, height, n_high, n_low)
    return HeightField(heights)
