"""Bounded in-memory trajectory history (FIFO with eviction of the oldest sample)."""

from typing import Any, Iterator, List, Optional

import numpy as np


class TrajectoryBuffer:
    """
    Fixed-capacity FIFO of 2D samples.

    ``push`` appends; when the length exceeds ``capacity`` the oldest sample
    (index 0) is evicted. Insertion order is never changed.
    """

    def __init__(self, capacity: int) -> None:
        """
        Args:
            capacity: maximum number of samples kept (positive int).
        """
        if int(capacity) != capacity or capacity <= 0:
            raise ValueError(f"capacity must be a positive integer, got {capacity!r}")
        self._capacity = int(capacity)
        self._data: List[Any] = []

    @property
    def capacity(self) -> int:
        return self._capacity

    def push(self, sample: Any) -> None:
        """Append a sample, evicting the oldest one if over capacity."""
        self._data.append(sample)
        if len(self._data) > self._capacity:
            del self._data[0]

    def clear(self) -> None:
        """Drop every sample."""
        self._data.clear()

    def latest(self) -> Optional[Any]:
        """Most recent sample, or None when empty."""
        return self._data[-1] if self._data else None

    def to_numpy(self) -> np.ndarray:
        """Samples as an (N, 2) float array; (0, 2) when empty."""
        if not self._data:
            return np.empty((0, 2))
        return np.array([np.asarray(s, dtype=float) for s in self._data]).reshape(len(self._data), -1)

    def __getitem__(self, index: int) -> Any:
        return self._data[index]

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._data))

    def __len__(self) -> int:
        return len(self._data)
