"""
Trajectory History
==================

Bounded buffer of recent positions used to draw the orbit trail.
"""

from collections import deque
from typing import List

import numpy as np

from ..core.vectors import vec3

DEFAULT_CAPACITY = 2000


class TrajectoryHistory:
    """
    FIFO of position samples.

    Once full, each append evicts the oldest sample.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError("Capacity must be at least 1")
        self.capacity = capacity
        self._samples: deque = deque(maxlen=capacity)

    def append(self, position: np.ndarray):
        self._samples.append(vec3(position))

    def reset(self):
        """Drop all samples; the next orbit starts a fresh trail."""
        self._samples.clear()

    @property
    def samples(self) -> List[np.ndarray]:
        """Samples, oldest first."""
        return list(self._samples)

    def to_array(self) -> np.ndarray:
        """Samples as an (N, 3) array."""
        if not self._samples:
            return np.zeros((0, 3))
        return np.vstack(self._samples)

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self):
        return iter(list(self._samples))
