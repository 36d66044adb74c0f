"""
Simulation Clock
================

Tracks simulated time for the tick loop. The frame rate is owned by the
caller; the clock only accumulates the simulated seconds each frame
represents, scaled by the user speed multiplier.
"""

from datetime import datetime, timedelta


class SimulationClock:
    """
    Manages simulation time.

    Provides:
    - Elapsed simulated time and step counting
    - Speed multiplier applied to every frame dt
    - Optional wall-calendar epoch for display
    """

    def __init__(self,
                 time_scale: float = 1.0,
                 start_time: datetime = None):
        """
        Initialize the clock.

        Args:
            time_scale: Speed multiplier applied to each frame dt
            start_time: Epoch mapped to elapsed time zero
        """
        self.start_time = start_time or datetime(2026, 1, 1, 0, 0, 0)
        self.elapsed_seconds = 0.0
        self.step_count = 0
        self.time_scale = time_scale

    def reset(self):
        """Reset simulation time to start."""
        self.elapsed_seconds = 0.0
        self.step_count = 0

    def scaled(self, dt: float) -> float:
        """
        Simulated seconds represented by a frame of length dt.

        Raises:
            ValueError: If dt is not positive
        """
        if dt <= 0:
            raise ValueError(f"Time step must be positive, got {dt}")
        return dt * self.time_scale

    def advance(self, sim_dt: float) -> float:
        """
        Advance by already-scaled simulated seconds.

        Returns:
            Current elapsed time in seconds
        """
        self.elapsed_seconds += sim_dt
        self.step_count += 1
        return self.elapsed_seconds

    def set_time_scale(self, time_scale: float):
        """Change the speed multiplier."""
        if time_scale <= 0:
            raise ValueError("Time scale must be positive")
        self.time_scale = time_scale

    @property
    def current_utc(self) -> datetime:
        """Epoch plus elapsed simulated time."""
        return self.start_time + timedelta(seconds=self.elapsed_seconds)

    def orbit_number(self, period_seconds: float) -> int:
        """
        Calculate current orbit number.

        Args:
            period_seconds: Orbital period in seconds

        Returns:
            Current orbit number (starting from 1)
        """
        return int(self.elapsed_seconds / period_seconds) + 1

    def __repr__(self) -> str:
        return (f"SimulationClock(elapsed={self.elapsed_seconds:.3f}s, "
                f"steps={self.step_count}, x{self.time_scale:g})")
