"""
Satellite State
===============

Kinematic state of the simulated satellite.
"""

from dataclasses import dataclass, field

import numpy as np

from .errors import DegenerateStateError
from .vectors import EPSILON, ZERO, norm, vec3


@dataclass
class SatelliteState:
    """
    Satellite state in the body-centred frame.

    Position and velocity are stored as read-only arrays; assigning a
    new value always stores a fresh copy.
    """
    position: np.ndarray
    velocity: np.ndarray = field(default_factory=lambda: ZERO)
    mass: float = 500.0
    active: bool = True

    def __setattr__(self, name, value):
        if name in ('position', 'velocity'):
            value = vec3(value)
        super().__setattr__(name, value)

    def __post_init__(self):
        if self.mass <= 0:
            raise ValueError("Satellite mass must be positive")
        if self.active and self.radius < EPSILON:
            raise DegenerateStateError("position", self.radius)

    @property
    def radius(self) -> float:
        """Distance from the body centre [m]."""
        return norm(self.position)

    @property
    def speed(self) -> float:
        """Speed magnitude [m/s]."""
        return norm(self.velocity)

    def to_array(self) -> np.ndarray:
        """Return [x, y, z, vx, vy, vz]."""
        return np.concatenate([self.position, self.velocity])

    def copy(self) -> 'SatelliteState':
        return SatelliteState(
            position=self.position,
            velocity=self.velocity,
            mass=self.mass,
            active=self.active,
        )

    def __repr__(self) -> str:
        status = "active" if self.active else "crashed"
        return (f"SatelliteState(r={self.radius / 1000:.1f}km, "
                f"v={self.speed:.1f}m/s, {status})")
