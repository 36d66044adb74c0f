"""
Force Model
===========

Gravity and drag acting on the satellite.
"""

from dataclasses import dataclass

import numpy as np

from ..core.config import CentralBody, DragParameters
from ..core.vectors import EPSILON, ZERO, norm, unit, vec3


@dataclass(frozen=True)
class ForceBreakdown:
    """Forces evaluated for one state [N]."""
    gravity: np.ndarray
    drag: np.ndarray

    @property
    def net(self) -> np.ndarray:
        return vec3(self.gravity + self.drag)


class ForceModel:
    """
    Force model for a single satellite.

    Features:
    - Point-mass gravity of a spherical central body
    - Optional drag with constant atmospheric density
    """

    def __init__(self,
                 body: CentralBody,
                 drag: DragParameters = None,
                 enable_drag: bool = True):
        """
        Initialize force model.

        Args:
            body: Central body
            drag: Drag parameters (density, Cd, area)
            enable_drag: Enable atmospheric drag
        """
        self.body = body
        self.drag_params = drag or DragParameters()
        self.enable_drag = enable_drag

    def gravity(self, position: np.ndarray, mass: float) -> np.ndarray:
        """
        Newtonian gravity, directed at the body centre.

        Args:
            position: Body-centred position [m]
            mass: Satellite mass [kg]

        Returns:
            Force [N]

        Raises:
            DegenerateStateError: At zero radius
        """
        toward_centre = unit(-np.asarray(position), "position")
        r_sq = float(np.dot(position, position))
        magnitude = self.body.gravitational_constant * self.body.mass_kg * mass / r_sq
        return vec3(toward_centre * magnitude)

    def drag(self, velocity: np.ndarray) -> np.ndarray:
        """
        Quadratic drag opposite the velocity.

        Returns the zero vector when at rest or when drag is disabled.
        """
        if not self.enable_drag:
            return ZERO

        speed = norm(velocity)
        if speed < EPSILON:
            return ZERO

        p = self.drag_params
        magnitude = 0.5 * p.air_density_kg_m3 * speed**2 * p.drag_coefficient * p.area_m2
        return vec3(-np.asarray(velocity) / speed * magnitude)

    def evaluate(self,
                 position: np.ndarray,
                 velocity: np.ndarray,
                 mass: float) -> ForceBreakdown:
        """Gravity and drag for one state."""
        return ForceBreakdown(
            gravity=self.gravity(position, mass),
            drag=self.drag(velocity),
        )

    def net_force(self,
                  position: np.ndarray,
                  velocity: np.ndarray,
                  mass: float) -> np.ndarray:
        """Sum of gravity and drag [N]."""
        return self.evaluate(position, velocity, mass).net
