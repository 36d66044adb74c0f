"""
Numerical Integrators
=====================

Integration method for the tick loop and initial-velocity synthesis.

The semi-implicit Euler step is first order. It keeps the orbit bounded
but drifts in energy at large dt; it suits interactive visualization,
not long-horizon prediction.
"""

import numpy as np

from ..core.config import CentralBody
from ..core.state import SatelliteState
from ..core.vectors import ZERO, cross, norm, unit, vec3
from .forces import ForceBreakdown, ForceModel


class SymplecticEuler:
    """
    Symplectic Euler integrator driven by a force model.

    Keeps the last evaluated forces and acceleration for telemetry.
    """

    def __init__(self, force_model: ForceModel):
        """
        Initialize integrator.

        Args:
            force_model: Source of gravity and drag
        """
        self.force_model = force_model
        self.last_forces = ForceBreakdown(gravity=ZERO, drag=ZERO)
        self.last_acceleration = ZERO

    def step(self, state: SatelliteState, dt: float) -> SatelliteState:
        """
        Perform one semi-implicit Euler step in place.

        Args:
            state: Satellite state, updated in place
            dt: Time step [s]

        Returns:
            The same state object
        """
        forces = self.force_model.evaluate(state.position, state.velocity, state.mass)
        acceleration = vec3(forces.net / state.mass)

        # Semi-implicit: update velocity first, then position
        state.velocity = state.velocity + acceleration * dt
        state.position = state.position + state.velocity * dt

        self.last_forces = forces
        self.last_acceleration = acceleration
        return state

    def reset(self):
        """Forget the cached forces."""
        self.last_forces = ForceBreakdown(gravity=ZERO, drag=ZERO)
        self.last_acceleration = ZERO


def circular_velocity(position: np.ndarray,
                      body: CentralBody,
                      up_axis=(0.0, 1.0, 0.0)) -> np.ndarray:
    """
    Tangential velocity for a circular orbit through position.

    The direction is normalize(position x up_axis), so the orbit lies in
    the plane normal to up_axis when position is perpendicular to it.

    Raises:
        DegenerateStateError: If position is zero or parallel to up_axis
    """
    radius = norm(position)
    tangent = unit(cross(position, vec3(up_axis)), "tangent direction")
    return vec3(tangent * body.circular_speed(radius))
