"""
Orbit Classification
====================

Energy-based orbit class and classical element diagnostics.
"""

from enum import Enum
from typing import Dict

import numpy as np

from ..core.config import CentralBody
from ..core.vectors import EPSILON, norm, unit, vec3

# |energy| below this counts as parabolic [J/kg]
PARABOLIC_ENERGY_THRESHOLD = 1e3


class OrbitClass(Enum):
    ELLIPTICAL = "Elliptical"
    PARABOLIC = "Parabolic"
    HYPERBOLIC = "Hyperbolic"


def specific_energy(position: np.ndarray, velocity: np.ndarray, body: CentralBody) -> float:
    """Specific orbital energy v²/2 - mu/r [J/kg]."""
    r = norm(position)
    v = norm(velocity)
    return 0.5 * v * v - body.mu / r


class OrbitClassifier:
    """
    Classifies the current orbit from its specific energy.

    This is a coarse tolerance check rather than a geometric one: any
    orbit within the threshold of zero energy reports as parabolic.
    """

    def __init__(self, body: CentralBody, threshold: float = PARABOLIC_ENERGY_THRESHOLD):
        self.body = body
        self.threshold = threshold

    def classify(self, position: np.ndarray, velocity: np.ndarray) -> OrbitClass:
        energy = specific_energy(position, velocity, self.body)
        if abs(energy) < self.threshold:
            return OrbitClass.PARABOLIC
        if energy > self.threshold:
            return OrbitClass.HYPERBOLIC
        return OrbitClass.ELLIPTICAL

    def orbital_elements(self,
                         position: np.ndarray,
                         velocity: np.ndarray,
                         up_axis=(0.0, 1.0, 0.0)) -> Dict[str, float]:
        """
        Calculate orbital elements from the state vector.

        Inclination is measured against -up_axis, the angular momentum
        direction of orbits authored with a zero inclination.

        Args:
            position: Body-centred position [m]
            velocity: Velocity [m/s]
            up_axis: Reference axis of the authored orbit plane

        Returns:
            Dictionary with orbital elements
        """
        mu = self.body.mu
        r = np.asarray(position)
        v = np.asarray(velocity)
        r_mag = norm(r)
        v_mag = norm(v)

        # Specific angular momentum
        h = np.cross(r, v)
        h_mag = norm(h)

        # Eccentricity vector
        e_vec = ((v_mag**2 - mu / r_mag) * r - np.dot(r, v) * v) / mu
        e = norm(e_vec)

        energy = 0.5 * v_mag**2 - mu / r_mag
        if abs(energy) > 1e-12:
            a = -mu / (2 * energy)
        else:
            a = float('inf')

        if h_mag > EPSILON:
            pole = -unit(vec3(up_axis), "up axis")
            i = np.degrees(np.arccos(np.clip(np.dot(h, pole) / h_mag, -1.0, 1.0)))
        else:
            i = 0.0  # radial trajectory, no plane

        bound = e < 1.0 and np.isfinite(a) and a > 0
        periapsis = a * (1 - e) if bound else h_mag**2 / (mu * (1 + e))
        apoapsis = a * (1 + e) if bound else float('inf')
        radius = self.body.radius_m

        return {
            'specific_energy': float(energy),
            'semi_major_axis_m': float(a),
            'eccentricity': float(e),
            'inclination_deg': float(i),
            'periapsis_radius_m': float(periapsis),
            'apoapsis_radius_m': float(apoapsis),
            'periapsis_altitude_m': float(periapsis - radius),
            'apoapsis_altitude_m': float(apoapsis - radius),
            'period_s': float(2 * np.pi * np.sqrt(a**3 / mu)) if bound else 0.0,
        }
