"""
orbitsim
========

Interactive single-satellite orbit simulation.

Components:
- Point-mass gravity and constant-density drag
- Semi-implicit Euler integration
- Energy-based orbit classification
- Impulsive maneuvers (thrust, Hohmann-style transfer, circularization,
  inclined orbits, orbit-type rewrites, escape)
- Low-altitude warning and crash detection
- Bounded trajectory trail and event bus for front ends
"""

__version__ = "1.0.0"

from orbitsim.core.config import CentralBody, SimulationConfig
from orbitsim.core.simulator import Simulator, TelemetryFrame
from orbitsim.core.state import SatelliteState
from orbitsim.dynamics.classifier import OrbitClass
from orbitsim.guidance.maneuver_planner import ManeuverResult, ManeuverStatus
from orbitsim.telemetry.events import EventType, TelemetryEvent

__all__ = [
    'Simulator',
    'SimulationConfig',
    'CentralBody',
    'SatelliteState',
    'TelemetryFrame',
    'OrbitClass',
    'ManeuverResult',
    'ManeuverStatus',
    'EventType',
    'TelemetryEvent',
]
