"""
Simulation Core Module
======================

Core simulation components.
"""

from .simulator import Simulator, TelemetryFrame
from .state import SatelliteState
from .time_manager import SimulationClock
from .config import CentralBody, SimulationConfig
from .errors import DegenerateStateError, ManeuverRejectedError, OrbitSimError

__all__ = [
    'Simulator',
    'TelemetryFrame',
    'SatelliteState',
    'SimulationClock',
    'CentralBody',
    'SimulationConfig',
    'DegenerateStateError',
    'ManeuverRejectedError',
    'OrbitSimError',
]
