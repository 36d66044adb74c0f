"""
Monitoring Module
=================

Post-integration checks and the trajectory trail.
"""

from .altitude import AltitudeMonitor
from .trajectory import TrajectoryHistory

__all__ = [
    'AltitudeMonitor',
    'TrajectoryHistory',
]
