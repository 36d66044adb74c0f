"""
Guidance Module
===============

Operator maneuver planning.
"""

from .maneuver_planner import (
    ManeuverPlanner,
    ManeuverResult,
    ManeuverStatus,
    OrbitKind,
    PendingManeuver,
)

__all__ = [
    'ManeuverPlanner',
    'ManeuverResult',
    'ManeuverStatus',
    'OrbitKind',
    'PendingManeuver',
]
