"""
Simulation Scenarios
====================

Scripted maneuver runs.
"""

from .maneuver_sequence import ManeuverScenario, ManeuverScenarioConfig, ScheduledCommand
from .presets import PRESET_COMMANDS, create_preset_scenario

__all__ = [
    'ManeuverScenario',
    'ManeuverScenarioConfig',
    'ScheduledCommand',
    'PRESET_COMMANDS',
    'create_preset_scenario',
]
