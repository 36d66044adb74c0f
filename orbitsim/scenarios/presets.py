"""
Preset Scenarios
================

Command scripts matching the operator shortcuts of the visual front end.
"""

from typing import Dict, List

from .maneuver_sequence import ManeuverScenario, ManeuverScenarioConfig, ScheduledCommand

PRESET_COMMANDS: Dict[str, List[ScheduledCommand]] = {
    # Inclination presets re-author the orbit at t=0
    'equatorial': [ScheduledCommand(0.0, 'create_inclined_orbit', (0.0, 600e3, 'circular'))],
    'polar': [ScheduledCommand(0.0, 'create_inclined_orbit', (90.0, 700e3, 'circular'))],
    'inclined': [ScheduledCommand(0.0, 'create_inclined_orbit', (45.0, 800e3, 'elliptical'))],
    'transfer': [ScheduledCommand(0.0, 'perform_orbital_transfer', (1500e3,))],
    'boost': [ScheduledCommand(0.0, 'apply_thrust', (100.0,))],
    'escape': [ScheduledCommand(0.0, 'change_orbit_type', ('escape',))],
}


def create_preset_scenario(name: str,
                           duration_seconds: float = 6000.0,
                           time_step_seconds: float = 10.0) -> ManeuverScenario:
    """
    Build a scenario from a preset command script.

    Args:
        name: Key of PRESET_COMMANDS
        duration_seconds: Simulated duration
        time_step_seconds: Frame time step
    """
    if name not in PRESET_COMMANDS:
        raise ValueError(f"Unknown preset '{name}'; expected one of {sorted(PRESET_COMMANDS)}")
    return ManeuverScenario(ManeuverScenarioConfig(
        name=name,
        duration_seconds=duration_seconds,
        time_step_seconds=time_step_seconds,
        commands=list(PRESET_COMMANDS[name]),
    ))
