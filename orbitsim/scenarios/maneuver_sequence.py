"""
Maneuver Sequence Scenario
==========================

Runs the simulator with maneuver commands issued at scheduled times,
the way an operator would press keys while watching the orbit.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import numpy as np

from ..core.config import SimulationConfig
from ..core.simulator import Simulator, TelemetryFrame
from ..guidance.maneuver_planner import ManeuverResult
from ..telemetry.events import EventType

logger = logging.getLogger(__name__)

MANEUVERS = (
    'apply_thrust',
    'perform_orbital_transfer',
    'circularize',
    'create_inclined_orbit',
    'change_orbit_type',
)


@dataclass
class ScheduledCommand:
    """Maneuver issued once elapsed time reaches time_s."""
    time_s: float
    maneuver: str
    args: Tuple = ()

    def __post_init__(self):
        if self.maneuver not in MANEUVERS:
            raise ValueError(f"Unknown maneuver '{self.maneuver}'; expected one of {MANEUVERS}")
        self.args = tuple(self.args)


@dataclass
class ManeuverScenarioConfig:
    """Configuration for a scripted run."""
    name: str = "custom"
    duration_seconds: float = 6000.0
    time_step_seconds: float = 10.0
    commands: List[ScheduledCommand] = field(default_factory=list)
    sim_config: Optional[SimulationConfig] = None


class ManeuverScenario:
    """
    Scripted maneuver scenario.

    Each command fires between ticks as soon as the clock has reached its
    scheduled time, in schedule order.
    """

    def __init__(self, config: ManeuverScenarioConfig = None):
        """
        Initialize scenario.

        Args:
            config: Scenario configuration
        """
        self.config = config or ManeuverScenarioConfig()

        self.sim_config = self.config.sim_config or SimulationConfig(
            duration_seconds=self.config.duration_seconds,
            time_step_seconds=self.config.time_step_seconds,
            record_history=True,
        )

        self.simulator: Optional[Simulator] = None
        self.results: Dict = {}
        self.history: List[TelemetryFrame] = []
        self.command_results: List[Tuple[float, ManeuverResult]] = []

    def setup(self):
        """Create a fresh simulator."""
        self.simulator = Simulator(self.sim_config)
        self.command_results.clear()

    def run(self, progress_callback=None) -> Dict:
        """
        Run the scripted scenario.

        Returns:
            Results dictionary
        """
        if self.simulator is None:
            self.setup()

        sim = self.simulator
        queue = sorted(self.config.commands, key=lambda c: c.time_s)
        duration = self.config.duration_seconds
        dt = self.config.time_step_seconds

        logger.info("Running scenario '%s': %d commands over %.0f s",
                    self.config.name, len(queue), duration)

        while sim.clock.elapsed_seconds < duration:
            while queue and queue[0].time_s <= sim.clock.elapsed_seconds:
                command = queue.pop(0)
                result = getattr(sim, command.maneuver)(*command.args)
                self.command_results.append((sim.clock.elapsed_seconds, result))

            sim.step(dt)

            if progress_callback and sim.step_count % 100 == 0:
                progress_callback(sim.clock.elapsed_seconds / duration)

        self.history = list(sim.history)
        self.results = self._analyze_results()
        return self.results

    def _analyze_results(self) -> Dict:
        """Analyze scenario results."""
        sim = self.simulator
        frames = self.history
        altitudes = [f.altitude_m for f in frames] or [sim.altitude_m]
        speeds = [f.speed_m_s for f in frames] or [sim.satellite.speed]

        return {
            'duration_s': sim.clock.elapsed_seconds,
            'num_steps': sim.step_count,
            'num_samples': len(frames),
            'altitude_min_m': float(min(altitudes)),
            'altitude_max_m': float(max(altitudes)),
            'altitude_mean_m': float(np.mean(altitudes)),
            'speed_max_m_s': float(max(speeds)),
            'final_orbit_class': sim.orbit_class.value,
            'crashed': not sim.satellite.active,
            'commands_issued': len(self.command_results),
            'commands_rejected': sum(1 for _, r in self.command_results if not r.ok),
            'transfers_completed': sim.events.counts[EventType.TRANSFER_COMPLETE],
            'low_altitude_warnings': sim.events.counts[EventType.LOW_ALTITUDE_WARNING],
        }

    def get_summary(self) -> str:
        """Get human-readable summary."""
        if not self.results:
            return "Scenario not yet run."

        r = self.results
        return f"""
Scenario '{self.config.name}' Summary
{'=' * (len(self.config.name) + 19)}
Duration: {r['duration_s']:.1f} s ({r['duration_s']/60:.1f} min), {r['num_steps']} steps

Orbit:
  Altitude: {r['altitude_min_m']/1000:.1f} - {r['altitude_max_m']/1000:.1f} km
  Mean altitude: {r['altitude_mean_m']/1000:.1f} km
  Max speed: {r['speed_max_m_s']:.1f} m/s
  Final class: {r['final_orbit_class']}
  Crashed: {r['crashed']}

Maneuvers:
  Issued: {r['commands_issued']} ({r['commands_rejected']} rejected)
  Transfers completed: {r['transfers_completed']}
  Low-altitude warnings: {r['low_altitude_warnings']}
"""
