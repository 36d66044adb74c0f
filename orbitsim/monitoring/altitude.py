"""
Altitude Monitor
================

Post-integration low-altitude warning and crash detection.
"""

import logging
from typing import List

from ..core.config import CentralBody
from ..core.state import SatelliteState
from ..core.vectors import ZERO
from ..telemetry.events import EventBus, EventType, TelemetryEvent
from .trajectory import TrajectoryHistory

logger = logging.getLogger(__name__)

LOW_ALTITUDE_THRESHOLD_M = 200000.0


class AltitudeMonitor:
    """
    Checks the satellite against the central body surface once per tick.

    The low-altitude warning is latched per orbit: it fires once and stays
    quiet until an orbit-redefining maneuver calls reset_latch(). A crash is
    terminal for the satellite.
    """

    def __init__(self,
                 body: CentralBody,
                 events: EventBus,
                 low_altitude_threshold_m: float = LOW_ALTITUDE_THRESHOLD_M,
                 enable_warning: bool = True,
                 enable_crash: bool = True):
        self.body = body
        self.events = events
        self.low_altitude_threshold_m = low_altitude_threshold_m
        self.enable_warning = enable_warning
        self.enable_crash = enable_crash
        self.warning_latched = False

    def reset_latch(self):
        """Re-arm the low-altitude warning for a new orbit."""
        self.warning_latched = False

    def check(self,
              state: SatelliteState,
              trajectory: TrajectoryHistory,
              time_s: float) -> List[TelemetryEvent]:
        """
        Run the altitude checks.

        Args:
            state: Satellite state, modified in place on crash
            trajectory: Trail cleared on crash
            time_s: Elapsed simulated time for event stamps

        Returns:
            Events emitted during this check
        """
        if not state.active:
            return []

        emitted = []
        radius = state.radius
        altitude = radius - self.body.radius_m

        if (self.enable_warning and not self.warning_latched
                and altitude < self.low_altitude_threshold_m):
            self.warning_latched = True
            logger.warning("Low altitude: %.1f km above %s", altitude / 1000, self.body.name)
            emitted.append(self.events.emit(TelemetryEvent(
                event_type=EventType.LOW_ALTITUDE_WARNING,
                time_s=time_s,
                message=f"Altitude {altitude / 1000:.1f} km below "
                        f"{self.low_altitude_threshold_m / 1000:.0f} km",
                data={'altitude_m': altitude},
            )))

        if self.enable_crash and radius <= self.body.radius_m:
            impact_speed = state.speed
            state.active = False
            state.velocity = ZERO
            trajectory.reset()
            logger.warning("Satellite crashed into %s at %.1f m/s (t=%.1f s)",
                           self.body.name, impact_speed, time_s)
            emitted.append(self.events.emit(TelemetryEvent(
                event_type=EventType.CRASH,
                time_s=time_s,
                message=f"Satellite crashed into {self.body.name}",
                data={
                    'position_m': state.position.tolist(),
                    'impact_speed_m_s': impact_speed,
                },
            )))

        return emitted
