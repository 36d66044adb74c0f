"""
Maneuver Planner
================

Impulsive maneuvers issued by the operator between ticks.

All burns are instantaneous changes of the velocity vector; nothing is
sub-stepped. The only maneuver spanning several ticks is the orbital
transfer, whose circularization burn waits until the satellite reaches
the target radius.

Equations:
    Circular speed:   v_c = sqrt(mu / r)
    Escape speed:     v_e = sqrt(2 mu / r)
    Vis-viva:         v   = sqrt(mu (2/r - 1/a))
    Transfer ellipse: a   = (r1 + r2) / 2

Units are meters, seconds and degrees at the API.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

import numpy as np

from ..core.config import CentralBody
from ..core.errors import DegenerateStateError, ManeuverRejectedError
from ..core.state import SatelliteState
from ..core.time_manager import SimulationClock
from ..core.vectors import cross, unit, vec3, with_magnitude
from ..monitoring.altitude import AltitudeMonitor
from ..monitoring.trajectory import TrajectoryHistory
from ..telemetry.events import EventBus, EventType, TelemetryEvent

logger = logging.getLogger(__name__)

# Inclined orbits are authored with the satellite on this axis
REFERENCE_AXIS = (1.0, 0.0, 0.0)

# Apoapsis of an authored elliptical orbit, as a multiple of its periapsis
ELLIPTICAL_APOAPSIS_FACTOR = 1.5

# Escape maneuvers leave at this multiple of local escape speed
ESCAPE_SPEED_MARGIN = 1.05

TRANSFER_TOLERANCE_M = 1000.0


class OrbitKind(Enum):
    CIRCULAR = "circular"
    ELLIPTICAL = "elliptical"
    ESCAPE = "escape"


class ManeuverStatus(Enum):
    SUCCESS = "success"
    WARNING = "warning"    # applied, with an advisory event
    REJECTED = "rejected"  # nothing changed


@dataclass
class ManeuverResult:
    """Outcome of one maneuver command."""
    maneuver: str
    status: ManeuverStatus
    message: str = ""
    delta_v: float = 0.0
    events: List[TelemetryEvent] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True if the maneuver was applied."""
        return self.status is not ManeuverStatus.REJECTED

    def raise_for_status(self) -> 'ManeuverResult':
        """Raise ManeuverRejectedError if the command was refused."""
        if self.status is ManeuverStatus.REJECTED:
            raise ManeuverRejectedError(self.maneuver, self.message)
        return self


@dataclass(frozen=True)
class PendingManeuver:
    """Circularization burn waiting for the target radius."""
    target_radius_m: float


def _parse_kind(kind) -> Optional[OrbitKind]:
    if isinstance(kind, OrbitKind):
        return kind
    if isinstance(kind, str):
        try:
            return OrbitKind(kind)
        except ValueError:
            return None
    return None


class ManeuverPlanner:
    """
    Applies operator maneuvers to the satellite state.

    Owns the deferred-transfer state. Every command returns a
    ManeuverResult; refused commands leave the state untouched and emit
    a maneuver_rejected event.

    Typical usage:
        result = planner.perform_orbital_transfer(1500e3)
        ...  # ticks run; circularization fires near 1500 km
    """

    def __init__(self,
                 state: SatelliteState,
                 body: CentralBody,
                 events: EventBus,
                 trajectory: TrajectoryHistory,
                 monitor: AltitudeMonitor,
                 clock: SimulationClock,
                 up_axis=(0.0, 1.0, 0.0),
                 transfer_tolerance_m: float = TRANSFER_TOLERANCE_M):
        self.state = state
        self.body = body
        self.events = events
        self.trajectory = trajectory
        self.monitor = monitor
        self.clock = clock
        self.up_axis = vec3(up_axis)
        self.transfer_tolerance_m = transfer_tolerance_m
        self.pending: Optional[PendingManeuver] = None

    @property
    def transfer_pending(self) -> bool:
        return self.pending is not None

    def cancel_pending(self):
        """Drop any waiting circularization burn."""
        if self.pending is not None:
            logger.debug("Pending circularization at %.0f m discarded",
                         self.pending.target_radius_m)
        self.pending = None

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def apply_thrust(self, delta_v: float) -> ManeuverResult:
        """
        Impulsive burn along the current velocity.

        Args:
            delta_v: Signed speed change [m/s]; positive is prograde

        Returns:
            WARNING if the new speed reaches local escape speed
        """
        maneuver = 'apply_thrust'
        if not self.state.active:
            return self._rejected(maneuver, "satellite is inactive")
        try:
            return self._thrust(maneuver, delta_v)
        except DegenerateStateError as exc:
            return self._rejected(maneuver, str(exc))

    def perform_orbital_transfer(self, target_altitude: float) -> ManeuverResult:
        """
        First burn of a Hohmann-style transfer.

        Raises the opposite side of the orbit to the target radius and
        arms the circularization burn, which the tick loop fires once
        the radius is within tolerance of the target.

        Args:
            target_altitude: Altitude above the surface [m]
        """
        maneuver = 'perform_orbital_transfer'
        if not self.state.active:
            return self._rejected(maneuver, "satellite is inactive")

        mu = self.body.mu
        r1 = self.state.radius
        r2 = self.body.radius_m + target_altitude
        if r2 <= self.body.radius_m:
            return self._rejected(
                maneuver, f"target altitude {target_altitude:.0f} m is not above the surface")

        a_transfer = 0.5 * (r1 + r2)
        v_transfer = float(np.sqrt(mu * (2.0 / r1 - 1.0 / a_transfer)))

        try:
            result = self._thrust(maneuver, v_transfer - self.state.speed)
        except DegenerateStateError as exc:
            return self._rejected(maneuver, str(exc))

        self.pending = PendingManeuver(target_radius_m=r2)
        result.message = (f"Transfer to {target_altitude / 1000:.1f} km initiated; "
                          f"circularization pending")
        logger.info("Orbital transfer initiated to %.1f km (a=%.0f m, dv1=%.2f m/s)",
                    target_altitude / 1000, a_transfer, result.delta_v)
        return result

    def circularize(self) -> ManeuverResult:
        """Set speed to circular speed at the current radius, keeping direction."""
        maneuver = 'circularize'
        if not self.state.active:
            return self._rejected(maneuver, "satellite is inactive")

        radius = self.state.radius
        v_circ = self.body.circular_speed(radius)
        old_speed = self.state.speed
        try:
            new_velocity = with_magnitude(self.state.velocity, v_circ, "velocity")
        except DegenerateStateError as exc:
            return self._rejected(maneuver, str(exc))

        self.state.velocity = new_velocity
        self._redefine_orbit()
        altitude_km = (radius - self.body.radius_m) / 1000
        logger.info("Orbit circularized at %.1f km (dv=%.2f m/s)", altitude_km, v_circ - old_speed)
        return ManeuverResult(
            maneuver=maneuver,
            status=ManeuverStatus.SUCCESS,
            message=f"Orbit circularized at {altitude_km:.1f} km",
            delta_v=v_circ - old_speed,
        )

    def create_inclined_orbit(self,
                              inclination_deg: float,
                              altitude: float,
                              orbit_kind='circular') -> ManeuverResult:
        """
        Replace the orbit with a freshly authored one.

        The satellite is placed on the reference axis at the given altitude.
        Its velocity starts in the up-axis plane and is tilted toward the
        up axis by the inclination.

        Args:
            inclination_deg: Plane tilt [deg]; 0 equatorial, 90 polar
            altitude: Altitude above the surface [m]
            orbit_kind: 'circular' or 'elliptical' (apoapsis 1.5x radius)
        """
        maneuver = 'create_inclined_orbit'
        if not self.state.active:
            return self._rejected(maneuver, "satellite is inactive")

        kind = _parse_kind(orbit_kind)
        if kind not in (OrbitKind.CIRCULAR, OrbitKind.ELLIPTICAL):
            return self._rejected(maneuver, f"unsupported orbit kind {orbit_kind!r}")

        radius = self.body.radius_m + altitude
        if radius <= self.body.radius_m:
            return self._rejected(maneuver, f"altitude {altitude:.0f} m is not above the surface")

        mu = self.body.mu
        if kind is OrbitKind.CIRCULAR:
            speed = self.body.circular_speed(radius)
        else:
            apoapsis = ELLIPTICAL_APOAPSIS_FACTOR * radius
            a = 0.5 * (radius + apoapsis)
            speed = float(np.sqrt(mu * (2.0 / radius - 1.0 / a)))

        try:
            reference = unit(vec3(REFERENCE_AXIS), "reference axis")
            in_plane = unit(cross(reference, self.up_axis), "orbit plane axis")
            normal = unit(cross(in_plane, reference), "orbit normal axis")
        except DegenerateStateError as exc:
            return self._rejected(maneuver, str(exc))

        theta = np.radians(inclination_deg)
        direction = np.cos(theta) * in_plane + np.sin(theta) * normal

        self.state.position = reference * radius
        self.state.velocity = direction * speed
        self._redefine_orbit()

        logger.info("Created %s orbit: i=%.1f deg, altitude %.1f km, v=%.1f m/s",
                    kind.value, inclination_deg, altitude / 1000, speed)
        return ManeuverResult(
            maneuver=maneuver,
            status=ManeuverStatus.SUCCESS,
            message=f"{kind.value.capitalize()} orbit at {altitude / 1000:.1f} km, "
                    f"inclination {inclination_deg:.1f} deg",
        )

    def change_orbit_type(self, kind, value: float = None) -> ManeuverResult:
        """
        Instantly rewrite the orbit.

        Unlike perform_orbital_transfer this is not a physical maneuver:
        'circular' moves the satellite straight to the new radius.

        Args:
            kind: 'circular', 'elliptical' or 'escape'
            value: Target altitude for circular, apoapsis altitude for
                elliptical [m]; ignored for escape
        """
        maneuver = 'change_orbit_type'
        if not self.state.active:
            return self._rejected(maneuver, "satellite is inactive")

        orbit_kind = _parse_kind(kind)
        if orbit_kind is None:
            return self._rejected(maneuver, f"invalid orbit type {kind!r}")

        mu = self.body.mu
        r1 = self.state.radius
        old_speed = self.state.speed
        new_position = self.state.position

        if orbit_kind is not OrbitKind.ESCAPE:
            if value is None:
                return self._rejected(maneuver, f"{orbit_kind.value} orbit needs an altitude")
            target = self.body.radius_m + value
            if target <= self.body.radius_m:
                return self._rejected(maneuver, f"altitude {value:.0f} m is not above the surface")

        try:
            if orbit_kind is OrbitKind.CIRCULAR:
                new_position = with_magnitude(self.state.position, target, "position")
                new_velocity = with_magnitude(
                    self.state.velocity, self.body.circular_speed(target), "velocity")
            elif orbit_kind is OrbitKind.ELLIPTICAL:
                a = 0.5 * (r1 + target)
                speed = float(np.sqrt(mu * (2.0 / r1 - 1.0 / a)))
                new_velocity = with_magnitude(self.state.velocity, speed, "velocity")
            else:
                speed = ESCAPE_SPEED_MARGIN * self.body.escape_speed(r1)
                new_velocity = with_magnitude(self.state.velocity, speed, "velocity")
        except DegenerateStateError as exc:
            return self._rejected(maneuver, str(exc))

        self.state.position = new_position
        self.state.velocity = new_velocity
        self._redefine_orbit()

        delta_v = self.state.speed - old_speed
        logger.info("Orbit type changed to %s (v=%.1f m/s)", orbit_kind.value, self.state.speed)
        return ManeuverResult(
            maneuver=maneuver,
            status=ManeuverStatus.SUCCESS,
            message=f"Orbit changed to {orbit_kind.value}",
            delta_v=delta_v,
        )

    # ------------------------------------------------------------------
    # Tick hook
    # ------------------------------------------------------------------

    def check_pending(self) -> Optional[ManeuverResult]:
        """
        Fire the circularization burn once the target radius is reached.

        Called by the simulator after integration each tick.

        Returns:
            The circularization result when it fired, else None
        """
        if self.pending is None or not self.state.active:
            return None

        target = self.pending.target_radius_m
        if abs(self.state.radius - target) >= self.transfer_tolerance_m:
            return None

        result = self.circularize()
        self.pending = None
        result.events.append(self.events.emit(TelemetryEvent(
            event_type=EventType.TRANSFER_COMPLETE,
            time_s=self.clock.elapsed_seconds,
            message=f"Transfer complete at {(target - self.body.radius_m) / 1000:.1f} km",
            data={'target_radius_m': target, 'radius_m': self.state.radius},
        )))
        logger.info("Second burn complete at r=%.0f m", self.state.radius)
        return result

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _thrust(self, maneuver: str, delta_v: float) -> ManeuverResult:
        if delta_v != 0.0:
            direction = unit(self.state.velocity, "velocity")
            self.state.velocity = self.state.velocity + direction * delta_v
        logger.info("Thrust applied: dv = %.2f m/s", delta_v)

        events = []
        radius = self.state.radius
        escape_speed = self.body.escape_speed(radius)
        if self.state.speed >= escape_speed:
            logger.warning("Speed %.1f m/s at or above escape speed %.1f m/s",
                           self.state.speed, escape_speed)
            events.append(self.events.emit(TelemetryEvent(
                event_type=EventType.ESCAPE_VELOCITY_EXCEEDED,
                time_s=self.clock.elapsed_seconds,
                message="Satellite has reached escape velocity and may leave orbit",
                data={'speed_m_s': self.state.speed, 'escape_speed_m_s': escape_speed},
            )))

        return ManeuverResult(
            maneuver=maneuver,
            status=ManeuverStatus.WARNING if events else ManeuverStatus.SUCCESS,
            message=f"Thrust applied: dv = {delta_v:.2f} m/s",
            delta_v=delta_v,
            events=events,
        )

    def _redefine_orbit(self):
        """A new orbit starts: fresh trail, no pending burn, warning re-armed."""
        self.trajectory.reset()
        self.cancel_pending()
        self.monitor.reset_latch()

    def _rejected(self, maneuver: str, reason: str) -> ManeuverResult:
        logger.warning("%s rejected: %s", maneuver, reason)
        event = self.events.emit(TelemetryEvent(
            event_type=EventType.MANEUVER_REJECTED,
            time_s=self.clock.elapsed_seconds,
            message=reason,
            data={'maneuver': maneuver},
        ))
        return ManeuverResult(
            maneuver=maneuver,
            status=ManeuverStatus.REJECTED,
            message=reason,
            events=[event],
        )
