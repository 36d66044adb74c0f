"""
Main Simulator
==============

Tick orchestrator tying the force model, integrator, monitors and
maneuver planner together.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List

import numpy as np

from .config import CentralBody, SimulationConfig
from .state import SatelliteState
from .time_manager import SimulationClock
from .vectors import norm, vec3
from ..dynamics.classifier import OrbitClass, OrbitClassifier
from ..dynamics.forces import ForceModel
from ..dynamics.integrators import SymplecticEuler, circular_velocity
from ..guidance.maneuver_planner import ManeuverPlanner, ManeuverResult
from ..monitoring.altitude import AltitudeMonitor
from ..monitoring.trajectory import TrajectoryHistory
from ..telemetry.events import EventBus

logger = logging.getLogger(__name__)


@dataclass
class TelemetryFrame:
    """Per-tick snapshot for logging and rendering."""
    time_s: float = 0.0
    position_m: np.ndarray = field(default_factory=lambda: np.zeros(3))
    velocity_m_s: np.ndarray = field(default_factory=lambda: np.zeros(3))
    acceleration_m_s2: np.ndarray = field(default_factory=lambda: np.zeros(3))
    gravity_force_n: np.ndarray = field(default_factory=lambda: np.zeros(3))
    drag_force_n: np.ndarray = field(default_factory=lambda: np.zeros(3))
    altitude_m: float = 0.0
    speed_m_s: float = 0.0
    orbit_class: OrbitClass = OrbitClass.ELLIPTICAL
    active: bool = True
    transfer_pending: bool = False


class Simulator:
    """
    Single-satellite orbit simulation.

    One step(dt) per frame runs, in order:
    - Force evaluation (gravity and drag)
    - Semi-implicit Euler integration
    - Low-altitude warning and crash detection
    - Orbit classification
    - Trajectory trail append
    - Deferred circularization check

    Maneuver commands are plain method calls made between steps, from
    the same thread that drives step().
    """

    def __init__(self, config: SimulationConfig = None):
        """
        Initialize simulator.

        Args:
            config: Simulation configuration
        """
        self.config = config or SimulationConfig()
        self.body = self.config.central_body

        self.clock = SimulationClock(time_scale=self.config.time_scale)
        self.events = EventBus(max_history=self.config.event_history_size)
        self.trajectory = TrajectoryHistory(self.config.monitors.trajectory_capacity)

        self.force_model = ForceModel(
            body=self.body,
            drag=self.config.drag,
            enable_drag=self.config.enable_drag,
        )
        self.integrator = SymplecticEuler(self.force_model)
        self.classifier = OrbitClassifier(
            self.body, threshold=self.config.monitors.parabolic_energy_threshold)
        self.monitor = AltitudeMonitor(
            body=self.body,
            events=self.events,
            low_altitude_threshold_m=self.config.monitors.low_altitude_threshold_m,
            enable_warning=self.config.enable_altitude_warning,
            enable_crash=self.config.enable_crash_detection,
        )

        self.satellite = self._spawn_satellite()
        self.planner = ManeuverPlanner(
            state=self.satellite,
            body=self.body,
            events=self.events,
            trajectory=self.trajectory,
            monitor=self.monitor,
            clock=self.clock,
            up_axis=self.config.up_axis,
            transfer_tolerance_m=self.config.monitors.transfer_tolerance_m,
        )

        self.orbit_class = self.classifier.classify(
            self.satellite.position, self.satellite.velocity)
        self.step_count = 0

        # Data logging
        self.history: List[TelemetryFrame] = []

        # Callbacks
        self.step_callbacks: List[Callable] = []

        logger.info("Simulator created around %s, spawn radius %.0f m, v=%.1f m/s",
                    self.body.name, self.satellite.radius, self.satellite.speed)

    def _spawn_satellite(self) -> SatelliteState:
        """Satellite at the configured spawn point on a circular orbit."""
        position = vec3(self.config.spawn_position)
        velocity = circular_velocity(position, self.body, self.config.up_axis)
        return SatelliteState(
            position=position,
            velocity=velocity,
            mass=self.config.satellite.mass_kg,
        )

    def reset(self):
        """Recreate the satellite and clear all run state."""
        self.clock.reset()
        self.events.reset()
        self.trajectory.reset()
        self.integrator.reset()
        self.monitor.reset_latch()
        self.satellite = self._spawn_satellite()
        self.planner.state = self.satellite
        self.planner.cancel_pending()
        self.orbit_class = self.classifier.classify(
            self.satellite.position, self.satellite.velocity)
        self.history.clear()
        self.step_count = 0

    def set_central_body(self, body: CentralBody):
        """
        Switch the central body.

        Mass, G and radius change together; the satellite keeps its state.
        """
        self.body = body
        self.config.central_body = body
        self.force_model.body = body
        self.classifier.body = body
        self.monitor.body = body
        self.planner.body = body

        pending = self.planner.pending
        if pending is not None and pending.target_radius_m <= body.radius_m:
            self.planner.cancel_pending()
        self._refresh_class()
        logger.info("Central body switched to %s", body.name)

    def step(self, dt: float = None) -> TelemetryFrame:
        """
        Advance simulation by one frame.

        Args:
            dt: Frame time step [s] before the speed multiplier;
                config.time_step_seconds if omitted

        Returns:
            Telemetry frame after the step
        """
        sim_dt = self.clock.scaled(self.config.time_step_seconds if dt is None else dt)
        state = self.satellite

        if state.active:
            self.integrator.step(state, sim_dt)
            self.clock.advance(sim_dt)
            self.monitor.check(state, self.trajectory, self.clock.elapsed_seconds)

            if not state.active:
                self.planner.cancel_pending()

            self.orbit_class = self.classifier.classify(state.position, state.velocity)

            if state.active:
                if self.config.enable_trajectory:
                    self.trajectory.append(state.position)
                if self.planner.check_pending() is not None:
                    self._refresh_class()
        else:
            # Crashed: time runs on, the satellite stays put
            self.clock.advance(sim_dt)

        self.step_count += 1
        frame = self._make_frame()
        logger.debug("t=%.1f s r=%.0f m v=%.1f m/s %s",
                     frame.time_s, state.radius, frame.speed_m_s, self.orbit_class.value)

        if self.config.record_history:
            if len(self.history) == 0 or \
               (frame.time_s - self.history[-1].time_s) >= (1.0 / self.config.output_rate_hz):
                self.history.append(frame)

        for callback in self.step_callbacks:
            callback(self, frame)

        return frame

    def run(self,
            duration_seconds: float = None,
            dt: float = None,
            progress_callback: Callable = None) -> List[TelemetryFrame]:
        """
        Step repeatedly until the duration has elapsed.

        Args:
            duration_seconds: Simulated duration (default: config duration)
            dt: Frame time step (default: config time step)
            progress_callback: Called with progress (0-1)

        Returns:
            List of recorded frames
        """
        duration = duration_seconds or self.config.duration_seconds
        end_time = self.clock.elapsed_seconds + duration

        while self.clock.elapsed_seconds < end_time:
            self.step(dt)

            if progress_callback and self.step_count % 100 == 0:
                progress_callback(1.0 - (end_time - self.clock.elapsed_seconds) / duration)

        logger.info("Run complete: %d steps, %d recorded frames",
                    self.step_count, len(self.history))
        return self.history

    # ------------------------------------------------------------------
    # Maneuver commands
    # ------------------------------------------------------------------

    def apply_thrust(self, delta_v: float) -> ManeuverResult:
        result = self.planner.apply_thrust(delta_v)
        self._refresh_class()
        return result

    def perform_orbital_transfer(self, target_altitude: float) -> ManeuverResult:
        result = self.planner.perform_orbital_transfer(target_altitude)
        self._refresh_class()
        return result

    def circularize(self) -> ManeuverResult:
        result = self.planner.circularize()
        self._refresh_class()
        return result

    def create_inclined_orbit(self,
                              inclination_deg: float,
                              altitude: float,
                              orbit_kind='circular') -> ManeuverResult:
        result = self.planner.create_inclined_orbit(inclination_deg, altitude, orbit_kind)
        self._refresh_class()
        return result

    def change_orbit_type(self, kind, value: float = None) -> ManeuverResult:
        result = self.planner.change_orbit_type(kind, value)
        self._refresh_class()
        return result

    def _refresh_class(self):
        self.orbit_class = self.classifier.classify(
            self.satellite.position, self.satellite.velocity)

    # ------------------------------------------------------------------
    # Telemetry
    # ------------------------------------------------------------------

    @property
    def altitude_m(self) -> float:
        return self.satellite.radius - self.body.radius_m

    @property
    def transfer_pending(self) -> bool:
        return self.planner.transfer_pending

    def add_step_callback(self, callback: Callable):
        """Add callback called as callback(simulator, frame) after each step."""
        self.step_callbacks.append(callback)

    def _make_frame(self) -> TelemetryFrame:
        state = self.satellite
        forces = self.integrator.last_forces
        return TelemetryFrame(
            time_s=self.clock.elapsed_seconds,
            position_m=np.array(state.position),
            velocity_m_s=np.array(state.velocity),
            acceleration_m_s2=np.array(self.integrator.last_acceleration),
            gravity_force_n=np.array(forces.gravity),
            drag_force_n=np.array(forces.drag),
            altitude_m=self.altitude_m,
            speed_m_s=state.speed,
            orbit_class=self.orbit_class,
            active=state.active,
            transfer_pending=self.planner.transfer_pending,
        )

    def get_telemetry(self) -> Dict:
        """
        Get current telemetry data.

        Returns:
            Dictionary of telemetry values
        """
        state = self.satellite
        forces = self.integrator.last_forces
        pending = self.planner.pending
        elements = self.classifier.orbital_elements(
            state.position, state.velocity, self.config.up_axis) if state.active else {}
        period = elements.get('period_s', 0.0)

        return {
            'time_s': self.clock.elapsed_seconds,
            'central_body': self.body.name,
            'active': state.active,
            'orbit_class': self.orbit_class.value,
            'orbit_number': self.clock.orbit_number(period) if period > 0 else None,
            'altitude_m': self.altitude_m,
            'speed_m_s': state.speed,
            'escape_speed_m_s': self.body.escape_speed(state.radius),
            'mass_kg': state.mass,
            'position_m': state.position.tolist(),
            'velocity_m_s': state.velocity.tolist(),
            'acceleration_m_s2': self.integrator.last_acceleration.tolist(),
            'gravity_force_n': forces.gravity.tolist(),
            'drag_force_n': forces.drag.tolist(),
            'drag_force_magnitude_n': norm(forces.drag),
            'transfer_target_radius_m': pending.target_radius_m if pending else None,
            'low_altitude_warning': self.monitor.warning_latched,
            'trajectory_samples': len(self.trajectory),
            'elements': elements,
        }

    def export_trajectory(self, filename: str = None) -> np.ndarray:
        """
        Export recorded frames.

        Args:
            filename: Optional CSV filename

        Returns:
            Array with one row per recorded frame
        """
        if not self.history:
            return np.array([])

        data = np.zeros((len(self.history), 11))

        for i, frame in enumerate(self.history):
            data[i, 0] = frame.time_s
            data[i, 1:4] = frame.position_m
            data[i, 4:7] = frame.velocity_m_s
            data[i, 7] = frame.altitude_m
            data[i, 8] = frame.speed_m_s
            data[i, 9] = 1.0 if frame.active else 0.0
            data[i, 10] = 1.0 if frame.transfer_pending else 0.0

        if filename:
            header = "time_s,x_m,y_m,z_m,vx_m_s,vy_m_s,vz_m_s," + \
                     "altitude_m,speed_m_s,active,transfer_pending"
            np.savetxt(filename, data, delimiter=',', header=header)

        return data
