import numpy as np
import pytest

from orbitsim.core.config import DragParameters, SatelliteParameters, SimulationConfig
from orbitsim.core.simulator import Simulator
from orbitsim.guidance.maneuver_planner import ManeuverStatus
from orbitsim.monitoring.trajectory import TrajectoryHistory
from orbitsim.telemetry.events import EventType


def test_trajectory_is_bounded_fifo():
    history = TrajectoryHistory(capacity=2000)
    for i in range(2005):
        history.append([float(i), 0.0, 0.0])

    samples = history.samples
    assert len(history) == 2000
    assert samples[0][0] == 5.0
    assert samples[-1][0] == 2004.0
    assert history.to_array().shape == (2000, 3)


def test_trajectory_reset():
    history = TrajectoryHistory(capacity=10)
    history.append([1.0, 2.0, 3.0])
    history.reset()
    assert len(history) == 0
    assert history.to_array().shape == (0, 3)


def test_simulator_trail_never_exceeds_capacity():
    config = SimulationConfig(enable_drag=False)
    config.monitors.trajectory_capacity = 50
    sim = Simulator(config)

    for _ in range(120):
        sim.step(10.0)

    assert len(sim.trajectory) == 50
    assert np.allclose(sim.trajectory.samples[-1], sim.satellite.position)


def test_low_altitude_warning_is_latched_per_orbit():
    sim = Simulator(SimulationConfig(
        enable_drag=False,
        satellite=SatelliteParameters(spawn_altitude_m=150e3),
    ))

    for _ in range(20):
        sim.step(10.0)
    assert sim.events.counts[EventType.LOW_ALTITUDE_WARNING] == 1
    assert sim.monitor.warning_latched

    sim.circularize()
    assert not sim.monitor.warning_latched
    sim.step(10.0)
    assert sim.events.counts[EventType.LOW_ALTITUDE_WARNING] == 2


def test_no_warning_at_high_altitude(sim):
    for _ in range(20):
        sim.step(10.0)
    assert sim.events.counts[EventType.LOW_ALTITUDE_WARNING] == 0


def _run_until_crash(sim, dt=1.0, max_steps=5000):
    for _ in range(max_steps):
        sim.step(dt)
        if not sim.satellite.active:
            return True
    return False


def test_crash_after_retrograde_burn():
    sim = Simulator(SimulationConfig(
        enable_drag=False,
        satellite=SatelliteParameters(spawn_altitude_m=100e3),
    ))
    sim.perform_orbital_transfer(1500e3)
    sim.apply_thrust(-6000.0)
    assert sim.transfer_pending

    assert _run_until_crash(sim)

    assert not sim.satellite.active
    assert np.array_equal(sim.satellite.velocity, np.zeros(3))
    assert len(sim.trajectory) == 0
    assert not sim.transfer_pending
    assert sim.events.counts[EventType.CRASH] == 1

    position = sim.satellite.position.copy()
    elapsed = sim.clock.elapsed_seconds
    for _ in range(10):
        sim.step(1.0)
    assert np.array_equal(sim.satellite.position, position)
    assert sim.clock.elapsed_seconds == pytest.approx(elapsed + 10.0)
    assert sim.events.counts[EventType.CRASH] == 1


def test_crash_from_strong_drag():
    sim = Simulator(SimulationConfig(
        drag=DragParameters(air_density_kg_m3=1e-3),
        satellite=SatelliteParameters(spawn_altitude_m=100e3),
    ))

    assert _run_until_crash(sim)
    assert sim.satellite.radius <= sim.body.radius_m
    assert sim.get_telemetry()['active'] is False


def test_maneuvers_rejected_after_crash():
    sim = Simulator(SimulationConfig(
        enable_drag=False,
        satellite=SatelliteParameters(spawn_altitude_m=100e3),
    ))
    sim.apply_thrust(-6000.0)
    assert _run_until_crash(sim)

    for result in (
        sim.apply_thrust(100.0),
        sim.circularize(),
        sim.perform_orbital_transfer(500e3),
        sim.create_inclined_orbit(0.0, 600e3),
        sim.change_orbit_type('escape'),
    ):
        assert result.status is ManeuverStatus.REJECTED
    assert not sim.satellite.active
    assert np.array_equal(sim.satellite.velocity, np.zeros(3))


def test_crash_detection_can_be_disabled():
    sim = Simulator(SimulationConfig(
        enable_drag=False,
        enable_crash_detection=False,
        satellite=SatelliteParameters(spawn_altitude_m=100e3),
    ))
    sim.apply_thrust(-6000.0)

    for _ in range(300):
        sim.step(1.0)

    assert sim.satellite.active
    assert sim.events.counts[EventType.CRASH] == 0
