import numpy as np
import pytest

from orbitsim.core.config import (
    CENTRAL_BODIES,
    EARTH,
    MARS,
    CentralBody,
    DragParameters,
    MonitorParameters,
    SatelliteParameters,
    SimulationConfig,
    create_config_for_body,
    create_default_config,
)
from orbitsim.core.time_manager import SimulationClock


def test_default_config_matches_reference_scenario():
    config = create_default_config()

    assert config.central_body is EARTH
    assert EARTH.mu == pytest.approx(6.6743e-11 * 5.972e24)
    assert config.satellite.mass_kg == 500.0
    assert config.drag.area_m2 == pytest.approx(np.pi * 4.0)
    assert config.monitors.trajectory_capacity == 2000
    assert np.allclose(config.spawn_position, [0.0, 0.0, 6971000.0])


def test_spawn_position_override():
    config = SimulationConfig(satellite=SatelliteParameters(spawn_position_m=(7.0e6, 0.0, 0.0)))
    assert np.allclose(config.spawn_position, [7.0e6, 0.0, 0.0])


@pytest.mark.parametrize("kwargs", [
    {'time_step_seconds': 0.0},
    {'duration_seconds': -1.0},
    {'time_scale': 0.0},
    {'output_rate_hz': 0.0},
    {'up_axis': (0.0, 0.0, 0.0)},
])
def test_invalid_simulation_config(kwargs):
    with pytest.raises(ValueError):
        SimulationConfig(**kwargs)


@pytest.mark.parametrize("factory", [
    lambda: CentralBody(mass_kg=0.0),
    lambda: CentralBody(radius_m=-1.0),
    lambda: CentralBody(gravitational_constant=0.0),
    lambda: SatelliteParameters(mass_kg=0.0),
    lambda: DragParameters(air_density_kg_m3=-1.0),
    lambda: MonitorParameters(trajectory_capacity=0),
])
def test_invalid_parameters(factory):
    with pytest.raises(ValueError):
        factory()


def test_central_body_speeds():
    r = 7.0e6
    assert EARTH.escape_speed(r) == pytest.approx(np.sqrt(2.0) * EARTH.circular_speed(r))


def test_config_for_body():
    config = create_config_for_body('Mars', spawn_altitude_m=300e3)

    assert config.central_body is MARS
    assert np.allclose(config.spawn_position, [0.0, 0.0, MARS.radius_m + 300e3])
    assert set(CENTRAL_BODIES) == {'earth', 'moon', 'mars'}


def test_config_for_unknown_body():
    with pytest.raises(ValueError):
        create_config_for_body('pluto')


def test_clock_scaling_and_orbit_number():
    clock = SimulationClock(time_scale=3.0)
    clock.advance(clock.scaled(2.0))

    assert clock.elapsed_seconds == pytest.approx(6.0)
    assert clock.orbit_number(5.0) == 2
    with pytest.raises(ValueError):
        clock.set_time_scale(0.0)
    with pytest.raises(ValueError):
        clock.scaled(-1.0)
