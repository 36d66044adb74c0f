import numpy as np
import pytest

from orbitsim.core.config import EARTH, DragParameters
from orbitsim.core.errors import DegenerateStateError
from orbitsim.dynamics.forces import ForceModel
from orbitsim.dynamics.integrators import SymplecticEuler, circular_velocity
from orbitsim.core.state import SatelliteState


def test_gravity_points_at_centre_with_inverse_square_magnitude():
    model = ForceModel(EARTH)
    position = np.array([0.0, 0.0, 6971000.0])

    force = model.gravity(position, 500.0)

    expected = EARTH.gravitational_constant * EARTH.mass_kg * 500.0 / 6971000.0**2
    assert np.linalg.norm(force) == pytest.approx(expected)
    assert np.allclose(force / np.linalg.norm(force), [0.0, 0.0, -1.0])


def test_gravity_at_zero_radius_fails_explicitly():
    model = ForceModel(EARTH)
    with pytest.raises(DegenerateStateError):
        model.gravity(np.zeros(3), 500.0)


def test_drag_opposes_velocity():
    model = ForceModel(EARTH)
    velocity = np.array([7000.0, 0.0, 0.0])

    drag = model.drag(velocity)

    p = DragParameters()
    expected = 0.5 * p.air_density_kg_m3 * 7000.0**2 * p.drag_coefficient * p.area_m2
    assert np.linalg.norm(drag) == pytest.approx(expected)
    assert drag[0] < 0
    assert drag[1] == 0.0 and drag[2] == 0.0


def test_drag_at_rest_is_zero_not_nan():
    model = ForceModel(EARTH)
    drag = model.drag(np.zeros(3))

    assert np.array_equal(drag, np.zeros(3))
    assert not np.any(np.isnan(drag))


def test_drag_disabled():
    model = ForceModel(EARTH, enable_drag=False)
    assert np.array_equal(model.drag(np.array([7000.0, 0, 0])), np.zeros(3))


def test_net_force_is_sum():
    model = ForceModel(EARTH, drag=DragParameters(air_density_kg_m3=1e-6))
    position = np.array([7e6, 0.0, 0.0])
    velocity = np.array([0.0, 7500.0, 0.0])

    breakdown = model.evaluate(position, velocity, 500.0)

    assert np.allclose(breakdown.net, breakdown.gravity + breakdown.drag)
    assert np.allclose(model.net_force(position, velocity, 500.0), breakdown.net)


def test_symplectic_euler_updates_velocity_before_position():
    model = ForceModel(EARTH, enable_drag=False)
    integrator = SymplecticEuler(model)
    r = 7e6
    state = SatelliteState(position=[r, 0, 0], velocity=[0, 7500, 0], mass=500.0)

    integrator.step(state, 1.0)

    g = EARTH.mu / r**2
    assert np.allclose(state.velocity, [-g, 7500.0, 0.0])
    assert np.allclose(state.position, [r - g, 7500.0, 0.0])
    assert np.allclose(integrator.last_acceleration, [-g, 0.0, 0.0])
    assert np.allclose(integrator.last_forces.gravity, [-g * 500.0, 0.0, 0.0])
    assert np.array_equal(integrator.last_forces.drag, np.zeros(3))


def test_circular_velocity_is_tangent_and_circular():
    position = np.array([0.0, 0.0, 6971000.0])

    velocity = circular_velocity(position, EARTH, up_axis=(0.0, 1.0, 0.0))

    assert np.linalg.norm(velocity) == pytest.approx(np.sqrt(EARTH.mu / 6971000.0))
    assert np.dot(velocity, position) == pytest.approx(0.0, abs=1e-6)
    assert np.dot(velocity, [0.0, 1.0, 0.0]) == pytest.approx(0.0, abs=1e-6)


def test_circular_velocity_parallel_to_up_axis_fails():
    with pytest.raises(DegenerateStateError):
        circular_velocity(np.array([0.0, 7e6, 0.0]), EARTH, up_axis=(0.0, 1.0, 0.0))
