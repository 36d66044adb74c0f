import numpy as np
import pytest

from orbitsim.core.errors import DegenerateStateError
from orbitsim.core.state import SatelliteState
from orbitsim.core.vectors import cross, norm, unit, vec3, with_magnitude


def test_vec3_is_read_only_copy():
    src = np.array([1.0, 2.0, 3.0])
    v = vec3(src)
    src[0] = 99.0

    assert v[0] == 1.0
    with pytest.raises(ValueError):
        v[0] = 5.0


def test_vec3_rejects_wrong_shape():
    with pytest.raises(ValueError):
        vec3([1.0, 2.0])


def test_unit_and_with_magnitude():
    v = vec3([3.0, 0.0, 4.0])
    assert np.allclose(unit(v), [0.6, 0.0, 0.8])
    assert norm(with_magnitude(v, 10.0)) == pytest.approx(10.0)
    assert np.allclose(cross(vec3([1, 0, 0]), vec3([0, 1, 0])), [0, 0, 1])


def test_unit_of_zero_vector_raises():
    with pytest.raises(DegenerateStateError) as exc_info:
        unit(vec3([0.0, 0.0, 0.0]), "velocity")
    assert exc_info.value.quantity == "velocity"


def test_state_assignment_freezes_copy():
    state = SatelliteState(position=[7e6, 0, 0], velocity=[0, 7500, 0])
    new_velocity = np.array([0.0, 7600.0, 0.0])
    state.velocity = new_velocity
    new_velocity[1] = 0.0

    assert state.velocity[1] == 7600.0
    assert not state.velocity.flags.writeable
    assert state.radius == pytest.approx(7e6)
    assert state.speed == pytest.approx(7600.0)


def test_state_rejects_zero_position_and_bad_mass():
    with pytest.raises(DegenerateStateError):
        SatelliteState(position=[0, 0, 0])
    with pytest.raises(ValueError):
        SatelliteState(position=[7e6, 0, 0], mass=0.0)


def test_state_copy_is_independent():
    state = SatelliteState(position=[7e6, 0, 0], velocity=[0, 7500, 0])
    clone = state.copy()
    clone.position = [8e6, 0, 0]

    assert state.position[0] == 7e6
    assert clone.to_array().shape == (6,)
