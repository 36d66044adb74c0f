import pytest

from orbitsim.core.config import EARTH, SimulationConfig
from orbitsim.core.simulator import Simulator


@pytest.fixture
def mu():
    return EARTH.mu


@pytest.fixture
def sim():
    """Earth, 600 km spawn, drag off so orbits are exact."""
    return Simulator(SimulationConfig(enable_drag=False))


@pytest.fixture
def drag_sim():
    return Simulator(SimulationConfig())
