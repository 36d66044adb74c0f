"""
Simulation Configuration
========================

Central body, satellite and engine parameters for orbitsim.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple

import numpy as np

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CentralBody:
    """
    Point-mass spherical body the satellite orbits.

    Frozen: switching planets replaces the whole object so mass and G
    always change together.
    """
    name: str = "Earth"
    mass_kg: float = 5.972e24
    gravitational_constant: float = 6.6743e-11
    radius_m: float = 6371000.0

    def __post_init__(self):
        if self.mass_kg <= 0:
            raise ValueError("Central body mass must be positive")
        if self.gravitational_constant <= 0:
            raise ValueError("Gravitational constant must be positive")
        if self.radius_m <= 0:
            raise ValueError("Central body radius must be positive")

    @property
    def mu(self) -> float:
        """Gravitational parameter G*M [m³/s²]."""
        return self.gravitational_constant * self.mass_kg

    def circular_speed(self, radius_m: float) -> float:
        """Circular orbit speed at radius [m/s]."""
        return float(np.sqrt(self.mu / radius_m))

    def escape_speed(self, radius_m: float) -> float:
        """Escape speed at radius [m/s]."""
        return float(np.sqrt(2.0 * self.mu / radius_m))


EARTH = CentralBody()
MOON = CentralBody(name="Moon", mass_kg=7.342e22, radius_m=1737400.0)
MARS = CentralBody(name="Mars", mass_kg=6.4171e23, radius_m=3389500.0)

CENTRAL_BODIES: Dict[str, CentralBody] = {
    'earth': EARTH,
    'moon': MOON,
    'mars': MARS,
}


@dataclass
class DragParameters:
    """Constant-density drag model."""
    air_density_kg_m3: float = 1e-12
    drag_coefficient: float = 0.47
    area_m2: float = float(np.pi * 2.0 ** 2)  # 2 m radius disc

    def __post_init__(self):
        if self.air_density_kg_m3 < 0:
            raise ValueError("Air density cannot be negative")
        if self.drag_coefficient < 0 or self.area_m2 < 0:
            raise ValueError("Drag coefficient and area cannot be negative")


@dataclass
class SatelliteParameters:
    """Satellite mass and spawn point."""
    mass_kg: float = 500.0
    spawn_altitude_m: float = 600000.0  # 600 km LEO
    # Overrides spawn_altitude_m when set; body-centred [m]
    spawn_position_m: Optional[Tuple[float, float, float]] = None

    def __post_init__(self):
        if self.mass_kg <= 0:
            raise ValueError("Satellite mass must be positive")


@dataclass
class MonitorParameters:
    """Thresholds for post-integration checks and bookkeeping."""
    low_altitude_threshold_m: float = 200000.0
    transfer_tolerance_m: float = 1000.0
    trajectory_capacity: int = 2000
    parabolic_energy_threshold: float = 1e3  # J/kg

    def __post_init__(self):
        if self.trajectory_capacity < 1:
            raise ValueError("Trajectory capacity must be at least 1")
        if self.transfer_tolerance_m <= 0:
            raise ValueError("Transfer tolerance must be positive")


@dataclass
class SimulationConfig:
    """Complete simulation configuration."""
    central_body: CentralBody = field(default_factory=lambda: EARTH)
    satellite: SatelliteParameters = field(default_factory=SatelliteParameters)
    drag: DragParameters = field(default_factory=DragParameters)
    monitors: MonitorParameters = field(default_factory=MonitorParameters)

    # Simulation timing
    time_step_seconds: float = 10.0  # simulated seconds per frame
    duration_seconds: float = 5800.0  # roughly one LEO orbit
    time_scale: float = 1.0  # user speed multiplier applied to every dt

    # Authored orbits lie in the plane normal to this axis
    up_axis: Tuple[float, float, float] = (0.0, 1.0, 0.0)

    # Feature flags
    enable_drag: bool = True
    enable_crash_detection: bool = True
    enable_altitude_warning: bool = True
    enable_trajectory: bool = True

    # Output options
    record_history: bool = False
    output_rate_hz: float = 0.1
    event_history_size: int = 1000

    def __post_init__(self):
        """Validate configuration."""
        if self.time_step_seconds <= 0:
            raise ValueError("Time step must be positive")
        if self.duration_seconds <= 0:
            raise ValueError("Duration must be positive")
        if self.time_scale <= 0:
            raise ValueError("Time scale must be positive")
        if self.output_rate_hz <= 0:
            raise ValueError("Output rate must be positive")
        if np.linalg.norm(self.up_axis) == 0:
            raise ValueError("Up axis must be non-zero")

    @property
    def spawn_position(self) -> np.ndarray:
        """Initial body-centred position [m]."""
        if self.satellite.spawn_position_m is not None:
            return np.array(self.satellite.spawn_position_m, dtype=float)
        # Reference spawn sits on +Z, as the front end places it
        radius = self.central_body.radius_m + self.satellite.spawn_altitude_m
        return np.array([0.0, 0.0, radius])


def create_default_config() -> SimulationConfig:
    """Earth, 600 km spawn, 10 s frames."""
    return SimulationConfig()


def create_config_for_body(name: str, spawn_altitude_m: float = None) -> SimulationConfig:
    """
    Create a configuration around one of the preset bodies.

    Args:
        name: Key of CENTRAL_BODIES ('earth', 'moon', 'mars')
        spawn_altitude_m: Spawn altitude, default 600 km
    """
    try:
        body = CENTRAL_BODIES[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown central body '{name}'; expected one of {sorted(CENTRAL_BODIES)}"
        ) from None
    satellite = SatelliteParameters()
    if spawn_altitude_m is not None:
        satellite.spawn_altitude_m = spawn_altitude_m
    return SimulationConfig(central_body=body, satellite=satellite)


def setup_logging(level: int = logging.INFO, log_file: Optional[Path] = None):
    """
    Configure logging for simulation runs.

    Args:
        level: Logging level
        log_file: Optional log file path
    """
    handlers: list = [logging.StreamHandler()]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
    )
    logger.debug("Logging configured at level %s", logging.getLevelName(level))
