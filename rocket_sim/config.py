"""
Rocket Flight Simulation - Run Configuration

This module provides a SimulationConfig dataclass for dependency injection,
allowing different run parameters to be passed to the flight driver without
modifying global constants. Vehicle and planet descriptions live in
vehicle.py and planet.py.
"""

from dataclasses import dataclass

from . import constants as C


GUIDANCE_MODES = ('gravity_turn', 'fast_pitchover', 'vertical')


@dataclass(frozen=True)
class SimulationConfig:
    """
    Immutable configuration for a flight run.

    Using frozen=True ensures configs cannot be accidentally modified.
    Create new configs via dataclass replace() if needed.

    Attributes:
        dt: Integration step (s)
        max_time: Simulated time limit (s)
        target_orbit_altitude: Target for the gravity-turn shaper (m)
        guidance: 'gravity_turn', 'fast_pitchover' or 'vertical'
        orbit_model: Orbit verdict used by the integrator
            ('predictor' or 'speed_ratio')
        stop_on_orbit: End the run at the first in-orbit verdict
        cutoff_on_empty: Zero every throttle once the tanks are dry
        log_interval: Simulated seconds between telemetry log rows (0 = every step)
        verbose: Print a progress table while running
    """

    dt: float = C.DT
    max_time: float = C.MAX_TIME
    target_orbit_altitude: float = C.TARGET_ORBIT_ALTITUDE
    guidance: str = 'vertical'
    orbit_model: str = 'predictor'
    stop_on_orbit: bool = True
    cutoff_on_empty: bool = True
    log_interval: float = C.LOG_INTERVAL
    verbose: bool = True

    def __post_init__(self):
        if self.dt <= 0:
            raise ValueError(f"Time step dt must be positive, got {self.dt}")
        if self.max_time <= 0:
            raise ValueError(f"max_time must be positive, got {self.max_time}")
        if self.guidance not in GUIDANCE_MODES:
            raise ValueError(f"Unknown guidance mode: {self.guidance}")
        if self.log_interval < 0:
            raise ValueError(f"log_interval must be non-negative, got {self.log_interval}")


def create_default_config() -> SimulationConfig:
    """Create a SimulationConfig with default values from constants."""
    return SimulationConfig()


def create_test_config(dt: float = 0.1, max_time: float = 10.0,
                       **overrides) -> SimulationConfig:
    """Create a fast config suitable for testing.

    Any keyword arg accepted by SimulationConfig can be passed as an override.
    """
    defaults = dict(dt=dt, max_time=max_time, verbose=False)
    defaults.update(overrides)
    return SimulationConfig(**defaults)
