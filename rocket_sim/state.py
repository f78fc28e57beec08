"""
Rocket Flight Simulation - Vehicle State

This module defines the single mutable entity of the simulation. It is owned
by the driver and only ever advanced by the integrator.
"""

from dataclasses import dataclass, field

import numpy as np

from . import vectors as vec
from .planet import PlanetConfig, EARTH
from .vehicle import RocketConfig


@dataclass
class RocketState:
    """
    Kinematic and mass state of one vehicle.

    Attributes:
        position: Planet-centred position (m) [3]
        velocity: Velocity (m/s) [3]
        acceleration: Acceleration applied during the last step (m/s^2) [3]
        altitude: |position| - planet radius (m)
        speed: |velocity| (m/s); after ground contact, the touchdown speed
        mass_current: Dry mass + fuel_remaining (kg)
        fuel_remaining: Fuel left (kg)
        in_orbit: Last orbit verdict (never set once grounded)
        landed: Touched down below the landing speed limit (terminal)
        crashed: Touched down at or above the landing speed limit (terminal)
        time: Elapsed simulation time (s)
    """

    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    acceleration: np.ndarray = field(default_factory=lambda: np.zeros(3))

    altitude: float = 0.0
    speed: float = 0.0

    mass_current: float = 0.0
    fuel_remaining: float = 0.0

    in_orbit: bool = False
    landed: bool = False
    crashed: bool = False

    time: float = 0.0

    def __post_init__(self):
        """Ensure vectors are float64 arrays owned by this state."""
        for attr in ['position', 'velocity', 'acceleration']:
            setattr(self, attr, vec.as_vector(getattr(self, attr)))

    def copy(self) -> 'RocketState':
        """Create a deep copy of the state."""
        return RocketState(
            position=self.position.copy(),
            velocity=self.velocity.copy(),
            acceleration=self.acceleration.copy(),
            altitude=self.altitude,
            speed=self.speed,
            mass_current=self.mass_current,
            fuel_remaining=self.fuel_remaining,
            in_orbit=self.in_orbit,
            landed=self.landed,
            crashed=self.crashed,
            time=self.time,
        )

    @property
    def is_terminal(self) -> bool:
        """Landed or crashed: further steps are no-ops."""
        return self.landed or self.crashed

    @property
    def status(self) -> str:
        if self.crashed:
            return "crashed"
        if self.landed:
            return "landed"
        if self.in_orbit:
            return "in_orbit"
        return "flying"

    def to_dict(self) -> dict:
        """Plain-Python view of the state, keyed like the telemetry record."""
        return {
            'position': _vector_dict(self.position),
            'velocity': _vector_dict(self.velocity),
            'acceleration': _vector_dict(self.acceleration),
            'altitude': float(self.altitude),
            'speed': float(self.speed),
            'mass_current': float(self.mass_current),
            'fuel_remaining': float(self.fuel_remaining),
            'in_orbit': bool(self.in_orbit),
            'landed': bool(self.landed),
            'crashed': bool(self.crashed),
            'time': float(self.time),
        }

    def __str__(self) -> str:
        """Human-readable state summary."""
        return (
            f"RocketState(t={self.time:.2f}s, "
            f"alt={self.altitude/1000:.2f}km, "
            f"v={self.speed:.1f}m/s, "
            f"fuel={self.fuel_remaining:.0f}kg, "
            f"{self.status})"
        )


def _vector_dict(v: np.ndarray) -> dict:
    return {'x': float(v[0]), 'y': float(v[1]), 'z': float(v[2])}


def create_initial_state(config: RocketConfig, initial_position,
                         planet: PlanetConfig = EARTH) -> RocketState:
    """
    Create the launch state of a vehicle at rest.

    Args:
        config: Vehicle configuration (fuel load taken from mass_fuel,
            bounded to [0, mass_fuel_max])
        initial_position: Planet-centred launch position (m)
        planet: Body the vehicle starts on

    Returns:
        RocketState at t=0 with zero velocity and acceleration.
    """
    position = vec.as_vector(initial_position)
    fuel = min(max(config.mass_fuel, 0.0), config.mass_fuel_max)
    return RocketState(
        position=position,
        velocity=np.zeros(3),
        acceleration=np.zeros(3),
        altitude=float(np.linalg.norm(position)) - planet.radius,
        speed=0.0,
        mass_current=config.mass_empty + fuel,
        fuel_remaining=fuel,
        in_orbit=False,
        landed=False,
        crashed=False,
        time=0.0,
    )


# Short name used by drivers.
init = create_initial_state
