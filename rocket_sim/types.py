"""
Rocket Flight Simulation - Type Definitions

This module provides TypedDict definitions for structured return types,
improving type safety and IDE support.
"""

from typing import TypedDict

import numpy as np
from numpy.typing import NDArray


class ForceBreakdown(TypedDict):
    """Return type for force computation details (planet-centred frame)."""
    gravity: NDArray[np.float64]  # Gravity force vector (N)
    drag: NDArray[np.float64]  # Drag force vector (N)
    thrust: NDArray[np.float64]  # Thrust force vector (N)
    total: NDArray[np.float64]  # Total force vector (N)
    gravity_magnitude: float  # Gravity force magnitude (N)
    drag_magnitude: float  # Drag force magnitude (N)
    thrust_magnitude: float  # Thrust force magnitude (N)
    air_density: float  # Local air density (kg/m^3)


class VectorRecord(TypedDict):
    x: float
    y: float
    z: float


class TelemetrySnapshot(TypedDict):
    """Flat telemetry record: vehicle state plus orbit prediction."""
    position: VectorRecord
    velocity: VectorRecord
    acceleration: VectorRecord
    altitude: float  # m
    speed: float  # m/s
    mass_current: float  # kg
    fuel_remaining: float  # kg
    in_orbit: bool
    landed: bool
    crashed: bool
    time: float  # s
    latitude: float  # deg
    longitude: float  # deg
    orbit_apoapsis: float  # m, -1 when undefined
    orbit_periapsis: float  # m
    orbit_eccentricity: float
    orbit_required_velocity: float  # m/s
    orbit_is_stable: bool
