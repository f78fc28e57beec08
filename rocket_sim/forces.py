"""
Rocket Flight Simulation - Force Computations

This module implements all force calculations:
- Point-mass gravity (inverse square, no oblateness)
- Atmospheric drag (exponential atmosphere)
- Thrust (summed over engines, steered by pitch in the local frame)

Every degenerate input (zero-length vectors, near-zero thrust or speed,
positions on the frame's polar axis) resolves to a documented fallback value
rather than an exception.
"""

import numpy as np

from . import constants as C
from . import vectors as vec
from .control import ControlCommand
from .planet import PlanetConfig, EARTH
from .types import ForceBreakdown
from .vehicle import RocketConfig


# =============================================================================
# GRAVITY
# =============================================================================

def compute_gravity(position: np.ndarray, planet: PlanetConfig = EARTH) -> np.ndarray:
    """
    Compute the gravitational field at a point.

    g = -G*M / d^2 * r_hat

    Inside the body (d < radius) the field is zero: the integrator's ground
    contact check owns that case.

    Args:
        position: Planet-centred position (m)
        planet: Attracting body

    Returns:
        Gravitational acceleration (m/s^2)
    """
    distance = vec.magnitude(position)
    if distance < planet.radius:
        return np.zeros(3)

    g_magnitude = planet.mu / (distance * distance)
    return vec.scale(vec.normalize(position), -g_magnitude)


def compute_gravity_force(position: np.ndarray, mass: float,
                          planet: PlanetConfig = EARTH) -> np.ndarray:
    """Gravitational force on a vehicle of the given mass (N)."""
    return vec.scale(compute_gravity(position, planet), mass)


# =============================================================================
# ATMOSPHERE AND DRAG
# =============================================================================

def compute_air_density(altitude: float, planet: PlanetConfig = EARTH) -> float:
    """
    Exponential atmosphere density.

    rho = surface_pressure * rho_0 * exp(-h / H)

    Zero outside the atmosphere band (0, atmosphere_height).
    """
    if altitude <= 0.0 or altitude >= planet.atmosphere_height:
        return 0.0
    return planet.surface_pressure * C.RHO_0 * float(np.exp(-altitude / planet.scale_height))


def compute_drag_force(position: np.ndarray, velocity: np.ndarray,
                       config: RocketConfig, planet: PlanetConfig = EARTH) -> np.ndarray:
    """
    Compute atmospheric drag.

    F_drag = -0.5 * rho * |v|^2 * Cd * A * v_hat

    Args:
        position: Planet-centred position (m)
        velocity: Velocity (m/s)
        config: Vehicle (drag coefficient and cross-section)
        planet: Body whose atmosphere is flown through

    Returns:
        Drag force vector (N)
    """
    altitude = vec.magnitude(position) - planet.radius
    rho = compute_air_density(altitude, planet)
    if rho <= 0.0:
        return np.zeros(3)

    speed = vec.magnitude(velocity)
    if speed < C.SMALL_VELOCITY_TOL:
        return np.zeros(3)

    drag_magnitude = 0.5 * rho * speed * speed * config.drag_coefficient * config.cross_section
    return vec.scale(vec.normalize(velocity), -drag_magnitude)


# =============================================================================
# THRUST
# =============================================================================

def compute_local_frame(position: np.ndarray) -> tuple:
    """
    Local orbital frame at a position.

    up = normalize(r)
    horizontal = normalize(up x Z), or normalize(up x X) when |up x Z| < 0.01
    (on or near the polar axis, where up x Z vanishes).

    Returns:
        (up, horizontal) unit vectors. Both are zero at the planet centre.
    """
    up = vec.normalize(position)
    horizontal = vec.cross(up, C.REFERENCE_AXIS)
    if vec.magnitude(horizontal) < C.POLE_FRAME_TOLERANCE:
        horizontal = vec.cross(up, C.POLE_FALLBACK_AXIS)
    return up, vec.normalize(horizontal)


def compute_thrust_direction(position: np.ndarray, pitch: float) -> np.ndarray:
    """
    Thrust unit vector for a pitch angle.

    direction = up * cos(pitch) + horizontal * sin(pitch)

    Args:
        position: Planet-centred position (m)
        pitch: Degrees from local up (0 = vertical, 90 = horizontal)
    """
    up, horizontal = compute_local_frame(position)
    pitch_rad = np.radians(pitch)
    return vec.add(vec.scale(up, np.cos(pitch_rad)), vec.scale(horizontal, np.sin(pitch_rad)))


def compute_thrust_magnitude(config: RocketConfig, command: ControlCommand) -> float:
    """
    Combined thrust of the commanded engines (N).

    Sums thrust_i * throttle_i over active engines whose index is within both
    the vehicle's and the command's engine counts.
    """
    if command is None:
        return 0.0

    total = 0.0
    for i in range(min(config.engine_count, command.engine_count)):
        engine = config.engines[i]
        if engine.is_active:
            total += engine.thrust * command.throttle_for(i)
    return total


def compute_thrust_force(position: np.ndarray, config: RocketConfig,
                         command: ControlCommand) -> np.ndarray:
    """
    Compute thrust force in the planet-centred frame.

    Yaw and roll on the command are not applied; direction depends on pitch
    alone.

    Returns:
        Thrust force vector (N); zero when total thrust is below tolerance.
    """
    thrust_magnitude = compute_thrust_magnitude(config, command)
    if thrust_magnitude < C.THRUST_TOLERANCE:
        return np.zeros(3)

    direction = compute_thrust_direction(position, command.pitch)
    return vec.scale(direction, thrust_magnitude)


# =============================================================================
# COMPOSITION
# =============================================================================

def compute_total_force(position: np.ndarray, velocity: np.ndarray, mass: float,
                        config: RocketConfig, command: ControlCommand,
                        planet: PlanetConfig = EARTH,
                        thrust_enabled: bool = True) -> np.ndarray:
    """
    Compute total force acting on the vehicle.

    F_total = F_grav + F_drag + F_thrust

    Args:
        thrust_enabled: False when the tanks are dry and the engines cannot fire
    """
    F_grav = compute_gravity_force(position, mass, planet)
    F_drag = compute_drag_force(position, velocity, config, planet)
    F_total = vec.add(F_grav, F_drag)
    if thrust_enabled:
        F_total = vec.add(F_total, compute_thrust_force(position, config, command))
    return F_total


def compute_force_breakdown(position: np.ndarray, velocity: np.ndarray, mass: float,
                            config: RocketConfig, command: ControlCommand,
                            planet: PlanetConfig = EARTH,
                            thrust_enabled: bool = True) -> ForceBreakdown:
    """
    Compute all forces and return as a dictionary for logging/analysis.

    Consistent with compute_total_force.
    """
    F_grav = compute_gravity_force(position, mass, planet)
    F_drag = compute_drag_force(position, velocity, config, planet)
    if thrust_enabled:
        F_thrust = compute_thrust_force(position, config, command)
    else:
        F_thrust = np.zeros(3)

    return {
        'gravity': F_grav,
        'drag': F_drag,
        'thrust': F_thrust,
        'total': F_grav + F_drag + F_thrust,
        'gravity_magnitude': vec.magnitude(F_grav),
        'drag_magnitude': vec.magnitude(F_drag),
        'thrust_magnitude': vec.magnitude(F_thrust),
        'air_density': compute_air_density(vec.magnitude(position) - planet.radius, planet),
    }
