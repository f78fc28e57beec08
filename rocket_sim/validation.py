"""
Rocket Flight Simulation - Validation Checks

This module implements consistency checks on configurations and states:
- Vehicle configuration sanity (masses, engines, drag properties)
- Planet configuration sanity
- State invariants (mass identity, fuel bounds, terminal flags)

The integrator itself never raises on bad numbers; these checks are run by
the flight driver, which aborts the run on violation.
"""

from typing import Optional, Tuple

import numpy as np

from . import constants as C
from .planet import PlanetConfig
from .state import RocketState
from .vehicle import RocketConfig


class ValidationError(Exception):
    """Raised when a configuration or state check fails."""
    pass


def validate_rocket_config(config: RocketConfig) -> bool:
    """
    Check that a vehicle configuration is physically meaningful.

    Returns:
        True if valid, raises ValidationError otherwise
    """
    if config.mass_empty < 0.0:
        raise ValidationError(f"Negative dry mass: {config.mass_empty:.2f} kg")
    if config.mass_fuel_max < 0.0:
        raise ValidationError(f"Negative fuel capacity: {config.mass_fuel_max:.2f} kg")
    if not 0.0 <= config.mass_fuel <= config.mass_fuel_max:
        raise ValidationError(
            f"Fuel load out of range: {config.mass_fuel:.2f} kg, "
            f"capacity = {config.mass_fuel_max:.2f} kg"
        )
    if config.drag_coefficient < 0.0 or config.cross_section < 0.0:
        raise ValidationError(
            f"Negative drag properties: Cd = {config.drag_coefficient}, "
            f"A = {config.cross_section} m^2"
        )
    for i, engine in enumerate(config.engines):
        if engine.thrust < 0.0 or engine.fuel_consumption < 0.0:
            raise ValidationError(
                f"Engine {i} has negative thrust or fuel consumption: "
                f"T = {engine.thrust:.1f} N, mdot = {engine.fuel_consumption:.2f} kg/s"
            )
    return True


def validate_planet_config(planet: PlanetConfig) -> bool:
    """
    Check that a planet configuration is physically meaningful.

    Returns:
        True if valid, raises ValidationError otherwise
    """
    if planet.radius <= 0.0:
        raise ValidationError(f"Planet radius must be positive, got {planet.radius}")
    if planet.mass < 0.0:
        raise ValidationError(f"Planet mass must be non-negative, got {planet.mass}")
    if planet.atmosphere_height < 0.0:
        raise ValidationError(f"Atmosphere height must be non-negative, got {planet.atmosphere_height}")
    if planet.scale_height <= 0.0:
        raise ValidationError(f"Scale height must be positive, got {planet.scale_height}")
    if planet.surface_pressure < 0.0:
        raise ValidationError(f"Surface pressure must be non-negative, got {planet.surface_pressure}")
    return True


def check_fuel_bounds(fuel_remaining: float, config: RocketConfig) -> bool:
    """Fuel must stay within [0, mass_fuel_max]."""
    if fuel_remaining < 0.0 or fuel_remaining > config.mass_fuel_max + C.MASS_TOLERANCE:
        raise ValidationError(
            f"Fuel out of bounds: {fuel_remaining:.3f} kg, "
            f"capacity = {config.mass_fuel_max:.3f} kg"
        )
    return True


def check_mass_identity(state: RocketState, config: RocketConfig) -> bool:
    """mass_current must equal mass_empty + fuel_remaining."""
    expected = config.mass_empty + state.fuel_remaining
    if abs(state.mass_current - expected) > C.MASS_TOLERANCE:
        raise ValidationError(
            f"Mass identity violation: m = {state.mass_current:.6f} kg, "
            f"dry + fuel = {expected:.6f} kg"
        )
    return True


def check_terminal_flags(state: RocketState) -> bool:
    """Landed and crashed exclude each other, and a grounded vehicle is not in orbit."""
    if state.landed and state.crashed:
        raise ValidationError("State is both landed and crashed")
    if state.in_orbit and (state.landed or state.crashed):
        raise ValidationError("Grounded state still flagged in orbit")
    return True


def check_finite(state: RocketState) -> bool:
    """Position and velocity must be finite numbers."""
    if not (np.all(np.isfinite(state.position)) and np.all(np.isfinite(state.velocity))):
        raise ValidationError(f"Non-finite kinematics: r = {state.position}, v = {state.velocity}")
    return True


def validate_state(state: RocketState, config: RocketConfig,
                   abort_on_error: bool = True) -> Tuple[bool, Optional[str]]:
    """
    Perform all validation checks on a state.

    Args:
        state: State to validate
        config: Vehicle the state belongs to
        abort_on_error: If True, raise exception on first error
    """
    try:
        check_finite(state)
        check_fuel_bounds(state.fuel_remaining, config)
        check_mass_identity(state, config)
        check_terminal_flags(state)
        return True, None
    except ValidationError as e:
        if abort_on_error:
            raise
        return False, str(e)


def compute_specific_energy(position: np.ndarray, velocity: np.ndarray, planet: PlanetConfig) -> float:
    """
    Specific orbital energy.

    E = v^2/2 - mu/r

    Returns 0.0 at the planet centre.
    """
    r_norm = np.linalg.norm(position)
    if r_norm < C.ZERO_TOLERANCE:
        return 0.0
    return float(0.5 * np.dot(velocity, velocity) - planet.mu / r_norm)
