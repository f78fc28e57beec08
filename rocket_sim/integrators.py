"""
Rocket Flight Simulation - Numerical Integration

One fixed-step, first-order (semi-implicit Euler) advance of a RocketState,
followed by fuel bookkeeping and terminal-condition classification.

State machine:

    Flying --ground contact, speed < 5 m/s--> Landed   (terminal)
    Flying --ground contact, speed >= 5 m/s-> Crashed  (terminal)
    Flying <-> InOrbit (sub-state flag, re-evaluated every step)

There is no sub-stepping and no error control: truncation error grows with
dt and is not corrected. Callers choose dt (0.1 s in the reference runs).
"""

import numpy as np

from . import constants as C
from . import vectors as vec
from .control import ControlCommand
from .forces import compute_total_force
from .mass import compute_fuel_consumption, compute_mass, update_fuel, is_fuel_exhausted
from .orbit import check_orbital_stability, check_orbital_stability_speed_ratio
from .planet import PlanetConfig, EARTH
from .state import RocketState
from .vehicle import RocketConfig


ORBIT_MODELS = {
    'predictor': check_orbital_stability,
    'speed_ratio': check_orbital_stability_speed_ratio,
}


def check_ground_collision(position: np.ndarray, planet: PlanetConfig = EARTH) -> bool:
    """True if the position is on or below the planet surface."""
    return vec.magnitude(position) <= planet.radius


def classify_ground_contact(speed: float) -> str:
    """'landed' below the landing speed limit, 'crashed' otherwise."""
    return 'landed' if speed < C.LANDING_SPEED_LIMIT else 'crashed'


def euler_step(state: RocketState, config: RocketConfig, command: ControlCommand,
               dt: float, planet: PlanetConfig = EARTH,
               orbit_model: str = 'predictor') -> RocketState:
    """
    Advance the state by one time step.

    1. Terminal states are returned unchanged.
    2. a = (F_grav + F_drag + F_thrust) / m  (zero if m <= 0)
    3. v += a*dt ; r += v*dt
    4. fuel -= sum(flow_i * throttle_i) * dt, floored at 0; m = dry + fuel
    5. altitude = |r| - R
    6. |r| <= R: landed/crashed, velocity and acceleration zeroed, return
    7. otherwise in_orbit = orbit verdict; t += dt

    Engines fed from empty tanks produce no thrust.

    Args:
        state: Current state (not modified)
        config: Vehicle configuration
        command: Control input for this step
        dt: Time step (s)
        planet: Body being flown around
        orbit_model: 'predictor' (vis-viva) or 'speed_ratio' (legacy heuristic)

    Returns:
        New state after integration

    Raises:
        ValueError: If orbit_model is unknown and the state is not terminal
    """
    if state.landed or state.crashed:
        return state

    try:
        orbit_check = ORBIT_MODELS[orbit_model]
    except KeyError:
        raise ValueError(f"Unknown orbit model: {orbit_model}") from None

    new_state = state.copy()

    thrust_enabled = not is_fuel_exhausted(state.fuel_remaining)
    F_total = compute_total_force(
        state.position, state.velocity, state.mass_current,
        config, command, planet, thrust_enabled=thrust_enabled,
    )

    if state.mass_current > 0.0:
        new_state.acceleration = vec.scale(F_total, 1.0 / state.mass_current)
    else:
        new_state.acceleration = np.zeros(3)

    new_state.velocity = vec.add(state.velocity, vec.scale(new_state.acceleration, dt))
    new_state.speed = vec.magnitude(new_state.velocity)
    new_state.position = vec.add(state.position, vec.scale(new_state.velocity, dt))

    if thrust_enabled:
        consumed = compute_fuel_consumption(config, command, dt)
        new_state.fuel_remaining = update_fuel(state.fuel_remaining, consumed)
    new_state.mass_current = compute_mass(config, new_state.fuel_remaining)

    new_state.altitude = vec.magnitude(new_state.position) - planet.radius

    if check_ground_collision(new_state.position, planet):
        if classify_ground_contact(new_state.speed) == 'landed':
            new_state.landed = True
        else:
            new_state.crashed = True
        new_state.in_orbit = False
        new_state.velocity = np.zeros(3)
        new_state.acceleration = np.zeros(3)
        return new_state

    new_state.in_orbit = orbit_check(new_state, planet)
    new_state.time = state.time + dt

    return new_state


def step(state: RocketState, config: RocketConfig, command: ControlCommand,
         dt: float, planet: PlanetConfig = EARTH,
         orbit_model: str = 'predictor') -> RocketState:
    """
    Integrate the state forward by one timestep.

    Earth is used unless another planet is given.
    """
    return euler_step(state, config, command, dt, planet=planet, orbit_model=orbit_model)


def step_with_planet(state: RocketState, config: RocketConfig, command: ControlCommand,
                     planet: PlanetConfig, dt: float) -> RocketState:
    """Same as step() with the planet given positionally before dt."""
    return euler_step(state, config, command, dt, planet=planet)
