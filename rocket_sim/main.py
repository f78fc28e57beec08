"""
Rocket Flight Simulation - Flight Driver

This module implements the batch driver around the physics core:
- Builds a ControlCommand every tick (guidance pitch, throttle cut-off)
- Advances the state with the integrator
- Stops on a terminal condition, orbit, or the time limit
- Records a telemetry log that can be exported to CSV

Coordinate frame: planet-centred, non-rotating Cartesian (m, m/s).
"""

import csv
import logging
import os
import time
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from . import constants as C
from .config import SimulationConfig, create_default_config
from .control import ControlCommand
from .guidance import GravityTurnConfig, calculate_optimal_pitch, fast_pitchover_profile, gravity_turn_for_orbit
from .integrators import step
from .mass import is_fuel_exhausted
from .orbit import OrbitPrediction, predict_orbit
from .planet import PlanetConfig, EARTH, spherical_to_cartesian
from .state import RocketState, create_initial_state
from .validation import (
    ValidationError, validate_rocket_config, validate_planet_config,
    validate_state, compute_specific_energy,
)
from .vehicle import RocketConfig, create_reference_rocket

# Configure module logger
logger = logging.getLogger(__name__)


@dataclass
class SimulationLog:
    """Container for logged flight data."""
    time: List[float] = field(default_factory=list)
    altitude: List[float] = field(default_factory=list)          # km
    speed: List[float] = field(default_factory=list)             # m/s
    mass: List[float] = field(default_factory=list)              # kg
    fuel_remaining: List[float] = field(default_factory=list)    # kg
    position_x: List[float] = field(default_factory=list)
    position_y: List[float] = field(default_factory=list)
    position_z: List[float] = field(default_factory=list)
    velocity_x: List[float] = field(default_factory=list)
    velocity_y: List[float] = field(default_factory=list)
    velocity_z: List[float] = field(default_factory=list)
    acceleration: List[float] = field(default_factory=list)      # m/s^2
    pitch: List[float] = field(default_factory=list)             # deg
    throttle: List[float] = field(default_factory=list)          # mean, 0-1
    apoapsis: List[float] = field(default_factory=list)          # km, -0.001 if undefined
    periapsis: List[float] = field(default_factory=list)         # km
    eccentricity: List[float] = field(default_factory=list)
    status: List[str] = field(default_factory=list)

    def append(self, state: RocketState, command: ControlCommand, prediction: OrbitPrediction):
        """Log data from current timestep."""
        self.time.append(state.time)
        self.altitude.append(state.altitude / 1000)
        self.speed.append(state.speed)
        self.mass.append(state.mass_current)
        self.fuel_remaining.append(state.fuel_remaining)
        self.position_x.append(state.position[0])
        self.position_y.append(state.position[1])
        self.position_z.append(state.position[2])
        self.velocity_x.append(state.velocity[0])
        self.velocity_y.append(state.velocity[1])
        self.velocity_z.append(state.velocity[2])
        self.acceleration.append(float(np.linalg.norm(state.acceleration)))
        self.pitch.append(command.pitch)
        throttles = command.engine_throttle
        self.throttle.append(float(np.mean(throttles)) if len(throttles) > 0 else 0.0)
        self.apoapsis.append(prediction.apoapsis / 1000)
        self.periapsis.append(prediction.periapsis / 1000)
        self.eccentricity.append(prediction.eccentricity)
        self.status.append(state.status)

    def __len__(self) -> int:
        return len(self.time)

    def positions(self) -> np.ndarray:
        """Trajectory history as an [n x 3] array (m)."""
        return np.column_stack([self.position_x, self.position_y, self.position_z])

    def to_csv(self, filename: str):
        """Write logged telemetry to CSV for offline analysis."""
        os.makedirs(os.path.dirname(filename) or '.', exist_ok=True)
        header = [
            'time', 'altitude_km', 'speed_mps', 'mass_kg', 'fuel_kg',
            'pos_x', 'pos_y', 'pos_z', 'vel_x', 'vel_y', 'vel_z',
            'accel_mps2', 'pitch_deg', 'throttle',
            'apoapsis_km', 'periapsis_km', 'eccentricity', 'status'
        ]

        with open(filename, 'w', newline='') as fh:
            writer = csv.writer(fh)
            writer.writerow(header)
            for i in range(len(self.time)):
                row = [
                    self.time[i], self.altitude[i], self.speed[i], self.mass[i], self.fuel_remaining[i],
                    self.position_x[i], self.position_y[i], self.position_z[i],
                    self.velocity_x[i], self.velocity_y[i], self.velocity_z[i],
                    self.acceleration[i], self.pitch[i], self.throttle[i],
                    self.apoapsis[i], self.periapsis[i], self.eccentricity[i], self.status[i]
                ]
                writer.writerow(row)


def check_termination(state: RocketState, max_time: float,
                      stop_on_orbit: bool = True) -> tuple:
    """
    Check if the run should end.

    Args:
        state: Current state
        max_time: Maximum allowed simulation time (s)
        stop_on_orbit: Treat the first in-orbit verdict as mission complete

    Returns:
        (should_terminate, reason) tuple
    """
    if state.crashed:
        return True, f"CRASH - Impact at {state.speed:.1f} m/s"
    if state.landed:
        return True, f"LANDED - Touchdown at {state.speed:.2f} m/s"
    if stop_on_orbit and state.in_orbit:
        return True, "ORBIT ACHIEVED"
    if state.time >= max_time:
        return True, "Maximum simulation time reached"
    return False, None


def select_pitch(state: RocketState, planet: PlanetConfig, config: SimulationConfig,
                 gt_config: GravityTurnConfig) -> float:
    """Pitch command (deg) for the configured guidance mode."""
    if config.guidance == 'gravity_turn':
        return calculate_optimal_pitch(state, planet, gt_config)
    if config.guidance == 'fast_pitchover':
        return fast_pitchover_profile(state.altitude)
    return 0.0


def build_command(state: RocketState, rocket: RocketConfig, planet: PlanetConfig,
                  config: SimulationConfig, gt_config: GravityTurnConfig) -> ControlCommand:
    """Full throttle on every engine until the tanks run dry, steered by guidance."""
    if config.cutoff_on_empty and is_fuel_exhausted(state.fuel_remaining):
        throttle = 0.0
    else:
        throttle = 1.0
    return ControlCommand(
        engine_throttle=[throttle] * rocket.engine_count,
        pitch=select_pitch(state, planet, config, gt_config),
    )


def reference_launch_position(planet: PlanetConfig = EARTH) -> np.ndarray:
    """Reference launch site: 45 N, 63 E, 100 m above the mean radius."""
    return spherical_to_cartesian(C.LAUNCH_LATITUDE, C.LAUNCH_LONGITUDE, C.LAUNCH_ALTITUDE, planet)


def run_flight(rocket: Optional[RocketConfig] = None, planet: PlanetConfig = EARTH,
               initial_position=None, config: Optional[SimulationConfig] = None,
               initial_state: Optional[RocketState] = None,
               dt: float = None, max_time: float = None, verbose: bool = None) -> tuple:
    """
    Fly one vehicle from launch to a terminal condition or the time limit.

    Args:
        rocket: Vehicle configuration. Reference rocket if None.
        planet: Body to fly around.
        initial_position: Launch position (m). Reference site if None.
        config: SimulationConfig instance. If None a default is created.
        initial_state: Optional starting state; overrides initial_position.
        dt: Time step. Overrides config.dt if given.
        max_time: Maximum simulation time. Overrides config.max_time if given.
        verbose: Print progress updates. Overrides config.verbose if given.

    Returns:
        (final_state, log, termination_reason) tuple
    """
    if config is None:
        config = create_default_config()
    if rocket is None:
        rocket = create_reference_rocket()

    # Explicit kwargs override config values
    if dt is None:
        dt = config.dt
    if max_time is None:
        max_time = config.max_time
    if verbose is None:
        verbose = config.verbose
    if dt <= 0:
        raise ValueError(f"Time step dt must be positive, got {dt}")

    if initial_state is not None:
        state = initial_state.copy()
    else:
        if initial_position is None:
            initial_position = reference_launch_position(planet)
        state = create_initial_state(rocket, initial_position, planet)

    log = SimulationLog()

    try:
        validate_rocket_config(rocket)
        validate_planet_config(planet)
    except ValidationError as e:
        logger.error(f"Configuration rejected: {e}")
        return state, log, f"Invalid configuration: {e}"

    gt_config = gravity_turn_for_orbit(planet, config.target_orbit_altitude)

    logger.info(f"Starting flight: {rocket.name}, dt={dt}s, max_time={max_time}s, "
                f"guidance={config.guidance}")
    logger.debug(f"Initial state: {state}")

    if verbose:
        print("\n" + "=" * 80)
        print(f"FLIGHT SIMULATION    | {rocket.name} | dt={dt}s | T_max={max_time}s")
        print("=" * 80)
        print(f"{'Time (s)':^10} | {'Alt (km)':^10} | {'Vel (m/s)':^10} | {'Fuel (kg)':^12} | {'Status':<10}")
        print("-" * 80)

    start_time = time.time()
    step_count = 0
    next_log_time = state.time
    last_print_time = state.time
    energy_prev = None
    reason = None
    command = build_command(state, rocket, planet, config, gt_config)
    log.append(state, command, predict_orbit(state, planet))

    while True:
        should_terminate, reason = check_termination(state, max_time, config.stop_on_orbit)
        if should_terminate:
            break

        try:
            validate_state(state, rocket)
        except ValidationError as e:
            logger.error(f"Validation failed: {e}")
            reason = f"Validation failure: {e}"
            break

        command = build_command(state, rocket, planet, config, gt_config)
        was_empty = is_fuel_exhausted(state.fuel_remaining)
        state = step(state, rocket, command, dt, planet=planet, orbit_model=config.orbit_model)
        step_count += 1

        if not was_empty and is_fuel_exhausted(state.fuel_remaining):
            logger.info(f"Fuel exhausted at t={state.time:.2f}s, "
                        f"alt={state.altitude/1000:.2f}km, v={state.speed:.1f}m/s")

        if state.time >= next_log_time or state.is_terminal:
            log.append(state, command, predict_orbit(state, planet))
            next_log_time = state.time + config.log_interval

        energy_prev = _check_coast_energy(state, planet, command, rocket, energy_prev)

        if verbose and state.time - last_print_time >= 10.0:
            _print_status(state)
            last_print_time = state.time

    logger.info(f"Flight terminated: {reason}")
    if verbose:
        print(f"\nTermination: {reason}")

    elapsed = time.time() - start_time
    _log_completion(state, step_count, elapsed, verbose)

    return state, log, reason


def _check_coast_energy(state: RocketState, planet: PlanetConfig, command: ControlCommand,
                        rocket: RocketConfig, energy_prev: Optional[float]) -> Optional[float]:
    """Warn when specific energy drifts during an unpowered vacuum coast."""
    coasting = (is_fuel_exhausted(state.fuel_remaining) or
                all(command.throttle_for(i) == 0.0 for i in range(rocket.engine_count)))
    if not coasting or state.altitude < planet.atmosphere_height or state.is_terminal:
        return None

    energy = compute_specific_energy(state.position, state.velocity, planet)
    if energy_prev is not None and abs(energy_prev) > C.ZERO_TOLERANCE:
        relative_error = abs((energy - energy_prev) / energy_prev)
        if relative_error > C.ENERGY_TOLERANCE:
            logger.warning(f"Energy drift at t={state.time:.1f}s: "
                           f"relative_error={relative_error:.2e}")
    return energy


def _print_status(state: RocketState):
    """Print a formatted status row."""
    msg = (f"{state.time:10.1f} | {state.altitude/1000:10.1f} | "
           f"{state.speed:10.1f} | {state.fuel_remaining:12.1f} | {state.status:<10}")
    print(msg)
    logger.debug(msg)


def _log_completion(state: RocketState, steps: int, elapsed: float, verbose: bool):
    """Log and print run statistics."""
    logger.info(f"Flight complete: {steps} steps in {elapsed:.2f}s")
    logger.info(f"Final state: alt={state.altitude/1000:.2f}km, v={state.speed:.1f}m/s, "
                f"status={state.status}")

    if verbose:
        print("-" * 80)
        print("FLIGHT COMPLETED")
        print("-" * 80)
        print(f"Final Time:     {state.time:.2f} s")
        print(f"Final Altitude: {state.altitude/1000:.2f} km")
        print(f"Final Velocity: {state.speed:.2f} m/s")
        print(f"Fuel Remaining: {state.fuel_remaining:.1f} kg")
        print(f"Status:         {state.status}")
        print("-" * 80)
        print(f"Steps:       {steps:,}")
        print(f"Wall Time:   {elapsed:.2f} s")
        print(f"Performance: {steps/elapsed:.0f} steps/s" if elapsed > 0 else "Performance: N/A")
        print("=" * 80)
