"""
Rocket Flight Simulation Package

A deterministic rigid-point-mass simulation of a rocket flying around a
spherical planet with an exponential atmosphere.

Modules:
    - constants: Physical constants, tolerances and reference parameters
    - vectors: 3-D vector primitives
    - vehicle: Engine and RocketConfig descriptions
    - planet: PlanetConfig and spherical coordinate helpers
    - control: Per-tick ControlCommand
    - state: RocketState dataclass
    - forces: Gravity, drag and thrust
    - mass: Fuel and mass bookkeeping
    - integrators: Semi-implicit Euler step and terminal classification
    - guidance: Gravity-turn pitch shaping
    - orbit: Orbit prediction from position and velocity
    - validation: Configuration and state checks
    - telemetry: Flat telemetry snapshot
    - main: Batch flight driver
"""

from .vehicle import Engine, FuelType, RocketConfig, create_reference_rocket
from .planet import PlanetConfig, EARTH, earth_default
from .control import ControlCommand
from .state import RocketState, create_initial_state, init
from .integrators import step, step_with_planet
from .orbit import OrbitPrediction, predict_orbit
from .guidance import GravityTurnConfig, gravity_turn_for_orbit, calculate_optimal_pitch
from .telemetry import build_telemetry
from .main import run_flight, SimulationLog
from .config import SimulationConfig, create_default_config, create_test_config

__version__ = "1.0.0"

__all__ = [
    'Engine',
    'FuelType',
    'RocketConfig',
    'create_reference_rocket',
    'PlanetConfig',
    'EARTH',
    'earth_default',
    'ControlCommand',
    'RocketState',
    'create_initial_state',
    'init',
    'step',
    'step_with_planet',
    'OrbitPrediction',
    'predict_orbit',
    'GravityTurnConfig',
    'gravity_turn_for_orbit',
    'calculate_optimal_pitch',
    'build_telemetry',
    'run_flight',
    'SimulationLog',
    'SimulationConfig',
    'create_default_config',
    'create_test_config',
]
