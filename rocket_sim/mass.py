"""
Rocket Flight Simulation - Fuel and mass bookkeeping.
"""

from .control import ControlCommand
from .vehicle import RocketConfig


def compute_fuel_flow(config: RocketConfig, command: ControlCommand) -> float:
    """
    Fuel flow of the commanded engines (kg/s, positive while burning).

    Uses the same engine bounds as the thrust model.
    """
    if command is None:
        return 0.0

    flow = 0.0
    for i in range(min(config.engine_count, command.engine_count)):
        engine = config.engines[i]
        if engine.is_active:
            flow += engine.fuel_consumption * command.throttle_for(i)
    return flow


def compute_fuel_consumption(config: RocketConfig, command: ControlCommand,
                             dt: float) -> float:
    """Fuel burned over one step (kg)."""
    return compute_fuel_flow(config, command) * dt


def update_fuel(fuel_remaining: float, consumed: float) -> float:
    """Euler update for fuel with a zero floor."""
    return max(0.0, fuel_remaining - consumed)


def compute_mass(config: RocketConfig, fuel_remaining: float) -> float:
    """Current total mass: dry mass plus fuel left."""
    return config.mass_empty + fuel_remaining


def is_fuel_exhausted(fuel_remaining: float) -> bool:
    """True if the tanks are empty."""
    return fuel_remaining <= 0.0


def get_fuel_fraction(config: RocketConfig, fuel_remaining: float) -> float:
    """Fraction of tank capacity remaining, in [0, 1]."""
    if config.mass_fuel_max <= 0.0:
        return 0.0
    return max(0.0, min(1.0, fuel_remaining / config.mass_fuel_max))
