"""
Rocket Flight Simulation - Vehicle Description

Immutable description of a vehicle: dry mass, fuel load, engines and drag
properties. Fuel is consumed on RocketState, never on the configuration.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

from . import constants as C


class FuelType(Enum):
    """Propellant family. Informational only, no effect on the physics."""
    KEROSENE = "kerosene"
    LIQUID_H2 = "liquid_h2"
    SOLID = "solid"


@dataclass(frozen=True)
class Engine:
    """
    A single engine.

    Attributes:
        thrust: Thrust at full throttle (N)
        fuel_consumption: Fuel flow at full throttle (kg/s)
        is_active: Inactive engines produce no thrust and burn no fuel
    """
    thrust: float
    fuel_consumption: float
    is_active: bool = True


@dataclass(frozen=True)
class RocketConfig:
    """
    Immutable vehicle configuration.

    Created once at launch time. Engine order matters: throttle i of a
    ControlCommand drives engines[i].
    """
    mass_empty: float
    mass_fuel: float
    mass_fuel_max: float
    engines: Tuple[Engine, ...] = field(default_factory=tuple)
    drag_coefficient: float = 0.5
    cross_section: float = 10.0
    fuel_type: FuelType = FuelType.KEROSENE
    name: str = "Rocket"

    def __post_init__(self):
        """Freeze the engine list so the config cannot change underneath a run."""
        object.__setattr__(self, 'engines', tuple(self.engines))

    @property
    def engine_count(self) -> int:
        return len(self.engines)

    @property
    def mass_initial(self) -> float:
        """Launch mass: dry mass plus loaded fuel (kg)."""
        return self.mass_empty + self.mass_fuel

    @property
    def max_thrust(self) -> float:
        """Combined full-throttle thrust of the active engines (N)."""
        return sum(e.thrust for e in self.engines if e.is_active)

    @property
    def max_fuel_flow(self) -> float:
        """Combined full-throttle fuel flow of the active engines (kg/s)."""
        return sum(e.fuel_consumption for e in self.engines if e.is_active)

    def __str__(self) -> str:
        return (
            f"RocketConfig({self.name}: "
            f"dry={self.mass_empty:.0f}kg, "
            f"fuel={self.mass_fuel:.0f}/{self.mass_fuel_max:.0f}kg, "
            f"engines={self.engine_count}x{self.max_thrust / max(self.engine_count, 1) / 1000:.0f}kN)"
        )


def create_reference_rocket() -> RocketConfig:
    """
    Create the reference test vehicle.

    4 engines x 500 kN / 250 kg/s, 5 t dry, 15 t kerosene, Cd 0.5, 10 m^2.
    """
    engines = tuple(
        Engine(thrust=C.REFERENCE_ENGINE_THRUST,
               fuel_consumption=C.REFERENCE_ENGINE_CONSUMPTION,
               is_active=True)
        for _ in range(C.REFERENCE_ENGINE_COUNT)
    )
    return RocketConfig(
        name=C.REFERENCE_NAME,
        mass_empty=C.REFERENCE_MASS_EMPTY,
        mass_fuel=C.REFERENCE_MASS_FUEL,
        mass_fuel_max=C.REFERENCE_MASS_FUEL,
        fuel_type=FuelType.KEROSENE,
        engines=engines,
        drag_coefficient=C.REFERENCE_DRAG_COEFFICIENT,
        cross_section=C.REFERENCE_CROSS_SECTION,
    )
