import math

import pytest
import numpy as np
from rocket_sim import validation
from rocket_sim import constants as C
from rocket_sim.planet import EARTH, PlanetConfig
from rocket_sim.state import create_initial_state
from rocket_sim.vehicle import Engine, RocketConfig, create_reference_rocket


def _launch_state():
    return create_initial_state(create_reference_rocket(), [C.EARTH_RADIUS + 100.0, 0.0, 0.0])


# ============================================================================
# Configuration checks
# ============================================================================

def test_reference_configs_valid():
    assert validation.validate_rocket_config(create_reference_rocket())
    assert validation.validate_planet_config(EARTH)

def test_negative_dry_mass_rejected():
    with pytest.raises(validation.ValidationError):
        validation.validate_rocket_config(RocketConfig(mass_empty=-1.0, mass_fuel=0.0, mass_fuel_max=0.0))

def test_overfilled_tank_rejected():
    with pytest.raises(validation.ValidationError):
        validation.validate_rocket_config(RocketConfig(mass_empty=10.0, mass_fuel=20.0, mass_fuel_max=5.0))

def test_negative_engine_rejected():
    bad = RocketConfig(mass_empty=10.0, mass_fuel=1.0, mass_fuel_max=1.0, engines=(Engine(-5.0, 1.0),))
    with pytest.raises(validation.ValidationError):
        validation.validate_rocket_config(bad)

def test_negative_drag_rejected():
    with pytest.raises(validation.ValidationError):
        validation.validate_rocket_config(
            RocketConfig(mass_empty=10.0, mass_fuel=1.0, mass_fuel_max=1.0, cross_section=-1.0))

@pytest.mark.parametrize("kwargs", [
    {'radius': 0.0},
    {'mass': -1.0},
    {'atmosphere_height': -1.0},
    {'scale_height': 0.0},
    {'surface_pressure': -0.1},
])
def test_bad_planet_rejected(kwargs):
    with pytest.raises(validation.ValidationError):
        validation.validate_planet_config(PlanetConfig(**kwargs))


# ============================================================================
# State checks
# ============================================================================

def test_launch_state_valid():
    ok, msg = validation.validate_state(_launch_state(), create_reference_rocket())
    assert ok
    assert msg is None

def test_mass_identity_violation():
    s = _launch_state()
    s.mass_current += 1.0
    with pytest.raises(validation.ValidationError):
        validation.check_mass_identity(s, create_reference_rocket())

def test_fuel_bounds():
    rocket = create_reference_rocket()
    with pytest.raises(validation.ValidationError):
        validation.check_fuel_bounds(-1.0, rocket)
    with pytest.raises(validation.ValidationError):
        validation.check_fuel_bounds(rocket.mass_fuel_max + 1.0, rocket)
    assert validation.check_fuel_bounds(0.0, rocket)

def test_terminal_flags_exclusive():
    s = _launch_state()
    s.landed = True
    s.crashed = True
    with pytest.raises(validation.ValidationError):
        validation.check_terminal_flags(s)

def test_grounded_state_not_in_orbit():
    s = _launch_state()
    s.crashed = True
    s.in_orbit = True
    with pytest.raises(validation.ValidationError):
        validation.check_terminal_flags(s)

def test_non_finite_position():
    s = _launch_state()
    s.position[1] = np.nan
    with pytest.raises(validation.ValidationError):
        validation.check_finite(s)

def test_validate_state_without_abort():
    s = _launch_state()
    s.fuel_remaining = -5.0
    ok, msg = validation.validate_state(s, create_reference_rocket(), abort_on_error=False)
    assert not ok
    assert "Fuel" in msg


# ============================================================================
# Energy
# ============================================================================

def test_specific_energy_circular():
    r = C.EARTH_RADIUS + 400000.0
    v = math.sqrt(EARTH.mu / r)
    e = validation.compute_specific_energy(np.array([r, 0.0, 0.0]), np.array([0.0, v, 0.0]), EARTH)
    assert e == pytest.approx(-EARTH.mu / (2.0 * r))

def test_specific_energy_at_centre():
    assert validation.compute_specific_energy(np.zeros(3), np.ones(3), EARTH) == 0.0
