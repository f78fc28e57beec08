import pytest
import numpy as np
from rocket_sim import state
from rocket_sim import constants as C
from rocket_sim.vehicle import RocketConfig, create_reference_rocket


def _launch_state():
    rocket = create_reference_rocket()
    return state.create_initial_state(rocket, [C.EARTH_RADIUS + 100.0, 0.0, 0.0])

def test_initial_state():
    s = _launch_state()
    assert s.altitude == pytest.approx(100.0)
    assert s.mass_current == pytest.approx(20000.0)
    assert s.fuel_remaining == pytest.approx(15000.0)
    assert s.speed == 0.0
    assert s.time == 0.0
    assert not (s.in_orbit or s.landed or s.crashed)
    np.testing.assert_array_equal(s.velocity, np.zeros(3))
    np.testing.assert_array_equal(s.acceleration, np.zeros(3))

def test_init_alias():
    assert state.init is state.create_initial_state

def test_vectors_coerced_to_float64():
    s = state.RocketState(position=[1, 2, 3])
    assert s.position.dtype == np.float64

def test_copy_is_independent():
    s = _launch_state()
    s2 = s.copy()
    s2.position[0] = 0.0
    s2.fuel_remaining = 1.0
    assert s.position[0] == pytest.approx(C.EARTH_RADIUS + 100.0)
    assert s.fuel_remaining == pytest.approx(15000.0)

def test_status_priority():
    s = _launch_state()
    assert s.status == "flying"
    s.in_orbit = True
    assert s.status == "in_orbit"
    s.in_orbit = False
    s.landed = True
    assert s.status == "landed"
    assert s.is_terminal
    s.landed = False
    s.crashed = True
    assert s.status == "crashed"

def test_to_dict():
    d = _launch_state().to_dict()
    assert d['position'] == {'x': C.EARTH_RADIUS + 100.0, 'y': 0.0, 'z': 0.0}
    assert set(d) == {
        'position', 'velocity', 'acceleration', 'altitude', 'speed',
        'mass_current', 'fuel_remaining', 'in_orbit', 'landed', 'crashed', 'time',
    }
    assert isinstance(d['altitude'], float)

def test_str():
    assert "flying" in str(_launch_state())

def test_initial_fuel_bounded_by_tank_capacity():
    overfilled = RocketConfig(mass_empty=100.0, mass_fuel=80.0, mass_fuel_max=50.0)
    s = state.create_initial_state(overfilled, [C.EARTH_RADIUS, 0.0, 0.0])
    assert s.fuel_remaining == 50.0
    assert s.mass_current == 150.0

def test_initial_position_is_copied():
    position = np.array([C.EARTH_RADIUS + 10.0, 0.0, 0.0])
    s = state.create_initial_state(create_reference_rocket(), position)
    position[0] = 0.0
    assert s.position[0] == C.EARTH_RADIUS + 10.0
