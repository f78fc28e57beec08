import csv
import math

import pytest
import numpy as np
from rocket_sim import main
from rocket_sim import constants as C
from rocket_sim.config import create_test_config
from rocket_sim.guidance import gravity_turn_for_orbit
from rocket_sim.planet import EARTH
from rocket_sim.state import RocketState, create_initial_state
from rocket_sim.vehicle import RocketConfig, create_reference_rocket

R = C.EARTH_RADIUS


def _coasting_state(rocket, height, velocity):
    return RocketState(
        position=np.array([R + height, 0.0, 0.0]),
        velocity=np.asarray(velocity, dtype=float),
        altitude=height,
        speed=float(np.linalg.norm(velocity)),
        mass_current=rocket.mass_empty,
        fuel_remaining=0.0,
    )


def test_run_flight_completes():
    state, log, reason = main.run_flight(config=create_test_config(max_time=1.0))
    # Allow one extra timestep for floating-point time accumulation
    assert state.time <= 1.0 + 0.15
    assert isinstance(reason, str)
    assert 'Maximum simulation time' in reason
    assert len(log) > 0
    assert state.altitude > C.LAUNCH_ALTITUDE


def test_log_interval_zero_logs_every_step():
    state, log, reason = main.run_flight(config=create_test_config(max_time=1.0, log_interval=0.0))
    assert len(log) >= 11
    assert all(b > a for a, b in zip(log.time, log.time[1:]))
    assert log.throttle[-1] == 1.0


def test_check_termination_conditions():
    s = RocketState(time=200.0)
    term, reason = main.check_termination(s, max_time=100.0)
    assert term is True
    assert 'Maximum simulation time' in reason

    s = RocketState(time=1.0, crashed=True, speed=80.0)
    term, reason = main.check_termination(s, max_time=100.0)
    assert term and reason.startswith('CRASH')

    s = RocketState(time=1.0, landed=True, speed=2.0)
    term, reason = main.check_termination(s, max_time=100.0)
    assert term and reason.startswith('LANDED')

    s = RocketState(time=1.0, in_orbit=True)
    assert main.check_termination(s, max_time=100.0) == (True, 'ORBIT ACHIEVED')
    assert main.check_termination(s, max_time=100.0, stop_on_orbit=False) == (False, None)


def test_select_pitch_modes():
    gt = gravity_turn_for_orbit(EARTH, 200000.0)
    s = RocketState(altitude=700.0)
    assert main.select_pitch(s, EARTH, create_test_config(guidance='vertical'), gt) == 0.0
    assert main.select_pitch(s, EARTH, create_test_config(guidance='fast_pitchover'), gt) == pytest.approx(60.0)
    s = RocketState(altitude=200000.0)
    assert main.select_pitch(s, EARTH, create_test_config(guidance='gravity_turn'), gt) == 90.0


def test_build_command_cuts_throttle_when_empty():
    rocket = create_reference_rocket()
    gt = gravity_turn_for_orbit(EARTH, 200000.0)
    empty = _coasting_state(rocket, 1000.0, [0.0, 0.0, 0.0])
    cmd = main.build_command(empty, rocket, EARTH, create_test_config(), gt)
    assert cmd.engine_throttle == [0.0] * 4
    cmd = main.build_command(empty, rocket, EARTH, create_test_config(cutoff_on_empty=False), gt)
    assert cmd.engine_throttle == [1.0] * 4


def test_run_flight_stops_on_orbit():
    rocket = create_reference_rocket()
    r = R + 400000.0
    start = _coasting_state(rocket, 400000.0, [0.0, math.sqrt(EARTH.mu / r), 0.0])
    state, log, reason = main.run_flight(rocket=rocket, initial_state=start,
                                         config=create_test_config(max_time=100.0))
    assert reason == 'ORBIT ACHIEVED'
    assert state.in_orbit
    assert state.time == pytest.approx(0.1)
    assert log.status[-1] == 'in_orbit'


def test_run_flight_landing():
    rocket = create_reference_rocket()
    start = _coasting_state(rocket, 0.05, [-1.0, 0.0, 0.0])
    state, log, reason = main.run_flight(rocket=rocket, initial_state=start,
                                         config=create_test_config())
    assert state.landed
    assert reason.startswith('LANDED')
    assert log.status[-1] == 'landed'


def test_run_flight_crash():
    rocket = create_reference_rocket()
    start = _coasting_state(rocket, 10.0, [-50.0, 0.0, 0.0])
    state, log, reason = main.run_flight(rocket=rocket, initial_state=start,
                                         config=create_test_config())
    assert state.crashed
    assert reason.startswith('CRASH')


def test_run_flight_rejects_bad_config():
    bad = RocketConfig(mass_empty=-10.0, mass_fuel=0.0, mass_fuel_max=0.0)
    state, log, reason = main.run_flight(rocket=bad, config=create_test_config())
    assert reason.startswith('Invalid configuration')
    assert len(log) == 0


def test_run_flight_stops_on_invalid_state():
    rocket = create_reference_rocket()
    start = create_initial_state(rocket, main.reference_launch_position())
    start.mass_current += 100.0
    state, log, reason = main.run_flight(rocket=rocket, initial_state=start,
                                         config=create_test_config())
    assert reason.startswith('Validation failure')
    assert state.time == 0.0


def test_run_flight_kwargs_override_config():
    state, log, reason = main.run_flight(config=create_test_config(max_time=100.0),
                                         dt=0.5, max_time=2.0)
    assert state.time == pytest.approx(2.0)


def test_gravity_turn_pitches_over():
    state, log, reason = main.run_flight(config=create_test_config(max_time=20.0, guidance='gravity_turn'))
    assert log.pitch[0] == 0.0
    assert max(log.pitch) > 0.0


def test_simulation_log_to_csv(tmp_path):
    state, log, reason = main.run_flight(config=create_test_config(max_time=2.0))
    path = tmp_path / "out" / "flight.csv"
    log.to_csv(str(path))
    with open(path, newline='') as fh:
        rows = list(csv.reader(fh))
    assert rows[0][0] == 'time'
    assert 'apoapsis_km' in rows[0]
    assert len(rows) == len(log) + 1


def test_simulation_log_positions():
    state, log, reason = main.run_flight(config=create_test_config(max_time=1.0))
    positions = log.positions()
    assert positions.shape == (len(log), 3)
    np.testing.assert_allclose(positions[-1], [log.position_x[-1], log.position_y[-1], log.position_z[-1]])
