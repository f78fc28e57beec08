import json

import pytest
from rocket_sim import constants as C
from rocket_sim.main import reference_launch_position
from rocket_sim.state import create_initial_state
from rocket_sim.telemetry import build_telemetry
from rocket_sim.vehicle import create_reference_rocket


def _launch_telemetry():
    s = create_initial_state(create_reference_rocket(), reference_launch_position())
    return build_telemetry(s)


def test_telemetry_fields():
    record = _launch_telemetry()
    for key in ('position', 'velocity', 'altitude', 'fuel_remaining', 'latitude', 'longitude',
                'orbit_apoapsis', 'orbit_periapsis', 'orbit_eccentricity',
                'orbit_required_velocity', 'orbit_is_stable'):
        assert key in record


def test_telemetry_launch_site():
    record = _launch_telemetry()
    assert record['latitude'] == pytest.approx(C.LAUNCH_LATITUDE)
    assert record['longitude'] == pytest.approx(C.LAUNCH_LONGITUDE)
    assert record['altitude'] == pytest.approx(C.LAUNCH_ALTITUDE, abs=1e-6)


def test_telemetry_at_rest_has_no_orbit():
    record = _launch_telemetry()
    assert record['orbit_apoapsis'] == C.APOAPSIS_UNDEFINED
    assert record['orbit_is_stable'] is False
    assert record['orbit_required_velocity'] > 7000.0


def test_telemetry_is_json_serializable():
    decoded = json.loads(json.dumps(_launch_telemetry()))
    assert decoded['fuel_remaining'] == pytest.approx(C.REFERENCE_MASS_FUEL)
