"""
Rocket Flight Simulation - Telemetry Snapshot

Flattens a RocketState and its orbit prediction into plain Python values,
the shape a transport layer serializes for broadcast.
"""

from .orbit import predict_orbit
from .planet import PlanetConfig, EARTH, cartesian_to_spherical
from .state import RocketState
from .types import TelemetrySnapshot


def build_telemetry(state: RocketState, planet: PlanetConfig = EARTH) -> TelemetrySnapshot:
    """Build one telemetry record for the state."""
    prediction = predict_orbit(state, planet)
    latitude, longitude, _ = cartesian_to_spherical(state.position, planet)

    record = state.to_dict()
    record.update({
        'latitude': latitude,
        'longitude': longitude,
        'orbit_apoapsis': float(prediction.apoapsis),
        'orbit_periapsis': float(prediction.periapsis),
        'orbit_eccentricity': float(prediction.eccentricity),
        'orbit_required_velocity': float(prediction.required_velocity),
        'orbit_is_stable': bool(prediction.is_stable),
    })
    return record
