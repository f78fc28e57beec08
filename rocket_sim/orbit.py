"""
Rocket Flight Simulation - Orbit Prediction

Derives the osculating two-body orbit from instantaneous position and
velocity using specific orbital energy and specific angular momentum:

    eps = v^2/2 - mu/r
    h   = |r x v|
    a   = -mu / (2 eps)
    e   = sqrt(1 - h^2 / (mu a))

Apoapsis and periapsis are reported as altitudes above the planet surface.
"""

import math
from dataclasses import dataclass

import numpy as np

from . import constants as C
from . import vectors as vec
from .planet import PlanetConfig, EARTH
from .state import RocketState


@dataclass(frozen=True)
class OrbitPrediction:
    """
    Snapshot of the orbit implied by the current state.

    Attributes:
        apoapsis: Apoapsis altitude (m), C.APOAPSIS_UNDEFINED for open trajectories
        periapsis: Periapsis altitude (m), current altitude for open trajectories
        eccentricity: 0 circular, <1 ellipse, 1 parabolic, >1 hyperbolic
        orbital_velocity: Current speed (m/s)
        required_velocity: Circular-orbit speed at the current altitude (m/s)
        is_stable: Bound orbit whose periapsis clears the atmosphere
        semi_major_axis: a (m), inf for parabolic, negative for hyperbolic
        specific_energy: eps (J/kg)
        angular_momentum: |h| (m^2/s)
    """
    apoapsis: float
    periapsis: float
    eccentricity: float
    orbital_velocity: float
    required_velocity: float
    is_stable: bool
    semi_major_axis: float = math.inf
    specific_energy: float = 0.0
    angular_momentum: float = 0.0

    @property
    def is_closed(self) -> bool:
        """Bound elliptical orbit (apoapsis defined)."""
        return self.eccentricity < 1.0 and 0.0 < self.semi_major_axis < math.inf


def circular_velocity(distance: float, planet: PlanetConfig = EARTH) -> float:
    """Circular-orbit speed at a distance from the planet centre (m/s)."""
    if distance <= 0.0 or planet.mu <= 0.0:
        return 0.0
    return math.sqrt(planet.mu / distance)


def escape_velocity(distance: float, planet: PlanetConfig = EARTH) -> float:
    """Escape speed at a distance from the planet centre (m/s)."""
    return math.sqrt(2.0) * circular_velocity(distance, planet)


def predict_orbit_from_vectors(position: np.ndarray, velocity: np.ndarray,
                               planet: PlanetConfig = EARTH) -> OrbitPrediction:
    """
    Predict the orbit from a position/velocity pair.

    Degenerate inputs (position at the centre, massless planet) return the
    open-trajectory sentinel rather than raising.
    """
    r = vec.magnitude(position)
    v = vec.magnitude(velocity)
    altitude = r - planet.radius
    mu = planet.mu
    required = circular_velocity(planet.radius + altitude, planet)

    if r < C.ZERO_TOLERANCE or mu <= 0.0:
        return OrbitPrediction(
            apoapsis=C.APOAPSIS_UNDEFINED,
            periapsis=altitude,
            eccentricity=1.0,
            orbital_velocity=v,
            required_velocity=required,
            is_stable=False,
        )

    specific_energy = 0.5 * v * v - mu / r
    h = vec.magnitude(vec.cross(position, velocity))

    if abs(specific_energy) < C.PARABOLIC_TOLERANCE:
        a = math.inf
        eccentricity = 1.0
    else:
        a = -mu / (2.0 * specific_energy)
        e_sq = 1.0 - (h * h) / (mu * a)
        eccentricity = math.sqrt(max(0.0, e_sq))

    if eccentricity < 1.0 and 0.0 < a < math.inf:
        apoapsis = a * (1.0 + eccentricity) - planet.radius
        periapsis = a * (1.0 - eccentricity) - planet.radius
    else:
        apoapsis = C.APOAPSIS_UNDEFINED
        periapsis = altitude

    is_stable = periapsis > planet.atmosphere_height and eccentricity < 1.0

    return OrbitPrediction(
        apoapsis=apoapsis,
        periapsis=periapsis,
        eccentricity=eccentricity,
        orbital_velocity=v,
        required_velocity=required,
        is_stable=is_stable,
        semi_major_axis=a,
        specific_energy=specific_energy,
        angular_momentum=h,
    )


def predict_orbit(state: RocketState, planet: PlanetConfig = EARTH) -> OrbitPrediction:
    """Predict the orbit implied by a vehicle state."""
    return predict_orbit_from_vectors(state.position, state.velocity, planet)


def check_orbital_stability(state: RocketState, planet: PlanetConfig = EARTH) -> bool:
    """Full-predictor orbit verdict."""
    return predict_orbit(state, planet).is_stable


def check_orbital_stability_speed_ratio(state: RocketState,
                                        planet: PlanetConfig = EARTH) -> bool:
    """
    Legacy orbit heuristic.

    Above the atmosphere and speed within +/-10 % of local circular speed.
    Cruder than check_orbital_stability: it ignores flight-path angle, so a
    vertical coast through the right speed band passes. Kept as a fallback.
    """
    distance = vec.magnitude(state.position)
    altitude = distance - planet.radius
    if altitude < planet.atmosphere_height:
        return False

    v_circular = circular_velocity(distance, planet)
    if v_circular <= 0.0:
        return False

    speed_ratio = vec.magnitude(state.velocity) / v_circular
    return C.ORBIT_SPEED_RATIO_MIN <= speed_ratio <= C.ORBIT_SPEED_RATIO_MAX
