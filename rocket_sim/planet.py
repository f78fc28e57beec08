"""
Rocket Flight Simulation - Planet Model

Immutable description of the simulated body (spherical, point-mass gravity,
exponential atmosphere) and the spherical coordinate conversions used to
place a launch site on it.
"""

from dataclasses import dataclass

import numpy as np

from . import constants as C


@dataclass(frozen=True)
class PlanetConfig:
    """
    Immutable planet configuration.

    Attributes:
        radius: Mean radius (m)
        mass: Mass (kg)
        atmosphere_height: Altitude above which drag is zero (m)
        surface_pressure: Surface density multiplier relative to Earth (-)
        scale_height: Exponential atmosphere scale height (m)
    """
    radius: float = C.EARTH_RADIUS
    mass: float = C.EARTH_MASS
    atmosphere_height: float = C.ATMOSPHERE_HEIGHT
    surface_pressure: float = C.SURFACE_PRESSURE
    scale_height: float = C.SCALE_HEIGHT

    @property
    def mu(self) -> float:
        """Gravitational parameter G*M (m^3/s^2)."""
        return C.G_CONSTANT * self.mass


EARTH = PlanetConfig()


def earth_default() -> PlanetConfig:
    """Return the Earth configuration."""
    return EARTH


def spherical_to_cartesian(latitude: float, longitude: float, altitude: float,
                           planet: PlanetConfig = EARTH) -> np.ndarray:
    """
    Convert a geocentric site to a planet-centred position.

    Args:
        latitude: Latitude (deg)
        longitude: Longitude (deg)
        altitude: Height above the mean radius (m)
        planet: Body the site is on

    Returns:
        Position vector (m)
    """
    lat = np.radians(latitude)
    lon = np.radians(longitude)
    r = planet.radius + altitude
    return np.array([
        r * np.cos(lat) * np.cos(lon),
        r * np.cos(lat) * np.sin(lon),
        r * np.sin(lat),
    ])


def cartesian_to_spherical(position: np.ndarray, planet: PlanetConfig = EARTH) -> tuple:
    """
    Convert a planet-centred position to (latitude_deg, longitude_deg, altitude_m).

    The centre of the planet has no defined direction and maps to
    (0, 0, -radius).
    """
    x, y, z = position
    r = float(np.linalg.norm(position))
    altitude = r - planet.radius
    if r < C.ZERO_TOLERANCE:
        return 0.0, 0.0, altitude
    latitude = np.degrees(np.arcsin(np.clip(z / r, -1.0, 1.0)))
    longitude = np.degrees(np.arctan2(y, x))
    return float(latitude), float(longitude), float(altitude)
