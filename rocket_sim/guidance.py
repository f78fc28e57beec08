"""
Guidance module producing pitch commands for the ascent.

The shaper is advisory: it computes a pitch value (degrees from local up)
that the driver places into the next ControlCommand. It never mutates state
or calls the integrator.
"""

from dataclasses import dataclass

import numpy as np

from . import constants as C
from .control import ControlCommand
from .planet import PlanetConfig, EARTH
from .state import RocketState
from .vehicle import RocketConfig


@dataclass(frozen=True)
class GravityTurnConfig:
    """
    Gravity-turn shaping parameters.

    Attributes:
        target_altitude: Target orbital altitude (m)
        turn_start_alt: Altitude where pitch-over begins (m)
        turn_end_alt: Altitude where the vehicle is horizontal (m)
        auto_pitch: If False the shaper always commands vertical flight
    """
    target_altitude: float
    turn_start_alt: float
    turn_end_alt: float
    auto_pitch: bool = True


def gravity_turn_for_orbit(planet: PlanetConfig = EARTH,
                           target_altitude: float = C.TARGET_ORBIT_ALTITUDE) -> GravityTurnConfig:
    """
    Derive gravity-turn altitudes for a target orbit.

    turn_start = max(1 % of target, 1000 m)
    turn_end   = max(70 % of target, 50 % of atmosphere height)
    """
    turn_start = max(target_altitude * C.TURN_START_FRACTION, C.TURN_START_MIN_ALTITUDE)
    turn_end = max(target_altitude * C.TURN_END_FRACTION,
                   planet.atmosphere_height * C.TURN_END_ATMOSPHERE_FRACTION)
    return GravityTurnConfig(
        target_altitude=target_altitude,
        turn_start_alt=turn_start,
        turn_end_alt=turn_end,
        auto_pitch=True,
    )


def pitch_from_altitude(altitude: float, gt_config: GravityTurnConfig) -> float:
    """
    Ease-out pitch ramp.

    0 deg below turn_start_alt, 90 deg at/above turn_end_alt, and
    90 * sin(progress * pi/2) in between: quick departure from vertical,
    smooth arrival at horizontal.
    """
    if not gt_config.auto_pitch:
        return 0.0

    start = gt_config.turn_start_alt
    end = gt_config.turn_end_alt

    if altitude < start:
        return 0.0
    if altitude >= end:
        return C.MAX_PITCH_DEG

    progress = (altitude - start) / (end - start)
    return C.MAX_PITCH_DEG * float(np.sin(progress * np.pi / 2.0))


def calculate_optimal_pitch(state: RocketState, planet: PlanetConfig,
                            gt_config: GravityTurnConfig) -> float:
    """
    Pitch (deg) the gravity turn asks for at the state's altitude.

    The altitude is taken from the state, which the integrator keeps
    relative to `planet`.
    """
    return pitch_from_altitude(state.altitude, gt_config)


def fast_pitchover_profile(altitude: float) -> float:
    """
    Scripted low-altitude pitch program.

    Piecewise linear through (500 m, 0), (600 m, 25), (700 m, 60),
    (800 m, 80), (900 m, 90); vertical below and horizontal above.
    """
    return float(np.interp(altitude, C.FAST_PITCHOVER_ALTITUDES, C.FAST_PITCHOVER_PITCHES))


def build_guided_command(state: RocketState, config: RocketConfig, planet: PlanetConfig,
                         gt_config: GravityTurnConfig, throttle: float = 1.0) -> ControlCommand:
    """Uniform-throttle command steered by the gravity turn."""
    return ControlCommand(
        engine_throttle=[throttle] * config.engine_count,
        pitch=calculate_optimal_pitch(state, planet, gt_config),
    )
