"""
Rocket Flight Simulation - Physical Constants and Reference Parameters

This module defines the physical constants, the default planet (Earth),
numerical tolerances, guidance-shaping factors and the reference vehicle
used throughout the simulation.
"""

import numpy as np

# =============================================================================
# PHYSICAL CONSTANTS
# =============================================================================

# Gravitational constant (m^3 / (kg s^2))
G_CONSTANT = 6.674e-11

# Sea-level air density for a planet with surface_pressure = 1.0 (kg/m^3)
RHO_0 = 1.225

# =============================================================================
# EARTH PARAMETERS (default PlanetConfig)
# =============================================================================

EARTH_RADIUS = 6371000.0       # Mean radius (m)
EARTH_MASS = 5.972e24          # Mass (kg)
ATMOSPHERE_HEIGHT = 100000.0   # Karman line (m)
SURFACE_PRESSURE = 1.0         # Relative to Earth sea level
SCALE_HEIGHT = 8500.0          # Exponential atmosphere scale height (m)

# =============================================================================
# FRAME AXES
# =============================================================================

# Reference axis for the local horizontal direction, and its substitute
# near the poles where the first one becomes parallel to local up.
REFERENCE_AXIS = np.array([0.0, 0.0, 1.0])
POLE_FALLBACK_AXIS = np.array([1.0, 0.0, 0.0])

# =============================================================================
# TERMINAL CONDITIONS
# =============================================================================

# Touchdown speed below which ground contact counts as a landing (m/s)
LANDING_SPEED_LIMIT = 5.0

# Legacy orbit heuristic: speed within this band of local circular velocity
ORBIT_SPEED_RATIO_MIN = 0.9
ORBIT_SPEED_RATIO_MAX = 1.1

# Sentinel apoapsis for open (parabolic/hyperbolic) trajectories (m)
APOAPSIS_UNDEFINED = -1.0

# =============================================================================
# GUIDANCE SHAPING (gravity turn)
# =============================================================================

TURN_START_FRACTION = 0.01          # of target altitude
TURN_START_MIN_ALTITUDE = 1000.0    # m
TURN_END_FRACTION = 0.7             # of target altitude
TURN_END_ATMOSPHERE_FRACTION = 0.5  # of atmosphere height
MAX_PITCH_DEG = 90.0                # horizontal

# Scripted pitch-over program (altitude m, pitch deg) breakpoints
FAST_PITCHOVER_ALTITUDES = np.array([500.0, 600.0, 700.0, 800.0, 900.0])
FAST_PITCHOVER_PITCHES = np.array([0.0, 25.0, 60.0, 80.0, 90.0])

# Default target orbit for the guided driver (m)
TARGET_ORBIT_ALTITUDE = 200000.0

# =============================================================================
# SIMULATION PARAMETERS
# =============================================================================

DT = 0.1          # Time step used by the reference runs (s)
MAX_TIME = 600.0  # Reference run window (s)
LOG_INTERVAL = 1.0  # Telemetry log period (s), 0 logs every step

# =============================================================================
# NUMERICAL TOLERANCES
# =============================================================================

ZERO_TOLERANCE = 1e-10        # normalize() degeneracy threshold
SMALL_VELOCITY_TOL = 1e-6     # Below this speed drag is disabled (m/s)
THRUST_TOLERANCE = 1e-6       # Below this thrust no frame is built (N)
POLE_FRAME_TOLERANCE = 0.01   # |up x reference| below this -> fallback axis
PARABOLIC_TOLERANCE = 1e-10   # |specific energy| treated as parabolic (J/kg)
MASS_TOLERANCE = 1e-6         # Mass identity check tolerance (kg)

# =============================================================================
# REFERENCE VEHICLE AND LAUNCH SITE
# =============================================================================

REFERENCE_NAME = "Test Rocket 1"
REFERENCE_MASS_EMPTY = 5000.0          # kg
REFERENCE_MASS_FUEL = 15000.0          # kg
REFERENCE_ENGINE_COUNT = 4
REFERENCE_ENGINE_THRUST = 500000.0     # N per engine
REFERENCE_ENGINE_CONSUMPTION = 250.0   # kg/s per engine
REFERENCE_DRAG_COEFFICIENT = 0.5
REFERENCE_CROSS_SECTION = 10.0         # m^2

LAUNCH_LATITUDE = 45.0    # deg
LAUNCH_LONGITUDE = 63.0   # deg
LAUNCH_ALTITUDE = 100.0   # m above mean radius

# Relative specific-energy drift tolerated while coasting in vacuum
ENERGY_TOLERANCE = 1e-3
