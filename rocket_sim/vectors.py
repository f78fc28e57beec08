"""
Rocket Flight Simulation - Vector Algebra

Side-effect-free 3-D vector primitives. Vectors are float64 NumPy arrays of
shape (3,) in planet-centred Cartesian coordinates. Every function returns a
new array and leaves its inputs untouched.
"""

import numpy as np

from . import constants as C


def vector3(x: float = 0.0, y: float = 0.0, z: float = 0.0) -> np.ndarray:
    """Build a Vector3 from components."""
    return np.array([x, y, z], dtype=np.float64)


def as_vector(v) -> np.ndarray:
    """Coerce any 3-sequence to a fresh float64 Vector3."""
    return np.array(v, dtype=np.float64).reshape(3)


def add(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return np.add(a, b, dtype=np.float64)


def sub(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return np.subtract(a, b, dtype=np.float64)


def scale(v: np.ndarray, s: float) -> np.ndarray:
    return np.multiply(v, s, dtype=np.float64)


def dot(a: np.ndarray, b: np.ndarray) -> float:
    return float(np.dot(a, b))


def cross(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return np.cross(a, b).astype(np.float64)


def magnitude(v: np.ndarray) -> float:
    return float(np.linalg.norm(v))


def normalize(v: np.ndarray) -> np.ndarray:
    """
    Unit vector along v.

    A vector shorter than C.ZERO_TOLERANCE has no defined direction and
    yields the zero vector. Callers that need a direction must treat a zero
    result as "disabled" rather than as an error.
    """
    mag = magnitude(v)
    if mag < C.ZERO_TOLERANCE:
        return np.zeros(3)
    return scale(v, 1.0 / mag)
