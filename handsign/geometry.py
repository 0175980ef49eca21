"""
Vector math over 3-D landmark points.
"""
import math

import numpy as np

EPSILON = 1e-9


def vector(a, b) -> np.ndarray:
    """Return the vector from point `a` to point `b` (b - a)."""
    return np.asarray(b, dtype=float) - np.asarray(a, dtype=float)


def magnitude(v) -> float:
    """Euclidean norm of `v`."""
    return float(np.linalg.norm(np.asarray(v, dtype=float)))


def normalize(v) -> np.ndarray:
    """
    Scale `v` to unit length.

    Args:
        v: 3-D vector

    Returns:
        Unit vector, or the zero vector when `v` has (almost) no length
    """
    v = np.asarray(v, dtype=float)
    length = magnitude(v)
    if length < EPSILON:
        return np.zeros_like(v)
    return v / length


def angle_between(v1, v2) -> float:
    """
    Angle in radians between two vectors.

    The dot product is clamped to [-1, 1] so rounding never takes acos out of
    its domain. A zero vector normalizes to zero, which yields pi/2.
    """
    cosine = float(np.dot(normalize(v1), normalize(v2)))
    return math.acos(max(-1.0, min(1.0, cosine)))


def angle_2d(dx: float, dy: float) -> float:
    """Planar angle of (dx, dy) from the positive x-axis, in degrees [0, 360)."""
    angle = math.degrees(math.atan2(dy, dx)) % 360.0
    # tiny negative angles wrap to exactly 360.0
    return 0.0 if angle >= 360.0 else angle
