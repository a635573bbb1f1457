"""
Geometry on the unit torus.

The arena is [0, 1) x [0, 1) with both axes wrapping, so every distance
and direction is taken along the shortest wrapped path.
"""

import math

import numpy as np

TAU = 2.0 * math.pi


def wrap(value: float, period: float = 1.0) -> float:
    """Reduce value into [0, period)."""
    value = value % period
    # x % p can round up to p itself for tiny negative x
    if value >= period:
        value = 0.0
    return value


def wrap_position(position: np.ndarray) -> np.ndarray:
    """Wrap a point (or an array of points) back onto the unit torus."""
    wrapped = np.mod(position, 1.0)
    wrapped[wrapped >= 1.0] = 0.0
    return wrapped


def wrap_angle(angle):
    """Normalise an angle (scalar or array) into (-pi, pi]."""
    return math.pi - np.mod(math.pi - angle, TAU)


def wrapped_delta(origin: np.ndarray, targets: np.ndarray) -> np.ndarray:
    """
    Shortest displacement from origin to each target.

    Args:
        origin:  point of shape (2,)
        targets: points of shape (2,) or (N, 2)

    Returns:
        displacements of the same shape as targets, each component in
        [-0.5, 0.5]
    """
    delta = np.asarray(targets, dtype=np.float64) - origin
    delta = np.where(delta > 0.5, delta - 1.0, delta)
    delta = np.where(delta < -0.5, delta + 1.0, delta)
    return delta


def wrapped_distance(a: np.ndarray, b: np.ndarray) -> float:
    """Euclidean distance between two points along the shortest wrapped path."""
    d = np.abs(np.asarray(a, dtype=np.float64) - np.asarray(b, dtype=np.float64))
    d = np.minimum(d, 1.0 - d)
    return float(math.hypot(d[0], d[1]))


def heading(rotation: float) -> np.ndarray:
    """Unit vector an animal with the given rotation is facing."""
    return np.array([math.cos(rotation), math.sin(rotation)])
