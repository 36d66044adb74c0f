"""
Vector Primitives
=================

3D vectors are plain numpy arrays marked read-only. Every helper here
returns a new array, so a vector handed to the renderer can never be
changed underneath it by the integrator.
"""

import numpy as np

from .errors import DegenerateStateError

# Below this magnitude a vector has no usable direction
EPSILON = 1e-10


def vec3(value) -> np.ndarray:
    """
    Build a read-only 3-vector.

    Args:
        value: Any sequence of three numbers

    Returns:
        New float array of shape (3,) with writeable=False
    """
    arr = np.array(value, dtype=float)
    if arr.shape != (3,):
        raise ValueError(f"Expected a 3-vector, got shape {arr.shape}")
    arr.flags.writeable = False
    return arr


ZERO = vec3([0.0, 0.0, 0.0])


def norm(v: np.ndarray) -> float:
    """Euclidean length as a Python float."""
    return float(np.linalg.norm(v))


def unit(v: np.ndarray, quantity: str = "vector") -> np.ndarray:
    """
    Unit vector along v.

    Args:
        v: Vector to normalize
        quantity: Name used in the error message

    Raises:
        DegenerateStateError: If |v| is below EPSILON
    """
    magnitude = norm(v)
    if magnitude < EPSILON:
        raise DegenerateStateError(quantity, magnitude)
    return vec3(v / magnitude)


def with_magnitude(v: np.ndarray, magnitude: float, quantity: str = "vector") -> np.ndarray:
    """Vector with the direction of v and the given length."""
    return vec3(unit(v, quantity) * magnitude)


def cross(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return vec3(np.cross(a, b))
