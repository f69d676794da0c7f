"""
===============================================================================
ORBITAL MANEUVERS - Vector Algebra
===============================================================================
Small, pure helpers over 3-element float64 NumPy arrays.  None of them
mutates its arguments; every result is a new array or a Python float.

The only error paths are domain errors: ``cross`` needs 3-vectors,
``unit`` cannot normalise a zero vector, and ``clamped_arccos`` refuses
arguments that are outside [-1, 1] by more than round-off.
===============================================================================
"""

from typing import Sequence, Union

import numpy as np

from orbital_maneuvers.core.exceptions import (
    DegenerateOrbitError,
    InvalidInputError,
    NumericDomainError,
)

Vector3 = np.ndarray
VectorLike = Union[np.ndarray, Sequence[float]]


def as_vector3(v: VectorLike, name: str = 'vector') -> Vector3:
    """Return *v* as a new float64 array of shape (3,)."""
    arr = np.array(v, dtype=np.float64)
    if arr.shape != (3,):
        raise InvalidInputError(
            f"{name} must have exactly 3 components, got shape {arr.shape}"
        )
    return arr


def add(u: VectorLike, v: VectorLike) -> np.ndarray:
    return np.add(np.asarray(u, dtype=np.float64), np.asarray(v, dtype=np.float64))


def sub(u: VectorLike, v: VectorLike) -> np.ndarray:
    return np.subtract(np.asarray(u, dtype=np.float64), np.asarray(v, dtype=np.float64))


def scale(v: VectorLike, s: float) -> np.ndarray:
    return np.asarray(v, dtype=np.float64) * float(s)


def dot(u: VectorLike, v: VectorLike) -> float:
    return float(np.dot(np.asarray(u, dtype=np.float64), np.asarray(v, dtype=np.float64)))


def cross(u: VectorLike, v: VectorLike) -> Vector3:
    """Cross product u x v.  Only defined for 3-vectors."""
    return np.cross(as_vector3(u, 'u'), as_vector3(v, 'v'))


def norm(v: VectorLike) -> float:
    """Euclidean norm, sqrt(v . v).  The zero vector has norm 0."""
    arr = np.asarray(v, dtype=np.float64)
    return float(np.sqrt(np.dot(arr, arr)))


def unit(v: VectorLike) -> np.ndarray:
    """
    Unit vector along *v*.

    Raises
    ------
    DegenerateOrbitError
        If *v* has zero length (its direction is undefined).
    """
    mag = norm(v)
    if mag == 0.0:
        raise DegenerateOrbitError("Cannot normalise a zero-length vector.")
    return np.asarray(v, dtype=np.float64) / mag


def rotate(matrix: np.ndarray, v: VectorLike) -> Vector3:
    """Apply a 3x3 matrix to a 3-vector."""
    m = np.asarray(matrix, dtype=np.float64)
    if m.shape != (3, 3):
        raise InvalidInputError(f"Rotation matrix must be 3x3, got shape {m.shape}")
    return m @ as_vector3(v)


def rotate_about_axis(v: VectorLike, axis: VectorLike, angle: float) -> Vector3:
    """
    Rotate *v* by *angle* (right-hand rule) about *axis* (Rodrigues formula):

        v' = v cos(a) + (k x v) sin(a) + k (k . v)(1 - cos(a))

    where k is the unit vector along *axis*.  The component of v along k is
    unchanged, so |v'| == |v|.
    """
    vec = as_vector3(v)
    k = unit(as_vector3(axis, 'axis'))
    c = np.cos(angle)
    s = np.sin(angle)
    return vec * c + np.cross(k, vec) * s + k * np.dot(k, vec) * (1.0 - c)


def clamped_arccos(x: float, tolerance: float = 1e-9) -> float:
    """
    Inverse cosine that tolerates round-off just outside [-1, 1].

    When two vectors are (anti)parallel, their normalised dot product can
    come out as 1.0000000000000002; the argument is clamped so that the
    boundary angle (0 or pi) is returned instead of NaN.

    Raises
    ------
    NumericDomainError
        If |x| exceeds 1 by more than *tolerance*, or x is not finite.
    """
    x = float(x)
    if not np.isfinite(x) or abs(x) > 1.0 + tolerance:
        raise NumericDomainError(
            f"arccos argument {x!r} is outside [-1, 1] beyond tolerance {tolerance:g}"
        )
    return float(np.arccos(np.clip(x, -1.0, 1.0)))


def angle_between(u: VectorLike, v: VectorLike, tolerance: float = 1e-9) -> float:
    """Unsigned angle in [0, pi] between two non-zero vectors."""
    return clamped_arccos(dot(unit(u), unit(v)), tolerance)
