"""Small vector and 4x4 matrix helpers built on numpy."""

from __future__ import annotations

import math

import numpy as np

UP = np.array([0.0, 1.0, 0.0])
RIGHT = np.array([1.0, 0.0, 0.0])


def vec3(x: float, y: float, z: float) -> np.ndarray:
    """Return a 3-component float vector."""
    return np.array([x, y, z], dtype=float)


def normalized(v) -> np.ndarray:
    """Return ``v`` scaled to unit length; a zero vector is returned unchanged."""
    arr = np.asarray(v, dtype=float)
    length = float(np.linalg.norm(arr))
    if length == 0.0:
        return arr.copy()
    return arr / length


def min_vec(a, b) -> np.ndarray:
    """Component-wise minimum of two vectors."""
    return np.minimum(np.asarray(a, dtype=float), np.asarray(b, dtype=float))


def max_vec(a, b) -> np.ndarray:
    """Component-wise maximum of two vectors."""
    return np.maximum(np.asarray(a, dtype=float), np.asarray(b, dtype=float))


def max_component(v) -> float:
    """Largest of the three components of ``v``."""
    x, y, z = (float(c) for c in v)
    if x > y and x > z:
        return x
    return y if y > z else z


def orthonormal_basis(z) -> tuple[np.ndarray, np.ndarray]:
    """Return two unit axes spanning the plane whose normal is ``z``."""
    z = np.asarray(z, dtype=float)
    base = UP if abs(z[0]) > 0.1 else RIGHT
    x = normalized(np.cross(base, z))
    y = normalized(np.cross(x, z))
    return x, y


def scaling(sx: float, sy: float, sz: float) -> np.ndarray:
    """Non-uniform scaling matrix."""
    return np.diag([sx, sy, sz, 1.0]).astype(float)


def uniform_scaling(s: float) -> np.ndarray:
    """Uniform scaling matrix."""
    return scaling(s, s, s)


def translation(v) -> np.ndarray:
    """Translation matrix moving points by ``v``."""
    m = np.identity(4)
    m[:3, 3] = np.asarray(v, dtype=float)
    return m


def rotate_x(radians: float) -> np.ndarray:
    """Rotation about the x axis."""
    c, s = math.cos(radians), math.sin(radians)
    return np.array(
        [[1.0, 0.0, 0.0, 0.0], [0.0, c, -s, 0.0], [0.0, s, c, 0.0], [0.0, 0.0, 0.0, 1.0]]
    )


def rotate_y(radians: float) -> np.ndarray:
    """Rotation about the y axis."""
    c, s = math.cos(radians), math.sin(radians)
    return np.array(
        [[c, 0.0, s, 0.0], [0.0, 1.0, 0.0, 0.0], [-s, 0.0, c, 0.0], [0.0, 0.0, 0.0, 1.0]]
    )


def rotate_z(radians: float) -> np.ndarray:
    """Rotation about the z axis."""
    c, s = math.cos(radians), math.sin(radians)
    return np.array(
        [[c, -s, 0.0, 0.0], [s, c, 0.0, 0.0], [0.0, 0.0, 1.0, 0.0], [0.0, 0.0, 0.0, 1.0]]
    )


def rotation(axis, radians: float) -> np.ndarray:
    """Rotation by ``radians`` about an arbitrary (not necessarily unit) axis."""
    x, y, z = normalized(axis)
    c, s = math.cos(radians), math.sin(radians)
    k = 1.0 - c
    return np.array(
        [
            [x * x * k + c, y * x * k - z * s, z * x * k + y * s, 0.0],
            [x * y * k + z * s, y * y * k + c, z * y * k - x * s, 0.0],
            [x * z * k - y * s, y * z * k + x * s, z * z * k + c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def transform_point(matrix, point) -> np.ndarray:
    """Apply a 4x4 matrix to a 3D point."""
    p = np.append(np.asarray(point, dtype=float), 1.0)
    return (np.asarray(matrix, dtype=float) @ p)[:3]


def transform_direction(matrix, direction) -> np.ndarray:
    """Apply a 4x4 matrix to a 3D direction (ignoring translation)."""
    d = np.append(np.asarray(direction, dtype=float), 0.0)
    return (np.asarray(matrix, dtype=float) @ d)[:3]