"""4x4 matrix helpers for a right-handed, OpenGL-style clip space.

Matrices are numpy arrays indexed ``[row, column]`` and act on column
vectors, so a translation sits in the last column.
"""

from __future__ import annotations

import math

import numpy as np


def _vec3(value) -> np.ndarray:
    vector = np.asarray(value, dtype=np.float64)
    if vector.shape != (3,):
        raise ValueError(f"expected a 3-component vector, got shape {vector.shape}")
    return vector


def _normalized(vector: np.ndarray) -> np.ndarray:
    length = float(np.linalg.norm(vector))
    if length == 0.0:
        raise ValueError("cannot normalise a zero-length vector")
    return vector / length


def _mat4(value) -> np.ndarray:
    matrix = np.asarray(value, dtype=np.float64)
    if matrix.shape != (4, 4):
        raise ValueError(f"expected a 4x4 matrix, got shape {matrix.shape}")
    return matrix


def identity() -> np.ndarray:
    """Return a new 4x4 identity matrix."""
    return np.eye(4, dtype=np.float64)


def translate(matrix, offset) -> np.ndarray:
    """Return ``matrix`` followed by a translation by ``offset``."""
    translation = identity()
    translation[:3, 3] = _vec3(offset)
    return _mat4(matrix) @ translation


def rotate(matrix, angle, axis) -> np.ndarray:
    """Return ``matrix`` followed by a rotation of ``angle`` radians about ``axis``."""
    a = _normalized(_vec3(axis))
    c = math.cos(angle)
    s = math.sin(angle)
    cross = np.array(
        [
            [0.0, -a[2], a[1]],
            [a[2], 0.0, -a[0]],
            [-a[1], a[0], 0.0],
        ]
    )
    rotation = identity()
    rotation[:3, :3] = c * np.eye(3) + (1.0 - c) * np.outer(a, a) + s * cross
    return _mat4(matrix) @ rotation


def scale(matrix, factors) -> np.ndarray:
    """Return ``matrix`` followed by a per-axis scale."""
    scaling = np.diag([*_vec3(factors), 1.0])
    return _mat4(matrix) @ scaling


def perspective(fovy, aspect, near, far) -> np.ndarray:
    """Perspective projection mapping view depth [-near, -far] to NDC [-1, 1]."""
    if aspect == 0:
        raise ValueError("aspect ratio must be non-zero")
    if near == far:
        raise ValueError("near and far planes must differ")
    focal = 1.0 / math.tan(fovy / 2.0)
    result = np.zeros((4, 4), dtype=np.float64)
    result[0, 0] = focal / aspect
    result[1, 1] = focal
    result[2, 2] = -(far + near) / (far - near)
    result[2, 3] = -(2.0 * far * near) / (far - near)
    result[3, 2] = -1.0
    return result


def look_at(eye, target, up) -> np.ndarray:
    """View matrix placing ``eye`` at the origin looking down -Z towards ``target``."""
    eye_v = _vec3(eye)
    forward = _normalized(_vec3(target) - eye_v)
    side = _normalized(np.cross(forward, _vec3(up)))
    upward = np.cross(side, forward)

    result = identity()
    result[0, :3] = side
    result[1, :3] = upward
    result[2, :3] = -forward
    result[0, 3] = -side @ eye_v
    result[1, 3] = -upward @ eye_v
    result[2, 3] = forward @ eye_v
    return result