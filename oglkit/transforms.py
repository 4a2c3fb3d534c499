"""Matrix and vector helpers following the usual right-handed OpenGL conventions.

Matrices are 4x4 (or 3x3) ``numpy`` arrays acting on column vectors, so a
point ``p`` is transformed with ``m @ p``.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

ArrayLike = Sequence[float] | np.ndarray


def _vec(v: ArrayLike) -> np.ndarray:
    return np.asarray(v, dtype=float)


def _mat(m: ArrayLike) -> np.ndarray:
    return np.array(m, dtype=float)


def normalize(v: ArrayLike) -> np.ndarray:
    """Return ``v`` scaled to unit length."""
    a = _vec(v)
    length = float(np.linalg.norm(a))
    if length == 0.0:
        raise ValueError("cannot normalize a zero-length vector")
    return a / length


def perspective(fovy: float, aspect: float, near: float, far: float) -> np.ndarray:
    """Perspective projection with a vertical field of view in radians.

    Depth is mapped to the [-1, 1] clip range.
    """
    if aspect == 0:
        raise ValueError("aspect ratio must be non-zero")
    if near == far:
        raise ValueError("near and far planes must differ")
    f = 1.0 / math.tan(fovy / 2.0)
    m = np.zeros((4, 4))
    m[0, 0] = f / aspect
    m[1, 1] = f
    m[2, 2] = -(far + near) / (far - near)
    m[2, 3] = -(2.0 * far * near) / (far - near)
    m[3, 2] = -1.0
    return m


def look_at(eye: ArrayLike, center: ArrayLike, up: ArrayLike) -> np.ndarray:
    """View matrix placing the eye at ``eye`` and looking towards ``center``."""
    eye_v = _vec(eye)
    f = normalize(_vec(center) - eye_v)
    s = normalize(np.cross(f, _vec(up)))
    u = np.cross(s, f)
    m = np.identity(4)
    m[0, :3] = s
    m[1, :3] = u
    m[2, :3] = -f
    m[0, 3] = -float(np.dot(s, eye_v))
    m[1, 3] = -float(np.dot(u, eye_v))
    m[2, 3] = float(np.dot(f, eye_v))
    return m


def translate(m: ArrayLike, v: ArrayLike) -> np.ndarray:
    """Return ``m`` followed (on the right) by a translation of ``v``."""
    t = np.identity(4)
    t[:3, 3] = _vec(v)
    return _mat(m) @ t


def scale(m: ArrayLike, v: ArrayLike) -> np.ndarray:
    """Return ``m`` followed (on the right) by a scaling of ``v``."""
    s = np.identity(4)
    s[0, 0], s[1, 1], s[2, 2] = _vec(v)
    return _mat(m) @ s


def rotate(m: ArrayLike, angle: float, axis: ArrayLike) -> np.ndarray:
    """Return ``m`` followed by a rotation of ``angle`` radians about ``axis``."""
    x, y, z = normalize(axis)
    c = math.cos(angle)
    s = math.sin(angle)
    t = 1.0 - c
    r = np.identity(4)
    r[:3, :3] = [
        [t * x * x + c, t * x * y - s * z, t * x * z + s * y],
        [t * x * y + s * z, t * y * y + c, t * y * z - s * x],
        [t * x * z - s * y, t * y * z + s * x, t * z * z + c],
    ]
    return _mat(m) @ r


def inverse_transpose(m: ArrayLike) -> np.ndarray:
    """Transpose of the inverse of ``m`` (used for normal matrices)."""
    return np.linalg.inv(_mat(m)).T


def unproject(
    win: ArrayLike, model: ArrayLike, proj: ArrayLike, viewport: ArrayLike
) -> np.ndarray:
    """Map window coordinates (x, y, depth in [0, 1]) back to object space."""
    x, y, depth = _vec(win)
    vx, vy, vw, vh = _vec(viewport)
    inverse = np.linalg.inv(_mat(proj) @ _mat(model))
    ndc = np.array([(x - vx) / vw, (y - vy) / vh, depth, 1.0]) * 2.0 - 1.0
    obj = inverse @ ndc
    return obj[:3] / obj[3]