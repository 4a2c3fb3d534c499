"""Geometry and timing helpers for a 2D hierarchical animation exercise.

The world spans [-5, 5] x [-5, 5]; a grid of lines is drawn behind unit
circles that are placed by scaling a parent transformation.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from .transforms import scale

CIRCLE_SEGMENTS = 360
CIRCLE_VERTEX_COUNT = CIRCLE_SEGMENTS + 2
GRID_VERTEX_COUNT = 40
ANIMATION_PERIOD = 5.0


def circle_positions() -> np.ndarray:
    """Triangle-fan vertices of a unit circle: the centre, then 361 rim points."""
    angles = np.arange(CIRCLE_SEGMENTS + 1) * 2.0 * 3.14 / 360.0
    rim = np.column_stack((np.cos(angles), np.sin(angles), np.zeros(len(angles))))
    return np.vstack((np.zeros((1, 3)), rim)).astype(np.float32)


def grid_lines() -> np.ndarray:
    """Line-pair vertices of a grid: vertical lines first, then horizontal."""
    vertical = [((i, -5.0, 0.0), (i, 5.0, 0.0)) for i in range(-5, 5)]
    horizontal = [((-5.0, i, 0.0), (5.0, i, 0.0)) for i in range(-5, 5)]
    return np.array(vertical + horizontal, dtype=np.float32).reshape(-1, 3)


def animation_time(t: float) -> float:
    """Animation parameter in [0, 1), looping every five seconds."""
    return math.fmod(t / ANIMATION_PERIOD, 1.0)


def circle_transform(sx: float, sy: float, t: Sequence[Sequence[float]]) -> np.ndarray:
    """Transformation placing a unit circle scaled by ``(sx, sy)`` under ``t``."""
    return scale(t, (sx, sy, 1.0))