"""Colour-based picking of a ring of spirals.

Each spiral is drawn with a flat colour that encodes its index. Reading back
the pixel under the cursor then tells which spiral, if any, was hit.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .transforms import look_at, perspective, translate

STEPS_PER_SPIRAL = 100
SPIRAL_COUNT = 10
NO_SELECTION = -1

_CAMERA_POSITION = (-2.0, 4.0, 8.0)
_CAMERA_TARGET = (0.0, 0.0, -1.0)
_CAMERA_UP = (0.0, 1.0, 0.0)
_FOV_DEGREES = 45.0
_NEAR = 0.01
_FAR = 100.0

RGBA = tuple[int, int, int, int]


@dataclass(frozen=True)
class SpiralGeometry:
    """Per-vertex attributes of a spiral drawn as a triangle strip.

    Every array has one row of three floats per vertex, two vertices per step.
    """

    vertices: np.ndarray
    colors: np.ndarray
    selected_colors: np.ndarray
    normals: np.ndarray

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)


def spiral_geometry(steps: int = STEPS_PER_SPIRAL) -> SpiralGeometry:
    """Build the inner/outer vertex pairs of a spiral with ``steps`` steps."""
    if steps < 1:
        raise ValueError("a spiral needs at least one step")

    ratio = np.arange(steps, dtype=float) / steps
    angle = 21.0 * ratio
    c = np.cos(angle)
    s = np.sin(angle)
    r1 = 0.5 - 0.3 * ratio
    r2 = 0.3 - 0.3 * ratio
    alt = ratio - 0.5
    nor = 0.5
    up = math.sqrt(1.0 - nor * nor)

    inner = np.column_stack((r2 * c, r2 * s, alt + 0.05))
    outer = np.column_stack((r1 * c, r1 * s, alt))
    vertices = np.stack((inner, outer), axis=1).reshape(-1, 3)

    colour = np.column_stack((1.0 - ratio, np.full(steps, 0.2), ratio))
    selected = np.column_stack((1.0 - ratio, np.full(steps, 0.8), ratio / 2.0))
    normal = np.column_stack((nor * c, nor * s, np.full(steps, up)))

    return SpiralGeometry(
        vertices=vertices.astype(np.float32),
        colors=np.repeat(colour, 2, axis=0).astype(np.float32),
        selected_colors=np.repeat(selected, 2, axis=0).astype(np.float32),
        normals=np.repeat(normal, 2, axis=0).astype(np.float32),
    )


def get_rgba(packed: int) -> RGBA:
    """Split a 32-bit identifier into (red, green, blue, alpha) bytes."""
    if not 0 <= packed <= 0xFFFFFFFF:
        raise ValueError(f"identifier {packed} does not fit in 32 bits")
    return (
        (packed >> 16) & 255,
        (packed >> 8) & 255,
        packed & 255,
        (packed >> 24) & 255,
    )


def get_int_from_rgba(rgba: Sequence[int]) -> int:
    """Inverse of :func:`get_rgba`."""
    if len(rgba) != 4:
        raise ValueError("an RGBA colour has exactly four components")
    r, g, b, a = (int(value) for value in rgba)
    return ((a << 24) + (r << 16) + (g << 8) + b) & 0xFFFFFFFF


def spiral_translation(index: int, count: int = SPIRAL_COUNT) -> np.ndarray:
    """Offset of spiral ``index`` on a unit circle holding ``count`` spirals."""
    if count < 1:
        raise ValueError("there must be at least one spiral")
    angle = 2.0 * index * math.pi / count
    return np.array([math.cos(angle), math.sin(angle), 0.0])


def build_color_map(count: int = SPIRAL_COUNT) -> dict[RGBA, int]:
    """Map the picking colour of every spiral to its index."""
    return {get_rgba(index): index for index in range(count)}


def pick(pixel: Sequence[int], color_map: dict[RGBA, int]) -> int:
    """Return the index whose colour matches ``pixel``, or ``NO_SELECTION``."""
    if len(pixel) != 4:
        raise ValueError("a pixel has exactly four components")
    key = tuple(int(value) for value in pixel)
    return color_map.get(key, NO_SELECTION)


class PickingScene:
    """A fixed camera looking at a ring of spirals, one of which may be selected."""

    def __init__(self, width: int = 1200, height: int = 800) -> None:
        self.spiral_count = SPIRAL_COUNT
        self.geometry = spiral_geometry(STEPS_PER_SPIRAL)
        self.color_map = build_color_map(self.spiral_count)
        self.model_view = look_at(_CAMERA_POSITION, _CAMERA_TARGET, _CAMERA_UP)
        self.selected_spiral = NO_SELECTION
        self.resize(width, height)

    def resize(self, width: int, height: int) -> None:
        """Record a new framebuffer size."""
        if width <= 0 or height <= 0:
            raise ValueError("framebuffer size must be positive")
        self.width = width
        self.height = height

    @property
    def projection(self) -> np.ndarray:
        return perspective(
            math.radians(_FOV_DEGREES), self.width / self.height, _NEAR, _FAR
        )

    def picking_color(self, index: int) -> tuple[float, float, float, float]:
        """Picking colour of spiral ``index`` with channels in [0, 1]."""
        return tuple(channel / 255.0 for channel in get_rgba(index))

    def spiral_transforms(self) -> list[np.ndarray]:
        """Model-view matrix of every spiral, in drawing order."""
        return [
            translate(self.model_view, spiral_translation(i, self.spiral_count))
            for i in range(self.spiral_count)
        ]

    def select(self, pixel: Sequence[int]) -> int:
        """Select the spiral whose colour was read back, or clear the selection."""
        self.selected_spiral = pick(pixel, self.color_map)
        return self.selected_spiral