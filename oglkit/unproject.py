"""Colour picking combined with depth read-back to recover the 3D point hit.

A free camera looks at the ring of spirals. When the user selects a pixel,
the picking colour tells which spiral was hit and the depth value under the
cursor is unprojected to find where the hit lies in world space. A ray from
the camera to that point is kept for drawing.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .camera import Camera
from .picking import (
    NO_SELECTION,
    SPIRAL_COUNT,
    STEPS_PER_SPIRAL,
    build_color_map,
    get_rgba,
    pick,
    spiral_geometry,
    spiral_translation,
)
from .transforms import translate, unproject

_CAMERA_POSITION = (2.0, 0.0, 2.0)
_CAMERA_TARGET = (0.0, 0.0, 0.0)

RAY_COLOR = (0.0, 0.0, 1.0, 1.0)
POINT_COLOR = (0.9, 0.2, 0.1, 1.0)


class UnprojectScene:
    """Spirals seen through a movable camera, with picking and unprojection."""

    def __init__(self, width: int = 1200, height: int = 800) -> None:
        self.spiral_count = SPIRAL_COUNT
        self.geometry = spiral_geometry(STEPS_PER_SPIRAL)
        self.color_map = build_color_map(self.spiral_count)
        self.camera = Camera(width, height, _CAMERA_POSITION, _CAMERA_TARGET)
        self.selected_spiral = NO_SELECTION
        self.point = np.zeros(3)
        self.ray = np.zeros((2, 3), dtype=np.float32)
        self.width = width
        self.height = height
        self.resize(width, height)

    def resize(self, width: int, height: int) -> None:
        """Record a new framebuffer size and update the camera projection."""
        if width <= 0 or height <= 0:
            raise ValueError("framebuffer size must be positive")
        self.width = width
        self.height = height
        self.camera.viewport_events(width, height)

    @property
    def viewport(self) -> tuple[int, int, int, int]:
        return (0, 0, self.width, self.height)

    def picking_color(self, index: int) -> tuple[float, float, float, float]:
        """Picking colour of spiral ``index`` with channels in [0, 1]."""
        return tuple(channel / 255.0 for channel in get_rgba(index))

    def spiral_transforms(self) -> list[np.ndarray]:
        """Model-view matrix of every spiral, in drawing order."""
        view = self.camera.view_matrix()
        return [
            translate(view, spiral_translation(i, self.spiral_count))
            for i in range(self.spiral_count)
        ]

    def window_position(self, x: int, y: int) -> tuple[int, int]:
        """Convert cursor coordinates (origin top-left) to framebuffer ones."""
        return x, self.height - 1 - y

    def perform_selection(
        self, x: int, y: int, pixel: Sequence[int], depth: float
    ) -> int:
        """Select from the colour and depth read under cursor ``(x, y)``.

        ``pixel`` is the RGBA value read from the picking render and ``depth``
        the depth buffer value in [0, 1]. When the depth is below 1 something
        was hit: the world-space point is recovered and the ray from the
        camera to it is updated. Returns the selected spiral index.
        """
        self.selected_spiral = pick(pixel, self.color_map)
        if depth < 1:
            wx, wy = self.window_position(x, y)
            self.point = unproject(
                (wx, wy, depth),
                self.camera.view_matrix(),
                self.camera.projection_matrix(),
                self.viewport,
            )
            self.ray = np.array(
                [self.camera.position, self.point], dtype=np.float32
            )
        return self.selected_spiral