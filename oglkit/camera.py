"""A first-person style camera driven by keyboard and mouse input."""

from __future__ import annotations

import enum
import math
from typing import Iterable, Sequence

import numpy as np

from .transforms import look_at, normalize, perspective

_MOVE_SPEED = 3.0
_MOUSE_SENSITIVITY = 0.2
_PITCH_LIMIT = 89.0
_PROJ_NEAR = 0.1
_PROJ_FAR = 300.0


class Key(enum.Enum):
    """Movement keys understood by :meth:`Camera.keyboard_events`."""

    FORWARD = "w"
    BACKWARD = "s"
    LEFT = "a"
    RIGHT = "d"


class Camera:
    """Camera with a position, a view direction and yaw/pitch angles in degrees."""

    def __init__(
        self,
        width: int = 512,
        height: int = 512,
        position: Sequence[float] = (2.0, 2.0, 2.0),
        at: Sequence[float] = (0.0, 0.0, 0.0),
    ) -> None:
        if height == 0:
            raise ValueError("viewport height must be non-zero")
        self._position = np.asarray(position, dtype=float).copy()
        self._up = np.array([0.0, 1.0, 0.0])
        self._direction = normalize(np.asarray(at, dtype=float) - self._position)
        self._fov = math.radians(45.0)
        self._image_ratio = width / height
        self._near = 0.1
        self._far = 100.0
        self.yaw = 0.0
        self.pitch = 0.0
        self._mouse_was_clicked = False
        self._last_mouse_pos = np.zeros(2)
        self._compute_angles()
        self._update_projection_matrix()

    @property
    def position(self) -> np.ndarray:
        return self._position.copy()

    @position.setter
    def position(self, pos: Sequence[float]) -> None:
        self._position = np.asarray(pos, dtype=float).copy()
        self._compute_angles()

    @property
    def direction(self) -> np.ndarray:
        return self._direction.copy()

    @direction.setter
    def direction(self, value: Sequence[float]) -> None:
        self._direction = np.asarray(value, dtype=float).copy()
        self._compute_angles()

    @property
    def field_of_view(self) -> float:
        """Vertical field of view in radians."""
        return self._fov

    @property
    def near(self) -> float:
        return self._near

    @near.setter
    def near(self, value: float) -> None:
        self._near = value
        self._update_projection_matrix()

    @property
    def far(self) -> float:
        return self._far

    @far.setter
    def far(self, value: float) -> None:
        self._far = value
        self._update_projection_matrix()

    def keyboard_events(self, pressed: Iterable[Key], delta_time: float) -> None:
        """Move the camera according to the keys held during ``delta_time`` seconds."""
        keys = set(pressed)
        delta = _MOVE_SPEED * delta_time
        right = normalize(np.cross(self._direction, self._up))
        moves = {
            Key.FORWARD: self._direction,
            Key.BACKWARD: -self._direction,
            Key.LEFT: -right,
            Key.RIGHT: right,
        }
        moved = False
        for key, step in moves.items():
            if key in keys:
                self._position = self._position + delta * step
                moved = True
        if moved:
            self._update_projection_matrix()

    def mouse_events(self, mouse_pos: Sequence[float], clicked: bool) -> None:
        """Rotate the view while the button stays pressed across two events."""
        pos = np.asarray(mouse_pos, dtype=float)
        offset = pos - self._last_mouse_pos
        self._last_mouse_pos = pos.copy()

        if clicked and self._mouse_was_clicked:
            offset = offset * _MOUSE_SENSITIVITY
            self.yaw += float(offset[0])
            self.pitch -= float(offset[1])
            self.pitch = max(min(self.pitch, _PITCH_LIMIT), -_PITCH_LIMIT)

            yaw = math.radians(self.yaw)
            pitch = math.radians(self.pitch)
            self._direction = normalize(
                [
                    math.cos(yaw) * math.cos(pitch),
                    math.sin(pitch),
                    math.sin(yaw) * math.cos(pitch),
                ]
            )
            self._update_projection_matrix()
        self._mouse_was_clicked = clicked

    def viewport_events(self, width: int, height: int) -> None:
        """Adapt the projection to a new viewport size."""
        if height == 0:
            return
        self._image_ratio = width / height
        if self._image_ratio > 1e-6:
            self._update_projection_matrix()

    def view_matrix(self) -> np.ndarray:
        return look_at(self._position, self._position + self._direction, self._up)

    def projection_matrix(self) -> np.ndarray:
        return self._proj_matrix.copy()

    def _compute_angles(self) -> None:
        d = self._direction
        h_dir = normalize([d[0], 0.0, -d[2]])
        yaw = math.degrees(math.asin(abs(h_dir[2])))
        if h_dir[2] >= 0.0:
            yaw = 360.0 - yaw if h_dir[0] >= 0.0 else 180.0 + yaw
        elif h_dir[0] < 0.0:
            yaw = 180.0 - yaw
        self.yaw = yaw
        self.pitch = math.degrees(math.asin(d[1]))

    def _update_projection_matrix(self) -> None:
        # The clipping range is fixed; near/far are only recorded.
        self._proj_matrix = perspective(
            self._fov, self._image_ratio, _PROJ_NEAR, _PROJ_FAR
        )