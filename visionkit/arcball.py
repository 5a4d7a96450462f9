"""Arcball rotation control driven by mouse drags."""

from __future__ import annotations

import math
from enum import Enum, IntEnum

import numpy as np


class Action(IntEnum):
    """Mouse button actions."""

    RELEASE = 0
    PRESS = 1
    REPEAT = 2


class MouseButton(IntEnum):
    """Mouse buttons."""

    LEFT = 0
    RIGHT = 1
    MIDDLE = 2


class _Tracking(Enum):
    IDLE = 0
    STARTING = 1
    DRAGGING = 2


def rotation_matrix(angle_degrees: float, axis) -> np.ndarray:
    """Return the 4x4 matrix rotating by ``angle_degrees`` about ``axis``.

    The axis is normalised first; a zero-length axis gives the identity.
    """
    k = np.asarray(axis, dtype=np.float64).reshape(3)
    result = np.eye(4)
    norm = np.linalg.norm(k)
    if norm == 0:
        return result
    k = k / norm
    angle = math.radians(angle_degrees)
    c, s = math.cos(angle), math.sin(angle)
    skew = np.array([[0.0, -k[2], k[1]], [k[2], 0.0, -k[0]], [-k[1], k[0], 0.0]])
    result[:3, :3] = c * np.eye(3) + s * skew + (1.0 - c) * np.outer(k, k)
    return result


class Arcball:
    """Turns left-button drags across a window into rotations.

    The rotation runs from the point where the drag started to the current
    cursor position, both projected onto a unit sphere over the window.
    """

    def __init__(
        self,
        window_width: int,
        window_height: int,
        roll_speed: float = 1.0,
        x_axis: bool = True,
        y_axis: bool = True,
    ) -> None:
        if window_width <= 0 or window_height <= 0:
            raise ValueError(f"window size must be positive, got {(window_width, window_height)}")
        self.window_width = window_width
        self.window_height = window_height
        self.roll_speed = roll_speed
        self.x_axis = x_axis
        self.y_axis = y_axis
        self.angle = 0.0
        self.axis = np.array([0.0, 1.0, 0.0])
        self._state = _Tracking.IDLE
        self._prev = np.zeros(3)
        self._curr = np.zeros(3)

    def to_screen_coord(self, x: float, y: float) -> np.ndarray:
        """Map a window position to a point on the unit sphere in normalised coordinates."""
        coord = np.zeros(3)
        if self.x_axis:
            coord[0] = (2 * x - self.window_width) / self.window_width
        if self.y_axis:
            coord[1] = -(2 * y - self.window_height) / self.window_height
        coord[:2] = np.clip(coord[:2], -1.0, 1.0)

        length_squared = coord[0] ** 2 + coord[1] ** 2
        if length_squared <= 1.0:
            coord[2] = math.sqrt(1.0 - length_squared)
        else:
            coord /= np.linalg.norm(coord)
        return coord

    def mouse_button(self, button: int, action: int) -> None:
        """Start tracking on a left-button press; anything else stops it."""
        if action == Action.PRESS and button == MouseButton.LEFT:
            self._state = _Tracking.STARTING
        else:
            self._state = _Tracking.IDLE

    def cursor(self, x: float, y: float) -> None:
        """Update the rotation from a cursor position while a drag is in progress."""
        if self._state is _Tracking.IDLE:
            return
        if self._state is _Tracking.STARTING:
            self._prev = self.to_screen_coord(x, y)
            self._state = _Tracking.DRAGGING
            return

        self._curr = self.to_screen_coord(x, y)
        cosine = float(np.dot(self._prev, self._curr))
        self.angle = math.acos(max(-1.0, min(1.0, cosine)))
        self.axis = np.cross(self._prev, self._curr)

    def view_rotation_matrix(self) -> np.ndarray:
        """Rotation in camera coordinates, to be applied to the view matrix."""
        return rotation_matrix(math.degrees(self.angle) * self.roll_speed, self.axis)

    def model_rotation_matrix(self, view_matrix) -> np.ndarray:
        """Rotation in world coordinates, to be applied to the model matrix."""
        view = np.asarray(view_matrix, dtype=np.float64)
        world_axis = np.linalg.inv(view[:3, :3]) @ self.axis
        return rotation_matrix(math.degrees(self.angle) * self.roll_speed, world_axis)