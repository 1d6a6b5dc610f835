"""Fly-through perspective camera and the vector math it relies on."""

from __future__ import annotations

import math
from typing import Any, Iterable, Optional

import numpy as np
from numpy.typing import ArrayLike

_PITCH_LIMIT = math.radians(5.0)


def _vec(values: ArrayLike) -> np.ndarray:
    return np.asarray(values, dtype=np.float64).reshape(3)


def _normalize(vector: np.ndarray) -> np.ndarray:
    return vector / np.linalg.norm(vector)


def look_at(eye: ArrayLike, center: ArrayLike, up: ArrayLike) -> np.ndarray:
    """Right-handed view matrix looking from ``eye`` towards ``center``."""
    eye, center, up = _vec(eye), _vec(center), _vec(up)
    forward = _normalize(center - eye)
    side = _normalize(np.cross(forward, up))
    true_up = np.cross(side, forward)
    view = np.identity(4)
    view[0, :3] = side
    view[1, :3] = true_up
    view[2, :3] = -forward
    view[0, 3] = -side @ eye
    view[1, 3] = -true_up @ eye
    view[2, 3] = forward @ eye
    return view


def perspective(fov_rad: float, aspect: float, near: float, far: float) -> np.ndarray:
    """Right-handed perspective projection mapping depth to [-1, 1]."""
    if aspect == 0:
        raise ValueError("aspect ratio must be non-zero")
    tan_half = math.tan(fov_rad / 2.0)
    projection = np.zeros((4, 4))
    projection[0, 0] = 1.0 / (aspect * tan_half)
    projection[1, 1] = 1.0 / tan_half
    projection[2, 2] = -(far + near) / (far - near)
    projection[2, 3] = -(2.0 * far * near) / (far - near)
    projection[3, 2] = -1.0
    return projection


def rotate_vector(vector: ArrayLike, angle_rad: float, axis: ArrayLike) -> np.ndarray:
    """Rotate ``vector`` by ``angle_rad`` around ``axis`` (right-hand rule)."""
    v = _vec(vector)
    k = _normalize(_vec(axis))
    cos, sin = math.cos(angle_rad), math.sin(angle_rad)
    return v * cos + np.cross(k, v) * sin + k * (k @ v) * (1.0 - cos)


def angle_between(a: ArrayLike, b: ArrayLike) -> float:
    """Angle between two unit vectors, in radians."""
    return float(np.arccos(np.clip(_vec(a) @ _vec(b), -1.0, 1.0)))


class Camera:
    """Perspective camera moved with keys and turned by dragging the mouse."""

    def __init__(self, width: int, height: int, position: ArrayLike) -> None:
        self.width = int(width)
        self.height = int(height)
        self.position = _vec(position).copy()
        self.orientation = np.array([0.0, 0.0, -1.0])
        self.up = np.array([0.0, 1.0, 0.0])
        self.first_click = True
        self.looking = False
        self.speed = 0.1
        self.sensitivity = 45.0

    @property
    def center(self) -> tuple[int, int]:
        """Window centre the cursor is held at while looking around."""
        return self.width // 2, self.height // 2

    def matrix(self, fov_deg: float, near_plane: float, far_plane: float) -> np.ndarray:
        """Combined projection and view matrix."""
        view = look_at(self.position, self.position + self.orientation, self.up)
        aspect = float(self.width // self.height)
        projection = perspective(math.radians(fov_deg), aspect, near_plane, far_plane)
        return projection @ view

    def upload(
        self, fov_deg: float, near_plane: float, far_plane: float, shader: Any, uniform: str
    ) -> None:
        """Set the camera matrix, column by column, as the mat4 uniform of ``shader``."""
        matrix = self.matrix(fov_deg, near_plane, far_plane)
        shader[uniform] = tuple(float(value) for value in matrix.ravel(order="F"))

    def move(self, keys: Iterable[str]) -> None:
        """Move by ``speed`` for each held key among w, a, s, d, e and q."""
        pressed = {key.lower() for key in keys}
        right = _normalize(np.cross(self.orientation, self.up))
        steps = {
            "w": self.orientation,
            "a": -right,
            "s": -self.orientation,
            "d": right,
            "e": self.up,
            "q": -self.up,
        }
        for key, direction in steps.items():
            if key in pressed:
                self.position = self.position + self.speed * direction

    def begin_look(self) -> Optional[tuple[int, int]]:
        """Start a mouse look; on the first click returns where to put the cursor."""
        self.looking = True
        if self.first_click:
            self.first_click = False
            return self.center
        return None

    def look(self, mouse_x: float, mouse_y: float) -> tuple[int, int]:
        """Turn towards the cursor (y grows downwards); returns where to recentre it."""
        center_x, center_y = self.center
        rot_x = self.sensitivity * (mouse_y - center_y) / self.height
        rot_y = self.sensitivity * (mouse_x - center_x) / self.height

        right = _normalize(np.cross(self.orientation, self.up))
        pitched = rotate_vector(self.orientation, math.radians(-rot_x), right)
        too_steep = (
            angle_between(pitched, self.up) <= _PITCH_LIMIT
            or angle_between(pitched, -self.up) <= _PITCH_LIMIT
        )
        if not too_steep:
            self.orientation = pitched

        self.orientation = rotate_vector(self.orientation, math.radians(-rot_y), self.up)
        return self.center

    def end_look(self) -> None:
        """Stop a mouse look."""
        self.looking = False