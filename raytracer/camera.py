"""Cameras that turn image coordinates into rays."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod

import numpy as np

from .linalg import normalized
from .ray import Ray


class Camera(ABC):
    """A camera with a position, orientation and image size."""

    def __init__(self, center, direction, up, width: int, height: int) -> None:
        self.center = np.asarray(center, dtype=float)
        self.direction = normalized(direction)
        self.horizontal = normalized(np.cross(self.direction, np.asarray(up, dtype=float)))
        self.up = np.cross(self.horizontal, self.direction)
        self.width = int(width)
        self.height = int(height)

    @abstractmethod
    def generate_ray(self, point) -> Ray:
        """Ray through the screen-space coordinate ``point``."""


class PerspectiveCamera(Camera):
    """A pinhole camera whose field of view ``angle`` (radians) applies to both axes."""

    def __init__(self, center, direction, up, width: int, height: int, angle: float) -> None:
        super().__init__(center, direction, up, width, height)
        double_tan_half = 2 * math.tan(angle / 2)
        self.fx = self.width / double_tan_half
        self.fy = self.height / double_tan_half

    @property
    def center_x(self) -> float:
        return float(self.width // 2)

    @property
    def center_y(self) -> float:
        return float(self.height // 2)

    def generate_ray(self, point) -> Ray:
        px, py = float(point[0]), float(point[1])
        cam = normalized(
            [(px - self.center_x) / self.fx, (self.center_y - py) / self.fy, 1.0]
        )
        world = cam[0] * self.horizontal - cam[1] * self.up + cam[2] * self.direction
        return Ray(self.center, world)