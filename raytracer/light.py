"""Light sources."""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from .linalg import normalized


class Light(ABC):
    """A light source."""

    @abstractmethod
    def illumination(self, point) -> tuple[np.ndarray, np.ndarray]:
        """Return the unit direction towards the light from ``point`` and its colour."""


class DirectionalLight(Light):
    """A light infinitely far away shining along ``direction``."""

    def __init__(self, direction, color) -> None:
        self.direction = normalized(direction)
        self.color = np.asarray(color, dtype=float)

    def illumination(self, point) -> tuple[np.ndarray, np.ndarray]:
        return -self.direction, self.color


class PointLight(Light):
    """A light at a single position."""

    def __init__(self, position, color) -> None:
        self.position = np.asarray(position, dtype=float)
        self.color = np.asarray(color, dtype=float)

    def illumination(self, point) -> tuple[np.ndarray, np.ndarray]:
        offset = self.position - np.asarray(point, dtype=float)
        return offset / np.linalg.norm(offset), self.color