"""Rays and ray-surface hit records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np


@dataclass(eq=False)
class Ray:
    """A half-line starting at ``origin`` going along ``direction``."""

    origin: np.ndarray
    direction: np.ndarray

    def __post_init__(self) -> None:
        self.origin = np.asarray(self.origin, dtype=float)
        self.direction = np.asarray(self.direction, dtype=float)

    @property
    def rev_direction(self) -> np.ndarray:
        """Component-wise reciprocal of the direction (infinite for zero components)."""
        with np.errstate(divide="ignore"):
            return 1.0 / self.direction

    def point_at(self, t: float) -> np.ndarray:
        """Point reached after travelling parameter ``t`` along the ray."""
        return self.origin + self.direction * t

    def __str__(self) -> str:
        return f"Ray <{self.origin}, {self.direction}>"


@dataclass(eq=False)
class Hit:
    """The closest intersection found so far."""

    t: float = 1e38
    material: Any = None
    normal: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def set(self, t: float, material: Any, normal) -> None:
        """Record a new intersection."""
        self.t = t
        self.material = material
        self.normal = np.asarray(normal, dtype=float)

    def __str__(self) -> str:
        return f"Hit <{self.t}, {self.normal}>"