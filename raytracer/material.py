"""Phong surface materials."""

from __future__ import annotations

import numpy as np

from .linalg import normalized
from .ray import Hit, Ray


class Material:
    """A Phong material with diffuse and specular colours and a shininess."""

    def __init__(self, diffuse_color, specular_color=None, shininess: float = 0.0) -> None:
        self.diffuse_color = np.asarray(diffuse_color, dtype=float)
        self.specular_color = (
            np.zeros(3) if specular_color is None else np.asarray(specular_color, dtype=float)
        )
        self.shininess = float(shininess)

    def shade(self, ray: Ray, hit: Hit, dir_to_light, light_color) -> np.ndarray:
        """Phong colour at the hit point for one light."""
        shaded = np.zeros(3)
        to_light = normalized(dir_to_light)
        normal = hit.normal
        n_dot_l = float(np.dot(to_light, normal))
        if n_dot_l >= 0:
            shaded = shaded + n_dot_l * self.diffuse_color
        reflect_dir = normalized(2 * n_dot_l * normal - to_light)
        # The reflection is brightest when it points back along the viewing ray.
        ray_dot_reflect = -float(np.dot(ray.direction, reflect_dir))
        if ray_dot_reflect >= 0:
            shaded = shaded + ray_dot_reflect**self.shininess * self.specular_color
        return shaded * np.asarray(light_color, dtype=float)