"""Triangle meshes loaded from Wavefront OBJ files."""

from __future__ import annotations

import os
from typing import Any, Iterable, Union

import numpy as np

from .aabb import AABB
from .linalg import normalized
from .objects import Object3D, Triangle
from .ray import Hit, Ray

PathLike = Union[str, "os.PathLike[str]"]


class Mesh(Object3D):
    """A triangle mesh read from the vertices and faces of an OBJ file."""

    def __init__(self, filename: PathLike, material: Any = None) -> None:
        super().__init__(material)
        self.vertices: list[np.ndarray] = []
        self.faces: list[tuple[int, int, int]] = []
        self.texcoords: list[tuple[float, float]] = []
        with open(os.fspath(filename), encoding="utf-8") as fh:
            self._parse(fh)
        self.normals = self._compute_normals()
        self._triangles = []
        for face, normal in zip(self.faces, self.normals):
            tri = Triangle(*(self.vertices[i] for i in face), material)
            tri.normal = normal
            self._triangles.append(tri)
        if self.vertices:
            stacked = np.vstack(self.vertices)
            self.aabb = AABB(stacked.min(axis=0), stacked.max(axis=0))

    def _parse(self, lines: Iterable[str]) -> None:
        for raw in lines:
            line = raw.rstrip("\r\n")
            if len(line) < 3 or line.startswith("#"):
                continue
            fields = line.split()
            tok = fields[0]
            if tok == "v":
                self.vertices.append(np.array([float(f) for f in fields[1:4]], dtype=float))
            elif tok == "f":
                if "/" in line:
                    # Each corner reads as "vertex/texture"; keep the vertex index.
                    numbers = line.replace("/", " ").split()[1:]
                    indices = (numbers[0], numbers[2], numbers[4])
                else:
                    indices = tuple(fields[1:4])
                self.faces.append(tuple(int(i) - 1 for i in indices))
            elif tok == "vt":
                self.texcoords.append((float(fields[1]), float(fields[2])))

    def _compute_normals(self) -> list[np.ndarray]:
        normals = []
        for i0, i1, i2 in self.faces:
            v0 = self.vertices[i0]
            a = self.vertices[i1] - v0
            b = self.vertices[i2] - v0
            normals.append(normalized(np.cross(a, b)))
        return normals

    def intersect(self, ray: Ray, hit: Hit, tmin: float) -> bool:
        results = [tri.intersect(ray, hit, tmin) for tri in self._triangles]
        return any(results)