"""Renderable objects: spheres, planes, triangles, transforms and groups."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from typing import Any, Iterator, Optional

import numpy as np

from .aabb import AABB
from .kdtree import KDTree
from .linalg import normalized, transform_direction, transform_point
from .ray import Hit, Ray

_PARALLEL_EPS = 1e-8
_SPHERE_BOX_SCALE = 1.415


class Object3D(ABC):
    """Base class of everything a ray can hit."""

    def __init__(self, material: Any = None, aabb: Optional[AABB] = None) -> None:
        self.material = material
        self.aabb = aabb if aabb is not None else AABB()

    @abstractmethod
    def intersect(self, ray: Ray, hit: Hit, tmin: float) -> bool:
        """Update ``hit`` if the ray meets this object closer than ``hit.t``."""


class VectorPlace(enum.Enum):
    """Where a point lies relative to a sphere."""

    INSIDE = "inside"
    ON_EDGE = "on_edge"
    OUTSIDE = "outside"


class Sphere(Object3D):
    """A sphere with a centre and radius."""

    def __init__(self, center=(0.0, 0.0, 0.0), radius: float = 1.0, material: Any = None) -> None:
        center = np.asarray(center, dtype=float)
        extent = radius * _SPHERE_BOX_SCALE
        super().__init__(material, AABB(center - extent, center + extent))
        self.center = center
        self.radius = float(radius)

    def vector_place(self, v) -> VectorPlace:
        """Classify ``v`` as inside, on, or outside the sphere."""
        distance = float(np.linalg.norm(np.asarray(v, dtype=float) - self.center))
        if distance < self.radius:
            return VectorPlace.INSIDE
        if distance > self.radius:
            return VectorPlace.OUTSIDE
        return VectorPlace.ON_EDGE

    def intersect(self, ray: Ray, hit: Hit, tmin: float) -> bool:
        origin_place = self.vector_place(ray.origin)
        origin_to_center = self.center - ray.origin
        len_r = float(np.linalg.norm(ray.direction))
        proj_t = float(np.dot(origin_to_center, ray.direction)) / len_r
        if origin_place is not VectorPlace.INSIDE and proj_t < 0:
            return False
        square_dis = float(np.dot(origin_to_center, origin_to_center)) - proj_t * proj_t
        chord_square = self.radius * self.radius - square_dis
        if chord_square < 0:
            return False
        chord = float(np.sqrt(chord_square))
        t = proj_t - chord if origin_place is VectorPlace.OUTSIDE else proj_t + chord
        t /= len_r
        if not (tmin < t < hit.t):
            return False
        normal = normalized(ray.point_at(t) - self.center)
        if origin_place is VectorPlace.INSIDE:
            normal = -normal
        hit.set(t, self.material, normal)
        return True

    def __repr__(self) -> str:
        return f"Sphere(center={self.center.tolist()}, radius={self.radius})"


class Plane(Object3D):
    """The infinite plane ``normal . p = d``."""

    def __init__(self, normal=(0.0, 0.0, 0.0), d: float = 0.0, material: Any = None) -> None:
        super().__init__(material)
        self.normal = np.asarray(normal, dtype=float)
        self.d = float(d)

    def intersect(self, ray: Ray, hit: Hit, tmin: float) -> bool:
        normal_dot_dir = float(np.dot(self.normal, ray.direction))
        if normal_dot_dir == 0.0:
            return False
        t = (self.d - float(np.dot(self.normal, ray.origin))) / normal_dot_dir
        if t <= 0 or not (tmin < t < hit.t):
            return False
        hit.set(t, self.material, -self.normal if normal_dot_dir > 0 else self.normal)
        return True

    def __repr__(self) -> str:
        return f"Plane(normal={self.normal.tolist()}, d={self.d})"


class Triangle(Object3D):
    """A triangle with vertices ``a``, ``b`` and ``c``."""

    def __init__(self, a, b, c, material: Any = None) -> None:
        vertices = [np.asarray(v, dtype=float) for v in (a, b, c)]
        stacked = np.vstack(vertices)
        super().__init__(material, AABB(stacked.min(axis=0), stacked.max(axis=0)))
        self.vertices = vertices
        self.normal = normalized(np.cross(vertices[0] - vertices[1], vertices[0] - vertices[2]))

    def intersect(self, ray: Ray, hit: Hit, tmin: float) -> bool:
        a, b, c = self.vertices
        e1 = a - b
        e2 = a - c
        s = a - ray.origin
        d = ray.direction
        det = float(np.linalg.det(np.column_stack((d, e1, e2))))
        if abs(det) < _PARALLEL_EPS:
            return False
        t = float(np.linalg.det(np.column_stack((s, e1, e2)))) / det
        beta = float(np.linalg.det(np.column_stack((d, s, e2)))) / det
        gamma = float(np.linalg.det(np.column_stack((d, e1, s)))) / det
        if t <= 0 or not (0 <= beta <= 1) or not (0 <= gamma <= 1) or beta + gamma > 1:
            return False
        if not (tmin < t < hit.t):
            return False
        hit.set(t, self.material, self.normal)
        return True

    def __repr__(self) -> str:
        return "Triangle(" + ", ".join(str(v.tolist()) for v in self.vertices) + ")"


class Transform(Object3D):
    """An object placed in the scene through a 4x4 transformation matrix."""

    def __init__(self, matrix, obj: Object3D) -> None:
        super().__init__(getattr(obj, "material", None))
        self.object = obj
        self.inverse = np.linalg.inv(np.asarray(matrix, dtype=float))

    def intersect(self, ray: Ray, hit: Hit, tmin: float) -> bool:
        local = Ray(
            transform_point(self.inverse, ray.origin),
            transform_direction(self.inverse, ray.direction),
        )
        if not self.object.intersect(local, hit, tmin):
            return False
        world_normal = normalized(transform_direction(self.inverse.T, hit.normal))
        hit.set(hit.t, hit.material, world_normal)
        return True


class Group(Object3D):
    """A fixed number of slots for objects, optionally accelerated by a k-d tree."""

    def __init__(self, num_objects: int = 0) -> None:
        super().__init__()
        self.objects: list[Optional[Object3D]] = [None] * int(num_objects)
        self._tree: Optional[KDTree] = None

    def __len__(self) -> int:
        return len(self.objects)

    def __getitem__(self, index: int) -> Optional[Object3D]:
        return self.objects[index]

    def __iter__(self) -> Iterator[Optional[Object3D]]:
        return iter(self.objects)

    def add_object(self, index: int, obj: Object3D) -> None:
        """Place ``obj`` in slot ``index``."""
        if not 0 <= index < len(self.objects):
            raise IndexError(f"slot {index} outside group of {len(self.objects)}")
        self.objects[index] = obj
        self._tree = None

    def build_tree(self) -> None:
        """Build a k-d tree over the objects to speed up intersection."""
        if any(obj is None for obj in self.objects):
            raise ValueError("every slot must hold an object before building the tree")
        self._tree = KDTree(self.objects)

    def intersect(self, ray: Ray, hit: Hit, tmin: float) -> bool:
        if self._tree is not None:
            return self._tree.intersect(ray, hit, tmin)
        results = [obj.intersect(ray, hit, tmin) for obj in self.objects if obj is not None]
        return any(results)

    def __repr__(self) -> str:
        return f"Group({self.objects!r})"