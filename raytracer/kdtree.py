"""A k-d tree over scene objects, split on the low corner of their bounding boxes."""

from __future__ import annotations

from typing import Any, Sequence

from .aabb import AABB
from .linalg import max_vec, min_vec
from .ray import Hit, Ray


class KDTNode:
    """An inner node: a bounding box around two children."""

    def __init__(self, l, r, left: Any, right: Any) -> None:
        self.aabb = AABB(l, r)
        self.left = left
        self.right = right

    def intersect(self, ray: Ray, hit: Hit, tmin: float) -> bool:
        """Intersect both children when the ray meets this node's box."""
        if not self.aabb.intersect(ray):
            return False
        hit_left = self.left.intersect(ray, hit, tmin)
        hit_right = self.right.intersect(ray, hit, tmin)
        return hit_left or hit_right


class KDTree:
    """A balanced binary tree of objects that have an ``aabb`` and ``intersect``."""

    def __init__(self, objects: Sequence[Any]) -> None:
        items = list(objects)
        if not items:
            raise ValueError("cannot build a k-d tree over no objects")
        self.root = self._build(0, 0, len(items) - 1, items)

    @classmethod
    def _build(cls, layer: int, lo: int, hi: int, items: list) -> Any:
        if lo == hi:
            return items[lo]
        mid = (lo + hi) // 2
        axis = layer % 3
        # Partially order items[lo:hi] around the median along this axis.
        items[lo:hi] = sorted(items[lo:hi], key=lambda obj: float(obj.aabb.l[axis]))
        left = cls._build(layer + 1, lo, mid, items)
        right = cls._build(layer + 1, mid + 1, hi, items)
        return KDTNode(
            min_vec(left.aabb.l, right.aabb.l),
            max_vec(left.aabb.r, right.aabb.r),
            left,
            right,
        )

    def intersect(self, ray: Ray, hit: Hit, tmin: float) -> bool:
        """Intersect the ray with every object whose boxes it meets."""
        return self.root.intersect(ray, hit, tmin)