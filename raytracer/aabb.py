"""Axis-aligned bounding boxes."""

from __future__ import annotations

import numpy as np

from .linalg import max_vec, min_vec
from .ray import Ray

_INF = np.array([np.inf, np.inf, np.inf])


class AABB:
    """An axis-aligned box from corner ``l`` to corner ``r``; unbounded by default."""

    def __init__(self, l=None, r=None) -> None:
        self.l = -_INF.copy() if l is None else np.asarray(l, dtype=float)
        self.r = _INF.copy() if r is None else np.asarray(r, dtype=float)

    def is_infinite(self) -> bool:
        """True when the box covers all of space."""
        return bool(np.all(self.l == -np.inf) and np.all(self.r == np.inf))

    def intersect(self, ray: Ray) -> bool:
        """Slab test: does the ray meet the box at some non-negative parameter?"""
        if self.is_infinite():
            return True
        rev = ray.rev_direction
        with np.errstate(invalid="ignore"):
            v1 = (self.l - ray.origin) * rev
            v2 = (self.r - ray.origin) * rev
        lo = [min(float(a), float(b)) for a, b in zip(v1, v2)]
        hi = [max(float(a), float(b)) for a, b in zip(v1, v2)]
        max_min = max(max(lo[0], lo[1]), lo[2])
        min_max = min(min(hi[0], hi[1]), hi[2])
        return not (min_max < 0 or max_min > min_max)

    def fit(self, point) -> None:
        """Grow the box so it contains ``point``."""
        self.l = min_vec(self.l, point)
        self.r = max_vec(self.r, point)

    def reset(self) -> None:
        """Make the box empty, ready to be grown with :meth:`fit`."""
        self.l = _INF.copy()
        self.r = -_INF.copy()

    def __repr__(self) -> str:
        return f"AABB(l={self.l.tolist()}, r={self.r.tolist()})"