"""Axis-aligned bounding boxes."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Sequence, Union

from bunnytrace.ray import Ray
from bunnytrace.vector import Vector3f

_MAX = sys.float_info.max


def _smin(a: float, b: float) -> float:
    return b if b < a else a


def _smax(a: float, b: float) -> float:
    return b if a < b else a


@dataclass
class Bounds3:
    """Box spanned by p_min and p_max; the default box is empty (inverted)."""

    p_min: Vector3f = field(default_factory=lambda: Vector3f(_MAX))
    p_max: Vector3f = field(default_factory=lambda: Vector3f(-_MAX))

    @classmethod
    def empty(cls) -> "Bounds3":
        return cls()

    @classmethod
    def from_points(cls, p1: Vector3f, p2: Vector3f) -> "Bounds3":
        """Smallest box containing both points."""
        return cls(Vector3f.minimum(p1, p2), Vector3f.maximum(p1, p2))

    def diagonal(self) -> Vector3f:
        return self.p_max - self.p_min

    def max_extent(self) -> int:
        """Index of the longest axis."""
        d = self.diagonal()
        if d.x > d.y and d.x > d.z:
            return 0
        if d.y > d.z:
            return 1
        return 2

    def surface_area(self) -> float:
        d = self.diagonal()
        return 2 * (d.x * d.y + d.x * d.z + d.y * d.z)

    def centroid(self) -> Vector3f:
        return 0.5 * self.p_min + 0.5 * self.p_max

    def intersect(self, other: "Bounds3") -> "Bounds3":
        return Bounds3.from_points(
            Vector3f.maximum(self.p_min, other.p_min),
            Vector3f.minimum(self.p_max, other.p_max),
        )

    def offset(self, p: Vector3f) -> Vector3f:
        """Position of p relative to the box, 0 at p_min and 1 at p_max."""
        o = p - self.p_min
        comps = []
        for value, lo, hi in zip(o, self.p_min, self.p_max):
            comps.append(value / (hi - lo) if hi > lo else value)
        return Vector3f(*comps)

    def overlaps(self, other: "Bounds3") -> bool:
        return all(
            a_max >= b_min and a_min <= b_max
            for a_min, a_max, b_min, b_max in zip(
                self.p_min, self.p_max, other.p_min, other.p_max
            )
        )

    def inside(self, p: Vector3f) -> bool:
        return all(lo <= c <= hi for c, lo, hi in zip(p, self.p_min, self.p_max))

    def __getitem__(self, i: int) -> Vector3f:
        return self.p_min if i == 0 else self.p_max

    def intersect_p(self, ray: Ray, inv_dir: Vector3f, dir_is_neg: Sequence[int]) -> bool:
        """Slab test of the ray against the box."""
        t1 = (self.p_max - ray.origin) * inv_dir
        t2 = (self.p_min - ray.origin) * inv_dir
        tmin = [_smin(a, b) for a, b in zip(t1, t2)]
        tmax = [_smax(a, b) for a, b in zip(t1, t2)]
        t_enter = _smax(tmin[0], _smax(tmin[1], tmin[2]))
        t_exit = _smin(tmax[0], _smax(tmax[1], tmax[2]))
        return t_enter < t_exit and t_exit >= 0


def union(a: Bounds3, b: Union[Bounds3, Vector3f]) -> Bounds3:
    """Smallest box containing a and b, where b is a box or a point."""
    if isinstance(b, Bounds3):
        return Bounds3(Vector3f.minimum(a.p_min, b.p_min), Vector3f.maximum(a.p_max, b.p_max))
    return Bounds3(Vector3f.minimum(a.p_min, b), Vector3f.maximum(a.p_max, b))