"""Analytic spheres."""

from __future__ import annotations

from typing import Optional, Tuple

from bunnytrace.bounds3 import Bounds3
from bunnytrace.intersection import Intersection, SceneObject
from bunnytrace.material import Material
from bunnytrace.ray import Ray
from bunnytrace.vector import Vector2f, Vector3f, dot_product, normalize, solve_quadratic


class Sphere(SceneObject):
    """A sphere given by centre and radius."""

    def __init__(self, center: Vector3f, radius: float, material: Optional[Material] = None):
        self.center = center
        self.radius = radius
        self.radius2 = radius * radius
        self.m = material if material is not None else Material()

    def _nearest_t(self, ray: Ray) -> Optional[float]:
        L = ray.origin - self.center
        a = dot_product(ray.direction, ray.direction)
        b = 2 * dot_product(ray.direction, L)
        c = dot_product(L, L) - self.radius2
        roots = solve_quadratic(a, b, c)
        if roots is None:
            return None
        t0, t1 = roots
        if t0 < 0:
            t0 = t1
        if t0 < 0:
            return None
        return t0

    def intersect(self, ray: Ray) -> bool:
        return self._nearest_t(ray) is not None

    def intersect_near(self, ray: Ray) -> Optional[Tuple[float, int]]:
        t = self._nearest_t(ray)
        return None if t is None else (t, 0)

    def get_intersection(self, ray: Ray) -> Intersection:
        t = self._nearest_t(ray)
        if t is None:
            return Intersection()
        coords = ray.origin + ray.direction * t
        return Intersection(
            happened=True,
            coords=coords,
            normal=normalize(coords - self.center),
            distance=t,
            obj=self,
            m=self.m,
        )

    def get_surface_properties(
        self, point: Vector3f, incident: Vector3f, index: int, uv: Vector2f
    ) -> Tuple[Vector3f, Vector2f]:
        return normalize(point - self.center), Vector2f()

    def eval_diffuse_color(self, st: Vector2f) -> Vector3f:
        return self.m.color

    def get_bounds(self) -> Bounds3:
        r = self.radius
        c = self.center
        return Bounds3.from_points(
            Vector3f(c.x - r, c.y - r, c.z - r), Vector3f(c.x + r, c.y + r, c.z + r)
        )