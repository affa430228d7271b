"""Triangles and triangle meshes loaded from OBJ files."""

from __future__ import annotations

import math
import os
from typing import List, Optional, Tuple, Union

from bunnytrace.bounds3 import Bounds3, union
from bunnytrace.bvh import BVHAccel
from bunnytrace.intersection import Intersection, SceneObject
from bunnytrace.material import Material, MaterialType
from bunnytrace.objloader import Loader
from bunnytrace.ray import Ray
from bunnytrace.vector import (
    EPSILON,
    K_INFINITY,
    Vector2f,
    Vector3f,
    cross_product,
    dot_product,
    lerp,
    normalize,
)

_MESH_SCALE = 60.0


def ray_triangle_intersect(
    v0: Vector3f, v1: Vector3f, v2: Vector3f, orig: Vector3f, direction: Vector3f
) -> Optional[Tuple[float, float, float]]:
    """Front-face hit of a ray with a triangle as (t, u, v), or None."""
    edge1 = v1 - v0
    edge2 = v2 - v0
    pvec = cross_product(direction, edge2)
    det = dot_product(edge1, pvec)
    if det <= 0:
        return None

    tvec = orig - v0
    u = dot_product(tvec, pvec)
    if u < 0 or u > det:
        return None

    qvec = cross_product(tvec, edge1)
    v = dot_product(direction, qvec)
    if v < 0 or u + v > det:
        return None

    inv_det = 1 / det
    t = dot_product(edge2, qvec) * inv_det
    return t, u * inv_det, v * inv_det


class Triangle(SceneObject):
    """A single triangle with vertices in counter-clockwise order."""

    def __init__(
        self, v0: Vector3f, v1: Vector3f, v2: Vector3f, material: Optional[Material] = None
    ):
        self.v0 = v0
        self.v1 = v1
        self.v2 = v2
        self.m = material
        self.e1 = v1 - v0
        self.e2 = v2 - v0
        self.t0 = Vector3f()
        self.t1 = Vector3f()
        self.t2 = Vector3f()
        self.normal = normalize(cross_product(self.e1, self.e2))

    def intersect(self, ray: Ray) -> bool:
        return True

    def intersect_near(self, ray: Ray) -> Optional[Tuple[float, int]]:
        return None

    def get_intersection(self, ray: Ray) -> Intersection:
        if dot_product(ray.direction, self.normal) > 0:
            return Intersection()
        pvec = cross_product(ray.direction, self.e2)
        det = dot_product(self.e1, pvec)
        if abs(det) < EPSILON:
            return Intersection()

        det_inv = 1.0 / det
        tvec = ray.origin - self.v0
        u = dot_product(tvec, pvec) * det_inv
        if u < 0 or u > 1:
            return Intersection()
        qvec = cross_product(tvec, self.e1)
        v = dot_product(ray.direction, qvec) * det_inv
        if v < 0 or u + v > 1:
            return Intersection()
        t = dot_product(self.e2, qvec) * det_inv
        if t < 0:
            return Intersection()

        return Intersection(
            happened=True,
            coords=ray.at(t),
            normal=self.normal,
            distance=t,
            obj=self,
            m=self.m,
        )

    def get_surface_properties(
        self, point: Vector3f, incident: Vector3f, index: int, uv: Vector2f
    ) -> Tuple[Vector3f, Vector2f]:
        return self.normal, Vector2f()

    def eval_diffuse_color(self, st: Vector2f) -> Vector3f:
        return Vector3f(0.5, 0.5, 0.5)

    def get_bounds(self) -> Bounds3:
        return union(Bounds3.from_points(self.v0, self.v1), self.v2)


def _mesh_material() -> Material:
    return Material(
        MaterialType.DIFFUSE_AND_GLOSSY,
        Vector3f(0.5, 0.5, 0.5),
        Vector3f(0, 0, 0),
        kd=0.6,
        ks=0.0,
        specular_exponent=0,
    )


class MeshTriangle(SceneObject):
    """A triangle mesh read from an OBJ file holding exactly one mesh, scaled by 60."""

    def __init__(self, filename: Union[str, "os.PathLike[str]"]):
        loader = Loader()
        loader.load_file(filename)
        if len(loader.loaded_meshes) != 1:
            raise ValueError(
                f"expected exactly one mesh, found {len(loader.loaded_meshes)}"
            )
        mesh = loader.loaded_meshes[0]

        self.m: Optional[Material] = None
        self.triangles: List[Triangle] = []
        self.vertices: List[Vector3f] = []
        self.st_coordinates: List[Vector2f] = []

        min_vert = Vector3f(math.inf)
        max_vert = Vector3f(-math.inf)
        corners = iter(mesh.vertices)
        for face in zip(corners, corners, corners):
            face_vertices = []
            for vertex in face:
                p = vertex.position
                vert = Vector3f(p.x, p.y, p.z) * _MESH_SCALE
                face_vertices.append(vert)
                min_vert = Vector3f.minimum(min_vert, vert)
                max_vert = Vector3f.maximum(max_vert, vert)
                tc = vertex.texture_coordinate
                self.st_coordinates.append(Vector2f(tc.x, tc.y))
            self.vertices.extend(face_vertices)
            self.triangles.append(Triangle(*face_vertices, _mesh_material()))

        self.num_triangles = len(self.triangles)
        self.vertex_index = list(range(len(self.vertices)))
        self.bounding_box = Bounds3.from_points(min_vert, max_vert)
        self.bvh: Optional[BVHAccel] = BVHAccel(self.triangles)

    def _corners(self, index: int) -> Tuple[Vector3f, Vector3f, Vector3f]:
        base = index * 3
        return tuple(self.vertices[self.vertex_index[base + k]] for k in range(3))

    def intersect(self, ray: Ray) -> bool:
        return True

    def intersect_near(self, ray: Ray) -> Optional[Tuple[float, int]]:
        tnear = K_INFINITY
        found: Optional[Tuple[float, int]] = None
        for k in range(self.num_triangles):
            hit = ray_triangle_intersect(*self._corners(k), ray.origin, ray.direction)
            if hit is not None and hit[0] < tnear:
                tnear = hit[0]
                found = (tnear, k)
        return found

    def get_bounds(self) -> Bounds3:
        return self.bounding_box

    def get_surface_properties(
        self, point: Vector3f, incident: Vector3f, index: int, uv: Vector2f
    ) -> Tuple[Vector3f, Vector2f]:
        v0, v1, v2 = self._corners(index)
        e0 = normalize(v1 - v0)
        e1 = normalize(v2 - v1)
        normal = normalize(cross_product(e0, e1))
        base = index * 3
        st0, st1, st2 = (
            self.st_coordinates[self.vertex_index[base + k]] for k in range(3)
        )
        st = st0 * (1 - uv.x - uv.y) + st1 * uv.x + st2 * uv.y
        return normal, st

    def eval_diffuse_color(self, st: Vector2f) -> Vector3f:
        scale = 5
        pattern = (math.fmod(st.x * scale, 1) > 0.5) ^ (math.fmod(st.y * scale, 1) > 0.5)
        return lerp(
            Vector3f(0.815, 0.235, 0.031), Vector3f(0.937, 0.937, 0.231), float(pattern)
        )

    def get_intersection(self, ray: Ray) -> Intersection:
        if self.bvh is not None:
            return self.bvh.intersect(ray)
        return Intersection()