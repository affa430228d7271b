"""Scene description and Whitted-style ray casting."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, TextIO, Tuple, Union

from bunnytrace.bvh import BVHAccel, SplitMethod
from bunnytrace.intersection import Intersection, SceneObject
from bunnytrace.light import AreaLight, Light
from bunnytrace.material import MaterialType
from bunnytrace.ray import Ray
from bunnytrace.vector import (
    EPSILON,
    K_INFINITY,
    Vector2f,
    Vector3f,
    clamp,
    dot_product,
    normalize,
)


@dataclass
class Scene:
    """Objects, lights and render options."""

    width: int = 1280
    height: int = 960
    fov: float = 90.0
    background_color: Vector3f = field(
        default_factory=lambda: Vector3f(0.235294, 0.67451, 0.843137)
    )
    max_depth: int = 5
    objects: List[SceneObject] = field(default_factory=list)
    lights: List[Light] = field(default_factory=list)
    bvh: Optional[BVHAccel] = None
    stream: Optional[TextIO] = None

    def add(self, item: Union[SceneObject, Light]) -> None:
        """Add an object or a light to the scene."""
        if isinstance(item, Light):
            self.lights.append(item)
        else:
            self.objects.append(item)

    def build_bvh(self) -> None:
        """Build the acceleration structure over the scene's objects."""
        out = self.stream if self.stream is not None else sys.stdout
        out.write(" - Generating BVH...\n\n")
        self.bvh = BVHAccel(self.objects, 1, SplitMethod.NAIVE, stream=out)

    def intersect(self, ray: Ray) -> Intersection:
        """Nearest hit of the ray with the scene."""
        if self.bvh is None:
            raise RuntimeError("build_bvh must be called before intersecting")
        return self.bvh.intersect(ray)

    def trace(
        self, ray: Ray, objects: Sequence[SceneObject]
    ) -> Optional[Tuple[float, int, SceneObject]]:
        """Brute-force nearest hit as (t, index, object), or None."""
        t_near = K_INFINITY
        found: Optional[Tuple[float, int, SceneObject]] = None
        for obj in objects:
            hit = obj.intersect_near(ray)
            if hit is not None and hit[0] < t_near:
                t_near, index = hit
                found = (t_near, index, obj)
        return found

    def cast_ray(self, ray: Ray, depth: int) -> Vector3f:
        """Colour seen along the ray, recursing for reflection and refraction."""
        if depth > self.max_depth:
            return Vector3f(0.0, 0.0, 0.0)
        intersection = self.intersect(ray)
        if not intersection.happened:
            return self.background_color

        m = intersection.m
        hit_object = intersection.obj
        hit_point = intersection.coords
        n, st = hit_object.get_surface_properties(hit_point, ray.direction, 0, Vector2f())

        if m.type is MaterialType.REFLECTION_AND_REFRACTION:
            reflection_direction = normalize(self.reflect(ray.direction, n))
            refraction_direction = normalize(self.refract(ray.direction, n, m.ior))
            reflection_orig = (
                hit_point - n * EPSILON
                if dot_product(reflection_direction, n) < 0
                else hit_point + n * EPSILON
            )
            refraction_orig = (
                hit_point - n * EPSILON
                if dot_product(refraction_direction, n) < 0
                else hit_point + n * EPSILON
            )
            reflection_color = self.cast_ray(Ray(reflection_orig, reflection_direction), depth + 1)
            refraction_color = self.cast_ray(Ray(refraction_orig, refraction_direction), depth + 1)
            kr = self.fresnel(ray.direction, n, m.ior)
            return reflection_color * kr + refraction_color * (1 - kr)

        if m.type is MaterialType.REFLECTION:
            kr = self.fresnel(ray.direction, n, m.ior)
            reflection_direction = self.reflect(ray.direction, n)
            reflection_orig = (
                hit_point + n * EPSILON
                if dot_product(reflection_direction, n) < 0
                else hit_point - n * EPSILON
            )
            return self.cast_ray(Ray(reflection_orig, reflection_direction), depth + 1) * kr

        # Phong model: diffuse plus specular contribution of every point light.
        light_amt = Vector3f(0)
        specular_color = Vector3f(0)
        shadow_orig = (
            hit_point + n * EPSILON
            if dot_product(ray.direction, n) < 0
            else hit_point - n * EPSILON
        )
        for light in self.lights:
            if isinstance(light, AreaLight):
                continue
            light_dir = normalize(light.position - hit_point)
            l_dot_n = max(0.0, dot_product(light_dir, n))
            in_shadow = self.intersect(Ray(shadow_orig, light_dir)).happened
            light_amt += (1 - int(in_shadow)) * light.intensity * l_dot_n
            reflection_direction = self.reflect(-light_dir, n)
            strength = max(0.0, -dot_product(reflection_direction, ray.direction))
            specular_color += math.pow(strength, m.specular_exponent) * light.intensity
        return light_amt * (hit_object.eval_diffuse_color(st) * m.kd + specular_color * m.ks)

    def reflect(self, incident: Vector3f, normal: Vector3f) -> Vector3f:
        """Mirror direction of incident about normal."""
        return incident - 2 * dot_product(incident, normal) * normal

    def refract(self, incident: Vector3f, normal: Vector3f, ior: float) -> Vector3f:
        """Refracted direction by Snell's law; zero on total internal reflection."""
        cosi = clamp(-1, 1, dot_product(incident, normal))
        etai, etat = 1.0, ior
        n = normal
        if cosi < 0:
            cosi = -cosi
        else:
            etai, etat = etat, etai
            n = -normal
        eta = etai / etat
        k = 1 - eta * eta * (1 - cosi * cosi)
        if k < 0:
            return Vector3f(0)
        return eta * incident + (eta * cosi - math.sqrt(k)) * n

    def fresnel(self, incident: Vector3f, normal: Vector3f, ior: float) -> float:
        """Fraction of light reflected at the surface."""
        cosi = clamp(-1, 1, dot_product(incident, normal))
        etai, etat = 1.0, ior
        if cosi > 0:
            etai, etat = etat, etai
        sint = etai / etat * math.sqrt(max(0.0, 1 - cosi * cosi))
        if sint >= 1:
            return 1.0
        cost = math.sqrt(max(0.0, 1 - sint * sint))
        cosi = abs(cosi)
        rs = ((etat * cosi) - (etai * cost)) / ((etat * cosi) + (etai * cost))
        rp = ((etai * cosi) - (etat * cost)) / ((etai * cosi) + (etat * cost))
        return (rs * rs + rp * rp) / 2