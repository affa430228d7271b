"""Hit records and the interface every scene object implements."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Tuple

from bunnytrace.bounds3 import Bounds3
from bunnytrace.material import Material
from bunnytrace.ray import Ray
from bunnytrace.vector import Vector2f, Vector3f


@dataclass
class Intersection:
    """Result of intersecting a ray with the scene."""

    happened: bool = False
    coords: Vector3f = field(default_factory=Vector3f)
    normal: Vector3f = field(default_factory=Vector3f)
    distance: float = sys.float_info.max
    obj: Optional["SceneObject"] = None
    m: Optional[Material] = None


class SceneObject(ABC):
    """Something a ray can hit."""

    @abstractmethod
    def intersect(self, ray: Ray) -> bool:
        """Whether the ray hits the object at all."""

    @abstractmethod
    def intersect_near(self, ray: Ray) -> Optional[Tuple[float, int]]:
        """Nearest hit distance and primitive index, or None."""

    @abstractmethod
    def get_intersection(self, ray: Ray) -> Intersection:
        """Full hit record for the ray."""

    @abstractmethod
    def get_surface_properties(
        self, point: Vector3f, incident: Vector3f, index: int, uv: Vector2f
    ) -> Tuple[Vector3f, Vector2f]:
        """Surface normal and texture coordinates at a hit point."""

    @abstractmethod
    def eval_diffuse_color(self, st: Vector2f) -> Vector3f:
        """Diffuse colour at texture coordinates st."""

    @abstractmethod
    def get_bounds(self) -> Bounds3:
        """Axis-aligned bounding box."""