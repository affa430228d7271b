"""Surface materials."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from bunnytrace.vector import Vector3f


class MaterialType(Enum):
    DIFFUSE_AND_GLOSSY = 0
    REFLECTION_AND_REFRACTION = 1
    REFLECTION = 2


@dataclass
class Material:
    """Shading parameters of a surface."""

    type: MaterialType = MaterialType.DIFFUSE_AND_GLOSSY
    color: Vector3f = field(default_factory=lambda: Vector3f(1, 1, 1))
    emission: Vector3f = field(default_factory=lambda: Vector3f(0, 0, 0))
    ior: float = 0.0
    kd: float = 0.0
    ks: float = 0.0
    specular_exponent: float = 0.0

    def color_at(self, u: float, v: float) -> Vector3f:
        """Texture colour at (u, v); materials carry no texture, so always black."""
        return Vector3f()