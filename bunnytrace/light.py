"""Point and area lights."""

from __future__ import annotations

from dataclasses import dataclass, field

from bunnytrace.vector import Vector3f, get_random_float


@dataclass
class Light:
    """A point light."""

    position: Vector3f
    intensity: Vector3f


@dataclass
class AreaLight(Light):
    """A rectangular light spanned by u and v from its position."""

    length: float = field(default=100, init=False)
    normal: Vector3f = field(default_factory=lambda: Vector3f(0, -1, 0), init=False)
    u: Vector3f = field(default_factory=lambda: Vector3f(1, 0, 0), init=False)
    v: Vector3f = field(default_factory=lambda: Vector3f(0, 0, 1), init=False)

    def sample_point(self) -> Vector3f:
        """Uniformly random point on the light's surface."""
        random_u = get_random_float()
        random_v = get_random_float()
        return self.position + random_u * self.u + random_v * self.v