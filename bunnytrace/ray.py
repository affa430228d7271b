"""Rays with cached inverse direction."""

from __future__ import annotations

import math
import sys

from bunnytrace.vector import Vector3f


def _inverse(c: float) -> float:
    if c == 0:
        return math.copysign(math.inf, c)
    return 1.0 / c


class Ray:
    """A ray: destination = origin + t * direction."""

    __slots__ = ("origin", "direction", "direction_inv", "t", "t_min", "t_max")

    def __init__(self, origin: Vector3f, direction: Vector3f, t: float = 0.0):
        self.origin = origin
        self.direction = direction
        self.t = t
        self.direction_inv = Vector3f(
            _inverse(direction.x), _inverse(direction.y), _inverse(direction.z)
        )
        self.t_min = 0.0
        self.t_max = sys.float_info.max

    def at(self, t: float) -> Vector3f:
        """Point along the ray at parameter t."""
        return self.origin + self.direction * t

    __call__ = at

    def __str__(self) -> str:
        return f"[origin:={self.origin}, direction={self.direction}, time={self.t:g}]"

    def __repr__(self) -> str:
        return f"Ray({self.origin!r}, {self.direction!r}, {self.t!r})"