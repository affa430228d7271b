"""Small vector types and numeric helpers shared by the renderer."""

from __future__ import annotations

import math
import random
import sys
from typing import Iterator, Optional, TextIO, Tuple, Union

EPSILON = 0.00001
K_INFINITY = 3.4028234663852886e38
M_PI = 3.141592653589793

Number = Union[int, float]


def _fmt(value: float) -> str:
    return f"{value:g}"


class Vector3f:
    """A three-component vector; one argument fills all three components."""

    __slots__ = ("x", "y", "z")

    def __init__(self, x: Number = 0.0, y: Optional[Number] = None, z: Optional[Number] = None):
        if y is None and z is None:
            y = z = x
        elif y is None or z is None:
            raise TypeError("Vector3f takes one or three components")
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    @staticmethod
    def _coerce(other: Union["Vector3f", Number]) -> "Vector3f":
        if isinstance(other, Vector3f):
            return other
        if isinstance(other, (int, float)):
            return Vector3f(other)
        return NotImplemented

    def __add__(self, other):
        o = self._coerce(other)
        if o is NotImplemented:
            return o
        return Vector3f(self.x + o.x, self.y + o.y, self.z + o.z)

    __radd__ = __add__

    def __sub__(self, other):
        o = self._coerce(other)
        if o is NotImplemented:
            return o
        return Vector3f(self.x - o.x, self.y - o.y, self.z - o.z)

    def __rsub__(self, other):
        o = self._coerce(other)
        if o is NotImplemented:
            return o
        return o - self

    def __mul__(self, other):
        if isinstance(other, Vector3f):
            return Vector3f(self.x * other.x, self.y * other.y, self.z * other.z)
        if isinstance(other, (int, float)):
            return Vector3f(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, (int, float)):
            return Vector3f(self.x / other, self.y / other, self.z / other)
        return NotImplemented

    def __neg__(self) -> "Vector3f":
        return Vector3f(-self.x, -self.y, -self.z)

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z))

    def __getitem__(self, index: int) -> float:
        return (self.x, self.y, self.z)[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector3f):
            return NotImplemented
        return (self.x, self.y, self.z) == (other.x, other.y, other.z)

    def __hash__(self) -> int:
        return hash((self.x, self.y, self.z))

    def __repr__(self) -> str:
        return f"Vector3f({self.x!r}, {self.y!r}, {self.z!r})"

    def __str__(self) -> str:
        return f"{_fmt(self.x)}, {_fmt(self.y)}, {_fmt(self.z)}"

    @staticmethod
    def minimum(a: "Vector3f", b: "Vector3f") -> "Vector3f":
        """Component-wise minimum."""
        return Vector3f(min(a.x, b.x), min(a.y, b.y), min(a.z, b.z))

    @staticmethod
    def maximum(a: "Vector3f", b: "Vector3f") -> "Vector3f":
        """Component-wise maximum."""
        return Vector3f(max(a.x, b.x), max(a.y, b.y), max(a.z, b.z))


class Vector2f:
    """A two-component vector; one argument fills both components."""

    __slots__ = ("x", "y")

    def __init__(self, x: Number = 0.0, y: Optional[Number] = None):
        if y is None:
            y = x
        self.x = float(x)
        self.y = float(y)

    def __mul__(self, other):
        if isinstance(other, (int, float)):
            return Vector2f(self.x * other, self.y * other)
        return NotImplemented

    __rmul__ = __mul__

    def __add__(self, other):
        if isinstance(other, Vector2f):
            return Vector2f(self.x + other.x, self.y + other.y)
        return NotImplemented

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector2f):
            return NotImplemented
        return (self.x, self.y) == (other.x, other.y)

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def __repr__(self) -> str:
        return f"Vector2f({self.x!r}, {self.y!r})"


def lerp(a: Vector3f, b: Vector3f, t: float) -> Vector3f:
    """Linear interpolation between two vectors."""
    return a * (1 - t) + b * t


def normalize(v: Vector3f) -> Vector3f:
    """Unit vector in the direction of v; a zero vector is returned unchanged."""
    mag2 = v.x * v.x + v.y * v.y + v.z * v.z
    if mag2 > 0:
        inv = 1 / math.sqrt(mag2)
        return Vector3f(v.x * inv, v.y * inv, v.z * inv)
    return v


def dot_product(a: Vector3f, b: Vector3f) -> float:
    return a.x * b.x + a.y * b.y + a.z * b.z


def cross_product(a: Vector3f, b: Vector3f) -> Vector3f:
    return Vector3f(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


def clamp(lo: float, hi: float, v: float) -> float:
    return max(lo, min(hi, v))


def solve_quadratic(a: float, b: float, c: float) -> Optional[Tuple[float, float]]:
    """Real roots of a*x^2 + b*x + c in ascending order, or None."""
    discr = b * b - 4 * a * c
    if discr < 0:
        return None
    if discr == 0:
        x0 = x1 = -0.5 * b / a
    else:
        if b > 0:
            q = -0.5 * (b + math.sqrt(discr))
        else:
            q = -0.5 * (b - math.sqrt(discr))
        x0 = q / a
        x1 = c / q
    if x0 > x1:
        x0, x1 = x1, x0
    return x0, x1


def get_random_float() -> float:
    """Uniform random number in [0, 1)."""
    return random.random()


def update_progress(progress: float, stream: Optional[TextIO] = None) -> None:
    """Draw a 70-column progress bar on one console line."""
    out = stream if stream is not None else sys.stdout
    bar_width = 70
    pos = int(bar_width * progress)
    bar = "".join(
        "=" if i < pos else ">" if i == pos else " " for i in range(bar_width)
    )
    out.write(f"[{bar}] {int(progress * 100.0)} %\r")
    out.flush()