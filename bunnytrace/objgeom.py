"""Geometry types and text helpers used when reading Wavefront OBJ models."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, TypeVar

T = TypeVar("T")

_WHITESPACE = " \t"
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class Vector2:
    """A 2D vector holding texture coordinates."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vector2":
        return Vector2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__


@dataclass(frozen=True)
class Vector3:
    """A 3D vector holding positions and normals."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> "Vector3":
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "Vector3":
        return Vector3(self.x / scalar, self.y / scalar, self.z / scalar)


@dataclass
class Vertex:
    """A model vertex: position, normal and texture coordinate."""

    position: Vector3 = field(default_factory=Vector3)
    normal: Vector3 = field(default_factory=Vector3)
    texture_coordinate: Vector2 = field(default_factory=Vector2)


_NAN3 = Vector3(math.nan, math.nan, math.nan)


def cross_v3(a: Vector3, b: Vector3) -> Vector3:
    return Vector3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


def magnitude_v3(v: Vector3) -> float:
    return math.sqrt(v.x ** 2 + v.y ** 2 + v.z ** 2)


def dot_v3(a: Vector3, b: Vector3) -> float:
    return a.x * b.x + a.y * b.y + a.z * b.z


def angle_between_v3(a: Vector3, b: Vector3) -> float:
    """Angle in radians between two vectors; NaN when it is undefined."""
    denom = magnitude_v3(a) * magnitude_v3(b)
    if denom == 0:
        return math.nan
    cosine = dot_v3(a, b) / denom
    if not -1.0 <= cosine <= 1.0:
        return math.nan
    return math.acos(cosine)


def proj_v3(a: Vector3, b: Vector3) -> Vector3:
    """Projection of a onto b; NaN components when b is the zero vector."""
    mag = magnitude_v3(b)
    if mag == 0:
        return _NAN3
    bn = b / mag
    return bn * dot_v3(a, bn)


def same_side(p1: Vector3, p2: Vector3, a: Vector3, b: Vector3) -> bool:
    """Whether p1 lies on the same side of segment ab as p2."""
    cp1 = cross_v3(b - a, p1 - a)
    cp2 = cross_v3(b - a, p2 - a)
    return dot_v3(cp1, cp2) >= 0


def gen_tri_normal(t1: Vector3, t2: Vector3, t3: Vector3) -> Vector3:
    """Unnormalised cross-product normal of a triangle."""
    return cross_v3(t2 - t1, t3 - t1)


def in_triangle(point: Vector3, tri1: Vector3, tri2: Vector3, tri3: Vector3) -> bool:
    """Whether point lies within the triangle."""
    within_prism = (
        same_side(point, tri1, tri2, tri3)
        and same_side(point, tri2, tri1, tri3)
        and same_side(point, tri3, tri1, tri2)
    )
    if not within_prism:
        return False
    n = gen_tri_normal(tri1, tri2, tri3)
    proj = proj_v3(point, n)
    return magnitude_v3(proj) == 0


def split(text: str, token: str) -> List[str]:
    """Split text at token; a token straight after another yields an empty field."""
    out: List[str] = []
    temp = ""
    size = len(token)
    i = 0
    while i < len(text):
        test = text[i:i + size]
        if test == token:
            if temp:
                out.append(temp)
                temp = ""
                i += size - 1
            else:
                out.append("")
        elif i + size >= len(text):
            temp += text[i:i + size]
            out.append(temp)
            break
        else:
            temp += text[i]
        i += 1
    return out


def _first_not_of(text: str, start: Optional[int]) -> Optional[int]:
    if start is None:
        return None
    return next((i for i in range(start, len(text)) if text[i] not in _WHITESPACE), None)


def _first_of(text: str, start: Optional[int]) -> Optional[int]:
    if start is None:
        return None
    return next((i for i in range(start, len(text)) if text[i] in _WHITESPACE), None)


def _last_not_of(text: str) -> Optional[int]:
    return next(
        (i for i in reversed(range(len(text))) if text[i] not in _WHITESPACE), None
    )


def tail(text: str) -> str:
    """Everything after the first token, with surrounding blanks removed."""
    token_start = _first_not_of(text, 0)
    space_start = _first_of(text, token_start)
    tail_start = _first_not_of(text, space_start)
    tail_end = _last_not_of(text)
    if tail_start is not None and tail_end is not None:
        return text[tail_start:tail_end + 1]
    if tail_start is not None:
        return text[tail_start:]
    return ""


def first_token(text: str) -> str:
    """The first blank-separated token of text, or an empty string."""
    token_start = _first_not_of(text, 0)
    if token_start is None:
        return ""
    token_end = _first_of(text, token_start)
    if token_end is None:
        return text[token_start:]
    return text[token_start:token_end]


def get_element(elements: Sequence[T], index: str) -> T:
    """Element named by an OBJ index: 1-based, or negative counting from the end."""
    match = _LEADING_INT.match(index)
    if match is None:
        raise ValueError(f"invalid index: {index!r}")
    idx = int(match.group(1))
    idx = len(elements) + idx if idx < 0 else idx - 1
    if not 0 <= idx < len(elements):
        raise IndexError(f"index {index!r} out of range for {len(elements)} elements")
    return elements[idx]


def _emit(indices: List[int], vertices: Sequence[Vertex], wanted: Sequence[Vector3],
          count: Optional[int] = None) -> None:
    for j, vertex in enumerate(vertices[:count] if count is not None else vertices):
        for position in wanted:
            if vertex.position == position:
                indices.append(j)


def triangulate(vertices: Sequence[Vertex]) -> List[int]:
    """Ear-clip a polygon into triangle indices into vertices."""
    if len(vertices) < 3:
        return []
    if len(vertices) == 3:
        return [0, 1, 2]

    indices: List[int] = []
    remaining = list(vertices)

    while True:
        produced = len(indices)
        i = 0
        while i < len(remaining):
            prev = remaining[i - 1].position
            cur = remaining[i].position
            nxt = remaining[(i + 1) % len(remaining)].position

            if len(remaining) == 3:
                _emit(indices, vertices, (cur, prev, nxt), count=len(remaining))
                remaining.clear()
                break

            if len(remaining) == 4:
                _emit(indices, vertices, (cur, prev, nxt))
                other = next(
                    (v.position for v in remaining if v.position not in (cur, prev, nxt)),
                    Vector3(),
                )
                _emit(indices, vertices, (prev, nxt, other))
                remaining.clear()
                break

            blocked = any(
                in_triangle(v.position, prev, cur, nxt)
                and v.position not in (prev, cur, nxt)
                for v in vertices
            )
            if blocked:
                i += 1
                continue

            _emit(indices, vertices, (cur, prev, nxt))
            pos = next(k for k, v in enumerate(remaining) if v.position == cur)
            del remaining[pos]
            i = 0

        if not indices or not remaining or len(indices) == produced:
            break
    return indices