import math
import sys

from bunnytrace.ray import Ray
from bunnytrace.vector import Vector3f


def test_at_zero_is_origin():
    ray = Ray(Vector3f(1, 2, 3), Vector3f(0, 0, 1))
    assert ray.at(0) == ray.origin


def test_at_moves_along_direction():
    origin = Vector3f(1, 2, 3)
    direction = Vector3f(0.5, -1, 2)
    ray = Ray(origin, direction)
    assert ray.at(2) - ray.at(1) == direction
    assert ray(3) == ray.at(3)


def test_inverse_direction():
    ray = Ray(Vector3f(), Vector3f(2, -4, 0.5))
    for d, inv in zip(ray.direction, ray.direction_inv):
        assert math.isclose(d * inv, 1.0)


def test_zero_component_gives_signed_infinity():
    ray = Ray(Vector3f(), Vector3f(0.0, -0.0, 1))
    assert ray.direction_inv.x == math.inf
    assert ray.direction_inv.y == -math.inf


def test_defaults():
    ray = Ray(Vector3f(), Vector3f(1, 0, 0))
    assert ray.t == 0.0
    assert ray.t_min == 0.0
    assert ray.t_max == sys.float_info.max


def test_str():
    ray = Ray(Vector3f(1, 2, 3), Vector3f(0, 0, 1), 2)
    assert str(ray) == "[origin:=1, 2, 3, direction=0, 0, 1, time=2]"