import io

import pytest

from bunnytrace.bvh import BVHAccel, BVHBuildNode, SplitMethod
from bunnytrace.ray import Ray
from bunnytrace.sphere import Sphere
from bunnytrace.vector import Vector3f


def _quiet(objects, **kwargs):
    return BVHAccel(objects, stream=io.StringIO(), **kwargs)


def _leaves(node):
    if node.is_leaf:
        return [node.object]
    return _leaves(node.left) + _leaves(node.right)


def _spheres():
    return [
        Sphere(Vector3f(0.3, 0.2, -5), 1),
        Sphere(Vector3f(-0.1, 0.1, -10), 1),
        Sphere(Vector3f(0.2, -0.3, -15), 1),
        Sphere(Vector3f(4, 4, -8), 1.5),
        Sphere(Vector3f(-6, 2, -3), 0.5),
    ]


def test_empty_has_no_root_and_no_hit():
    bvh = _quiet([])
    assert bvh.root is None
    assert bvh.intersect(Ray(Vector3f(0), Vector3f(0, 0, -1))).happened is False


def test_max_prims_clamped():
    bvh = _quiet([Sphere(Vector3f(0), 1)], max_prims_in_node=300)
    assert bvh.max_prims_in_node == 255
    assert bvh.split_method is SplitMethod.NAIVE


def test_reports_completion():
    out = io.StringIO()
    BVHAccel([Sphere(Vector3f(0), 1)], stream=out)
    assert "BVH Generation complete" in out.getvalue()


def test_every_object_is_one_leaf():
    spheres = _spheres()
    bvh = _quiet(spheres)
    leaves = _leaves(bvh.root)
    assert len(leaves) == len(spheres)
    assert {id(s) for s in leaves} == {id(s) for s in spheres}


def test_root_bounds_contain_all_objects():
    spheres = _spheres()
    bvh = _quiet(spheres)
    root = bvh.root.bounds
    for s in spheres:
        b = s.get_bounds()
        assert all(r <= p for r, p in zip(root.p_min, b.p_min))
        assert all(r >= p for r, p in zip(root.p_max, b.p_max))


def test_single_object_is_leaf():
    s = Sphere(Vector3f(1, 2, 3), 1)
    bvh = _quiet([s])
    assert bvh.root.object is s
    assert bvh.root.left is None and bvh.root.right is None
    assert bvh.root.bounds == s.get_bounds()


def test_split_sorts_along_longest_axis():
    a = Sphere(Vector3f(10, 0, 0), 1)
    b = Sphere(Vector3f(-10, 0, 0), 1)
    c = Sphere(Vector3f(0, 0, 0), 1)
    bvh = _quiet([a, b, c])
    assert bvh.root.left.object is b
    assert _leaves(bvh.root.right) == [c, a]


def test_nearest_hit_matches_brute_force():
    spheres = _spheres()
    bvh = _quiet(spheres)
    ray = Ray(Vector3f(0, 0, 0), Vector3f(0, 0, -1))
    hit = bvh.intersect(ray)
    hits = [s.get_intersection(ray) for s in spheres]
    best = min((h for h in hits if h.happened), key=lambda h: h.distance)
    assert hit.happened
    assert hit.obj is spheres[0]
    assert hit.distance == pytest.approx(best.distance)


def test_miss_returns_empty():
    bvh = _quiet(_spheres())
    hit = bvh.intersect(Ray(Vector3f(0, 0, 0), Vector3f(0.1, 0.2, 1)))
    assert hit.happened is False


def test_get_intersection_on_subtree():
    spheres = _spheres()
    bvh = _quiet(spheres)
    ray = Ray(Vector3f(0.01, 0.01, 0), Vector3f(0.001, 0.001, -1))
    node = BVHBuildNode(bounds=spheres[2].get_bounds(), object=spheres[2])
    hit = bvh.get_intersection(node, ray)
    assert hit.obj is spheres[2]
    assert hit.distance == pytest.approx(spheres[2].get_intersection(ray).distance)