import pytest

from bunnytrace.material import Material, MaterialType
from bunnytrace.ray import Ray
from bunnytrace.triangle import MeshTriangle, Triangle, ray_triangle_intersect
from bunnytrace.vector import Vector2f, Vector3f

V0 = Vector3f(0, 0, 0)
V1 = Vector3f(1, 0, 0)
V2 = Vector3f(0, 1, 0)


def _write(tmp_path, text, name="model.obj"):
    path = tmp_path / name
    path.write_text(text)
    return path


ONE_TRI = "v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2 3\n"
TWO_TRI = "v 0 0 0\nv 1 0 0\nv 0 1 0\nv 1 1 0\nf 1 2 3\nf 2 4 3\n"


def test_ray_triangle_hit_lies_on_triangle():
    orig = Vector3f(0.25, 0.25, 1)
    d = Vector3f(0, 0, -1)
    t, u, v = ray_triangle_intersect(V0, V1, V2, orig, d)
    hit = orig + d * t
    bary = V0 * (1 - u - v) + V1 * u + V2 * v
    assert hit.x == pytest.approx(bary.x)
    assert hit.y == pytest.approx(bary.y)
    assert hit.z == pytest.approx(bary.z)


def test_ray_triangle_back_face_and_miss():
    assert ray_triangle_intersect(V0, V1, V2, Vector3f(0.25, 0.25, -1), Vector3f(0, 0, 1)) is None
    assert ray_triangle_intersect(V0, V1, V2, Vector3f(2, 2, 1), Vector3f(0, 0, -1)) is None


def test_triangle_get_intersection():
    mat = Material(MaterialType.REFLECTION)
    tri = Triangle(V0, V1, V2, mat)
    ray = Ray(Vector3f(0.2, 0.3, 2), Vector3f(0, 0, -1))
    hit = tri.get_intersection(ray)
    assert hit.happened
    assert hit.obj is tri and hit.m is mat
    assert hit.coords == ray.at(hit.distance)
    assert hit.coords.z == pytest.approx(0)
    assert hit.normal == tri.normal


def test_triangle_back_and_outside_miss():
    tri = Triangle(V0, V1, V2)
    assert not tri.get_intersection(Ray(Vector3f(0.2, 0.3, -2), Vector3f(0, 0, 1))).happened
    assert not tri.get_intersection(Ray(Vector3f(0.8, 0.8, 2), Vector3f(0, 0, -1))).happened
    assert not tri.get_intersection(Ray(Vector3f(0.2, 0.3, 2), Vector3f(0, 0, 1))).happened


def test_triangle_simple_queries():
    tri = Triangle(V0, V1, V2)
    assert tri.intersect(Ray(V0, V1)) is True
    assert tri.intersect_near(Ray(V0, V1)) is None
    assert tri.eval_diffuse_color(Vector2f()) == Vector3f(0.5, 0.5, 0.5)
    b = tri.get_bounds()
    assert b.p_min == Vector3f(0, 0, 0)
    assert b.p_max == Vector3f(1, 1, 0)
    normal, _ = tri.get_surface_properties(V0, V1, 0, Vector2f())
    assert normal == tri.normal


def test_mesh_loads_and_scales(tmp_path):
    mesh = MeshTriangle(_write(tmp_path, ONE_TRI))
    assert mesh.num_triangles == 1
    assert mesh.get_bounds().p_min == Vector3f(0, 0, 0)
    assert mesh.get_bounds().p_max == Vector3f(60, 60, 0)
    assert mesh.triangles[0].m.kd == pytest.approx(0.6)


def test_mesh_intersection_agrees(tmp_path):
    mesh = MeshTriangle(_write(tmp_path, TWO_TRI))
    assert mesh.num_triangles == 2
    ray = Ray(Vector3f(40, 45, 5), Vector3f(0, 0, -1))
    hit = mesh.get_intersection(ray)
    near = mesh.intersect_near(ray)
    assert hit.happened
    assert hit.obj is mesh.triangles[near[1]]
    assert near[0] == pytest.approx(hit.distance)
    assert mesh.intersect_near(Ray(Vector3f(100, 100, 5), Vector3f(0, 0, -1))) is None


def test_mesh_surface_normal_matches_triangle(tmp_path):
    mesh = MeshTriangle(_write(tmp_path, ONE_TRI))
    normal, st = mesh.get_surface_properties(Vector3f(), Vector3f(), 0, Vector2f(0, 0))
    expected = mesh.triangles[0].normal
    assert normal.x == pytest.approx(expected.x)
    assert normal.y == pytest.approx(expected.y)
    assert normal.z == pytest.approx(expected.z)
    assert st == mesh.st_coordinates[0]


def test_mesh_checker_pattern(tmp_path):
    mesh = MeshTriangle(_write(tmp_path, ONE_TRI))
    assert mesh.eval_diffuse_color(Vector2f(0, 0)) == Vector3f(0.815, 0.235, 0.031)
    assert mesh.eval_diffuse_color(Vector2f(0.15, 0)) == Vector3f(0.937, 0.937, 0.231)
    assert mesh.eval_diffuse_color(Vector2f(0.15, 0.15)) == Vector3f(0.815, 0.235, 0.031)


def test_mesh_rejects_several_meshes(tmp_path):
    text = "o a\n" + ONE_TRI + "o b\nf 1 2 3\n"
    with pytest.raises(ValueError):
        MeshTriangle(_write(tmp_path, text))