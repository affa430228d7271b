import io
import math

import pytest

from bunnytrace.vector import (
    Vector2f,
    Vector3f,
    clamp,
    cross_product,
    dot_product,
    get_random_float,
    lerp,
    normalize,
    solve_quadratic,
    update_progress,
)


def test_single_argument_fills_all_components():
    assert Vector3f(3) == Vector3f(3, 3, 3)
    assert Vector2f(4) == Vector2f(4, 4)
    assert Vector3f() == Vector3f(0, 0, 0)


def test_two_components_rejected():
    with pytest.raises(TypeError):
        Vector3f(1, 2)


def test_arithmetic_round_trips():
    a = Vector3f(1.5, -2.0, 3.25)
    b = Vector3f(0.5, 4.0, -1.0)
    assert (a + b) - b == a
    assert a * 2 == a + a
    assert 2 * a == a * 2
    assert (a / 2) * 2 == a
    assert -a + a == Vector3f()
    assert a * Vector3f(1) == a


def test_scalar_is_promoted_in_addition():
    a = Vector3f(1, 2, 3)
    assert a + 0 == a
    assert 0 + a == a


def test_indexing_and_iteration():
    v = Vector3f(7, 8, 9)
    assert [v[0], v[1], v[2]] == list(v)
    assert tuple(v) == (7.0, 8.0, 9.0)


def test_str_format():
    assert str(Vector3f(1, 2, 3)) == "1, 2, 3"


def test_min_max():
    a = Vector3f(1, 5, -2)
    b = Vector3f(3, -1, 0)
    lo = Vector3f.minimum(a, b)
    hi = Vector3f.maximum(a, b)
    for i in range(3):
        assert lo[i] == min(a[i], b[i])
        assert hi[i] == max(a[i], b[i])


def test_vector2f_ops():
    v = Vector2f(1, 2)
    assert v * 2 == v + v
    assert 2 * v == v * 2


def test_normalize_gives_unit_length():
    n = normalize(Vector3f(3, -4, 12))
    assert math.isclose(dot_product(n, n), 1.0)


def test_normalize_zero_vector_unchanged():
    assert normalize(Vector3f()) == Vector3f()


def test_cross_product_is_orthogonal():
    a = Vector3f(1, 2, 3)
    b = Vector3f(-2, 0.5, 4)
    c = cross_product(a, b)
    assert math.isclose(dot_product(c, a), 0.0, abs_tol=1e-12)
    assert math.isclose(dot_product(c, b), 0.0, abs_tol=1e-12)
    assert cross_product(b, a) == -c


def test_lerp_endpoints():
    a = Vector3f(1, 2, 3)
    b = Vector3f(4, 5, 6)
    assert lerp(a, b, 0) == a
    assert lerp(a, b, 1) == b


def test_clamp():
    assert clamp(0, 1, 5) == 1
    assert clamp(0, 1, -5) == 0
    assert clamp(0, 1, 0.25) == 0.25


def test_solve_quadratic_roots_satisfy_equation():
    roots = solve_quadratic(2, -3, -5)
    assert roots is not None
    x0, x1 = roots
    assert x0 <= x1
    for x in roots:
        assert math.isclose(2 * x * x - 3 * x - 5, 0.0, abs_tol=1e-9)


def test_solve_quadratic_double_root():
    x0, x1 = solve_quadratic(1, -2, 1)
    assert x0 == x1
    assert math.isclose(x0 * x0 - 2 * x0 + 1, 0.0, abs_tol=1e-12)


def test_solve_quadratic_no_roots():
    assert solve_quadratic(1, 0, 1) is None


def test_random_float_range():
    for _ in range(100):
        value = get_random_float()
        assert 0.0 <= value < 1.0


def test_update_progress_full_bar():
    out = io.StringIO()
    update_progress(1.0, out)
    text = out.getvalue()
    assert text == "[" + "=" * 70 + "] 100 %\r"


def test_update_progress_empty_bar():
    out = io.StringIO()
    update_progress(0.0, out)
    text = out.getvalue()
    assert text.startswith("[>")
    assert text.endswith("] 0 %\r")