import math

import pytest

from game.raiders.physics import DegenerateVectorError, Point2D, Vector2D, clamp


def test_vector_arithmetic():
    a = Vector2D(1.0, 2.0)
    b = Vector2D(3.0, -1.0)
    assert a + b == Vector2D(4.0, 1.0)
    assert a - b == Vector2D(-2.0, 3.0)
    assert a * 2 == Vector2D(2.0, 4.0)
    assert 2 * a == Vector2D(2.0, 4.0)
    assert -a == Vector2D(-1.0, -2.0)
    assert b / 2 == Vector2D(1.5, -0.5)
    assert a.dot(b) == 1.0


def test_magnitude_and_unit():
    v = Vector2D(3.0, 4.0)
    assert v.magnitude == 5.0
    u = v.unit
    assert u.dx == pytest.approx(0.6)
    assert u.dy == pytest.approx(0.8)
    assert u.magnitude == pytest.approx(1.0)


def test_unit_of_zero_vector_is_degenerate():
    with pytest.raises(DegenerateVectorError):
        Vector2D(0.0, 0.0).unit
    # callers that only know about ValueError still catch it
    assert issubclass(DegenerateVectorError, ValueError)


def test_projection_onto_axis():
    v = Vector2D(2.0, 5.0)
    assert v.vector_project(Vector2D(10.0, 0.0)) == Vector2D(2.0, 0.0)
    assert v.scalar_project(Vector2D(0.0, 3.0)) == pytest.approx(5.0)
    assert Vector2D(1.0, 0.0).normal == Vector2D(0.0, 1.0)


def test_point_translation_and_difference():
    p = Point2D(1.0, 1.0)
    q = p + Vector2D(3.0, 4.0)
    assert q == Point2D(4.0, 5.0)
    assert q - p == Vector2D(3.0, 4.0)
    assert q - Vector2D(3.0, 4.0) == p
    assert p.distance(q) == 5.0
    assert q.to_vector() == Vector2D(4.0, 5.0)


def test_values_are_immutable():
    v = Vector2D(1.0, 1.0)
    with pytest.raises(AttributeError):
        v.dx = 3.0


def test_clamp():
    assert clamp(5, 0, 10) == 5
    assert clamp(-1, 0, 10) == 0
    assert clamp(math.inf, 0, 10) == 10
