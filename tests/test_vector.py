import math

import pytest

from vector import RotationMatrix, Spherical, Vector


@pytest.mark.parametrize("phi,theta", [(0.0, 0.0), (1.0, 0.5), (-2.5, -1.2), (math.pi, math.pi / 2)])
def test_from_spherical_is_unit_length(phi, theta):
    assert Vector.from_spherical(Spherical(phi, theta)).length == pytest.approx(1.0)


def test_spherical_round_trip():
    s = Vector.from_spherical(Spherical(1.0, 0.5)).to_spherical()
    assert s.phi == pytest.approx(1.0)
    assert s.theta == pytest.approx(0.5)


def test_axes_of_the_sphere():
    north = Vector.from_spherical(Spherical(0.0, math.pi / 2))
    east = Vector.from_spherical(Spherical(math.pi / 2, 0.0))
    assert north.y == pytest.approx(1.0)
    assert east.z == pytest.approx(1.0)


def test_to_spherical_tolerates_rounding_past_the_pole():
    assert Vector(0.0, 1.0000000000000002, 0.0).to_spherical().theta == pytest.approx(math.pi / 2)


def test_dot_and_cross():
    x, y = Vector(1.0, 0.0, 0.0), Vector(0.0, 1.0, 0.0)
    assert x.dot(y) == 0.0
    assert x.cross(y) == Vector(0.0, 0.0, 1.0)
    assert y.cross(x) == Vector(0.0, 0.0, -1.0)


def test_normalize():
    v = Vector(3.0, 0.0, 4.0)
    assert v.length == 5.0
    n = v.normalize()
    assert (n.x, n.y, n.z) == pytest.approx((0.6, 0.0, 0.8))
    # the original is untouched
    assert v == Vector(3.0, 0.0, 4.0)


def test_normalize_zero_vector_stays_zero():
    assert Vector().normalize() == Vector(0.0, 0.0, 0.0)


def test_angle_between():
    x = Vector(1.0, 0.0, 0.0)
    assert x.angle_between(Vector(0.0, 0.0, 2.0)) == pytest.approx(math.pi / 2)
    assert x.angle_between(Vector(5.0, 0.0, 0.0)) == 0.0
    assert x.angle_between(x.negate()) == pytest.approx(math.pi)


def test_angle_between_zero_vector_is_right_angle():
    assert Vector().angle_between(Vector(1.0, 2.0, 3.0)) == math.pi / 2
    assert Vector(1.0, 2.0, 3.0).angle_between(Vector()) == math.pi / 2


def test_multiply_by_number():
    assert Vector(1.0, -2.0, 3.0).multiply(2.0) == Vector(2.0, -4.0, 6.0)
    assert Vector(2.0, 4.0, 6.0).divide(2.0) == Vector(1.0, 2.0, 3.0)


def test_identity_matrix():
    v = Vector(0.3, -0.4, 0.5)
    assert v.multiply(RotationMatrix()) == v
    assert RotationMatrix(Vector(0.0, 1.0, 0.0)).elements.tolist() == RotationMatrix().elements.tolist()


def test_rotation_matrix_is_homogeneous():
    m = RotationMatrix(Vector(0.0, 1.0, 0.0), 0.7).elements
    assert m[3].tolist() == [0.0, 0.0, 0.0, 1.0]
    assert m[:, 3].tolist() == [0.0, 0.0, 0.0, 1.0]


def test_rotation_about_vertical_axis():
    v = Vector(1.0, 0.0, 0.0).multiply(RotationMatrix(Vector(0.0, 1.0, 0.0), math.pi / 2))
    assert v.x == pytest.approx(0.0, abs=1e-12)
    assert v.y == pytest.approx(0.0, abs=1e-12)
    assert v.z == pytest.approx(-1.0)


def test_rotation_moves_begin_onto_end():
    begin = Vector.from_spherical(Spherical(0.2, 0.3))
    end = Vector.from_spherical(Spherical(1.4, -0.6))
    axis = begin.cross(end).normalize()
    v = begin.multiply(RotationMatrix(axis, begin.angle_between(end)))
    assert v.x == pytest.approx(end.x)
    assert v.y == pytest.approx(end.y)
    assert v.z == pytest.approx(end.z)
    assert v.length == pytest.approx(1.0)
