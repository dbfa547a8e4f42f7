"""Unit tests for Vec3, Ray and color packing."""

import math

import pytest

from core.math import Vec3, Ray, to_argb


class TestVec3Arithmetic:
    def test_add_sub(self):
        a = Vec3(1, 2, 3)
        b = Vec3(0.5, -1, 2)
        assert a + b == Vec3(1.5, 1, 5)
        assert a - b == Vec3(0.5, 3, 1)

    def test_scalar_and_componentwise_mul(self):
        a = Vec3(1, 2, 3)
        assert a * 2 == Vec3(2, 4, 6)
        assert 2 * a == Vec3(2, 4, 6)
        assert a * Vec3(2, 0, -1) == Vec3(2, 0, -3)

    def test_div_and_neg(self):
        assert Vec3(2, 4, 6) / 2 == Vec3(1, 2, 3)
        assert -Vec3(1, -2, 3) == Vec3(-1, 2, -3)

    def test_iteration_unpacks_components(self):
        x, y, z = Vec3(1, 2, 3)
        assert (x, y, z) == (1.0, 2.0, 3.0)

    def test_augmented_add_does_not_alias(self):
        """`+=` must rebind, never mutate a shared vector."""
        shared = Vec3(0.1, 0.1, 0.1)
        color = shared
        color += Vec3(1, 1, 1)
        assert shared == Vec3(0.1, 0.1, 0.1)
        assert color.x == pytest.approx(1.1)
        assert color is not shared


class TestVec3Geometry:
    def test_dot_and_length(self):
        assert Vec3(1, 2, 3).dot(Vec3(4, -5, 6)) == 12.0
        assert Vec3(3, 4, 0).length() == 5.0

    def test_normalize(self):
        n = Vec3(0, 3, 4).normalize()
        assert n.length() == pytest.approx(1.0)
        assert n.y == pytest.approx(0.6)

    def test_normalize_zero_vector_stays_zero(self):
        assert Vec3(0, 0, 0).normalize() == Vec3(0, 0, 0)

    def test_reflect(self):
        r = Vec3(1, -1, 0).reflect(Vec3(0, 1, 0))
        assert r == Vec3(1, 1, 0)

    def test_refract_head_on_keeps_direction(self):
        d = Vec3(0, 0, -1).refract(Vec3(0, 0, 1), 1.5)
        assert d.x == pytest.approx(0.0)
        assert d.y == pytest.approx(0.0)
        assert d.z == pytest.approx(-1.0)

    def test_refract_entering_bends_toward_normal(self):
        incident = Vec3(1, 0, -1).normalize()
        d = incident.refract(Vec3(0, 0, 1), 1.5)
        sin_in = abs(incident.x)
        sin_out = abs(d.normalize().x)
        # Snell: sin_in * 1.0 == sin_out * 1.5
        assert sin_in == pytest.approx(1.5 * sin_out)

    def test_refract_total_internal_reflection_returns_none(self):
        # leaving glass (ray along the normal side) at a grazing angle
        incident = Vec3(1, 0, 0.5).normalize()
        assert incident.refract(Vec3(0, 0, 1), 1.5) is None


class TestRay:
    def test_direction_is_normalized(self):
        ray = Ray(Vec3(0, 0, 0), Vec3(0, 0, -4))
        assert ray.direction == Vec3(0, 0, -1)

    def test_point_at_parameter(self):
        ray = Ray(Vec3(1, 0, 0), Vec3(0, 2, 0))
        assert ray.point_at_parameter(3) == Vec3(1, 3, 0)


class TestToArgb:
    def test_primary_colors(self):
        assert to_argb(Vec3(1, 0, 0)) == 0xFFFF0000
        assert to_argb(Vec3(0, 1, 0)) == 0xFF00FF00
        assert to_argb(Vec3(0, 0, 1)) == 0xFF0000FF

    def test_channels_are_clamped(self):
        assert to_argb(Vec3(2.0, -1.0, 0.5)) == 0xFFFF007F

    def test_black_is_opaque(self):
        assert to_argb(Vec3(0, 0, 0)) == 0xFF000000

    def test_pi_is_exposed(self):
        from core.math import PI
        assert PI == math.pi
