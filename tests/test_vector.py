"""Unit tests for the Vector3 value type.

Tests cover:
- Construction from tuples and other vectors
- Arithmetic closure (add, subtract, negate, scale, divide)
- Dot and cross products, length and normalization
"""

import math

import pytest


class TestVectorConstruction:
    """Tests for building vectors."""

    def test_of_tuple(self):
        """Test building a vector from a tuple."""
        from src.retracer.core.vector import Vector3

        v = Vector3.of((1, 2, 3))
        assert v == Vector3(1.0, 2.0, 3.0)
        assert isinstance(v.x, float)

    def test_of_vector_returns_same_instance(self):
        """Test that Vector3.of passes vectors through unchanged."""
        from src.retracer.core.vector import Vector3

        v = Vector3(1.0, 2.0, 3.0)
        assert Vector3.of(v) is v

    def test_of_rejects_wrong_length(self):
        """Test that a 2-element sequence is rejected."""
        from src.retracer.core.vector import Vector3

        with pytest.raises(ValueError):
            Vector3.of((1.0, 2.0))

    def test_iterates_components(self):
        """Test unpacking a vector."""
        from src.retracer.core.vector import Vector3

        x, y, z = Vector3(4.0, 5.0, 6.0)
        assert (x, y, z) == (4.0, 5.0, 6.0)


class TestVectorArithmetic:
    """Tests for vector arithmetic."""

    def test_add_sub(self):
        """Test elementwise addition and subtraction."""
        from src.retracer.core.vector import Vector3

        a = Vector3(1.0, 2.0, 3.0)
        b = Vector3(0.5, -1.0, 2.0)
        assert a + b == Vector3(1.5, 1.0, 5.0)
        assert a - b == Vector3(0.5, 3.0, 1.0)

    def test_scale_both_sides(self):
        """Test scalar multiplication from either side."""
        from src.retracer.core.vector import Vector3

        v = Vector3(1.0, -2.0, 3.0)
        assert v * 2.0 == Vector3(2.0, -4.0, 6.0)
        assert 2.0 * v == Vector3(2.0, -4.0, 6.0)
        assert v / 2.0 == Vector3(0.5, -1.0, 1.5)
        assert -v == Vector3(-1.0, 2.0, -3.0)

    def test_dot_and_cross(self):
        """Test dot and cross products of the basis vectors."""
        from src.retracer.core.vector import Vector3

        x = Vector3(1.0, 0.0, 0.0)
        y = Vector3(0.0, 1.0, 0.0)
        assert x.dot(y) == 0.0
        assert x.cross(y) == Vector3(0.0, 0.0, 1.0)
        assert y.cross(x) == Vector3(0.0, 0.0, -1.0)

    def test_length(self):
        """Test length and squared length."""
        from src.retracer.core.vector import Vector3

        v = Vector3(3.0, 4.0, 0.0)
        assert v.length_squared() == 25.0
        assert v.length() == 5.0

    def test_normalized(self):
        """Test normalization produces a unit vector."""
        from src.retracer.core.vector import Vector3

        n = Vector3(0.0, 3.0, 4.0).normalized()
        assert math.isclose(n.length(), 1.0)
        assert math.isclose(n.y, 0.6)

    def test_normalize_zero_vector(self):
        """Test that the zero vector normalizes to zero instead of failing."""
        from src.retracer.core.vector import ZERO, Vector3

        assert Vector3(0.0, 0.0, 0.0).normalized() == ZERO

    def test_near_zero(self):
        """Test near_zero detection."""
        from src.retracer.core.vector import Vector3

        assert Vector3(1e-9, -1e-9, 0.0).near_zero()
        assert not Vector3(1e-3, 0.0, 0.0).near_zero()
