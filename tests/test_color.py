"""Unit tests for the PixelColor accumulator."""

import pytest


class TestPixelColorArithmetic:
    """Tests for summing and scaling colors."""

    def test_add(self):
        """Test elementwise addition."""
        from src.retracer.core.color import PixelColor

        total = PixelColor(0.25, 0.5, 1.0) + PixelColor(0.25, 0.5, 1.0)
        assert total == PixelColor(0.5, 1.0, 2.0)

    def test_divide_by_sample_count(self):
        """Test that dividing a sum by its count gives the mean."""
        from src.retracer.core.color import PixelColor

        total = PixelColor()
        for _ in range(4):
            total = total + PixelColor(0.5, 0.25, 1.0)
        assert total / 4 == PixelColor(0.5, 0.25, 1.0)

    def test_divide_by_zero_raises(self):
        """Test that a zero divisor is not silently accepted."""
        from src.retracer.core.color import PixelColor

        with pytest.raises(ZeroDivisionError):
            PixelColor(1.0, 1.0, 1.0) / 0

    def test_of_sequence(self):
        """Test building a color from an RGB sequence."""
        from src.retracer.core.color import PixelColor

        assert PixelColor.of((1, 0, 0.5)) == PixelColor(1.0, 0.0, 0.5)
        c = PixelColor(0.1, 0.2, 0.3)
        assert PixelColor.of(c) is c


class TestPixelColorConversion:
    """Tests for conversion to 8-bit RGBA."""

    def test_primary_values(self):
        """Test black, white and mid-gray."""
        from src.retracer.core.color import PixelColor

        assert PixelColor(0.0, 0.0, 0.0).to_rgba8() == (0, 0, 0, 255)
        assert PixelColor(1.0, 1.0, 1.0).to_rgba8() == (255, 255, 255, 255)
        assert PixelColor(0.5, 0.25, 0.75).to_rgba8() == (128, 64, 191, 255)

    def test_clamps_out_of_range(self):
        """Test that HDR and negative values are clamped."""
        from src.retracer.core.color import PixelColor

        assert PixelColor(4.0, -1.0, 1.5).to_rgba8() == (255, 0, 255, 255)

    def test_gamma(self):
        """Test gamma correction brightens mid-tones."""
        from src.retracer.core.color import PixelColor

        linear = PixelColor(0.25, 0.25, 0.25).to_rgba8()
        corrected = PixelColor(0.25, 0.25, 0.25).to_rgba8(gamma=2.0)
        assert corrected == (128, 128, 128, 255)
        assert corrected[0] > linear[0]
