"""Pixel color accumulator.

PixelColor holds summed linear radiance for one pixel. It is only turned
into a display color after being divided by the pixel's sample count, see
PixelColor.to_rgba8().
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

# Means within this distance below a half step round up. Float64 sums of
# thousands of samples drift far less than this.
ROUNDING_EPSILON = 1e-9


def channel_to_byte(value: float, gamma: float = 1.0) -> int:
    """Convert one mean channel value to an 8-bit integer.

    Clamps to [0, 1], applies gamma correction and rounds half up
    with a ROUNDING_EPSILON tolerance. The finalization kernel in
    core.buffers uses the same formula.
    """
    value = min(max(value, 0.0), 1.0)
    if gamma != 1.0:
        value = value ** (1.0 / gamma)
    return int(value * 255.0 + 0.5 + ROUNDING_EPSILON)


@dataclass(frozen=True)
class PixelColor:
    """Summed RGB radiance.

    Attributes:
        r: Red sum.
        g: Green sum.
        b: Blue sum.
    """

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0

    @classmethod
    def of(cls, value: PixelColor | Sequence[float]) -> PixelColor:
        """Build a PixelColor from another color or an RGB sequence."""
        if isinstance(value, PixelColor):
            return value
        r, g, b = value
        return cls(float(r), float(g), float(b))

    def __add__(self, other: PixelColor) -> PixelColor:
        return PixelColor(self.r + other.r, self.g + other.g, self.b + other.b)

    def __mul__(self, scalar: float) -> PixelColor:
        return PixelColor(self.r * scalar, self.g * scalar, self.b * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> PixelColor:
        return PixelColor(self.r / scalar, self.g / scalar, self.b / scalar)

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.r, self.g, self.b)

    def to_rgba8(self, gamma: float = 1.0) -> tuple[int, int, int, int]:
        """Convert a mean color to clamped 8-bit RGBA with opaque alpha.

        Args:
            gamma: Gamma correction value. 1.0 keeps the color linear.

        Returns:
            Tuple (r, g, b, 255) with channels in [0, 255].
        """
        return (
            channel_to_byte(self.r, gamma),
            channel_to_byte(self.g, gamma),
            channel_to_byte(self.b, gamma),
            255,
        )


BLACK = PixelColor(0.0, 0.0, 0.0)
