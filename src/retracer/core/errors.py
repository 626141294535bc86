"""Exceptions raised by the renderer.

Each failure class also subclasses the matching builtin (ValueError for bad
input, RuntimeError for render-time faults), so ``except ValueError`` keeps
working while the specific class identifies which kind of failure occurred.
"""

from __future__ import annotations


class RenderError(Exception):
    """Base class for all renderer failures."""


class ConfigurationError(RenderError, ValueError):
    """Invalid resolution or render settings, raised before any allocation."""


class UnsampledPixelError(RenderError, RuntimeError):
    """A pixel reached finalization without any accumulated samples.

    Attributes:
        count: Number of pixels with a zero sample count.
        x: X coordinate of the first unsampled pixel in buffer order.
        y: Y coordinate of the first unsampled pixel in buffer order.
    """

    def __init__(self, count: int, x: int, y: int) -> None:
        self.count = count
        self.x = x
        self.y = y
        super().__init__(
            f"{count} pixel(s) have no samples at finalization; "
            f"first unsampled pixel is ({x}, {y})"
        )


class RegionBoundsError(RenderError, IndexError):
    """A region sampler wrote outside its tile or passed malformed data."""
