"""Tile partitioning of the output image.

The renderer splits the image into tiles of a nominal size derived from the
tile divider and visits them left-to-right, top-to-bottom. Tiles in the last
column and row are clamped to the image edge, so together the tiles cover
every pixel exactly once.

Example:
    >>> list(iter_tiles(10, 10, 4, 4))[:3]
    [TileRect(start_x=0, start_y=0, width=4, height=4),
     TileRect(start_x=4, start_y=0, width=4, height=4),
     TileRect(start_x=8, start_y=0, width=2, height=4)]
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from typing import NamedTuple

from src.retracer.core.errors import ConfigurationError


class TileRect(NamedTuple):
    """A rectangular image region: pixels [start_x, start_x+width) x [start_y, start_y+height)."""

    start_x: int
    start_y: int
    width: int
    height: int

    @property
    def end_x(self) -> int:
        return self.start_x + self.width

    @property
    def end_y(self) -> int:
        return self.start_y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    def contains(self, x: int, y: int) -> bool:
        """Check if pixel (x, y) lies inside the tile."""
        return self.start_x <= x < self.end_x and self.start_y <= y < self.end_y


def compute_tile_size(width: int, height: int, divider: float) -> tuple[int, int]:
    """Compute the nominal tile size for an image.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        divider: Number of tiles per axis (may be fractional).

    Returns:
        Tuple (tile_width, tile_height), each ceil(axis / divider) and at least 1.

    Raises:
        ConfigurationError: If the divider is so small that a tile size
            overflows.
    """
    ratios = (width / divider, height / divider)
    if not all(math.isfinite(r) for r in ratios):
        raise ConfigurationError(
            f"Tile divider {divider!r} is too small for a {width}x{height} image"
        )
    return max(1, math.ceil(ratios[0])), max(1, math.ceil(ratios[1]))


def iter_tiles(width: int, height: int, tile_width: int, tile_height: int) -> Iterator[TileRect]:
    """Yield the tiles covering a width x height image in raster order."""
    for y in range(0, height, tile_height):
        h = min(y + tile_height, height) - y
        for x in range(0, width, tile_width):
            w = min(x + tile_width, width) - x
            yield TileRect(x, y, w, h)
