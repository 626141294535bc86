"""Unit tests for tile partitioning.

Tests cover:
- Nominal tile size from the divider
- Raster order and edge clamping
- Exact, non-overlapping coverage for many resolutions and dividers
"""

import numpy as np
import pytest


class TestTileSize:
    """Tests for compute_tile_size."""

    def test_even_division(self):
        """Test a divider that splits the image evenly."""
        from src.retracer.core.tiling import compute_tile_size

        assert compute_tile_size(640, 480, 4) == (160, 120)

    def test_rounds_up(self):
        """Test that partial tiles round the nominal size up."""
        from src.retracer.core.tiling import compute_tile_size

        assert compute_tile_size(10, 10, 3) == (4, 4)
        assert compute_tile_size(10, 7, 2.5) == (4, 3)

    def test_large_divider_gives_single_pixel_tiles(self):
        """Test that tiles never shrink below one pixel."""
        from src.retracer.core.tiling import compute_tile_size

        assert compute_tile_size(5, 3, 1000) == (1, 1)

    def test_fractional_divider_below_one(self):
        """Test that a divider below one yields a single tile larger than the image."""
        from src.retracer.core.tiling import compute_tile_size, iter_tiles

        tw, th = compute_tile_size(8, 6, 0.5)
        assert (tw, th) == (16, 12)
        assert list(iter_tiles(8, 6, tw, th)) == [(0, 0, 8, 6)]


class TestIterTiles:
    """Tests for iter_tiles."""

    def test_ten_by_ten_with_four_pixel_tiles(self):
        """Test the canonical 10x10 image with 4x4 tiles."""
        from src.retracer.core.tiling import iter_tiles

        tiles = list(iter_tiles(10, 10, 4, 4))
        assert tiles == [
            (0, 0, 4, 4),
            (4, 0, 4, 4),
            (8, 0, 2, 4),
            (0, 4, 4, 4),
            (4, 4, 4, 4),
            (8, 4, 2, 4),
            (0, 8, 4, 2),
            (4, 8, 4, 2),
            (8, 8, 2, 2),
        ]

    def test_tiles_are_named(self):
        """Test TileRect field access and helpers."""
        from src.retracer.core.tiling import TileRect, iter_tiles

        last = list(iter_tiles(10, 10, 4, 4))[-1]
        assert isinstance(last, TileRect)
        assert (last.start_x, last.start_y, last.width, last.height) == (8, 8, 2, 2)
        assert (last.end_x, last.end_y, last.area) == (10, 10, 4)
        assert last.contains(9, 9)
        assert not last.contains(10, 9)
        assert not last.contains(7, 9)

    def test_single_tile(self):
        """Test a tile as large as the image."""
        from src.retracer.core.tiling import iter_tiles

        assert list(iter_tiles(7, 3, 7, 3)) == [(0, 0, 7, 3)]

    def test_raster_order(self):
        """Test tiles run left to right, then top to bottom."""
        from src.retracer.core.tiling import iter_tiles

        starts = [(t.start_y, t.start_x) for t in iter_tiles(9, 5, 2, 2)]
        assert starts == sorted(starts)

    @pytest.mark.parametrize(
        "width,height,divider",
        [
            (10, 10, 2.5),
            (1, 1, 1),
            (1, 17, 4),
            (33, 1, 5),
            (64, 48, 8),
            (37, 23, 3),
            (100, 7, 7.5),
            (13, 29, 1000),
        ],
    )
    def test_exact_coverage(self, width, height, divider):
        """Test every pixel is covered by exactly one tile."""
        from src.retracer.core.tiling import compute_tile_size, iter_tiles

        coverage = np.zeros((height, width), dtype=np.int32)
        for t in iter_tiles(width, height, *compute_tile_size(width, height, divider)):
            assert t.width > 0 and t.height > 0
            coverage[t.start_y : t.end_y, t.start_x : t.end_x] += 1
        assert np.all(coverage == 1)

    @pytest.mark.parametrize("divider", [1e-320, 1e-308])
    def test_overflowing_tile_size_is_configuration_error(self, divider):
        """Test a divider too small for the image raises a configuration error."""
        from src.retracer.core.errors import ConfigurationError
        from src.retracer.core.tiling import compute_tile_size

        with pytest.raises(ConfigurationError, match="too small"):
            compute_tile_size(640, 480, divider)

    def test_tiny_finite_ratio_gives_single_tile(self):
        """Test a very small but usable divider yields one huge tile."""
        from src.retracer.core.tiling import compute_tile_size, iter_tiles

        tw, th = compute_tile_size(8, 6, 1e-300)
        assert list(iter_tiles(8, 6, tw, th)) == [(0, 0, 8, 6)]
