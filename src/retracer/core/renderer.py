"""Tiled rendering orchestrator.

The Renderer drives a full render from a scene and settings to a finished
image:

1. validate the camera resolution and settings
2. allocate and clear the accumulation buffers
3. notify on_start, then visit tiles left-to-right, top-to-bottom, handing each one to the
   region sampler
4. finalize the accumulated sums into an 8-bit RGBA image

The sampling algorithm itself is injected. A sampler is any callable
``sampler(region, settings)`` that adds one or more samples to every pixel
of ``region`` through ``region.add_sample`` or ``region.add_block``.
Alternatively, subclass Renderer and override ``sample_region``.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.retracer.core.integrator import RayCastIntegrator
    >>> from src.retracer.core.renderer import Renderer
    >>> from src.retracer.core.settings import RenderSettings
    >>> from src.retracer.scene.demo import create_demo_scene
    >>>
    >>> renderer = Renderer(RayCastIntegrator())
    >>> result = renderer.render(create_demo_scene(64, 48), RenderSettings(tile_divider=4))
    >>> result.image.shape
    (48, 64, 4)
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

import numpy as np
import numpy.typing as npt

from src.retracer.core.buffers import MAX_SAMPLE_COUNT, AccumulationBuffer
from src.retracer.core.color import PixelColor
from src.retracer.core.errors import ConfigurationError, RegionBoundsError
from src.retracer.core.settings import RenderSettings
from src.retracer.core.tiling import TileRect, iter_tiles

logger = logging.getLogger(__name__)

# Callback receives the number of tiles about to be sampled
StartCallback = Callable[[int], None]
# Callback receives the rectangle of the tile that just finished
ProgressCallback = Callable[[TileRect], None]


def _check_count(count: Any, existing: int) -> int:
    if isinstance(count, bool) or not isinstance(count, (int, np.integer)):
        raise RegionBoundsError(f"Sample count must be an integer, got {count!r}")
    if count < 1:
        raise RegionBoundsError(f"Sample count must be at least 1, got {count}")
    if existing + int(count) > MAX_SAMPLE_COUNT:
        raise RegionBoundsError(
            f"Sample count {count} would exceed {MAX_SAMPLE_COUNT} samples for one pixel"
        )
    return int(count)


class Region:
    """A sampler's view of one tile of the accumulation buffer.

    All writes are bounds-checked against the tile. The underlying buffers
    are not exposed, so a sampler can neither write outside its tile nor
    resize the buffers.

    Attributes:
        scene: The scene being rendered.
        tile: The tile rectangle this region covers.
    """

    def __init__(self, buffer: AccumulationBuffer, scene: Any, tile: TileRect) -> None:
        self._buffer = buffer
        self.scene = scene
        self.tile = tile

    @property
    def image_width(self) -> int:
        return self._buffer.width

    @property
    def image_height(self) -> int:
        return self._buffer.height

    def pixels(self) -> Iterator[tuple[int, int]]:
        """Yield the (x, y) coordinates of every pixel in the tile, row by row."""
        t = self.tile
        for y in range(t.start_y, t.end_y):
            for x in range(t.start_x, t.end_x):
                yield x, y

    def index(self, x: int, y: int) -> int:
        """Buffer index of pixel (x, y), which must lie inside the tile."""
        if not self.tile.contains(x, y):
            raise RegionBoundsError(f"Pixel ({x}, {y}) is outside tile {tuple(self.tile)}")
        return self._buffer.index(x, y)

    def add_sample(self, x: int, y: int, color: Any, count: int = 1) -> None:
        """Add summed color contributions to a pixel.

        Args:
            x: Pixel x coordinate inside the tile.
            y: Pixel y coordinate inside the tile.
            color: Sum of the contributions, as a PixelColor or RGB sequence.
            count: Number of contributions summed into color.

        Raises:
            RegionBoundsError: If (x, y) is outside the tile, count is not an
                integer of at least 1, or the pixel's count would overflow.
        """
        index = self.index(x, y)
        count = _check_count(count, self._buffer.samples_at(x, y))
        self._buffer.add(index, PixelColor.of(color), count)

    def add_block(
        self,
        colors: npt.ArrayLike,
        counts: npt.ArrayLike | None = None,
    ) -> None:
        """Add color sums for the whole tile at once.

        Args:
            colors: Array of shape (tile.height, tile.width, 3) with summed colors.
            counts: Array of shape (tile.height, tile.width) with the number of
                contributions per pixel. Defaults to one per pixel.

        Raises:
            RegionBoundsError: If the arrays do not match the tile shape, the
                counts are not integers of at least 1, or a pixel's count
                would overflow.
        """
        t = self.tile
        colors = np.asarray(colors, dtype=np.float64)
        if colors.shape != (t.height, t.width, 3):
            raise RegionBoundsError(
                f"Color block shape {colors.shape} does not match tile "
                f"({t.height}, {t.width}, 3)"
            )
        if counts is None:
            counts = np.ones((t.height, t.width), dtype=np.uint32)
        counts = np.asarray(counts)
        if counts.shape != (t.height, t.width):
            raise RegionBoundsError(
                f"Count block shape {counts.shape} does not match tile ({t.height}, {t.width})"
            )
        if counts.dtype == np.bool_ or not np.issubdtype(counts.dtype, np.integer):
            raise RegionBoundsError(f"Block counts must be integers, got {counts.dtype}")
        if counts.min() < 1:
            raise RegionBoundsError("Every pixel count in a block must be at least 1")

        existing = self._buffer.samples_in(t.start_x, t.start_y, t.width, t.height)
        headroom = MAX_SAMPLE_COUNT - existing.astype(np.int64)
        if np.any(counts > headroom):
            raise RegionBoundsError(
                f"Block counts would exceed {MAX_SAMPLE_COUNT} samples for one pixel"
            )
        self._buffer.accumulate_block(t.start_x, t.start_y, colors, counts)

    def __repr__(self) -> str:
        return f"Region(tile={tuple(self.tile)})"


@dataclass(frozen=True)
class RenderResult:
    """A finished render.

    Attributes:
        image: RGBA pixels, shape (height, width, 4), dtype uint8, rows top to bottom.
        elapsed: Wall-clock seconds spent sampling tiles, excluding callbacks.
        tile_count: Number of tiles sampled.
        total_samples: Sum of all pixels' sample counts.
    """

    image: npt.NDArray[np.uint8]
    elapsed: float
    tile_count: int
    total_samples: int

    @property
    def width(self) -> int:
        return int(self.image.shape[1])

    @property
    def height(self) -> int:
        return int(self.image.shape[0])


def _validate_resolution(scene: Any) -> tuple[int, int]:
    camera = getattr(scene, "camera", None)
    if camera is None:
        raise ConfigurationError("Scene has no camera")
    try:
        width, height = camera.resolution
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid camera resolution: {e}") from e
    for value in (width, height):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value <= 0:
            raise ConfigurationError(
                f"Camera resolution must be positive integers, got {camera.resolution!r}"
            )
    return int(width), int(height)


class Renderer:
    """Tiled renderer with a pluggable region sampler.

    Buffers are allocated fresh for each call to render() and discarded
    afterwards, so a Renderer can be reused for any number of renders.
    Tiles are sampled one at a time; a sampler only ever writes inside the
    tile it was given, which keeps concurrent tile sampling possible
    without locks as long as that stays true.
    """

    def __init__(self, sampler: Callable[[Region, RenderSettings], None] | None = None) -> None:
        """Initialize the renderer.

        Args:
            sampler: Callable invoked as sampler(region, settings) for each
                tile. May be omitted by subclasses that override sample_region.
        """
        self._sampler = sampler

    def sample_region(self, region: Region, settings: RenderSettings) -> None:
        """Sample every pixel of one tile.

        The default implementation delegates to the injected sampler.
        """
        if self._sampler is None:
            raise NotImplementedError(
                "Renderer needs a sampler or a subclass overriding sample_region()"
            )
        self._sampler(region, settings)

    def render(
        self,
        scene: Any,
        settings: RenderSettings | None = None,
        *,
        on_start: StartCallback | None = None,
        on_progress: ProgressCallback | None = None,
        on_complete: Callable[[RenderResult], None] | None = None,
    ) -> RenderResult:
        """Render the scene to an image.

        Args:
            scene: Scene with a camera (providing resolution) and objects.
            settings: Render settings. Defaults to RenderSettings().
            on_start: Called once with the tile count before the first tile
                is sampled.
            on_progress: Called with each tile's rectangle after it is sampled.
            on_complete: Called once with the result after a successful render.

        Returns:
            The finished RenderResult. Its elapsed time covers sampling only,
            not the time spent in callbacks.

        Raises:
            ConfigurationError: If the resolution or settings are invalid.
                Raised before any buffer is allocated or callback fired.
            UnsampledPixelError: If a pixel ends up with no samples.
                on_complete is not called.
        """
        if settings is None:
            settings = RenderSettings()
        width, height = _validate_resolution(scene)
        settings.validate()
        tile_width, tile_height = settings.tile_size(width, height)

        buffer = AccumulationBuffer(width, height)
        tiles = list(iter_tiles(width, height, tile_width, tile_height))
        logger.info(
            f"Rendering {width}x{height} in {len(tiles)} tiles of {tile_width}x{tile_height} "
            f"({len(getattr(scene, 'objects', ()))} objects)"
        )
        if on_start is not None:
            on_start(len(tiles))

        elapsed = 0.0
        for tile in tiles:
            start = time.perf_counter()
            self.sample_region(Region(buffer, scene, tile), settings)
            elapsed += time.perf_counter() - start
            logger.debug(f"Sampled tile {tuple(tile)}")
            if on_progress is not None:
                on_progress(tile)

        image = buffer.resolve(gamma=settings.gamma)
        result = RenderResult(
            image=image,
            elapsed=elapsed,
            tile_count=len(tiles),
            total_samples=buffer.total_samples(),
        )
        logger.info(f"Rendered {len(tiles)} tiles in {elapsed:.3f}s")

        if on_complete is not None:
            on_complete(result)
        return result
