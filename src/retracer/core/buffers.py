"""Per-pixel accumulation buffers.

The accumulation buffer is an arena of plain numeric cells indexed by pixel:

- color sums: float64 array of shape (width * height, 3)
- sample counts: uint32 array of shape (width * height,)

Sums are kept in float64 so that the mean of many identical samples still
rounds to the same byte as a single sample.

Pixel (x, y) lives at index ``y * width + x`` in both arrays. The same
mapping is used by tiling, by region samplers, and by finalization.

Clearing and finalization are Taichi kernels taking the NumPy arrays as
``ti.types.ndarray`` arguments. Taichi parallelizes the outermost loop of a
kernel, and every iteration touches only its own pixel's cells, so neither
phase needs locks.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> buf = AccumulationBuffer(4, 2)
    >>> buf.add(buf.index(1, 1), PixelColor(0.5, 0.5, 0.5))
    >>> buf.samples_at(1, 1)
    1
"""

import numpy as np
import numpy.typing as npt
import taichi as ti

from src.retracer.core.color import ROUNDING_EPSILON, PixelColor
from src.retracer.core.errors import UnsampledPixelError

# Largest per-pixel sample count the uint32 count buffer can hold
MAX_SAMPLE_COUNT = int(np.iinfo(np.uint32).max)


@ti.kernel
def _clear_buffers(
    pixels: ti.types.ndarray(dtype=ti.f64, ndim=2),
    samples: ti.types.ndarray(dtype=ti.u32, ndim=1),
):
    """Zero the color sums and sample counts in parallel."""
    for i in range(samples.shape[0]):
        for c in ti.static(range(3)):
            pixels[i, c] = 0.0
        samples[i] = 0


@ti.kernel
def _accumulate_block(
    pixels: ti.types.ndarray(dtype=ti.f64, ndim=2),
    samples: ti.types.ndarray(dtype=ti.u32, ndim=1),
    colors: ti.types.ndarray(dtype=ti.f64, ndim=3),
    counts: ti.types.ndarray(dtype=ti.u32, ndim=2),
    start_x: ti.i32,
    start_y: ti.i32,
    image_width: ti.i32,
):
    """Add a (rows, cols, 3) block of color sums and counts at (start_x, start_y)."""
    for j, i in ti.ndrange(colors.shape[0], colors.shape[1]):
        idx = (start_y + j) * image_width + (start_x + i)
        for c in ti.static(range(3)):
            pixels[idx, c] += colors[j, i, c]
        samples[idx] += counts[j, i]


@ti.kernel
def _resolve(
    pixels: ti.types.ndarray(dtype=ti.f64, ndim=2),
    samples: ti.types.ndarray(dtype=ti.u32, ndim=1),
    image: ti.types.ndarray(dtype=ti.u8, ndim=2),
    inv_gamma: ti.f64,
    unsampled: ti.types.ndarray(dtype=ti.i32, ndim=1),
):
    """Convert summed colors to 8-bit RGBA means.

    Pixels with a zero sample count are skipped and counted in unsampled[0]
    instead of being divided.
    """
    for i in range(samples.shape[0]):
        n = samples[i]
        if n == 0:
            ti.atomic_add(unsampled[0], 1)
        else:
            count = ti.cast(n, ti.f64)
            for c in ti.static(range(3)):
                v = ti.min(ti.max(pixels[i, c] / count, 0.0), 1.0)
                if inv_gamma != 1.0:
                    v = ti.pow(v, inv_gamma)
                image[i, c] = ti.cast(ti.floor(v * 255.0 + 0.5 + ROUNDING_EPSILON), ti.u8)
            image[i, 3] = ti.cast(255, ti.u8)


class AccumulationBuffer:
    """Color-sum and sample-count buffers for one render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
    """

    def __init__(self, width: int, height: int) -> None:
        """Allocate and clear buffers for a width x height image."""
        self.width = width
        self.height = height
        size = width * height
        self._pixels = np.empty((size, 3), dtype=np.float64)
        self._samples = np.empty(size, dtype=np.uint32)
        self.clear()

    @property
    def size(self) -> int:
        """Number of pixels."""
        return self.width * self.height

    def clear(self) -> None:
        """Zero every pixel's color sum and sample count."""
        _clear_buffers(self._pixels, self._samples)

    def index(self, x: int, y: int) -> int:
        """Map pixel coordinates to a buffer index."""
        return y * self.width + x

    def coords(self, index: int) -> tuple[int, int]:
        """Map a buffer index back to pixel coordinates (x, y)."""
        y, x = divmod(index, self.width)
        return x, y

    def add(self, index: int, color: PixelColor, count: int = 1) -> None:
        """Add a summed color contribution and its sample count at an index."""
        self._pixels[index] += color.to_tuple()
        self._samples[index] += count

    def accumulate_block(
        self,
        start_x: int,
        start_y: int,
        colors: npt.NDArray[np.float64],
        counts: npt.NDArray[np.uint32],
    ) -> None:
        """Add a block of color sums and counts with its top-left at (start_x, start_y).

        Args:
            start_x: X coordinate of the block's first column.
            start_y: Y coordinate of the block's first row.
            colors: Array of shape (rows, cols, 3) with summed colors.
            counts: Array of shape (rows, cols) with sample counts.
        """
        _accumulate_block(
            self._pixels,
            self._samples,
            np.ascontiguousarray(colors, dtype=np.float64),
            np.ascontiguousarray(counts, dtype=np.uint32),
            start_x,
            start_y,
            self.width,
        )

    def color_at(self, x: int, y: int) -> PixelColor:
        """Get the summed (not averaged) color of a pixel."""
        r, g, b = self._pixels[self.index(x, y)]
        return PixelColor(float(r), float(g), float(b))

    def samples_at(self, x: int, y: int) -> int:
        """Get the sample count of a pixel."""
        return int(self._samples[self.index(x, y)])

    def samples_in(self, start_x: int, start_y: int, width: int, height: int) -> npt.NDArray[np.uint32]:
        """Copy of the sample counts of a rectangle as a (height, width) array."""
        counts = self._samples.reshape(self.height, self.width)
        return counts[start_y : start_y + height, start_x : start_x + width].copy()

    def total_samples(self) -> int:
        """Sum of all pixels' sample counts."""
        return int(self._samples.sum(dtype=np.uint64))

    def sample_counts(self) -> npt.NDArray[np.uint32]:
        """Copy of the sample counts as a (height, width) array."""
        return self._samples.reshape(self.height, self.width).copy()

    def resolve(self, gamma: float = 1.0) -> npt.NDArray[np.uint8]:
        """Finalize the buffers into an 8-bit RGBA image.

        Each pixel's color sum is divided by its sample count, clamped to
        [0, 1], gamma corrected and rounded to 8 bits. Alpha is 255.

        Args:
            gamma: Gamma correction value. Default 1.0 (linear).

        Returns:
            Array of shape (height, width, 4) with dtype uint8, rows top to bottom.

        Raises:
            UnsampledPixelError: If any pixel has a zero sample count.
        """
        image = np.zeros((self.size, 4), dtype=np.uint8)
        unsampled = np.zeros(1, dtype=np.int32)
        _resolve(self._pixels, self._samples, image, 1.0 / gamma, unsampled)

        if unsampled[0] > 0:
            first = int(np.flatnonzero(self._samples == 0)[0])
            x, y = self.coords(first)
            raise UnsampledPixelError(int(unsampled[0]), x, y)

        return image.reshape(self.height, self.width, 4)

    def __repr__(self) -> str:
        return f"AccumulationBuffer(width={self.width}, height={self.height})"
