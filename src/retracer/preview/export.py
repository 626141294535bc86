"""Image export utilities for finished renders.

Supported formats:
    - PNG (8-bit RGBA via Pillow)

Example:
    >>> from src.retracer.preview.export import save_png
    >>> result = renderer.render(scene, settings)
    >>> save_png(result, "output.png")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

if TYPE_CHECKING:
    from src.retracer.core.renderer import RenderResult


def _pixels(image: RenderResult | npt.NDArray[np.uint8]) -> npt.NDArray[np.uint8]:
    pixels = getattr(image, "image", image)
    pixels = np.asarray(pixels)
    if pixels.dtype != np.uint8 or pixels.ndim != 3 or pixels.shape[2] != 4:
        raise ValueError(
            f"Expected a uint8 RGBA image of shape (H, W, 4), got {pixels.dtype} {pixels.shape}"
        )
    return pixels


def to_pil_image(image: RenderResult | npt.NDArray[np.uint8]) -> PILImage.Image:
    """Convert a render result or RGBA array to a Pillow image.

    Args:
        image: A RenderResult or a uint8 array of shape (H, W, 4).

    Returns:
        An RGBA Pillow image.

    Raises:
        ValueError: If the array is not 8-bit RGBA.
    """
    return PILImage.fromarray(np.ascontiguousarray(_pixels(image)))


def save_png(image: RenderResult | npt.NDArray[np.uint8], filepath: str) -> None:
    """Save a render result or RGBA array as a PNG file.

    Args:
        image: A RenderResult or a uint8 array of shape (H, W, 4).
        filepath: Output file path (should end in .png).
    """
    to_pil_image(image).save(filepath, format="PNG")
