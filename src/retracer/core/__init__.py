"""Core rendering module.

Components:
    vector: Vector3 value type
    color: PixelColor accumulator and 8-bit conversion
    intersection: Intersection records and nearest-hit resolution
    ray: Ray data structure
    errors: Renderer exception hierarchy
    settings: RenderSettings configuration
    tiling: Tile rectangles and raster-order tile iteration
    buffers: Per-pixel accumulation buffers and Taichi kernels
    renderer: The tiled rendering orchestrator
    integrator: Ray-cast region sampler

Clearing and finalizing the accumulation buffers run as Taichi kernels,
parallel over pixel indices.
"""

from .color import BLACK, PixelColor
from .errors import ConfigurationError, RegionBoundsError, RenderError, UnsampledPixelError
from .intersection import GraphicsObject, Intersection, hits_any, nearest_hit
from .ray import Ray
from .settings import RenderSettings
from .tiling import TileRect, compute_tile_size, iter_tiles
from .vector import ZERO, Vector3

# Note: buffers, renderer and integrator are NOT imported here so that the
# value types can be used without pulling in Taichi.
# Import them directly, e.g. from src.retracer.core.renderer import Renderer

__all__ = [
    "Vector3",
    "ZERO",
    "PixelColor",
    "BLACK",
    "Ray",
    "Intersection",
    "GraphicsObject",
    "nearest_hit",
    "hits_any",
    "RenderSettings",
    "TileRect",
    "compute_tile_size",
    "iter_tiles",
    "RenderError",
    "ConfigurationError",
    "UnsampledPixelError",
    "RegionBoundsError",
]
