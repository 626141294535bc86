"""Tiled offline renderer built on Taichi kernels.

This package renders a scene (camera + ordered intersectable objects) by
splitting the image into tiles, handing each tile to a pluggable region
sampler, accumulating color sums and sample counts per pixel, and resolving
them into an 8-bit RGBA image.

Subpackages:
    core: Vectors, colors, rays, nearest-hit resolution, settings, tiling,
        accumulation buffers, the renderer and the ray-cast integrator
    geometry: Intersectable shape primitives
    camera: Camera models with ray generation
    scene: Scene container and demo scene
    preview: Image export utilities
"""

__version__ = "0.1.0"
