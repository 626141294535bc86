"""Ray-cast integrator for region sampling.

This module implements a concrete region sampler: for every pixel of a tile
it casts camera rays, resolves the nearest hit and shades it with a single
directional light.

Key features:
    - Centered rays for one sample per pixel, jittered rays otherwise
    - Deterministic jitter seeded from the settings seed and the tile origin
    - Optional shadow rays toward the light
    - Background color for rays that escape the scene

Material references are interpreted as RGB albedo triples; anything else is
shaded white.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.retracer.core.integrator import RayCastIntegrator
    >>> from src.retracer.core.renderer import Renderer
    >>> from src.retracer.core.settings import RenderSettings
    >>> from src.retracer.scene.demo import create_demo_scene
    >>>
    >>> renderer = Renderer(RayCastIntegrator(light_direction=(-1.0, -1.0, -0.5)))
    >>> result = renderer.render(create_demo_scene(64, 48), RenderSettings(samples_per_pixel=4))
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np

from src.retracer.core.color import PixelColor
from src.retracer.core.intersection import Intersection
from src.retracer.core.ray import Ray
from src.retracer.core.renderer import Region
from src.retracer.core.settings import RenderSettings
from src.retracer.core.vector import Vector3

# Offset along the normal for shadow ray origins to avoid self-intersection
RAY_EPSILON = 1e-4

WHITE = (1.0, 1.0, 1.0)


def _albedo(material: Any) -> tuple[float, float, float]:
    if isinstance(material, Sequence) and not isinstance(material, str) and len(material) == 3:
        return (float(material[0]), float(material[1]), float(material[2]))
    return WHITE


@dataclass
class RayCastIntegrator:
    """Single-bounce ray caster with one directional light.

    Attributes:
        background: Color returned for rays that hit nothing.
        light_direction: Direction the light travels (toward the scene).
        ambient: Fraction of the albedo visible without direct light, in [0, 1].
        shadows: Whether to cast shadow rays toward the light.
    """

    background: tuple[float, float, float] = (0.0, 0.0, 0.0)
    light_direction: tuple[float, float, float] = (-1.0, -2.0, -1.0)
    ambient: float = 0.1
    shadows: bool = True

    def __post_init__(self) -> None:
        self._to_light = -Vector3.of(self.light_direction).normalized()

    def shade(self, rec: Intersection, scene: Any) -> PixelColor:
        """Compute the color of a surface hit."""
        r, g, b = _albedo(rec.material)
        diffuse = max(0.0, rec.normal.dot(self._to_light))
        if diffuse > 0.0 and self.shadows:
            shadow_ray = Ray(rec.point + rec.normal * RAY_EPSILON, self._to_light)
            if shadow_ray.hits_any(scene):
                diffuse = 0.0
        k = self.ambient + (1.0 - self.ambient) * diffuse
        return PixelColor(r * k, g * k, b * k)

    def trace(self, ray: Ray, scene: Any) -> PixelColor:
        """Color seen along a ray."""
        rec = ray.nearest_hit(scene)
        if not rec.hit:
            return PixelColor.of(self.background)
        return self.shade(rec, scene)

    def __call__(self, region: Region, settings: RenderSettings) -> None:
        """Sample every pixel of a region."""
        scene = region.scene
        camera = scene.camera
        spp = settings.samples_per_pixel
        tile = region.tile
        rng = np.random.default_rng([settings.seed, tile.start_x, tile.start_y])

        colors = np.zeros((tile.height, tile.width, 3), dtype=np.float64)
        for x, y in region.pixels():
            total = PixelColor()
            for _ in range(spp):
                if spp == 1:
                    ray = camera.get_pixel_ray(x, y)
                else:
                    jx, jy = rng.random(2)
                    ray = camera.get_pixel_ray(x, y, jx, jy)
                total = total + self.trace(ray, scene)
            colors[y - tile.start_y, x - tile.start_x] = total.to_tuple()

        region.add_block(colors, np.full((tile.height, tile.width), spp, dtype=np.uint32))
