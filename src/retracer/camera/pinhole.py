"""Pinhole camera model for perspective projection ray generation.

This module implements a pinhole camera that generates primary rays for rendering.
The camera supports:
- Look-at positioning (lookfrom, lookat, vup)
- Vertical field of view specification
- An output resolution, from which the aspect ratio follows
- Jittered sub-pixel sampling for anti-aliasing

The camera builds an orthonormal basis (u, v, w) from the view parameters:
- w: points from lookat toward lookfrom (opposite view direction)
- u: points right in the image plane
- v: points up in the image plane

Example:
    >>> from src.retracer.camera.pinhole import PinholeCamera
    >>>
    >>> # Create camera looking at origin from z=3
    >>> camera = PinholeCamera(
    ...     lookfrom=(0.0, 0.0, 3.0),
    ...     lookat=(0.0, 0.0, 0.0),
    ...     vup=(0.0, 1.0, 0.0),
    ...     vfov=60.0,
    ...     resolution=(320, 180),
    ... )
    >>> ray = camera.get_ray(0.5, 0.5)  # Ray through image center
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import cached_property

import numpy as np

from src.retracer.core.ray import Ray
from src.retracer.core.vector import Vector3


@dataclass(frozen=True)
class _Viewport:
    origin: Vector3
    u: Vector3
    v: Vector3
    w: Vector3
    horizontal: Vector3
    vertical: Vector3
    lower_left: Vector3


@dataclass(frozen=True)
class PinholeCamera:
    """Configuration for a pinhole (perspective) camera.

    The camera is immutable because its viewport basis is derived once and
    cached. Use dataclasses.replace() to move it or change its resolution.

    Attributes:
        lookfrom: Camera position in world space (x, y, z).
        lookat: Point the camera is looking at in world space (x, y, z).
        vup: Up direction vector for camera orientation (typically (0, 1, 0)).
        vfov: Vertical field of view in degrees (typically 40-90).
        resolution: Output image size (width, height) in pixels.
    """

    lookfrom: tuple[float, float, float]
    lookat: tuple[float, float, float]
    vup: tuple[float, float, float]
    vfov: float
    resolution: tuple[int, int]

    @property
    def width(self) -> int:
        return self.resolution[0]

    @property
    def height(self) -> int:
        return self.resolution[1]

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height of the output image."""
        return self.width / self.height

    @cached_property
    def _viewport(self) -> _Viewport:
        # Viewport is a virtual image plane at unit distance from the camera
        theta = math.radians(self.vfov)
        h = math.tan(theta / 2.0)
        viewport_height = 2.0 * h
        viewport_width = self.aspect_ratio * viewport_height

        lookfrom = np.array(self.lookfrom, dtype=np.float64)
        lookat = np.array(self.lookat, dtype=np.float64)
        vup = np.array(self.vup, dtype=np.float64)

        w = lookfrom - lookat
        w = w / np.linalg.norm(w)
        u = np.cross(vup, w)
        u = u / np.linalg.norm(u)
        v = np.cross(w, u)

        horizontal = viewport_width * u
        vertical = viewport_height * v
        lower_left = lookfrom - w - horizontal / 2.0 - vertical / 2.0

        return _Viewport(
            origin=Vector3.of(lookfrom),
            u=Vector3.of(u),
            v=Vector3.of(v),
            w=Vector3.of(w),
            horizontal=Vector3.of(horizontal),
            vertical=Vector3.of(vertical),
            lower_left=Vector3.of(lower_left),
        )

    def get_ray(self, u: float, v: float) -> Ray:
        """Generate a ray through normalized image coordinates (u, v).

        Args:
            u: Horizontal coordinate in [0, 1] (left to right).
            v: Vertical coordinate in [0, 1] (bottom to top).

        Returns:
            A Ray from the camera origin toward the point (u, v) on the
            image plane, with a unit direction.
        """
        vp = self._viewport
        point_on_viewport = vp.lower_left + vp.horizontal * u + vp.vertical * v
        return Ray(vp.origin, (point_on_viewport - vp.origin).normalized())

    def get_pixel_ray(self, x: int, y: int, jitter_x: float = 0.5, jitter_y: float = 0.5) -> Ray:
        """Generate a ray through a point inside pixel (x, y).

        Image rows run top to bottom, so y = 0 is the top row.

        Args:
            x: Pixel column.
            y: Pixel row.
            jitter_x: Sub-pixel offset in [0, 1) across the pixel. 0.5 is the center.
            jitter_y: Sub-pixel offset in [0, 1) down the pixel. 0.5 is the center.
        """
        u = (x + jitter_x) / self.width
        v = 1.0 - (y + jitter_y) / self.height
        return self.get_ray(u, v)

    def get_camera_info(self) -> dict[str, tuple[float, float, float]]:
        """Get the derived camera vectors for debugging.

        Returns:
            Dictionary with origin, u, v, w, horizontal, vertical, lower_left.
        """
        vp = self._viewport
        return {
            "origin": vp.origin.to_tuple(),
            "u": vp.u.to_tuple(),
            "v": vp.v.to_tuple(),
            "w": vp.w.to_tuple(),
            "horizontal": vp.horizontal.to_tuple(),
            "vertical": vp.vertical.to_tuple(),
            "lower_left": vp.lower_left.to_tuple(),
        }
