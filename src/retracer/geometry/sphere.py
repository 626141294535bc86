"""Sphere primitive with robust ray-sphere intersection.

This module provides a Sphere object and its intersection test, using the
robust quadratic formula from Ray Tracing Gems to avoid floating-point
artifacts.

The robust quadratic formula avoids catastrophic cancellation when b^2 is
nearly equal to 4ac by using a reformulated calculation that maintains
numerical stability.

Example:
    >>> from src.retracer.core.ray import Ray
    >>> from src.retracer.core.vector import Vector3
    >>> from src.retracer.geometry.sphere import Sphere
    >>> sphere = Sphere(center=Vector3(0, 0, -1), radius=0.5)
    >>> rec = sphere.intersect(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)))
    >>> rec.distance
    0.5
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from src.retracer.core.intersection import Intersection
from src.retracer.core.ray import Ray
from src.retracer.core.vector import Vector3

# Hits closer than this are ignored to avoid self-intersection
T_MIN = 1e-4


def _solve_quadratic_robust(h: float, a: float, c: float, sqrt_d: float) -> tuple[float, float]:
    """Solve a*t^2 + 2*h*t + c = 0 using a numerically stable method.

    Returns:
        Tuple of (t0, t1) where t0 <= t1.
    """
    # q = -(h + sign(h) * sqrt(discriminant))
    sign_h = -1.0 if h < 0.0 else 1.0
    q = -(h + sign_h * sqrt_d)

    if abs(q) < 1e-10:
        # Tangent ray, fall back to the standard formula
        t0 = (-h - sqrt_d) / a
        t1 = (-h + sqrt_d) / a
    else:
        t0 = q / a
        t1 = c / q

    if t0 > t1:
        t0, t1 = t1, t0
    return t0, t1


@dataclass(frozen=True)
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere (positive).
        material: Opaque material reference reported with each hit.
    """

    center: Vector3
    radius: float
    material: Any = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", Vector3.of(self.center))
        if not self.radius > 0.0:
            raise ValueError(f"Sphere radius must be positive, got {self.radius}")

    def intersect(self, ray: Ray, t_min: float = T_MIN, t_max: float = math.inf) -> Intersection:
        """Test for ray-sphere intersection.

        The ray-sphere intersection is found by solving:
            |origin + t * d - center|^2 = radius^2

        with d the unit ray direction, which expands to
            a*t^2 + 2*h*t + c = 0

        where:
            a = dot(d, d)
            h = dot(d, oc)  (half of traditional b)
            c = dot(oc, oc) - radius^2
            oc = origin - center

        Args:
            ray: The ray to test.
            t_min: Minimum distance to consider a valid hit.
            t_max: Maximum distance to consider a valid hit.

        Returns:
            The nearest Intersection in (t_min, t_max), or a miss.
        """
        d = ray.unit_direction
        a = d.dot(d)
        if a == 0.0:
            return Intersection.miss()

        oc = ray.origin - self.center
        h = d.dot(oc)
        c = oc.dot(oc) - self.radius * self.radius

        discriminant = h * h - a * c
        if discriminant < 0.0:
            return Intersection.miss()

        t0, t1 = _solve_quadratic_robust(h, a, c, math.sqrt(discriminant))

        # Find the first valid intersection in (t_min, t_max)
        t = t0
        if not (t_min < t < t_max):
            t = t1
            if not (t_min < t < t_max):
                return Intersection.miss()

        point = ray.origin + d * t
        outward_normal = (point - self.center) / self.radius
        # Ray inside the sphere hits the back face
        front_face = d.dot(outward_normal) <= 0.0
        return Intersection(
            hit=True,
            distance=t,
            point=point,
            normal=outward_normal if front_face else -outward_normal,
            front_face=front_face,
            obj=self,
            material=self.material,
        )
