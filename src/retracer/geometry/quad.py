"""Quad primitive with ray-quad intersection.

A quad is defined by:
- corner: A corner point of the quad
- u: Edge vector from corner to adjacent corner
- v: Edge vector from corner to other adjacent corner

The quad spans the parallelogram from corner to corner+u+v. The normal is
normalize(cross(u, v)), pointing in the direction given by the right-hand
rule.

Ray-quad intersection uses the parametric plane test:
1. Find where ray intersects the plane containing the quad
2. Check if the intersection point lies within the quad bounds

Example:
    >>> from src.retracer.core.vector import Vector3
    >>> from src.retracer.geometry.quad import Quad
    >>> # Floor quad at y=0, spanning x=[0,1] and z=[0,1]
    >>> floor = Quad(Vector3(0, 0, 0), Vector3(1, 0, 0), Vector3(0, 0, 1))
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from src.retracer.core.intersection import Intersection
from src.retracer.core.ray import Ray
from src.retracer.core.vector import Vector3
from src.retracer.geometry.sphere import T_MIN


@dataclass(frozen=True)
class Quad:
    """A quad (parallelogram) defined by a corner point and two edge vectors.

    The quad has vertices at corner, corner+u, corner+v, corner+u+v.

    Attributes:
        corner: The corner point of the quad.
        u: Edge vector from corner to adjacent corner.
        v: Edge vector from corner to other adjacent corner.
        material: Opaque material reference reported with each hit.
    """

    corner: Vector3
    u: Vector3
    v: Vector3
    material: Any = None
    normal: Vector3 = field(init=False, repr=False, compare=False)
    _d: float = field(init=False, repr=False, compare=False)
    _w_u: Vector3 = field(init=False, repr=False, compare=False)
    _w_v: Vector3 = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        corner, u, v = Vector3.of(self.corner), Vector3.of(self.u), Vector3.of(self.v)
        n = u.cross(v)
        n_dot_n = n.dot(n)
        if n_dot_n <= 1e-10:
            raise ValueError("Quad edges must not be parallel or zero-length")

        normal = n.normalized()
        # With w_u = v x n / |n|^2 and w_v = n x u / |n|^2 a plane point P
        # has quad coordinates alpha = w_u . (P - corner), beta = w_v . (P - corner)
        object.__setattr__(self, "corner", corner)
        object.__setattr__(self, "u", u)
        object.__setattr__(self, "v", v)
        object.__setattr__(self, "normal", normal)
        object.__setattr__(self, "_d", normal.dot(corner))
        object.__setattr__(self, "_w_u", v.cross(n) / n_dot_n)
        object.__setattr__(self, "_w_v", n.cross(u) / n_dot_n)

    @property
    def area(self) -> float:
        """The area of the quad, |u x v|."""
        return self.u.cross(self.v).length()

    def intersect(self, ray: Ray, t_min: float = T_MIN, t_max: float = math.inf) -> Intersection:
        """Test for ray-quad intersection.

        Args:
            ray: The ray to test.
            t_min: Minimum distance to consider a valid hit.
            t_max: Maximum distance to consider a valid hit.

        Returns:
            The Intersection if the ray crosses the quad in (t_min, t_max),
            otherwise a miss.
        """
        d = ray.unit_direction
        denom = self.normal.dot(d)
        # Parallel to the plane, or a zero direction
        if abs(denom) <= 1e-8:
            return Intersection.miss()

        t = (self._d - self.normal.dot(ray.origin)) / denom
        if not (t_min < t < t_max):
            return Intersection.miss()

        point = ray.origin + d * t
        p_minus_q = point - self.corner
        alpha = self._w_u.dot(p_minus_q)
        beta = self._w_v.dot(p_minus_q)
        if not (0.0 <= alpha <= 1.0 and 0.0 <= beta <= 1.0):
            return Intersection.miss()

        # Ray and normal pointing the same way means a back face hit
        front_face = denom < 0.0
        return Intersection(
            hit=True,
            distance=t,
            point=point,
            normal=self.normal if front_face else -self.normal,
            front_face=front_face,
            obj=self,
            material=self.material,
        )
