"""Intersection records and nearest-hit resolution.

This module defines the Intersection record returned by every ray test, the
GraphicsObject protocol that intersectable shapes implement, and the scene
level queries built on top of them:

- nearest_hit: closest object a ray strikes (linear scan, earliest wins ties)
- hits_any: early-exit occlusion query for shadow rays

Example:
    >>> from src.retracer.core.ray import Ray
    >>> from src.retracer.core.vector import Vector3
    >>> from src.retracer.geometry.sphere import Sphere
    >>> ray = Ray(Vector3(0, 0, 0), Vector3(0, 0, -1))
    >>> rec = nearest_hit(ray, [Sphere(Vector3(0, 0, -3), 1.0)])
    >>> rec.hit, rec.distance
    (True, 2.0)
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from src.retracer.core.vector import Vector3

if TYPE_CHECKING:
    from src.retracer.core.ray import Ray


@dataclass(frozen=True)
class Intersection:
    """Outcome of testing a ray against one object or a whole scene.

    Attributes:
        hit: Whether the ray struck anything.
        distance: Euclidean distance from the ray origin to the hit point.
            Only valid if hit is True.
        point: The 3D point where the ray struck the surface.
            Only valid if hit is True.
        normal: Unit surface normal at the hit point, facing the ray origin.
            Only valid if hit is True.
        front_face: Whether the ray struck the outward-facing side.
            Only valid if hit is True.
        obj: The object that was hit. Only valid if hit is True.
        material: Opaque material reference carried by the hit object.
    """

    hit: bool = False
    distance: float = 0.0
    point: Vector3 | None = None
    normal: Vector3 | None = None
    front_face: bool = False
    obj: Any = None
    material: Any = None

    def __post_init__(self) -> None:
        if self.hit and not self.distance >= 0.0:
            raise ValueError(f"Hit distance must be non-negative, got {self.distance}")

    @classmethod
    def miss(cls) -> Intersection:
        """Create an Intersection indicating no hit."""
        return _MISS

    def __bool__(self) -> bool:
        return self.hit


_MISS = Intersection()


@runtime_checkable
class GraphicsObject(Protocol):
    """Anything that can report an Intersection for a ray."""

    def intersect(self, ray: Ray) -> Intersection: ...


def _checked(obj: GraphicsObject, ray: Ray) -> Intersection:
    rec = obj.intersect(ray)
    if not isinstance(rec, Intersection):
        raise TypeError(
            f"{type(obj).__name__}.intersect() returned {type(rec).__name__}, "
            "expected Intersection"
        )
    return rec


def nearest_hit(ray: Ray, objects: Iterable[GraphicsObject]) -> Intersection:
    """Find the closest object the ray strikes.

    Objects are tested in order. A candidate replaces the best result if
    nothing has been hit yet, or if it is a hit strictly closer than the
    current best, so the earlier object wins when distances tie.

    Args:
        ray: The query ray.
        objects: Ordered intersectable objects.

    Returns:
        The nearest Intersection, or a miss if nothing was struck.

    Raises:
        TypeError: If an object returns something other than an Intersection.
    """
    best = _MISS
    for obj in objects:
        candidate = _checked(obj, ray)
        if candidate.hit and (not best.hit or candidate.distance < best.distance):
            best = candidate
    return best


def hits_any(ray: Ray, objects: Iterable[GraphicsObject], max_distance: float = math.inf) -> bool:
    """Test if the ray strikes any object closer than max_distance.

    Returns on the first qualifying hit, which makes it suitable for shadow
    rays where only occlusion matters.
    """
    for obj in objects:
        rec = _checked(obj, ray)
        if rec.hit and rec.distance < max_distance:
            return True
    return False
