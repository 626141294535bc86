"""Ray data structure.

A Ray is a half-line query with an origin and a direction. The direction
does not have to be normalized; intersection routines work with
unit_direction so that reported hit distances are Euclidean.

Example:
    >>> from src.retracer.core.ray import Ray
    >>> from src.retracer.core.vector import Vector3
    >>> ray = Ray(Vector3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, -2.0))
    >>> ray.at(5.0)  # Point 5 units along the ray
    Vector3(x=0.0, y=0.0, z=-5.0)
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from src.retracer.core.intersection import GraphicsObject, Intersection, hits_any, nearest_hit
from src.retracer.core.vector import Vector3


def _objects_of(target: Any) -> Iterable[GraphicsObject]:
    # Accept a Scene (anything with .objects) or a plain sequence of objects
    return getattr(target, "objects", target)


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. May have any length,
            including zero; zero-direction rays miss every shipped shape.
    """

    origin: Vector3
    direction: Vector3
    unit_direction: Vector3 = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "origin", Vector3.of(self.origin))
        object.__setattr__(self, "direction", Vector3.of(self.direction))
        object.__setattr__(self, "unit_direction", self.direction.normalized())

    def at(self, distance: float) -> Vector3:
        """Compute the point at the given distance along the unit direction."""
        return self.origin + self.unit_direction * distance

    def nearest_hit(self, scene: Any) -> Intersection:
        """Resolve the closest hit against a Scene or a sequence of objects."""
        return nearest_hit(self, _objects_of(scene))

    def hits_any(self, scene: Any, max_distance: float = math.inf) -> bool:
        """Check if anything in the scene occludes the ray before max_distance."""
        return hits_any(self, _objects_of(scene), max_distance)
