"""Scene container.

A Scene is an ordered list of intersectable objects plus the camera that
views them. Object order is stable and only matters for hits at exactly
equal distances, where the earlier object wins.

Example:
    >>> from src.retracer.camera.pinhole import PinholeCamera
    >>> from src.retracer.geometry.sphere import Sphere
    >>> from src.retracer.scene.scene import Scene
    >>> camera = PinholeCamera((0, 0, 0), (0, 0, -1), (0, 1, 0), 90.0, (64, 64))
    >>> scene = Scene(camera)
    >>> scene.add(Sphere((0, 0, -2), 0.5))
    0
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from src.retracer.core.intersection import GraphicsObject, Intersection, nearest_hit
from src.retracer.core.ray import Ray


@dataclass
class Scene:
    """The world being rendered.

    Attributes:
        camera: Camera providing the output resolution and the projection.
        objects: Ordered intersectable objects.
    """

    camera: Any
    objects: list[GraphicsObject] = field(default_factory=list)

    def add(self, obj: GraphicsObject) -> int:
        """Append an object to the scene.

        Returns:
            The index of the added object.

        Raises:
            TypeError: If obj has no intersect method.
        """
        if not isinstance(obj, GraphicsObject):
            raise TypeError(f"{type(obj).__name__} does not implement intersect(ray)")
        self.objects.append(obj)
        return len(self.objects) - 1

    def clear(self) -> None:
        """Remove all objects from the scene."""
        self.objects.clear()

    def nearest_hit(self, ray: Ray) -> Intersection:
        """Resolve the closest object the ray strikes."""
        return nearest_hit(ray, self.objects)

    def __len__(self) -> int:
        return len(self.objects)
