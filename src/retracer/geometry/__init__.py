"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive with robust ray-sphere intersection
    quad: Parallelogram primitive with ray-quad intersection

Every shape implements the GraphicsObject protocol:
    rec = shape.intersect(ray)  # -> Intersection

Shapes normalize the ray direction themselves, report Euclidean hit
distances and ignore hits closer than T_MIN.
"""

from .quad import Quad
from .sphere import T_MIN, Sphere

__all__ = [
    "Sphere",
    "Quad",
    "T_MIN",
]
