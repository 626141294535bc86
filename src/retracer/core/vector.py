"""Three-component vector type for Python-side geometry.

Vector3 is an immutable value type used for points and directions by rays,
cameras and the intersectable objects. Arithmetic is closed over the type:
every operation returns a new Vector3.

Example:
    >>> from src.retracer.core.vector import Vector3
    >>> a = Vector3(1.0, 0.0, 0.0)
    >>> b = Vector3(0.0, 1.0, 0.0)
    >>> a.cross(b)
    Vector3(x=0.0, y=0.0, z=1.0)
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class Vector3:
    """A 3D point or direction.

    Attributes:
        x: X component.
        y: Y component.
        z: Z component.
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def of(cls, value: Vector3 | Iterable[float]) -> Vector3:
        """Build a Vector3 from another vector or any 3-element iterable."""
        if isinstance(value, Vector3):
            return value
        x, y, z = value
        return cls(float(x), float(y), float(z))

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def __mul__(self, scalar: float) -> Vector3:
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vector3:
        return Vector3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def dot(self, other: Vector3) -> float:
        """Compute the dot product with another vector."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector3) -> Vector3:
        """Compute the cross product self x other."""
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length_squared(self) -> float:
        """Squared Euclidean length (avoids the square root)."""
        return self.dot(self)

    def length(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.length_squared())

    def normalized(self) -> Vector3:
        """Return a unit vector in the same direction.

        A zero-length vector normalizes to the zero vector.
        """
        n = self.length()
        if n == 0.0:
            return Vector3(0.0, 0.0, 0.0)
        return self / n

    def near_zero(self, eps: float = 1e-8) -> bool:
        """Check if every component is within eps of zero."""
        return abs(self.x) < eps and abs(self.y) < eps and abs(self.z) < eps

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


ZERO = Vector3(0.0, 0.0, 0.0)
