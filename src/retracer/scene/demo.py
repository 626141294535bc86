"""Demo scene configuration.

This module provides a factory for a small test scene used by the example
script and the integration tests:

- A large white floor quad
- Three colored spheres resting on the floor
- A camera slightly above the floor looking at the middle sphere

Material references are plain RGB albedo triples, which is what the
ray-cast integrator expects.

Example:
    >>> from src.retracer.scene.demo import create_demo_scene
    >>> scene = create_demo_scene(320, 240)
    >>> len(scene)
    4
"""

from __future__ import annotations

from dataclasses import dataclass

from src.retracer.camera.pinhole import PinholeCamera
from src.retracer.core.vector import Vector3
from src.retracer.geometry.quad import Quad
from src.retracer.geometry.sphere import Sphere
from src.retracer.scene.scene import Scene


@dataclass
class DemoSceneParams:
    """Parameters for configuring the demo scene.

    Attributes:
        floor_color: RGB albedo of the floor.
        left_color: RGB albedo of the left sphere.
        center_color: RGB albedo of the center sphere.
        right_color: RGB albedo of the right sphere.
        vfov: Vertical field of view of the camera in degrees.
    """

    floor_color: tuple[float, float, float] = (0.73, 0.73, 0.73)
    left_color: tuple[float, float, float] = (0.65, 0.05, 0.05)
    center_color: tuple[float, float, float] = (0.8, 0.8, 0.8)
    right_color: tuple[float, float, float] = (0.12, 0.45, 0.15)
    vfov: float = 50.0


# Floor half-extent in world units
FLOOR_SIZE = 20.0


def create_demo_scene(
    width: int = 320,
    height: int = 240,
    params: DemoSceneParams | None = None,
) -> Scene:
    """Create the demo scene.

    The coordinate system is right-handed with Y up; the camera sits at
    z = 4 and looks toward -Z.

    Args:
        width: Output image width in pixels.
        height: Output image height in pixels.
        params: Optional DemoSceneParams. If None, uses DemoSceneParams().

    Returns:
        A Scene with a floor quad and three spheres.
    """
    if params is None:
        params = DemoSceneParams()

    camera = PinholeCamera(
        lookfrom=(0.0, 1.0, 4.0),
        lookat=(0.0, 0.5, 0.0),
        vup=(0.0, 1.0, 0.0),
        vfov=params.vfov,
        resolution=(width, height),
    )
    scene = Scene(camera)

    # Floor at y=0, normal pointing up
    scene.add(
        Quad(
            Vector3(-FLOOR_SIZE, 0.0, FLOOR_SIZE),
            Vector3(2.0 * FLOOR_SIZE, 0.0, 0.0),
            Vector3(0.0, 0.0, -2.0 * FLOOR_SIZE),
            material=params.floor_color,
        )
    )
    scene.add(Sphere(Vector3(-1.2, 0.5, 0.0), 0.5, material=params.left_color))
    scene.add(Sphere(Vector3(0.0, 0.7, -0.5), 0.7, material=params.center_color))
    scene.add(Sphere(Vector3(1.2, 0.5, 0.0), 0.5, material=params.right_color))
    return scene
