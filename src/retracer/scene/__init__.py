"""Scene module.

Components:
    scene: Scene container holding the camera and ordered objects
    demo: Factory for the demo scene used by the examples and tests
"""

from .demo import FLOOR_SIZE, DemoSceneParams, create_demo_scene
from .scene import Scene

__all__ = [
    "Scene",
    "create_demo_scene",
    "DemoSceneParams",
    "FLOOR_SIZE",
]
