"""Pytest configuration for renderer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture
def camera_factory():
    """Build pinhole cameras looking down -Z from the origin."""
    from src.retracer.camera.pinhole import PinholeCamera

    def _make(width: int = 8, height: int = 8, vfov: float = 90.0):
        return PinholeCamera(
            lookfrom=(0.0, 0.0, 0.0),
            lookat=(0.0, 0.0, -1.0),
            vup=(0.0, 1.0, 0.0),
            vfov=vfov,
            resolution=(width, height),
        )

    return _make


@pytest.fixture
def empty_scene(camera_factory):
    """An 8x8 scene with no objects."""
    from src.retracer.scene.scene import Scene

    return Scene(camera_factory())
