"""Pytest configuration for ray marcher tests.

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
    ti.init(arch=ti.cpu, default_fp=ti.f64, random_seed=42)
    yield


@pytest.fixture(autouse=True)
def clear_all_scene_data():
    """Clear scene storage before and after each test.

    This ensures tests are isolated from each other.
    """
    # Import here to ensure Taichi is initialized first
    from raymarcher.scene.intersection import clear_scene

    clear_scene()
    yield
    clear_scene()


@pytest.fixture
def upload_scene():
    """Upload a scene built from (objects, light) and return it."""

    def _upload(objects, light=(0.0, 0.0, -10.0)):
        from raymarcher.scene.manager import Scene

        scene = Scene(objects=objects)
        scene.set_light(light)
        scene.upload()
        return scene

    return _upload
