"""Camera module for orientation and primary ray generation.

Components:
    pinhole: Fixed-orientation pinhole camera and rotation constructors

Camera responsibilities:
    - Build and validate rotation matrices on the host
    - Map pixel (px, py) to the camera-space direction (ndc_x, ndc_y, 1)
    - Rotate that direction into world space inside kernels

The camera is set up once before a render and never changes during it.
"""

from .pinhole import (
    Camera,
    get_camera_info,
    get_camera_origin,
    get_ray_direction,
    rotation,
    rotation_x,
    rotation_y,
    setup_camera,
    validate_rotation,
)

__all__ = [
    "Camera",
    "rotation",
    "rotation_x",
    "rotation_y",
    "validate_rotation",
    "setup_camera",
    "get_ray_direction",
    "get_camera_origin",
    "get_camera_info",
]
