"""Reference scene configuration.

Builds the small demonstration scene the renderer was written around:

- A green box with its minimum corner at (2, 0, 2) and extents (2, 2, 5)
- A blue ellipsoid centred at (0, 1, 0) with semi-axes (1, 1, 2)
- A point light at (0, 0, -3)
- A camera at (5, 6, -6) turned by -pi/6 about the y axis
- A cyan sky, 200x200 pixels, step 0.01, shadow darkening by 3

The box is added before the ellipsoid, so where they overlap the box wins.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from raymarcher.core.renderer import render_image
    >>> from raymarcher.scene.reference import create_reference_scene
    >>> scene, camera, config = create_reference_scene()
    >>> pixels = render_image(scene, camera, config)
"""

import math

from raymarcher.camera.pinhole import Camera, rotation_y
from raymarcher.core.config import RenderConfig
from raymarcher.scene.manager import Scene

# Object colors (RGBA)
CUBE_COLOR = (0, 255, 0, 255)
SPHERE_COLOR = (0, 0, 255, 255)
SKY_COLOR = (0, 255, 255, 255)

CUBE_POSITION = (2.0, 0.0, 2.0)
CUBE_EXTENTS = (2.0, 2.0, 5.0)

SPHERE_CENTRE = (0.0, 1.0, 0.0)
SPHERE_SEMI_AXES = (1.0, 1.0, 2.0)

LIGHT_POSITION = (0.0, 0.0, -3.0)

CAMERA_POSITION = (5.0, 6.0, -6.0)
CAMERA_ANGLE = -math.pi / 6


def create_reference_scene(
    width: int = 200,
    height: int = 200,
    step: float = 0.01,
) -> tuple[Scene, Camera, RenderConfig]:
    """Create the reference scene, camera and render configuration.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        step: Marching step size.

    Returns:
        A tuple of (Scene, Camera, RenderConfig).

    Raises:
        ValueError: If the render parameters are invalid.
    """
    scene = Scene()
    scene.add_cube(CUBE_POSITION, *CUBE_EXTENTS, color=CUBE_COLOR)
    scene.add_sphere(SPHERE_CENTRE, *SPHERE_SEMI_AXES, color=SPHERE_COLOR)
    scene.set_light(LIGHT_POSITION)

    camera = Camera(position=CAMERA_POSITION, rotation=rotation_y(CAMERA_ANGLE))

    config = RenderConfig(
        width=width,
        height=height,
        step=step,
        initial_step_multiplier=10.0,
        dark_factor=3,
        sky_color=SKY_COLOR,
        max_march_distance=50.0,
    )

    return scene, camera, config
