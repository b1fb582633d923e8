"""Render loop: primary march, shadow march and flat shading per pixel.

For each pixel the renderer:

    1. Generates the primary ray direction from the camera.
    2. Marches it from the camera position with the regular step.
    3. On a miss, writes the sky color.
    4. On a hit, marches a shadow ray from the hit point toward the light,
       with a larger first increment so it leaves the surface it starts on.
       If the shadow ray hits anything the surface is occluded and its R, G
       and B channels are integer-divided by the dark factor (alpha is kept).
       Otherwise the surface color is written unchanged.

Pixels are independent. The render kernel's outermost loop over a band of
rows runs in parallel, each pixel writing only its own buffer cell; the
kernel launch returning is the join point. Scene and camera fields are only
read while a kernel runs.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from raymarcher.core.config import RenderConfig
    >>> from raymarcher.core.renderer import render_image
    >>> from raymarcher.scene.reference import create_reference_scene
    >>> scene, camera, config = create_reference_scene()
    >>> pixels = render_image(scene, camera, config)
    >>> pixels.shape
    (200, 200, 4)
"""

from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
import taichi as ti

from raymarcher.camera.pinhole import (
    get_camera_origin,
    get_ray_direction,
    setup_camera,
    validate_rotation,
)
from raymarcher.core.marcher import march
from raymarcher.core.vector import color4, real
from raymarcher.scene.intersection import get_light_position, get_object_color

if TYPE_CHECKING:
    from raymarcher.camera.pinhole import Camera
    from raymarcher.core.config import RenderConfig
    from raymarcher.scene.manager import Scene

# =============================================================================
# Render Target (Pixel Buffer)
# =============================================================================

# Maximum supported image dimensions (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())

# RGBA pixel buffer indexed [row, column]
_pixel_buffer = ti.Vector.field(4, dtype=ti.u8, shape=(MAX_IMAGE_HEIGHT, MAX_IMAGE_WIDTH))

_render_target_initialized = ti.field(dtype=ti.i32, shape=())


def _check_image_dimensions(width: int, height: int) -> None:
    """Raise ValueError if an image would not fit the pixel buffer."""
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )


def setup_render_target(width: int, height: int) -> None:
    """Set the active image dimensions and clear the pixel buffer.

    Args:
        width: Image width in pixels (max MAX_IMAGE_WIDTH).
        height: Image height in pixels (max MAX_IMAGE_HEIGHT).

    Raises:
        ValueError: If dimensions exceed maximum supported size.
    """
    _check_image_dimensions(width, height)

    _image_width[None] = width
    _image_height[None] = height
    _render_target_initialized[None] = 1

    clear_render_target()


@ti.kernel
def _clear_pixel_buffer():
    for py, px in _pixel_buffer:
        _pixel_buffer[py, px] = ti.Vector([0, 0, 0, 0], dt=ti.u8)


def clear_render_target() -> None:
    """Clear the pixel buffer to transparent black."""
    _clear_pixel_buffer()


def get_image_dimensions() -> tuple[int, int]:
    """Get the current render target dimensions.

    Returns:
        Tuple of (width, height).
    """
    return int(_image_width[None]), int(_image_height[None])


def _check_render_target_initialized() -> None:
    """Check if render target is initialized and raise if not."""
    if _render_target_initialized[None] == 0:
        raise RuntimeError("Render target not set up. Call setup_render_target() first.")


def get_image_numpy() -> npt.NDArray[np.uint8]:
    """Get the active region of the pixel buffer.

    Row y of the result holds pixel row py = y; no flip is applied.

    Returns:
        NumPy array of shape (height, width, 4) with dtype uint8 (RGBA).

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    full_image = _pixel_buffer.to_numpy()
    return np.ascontiguousarray(full_image[:height, :width, :], dtype=np.uint8)


# =============================================================================
# Shading
# =============================================================================


@ti.func
def shade_pixel(
    px: ti.i32,
    py: ti.i32,
    width: ti.i32,
    height: ti.i32,
    max_distance: real,
    step: real,
    initial_shadow_step: real,
    dark_factor: ti.i32,
    sky: color4,
) -> color4:
    """Compute the color of one pixel.

    Args:
        px: Pixel column.
        py: Pixel row.
        width: Image width in pixels.
        height: Image height in pixels.
        max_distance: Distance budget for both primary and shadow rays.
        step: Regular marching increment.
        initial_shadow_step: First increment of the shadow ray.
        dark_factor: Divisor for the R, G, B channels of shadowed surfaces.
        sky: Color for pixels whose primary ray hits nothing.

    Returns:
        The RGBA color of the pixel.
    """
    color = sky
    direction = get_ray_direction(px, py, width, height)
    index, hit_position = march(get_camera_origin(), direction, max_distance, step, step)

    if index >= 0:
        base = get_object_color(index)
        color = base
        to_light = get_light_position() - hit_position
        occluder, _ = march(hit_position, to_light, max_distance, step, initial_shadow_step)
        if occluder >= 0:
            color = color4(
                base[0] // dark_factor,
                base[1] // dark_factor,
                base[2] // dark_factor,
                base[3],
            )

    return color


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_rows(
    row_start: ti.i32,
    row_end: ti.i32,
    width: ti.i32,
    height: ti.i32,
    max_distance: real,
    step: real,
    initial_shadow_step: real,
    dark_factor: ti.i32,
    sky: color4,
):
    """Shade every pixel in rows [row_start, row_end).

    The outermost loop is parallelized; each iteration writes one cell.
    """
    for py, px in ti.ndrange((row_start, row_end), (0, width)):
        color = shade_pixel(
            px, py, width, height, max_distance, step, initial_shadow_step, dark_factor, sky
        )
        _pixel_buffer[py, px] = ti.cast(color, ti.u8)


@ti.kernel
def _render_single_pixel(
    px: ti.i32,
    py: ti.i32,
    width: ti.i32,
    height: ti.i32,
    max_distance: real,
    step: real,
    initial_shadow_step: real,
    dark_factor: ti.i32,
    sky: color4,
) -> color4:
    """Shade a single pixel and return its color."""
    return shade_pixel(
        px, py, width, height, max_distance, step, initial_shadow_step, dark_factor, sky
    )


# =============================================================================
# Public Rendering API
# =============================================================================


def prepare_render(scene: "Scene", camera: "Camera", config: "RenderConfig") -> None:
    """Upload the scene and camera and set up the render target.

    Everything is validated before any field is written, so a rejected
    render leaves the previous image and uploaded state untouched.

    Args:
        scene: The scene to render. Must have a light.
        camera: The camera to render from.
        config: Render parameters.

    Raises:
        ValueError: If the scene has no light, the camera rotation is not
            orthonormal, or the image is larger than the pixel buffer.
    """
    _check_image_dimensions(config.width, config.height)
    validate_rotation(camera.rotation)
    scene.validate()

    setup_render_target(config.width, config.height)
    setup_camera(camera)
    scene.upload()


def render_rows(row_start: int, row_end: int, config: "RenderConfig") -> None:
    """Render a band of rows into the pixel buffer.

    Uses the scene and camera uploaded by prepare_render().

    Args:
        row_start: First row to render.
        row_end: One past the last row to render (clamped to config.height).
        config: Render parameters.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    row_end = min(row_end, config.height)
    if row_start >= row_end:
        return

    _render_rows(
        row_start,
        row_end,
        config.width,
        config.height,
        config.max_march_distance,
        config.step,
        config.initial_shadow_step,
        config.dark_factor,
        color4(*config.sky_color),
    )


def render_pixel(px: int, py: int, config: "RenderConfig") -> tuple[int, int, int, int]:
    """Shade a single pixel using the uploaded scene and camera.

    This is a Python-callable function for testing and debugging.

    Args:
        px: Pixel column.
        py: Pixel row.
        config: Render parameters.

    Returns:
        Tuple of (R, G, B, A).
    """
    color = _render_single_pixel(
        px,
        py,
        config.width,
        config.height,
        config.max_march_distance,
        config.step,
        config.initial_shadow_step,
        config.dark_factor,
        color4(*config.sky_color),
    )
    return (int(color[0]), int(color[1]), int(color[2]), int(color[3]))


def render_image(scene: "Scene", camera: "Camera", config: "RenderConfig") -> npt.NDArray[np.uint8]:
    """Render a complete image.

    Args:
        scene: The scene to render. Must have a light.
        camera: The camera to render from.
        config: Render parameters.

    Returns:
        NumPy array of shape (config.height, config.width, 4), dtype uint8,
        row-major RGBA. Row y holds pixel row py = y.

    Raises:
        ValueError: If the scene, camera or image size is invalid. Nothing
            is rendered in that case.
    """
    prepare_render(scene, camera, config)
    render_rows(0, config.height, config)
    return get_image_numpy()
