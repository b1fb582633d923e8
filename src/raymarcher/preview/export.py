"""Image export utilities for rendered pixel buffers.

The renderer returns a (height, width, 4) uint8 RGBA array whose row y is
pixel row py = y. Saved images are rotated by 180 degrees by default so
that the reference scene appears upright.

Supported formats:
    - PNG (8-bit RGBA via Pillow)

Example:
    >>> from raymarcher.core.renderer import render_image
    >>> from raymarcher.preview.export import save_png
    >>> pixels = render_image(scene, camera, config)
    >>> save_png(pixels, "img.png")
"""

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage


def _check_pixels(pixels: npt.NDArray[np.uint8]) -> npt.NDArray[np.uint8]:
    """Validate a pixel buffer's shape and return it as uint8."""
    array = np.asarray(pixels)
    if array.ndim != 3 or array.shape[2] not in (3, 4):
        raise ValueError(f"Expected an (H, W, 3) or (H, W, 4) image, got shape {array.shape}")
    return array.astype(np.uint8, copy=False)


def to_pil_image(
    pixels: npt.NDArray[np.uint8],
    *,
    rotate_180: bool = False,
) -> PILImage.Image:
    """Convert a pixel buffer to a Pillow image.

    Args:
        pixels: Image array of shape (H, W, 4) RGBA or (H, W, 3) RGB.
        rotate_180: Rotate the image by 180 degrees.

    Returns:
        A Pillow image in RGBA or RGB mode.

    Raises:
        ValueError: If the array does not have an image shape.
    """
    image = PILImage.fromarray(np.ascontiguousarray(_check_pixels(pixels)))
    if rotate_180:
        image = image.transpose(PILImage.Transpose.ROTATE_180)
    return image


def save_png(
    pixels: npt.NDArray[np.uint8],
    filepath: str,
    *,
    rotate_180: bool = True,
) -> None:
    """Save a pixel buffer as a PNG file.

    Args:
        pixels: Image array of shape (H, W, 4) RGBA or (H, W, 3) RGB.
        filepath: Output file path (should end in .png).
        rotate_180: Rotate the image by 180 degrees before saving.
            Default True, which shows the reference scene upright.

    Example:
        >>> save_png(pixels, "output.png", rotate_180=False)
    """
    to_pil_image(pixels, rotate_180=rotate_180).save(filepath, format="PNG")
