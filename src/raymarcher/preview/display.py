"""Matplotlib-based preview display for rendered images.

Example:
    >>> from raymarcher.preview.display import show_preview
    >>> pixels = render_image(scene, camera, config)
    >>> show_preview(pixels)
"""

import numpy as np
import numpy.typing as npt


def process_image_for_display(
    pixels: npt.NDArray[np.uint8],
    *,
    rotate_180: bool = True,
) -> npt.NDArray[np.float32]:
    """Convert a uint8 pixel buffer to a float image for display.

    Args:
        pixels: Image array of shape (H, W, 4) or (H, W, 3), dtype uint8.
        rotate_180: Rotate the image by 180 degrees, matching save_png().

    Returns:
        Float32 image in [0, 1] range with the same shape.

    Raises:
        ValueError: If the array does not have an image shape.
    """
    image = np.asarray(pixels)
    if image.ndim != 3 or image.shape[2] not in (3, 4):
        raise ValueError(f"Expected an (H, W, 3) or (H, W, 4) image, got shape {image.shape}")

    result = image.astype(np.float32) / 255.0
    if rotate_180:
        result = np.rot90(result, 2)

    return np.ascontiguousarray(result, dtype=np.float32)


def show_preview(
    pixels: npt.NDArray[np.uint8],
    *,
    rotate_180: bool = True,
    title: str | None = None,
    figsize: tuple[float, float] = (6, 6),
    block: bool = True,
) -> None:
    """Display a rendered image as a Matplotlib figure.

    Args:
        pixels: Image array of shape (H, W, 4) or (H, W, 3), dtype uint8.
        rotate_180: Rotate the image by 180 degrees, matching save_png().
        title: Custom title (default shows the image size).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until figure is closed.
    """
    import matplotlib.pyplot as plt

    display_image = process_image_for_display(pixels, rotate_180=rotate_180)

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(display_image, interpolation="nearest")
    ax.axis("off")

    if title is None:
        height, width = display_image.shape[:2]
        title = f"Render Preview - {width}x{height}"
    ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)
