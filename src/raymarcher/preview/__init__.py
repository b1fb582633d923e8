"""Preview module for output and visualization.

Components:
    display: Matplotlib-based preview display
    export: PNG export via Pillow

Both take the (height, width, 4) uint8 RGBA buffer returned by the renderer
and apply the same optional 180 degree rotation, so the preview and the
saved file agree.

Example:
    >>> from raymarcher.preview import save_png, show_preview
    >>> pixels = render_image(scene, camera, config)
    >>> show_preview(pixels)
    >>> save_png(pixels, "output.png")
"""

from raymarcher.preview.display import process_image_for_display, show_preview
from raymarcher.preview.export import save_png, to_pil_image

__all__ = [
    # Display functions
    "show_preview",
    "process_image_for_display",
    # Export functions
    "save_png",
    "to_pil_image",
]
