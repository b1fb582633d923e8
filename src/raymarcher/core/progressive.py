"""Progressive renderer that fills the image in bands of rows.

Each band is one parallel kernel launch writing a disjoint range of rows,
so a render can report progress between bands and a caller can stop early
by no longer asking for bands. The finished image is identical to a single
render_image() call.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from raymarcher.core.progressive import ProgressiveRenderer
    >>> from raymarcher.scene.reference import create_reference_scene
    >>>
    >>> scene, camera, config = create_reference_scene()
    >>> renderer = ProgressiveRenderer(scene, camera, config)
    >>> renderer.render(band_rows=20)
    >>> image = renderer.get_image_numpy()
"""

from collections.abc import Callable, Generator

import numpy as np
import numpy.typing as npt

from raymarcher.camera.pinhole import Camera
from raymarcher.core.config import RenderConfig
from raymarcher.core.renderer import get_image_numpy, prepare_render, render_rows
from raymarcher.scene.manager import Scene

# Type alias for progress callback
# Callback receives (rows_completed, total_rows)
ProgressCallback = Callable[[int, int], None]


class ProgressiveRenderer:
    """Renders an image band by band with progress reporting.

    The scene and camera are uploaded and validated on construction, so an
    invalid configuration is rejected before any pixel is shaded.

    Attributes:
        config: The render parameters.
    """

    def __init__(self, scene: Scene, camera: Camera, config: RenderConfig) -> None:
        """Initialize the renderer and upload scene state.

        Args:
            scene: The scene to render. Must have a light.
            camera: The camera to render from.
            config: Render parameters.

        Raises:
            ValueError: If the scene, camera or image size is invalid.
        """
        self.config = config
        self._scene = scene
        self._camera = camera
        self._rows_completed = 0
        prepare_render(scene, camera, config)

    @property
    def width(self) -> int:
        """Get the image width."""
        return self.config.width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self.config.height

    @property
    def rows_completed(self) -> int:
        """Number of rows rendered so far."""
        return self._rows_completed

    @property
    def is_complete(self) -> bool:
        """Whether every row has been rendered."""
        return self._rows_completed >= self.config.height

    def reset(self) -> None:
        """Start over: re-upload the scene and camera and clear the image."""
        prepare_render(self._scene, self._camera, self.config)
        self._rows_completed = 0

    def _render_band(self, band_rows: int) -> None:
        start = self._rows_completed
        end = min(start + band_rows, self.config.height)
        render_rows(start, end, self.config)
        self._rows_completed = end

    def render(
        self,
        band_rows: int = 16,
        callback: ProgressCallback | None = None,
    ) -> None:
        """Render all remaining rows.

        Args:
            band_rows: Number of rows per kernel launch.
            callback: Optional callback called after each band with
                (rows_completed, total_rows).

        Raises:
            ValueError: If band_rows is not positive.
        """
        if band_rows <= 0:
            raise ValueError(f"band_rows must be positive, got {band_rows}")

        while not self.is_complete:
            self._render_band(band_rows)
            if callback is not None:
                callback(self._rows_completed, self.config.height)

    def render_progressive(
        self,
        band_rows: int = 16,
    ) -> Generator[tuple[int, int], None, None]:
        """Render remaining rows, yielding progress after each band.

        Stopping iteration cancels the render between bands; the rows
        rendered so far stay in the buffer and render() can resume.

        Args:
            band_rows: Number of rows per kernel launch.

        Yields:
            Tuple of (rows_completed, total_rows).

        Raises:
            ValueError: If band_rows is not positive.
        """
        if band_rows <= 0:
            raise ValueError(f"band_rows must be positive, got {band_rows}")

        while not self.is_complete:
            self._render_band(band_rows)
            yield (self._rows_completed, self.config.height)

    def get_image_numpy(self) -> npt.NDArray[np.uint8]:
        """Get the image as a (height, width, 4) uint8 RGBA array.

        Rows not rendered yet are transparent black.
        """
        return get_image_numpy()

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return (
            f"ProgressiveRenderer(width={self.width}, height={self.height}, "
            f"rows={self.rows_completed})"
        )
