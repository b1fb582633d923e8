"""Integration tests for the end-to-end rendering pipeline.

This module tests the complete pipeline from scene creation through the
final PNG. It verifies that all components work together and that the
output only ever contains sky, lit and shadowed surface colors.

Tests are designed to be fast (low resolution or single pixels at full
resolution) while still exercising the full pipeline.

Note: Imports are done inside test methods to avoid Taichi initialization issues.
The conftest.py fixture initializes Taichi before tests run.
"""

import math
from pathlib import Path

import numpy as np
import pytest
from PIL import Image as PILImage

SPHERE_COLOR = (0, 0, 255, 255)
SPHERE_SHADOWED = (0, 0, 85, 255)
SKY_COLOR = (0, 255, 255, 255)


def _single_sphere_setup(width: int, height: int, step: float = 0.01):
    """Unit sphere at (0, 1, 0) seen by the reference camera, light at (0, 0, -3)."""
    from raymarcher.camera.pinhole import Camera, rotation_y
    from raymarcher.core.config import RenderConfig
    from raymarcher.scene.manager import Scene

    scene = Scene()
    scene.add_sphere((0, 1, 0), 1, 1, 1, color=SPHERE_COLOR)
    scene.set_light((0, 0, -3))
    camera = Camera(position=(5, 6, -6), rotation=rotation_y(-math.pi / 6))
    config = RenderConfig(width=width, height=height, step=step)
    return scene, camera, config


def _colors(image: np.ndarray) -> set:
    return {tuple(int(c) for c in pixel) for pixel in image.reshape(-1, 4)}


class TestSingleSphereScene:
    """End-to-end checks on a single lit sphere."""

    def test_known_pixels_at_full_resolution(self) -> None:
        """Test sky and lit sphere pixels of a 200x200 render."""
        from raymarcher.core.renderer import prepare_render, render_pixel

        scene, camera, config = _single_sphere_setup(200, 200)
        prepare_render(scene, camera, config)

        # Upward-looking corners see only sky
        assert render_pixel(0, 199, config) == SKY_COLOR
        assert render_pixel(199, 199, config) == SKY_COLOR
        # This ray meets the sphere on the side facing the light
        assert render_pixel(77, 28, config) == SPHERE_COLOR

    def test_ray_through_centre_hits_sphere(self) -> None:
        """Test that the pixel looking at the sphere centre shows the sphere."""
        from raymarcher.core.renderer import prepare_render, render_pixel

        scene, camera, config = _single_sphere_setup(200, 200)
        prepare_render(scene, camera, config)

        assert render_pixel(83, 35, config) in (SPHERE_COLOR, SPHERE_SHADOWED)

    def test_image_contains_only_expected_colors(self) -> None:
        """Test that every pixel is sky, lit sphere or self-shadowed sphere."""
        from raymarcher.core.renderer import render_image

        scene, camera, config = _single_sphere_setup(50, 50, step=0.02)
        image = render_image(scene, camera, config)

        assert image.shape == (50, 50, 4)
        colors = _colors(image)
        assert colors <= {SKY_COLOR, SPHERE_COLOR, SPHERE_SHADOWED}
        # The sphere is partly lit and partly turned away from the light
        assert SPHERE_COLOR in colors
        assert SPHERE_SHADOWED in colors
        assert SKY_COLOR in colors


class TestReferenceScene:
    """End-to-end checks on the reference scene."""

    def test_reference_render_colors(self) -> None:
        """Test that a low resolution reference render shows both objects."""
        from raymarcher.core.renderer import render_image
        from raymarcher.scene.reference import create_reference_scene

        scene, camera, config = create_reference_scene(width=40, height=40, step=0.05)
        image = render_image(scene, camera, config)

        green, dark_green = (0, 255, 0, 255), (0, 85, 0, 255)
        blue, dark_blue = (0, 0, 255, 255), (0, 0, 85, 255)
        colors = _colors(image)

        assert colors <= {SKY_COLOR, green, dark_green, blue, dark_blue}
        assert colors & {green, dark_green}
        assert colors & {blue, dark_blue}
        assert tuple(int(c) for c in image[39, 0]) == SKY_COLOR
        assert tuple(int(c) for c in image[39, 39]) == SKY_COLOR

    def test_progressive_matches_single_pass(self) -> None:
        """Test that a banded render equals a single-pass render."""
        from raymarcher.core.progressive import ProgressiveRenderer
        from raymarcher.core.renderer import render_image
        from raymarcher.scene.reference import create_reference_scene

        scene, camera, config = create_reference_scene(width=32, height=24, step=0.05)
        expected = render_image(scene, camera, config)

        renderer = ProgressiveRenderer(scene, camera, config)
        progress = list(renderer.render_progressive(band_rows=5))

        assert progress[-1] == (24, 24)
        assert np.array_equal(renderer.get_image_numpy(), expected)

    def test_save_png(self, tmp_path: Path) -> None:
        """Test the full pipeline through to a rotated PNG on disk."""
        from raymarcher.core.renderer import render_image
        from raymarcher.preview.export import save_png
        from raymarcher.scene.reference import create_reference_scene

        scene, camera, config = create_reference_scene(width=30, height=20, step=0.05)
        image = render_image(scene, camera, config)

        output = tmp_path / "img.png"
        save_png(image, str(output))

        assert output.exists()
        saved = np.asarray(PILImage.open(output))
        assert saved.shape == (20, 30, 4)
        assert np.array_equal(saved, image[::-1, ::-1])
        # After rotation the sky is at the top of the picture
        assert tuple(int(c) for c in saved[0, 0]) == SKY_COLOR

    @pytest.mark.parametrize("step", [0.05, 0.1])
    def test_render_is_deterministic(self, step: float) -> None:
        """Test that rendering the same scene twice gives identical images."""
        from raymarcher.core.renderer import render_image
        from raymarcher.scene.reference import create_reference_scene

        scene, camera, config = create_reference_scene(width=16, height=16, step=step)
        first = render_image(scene, camera, config)
        second = render_image(scene, camera, config)

        assert np.array_equal(first, second)
