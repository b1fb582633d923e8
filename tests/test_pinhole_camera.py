"""Tests for the pinhole camera.

This module tests:
- Rotation constructors and their composition
- Rotation validation
- Camera setup into Taichi fields
- Primary ray direction generation

Note: Imports are done inside test methods to avoid Taichi initialization issues.
"""

import math

import numpy as np
import pytest
import taichi as ti


def _ray_directions(pixels, width, height):
    """Evaluate get_ray_direction for a list of (px, py) pixels."""
    from raymarcher.camera.pinhole import get_ray_direction
    from raymarcher.core.vector import real

    coords = ti.Vector.field(2, dtype=ti.i32, shape=len(pixels))
    result = ti.Vector.field(3, dtype=real, shape=len(pixels))
    for i, p in enumerate(pixels):
        coords[i] = list(p)

    @ti.kernel
    def test_kernel(w: ti.i32, h: ti.i32):
        for i in result:
            result[i] = get_ray_direction(coords[i][0], coords[i][1], w, h)

    test_kernel(width, height)
    return result.to_numpy()


class TestRotations:
    """Test rotation matrix constructors."""

    @pytest.mark.parametrize("theta", [0.0, -math.pi / 6, 1.0, math.pi])
    def test_rotations_are_orthonormal(self, theta):
        """Test that both rotations are proper orthonormal matrices."""
        from raymarcher.camera.pinhole import rotation_x, rotation_y

        for m in (rotation_y(theta), rotation_x(theta)):
            assert np.allclose(m @ m.T, np.eye(3))
            assert np.linalg.det(m) == pytest.approx(1.0)

    def test_rotation_y_layout(self):
        """Test that rotation_y turns +z toward +x for positive angles."""
        from raymarcher.camera.pinhole import rotation_y

        m = rotation_y(math.pi / 2)
        assert np.allclose(m @ np.array([0.0, 0.0, 1.0]), [1.0, 0.0, 0.0])
        assert np.allclose(m[1], [0.0, 1.0, 0.0])

    def test_rotation_x_layout(self):
        """Test that rotation_x turns +z toward -y for positive angles."""
        from raymarcher.camera.pinhole import rotation_x

        m = rotation_x(math.pi / 2)
        assert np.allclose(m @ np.array([0.0, 0.0, 1.0]), [0.0, -1.0, 0.0])
        assert np.allclose(m[0], [1.0, 0.0, 0.0])

    def test_combined_rotation_order(self):
        """Test that rotation() applies the x rotation first."""
        from raymarcher.camera.pinhole import rotation, rotation_x, rotation_y

        combined = rotation(0.4, -0.9)
        assert np.allclose(combined, rotation_y(0.4) @ rotation_x(-0.9))
        assert not np.allclose(combined, rotation_x(-0.9) @ rotation_y(0.4))


class TestCameraSetup:
    """Test camera validation and field setup."""

    def test_default_rotation_is_identity(self):
        from raymarcher.camera.pinhole import Camera

        camera = Camera(position=(1, 2, 3))
        assert camera.position == (1.0, 2.0, 3.0)
        assert np.array_equal(camera.rotation, np.eye(3))

    def test_looking_builds_combined_rotation(self):
        from raymarcher.camera.pinhole import Camera, rotation

        camera = Camera.looking((0, 0, 0), theta_y=0.2, theta_x=0.3)
        assert np.allclose(camera.rotation, rotation(0.2, 0.3))

    def test_setup_camera_writes_fields(self):
        """Test that setup_camera stores position and rotation rows."""
        from raymarcher.camera.pinhole import Camera, get_camera_info, rotation_y, setup_camera

        m = rotation_y(-math.pi / 6)
        setup_camera(Camera(position=(5, 6, -6), rotation=m))
        info = get_camera_info()

        assert info["origin"] == pytest.approx((5.0, 6.0, -6.0))
        for row, expected in zip(info["rows"], m):
            assert row == pytest.approx(tuple(expected))

    @pytest.mark.parametrize(
        "matrix",
        [
            np.eye(3) * 2.0,
            np.zeros((3, 3)),
            np.eye(2),
            np.array([[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, np.nan]]),
            np.array([[1.0, 0.5, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]]),
        ],
    )
    def test_setup_camera_rejects_invalid_rotation(self, matrix):
        """Test that non-orthonormal or malformed rotations are rejected."""
        from raymarcher.camera.pinhole import Camera, setup_camera

        with pytest.raises(ValueError):
            setup_camera(Camera(position=(0, 0, 0), rotation=matrix))

    def test_validate_rotation_accepts_small_error(self):
        """Test that rounding error within tolerance is accepted."""
        from raymarcher.camera.pinhole import validate_rotation

        m = np.eye(3)
        m[0, 0] += 1e-9
        assert validate_rotation(m).shape == (3, 3)


class TestRayDirection:
    """Test primary ray direction generation."""

    def test_identity_camera_directions(self):
        """Test the camera-space mapping with no rotation."""
        from raymarcher.camera.pinhole import Camera, setup_camera

        setup_camera(Camera(position=(0, 0, 0)))
        dirs = _ray_directions([(100, 100), (0, 0), (150, 50), (199, 0)], 200, 200)

        assert np.allclose(dirs[0], [0.0, 0.0, 1.0])
        assert np.allclose(dirs[1], [-1.0, -1.0, 1.0])
        assert np.allclose(dirs[2], [0.5, -0.5, 1.0])
        assert np.allclose(dirs[3], [0.99, -1.0, 1.0])

    def test_non_square_image(self):
        """Test that x and y are scaled by width and height separately."""
        from raymarcher.camera.pinhole import Camera, setup_camera

        setup_camera(Camera(position=(0, 0, 0)))
        dirs = _ray_directions([(40, 10), (0, 15)], 80, 20)

        assert np.allclose(dirs[0], [0.0, 0.0, 1.0])
        assert np.allclose(dirs[1], [-1.0, 0.5, 1.0])

    def test_rotated_camera_direction(self):
        """Test that directions are rotated into world space."""
        from raymarcher.camera.pinhole import Camera, rotation, setup_camera

        m = rotation(0.7, -0.3)
        setup_camera(Camera(position=(1, 2, 3), rotation=m))
        dirs = _ray_directions([(100, 100), (30, 170)], 200, 200)

        assert np.allclose(dirs[0], m @ np.array([0.0, 0.0, 1.0]))
        assert np.allclose(dirs[1], m @ np.array([-0.7, 0.7, 1.0]))

    def test_reference_camera_centre_ray(self):
        """Test the centre ray of the reference camera."""
        from raymarcher.camera.pinhole import Camera, rotation_y, setup_camera

        setup_camera(Camera(position=(5, 6, -6), rotation=rotation_y(-math.pi / 6)))
        dirs = _ray_directions([(100, 100)], 200, 200)

        assert np.allclose(dirs[0], [-0.5, 0.0, math.sqrt(3) / 2])
