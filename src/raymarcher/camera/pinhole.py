"""Pinhole camera with a fixed rotation for primary ray generation.

The camera sits at a position in world space and carries a 3x3 rotation
matrix. For pixel (px, py) of a width x height image it builds the
camera-space direction

    (px / (width / 2) - 1, py / (height / 2) - 1, 1)

and rotates it into world space. The forward axis is +z and the image plane
sits at unit distance, so the view spans 90 degrees in each direction.

Rotation matrices are built on the host with NumPy and validated before
they are written to Taichi fields. An orthonormal rotation never maps the
camera-space direction (which always has z = 1) to a zero vector, so the
marcher can normalise every primary direction safely.

Example:
    >>> import math
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raymarcher.camera.pinhole import Camera, rotation_y, setup_camera
    >>> camera = Camera(position=(5.0, 6.0, -6.0), rotation=rotation_y(-math.pi / 6))
    >>> setup_camera(camera)
"""

import math
from dataclasses import dataclass, field

import numpy as np
import numpy.typing as npt
import taichi as ti

from raymarcher.core.vector import real, transform, vec3
from raymarcher.geometry.shape import Point, make_point

# Tolerance for the orthonormality check in setup_camera()
ORTHONORMAL_TOLERANCE = 1e-6

# =============================================================================
# Rotation Constructors (Python-side)
# =============================================================================


def rotation_y(theta: float) -> npt.NDArray[np.float64]:
    """Rotation about the y axis by theta radians.

    Turns the view left or right. The reference scene uses this rotation
    alone to orient its camera.

    Args:
        theta: Rotation angle in radians.

    Returns:
        Row-major 3x3 rotation matrix.
    """
    c = math.cos(theta)
    s = math.sin(theta)
    return np.array(
        [
            [c, 0.0, s],
            [0.0, 1.0, 0.0],
            [-s, 0.0, c],
        ],
        dtype=np.float64,
    )


def rotation_x(theta: float) -> npt.NDArray[np.float64]:
    """Rotation about the x axis by theta radians.

    Tilts the view up or down.

    Args:
        theta: Rotation angle in radians.

    Returns:
        Row-major 3x3 rotation matrix.
    """
    c = math.cos(theta)
    s = math.sin(theta)
    return np.array(
        [
            [1.0, 0.0, 0.0],
            [0.0, c, -s],
            [0.0, s, c],
        ],
        dtype=np.float64,
    )


def rotation(theta_y: float, theta_x: float) -> npt.NDArray[np.float64]:
    """Combined rotation: rotation_x(theta_x) applied first, then rotation_y(theta_y).

    Args:
        theta_y: Angle about the y axis in radians.
        theta_x: Angle about the x axis in radians.

    Returns:
        The product rotation_y(theta_y) @ rotation_x(theta_x).
    """
    return rotation_y(theta_y) @ rotation_x(theta_x)


def validate_rotation(matrix) -> npt.NDArray[np.float64]:
    """Check that a matrix is a usable camera rotation.

    Args:
        matrix: Anything convertible to a 3x3 float array.

    Returns:
        The matrix as a float64 array.

    Raises:
        ValueError: If the matrix is not 3x3, not finite, or its rows are not
            orthonormal within ORTHONORMAL_TOLERANCE.
    """
    m = np.asarray(matrix, dtype=np.float64)
    if m.shape != (3, 3):
        raise ValueError(f"Camera rotation must be 3x3, got shape {m.shape}")
    if not np.all(np.isfinite(m)):
        raise ValueError("Camera rotation must be finite")
    if not np.allclose(m @ m.T, np.eye(3), atol=ORTHONORMAL_TOLERANCE):
        raise ValueError("Camera rotation rows must be orthonormal")
    return m


# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass
class Camera:
    """A camera position and fixed orientation.

    Attributes:
        position: Camera position in world space (x, y, z).
        rotation: Row-major 3x3 rotation from camera space to world space.
            Defaults to the identity (looking down +z).
    """

    position: Point
    rotation: npt.NDArray[np.float64] = field(default_factory=lambda: np.eye(3))

    def __post_init__(self) -> None:
        self.position = make_point(self.position, "position")
        self.rotation = np.asarray(self.rotation, dtype=np.float64)

    @classmethod
    def looking(cls, position: Point, theta_y: float = 0.0, theta_x: float = 0.0) -> "Camera":
        """Create a camera oriented by angles about the y and x axes.

        Args:
            position: Camera position in world space.
            theta_y: Angle about the y axis in radians.
            theta_x: Angle about the x axis in radians.

        Returns:
            A Camera with rotation(theta_y, theta_x).
        """
        return cls(position=position, rotation=rotation(theta_y, theta_x))


# =============================================================================
# Taichi Fields for Camera State
# =============================================================================

_camera_origin = ti.Vector.field(3, dtype=real, shape=())
_camera_rotation = ti.Matrix.field(3, 3, dtype=real, shape=())


def setup_camera(camera: Camera) -> None:
    """Validate the camera and write it to Taichi fields.

    Must be called before rendering. The camera is read-only for the
    duration of a render.

    Args:
        camera: Camera position and rotation.

    Raises:
        ValueError: If the rotation is not a valid orthonormal 3x3 matrix.
    """
    m = validate_rotation(camera.rotation)
    _camera_origin[None] = list(camera.position)
    _camera_rotation[None] = m.tolist()


# =============================================================================
# Ray Generation (Taichi-compatible)
# =============================================================================


@ti.func
def get_camera_origin() -> vec3:
    """Get the camera position in world space."""
    return _camera_origin[None]


@ti.func
def get_ray_direction(px: ti.i32, py: ti.i32, width: ti.i32, height: ti.i32) -> vec3:
    """Compute the world-space primary ray direction for a pixel.

    The direction is not normalized; the marcher normalizes it once.

    Args:
        px: Pixel column in [0, width).
        py: Pixel row in [0, height).
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        The camera-space direction (ndc_x, ndc_y, 1) rotated to world space.
    """
    ndc_x = ti.cast(px, real) / (ti.cast(width, real) / 2.0) - 1.0
    ndc_y = ti.cast(py, real) / (ti.cast(height, real) / 2.0) - 1.0
    return transform(_camera_rotation[None], vec3(ndc_x, ndc_y, 1.0))


# =============================================================================
# Utility Functions
# =============================================================================


def get_camera_info() -> dict[str, tuple]:
    """Get current camera state for debugging.

    Returns:
        Dictionary with the origin and the three rotation rows.
    """
    origin = _camera_origin[None]
    m = _camera_rotation[None]
    return {
        "origin": (float(origin[0]), float(origin[1]), float(origin[2])),
        "rows": tuple(
            (float(m[i, 0]), float(m[i, 1]), float(m[i, 2])) for i in range(3)
        ),
    }
