"""Axis-aligned box primitive with an implicit containment test.

A cube is described by its minimum corner and its extents along x, y and z.
A point is inside when it lies strictly between the minimum corner and the
opposite corner on all three axes. Points on any face are outside.

Example:
    >>> from raymarcher.geometry.cube import Cube
    >>> cube = Cube(position=(0.0, 0.0, 0.0), x_len=2.0, y_len=2.0, z_len=2.0,
    ...             color=(0, 255, 0, 255))
    >>> cube.check_if_inside((1.0, 1.0, 1.0)), cube.check_if_inside((0.0, 0.0, 0.0))
    (True, False)
"""

import math
from dataclasses import dataclass

import taichi as ti

from raymarcher.core.config import Color, make_color
from raymarcher.core.vector import vec3
from raymarcher.geometry.shape import Point, ShapeKind, make_point


@dataclass(frozen=True)
class Cube:
    """An axis-aligned box with a flat surface color.

    Attributes:
        position: Minimum corner of the box.
        x_len: Extent along x.
        y_len: Extent along y.
        z_len: Extent along z.
        color: RGBA surface color.

    Raises:
        ValueError: If an extent is negative or not finite, or the position
            or color is invalid.
    """

    position: Point
    x_len: float
    y_len: float
    z_len: float
    color: Color

    kind = ShapeKind.CUBE

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", make_point(self.position, "position"))
        for name in ("x_len", "y_len", "z_len"):
            value = float(getattr(self, name))
            if not math.isfinite(value) or value < 0.0:
                raise ValueError(f"Cube extent {name} must be finite and non-negative, got {value}")
            object.__setattr__(self, name, value)
        object.__setattr__(self, "color", make_color(self.color))

    @property
    def extents(self) -> Point:
        """The extents as an (x_len, y_len, z_len) tuple."""
        return (self.x_len, self.y_len, self.z_len)

    @property
    def origin(self) -> Point:
        """Reference point stored in scene storage (the minimum corner)."""
        return self.position

    @property
    def size(self) -> Point:
        """Size vector stored in scene storage (the extents)."""
        return self.extents

    def check_if_inside(self, point) -> bool:
        """Return True if the point lies strictly inside the box."""
        return all(
            lo < p < lo + length
            for p, lo, length in zip(point, self.position, self.extents)
        )

    def get_surface_color(self) -> Color:
        """Return the constant surface color."""
        return self.color


@ti.func
def inside_cube(position: vec3, extents: vec3, p: vec3) -> ti.i32:
    """Test whether a point lies strictly inside an axis-aligned box.

    Args:
        position: Minimum corner of the box.
        extents: Box size along each axis.
        p: The point to test.

    Returns:
        1 if p is strictly inside on every axis, 0 otherwise.
    """
    upper = position + extents
    inside_x = position[0] < p[0] and p[0] < upper[0]
    inside_y = position[1] < p[1] and p[1] < upper[1]
    inside_z = position[2] < p[2] and p[2] < upper[2]
    return inside_x and inside_y and inside_z
