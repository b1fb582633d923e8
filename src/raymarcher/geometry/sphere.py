"""Ellipsoidal sphere primitive with an implicit containment test.

A sphere is described by its centre and three semi-axes (a, b, c), one per
coordinate axis, so it can be stretched into an axis-aligned ellipsoid. A
point p is inside when

    ((px - cx) / a)^2 + ((py - cy) / b)^2 + ((pz - cz) / c)^2 < 1

The inequality is strict: points on the surface are outside.

Example:
    >>> from raymarcher.geometry.sphere import Sphere
    >>> sphere = Sphere(centre=(0.0, 1.0, 0.0), a=1.0, b=1.0, c=2.0,
    ...                 color=(0, 0, 255, 255))
    >>> sphere.check_if_inside((0.0, 1.0, 1.5))
    True
"""

import math
from dataclasses import dataclass

import taichi as ti

from raymarcher.core.config import Color, make_color
from raymarcher.core.vector import vec3
from raymarcher.geometry.shape import Point, ShapeKind, make_point


@dataclass(frozen=True)
class Sphere:
    """A sphere (or axis-aligned ellipsoid) with a flat surface color.

    Attributes:
        centre: Centre of the sphere in world space.
        a: Semi-axis along x.
        b: Semi-axis along y.
        c: Semi-axis along z.
        color: RGBA surface color.

    Raises:
        ValueError: If a semi-axis is zero or not finite, or the centre or
            color is invalid.
    """

    centre: Point
    a: float
    b: float
    c: float
    color: Color

    kind = ShapeKind.SPHERE

    def __post_init__(self) -> None:
        object.__setattr__(self, "centre", make_point(self.centre, "centre"))
        for name in ("a", "b", "c"):
            value = float(getattr(self, name))
            if not math.isfinite(value) or value == 0.0:
                raise ValueError(f"Sphere semi-axis {name} must be finite and non-zero, got {value}")
            object.__setattr__(self, name, value)
        object.__setattr__(self, "color", make_color(self.color))

    @property
    def semi_axes(self) -> Point:
        """The semi-axes as an (a, b, c) tuple."""
        return (self.a, self.b, self.c)

    @property
    def origin(self) -> Point:
        """Reference point stored in scene storage (the centre)."""
        return self.centre

    @property
    def size(self) -> Point:
        """Size vector stored in scene storage (the semi-axes)."""
        return self.semi_axes

    def check_if_inside(self, point) -> bool:
        """Return True if the point lies strictly inside the sphere."""
        px, py, pz = point
        cx, cy, cz = self.centre
        total = (
            ((px - cx) / self.a) ** 2
            + ((py - cy) / self.b) ** 2
            + ((pz - cz) / self.c) ** 2
        )
        return total < 1.0

    def get_surface_color(self) -> Color:
        """Return the constant surface color."""
        return self.color


@ti.func
def inside_sphere(centre: vec3, semi_axes: vec3, p: vec3) -> ti.i32:
    """Test whether a point lies strictly inside an ellipsoidal sphere.

    Args:
        centre: Centre of the sphere.
        semi_axes: Semi-axes (a, b, c); all non-zero.
        p: The point to test.

    Returns:
        1 if the normalized sum of squares is below 1, 0 otherwise.
    """
    q = (p - centre) / semi_axes
    total = q[0] * q[0] + q[1] * q[1] + q[2] * q[2]
    return total < 1.0
