"""Geometry module for implicit-surface primitives.

This module provides the shape primitives a scene is built from:

Components:
    shape: The closed ShapeKind tag and coordinate validation
    sphere: Axis-aligned ellipsoid ("sphere") with semi-axes a, b, c
    cube: Axis-aligned box given by its minimum corner and extents

Every primitive answers two questions: is a point inside it, and what is
its surface color. The host-side dataclasses validate their parameters at
construction and carry a Python containment test; the matching Taichi
functions are used by the marcher inside kernels.
"""

from .cube import Cube, inside_cube
from .shape import Point, ShapeKind, make_point
from .sphere import Sphere, inside_sphere

__all__ = [
    "ShapeKind",
    "Point",
    "make_point",
    "Sphere",
    "inside_sphere",
    "Cube",
    "inside_cube",
]
