"""Shared definitions for shape primitives.

The set of shapes is closed: every primitive is one of the ShapeKind
variants, and scene storage dispatches on that tag inside kernels.
"""

import math
from enum import IntEnum

Point = tuple[float, float, float]


class ShapeKind(IntEnum):
    """Tag identifying a primitive in scene storage."""

    SPHERE = 0
    CUBE = 1


def make_point(value, name: str = "point") -> Point:
    """Validate a 3-component coordinate and return it as floats.

    Raises:
        ValueError: If the value does not have three finite components.
    """
    components = tuple(float(c) for c in value)
    if len(components) != 3:
        raise ValueError(f"{name} must have 3 components, got {len(components)}")
    if not all(math.isfinite(c) for c in components):
        raise ValueError(f"{name} must be finite, got {components}")
    return (components[0], components[1], components[2])
