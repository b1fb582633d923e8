"""Core rendering module.

This module contains the building blocks of the ray marcher:

Components:
    vector: Vector and rotation-matrix math for kernels
    config: Immutable RenderConfig and color validation
    marcher: Fixed-step ray marching against the scene
    renderer: Per-pixel shading (sky, lit, shadowed) and the render kernel
    progressive: Band-by-band rendering with progress reporting

All per-pixel work runs in Taichi kernels; the outermost pixel loop is
parallelized and every pixel writes only its own output cell.
"""

from .config import (
    DEFAULT_DARK_FACTOR,
    DEFAULT_HEIGHT,
    DEFAULT_INITIAL_STEP_MULTIPLIER,
    DEFAULT_MAX_MARCH_DISTANCE,
    DEFAULT_SKY_COLOR,
    DEFAULT_STEP,
    DEFAULT_WIDTH,
    Color,
    RenderConfig,
    make_color,
)
from .vector import (
    add,
    color4,
    dot,
    magnitude,
    mat3,
    multiply,
    near_zero,
    normalize,
    real,
    scale,
    transform,
    vec3,
)

# Note: marcher, renderer and progressive are NOT imported here to avoid circular imports.
# Import directly from raymarcher.core.renderer or raymarcher.core.progressive when needed.

__all__ = [
    "Color",
    "RenderConfig",
    "make_color",
    "DEFAULT_WIDTH",
    "DEFAULT_HEIGHT",
    "DEFAULT_STEP",
    "DEFAULT_INITIAL_STEP_MULTIPLIER",
    "DEFAULT_DARK_FACTOR",
    "DEFAULT_SKY_COLOR",
    "DEFAULT_MAX_MARCH_DISTANCE",
    "real",
    "vec3",
    "mat3",
    "color4",
    "dot",
    "add",
    "scale",
    "magnitude",
    "normalize",
    "near_zero",
    "transform",
    "multiply",
]
