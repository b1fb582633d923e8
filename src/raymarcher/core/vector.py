"""Vector and rotation-matrix utilities for the ray marcher.

All functions here are Taichi functions meant to be called from kernels.
Geometry is carried in 64-bit floats so marching over long distances with
small steps does not drift.

Matrices are row-major: ``transform(m, v)`` dots ``v`` against each row of
``m``, which is the product ``M . v``. ``multiply(a, b)`` is the full matrix
product ``A . B`` and therefore composes as ``transform(multiply(a, b), v) ==
transform(a, transform(b, v))``.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raymarcher.core.vector import normalize, vec3
    >>> @ti.kernel
    ... def unit() -> vec3:
    ...     return normalize(vec3(3.0, 0.0, 4.0))
    >>> unit()  # (0.6, 0.0, 0.8)
"""

import taichi as ti

# Scalar type used for every coordinate and distance
real = ti.f64

vec3 = ti.types.vector(3, real)
mat3 = ti.types.matrix(3, 3, real)

# RGBA color with integer channels in [0, 255]
color4 = ti.types.vector(4, ti.i32)


@ti.func
def dot(a: vec3, b: vec3) -> real:
    """Compute the dot product of two vectors.

    Args:
        a: First vector.
        b: Second vector.

    Returns:
        The dot product a . b.
    """
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


@ti.func
def add(a: vec3, b: vec3) -> vec3:
    """Component-wise sum of two vectors."""
    return vec3(a[0] + b[0], a[1] + b[1], a[2] + b[2])


@ti.func
def scale(v: vec3, s: real) -> vec3:
    """Multiply every component of a vector by a scalar."""
    return vec3(v[0] * s, v[1] * s, v[2] * s)


@ti.func
def magnitude(v: vec3) -> real:
    """Compute the Euclidean length of a vector.

    Args:
        v: The input vector.

    Returns:
        The length of v, always >= 0.
    """
    return ti.sqrt(dot(v, v))


@ti.func
def normalize(v: vec3) -> vec3:
    """Normalize a vector to unit length.

    The result is undefined for a zero-length vector. Callers must guard
    with near_zero() first.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v.
    """
    return scale(v, 1.0 / magnitude(v))


@ti.func
def near_zero(v: vec3) -> ti.i32:
    """Check if a vector is too short to be normalized.

    Args:
        v: The vector to check.

    Returns:
        1 if all components are near zero, 0 otherwise.
    """
    s = 1e-12
    return ti.abs(v[0]) < s and ti.abs(v[1]) < s and ti.abs(v[2]) < s


@ti.func
def transform(m: mat3, v: vec3) -> vec3:
    """Apply a rotation matrix to a vector.

    Each output component is the dot product of v with one row of m.

    Args:
        m: Row-major 3x3 matrix.
        v: The vector to transform.

    Returns:
        The vector M . v.
    """
    return vec3(
        m[0, 0] * v[0] + m[0, 1] * v[1] + m[0, 2] * v[2],
        m[1, 0] * v[0] + m[1, 1] * v[1] + m[1, 2] * v[2],
        m[2, 0] * v[0] + m[2, 1] * v[1] + m[2, 2] * v[2],
    )


@ti.func
def multiply(a: mat3, b: mat3) -> mat3:
    """Compose two matrices with a full 3x3 product.

    Args:
        a: Left-hand matrix (applied last).
        b: Right-hand matrix (applied first).

    Returns:
        The product A . B.
    """
    result = ti.Matrix.zero(real, 3, 3)
    for i, j in ti.static(ti.ndrange(3, 3)):
        result[i, j] = a[i, 0] * b[0, j] + a[i, 1] * b[1, j] + a[i, 2] * b[2, j]
    return result
