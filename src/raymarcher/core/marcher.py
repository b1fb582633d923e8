"""Fixed-step ray marcher.

Rays are not intersected analytically. Instead a sample point is advanced
along the ray in fixed increments and, after every increment, tested
against the scene's containment predicates in list order:

    1. Normalize the direction once.
    2. Advance by initial_step for the first increment, by step afterwards.
    3. After each advance, return the first object (in list order) that
       contains the sample point, together with the point.
    4. Give up once the distance budget, counted in steps, reaches
       max_distance.

Surface positions are only accurate to within one step, and features
thinner than a step can be skipped entirely. The larger initial step lets a
shadow ray start on a surface without immediately reporting that surface as
its own occluder.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from raymarcher.core.marcher import march_ray
    >>> from raymarcher.scene.manager import Scene
    >>> scene = Scene()
    >>> scene.add_sphere((0, 0, 5), 1, 1, 1, color=(255, 0, 0))
    0
    >>> scene.set_light((0, 10, 0))
    >>> scene.upload()
    >>> march_ray((0, 0, 0), (0, 0, 1), 50.0, 0.01).index
    0
"""

from dataclasses import dataclass

import taichi as ti

from raymarcher.core.vector import add, near_zero, normalize, real, scale, vec3
from raymarcher.scene.intersection import first_object_containing


@ti.func
def march(
    origin: vec3,
    direction: vec3,
    max_distance: real,
    step: real,
    initial_step: real,
):
    """March a ray through the scene.

    Args:
        origin: Start point of the ray.
        direction: Ray direction; need not be normalized.
        max_distance: Distance budget. Each iteration counts one step
            against it, including the first.
        step: Regular increment.
        initial_step: Length of the first increment.

    Returns:
        A tuple (index, position) where index is the slot of the first
        object containing a sample point, or -1 on a miss, and position is
        that sample point, or the zero vector on a miss. A zero-length
        direction is reported as a miss.
    """
    hit_index = -1
    hit_position = vec3(0.0, 0.0, 0.0)

    if near_zero(direction) == 0:
        unit = normalize(direction)
        position = origin
        increment = initial_step
        travelled = ti.cast(0.0, real)
        while hit_index < 0 and travelled < max_distance:
            position = add(position, scale(unit, increment))
            hit_index = first_object_containing(position)
            travelled += step
            increment = step
        if hit_index >= 0:
            hit_position = position

    return hit_index, hit_position


# =============================================================================
# Python-side Access
# =============================================================================


@dataclass(frozen=True)
class MarchResult:
    """Outcome of a single march.

    Attributes:
        hit: Whether any object contained a sample point.
        index: List index of the hit object, or -1.
        position: The sample point where the hit was found, or (0, 0, 0).
    """

    hit: bool
    index: int
    position: tuple[float, float, float]


_probe_index = ti.field(dtype=ti.i32, shape=())
_probe_position = ti.Vector.field(3, dtype=real, shape=())


@ti.kernel
def _march_single_ray(
    ox: real,
    oy: real,
    oz: real,
    dx: real,
    dy: real,
    dz: real,
    max_distance: real,
    step: real,
    initial_step: real,
):
    index, position = march(vec3(ox, oy, oz), vec3(dx, dy, dz), max_distance, step, initial_step)
    _probe_index[None] = index
    _probe_position[None] = position


def march_ray(
    origin: tuple[float, float, float],
    direction: tuple[float, float, float],
    max_distance: float,
    step: float,
    initial_step: float | None = None,
) -> MarchResult:
    """March one ray against the uploaded scene from Python.

    This is a Python-callable wrapper for testing and tooling. Rendering
    marches rays inside the render kernel instead.

    Args:
        origin: Start point of the ray.
        direction: Ray direction; need not be normalized.
        max_distance: Distance budget.
        step: Regular increment.
        initial_step: Length of the first increment. Defaults to step.

    Returns:
        A MarchResult for the ray.
    """
    if initial_step is None:
        initial_step = step
    _march_single_ray(
        float(origin[0]),
        float(origin[1]),
        float(origin[2]),
        float(direction[0]),
        float(direction[1]),
        float(direction[2]),
        float(max_distance),
        float(step),
        float(initial_step),
    )
    index = int(_probe_index[None])
    p = _probe_position[None]
    return MarchResult(
        hit=index >= 0,
        index=index,
        position=(float(p[0]), float(p[1]), float(p[2])),
    )
