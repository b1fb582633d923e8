"""Scene storage and point-containment queries.

The scene is stored in Taichi fields using a Structure-of-Arrays layout.
Every object occupies one slot holding its ShapeKind tag, a reference point
(sphere centre or cube minimum corner), a size vector (semi-axes or
extents) and an RGBA color. Slot order is the scene's list order.

Containment is resolved in list order: first_object_containing() returns the
lowest slot whose primitive contains the point, not the primitive nearest to
any ray origin. Scene authors control which of two overlapping objects wins
by the order they add them in.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raymarcher.geometry import ShapeKind
    >>> from raymarcher.scene.intersection import add_object, clear_scene, set_light
    >>> clear_scene()
    >>> add_object(ShapeKind.SPHERE, (0, 1, 0), (1, 1, 1), (0, 0, 255, 255))
    0
    >>> set_light((0, 0, -3))
    >>> # Use first_object_containing within a Taichi kernel
"""

import taichi as ti

from raymarcher.core.vector import color4, real, vec3
from raymarcher.geometry.cube import inside_cube
from raymarcher.geometry.shape import ShapeKind
from raymarcher.geometry.sphere import inside_sphere

# Maximum number of objects supported in the scene
MAX_OBJECTS = 1024

# Object storage: Structure of Arrays layout
object_kinds = ti.field(dtype=ti.i32, shape=MAX_OBJECTS)
object_origins = ti.Vector.field(3, dtype=real, shape=MAX_OBJECTS)
object_sizes = ti.Vector.field(3, dtype=real, shape=MAX_OBJECTS)
object_colors = ti.Vector.field(4, dtype=ti.i32, shape=MAX_OBJECTS)
num_objects = ti.field(dtype=ti.i32, shape=())

# Point light
light_position = ti.Vector.field(3, dtype=real, shape=())


def clear_scene() -> None:
    """Remove all objects from the scene.

    Resets the object count to zero. Field data is left in place and will be
    overwritten when new objects are added. The light is moved to the origin.
    """
    num_objects[None] = 0
    light_position[None] = [0.0, 0.0, 0.0]


def add_object(
    kind: ShapeKind,
    origin: tuple[float, float, float],
    size: tuple[float, float, float],
    color: tuple[int, int, int, int],
) -> int:
    """Append an object to the scene.

    Parameters are stored as given; validation happens when the host-side
    Sphere and Cube descriptions are constructed.

    Args:
        kind: Which primitive this slot holds.
        origin: Sphere centre or cube minimum corner.
        size: Sphere semi-axes or cube extents.
        color: RGBA surface color.

    Returns:
        The slot index of the added object.

    Raises:
        RuntimeError: If the maximum number of objects is exceeded.
    """
    idx = num_objects[None]
    if idx >= MAX_OBJECTS:
        raise RuntimeError(f"Maximum number of objects ({MAX_OBJECTS}) exceeded")
    object_kinds[idx] = int(kind)
    object_origins[idx] = [float(c) for c in origin]
    object_sizes[idx] = [float(c) for c in size]
    object_colors[idx] = [int(c) for c in color]
    num_objects[None] = idx + 1
    return idx


def set_light(position: tuple[float, float, float]) -> None:
    """Place the scene's point light."""
    light_position[None] = [float(c) for c in position]


def get_object_count() -> int:
    """Get the number of objects in the scene."""
    return int(num_objects[None])


@ti.func
def inside_object(index: ti.i32, p: vec3) -> ti.i32:
    """Dispatch the containment test for one stored object.

    Args:
        index: Slot of the object.
        p: The point to test.

    Returns:
        1 if the point is inside the object, 0 otherwise.
    """
    kind = object_kinds[index]
    result = 0
    if kind == int(ShapeKind.SPHERE):
        result = inside_sphere(object_origins[index], object_sizes[index], p)
    elif kind == int(ShapeKind.CUBE):
        result = inside_cube(object_origins[index], object_sizes[index], p)
    return result


@ti.func
def first_object_containing(p: vec3) -> ti.i32:
    """Find the first object, in list order, that contains a point.

    Args:
        p: The point to test.

    Returns:
        The slot index of the first containing object, or -1 if none does.
    """
    found = -1
    for i in range(num_objects[None]):
        if found < 0:
            if inside_object(i, p) != 0:
                found = i
    return found


@ti.func
def get_object_color(index: ti.i32) -> color4:
    """Get the surface color of a stored object."""
    return object_colors[index]


@ti.func
def get_light_position() -> vec3:
    """Get the light position in world space."""
    return light_position[None]
