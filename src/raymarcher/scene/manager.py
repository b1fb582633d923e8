"""Host-side scene description.

A Scene is an ordered list of primitives plus exactly one point light. It
owns its objects for the duration of a render: upload() copies them into the
Taichi scene storage, which kernels then read without modification.

Object order is significant. When two objects overlap at a sample point the
one added first is reported, regardless of which is nearer to the ray origin.

Example:
    >>> from raymarcher.scene.manager import Scene
    >>> scene = Scene()
    >>> scene.add_cube((2, 0, 2), 2, 2, 5, color=(0, 255, 0, 255))
    0
    >>> scene.add_sphere((0, 1, 0), 1, 1, 2, color=(0, 0, 255, 255))
    1
    >>> scene.set_light((0, 0, -3))
    >>> scene.upload()  # requires ti.init() first
"""

from dataclasses import dataclass
from typing import Union

from raymarcher.geometry.cube import Cube
from raymarcher.geometry.shape import Point, make_point
from raymarcher.geometry.sphere import Sphere
from raymarcher.scene.intersection import (
    MAX_OBJECTS,
    add_object,
    clear_scene,
    set_light,
)

SceneObject = Union[Sphere, Cube]


@dataclass(frozen=True)
class Light:
    """A point light. Only its position affects shading.

    Attributes:
        position: Light position in world space.
    """

    position: Point

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", make_point(self.position, "position"))


class Scene:
    """Ordered collection of primitives lit by a single point light.

    Attributes:
        objects: The primitives in list order.
        light: The point light, or None until set_light() is called.
    """

    def __init__(
        self,
        objects: tuple[SceneObject, ...] | list[SceneObject] = (),
        light: Light | None = None,
    ) -> None:
        """Initialize a scene, optionally from existing objects and light."""
        self._objects: list[SceneObject] = []
        self._light: Light | None = None
        for obj in objects:
            self.add(obj)
        if light is not None:
            self.set_light(light)

    @property
    def objects(self) -> tuple[SceneObject, ...]:
        """The primitives in list order."""
        return tuple(self._objects)

    @property
    def light(self) -> Light | None:
        """The scene's point light."""
        return self._light

    def add(self, obj: SceneObject) -> int:
        """Append a primitive to the scene.

        Args:
            obj: A Sphere or Cube.

        Returns:
            The list index of the added primitive.

        Raises:
            TypeError: If obj is not a supported primitive.
            RuntimeError: If the scene would exceed MAX_OBJECTS.
        """
        if not isinstance(obj, (Sphere, Cube)):
            raise TypeError(f"Unsupported scene object: {type(obj).__name__}")
        if len(self._objects) >= MAX_OBJECTS:
            raise RuntimeError(f"Maximum number of objects ({MAX_OBJECTS}) exceeded")
        self._objects.append(obj)
        return len(self._objects) - 1

    def add_sphere(
        self,
        centre: Point,
        a: float,
        b: float,
        c: float,
        color: tuple[int, ...],
    ) -> int:
        """Create and append a sphere.

        Args:
            centre: Centre of the sphere.
            a: Semi-axis along x.
            b: Semi-axis along y.
            c: Semi-axis along z.
            color: RGB or RGBA surface color.

        Returns:
            The list index of the added sphere.

        Raises:
            ValueError: If any parameter is degenerate.
        """
        return self.add(Sphere(centre=centre, a=a, b=b, c=c, color=color))

    def add_cube(
        self,
        position: Point,
        x_len: float,
        y_len: float,
        z_len: float,
        color: tuple[int, ...],
    ) -> int:
        """Create and append a cube.

        Args:
            position: Minimum corner of the box.
            x_len: Extent along x.
            y_len: Extent along y.
            z_len: Extent along z.
            color: RGB or RGBA surface color.

        Returns:
            The list index of the added cube.

        Raises:
            ValueError: If any parameter is degenerate.
        """
        return self.add(Cube(position=position, x_len=x_len, y_len=y_len, z_len=z_len, color=color))

    def set_light(self, light: Light | Point) -> None:
        """Set the scene's single point light, replacing any previous one."""
        self._light = light if isinstance(light, Light) else Light(position=light)

    def first_object_containing(self, point) -> int:
        """Host-side containment query in list order.

        Returns:
            The index of the first primitive containing the point, or -1.
        """
        for i, obj in enumerate(self._objects):
            if obj.check_if_inside(point):
                return i
        return -1

    def validate(self) -> None:
        """Check that the scene can be rendered.

        Raises:
            ValueError: If no light has been set.
        """
        if self._light is None:
            raise ValueError("Scene has no light; call set_light() before rendering")

    def upload(self) -> None:
        """Copy the scene into Taichi scene storage.

        Replaces whatever was stored before, preserving list order.

        Raises:
            ValueError: If no light has been set.
        """
        self.validate()
        clear_scene()
        for obj in self._objects:
            add_object(obj.kind, obj.origin, obj.size, obj.color)
        set_light(self._light.position)

    def clear(self) -> None:
        """Remove all primitives and the light."""
        self._objects.clear()
        self._light = None

    def get_object_count(self) -> int:
        """Get the number of primitives in the scene."""
        return len(self._objects)

    def __len__(self) -> int:
        return len(self._objects)

    def __repr__(self) -> str:
        return f"Scene(objects={len(self._objects)}, light={self._light})"
