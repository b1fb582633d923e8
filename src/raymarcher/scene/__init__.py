"""Scene module for scene storage and containment queries.

Components:
    intersection: Taichi field storage for objects and the light, and the
        first-in-list-order containment query used by the marcher
    manager: Host-side Scene (ordered primitives plus one Light)
    reference: Factory for the reference demonstration scene

Scene data is organized for kernel access:
    - Structure-of-Arrays layout (kind, origin, size, color per slot)
    - Slot order equals the scene's list order
    - A single point light position
"""

from .intersection import (
    MAX_OBJECTS,
    add_object,
    clear_scene,
    get_object_count,
    set_light,
)
from .manager import Light, Scene, SceneObject
from .reference import create_reference_scene

__all__ = [
    # Intersection module
    "MAX_OBJECTS",
    "add_object",
    "clear_scene",
    "get_object_count",
    "set_light",
    # Manager module
    "Scene",
    "Light",
    "SceneObject",
    # Reference scene
    "create_reference_scene",
]
