"""Fixed-step ray marching renderer built on Taichi.

This package renders small scenes of implicit-surface primitives lit by a
single point light. Rays are advanced in fixed steps and tested for
containment instead of being intersected analytically.

Subpackages:
    core: Vector/matrix math, render configuration, the marcher and the render loop
    geometry: Shape primitives and their containment tests
    scene: Scene storage, the host-side scene description and the reference scene
    camera: Camera orientation and primary ray generation
    preview: PNG export and Matplotlib preview
"""

__version__ = "0.1.0"
