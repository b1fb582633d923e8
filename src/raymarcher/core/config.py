"""Immutable render configuration.

A RenderConfig is built once per render and passed explicitly through the
camera, marcher and render loop. Nothing reads render parameters from
module-level state.

Example:
    >>> from raymarcher.core.config import RenderConfig
    >>> config = RenderConfig(width=320, height=240, step=0.02)
    >>> config.initial_shadow_step
    0.2
"""

import math
import numbers
from dataclasses import dataclass

# RGBA color with integer channels in [0, 255]
Color = tuple[int, int, int, int]

# Reference render parameters
DEFAULT_WIDTH = 200
DEFAULT_HEIGHT = 200
DEFAULT_STEP = 0.01
DEFAULT_INITIAL_STEP_MULTIPLIER = 10.0
DEFAULT_DARK_FACTOR = 3
DEFAULT_SKY_COLOR: Color = (0, 255, 255, 255)
DEFAULT_MAX_MARCH_DISTANCE = 50.0


def make_color(color: tuple[int, ...]) -> Color:
    """Validate a color and return it as an RGBA tuple.

    Args:
        color: (R, G, B) or (R, G, B, A) with integer channels in [0, 255].
            A missing alpha channel defaults to 255 (opaque).

    Returns:
        The color as a 4-tuple of ints.

    Raises:
        ValueError: If the color has the wrong length or a channel is not
            an integer in [0, 255].
    """
    channels = tuple(color)
    if len(channels) == 3:
        channels = channels + (255,)
    if len(channels) != 4:
        raise ValueError(f"Color must have 3 or 4 channels, got {len(channels)}")
    for c in channels:
        if isinstance(c, bool) or not isinstance(c, numbers.Integral):
            raise ValueError(f"Color channels must be integers, got {c!r}")
        if not 0 <= c <= 255:
            raise ValueError(f"Color channels must be in [0, 255], got {c}")
    return (int(channels[0]), int(channels[1]), int(channels[2]), int(channels[3]))


@dataclass(frozen=True)
class RenderConfig:
    """Parameters for one render pass.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        step: Distance advanced per marching iteration.
        initial_step_multiplier: The first increment of a shadow ray is
            step * initial_step_multiplier, which moves it off the surface it
            starts on.
        dark_factor: Integer divisor applied to the R, G and B channels of a
            shadowed surface.
        sky_color: RGBA color of pixels whose primary ray hits nothing.
        max_march_distance: Distance budget of every ray.
    """

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    step: float = DEFAULT_STEP
    initial_step_multiplier: float = DEFAULT_INITIAL_STEP_MULTIPLIER
    dark_factor: int = DEFAULT_DARK_FACTOR
    sky_color: Color = DEFAULT_SKY_COLOR
    max_march_distance: float = DEFAULT_MAX_MARCH_DISTANCE

    def __post_init__(self) -> None:
        """Reject configurations that cannot produce a valid image.

        Raises:
            ValueError: If any parameter is out of range.
        """
        for name in ("width", "height", "dark_factor"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise ValueError(f"{name} must be an integer, got {value!r}")
            object.__setattr__(self, name, int(value))
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Image dimensions must be positive, got {self.width}x{self.height}"
            )
        for name in ("step", "initial_step_multiplier", "max_march_distance"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0.0:
                raise ValueError(f"{name} must be a positive finite number, got {value}")
        if self.dark_factor < 1:
            raise ValueError(f"dark_factor must be at least 1, got {self.dark_factor}")
        # frozen dataclass: bypass __setattr__ to store the normalized color
        object.__setattr__(self, "sky_color", make_color(self.sky_color))

    @property
    def initial_shadow_step(self) -> float:
        """First increment of a shadow ray."""
        return self.step * self.initial_step_multiplier
