from dataclasses import dataclass
from typing import Union
from core.math import Vec3, PI


@dataclass
class DirectionalLight:
    position: Vec3
    color: Vec3


@dataclass
class PointLight:
    """Light whose diffuse contribution falls off by 4*pi*radius.

    The radius is not a visual size; it only feeds the attenuation term.
    A radius of zero or less disables the falloff.
    """
    position: Vec3
    color: Vec3
    radius: float = 1.0


Light = Union[DirectionalLight, PointLight]


def attenuation(light: Light) -> float:
    """Divisor applied to the diffuse term of ``light``."""
    if isinstance(light, PointLight):
        if light.radius <= 0.0:
            return 1.0
        return 4.0 * PI * light.radius
    if isinstance(light, DirectionalLight):
        return 1.0
    raise TypeError(f"Unknown light type: {type(light).__name__}")
