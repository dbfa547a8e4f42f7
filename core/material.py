from dataclasses import dataclass, field
from core.math import Vec3

# t reported by a miss; any real hit is closer than this.
T_MAX = 1.0e6


class Material:
    def __init__(self,
                 ambient: Vec3 = None,
                 diffuse: Vec3 = None,
                 specular: Vec3 = None,
                 glossiness: float = 0.0,
                 reflectivity: float = 0.0,
                 refractivity: float = 0.0):
        """
        ambient: color added regardless of lighting or shadowing
        diffuse: Lambertian color, scaled by the light color
        specular: Phong highlight color
        glossiness: Phong exponent (>= 0)
        reflectivity: > 0 enables the reflection bounce
        refractivity: index of refraction; values <= 1 disable refraction
        """
        self.ambient = ambient if ambient is not None else Vec3()
        self.diffuse = diffuse if diffuse is not None else Vec3()
        self.specular = specular if specular is not None else Vec3()
        self.glossiness = float(glossiness)
        self.reflectivity = float(reflectivity)
        self.refractivity = float(refractivity)

    @property
    def is_reflective(self) -> bool:
        return self.reflectivity > 0.0

    @property
    def is_refractive(self) -> bool:
        return self.refractivity > 1.0

    def __repr__(self):
        return (f"Material(ambient={self.ambient!r}, diffuse={self.diffuse!r}, "
                f"specular={self.specular!r}, glossiness={self.glossiness}, "
                f"reflectivity={self.reflectivity}, refractivity={self.refractivity})")


@dataclass(frozen=True)
class HitInfo:
    hit: bool
    position: Vec3 = field(default_factory=Vec3)
    normal: Vec3 = field(default_factory=Vec3)
    material_index: int = 0
    t: float = T_MAX

    @classmethod
    def miss(cls) -> "HitInfo":
        return cls(hit=False)
