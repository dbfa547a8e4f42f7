import threading
from typing import Callable, List, Optional
from dataclasses import dataclass
from core.material import Material
from core.geometry import Sphere, Plane
from core.light import Light


@dataclass
class RenderSettings:
    width: int = 840
    height: int = 680
    workers: int = 4
    fov: float = 60.0
    output_scale: float = 1.0
    output_path: str = "output.bmp"
    follow_bounces: bool = False
    progress_interval: float = 0.05


class SceneFormatError(ValueError):
    """Raised when serialized scene text cannot be parsed."""


class Scene:
    def __init__(self,
                 reflection_count: int = 2,
                 refraction_count: int = 2,
                 fresnel_power: float = 5.0):
        self.materials: List[Material] = []
        self.lights: List[Light] = []
        self.spheres: List[Sphere] = []
        self.planes: List[Plane] = []
        self.reflection_count = int(reflection_count)
        self.refraction_count = int(refraction_count)
        self.fresnel_power = float(fresnel_power)

    def add_material(self, material: Material) -> int:
        self.materials.append(material)
        return len(self.materials) - 1

    def add_light(self, light: Light):
        self.lights.append(light)

    def add_sphere(self, sphere: Sphere):
        self.spheres.append(sphere)

    def add_plane(self, plane: Plane):
        self.planes.append(plane)

    def get_material(self, index: int) -> Material:
        return self.materials[index]

    def get_light(self, index: int) -> Light:
        return self.lights[index]

    def get_sphere(self, index: int) -> Sphere:
        return self.spheres[index]

    def get_plane(self, index: int) -> Plane:
        return self.planes[index]

    @property
    def material_count(self) -> int:
        return len(self.materials)

    @property
    def light_count(self) -> int:
        return len(self.lights)

    @property
    def sphere_count(self) -> int:
        return len(self.spheres)

    @property
    def plane_count(self) -> int:
        return len(self.planes)

    def primitives(self):
        """Spheres first, then planes: the order intersection tests run in."""
        yield from self.spheres
        yield from self.planes


class SceneStore:
    """Holds the scene renders read from.

    The scene is built lazily by ``factory`` on first access. Replacing it is
    a single reference swap, so a render that took a snapshot keeps working on
    a complete scene while a new one is loaded.
    """

    def __init__(self, factory: Callable[[], Scene]):
        self._factory = factory
        self._scene: Optional[Scene] = None
        self._lock = threading.Lock()

    @property
    def current(self) -> Scene:
        with self._lock:
            if self._scene is None:
                self._scene = self._factory()
            return self._scene

    def publish(self, scene: Scene) -> Scene:
        """Install a fully built scene and return the one it replaced."""
        with self._lock:
            previous, self._scene = self._scene, scene
        return previous
