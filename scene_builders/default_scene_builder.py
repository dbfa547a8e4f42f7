from core.math import Vec3
from core.material import Material
from core.geometry import Plane, Sphere
from core.light import DirectionalLight, PointLight
from core.scene import Scene


class DefaultSceneBuilder:
    """Three spheres inside an open room, lit from the camera and from the upper left."""

    def __init__(self):
        # room walls sit at these distances from the origin
        self.back_wall = 10.0
        self.front_wall = 2.0
        self.floor = 2.0
        self.ceiling = 4.0
        self.side_wall = 4.0

        self.reflection_count = 2
        self.refraction_count = 2
        self.fresnel_power = 5.0

    def build_scene(self) -> Scene:
        scene = Scene(reflection_count=self.reflection_count,
                      refraction_count=self.refraction_count,
                      fresnel_power=self.fresnel_power)

        materials = self._create_materials(scene)
        self._create_spheres(scene, materials)
        self._create_walls(scene, materials)
        self._create_lighting(scene)

        return scene

    def _create_materials(self, scene: Scene) -> dict:
        """Register the palette and return name -> material index."""
        palette = {
            # index 0 stays black
            'none': Material(),
            'red': Material(
                ambient=Vec3(0.3, 0.1, 0.1), diffuse=Vec3(0.9, 0.3, 0.3), specular=Vec3(0.9, 0.3, 0.3),
                glossiness=128.0, reflectivity=0.5
            ),
            'blue': Material(
                ambient=Vec3(0.1, 0.2, 0.4), diffuse=Vec3(0.3, 0.5, 0.9), specular=Vec3(0.3, 0.5, 0.9),
                glossiness=64.0, reflectivity=0.5
            ),
            'wall': Material(
                ambient=Vec3(0.2, 0.2, 0.2), diffuse=Vec3(0.5, 0.5, 0.5), specular=Vec3(0.5, 0.5, 0.5),
                glossiness=1.0, reflectivity=0.5
            ),
            'glass': Material(
                ambient=Vec3(0.1, 0.1, 0.4), diffuse=Vec3(0.3, 0.3, 0.9), specular=Vec3(0.3, 0.3, 0.9),
                glossiness=24.0, reflectivity=0.5, refractivity=1.5
            ),
        }
        return {name: scene.add_material(material) for name, material in palette.items()}

    def _create_spheres(self, scene: Scene, materials: dict):
        scene.add_sphere(Sphere(2.0, Vec3(-3.0, 1.0, -9.0), materials['red']))
        scene.add_sphere(Sphere(1.7, Vec3(2.3, 0.0, -9.0), materials['blue']))
        scene.add_sphere(Sphere(0.5, Vec3(0.0, 0.0, -5.0), materials['glass']))

    def _create_walls(self, scene: Scene, materials: dict):
        """Inward-facing planes; dot(n, p) + d == 0 on each wall."""
        wall = materials['wall']
        scene.add_plane(Plane(Vec3(0, 0, 1), self.back_wall, wall))
        scene.add_plane(Plane(Vec3(0, 0, -1), self.front_wall, wall))
        scene.add_plane(Plane(Vec3(0, 1, 0), self.floor, wall))
        scene.add_plane(Plane(Vec3(0, -1, 0), self.ceiling, wall))
        scene.add_plane(Plane(Vec3(-1, 0, 0), self.side_wall, wall))
        scene.add_plane(Plane(Vec3(1, 0, 0), self.side_wall, wall))

    def _create_lighting(self, scene: Scene):
        scene.add_light(DirectionalLight(Vec3(0.0, 0.0, 0.0), Vec3(0.5, 0.5, 0.5)))
        scene.add_light(PointLight(Vec3(-2.0, 3.0, -4.0), Vec3(0.6, 0.6, 0.6), radius=0.1))
