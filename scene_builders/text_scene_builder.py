"""Plain-text scene format.

::

    <reflection count>
    <refraction count>
    <fresnel power>
    #Materials
    ambient diffuse specular glossiness reflectivity refractivity
    #Lights
    position color [radius]
    #Spheres
    radius center material_index
    #Planes
    normal d material_index
    #End

Vectors are written ``x,y,z``. A light line with a radius is a point light,
one without is a directional light.
"""
from enum import Enum
from typing import List
from core.math import Vec3
from core.material import Material
from core.geometry import Plane, Sphere
from core.light import DirectionalLight, PointLight
from core.scene import Scene, SceneFormatError

MATERIALS_MARKER = "#Materials"
LIGHTS_MARKER = "#Lights"
SPHERES_MARKER = "#Spheres"
PLANES_MARKER = "#Planes"
END_MARKER = "#End"


class _Section(Enum):
    HEADER = 0
    MATERIAL = 1
    LIGHT = 2
    SPHERE = 3
    PLANE = 4
    END = 5


# section -> (marker that ends it, section that follows)
_TRANSITIONS = {
    _Section.HEADER: (MATERIALS_MARKER, _Section.MATERIAL),
    _Section.MATERIAL: (LIGHTS_MARKER, _Section.LIGHT),
    _Section.LIGHT: (SPHERES_MARKER, _Section.SPHERE),
    _Section.SPHERE: (PLANES_MARKER, _Section.PLANE),
    _Section.PLANE: (END_MARKER, _Section.END),
}


def _format_float(value: float) -> str:
    return repr(float(value))


def _format_vec(v: Vec3) -> str:
    return ",".join(_format_float(c) for c in v)


def scene_to_string(scene: Scene) -> str:
    lines = [
        str(scene.reflection_count),
        str(scene.refraction_count),
        _format_float(scene.fresnel_power),
        MATERIALS_MARKER,
    ]
    for m in scene.materials:
        lines.append(" ".join([_format_vec(m.ambient), _format_vec(m.diffuse), _format_vec(m.specular),
                               _format_float(m.glossiness), _format_float(m.reflectivity),
                               _format_float(m.refractivity)]))

    lines.append(LIGHTS_MARKER)
    for light in scene.lights:
        fields = [_format_vec(light.position), _format_vec(light.color)]
        if isinstance(light, PointLight):
            fields.append(_format_float(light.radius))
        lines.append(" ".join(fields))

    lines.append(SPHERES_MARKER)
    for s in scene.spheres:
        lines.append(" ".join([_format_float(s.radius), _format_vec(s.center), str(s.material_index)]))

    lines.append(PLANES_MARKER)
    for p in scene.planes:
        lines.append(" ".join([_format_vec(p.normal), _format_float(p.d), str(p.material_index)]))

    lines.append(END_MARKER)
    return "\n".join(lines) + "\n"


class TextSceneBuilder:
    """Builds a fresh Scene from text produced by ``scene_to_string``."""

    def __init__(self, text: str):
        self.text = text

    def build_scene(self) -> Scene:
        lines = self.text.splitlines()
        if len(lines) < 3:
            raise SceneFormatError(f"expected 3 header lines, got {len(lines)}")

        scene = Scene(reflection_count=self._parse(int, lines[0], 1),
                      refraction_count=self._parse(int, lines[1], 2),
                      fresnel_power=self._parse(float, lines[2], 3))

        section = _Section.HEADER
        for line_no, raw in enumerate(lines[3:], start=4):
            line = raw.strip()
            if not line:
                continue
            if section == _Section.END:
                break

            marker, following = _TRANSITIONS[section]
            if line.startswith(marker):
                section = following
                continue

            fields = line.split()
            if section == _Section.MATERIAL:
                scene.add_material(self._parse_material(fields, line_no))
            elif section == _Section.LIGHT:
                scene.add_light(self._parse_light(fields, line_no))
            elif section == _Section.SPHERE:
                scene.add_sphere(self._parse_sphere(fields, line_no))
            elif section == _Section.PLANE:
                scene.add_plane(self._parse_plane(fields, line_no))
            else:
                raise SceneFormatError(f"line {line_no}: expected {MATERIALS_MARKER}, got {line!r}")

        if section != _Section.END:
            raise SceneFormatError(f"scene text ended before {END_MARKER}")
        return scene

    @staticmethod
    def _parse(kind, text: str, line_no: int):
        try:
            return kind(text.strip())
        except ValueError as e:
            raise SceneFormatError(f"line {line_no}: {e}") from e

    @classmethod
    def _parse_vec(cls, text: str, line_no: int) -> Vec3:
        parts = text.split(",")
        if len(parts) != 3:
            raise SceneFormatError(f"line {line_no}: expected x,y,z, got {text!r}")
        return Vec3(*(cls._parse(float, p, line_no) for p in parts))

    @staticmethod
    def _expect(fields: List[str], counts, what: str, line_no: int):
        if len(fields) not in counts:
            raise SceneFormatError(f"line {line_no}: {what} needs {' or '.join(map(str, counts))} fields, "
                                   f"got {len(fields)}")

    @classmethod
    def _parse_material(cls, fields: List[str], line_no: int) -> Material:
        cls._expect(fields, (6,), "material", line_no)
        return Material(ambient=cls._parse_vec(fields[0], line_no),
                        diffuse=cls._parse_vec(fields[1], line_no),
                        specular=cls._parse_vec(fields[2], line_no),
                        glossiness=cls._parse(float, fields[3], line_no),
                        reflectivity=cls._parse(float, fields[4], line_no),
                        refractivity=cls._parse(float, fields[5], line_no))

    @classmethod
    def _parse_light(cls, fields: List[str], line_no: int):
        cls._expect(fields, (2, 3), "light", line_no)
        position = cls._parse_vec(fields[0], line_no)
        color = cls._parse_vec(fields[1], line_no)
        if len(fields) == 3:
            return PointLight(position, color, cls._parse(float, fields[2], line_no))
        return DirectionalLight(position, color)

    @classmethod
    def _parse_sphere(cls, fields: List[str], line_no: int) -> Sphere:
        cls._expect(fields, (3,), "sphere", line_no)
        return Sphere(cls._parse(float, fields[0], line_no),
                      cls._parse_vec(fields[1], line_no),
                      cls._parse(int, fields[2], line_no))

    @classmethod
    def _parse_plane(cls, fields: List[str], line_no: int) -> Plane:
        cls._expect(fields, (3,), "plane", line_no)
        return Plane(cls._parse_vec(fields[0], line_no),
                     cls._parse(float, fields[1], line_no),
                     cls._parse(int, fields[2], line_no))
