"""Pytest configuration for ray tracer tests.

Shared fixtures build small, isolated scenes so that no test depends on the
default scene content unless it asks for it.
"""

import pytest

from core.math import Vec3
from core.material import Material
from core.geometry import Plane, Sphere
from core.light import DirectionalLight
from core.scene import Scene, RenderSettings
from scene_builders.default_scene_builder import DefaultSceneBuilder


@pytest.fixture
def matte_material():
    """Grey diffuse material with a weak, broad highlight."""
    return Material(
        ambient=Vec3(0.1, 0.1, 0.1),
        diffuse=Vec3(0.5, 0.5, 0.5),
        specular=Vec3(0.2, 0.2, 0.2),
        glossiness=1.0,
    )


@pytest.fixture
def floor_scene(matte_material):
    """A floor at y = -2 lit by a directional light straight above (0, -2, -5).

    Bounce counts are zero so only local shading contributes.
    """
    scene = Scene(reflection_count=0, refraction_count=0, fresnel_power=5.0)
    scene.add_material(matte_material)
    scene.add_plane(Plane(Vec3(0, 1, 0), 2.0, 0))
    scene.add_light(DirectionalLight(Vec3(0, 8, -5), Vec3(1, 1, 1)))
    return scene


@pytest.fixture
def mirror_room_scene():
    """Reflective floor (y = -2) and ceiling (y = 4) with one light between them."""
    scene = Scene(reflection_count=1, refraction_count=0, fresnel_power=5.0)
    scene.add_material(Material(
        ambient=Vec3(0.1, 0.1, 0.1), diffuse=Vec3(0.4, 0.4, 0.4), specular=Vec3(0.1, 0.1, 0.1),
        glossiness=8.0, reflectivity=0.5,
    ))
    scene.add_material(Material(
        ambient=Vec3(0.2, 0.05, 0.05), diffuse=Vec3(0.8, 0.2, 0.2), specular=Vec3(0.1, 0.1, 0.1),
        glossiness=8.0, reflectivity=0.5,
    ))
    scene.add_plane(Plane(Vec3(0, 1, 0), 2.0, 0))
    scene.add_plane(Plane(Vec3(0, -1, 0), 4.0, 1))
    scene.add_light(DirectionalLight(Vec3(0, 1, -3), Vec3(1, 1, 1)))
    return scene


@pytest.fixture
def glass_scene():
    """A glass sphere in front of a back wall, refraction only."""
    scene = Scene(reflection_count=0, refraction_count=1, fresnel_power=5.0)
    scene.add_material(Material(
        ambient=Vec3(0.05, 0.05, 0.05), diffuse=Vec3(0.2, 0.2, 0.2), specular=Vec3(0.5, 0.5, 0.5),
        glossiness=32.0, reflectivity=0.0, refractivity=1.5,
    ))
    scene.add_material(Material(
        ambient=Vec3(0.2, 0.2, 0.2), diffuse=Vec3(0.6, 0.6, 0.6), specular=Vec3(0.0, 0.0, 0.0),
        glossiness=1.0,
    ))
    scene.add_sphere(Sphere(1.0, Vec3(0, 0, -5), 0))
    scene.add_plane(Plane(Vec3(0, 0, 1), 10.0, 1))
    scene.add_light(DirectionalLight(Vec3(2, 2, 0), Vec3(1, 1, 1)))
    return scene


@pytest.fixture
def default_scene():
    return DefaultSceneBuilder().build_scene()


@pytest.fixture
def small_settings(tmp_path):
    """Tiny render target so pure-Python tracing stays fast."""
    return RenderSettings(width=8, height=6, workers=2, progress_interval=0.01,
                          output_path=str(tmp_path / "out.bmp"))
