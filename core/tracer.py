"""Whitted-style tracing: nearest hit, Phong shading with hard shadows, and
the reflection/refraction bounce chains.

Every function takes the scene explicitly so that a render works on one
consistent snapshot.
"""
from core.math import Vec3, Ray
from core.material import HitInfo
from core.light import Light, attenuation
from core.scene import Scene

# offset of the shading point along its normal (shadow acne)
SHADE_EPSILON = 1e-5
# offset of bounce ray origins along their new direction
BOUNCE_EPSILON = 1e-3
# an occluder must be at least this much closer to the light than the point
SHADOW_MARGIN = 1e-6
# occluder-to-light must be this parallel to point-to-light (rules out hits behind the light)
SHADOW_PARALLEL = 0.999
# per-bounce weight gate
BOUNCE_WEIGHT = 0.5


def intersect_scene(scene: Scene, ray: Ray) -> HitInfo:
    closest = HitInfo.miss()
    for primitive in scene.primitives():
        hit_info = primitive.intersect(ray)
        if hit_info.hit and 0.0 <= hit_info.t < closest.t:
            closest = hit_info
    return closest


def in_shadow(scene: Scene, point: Vec3, light: Light, to_light: Vec3) -> bool:
    """True when something lies strictly between ``point`` and the light."""
    shadow_hit = intersect_scene(scene, Ray(point, to_light))
    if not shadow_hit.hit:
        return False

    point_to_light = (light.position - point).length()
    occluder_to_light = light.position - shadow_hit.position
    between = point_to_light - occluder_to_light.length() >= SHADOW_MARGIN
    in_front_of_light = occluder_to_light.normalize().dot(to_light) > SHADOW_PARALLEL
    return between and in_front_of_light


def shade(scene: Scene, ray: Ray, light: Light, hit_info: HitInfo) -> Vec3:
    """Diffuse and specular contribution of one light at a hit (no ambient)."""
    material = scene.get_material(hit_info.material_index)
    normal = hit_info.normal
    point = hit_info.position + normal * SHADE_EPSILON

    hit_to_light = (light.position - point).normalize()
    view_dir = (point - ray.origin).normalize()
    reflect_dir = view_dir.reflect(normal).normalize()

    diffuse_term = max(0.0, normal.dot(hit_to_light))
    specular_term = max(0.0, reflect_dir.dot(hit_to_light)) ** material.glossiness

    color = material.diffuse * light.color * diffuse_term
    color = color / attenuation(light)
    color += material.specular * light.color * specular_term

    if in_shadow(scene, point, light, hit_to_light):
        return Vec3(0, 0, 0)
    return color


def trace_for_each_light(scene: Scene, ray: Ray, hit_info: HitInfo) -> Vec3:
    if not hit_info.hit:
        return Vec3(0, 0, 0)

    color = scene.get_material(hit_info.material_index).ambient
    for light in scene.lights:
        color += shade(scene, ray, light, hit_info)
    return color


def fresnel_reflectance(incident: Vec3, normal: Vec3, power: float) -> float:
    return max(0.0, 1.0 - (-incident).dot(normal)) ** power


def reflection_chain(scene: Scene, ray: Ray, primary: HitInfo, follow_bounces: bool = False) -> Vec3:
    """Accumulated color of up to ``scene.reflection_count`` mirror bounces.

    Unless ``follow_bounces`` is set every bounce mirrors the camera ray's
    direction about the current normal, not the previous bounce's direction.
    """
    color = Vec3(0, 0, 0)
    weight = 1.0
    hit_info = primary
    incident = ray.direction

    for _ in range(scene.reflection_count):
        if not hit_info.hit:
            break
        material = scene.get_material(hit_info.material_index)
        if not material.is_reflective:
            break
        weight *= BOUNCE_WEIGHT

        direction = incident.reflect(hit_info.normal)
        fresnel = 1.0
        if material.is_refractive:
            fresnel = fresnel_reflectance(incident, hit_info.normal, scene.fresnel_power)

        bounce = Ray(hit_info.position + direction * BOUNCE_EPSILON, direction)
        hit_info = intersect_scene(scene, bounce)
        color += trace_for_each_light(scene, bounce, hit_info) * (weight * fresnel)

        if follow_bounces:
            incident = bounce.direction
    return color


def refraction_chain(scene: Scene, ray: Ray, primary: HitInfo, follow_bounces: bool = False) -> Vec3:
    """Accumulated color of up to ``scene.refraction_count`` transmitted bounces.

    The chain ends at the first miss, non-refractive surface or total
    internal reflection. Like ``reflection_chain`` it refracts the camera
    ray's direction unless ``follow_bounces`` is set.
    """
    color = Vec3(0, 0, 0)
    weight = 1.0
    hit_info = primary
    incident = ray.direction

    for _ in range(scene.refraction_count):
        if not hit_info.hit:
            break
        material = scene.get_material(hit_info.material_index)
        if not material.is_refractive:
            break
        weight *= BOUNCE_WEIGHT

        direction = incident.refract(hit_info.normal, material.refractivity)
        if direction is None:
            break

        transmittance = 1.0
        if material.is_reflective:
            transmittance = 1.0 - fresnel_reflectance(incident, hit_info.normal, scene.fresnel_power)

        bounce = Ray(hit_info.position + direction * BOUNCE_EPSILON, direction)
        hit_info = intersect_scene(scene, bounce)
        color += trace_for_each_light(scene, bounce, hit_info) * (weight * transmittance)

        if follow_bounces:
            incident = bounce.direction
    return color


def trace(scene: Scene, ray: Ray, follow_bounces: bool = False) -> Vec3:
    hit_info = intersect_scene(scene, ray)
    color = trace_for_each_light(scene, ray, hit_info)
    color += reflection_chain(scene, ray, hit_info, follow_bounces)
    color += refraction_chain(scene, ray, hit_info, follow_bounces)
    return color
