import math
from abc import ABC, abstractmethod
from core.math import Vec3, Ray
from core.material import HitInfo

# |n . d| at or below this counts as a ray parallel to a plane
PARALLEL_EPSILON = 1e-6


class Hittable(ABC):
    @abstractmethod
    def intersect(self, ray: Ray) -> HitInfo:
        pass


class Sphere(Hittable):
    def __init__(self, radius: float, center: Vec3, material_index: int):
        self.radius = float(radius)
        self.center = center
        self.material_index = int(material_index)

    def intersect(self, ray: Ray) -> HitInfo:
        """Nearest positive root of |o - c + t*d|^2 = r^2.

        The normal is flipped when the ray starts inside the sphere so that it
        always faces the incoming ray.
        """
        oc = ray.origin - self.center
        a = ray.direction.dot(ray.direction)
        b = 2.0 * ray.direction.dot(oc)
        c = oc.dot(oc) - self.radius * self.radius
        det = b * b - 4.0 * a * c
        if det <= 0.0:
            return HitInfo.miss()

        sqrt_det = math.sqrt(det)
        t_near = (-b - sqrt_det) / (2.0 * a)
        t_far = (-b + sqrt_det) / (2.0 * a)
        if t_near > 0.0:
            t = t_near
        elif t_far > 0.0:
            t = t_far
        else:
            return HitInfo.miss()

        position = ray.point_at_parameter(t)
        normal = (position - self.center).normalize()
        if oc.length() < self.radius:
            normal = -normal
        return HitInfo(True, position, normal, self.material_index, t)

    def __repr__(self):
        return f"Sphere(radius={self.radius}, center={self.center!r}, material_index={self.material_index})"


class Plane(Hittable):
    def __init__(self, normal: Vec3, d: float, material_index: int):
        # points p on the plane satisfy dot(normal, p) + d == 0
        self.normal = normal
        self.d = float(d)
        self.material_index = int(material_index)

    def intersect(self, ray: Ray) -> HitInfo:
        denom = self.normal.dot(ray.direction)
        if abs(denom) <= PARALLEL_EPSILON:
            return HitInfo.miss()

        t = -(self.d + self.normal.dot(ray.origin)) / denom
        if t <= 0.0:
            return HitInfo.miss()

        return HitInfo(True, ray.point_at_parameter(t), self.normal, self.material_index, t)

    def __repr__(self):
        return f"Plane(normal={self.normal!r}, d={self.d}, material_index={self.material_index})"
