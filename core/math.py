import math
import numpy as np

PI = math.pi


class Vec3:
    def __init__(self, x=0.0, y=0.0, z=0.0):
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    def __add__(self, other):
        return Vec3(self.x + other.x,
                    self.y + other.y,
                    self.z + other.z)

    def __sub__(self, other):
        return Vec3(self.x - other.x,
                    self.y - other.y,
                    self.z - other.z)

    def __mul__(self, t):
        # scalar or component-wise (Hadamard) product
        if isinstance(t, Vec3):
            return Vec3(self.x * t.x,
                        self.y * t.y,
                        self.z * t.z)
        return Vec3(self.x * t, self.y * t, self.z * t)

    __rmul__ = __mul__

    def __truediv__(self, t):
        return Vec3(self.x / t, self.y / t, self.z / t)

    def __neg__(self):
        return Vec3(-self.x, -self.y, -self.z)

    def __eq__(self, other):
        if not isinstance(other, Vec3):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z

    __hash__ = None

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def dot(self, other):
        return self.x * other.x + self.y * other.y + self.z * other.z

    def length(self):
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalize(self):
        l = self.length()
        if l == 0:
            return Vec3(0, 0, 0)
        return self / l

    def reflect(self, normal):
        # r = v - 2 * dot(v, n) * n
        return self - normal * (2 * self.dot(normal))

    def refract(self, normal, ior):
        """Snell refraction of this (unit) direction through a surface.

        ``normal`` is the geometric normal of the surface and ``ior`` the index
        of refraction on its far side. A negative cosine means the ray enters
        the medium; otherwise it is leaving, so the indices swap and the normal
        is flipped. Returns None on total internal reflection.
        """
        cosi = max(-1.0, min(1.0, self.dot(normal)))
        etai, etat = 1.0, ior
        n = normal
        if cosi < 0:
            cosi = -cosi
        else:
            etai, etat = etat, etai
            n = -normal
        eta = etai / etat
        k = 1.0 - eta * eta * (1.0 - cosi * cosi)
        if k < 0:
            return None
        return self * eta + n * (eta * cosi - math.sqrt(k))

    def to_np(self):
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def __repr__(self):
        return f"Vec3({self.x:.3f}, {self.y:.3f}, {self.z:.3f})"


def to_argb(color: Vec3) -> int:
    """Pack a color into a 32-bit ARGB word with opaque alpha."""
    r = int(max(0.0, min(1.0, color.x)) * 255)
    g = int(max(0.0, min(1.0, color.y)) * 255)
    b = int(max(0.0, min(1.0, color.z)) * 255)
    return 0xFF000000 | r << 16 | g << 8 | b


class Ray:
    def __init__(self, origin: Vec3, direction: Vec3):
        self.origin = origin
        self.direction = direction.normalize()

    def point_at_parameter(self, t):
        return self.origin + self.direction * t

    def __repr__(self):
        return f"Ray(origin={self.origin!r}, direction={self.direction!r})"
