import math
import numpy as np
from core.math import Vec3, Ray


class Camera:
    def __init__(self,
                 vfov: float = 60.0,   # vertical FOV (deg)
                 origin: Vec3 = None):
        """Pinhole camera looking down -z."""
        self.origin = origin if origin is not None else Vec3(0, 0, 0)
        self.vfov = vfov
        self.half_height = math.tan(math.radians(vfov) / 2)

    def ray_directions(self, width: int, height: int) -> np.ndarray:
        """Unnormalized direction of every pixel's ray, shape (height, width, 3)."""
        aspect = width / height
        xs = (2.0 * ((np.arange(width, dtype=np.float64) + 0.5) / width) - 1.0) * self.half_height * aspect
        ys = (1.0 - 2.0 * ((np.arange(height, dtype=np.float64) + 0.5) / height)) * self.half_height

        xx, yy = np.meshgrid(xs, ys)
        directions = np.empty((height, width, 3), dtype=np.float64)
        directions[..., 0] = xx
        directions[..., 1] = yy
        directions[..., 2] = -1.0
        return directions

    def get_ray(self, x: int, y: int, width: int, height: int) -> Ray:
        aspect = width / height
        direction = Vec3((2.0 * ((x + 0.5) / width) - 1.0) * self.half_height * aspect,
                         (1.0 - 2.0 * ((y + 0.5) / height)) * self.half_height,
                         -1.0)
        return Ray(self.origin, direction)
