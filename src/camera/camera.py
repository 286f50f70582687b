# camera/camera.py
import math
import random
from core.vector import Vector3
from core.ray import Ray, RAY_EPSILON
from core.transform import Transformation
from core.utils import random_in_unit_disk


class Camera:
    """
    Thin-lens camera. In the local frame x points right, y up and the camera
    looks down -z; the transformation places it in the world.
    """
    def __init__(self, aspect_ratio: float, fov: float, focal_dist: float = 1.0,
                 lens_radius: float = 0.0, transformation: Transformation = None):
        self.aspect_ratio = aspect_ratio
        self.fov = fov  # Vertical field of view, in radians
        self.focal_dist = focal_dist  # Distance to the plane in focus
        self.lens_radius = lens_radius
        self.transformation = transformation if transformation is not None else Transformation.identity()

    @staticmethod
    def looking_at(position: Vector3, target: Vector3, up: Vector3, aspect_ratio: float, fov: float,
                   aperture: float = 0.0, focus_dist: float = None) -> "Camera":
        if focus_dist is None:
            focus_dist = (target - position).length()
        return Camera(aspect_ratio, fov, focus_dist, aperture / 2.0,
                      Transformation.lookat(position, target, up))

    def get_ray(self, u: float, v: float, rng: random.Random) -> Ray:
        """
        Ray through the image point (u, v) in [0, 1]^2, u left to right and
        v bottom to top, jittered over the lens for depth of field.
        """
        tan_fov = math.tan(0.5 * self.fov)

        origin = Vector3(0.0, 0.0, 0.0)
        if self.lens_radius > 0.0:
            origin = random_in_unit_disk(rng) * self.lens_radius

        target = Vector3((2.0 * u - 1.0) * tan_fov * self.focal_dist * self.aspect_ratio,
                         (2.0 * v - 1.0) * tan_fov * self.focal_dist,
                         -self.focal_dist)
        direction = (target - origin).normalize()

        return Ray(self.transformation.transform_point(origin),
                   self.transformation.transform_vector(direction),
                   RAY_EPSILON, math.inf)
