# camera/camera.py
import math
from pathtracer.core.errors import DegenerateCameraError
from pathtracer.core.vector import Vector3
from pathtracer.core.ray import Ray
from pathtracer.core.utils import random_in_unit_disk


class Camera:
    """
    Thin-lens camera with depth of field and a shutter interval for motion blur.

    vfov is the vertical field of view in degrees. With aperture 0 the camera
    is a pinhole and every ray starts at look_from.
    """
    def __init__(self, look_from: Vector3, look_at: Vector3, vup: Vector3,
                 vfov: float, aspect_ratio: float, aperture: float = 0.0,
                 focus_dist: float = 10.0, time0: float = 0.0, time1: float = 0.0):
        if aspect_ratio <= 0:
            raise DegenerateCameraError(f"Aspect ratio must be positive, got {aspect_ratio}")
        if focus_dist <= 0:
            raise DegenerateCameraError(f"Focus distance must be positive, got {focus_dist}")

        self.look_from = look_from
        self.look_at = look_at
        self.vup = vup
        self.vfov = vfov
        self.aspect_ratio = aspect_ratio
        self.aperture = aperture  # Lens aperture for depth of field
        self.focus_dist = focus_dist  # Distance to focus plane
        self.lens_radius = aperture / 2.0
        self.time0 = time0
        self.time1 = time1
        self.update_camera()

    def update_camera(self):
        """Computes the camera's basis vectors and viewport."""
        view = self.look_from - self.look_at
        if view.near_zero():
            raise DegenerateCameraError("look_from and look_at coincide; no view direction.")
        self.w = view.normalize()

        side = self.vup.cross(self.w)
        if side.near_zero():
            raise DegenerateCameraError(
                f"Up vector {self.vup!r} is parallel to the view direction {(-self.w)!r}.")
        self.u = side.normalize()
        self.v = self.w.cross(self.u)

        # Compute viewport dimensions based on fov
        viewport_height = 2.0 * math.tan(math.radians(self.vfov) / 2)
        viewport_width = self.aspect_ratio * viewport_height

        # Scale by focus distance
        self.horizontal = self.u * (viewport_width * self.focus_dist)
        self.vertical = self.v * (viewport_height * self.focus_dist)

        self.lower_left_corner = (self.look_from -
                                  self.horizontal * 0.5 -
                                  self.vertical * 0.5 -
                                  self.w * self.focus_dist)

    def get_ray(self, s: float, t: float, rng) -> Ray:
        """Generates a ray through viewport coordinates (s, t) in [0, 1]^2."""
        target = self.lower_left_corner + self.horizontal * s + self.vertical * t
        time = self.time0 if self.time1 == self.time0 else rng.uniform(self.time0, self.time1)

        if self.lens_radius <= 0:
            return Ray(self.look_from, target - self.look_from, time)

        # Generate random point on lens
        rd = random_in_unit_disk(rng) * self.lens_radius
        offset = self.u * rd.x + self.v * rd.y

        origin = self.look_from + offset
        return Ray(origin, target - origin, time)
