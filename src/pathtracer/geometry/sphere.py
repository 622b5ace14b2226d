import math
from typing import Optional
from pathtracer.core.vector import Vector3
from pathtracer.core.ray import Ray
from pathtracer.core.aabb import AABB
from pathtracer.core.onb import ONB
from pathtracer.core.utils import random_to_sphere
from pathtracer.geometry.hittable import Hittable, HitRecord


def get_sphere_uv(p: Vector3):
    """
    Texture coordinates of a point p on the unit sphere centered at the origin.
    u follows the angle around the Y axis from X=-1, v the angle from Y=-1.
    """
    theta = math.acos(max(-1.0, min(1.0, -p.y)))
    phi = math.atan2(-p.z, p.x) + math.pi
    return phi / (2 * math.pi), theta / math.pi


class Sphere(Hittable):
    """
    Represents a sphere defined by its center, radius, and material.
    """
    def __init__(self, center: Vector3, radius: float, material):
        self.radius = radius
        self.material = material
        self._center = center

    def center(self, time: float) -> Vector3:
        return self._center

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> Optional[HitRecord]:
        center = self.center(ray.time)
        oc = ray.origin - center
        a = ray.direction.dot(ray.direction)
        half_b = oc.dot(ray.direction)
        c = oc.dot(oc) - self.radius * self.radius
        discriminant = half_b * half_b - a * c

        if discriminant < 0:
            return None

        sqrt_disc = math.sqrt(discriminant)
        # Find the nearest root that lies in the acceptable range
        root = (-half_b - sqrt_disc) / a
        if root < t_min or root > t_max:
            root = (-half_b + sqrt_disc) / a
            if root < t_min or root > t_max:
                return None

        rec = HitRecord()
        rec.t = root
        rec.p = ray.at(rec.t)
        outward_normal = (rec.p - center) / self.radius
        rec.set_face_normal(ray, outward_normal)
        rec.u, rec.v = get_sphere_uv(outward_normal)
        rec.material = self.material
        return rec

    def bounding_box(self, time0: float = 0.0, time1: float = 1.0) -> AABB:
        # The bounding box of a sphere is center ± radius
        r = abs(self.radius)
        offset = Vector3(r, r, r)
        return AABB(self._center - offset, self._center + offset)

    def is_samplable(self) -> bool:
        return True

    def pdf_value(self, origin: Vector3, direction: Vector3) -> float:
        if self.hit(Ray(origin, direction), 0.001, math.inf) is None:
            return 0.0
        distance_squared = (self._center - origin).length_squared()
        cos_theta_max = math.sqrt(max(0.0, 1.0 - self.radius * self.radius / distance_squared))
        solid_angle = 2 * math.pi * (1.0 - cos_theta_max)
        if solid_angle <= 0.0:
            return 0.0
        return 1.0 / solid_angle

    def random(self, origin: Vector3, rng) -> Vector3:
        direction = self._center - origin
        uvw = ONB(direction)
        return uvw.local(random_to_sphere(rng, self.radius, direction.length_squared()))


class MovingSphere(Sphere):
    """
    Sphere whose center moves linearly from center0 at time0 to center1 at time1.
    """
    def __init__(self, center0: Vector3, center1: Vector3, time0: float, time1: float,
                 radius: float, material):
        super().__init__(center0, radius, material)
        self.center0 = center0
        self.center1 = center1
        self.time0 = time0
        self.time1 = time1

    def center(self, time: float) -> Vector3:
        if self.time1 == self.time0:
            return self.center0
        f = (time - self.time0) / (self.time1 - self.time0)
        return self.center0 + (self.center1 - self.center0) * f

    def bounding_box(self, time0: float = 0.0, time1: float = 1.0) -> AABB:
        r = abs(self.radius)
        offset = Vector3(r, r, r)
        c0 = self.center(time0)
        c1 = self.center(time1)
        return AABB.surrounding_box(AABB(c0 - offset, c0 + offset),
                                    AABB(c1 - offset, c1 + offset))

    # Light sampling has no ray time to place the center, so a moving sphere
    # cannot stand in for a light.
    def is_samplable(self) -> bool:
        return False

    def pdf_value(self, origin: Vector3, direction: Vector3) -> float:
        return 0.0

    def random(self, origin: Vector3, rng) -> Vector3:
        raise NotImplementedError("MovingSphere cannot be sampled as a light.")
