# geometry/rect.py
import math
from enum import Enum
from typing import Optional
from pathtracer.core.vector import Vector3
from pathtracer.core.ray import Ray
from pathtracer.core.aabb import AABB
from pathtracer.geometry.hittable import Hittable, HitRecord
from pathtracer.geometry.world import HittableList

# Rectangles are flat, so their boxes are padded along the normal axis.
PADDING = 0.0001


class Plane(Enum):
    """
    Axis-aligned planes as (first in-plane axis, second in-plane axis, normal axis).
    """
    XY = (0, 1, 2)
    XZ = (0, 2, 1)
    YZ = (1, 2, 0)


def _point(plane: Plane, a: float, b: float, k: float) -> Vector3:
    coords = [0.0, 0.0, 0.0]
    a_axis, b_axis, k_axis = plane.value
    coords[a_axis] = a
    coords[b_axis] = b
    coords[k_axis] = k
    return Vector3(*coords)


class AARect(Hittable):
    """
    Axis-aligned rectangle spanning [a0, a1] x [b0, b1] on the plane's two
    in-plane axes, at offset k along its normal axis.
    """
    def __init__(self, plane: Plane, a0: float, a1: float, b0: float, b1: float,
                 k: float, material):
        self.plane = plane
        self.a0, self.a1 = min(a0, a1), max(a0, a1)
        self.b0, self.b1 = min(b0, b1), max(b0, b1)
        self.k = k
        self.material = material
        self.outward_normal = _point(plane, 0.0, 0.0, 1.0)
        self.area = (self.a1 - self.a0) * (self.b1 - self.b0)

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> Optional[HitRecord]:
        a_axis, b_axis, k_axis = self.plane.value
        d = ray.direction[k_axis]
        if d == 0.0:
            return None
        t = (self.k - ray.origin[k_axis]) / d
        if t < t_min or t > t_max:
            return None

        a = ray.origin[a_axis] + t * ray.direction[a_axis]
        b = ray.origin[b_axis] + t * ray.direction[b_axis]
        if a < self.a0 or a > self.a1 or b < self.b0 or b > self.b1:
            return None

        rec = HitRecord()
        rec.u = (a - self.a0) / (self.a1 - self.a0)
        rec.v = (b - self.b0) / (self.b1 - self.b0)
        rec.t = t
        rec.p = ray.at(t)
        rec.set_face_normal(ray, self.outward_normal)
        rec.material = self.material
        return rec

    def bounding_box(self, time0: float = 0.0, time1: float = 1.0) -> AABB:
        return AABB(_point(self.plane, self.a0, self.b0, self.k - PADDING),
                    _point(self.plane, self.a1, self.b1, self.k + PADDING))

    def is_samplable(self) -> bool:
        return True

    def pdf_value(self, origin: Vector3, direction: Vector3) -> float:
        rec = self.hit(Ray(origin, direction), 0.001, math.inf)
        if rec is None:
            return 0.0
        distance_squared = rec.t * rec.t * direction.length_squared()
        cosine = abs(direction.dot(rec.normal)) / direction.length()
        if cosine == 0.0:
            return 0.0
        return distance_squared / (cosine * self.area)

    def random(self, origin: Vector3, rng) -> Vector3:
        target = _point(self.plane,
                        rng.uniform(self.a0, self.a1),
                        rng.uniform(self.b0, self.b1),
                        self.k)
        return target - origin


class Box(Hittable):
    """
    Axis-aligned box made of six rectangles sharing one material.
    """
    def __init__(self, p0: Vector3, p1: Vector3, material):
        self.box_min = Vector3(min(p0.x, p1.x), min(p0.y, p1.y), min(p0.z, p1.z))
        self.box_max = Vector3(max(p0.x, p1.x), max(p0.y, p1.y), max(p0.z, p1.z))
        lo, hi = self.box_min, self.box_max

        self.sides = HittableList([
            AARect(Plane.XY, lo.x, hi.x, lo.y, hi.y, hi.z, material),
            AARect(Plane.XY, lo.x, hi.x, lo.y, hi.y, lo.z, material),
            AARect(Plane.XZ, lo.x, hi.x, lo.z, hi.z, hi.y, material),
            AARect(Plane.XZ, lo.x, hi.x, lo.z, hi.z, lo.y, material),
            AARect(Plane.YZ, lo.y, hi.y, lo.z, hi.z, hi.x, material),
            AARect(Plane.YZ, lo.y, hi.y, lo.z, hi.z, lo.x, material),
        ])

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> Optional[HitRecord]:
        return self.sides.hit(ray, t_min, t_max, rng)

    def bounding_box(self, time0: float = 0.0, time1: float = 1.0) -> AABB:
        return AABB(self.box_min, self.box_max)

    def is_samplable(self) -> bool:
        return True

    def pdf_value(self, origin: Vector3, direction: Vector3) -> float:
        # Averaged over the faces, matching random() picking a face uniformly.
        return self.sides.pdf_value(origin, direction)

    def random(self, origin: Vector3, rng) -> Vector3:
        return self.sides.random(origin, rng)
