# geometry/transform.py
import math
from typing import Optional
from pathtracer.core.vector import Vector3
from pathtracer.core.ray import Ray
from pathtracer.core.aabb import AABB
from pathtracer.geometry.hittable import Hittable, HitRecord


class Translate(Hittable):
    """
    Moves the wrapped object by a fixed offset.
    """
    def __init__(self, obj: Hittable, offset: Vector3):
        self.obj = obj
        self.offset = offset

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> Optional[HitRecord]:
        moved = Ray(ray.origin - self.offset, ray.direction, ray.time)
        rec = self.obj.hit(moved, t_min, t_max, rng)
        if rec is None:
            return None
        rec.p = rec.p + self.offset
        return rec

    def bounding_box(self, time0: float = 0.0, time1: float = 1.0) -> AABB:
        box = self.obj.bounding_box(time0, time1)
        return AABB(box.minimum + self.offset, box.maximum + self.offset)

    def is_samplable(self) -> bool:
        return self.obj.is_samplable()

    def pdf_value(self, origin: Vector3, direction: Vector3) -> float:
        return self.obj.pdf_value(origin - self.offset, direction)

    def random(self, origin: Vector3, rng) -> Vector3:
        return self.obj.random(origin - self.offset, rng)


class RotateY(Hittable):
    """
    Rotates the wrapped object about the Y axis by an angle in degrees.
    The rotated bounding box is precomputed from the eight corners of the original.
    """
    def __init__(self, obj: Hittable, angle: float, time0: float = 0.0, time1: float = 1.0):
        self.obj = obj
        radians = math.radians(angle)
        self.sin_theta = math.sin(radians)
        self.cos_theta = math.cos(radians)

        box = obj.bounding_box(time0, time1)
        lo = [math.inf, math.inf, math.inf]
        hi = [-math.inf, -math.inf, -math.inf]
        for i in range(2):
            for j in range(2):
                for k in range(2):
                    x = box.maximum.x if i else box.minimum.x
                    y = box.maximum.y if j else box.minimum.y
                    z = box.maximum.z if k else box.minimum.z

                    new_x = self.cos_theta * x + self.sin_theta * z
                    new_z = -self.sin_theta * x + self.cos_theta * z

                    for axis, value in enumerate((new_x, y, new_z)):
                        lo[axis] = min(lo[axis], value)
                        hi[axis] = max(hi[axis], value)
        self.box = AABB(Vector3(*lo), Vector3(*hi))

    def _to_object(self, v: Vector3) -> Vector3:
        return Vector3(self.cos_theta * v.x - self.sin_theta * v.z,
                       v.y,
                       self.sin_theta * v.x + self.cos_theta * v.z)

    def _to_world(self, v: Vector3) -> Vector3:
        return Vector3(self.cos_theta * v.x + self.sin_theta * v.z,
                       v.y,
                       -self.sin_theta * v.x + self.cos_theta * v.z)

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> Optional[HitRecord]:
        rotated = Ray(self._to_object(ray.origin), self._to_object(ray.direction), ray.time)
        rec = self.obj.hit(rotated, t_min, t_max, rng)
        if rec is None:
            return None
        rec.p = self._to_world(rec.p)
        rec.normal = self._to_world(rec.normal)
        return rec

    def bounding_box(self, time0: float = 0.0, time1: float = 1.0) -> AABB:
        return self.box

    def is_samplable(self) -> bool:
        return self.obj.is_samplable()

    def pdf_value(self, origin: Vector3, direction: Vector3) -> float:
        # Rotation preserves solid angle, so the object-space density carries over.
        return self.obj.pdf_value(self._to_object(origin), self._to_object(direction))

    def random(self, origin: Vector3, rng) -> Vector3:
        return self._to_world(self.obj.random(self._to_object(origin), rng))
