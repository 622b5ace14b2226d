# geometry/hittable.py
from typing import Optional
from pathtracer.core.vector import Vector3
from pathtracer.core.ray import Ray
from pathtracer.core.aabb import AABB


class HitRecord:
    """
    Records details of a ray-object intersection.
    """
    __slots__ = ("p", "normal", "t", "u", "v", "front_face", "material")

    def __init__(self, p: Vector3 = None, normal: Vector3 = None,
                 t: float = 0, u: float = 0.0, v: float = 0.0,
                 front_face: bool = True, material=None):
        self.p = p              # Intersection point
        self.normal = normal    # Surface normal at intersection
        self.t = t              # Ray parameter at intersection
        self.u = u              # Surface coordinates
        self.v = v
        self.front_face = front_face  # Whether the hit was on the front side
        self.material = material

    def set_face_normal(self, ray: Ray, outward_normal: Vector3):
        """
        Ensures that the normal always points against the ray.
        """
        self.front_face = ray.direction.dot(outward_normal) < 0
        self.normal = outward_normal if self.front_face else -outward_normal


class Hittable:
    """
    Abstract class for objects that can be hit by a ray.

    Subclasses implement hit() and bounding_box(). Objects that can act as
    lights for importance sampling also override is_samplable(), pdf_value()
    and random(); pdf_value() is the density that random() draws from.
    """
    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> Optional[HitRecord]:
        raise NotImplementedError("hit() must be implemented by subclasses.")

    def bounding_box(self, time0: float = 0.0, time1: float = 1.0) -> AABB:
        raise NotImplementedError("bounding_box() must be implemented by subclasses.")

    def is_samplable(self) -> bool:
        """Whether pdf_value() and random() are implemented, i.e. the object can be a light."""
        return False

    def pdf_value(self, origin: Vector3, direction: Vector3) -> float:
        return 0.0

    def random(self, origin: Vector3, rng) -> Vector3:
        raise NotImplementedError(f"{type(self).__name__} cannot be sampled as a light.")


class FlipFace(Hittable):
    """
    Wraps another object and reports its hits with the face orientation
    inverted, e.g. to make a ceiling light emit downwards.
    """
    def __init__(self, obj: Hittable):
        self.obj = obj

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> Optional[HitRecord]:
        rec = self.obj.hit(ray, t_min, t_max, rng)
        if rec is None:
            return None
        rec.front_face = not rec.front_face
        return rec

    def bounding_box(self, time0: float = 0.0, time1: float = 1.0) -> AABB:
        return self.obj.bounding_box(time0, time1)

    def is_samplable(self) -> bool:
        return self.obj.is_samplable()

    def pdf_value(self, origin: Vector3, direction: Vector3) -> float:
        return self.obj.pdf_value(origin, direction)

    def random(self, origin: Vector3, rng) -> Vector3:
        return self.obj.random(origin, rng)
