from pathtracer.geometry.hittable import Hittable, HitRecord, FlipFace
from pathtracer.geometry.world import HittableList
from pathtracer.geometry.sphere import Sphere, MovingSphere, get_sphere_uv
from pathtracer.geometry.rect import AARect, Box, Plane
from pathtracer.geometry.transform import Translate, RotateY
from pathtracer.geometry.medium import ConstantMedium
from pathtracer.geometry.bvh import BVHNode

__all__ = [
    "Hittable",
    "HitRecord",
    "FlipFace",
    "HittableList",
    "Sphere",
    "MovingSphere",
    "get_sphere_uv",
    "AARect",
    "Box",
    "Plane",
    "Translate",
    "RotateY",
    "ConstantMedium",
    "BVHNode",
]
