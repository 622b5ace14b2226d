# src/geometry/bvh.py
import logging
import random
from typing import Optional, Sequence
from pathtracer.core.aabb import AABB
from pathtracer.core.errors import EmptySceneError
from pathtracer.core.ray import Ray
from pathtracer.geometry.hittable import Hittable, HitRecord

logger = logging.getLogger(__name__)


class BVHNode(Hittable):
    """
    Bounding volume hierarchy node.

    Each node owns exactly two children (other nodes or primitives) and caches
    the union of their boxes. The tree is built once, by median split on a
    randomly chosen axis, and is read-only afterwards so it can be shared
    between render threads.
    """
    def __init__(self, objects: Sequence[Hittable], time0: float = 0.0, time1: float = 1.0,
                 rng=None):
        if len(objects) == 0:
            raise EmptySceneError("Cannot build a BVH from an empty list of objects.")
        if rng is None:
            rng = random

        objects = list(objects)
        axis = rng.randrange(3)
        key = lambda obj: obj.bounding_box(time0, time1).axis_min(axis)
        object_span = len(objects)

        if object_span == 1:
            self.left = self.right = objects[0]
        elif object_span == 2:
            if key(objects[0]) <= key(objects[1]):
                self.left, self.right = objects[0], objects[1]
            else:
                self.left, self.right = objects[1], objects[0]
        else:
            objects.sort(key=key)
            mid = object_span // 2
            self.left = BVHNode(objects[:mid], time0, time1, rng)
            self.right = BVHNode(objects[mid:], time0, time1, rng)

        self.box = AABB.surrounding_box(self.left.bounding_box(time0, time1),
                                        self.right.bounding_box(time0, time1))

    @classmethod
    def from_list(cls, world, time0: float = 0.0, time1: float = 1.0, rng=None) -> "BVHNode":
        """Build a tree over the objects of a HittableList (or any iterable)."""
        objects = list(world)
        root = cls(objects, time0, time1, rng)
        logger.debug(f"Built BVH over {len(objects)} objects, depth {root.depth()}")
        return root

    def depth(self) -> int:
        left = self.left.depth() if isinstance(self.left, BVHNode) else 0
        right = self.right.depth() if isinstance(self.right, BVHNode) else 0
        return 1 + max(left, right)

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> Optional[HitRecord]:
        if not self.box.hit(ray, t_min, t_max):
            return None

        hit_left = self.left.hit(ray, t_min, t_max, rng)

        if self.right is self.left:
            return hit_left

        # Update t_max for right branch if we hit something on the left
        if hit_left is not None:
            t_max = hit_left.t

        hit_right = self.right.hit(ray, t_min, t_max, rng)

        # The right child only reports hits nearer than the left one.
        return hit_right if hit_right is not None else hit_left

    def bounding_box(self, time0: float = 0.0, time1: float = 1.0) -> AABB:
        return self.box
