# renderer/scene.py
import os
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable
from pathtracer.geometry.world import HittableList

Background = Callable[[Ray], Vector3]


def solid_background(color: Vector3) -> Background:
    """Background of one constant color, e.g. black for light-lit interiors."""
    def background(ray: Ray) -> Vector3:
        return color
    return background


def sky_background(horizon: Vector3 = Vector3(1.0, 1.0, 1.0),
                   zenith: Vector3 = Vector3(0.5, 0.7, 1.0)) -> Background:
    """Vertical white-to-blue gradient keyed on the ray direction's y component."""
    def background(ray: Ray) -> Vector3:
        unit_direction = ray.direction.normalize()
        t = 0.5 * (unit_direction.y + 1.0)
        return horizon * (1.0 - t) + zenith * t
    return background


class Scene:
    """
    Everything the integrator reads: the world (usually a BVH root), the
    background seen by rays that escape, and the light shapes used for
    importance sampling. Treated as read-only while rendering.

    Every light must be samplable (see Hittable.is_samplable); anything else
    is rejected with a ValueError.
    """
    def __init__(self, world: Hittable, background: Background,
                 lights: Optional[Sequence[Hittable]] = None):
        for light in lights or ():
            if not light.is_samplable():
                raise ValueError(f"{type(light).__name__} cannot be importance sampled as a light")
        self.world = world
        self.background = background
        self.lights = HittableList(lights) if lights else None

    @property
    def has_lights(self) -> bool:
        return self.lights is not None and len(self.lights) > 0


@dataclass
class RenderSettings:
    width: int = 400
    height: int = 225
    samples_per_pixel: int = 100
    max_depth: int = 50
    seed: int = 0
    workers: int = field(default_factory=lambda: os.cpu_count() or 1)

    def __post_init__(self):
        for name in ("width", "height", "samples_per_pixel", "max_depth", "workers"):
            value = getattr(self, name)
            if not isinstance(value, int) or value <= 0:
                raise ValueError(f"RenderSettings.{name} must be a positive integer, got {value!r}")
        if not isinstance(self.seed, int) or self.seed < 0:
            raise ValueError(f"RenderSettings.seed must be a non-negative integer, got {self.seed!r}")

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height
