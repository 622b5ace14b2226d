# src/materials/dielectric.py
import math
from pathtracer.core.ray import Ray
from pathtracer.core.vector import WHITE
from pathtracer.core.utils import schlick
from pathtracer.materials.material import Material, ScatterRecord


class Dielectric(Material):
    """
    Clear refractive material (glass, water). Reflection versus refraction is
    chosen per ray from Snell's law and Schlick's reflectance.
    """
    def __init__(self, ref_idx: float):
        self.ref_idx = ref_idx

    def scatter(self, ray_in: Ray, rec, rng) -> ScatterRecord:
        attenuation = WHITE  # Glass doesn't absorb light

        # Determine if we're entering or exiting the material
        ni_over_nt = 1.0 / self.ref_idx if rec.front_face else self.ref_idx

        unit_direction = ray_in.direction.normalize()

        # Matching indices on both sides: no interface, no bending.
        if ni_over_nt == 1.0:
            return ScatterRecord(attenuation, specular_ray=Ray(rec.p, unit_direction, ray_in.time))

        # Calculate cosine using the angle between incoming ray and normal
        cos_theta = min(-unit_direction.dot(rec.normal), 1.0)
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))

        cannot_refract = ni_over_nt * sin_theta > 1.0
        if cannot_refract or rng.random() < schlick(cos_theta, ni_over_nt):
            direction = unit_direction.reflect(rec.normal)
        else:
            direction = unit_direction.refract(rec.normal, ni_over_nt)
            if direction is None:
                direction = unit_direction.reflect(rec.normal)

        return ScatterRecord(attenuation, specular_ray=Ray(rec.p, direction, ray_in.time))
