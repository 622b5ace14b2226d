# materials/lambertian.py

import math
from typing import Union
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.materials.material import Material, ScatterRecord
from pathtracer.materials.pdf import CosinePDF
from pathtracer.materials.textures import Texture, as_texture


class Lambertian(Material):
    """
    Lambertian diffuse material with optional texture support.
    """

    def __init__(self, albedo: Union[Vector3, Texture]):
        # Store either a solid color or a texture.
        self.texture = as_texture(albedo)

    def scatter(self, ray_in: Ray, rec, rng) -> ScatterRecord:
        """
        Directions are left to the integrator, which samples the cosine PDF
        (possibly mixed with light sampling).
        """
        albedo = self.texture.value(rec.u, rec.v, rec.p)
        return ScatterRecord(albedo, pdf=CosinePDF(rec.normal))

    def scattering_pdf(self, ray_in: Ray, rec, scattered: Ray) -> float:
        cosine = rec.normal.dot(scattered.direction.normalize())
        return cosine / math.pi if cosine > 0 else 0.0
