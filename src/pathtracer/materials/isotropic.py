import math
from typing import Union
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.materials.material import Material, ScatterRecord
from pathtracer.materials.pdf import SpherePDF
from pathtracer.materials.textures import Texture, as_texture


class Isotropic(Material):
    """Phase function of a participating medium: scatters uniformly in all directions."""
    def __init__(self, albedo: Union[Vector3, Texture]):
        self.texture = as_texture(albedo)

    def scatter(self, ray_in: Ray, rec, rng) -> ScatterRecord:
        attenuation = self.texture.value(rec.u, rec.v, rec.p)
        return ScatterRecord(attenuation, pdf=SpherePDF())

    def scattering_pdf(self, ray_in: Ray, rec, scattered: Ray) -> float:
        return 1.0 / (4.0 * math.pi)
