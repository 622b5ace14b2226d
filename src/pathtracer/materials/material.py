from typing import TYPE_CHECKING, Optional
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3, BLACK
from pathtracer.materials.pdf import PDF

if TYPE_CHECKING:
    from pathtracer.geometry.hittable import HitRecord


class ScatterRecord:
    """
    Outcome of a successful scatter.

    Diffuse materials fill in pdf and leave the direction to the integrator;
    specular materials fill in specular_ray, which is followed as is.
    """
    __slots__ = ("attenuation", "pdf", "specular_ray")

    def __init__(self, attenuation: Vector3, pdf: Optional[PDF] = None,
                 specular_ray: Optional[Ray] = None):
        self.attenuation = attenuation
        self.pdf = pdf
        self.specular_ray = specular_ray

    @property
    def is_specular(self) -> bool:
        return self.specular_ray is not None


class Material:
    """
    Abstract material class. Subclasses must implement scatter().
    """
    def scatter(self, ray_in: Ray, rec: "HitRecord", rng) -> Optional[ScatterRecord]:
        """
        Computes how the incoming ray scatters at the hit.
        Returns a ScatterRecord, or None if the ray is absorbed.
        """
        raise NotImplementedError("scatter() must be implemented by subclasses.")

    def emitted(self, rec: "HitRecord", u: float, v: float, p: Vector3) -> Vector3:
        return BLACK

    def scattering_pdf(self, ray_in: Ray, rec: "HitRecord", scattered: Ray) -> float:
        return 0.0
