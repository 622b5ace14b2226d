# materials/pdf.py
import math
from pathtracer.core.vector import Vector3
from pathtracer.core.onb import ONB
from pathtracer.core.utils import random_cosine_direction, random_unit_vector


class PDF:
    """
    Probability density over directions used for importance sampling.

    value() returns the density of a direction; generate() draws one.
    """
    def value(self, direction: Vector3) -> float:
        raise NotImplementedError("value() must be implemented by subclasses.")

    def generate(self, rng) -> Vector3:
        raise NotImplementedError("generate() must be implemented by subclasses.")


class CosinePDF(PDF):
    """Cosine-weighted hemisphere about w."""
    def __init__(self, w: Vector3):
        self.uvw = ONB(w)

    def value(self, direction: Vector3) -> float:
        cosine = direction.normalize().dot(self.uvw.w)
        return cosine / math.pi if cosine > 0 else 0.0

    def generate(self, rng) -> Vector3:
        return self.uvw.local(random_cosine_direction(rng))


class SpherePDF(PDF):
    """Uniform density over the whole sphere of directions."""
    def value(self, direction: Vector3) -> float:
        return 1.0 / (4.0 * math.pi)

    def generate(self, rng) -> Vector3:
        return random_unit_vector(rng)


class HittablePDF(PDF):
    """Samples directions from origin towards a light-shaped hittable."""
    def __init__(self, hittable, origin: Vector3):
        self.hittable = hittable
        self.origin = origin

    def value(self, direction: Vector3) -> float:
        return self.hittable.pdf_value(self.origin, direction)

    def generate(self, rng) -> Vector3:
        return self.hittable.random(self.origin, rng)


class MixturePDF(PDF):
    """Even mix of two densities."""
    def __init__(self, p0: PDF, p1: PDF):
        self.p0 = p0
        self.p1 = p1

    def value(self, direction: Vector3) -> float:
        return 0.5 * self.p0.value(direction) + 0.5 * self.p1.value(direction)

    def generate(self, rng) -> Vector3:
        if rng.random() < 0.5:
            return self.p0.generate(rng)
        return self.p1.generate(rng)
