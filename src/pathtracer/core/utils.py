# core/utils.py
import math
from pathtracer.core.vector import Vector3

TWO_PI = 2.0 * math.pi


def random_in_unit_sphere(rng) -> Vector3:
    """
    Returns a random point inside a unit sphere.
    """
    while True:
        p = Vector3(rng.uniform(-1, 1),
                    rng.uniform(-1, 1),
                    rng.uniform(-1, 1))
        if p.dot(p) < 1.0:
            return p


def random_unit_vector(rng) -> Vector3:
    """
    Returns a random unit vector (uniformly distributed over the sphere).
    """
    return random_in_unit_sphere(rng).normalize()


def random_in_unit_disk(rng) -> Vector3:
    """Random point in the unit disk on the z = 0 plane, used for depth of field."""
    while True:
        p = Vector3(rng.uniform(-1, 1), rng.uniform(-1, 1), 0.0)
        if p.dot(p) < 1:
            return p


def random_cosine_direction(rng) -> Vector3:
    """
    Cosine-weighted direction on the hemisphere around +z.
    """
    r1 = rng.random()
    r2 = rng.random()
    z = math.sqrt(1.0 - r2)
    phi = TWO_PI * r1
    x = math.cos(phi) * math.sqrt(r2)
    y = math.sin(phi) * math.sqrt(r2)
    return Vector3(x, y, z)


def random_to_sphere(rng, radius: float, distance_squared: float) -> Vector3:
    """
    Direction inside the cone subtended by a sphere of the given radius seen
    from distance sqrt(distance_squared), around +z.
    """
    r1 = rng.random()
    r2 = rng.random()
    cos_max = math.sqrt(max(0.0, 1.0 - radius * radius / distance_squared))
    z = 1.0 + r2 * (cos_max - 1.0)
    phi = TWO_PI * r1
    s = math.sqrt(max(0.0, 1.0 - z * z))
    return Vector3(math.cos(phi) * s, math.sin(phi) * s, z)


def schlick(cos_theta: float, ref_idx: float) -> float:
    """Schlick's approximation of Fresnel reflectance."""
    r0 = (1.0 - ref_idx) / (1.0 + ref_idx)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * math.pow((1.0 - cos_theta), 5)
