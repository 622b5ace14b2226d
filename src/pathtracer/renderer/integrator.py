# renderer/integrator.py
import math
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3, BLACK
from pathtracer.materials.pdf import HittablePDF, MixturePDF

# Offset that keeps secondary rays from re-hitting the surface they left.
T_MIN = 0.001


def ray_color(ray: Ray, scene, depth: int, rng) -> Vector3:
    """
    Recursive radiance estimate along ray.

    Paths stop at depth 0 (black) or when they escape (background). Diffuse
    bounces are importance sampled from an even mix of the material's PDF and
    the scene's lights; a direction with zero density contributes nothing.
    """
    if depth <= 0:
        return BLACK

    rec = scene.world.hit(ray, T_MIN, math.inf, rng)
    if rec is None:
        return scene.background(ray)

    material = rec.material
    emitted = material.emitted(rec, rec.u, rec.v, rec.p)
    srec = material.scatter(ray, rec, rng)
    if srec is None:
        return emitted

    if srec.is_specular:
        return emitted + srec.attenuation * ray_color(srec.specular_ray, scene, depth - 1, rng)

    if scene.has_lights:
        pdf = MixturePDF(HittablePDF(scene.lights, rec.p), srec.pdf)
    else:
        pdf = srec.pdf

    scattered = Ray(rec.p, pdf.generate(rng), ray.time)
    pdf_value = pdf.value(scattered.direction)
    if not (pdf_value > 0.0 and math.isfinite(pdf_value)):
        return emitted

    scattering_pdf = material.scattering_pdf(ray, rec, scattered)
    if not (scattering_pdf > 0.0 and math.isfinite(scattering_pdf)):
        return emitted

    incoming = ray_color(scattered, scene, depth - 1, rng)
    return emitted + srec.attenuation * incoming * (scattering_pdf / pdf_value)
