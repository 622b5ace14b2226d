# scenes.py
"""Example scenes. Each builder returns a (Scene, Camera) pair."""
import random
from typing import Callable, Dict, Tuple
from pathtracer.camera.camera import Camera
from pathtracer.core.vector import Vector3
from pathtracer.geometry.bvh import BVHNode
from pathtracer.geometry.hittable import FlipFace
from pathtracer.geometry.medium import ConstantMedium
from pathtracer.geometry.rect import AARect, Box, Plane
from pathtracer.geometry.sphere import MovingSphere, Sphere
from pathtracer.geometry.transform import RotateY, Translate
from pathtracer.geometry.world import HittableList
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.diffuse_light import DiffuseLight
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal
from pathtracer.materials.perlin import NoiseKind, Perlin
from pathtracer.materials.textures import CheckerTexture, NoiseTexture
from pathtracer.renderer.scene import Scene, solid_background, sky_background

SceneBuilder = Callable[[float, random.Random], Tuple[Scene, Camera]]

BLACK_BACKGROUND = Vector3(0.0, 0.0, 0.0)


def random_spheres(aspect_ratio: float, rng: random.Random) -> Tuple[Scene, Camera]:
    """Checkered ground with a field of small random spheres, some in motion."""
    world = HittableList()
    checker = CheckerTexture(Vector3(0.9, 0.9, 0.9), Vector3(0.2, 0.3, 0.1))
    world.add(Sphere(Vector3(0, -1000, 0), 1000, Lambertian(checker)))

    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = rng.random()
            center = Vector3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())
            if (center - Vector3(4, 0.2, 0)).length() <= 0.9:
                continue
            if choose_mat < 0.8:
                albedo = Vector3(rng.random(), rng.random(), rng.random()) * \
                    Vector3(rng.random(), rng.random(), rng.random())
                center1 = center + Vector3(0, rng.uniform(0, 0.5), 0)
                world.add(MovingSphere(center, center1, 0.0, 1.0, 0.2, Lambertian(albedo)))
            elif choose_mat < 0.95:
                albedo = Vector3(rng.uniform(0.5, 1), rng.uniform(0.5, 1), rng.uniform(0.5, 1))
                world.add(Sphere(center, 0.2, Metal(albedo, rng.uniform(0, 0.5))))
            else:
                world.add(Sphere(center, 0.2, Dielectric(1.5)))

    world.add(Sphere(Vector3(0, 1, 0), 1.0, Dielectric(1.5)))
    world.add(Sphere(Vector3(-4, 1, 0), 1.0, Lambertian(Vector3(0.4, 0.2, 0.1))))
    world.add(Sphere(Vector3(4, 1, 0), 1.0, Metal(Vector3(0.7, 0.6, 0.5), 0.0)))

    camera = Camera(Vector3(13, 2, 3), Vector3(0, 0, 0), Vector3(0, 1, 0), 20.0,
                    aspect_ratio, aperture=0.1, focus_dist=10.0, time0=0.0, time1=1.0)
    return Scene(BVHNode.from_list(world, 0.0, 1.0, rng), sky_background()), camera


def two_perlin_spheres(aspect_ratio: float, rng: random.Random) -> Tuple[Scene, Camera]:
    """Marble sphere resting on a turbulence-textured ground sphere."""
    perlin = Perlin(rng.randrange(2 ** 32))
    world = HittableList([
        Sphere(Vector3(0, -1000, 0), 1000,
               Lambertian(NoiseTexture(perlin, NoiseKind.TURBULENCE, 4.0))),
        Sphere(Vector3(0, 2, 0), 2, Lambertian(NoiseTexture(perlin, NoiseKind.MARBLE, 4.0))),
    ])
    camera = Camera(Vector3(13, 2, 3), Vector3(0, 0, 0), Vector3(0, 1, 0), 20.0,
                    aspect_ratio, aperture=0.0, focus_dist=10.0)
    return Scene(world, sky_background()), camera


def simple_light(aspect_ratio: float, rng: random.Random) -> Tuple[Scene, Camera]:
    """Perlin spheres lit by a rectangle and a small spherical lamp."""
    perlin = Perlin(rng.randrange(2 ** 32))
    marble = Lambertian(NoiseTexture(perlin, NoiseKind.MARBLE, 4.0))
    light = DiffuseLight(Vector3(4, 4, 4))
    panel = AARect(Plane.XY, 3, 5, 1, 3, -2, light)
    lamp = Sphere(Vector3(0, 7, 0), 2, light)
    world = HittableList([
        Sphere(Vector3(0, -1000, 0), 1000, marble),
        Sphere(Vector3(0, 2, 0), 2, marble),
        panel,
        lamp,
    ])
    camera = Camera(Vector3(26, 3, 6), Vector3(0, 2, 0), Vector3(0, 1, 0), 20.0,
                    aspect_ratio, aperture=0.0, focus_dist=10.0)
    return Scene(world, solid_background(BLACK_BACKGROUND), lights=[panel, lamp]), camera


def _cornell_walls(world: HittableList):
    red = Lambertian(Vector3(0.65, 0.05, 0.05))
    white = Lambertian(Vector3(0.73, 0.73, 0.73))
    green = Lambertian(Vector3(0.12, 0.45, 0.15))
    light = DiffuseLight(Vector3(15, 15, 15))

    ceiling_light = AARect(Plane.XZ, 213, 343, 227, 332, 554, light)
    world.add(AARect(Plane.YZ, 0, 555, 0, 555, 555, green))
    world.add(AARect(Plane.YZ, 0, 555, 0, 555, 0, red))
    world.add(FlipFace(ceiling_light))
    world.add(AARect(Plane.XZ, 0, 555, 0, 555, 555, white))
    world.add(AARect(Plane.XZ, 0, 555, 0, 555, 0, white))
    world.add(AARect(Plane.XY, 0, 555, 0, 555, 555, white))
    return white, ceiling_light


def _cornell_camera(aspect_ratio: float) -> Camera:
    return Camera(Vector3(278, 278, -800), Vector3(278, 278, 0), Vector3(0, 1, 0), 40.0,
                  aspect_ratio, aperture=0.0, focus_dist=10.0)


def cornell_box(aspect_ratio: float, rng: random.Random) -> Tuple[Scene, Camera]:
    """Cornell box with a rotated aluminium block and a glass sphere."""
    world = HittableList()
    _, ceiling_light = _cornell_walls(world)

    aluminium = Metal(Vector3(0.8, 0.85, 0.88), 0.0)
    tall_box = Translate(RotateY(Box(Vector3(0, 0, 0), Vector3(165, 330, 165), aluminium), 15),
                         Vector3(265, 0, 295))
    world.add(tall_box)
    glass_sphere = Sphere(Vector3(190, 90, 190), 90, Dielectric(1.5))
    world.add(glass_sphere)

    scene = Scene(BVHNode.from_list(world, rng=rng), solid_background(BLACK_BACKGROUND),
                  lights=[ceiling_light, glass_sphere])
    return scene, _cornell_camera(aspect_ratio)


def cornell_smoke(aspect_ratio: float, rng: random.Random) -> Tuple[Scene, Camera]:
    """Cornell box whose two blocks are replaced by dark and light smoke."""
    world = HittableList()
    white, ceiling_light = _cornell_walls(world)

    box1 = Translate(RotateY(Box(Vector3(0, 0, 0), Vector3(165, 330, 165), white), 15),
                     Vector3(265, 0, 295))
    box2 = Translate(RotateY(Box(Vector3(0, 0, 0), Vector3(165, 165, 165), white), -18),
                     Vector3(130, 0, 65))
    world.add(ConstantMedium(box1, 0.01, Vector3(0, 0, 0)))
    world.add(ConstantMedium(box2, 0.01, Vector3(1, 1, 1)))

    scene = Scene(BVHNode.from_list(world, rng=rng), solid_background(BLACK_BACKGROUND),
                  lights=[ceiling_light])
    return scene, _cornell_camera(aspect_ratio)


SCENES: Dict[str, SceneBuilder] = {
    "random_spheres": random_spheres,
    "two_perlin_spheres": two_perlin_spheres,
    "simple_light": simple_light,
    "cornell_box": cornell_box,
    "cornell_smoke": cornell_smoke,
}
