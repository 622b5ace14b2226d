"""Tests for the recursive radiance estimator.

Tests cover:
- Depth limit and escaping rays
- Specular paths bypassing the sampling densities
- Light reaching a surface only once the path is long enough
- Paths with zero or invalid density contribute only emission
- Energy conservation for a diffuse sphere under a uniform sky
- Lights wrapped in transforms or boxes keep the estimate unbiased
"""

import math

import pytest

from conftest import assert_vec_close
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import FlipFace
from pathtracer.geometry.rect import AARect, Box, Plane
from pathtracer.geometry.sphere import MovingSphere, Sphere
from pathtracer.geometry.transform import RotateY, Translate
from pathtracer.geometry.world import HittableList
from pathtracer.materials.diffuse_light import DiffuseLight
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.material import Material, ScatterRecord
from pathtracer.materials.metal import Metal
from pathtracer.materials.pdf import PDF
from pathtracer.renderer.integrator import ray_color
from pathtracer.renderer.scene import Scene, solid_background

BLACK = Vector3(0, 0, 0)
GLOW = Vector3(0.1, 0.2, 0.3)


class FixedPDF(PDF):
    def __init__(self, density):
        self.density = density

    def value(self, direction):
        return self.density

    def generate(self, rng):
        return Vector3(0, 0, 1)


class GlowingStub(Material):
    """Emits GLOW and scatters with a configurable density pair."""

    def __init__(self, density, scattering_density=1.0):
        self.density = density
        self.scattering_density = scattering_density

    def scatter(self, ray_in, rec, rng):
        return ScatterRecord(Vector3(1, 1, 1), pdf=FixedPDF(self.density))

    def emitted(self, rec, u, v, p):
        return GLOW

    def scattering_pdf(self, ray_in, rec, scattered):
        return self.scattering_density


def floor_under_light():
    """A grey floor at y=0 lit by a downward-facing square lamp at y=2."""
    lamp = AARect(Plane.XZ, -1, 1, -1, 1, 2, DiffuseLight(Vector3(4, 4, 4)))
    floor = AARect(Plane.XZ, -10, 10, -10, 10, 0, Lambertian(Vector3(0.5, 0.5, 0.5)))
    world = HittableList([FlipFace(lamp), floor])
    return Scene(world, solid_background(BLACK), lights=[lamp])


class TestTermination:
    def test_depth_zero_is_black(self, rng, sky_scene):
        ray = Ray(Vector3(0, 0, 5), Vector3(0, 0, -1))
        assert ray_color(ray, sky_scene, 0, rng) == BLACK

    def test_miss_returns_background(self, rng):
        scene = Scene(HittableList([Sphere(Vector3(0, 0, 0), 1.0, None)]),
                      solid_background(Vector3(0.3, 0.6, 0.9)))
        ray = Ray(Vector3(0, 5, 5), Vector3(0, 0, -1))
        assert ray_color(ray, scene, 10, rng) == Vector3(0.3, 0.6, 0.9)

    def test_light_hit_returns_emission(self, rng):
        scene = floor_under_light()
        ray = Ray(Vector3(0, 1, 0), Vector3(0, 1, 0))
        assert ray_color(ray, scene, 1, rng) == Vector3(4, 4, 4)

    def test_back_of_light_is_dark(self, rng):
        scene = floor_under_light()
        ray = Ray(Vector3(0, 5, 0), Vector3(0, -1, 0))
        assert ray_color(ray, scene, 1, rng) == BLACK


class TestSpecular:
    def test_mirror_reflects_background(self, rng):
        sky = Vector3(0.2, 0.4, 0.8)
        scene = Scene(HittableList([Sphere(Vector3(0, 0, 0), 1.0, Metal(Vector3(0.5, 0.5, 0.5)))]),
                      solid_background(sky))
        color = ray_color(Ray(Vector3(0, 0, 5), Vector3(0, 0, -1)), scene, 5, rng)
        assert_vec_close(color, Vector3(0.1, 0.2, 0.4))


class TestPathLength:
    def test_single_bounce_sees_no_light(self, rng):
        scene = floor_under_light()
        ray = Ray(Vector3(0, 1, 3), Vector3(0, -1, -3))
        for _ in range(50):
            assert ray_color(ray, scene, 1, rng) == BLACK

    def test_two_bounces_reach_the_light(self, rng):
        scene = floor_under_light()
        ray = Ray(Vector3(0, 1, 3), Vector3(0, -1, -3))
        colors = [ray_color(ray, scene, 2, rng) for _ in range(50)]
        assert any(c.x > 0 for c in colors)
        assert all(c.x >= 0 and math.isfinite(c.x) for c in colors)


class TestDensityGuards:
    @pytest.mark.parametrize("density", [0.0, float("nan"), float("inf")])
    def test_invalid_sampling_density(self, rng, density):
        scene = Scene(HittableList([Sphere(Vector3(0, 0, 0), 1.0, GlowingStub(density))]),
                      solid_background(Vector3(1, 1, 1)))
        color = ray_color(Ray(Vector3(0, 0, 5), Vector3(0, 0, -1)), scene, 5, rng)
        assert color == GLOW

    @pytest.mark.parametrize("scattering_density", [0.0, float("nan")])
    def test_invalid_scattering_density(self, rng, scattering_density):
        material = GlowingStub(1.0, scattering_density)
        scene = Scene(HittableList([Sphere(Vector3(0, 0, 0), 1.0, material)]),
                      solid_background(Vector3(1, 1, 1)))
        color = ray_color(Ray(Vector3(0, 0, 5), Vector3(0, 0, -1)), scene, 5, rng)
        assert color == GLOW

    def test_valid_densities_add_incoming_light(self, rng):
        scene = Scene(HittableList([Sphere(Vector3(0, 0, 0), 1.0, GlowingStub(2.0, 1.0))]),
                      solid_background(Vector3(1, 1, 1)))
        color = ray_color(Ray(Vector3(0, 0, 5), Vector3(0, 0, -1)), scene, 5, rng)
        # The scattered ray leaves along the normal into the background: GLOW + 1 * (1 / 2).
        assert_vec_close(color, GLOW + Vector3(0.5, 0.5, 0.5))


class TestEnergy:
    def test_diffuse_sphere_under_white_sky(self, rng):
        # Cosine sampling cancels the cosine term, and a convex sphere never
        # sees itself, so every sample is exactly the albedo.
        scene = Scene(HittableList([Sphere(Vector3(0, 0, 0), 1.0, Lambertian(Vector3(0.5, 0.5, 0.5)))]),
                      solid_background(Vector3(1, 1, 1)))
        for _ in range(200):
            color = ray_color(Ray(Vector3(0, 0, 5), Vector3(0, 0, -1)), scene, 10, rng)
            assert color.x == pytest.approx(0.5, abs=1e-6)

    def test_floor_estimate_is_bounded(self, rng):
        scene = floor_under_light()
        ray = Ray(Vector3(0, 1, 3), Vector3(0, -1, -3))
        total = Vector3(0, 0, 0)
        samples = 400
        for _ in range(samples):
            total = total + ray_color(ray, scene, 4, rng)
        mean = total / samples
        assert 0.0 < mean.x < 4.0


def dark_lamps():
    """Tiny black lamps far in front of a wall facing +x, in every wrapped form."""
    dark = DiffuseLight(Vector3(0, 0, 0))
    return {
        "rect": AARect(Plane.YZ, -0.5, 0.5, -0.5, 0.5, 50, dark),
        "translate": Translate(AARect(Plane.YZ, -0.5, 0.5, -0.5, 0.5, 0, dark), Vector3(50, 0, 0)),
        "rotate_y": RotateY(Translate(AARect(Plane.YZ, -0.5, 0.5, -0.5, 0.5, 0, dark),
                                      Vector3(50, 0, 0)), 30),
        "box": Translate(Box(Vector3(-0.5, -0.5, -0.5), Vector3(0.5, 0.5, 0.5), dark),
                         Vector3(50, 0, 0)),
    }


class TestLightSamplingIsUnbiased:
    @pytest.mark.parametrize("kind", sorted(dark_lamps()))
    def test_wrapped_light_does_not_add_energy(self, rng, kind):
        # A grey wall under a white sky reflects its albedo. The lamp is black
        # and covers a negligible solid angle, so sampling toward it must not
        # change the mean.
        lamp = dark_lamps()[kind]
        wall = AARect(Plane.YZ, -10, 10, -10, 10, 0, Lambertian(Vector3(0.5, 0.5, 0.5)))
        scene = Scene(HittableList([wall, lamp]), solid_background(Vector3(1, 1, 1)), lights=[lamp])
        ray = Ray(Vector3(5, 0, 0), Vector3(-1, 0, 0))
        samples = 4000
        total = 0.0
        for _ in range(samples):
            total += ray_color(ray, scene, 2, rng).x
        assert total / samples == pytest.approx(0.5, abs=0.05)

    def test_scene_rejects_unsamplable_light(self, grey):
        moving = MovingSphere(Vector3(0, 0, 0), Vector3(0, 1, 0), 0.0, 1.0, 1.0, grey)
        with pytest.raises(ValueError, match="MovingSphere"):
            Scene(HittableList([moving]), solid_background(BLACK), lights=[moving])
