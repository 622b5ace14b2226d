"""Tests for the threaded render driver, frame buffer, output and CLI.

Tests cover:
- Identical images regardless of worker count
- Seed reproducibility
- Row partitioning and frame buffer bookkeeping
- Progress reporting and propagation of worker failures
- Render settings validation
- Tone mapping and PNG output
- Every example scene renders at a tiny resolution
"""

import logging
import random

import numpy as np
import pytest
from PIL import Image

from pathtracer.camera import Camera
from pathtracer.core.vector import Vector3
from pathtracer.main import main
from pathtracer.renderer.framebuffer import FrameBuffer
from pathtracer.renderer.raytracer import Renderer, partition_rows, render, row_rng
from pathtracer.renderer.scene import RenderSettings
from pathtracer.renderer.tone_mapping import (
    auto_exposure_tone_mapping,
    gamma_correct,
    reinhard_tone_mapping,
    save_image,
)
from pathtracer.scenes import SCENES


def small_settings(**overrides):
    options = dict(width=12, height=8, samples_per_pixel=3, max_depth=4, seed=7, workers=1)
    options.update(overrides)
    return RenderSettings(**options)


@pytest.fixture
def camera():
    return Camera(Vector3(0, 0, 5), Vector3(0, 0, 0), Vector3(0, 1, 0), 40.0, 1.5)


class TestDeterminism:
    def test_worker_count_does_not_change_image(self, sky_scene, camera):
        single = render(sky_scene, camera, small_settings(workers=1))
        pooled = render(sky_scene, camera, small_settings(workers=3))
        assert np.array_equal(single.radiance, pooled.radiance)
        assert np.array_equal(single.samples, pooled.samples)

    def test_same_seed_reproduces(self, sky_scene, camera):
        a = render(sky_scene, camera, small_settings(workers=2))
        b = render(sky_scene, camera, small_settings(workers=2))
        assert np.array_equal(a.radiance, b.radiance)

    def test_different_seed_differs(self, sky_scene, camera):
        a = render(sky_scene, camera, small_settings(seed=1))
        b = render(sky_scene, camera, small_settings(seed=2))
        assert not np.array_equal(a.radiance, b.radiance)

    def test_row_rng_depends_only_on_seed_and_row(self):
        assert row_rng(3, 5).random() == row_rng(3, 5).random()
        assert row_rng(3, 5).random() != row_rng(3, 6).random()
        assert row_rng(3, 5).random() != row_rng(4, 5).random()


class TestPartitioning:
    @pytest.mark.parametrize("height,workers", [(10, 3), (4, 8), (1, 1), (7, 7)])
    def test_rows_are_disjoint_and_complete(self, height, workers):
        parts = partition_rows(height, workers)
        assert len(parts) == min(height, workers)
        rows = [y for part in parts for y in part]
        assert sorted(rows) == list(range(height))
        assert all(part for part in parts)


class TestFrameBuffer:
    def test_add_and_get(self):
        fb = FrameBuffer(3, 2)
        fb.add_sample(2, 1, Vector3(1.0, 2.0, 3.0))
        fb.add_sample(2, 1, Vector3(1.0, 0.0, 1.0), count=3)
        color, count = fb.get(2, 1)
        assert color == Vector3(2.0, 2.0, 4.0)
        assert count == 4
        assert fb.get(0, 0) == (Vector3(0, 0, 0), 0)

    def test_to_array_averages(self):
        fb = FrameBuffer(2, 1)
        fb.add_sample(0, 0, Vector3(2.0, 4.0, 6.0), count=2)
        mean = fb.to_array()
        assert mean.shape == (1, 2, 3)
        assert mean[0, 0].tolist() == [1.0, 2.0, 3.0]
        assert mean[0, 1].tolist() == [0.0, 0.0, 0.0]

    @pytest.mark.parametrize("x,y", [(-1, 0), (0, -1), (3, 0), (0, 2)])
    def test_out_of_frame_pixels_raise(self, x, y):
        fb = FrameBuffer(3, 2)
        with pytest.raises(IndexError, match="outside 3x2"):
            fb.get(x, y)
        with pytest.raises(IndexError, match="outside 3x2"):
            fb.add_sample(x, y, Vector3(1, 1, 1))
        assert fb.samples.sum() == 0

    def test_every_pixel_gets_all_samples(self, sky_scene, camera):
        fb = render(sky_scene, camera, small_settings(workers=2))
        assert (fb.samples == 3).all()
        assert np.isfinite(fb.radiance).all()


class TestDriver:
    def test_progress_reports_every_row(self, sky_scene, camera):
        calls = []
        render(sky_scene, camera, small_settings(workers=3),
               progress=lambda done, total: calls.append((done, total)))
        assert sorted(calls) == [(i, 8) for i in range(1, 9)]

    def test_worker_exception_propagates(self, sky_scene, camera):
        class BrokenRenderer(Renderer):
            def render_row(self, scene, camera, framebuffer, y):
                if y == 5:
                    raise RuntimeError("row 5 exploded")
                super().render_row(scene, camera, framebuffer, y)

        with pytest.raises(RuntimeError, match="row 5"):
            BrokenRenderer(small_settings(workers=2)).render(sky_scene, camera)

    def test_logs_start_and_finish(self, sky_scene, camera, caplog):
        with caplog.at_level(logging.INFO, logger="pathtracer.renderer.raytracer"):
            render(sky_scene, camera, small_settings())
        assert "Rendering 12x8" in caplog.text
        assert "Rendered in" in caplog.text


class TestRenderSettings:
    @pytest.mark.parametrize("field", ["width", "height", "samples_per_pixel", "max_depth", "workers"])
    @pytest.mark.parametrize("value", [0, -3, 2.5])
    def test_rejects_non_positive_integers(self, field, value):
        with pytest.raises(ValueError, match=field):
            small_settings(**{field: value})

    def test_rejects_negative_seed(self):
        with pytest.raises(ValueError, match="seed"):
            small_settings(seed=-1)

    def test_aspect_ratio(self):
        assert small_settings(width=16, height=9).aspect_ratio == pytest.approx(16 / 9)


class TestToneMapping:
    def test_gamma_correct(self):
        acc = np.array([[[0.0, 0.25, 1.0], [4.0, -1.0, np.nan]]])
        pixels = gamma_correct(acc)
        assert pixels.dtype == np.uint8
        assert pixels.tolist() == [[[0, 127, 255], [255, 0, 0]]]

    @pytest.mark.parametrize("mapper", [reinhard_tone_mapping, auto_exposure_tone_mapping])
    def test_other_mappers_stay_in_range(self, mapper):
        acc = np.random.default_rng(0).uniform(0.0, 20.0, size=(4, 5, 3))
        pixels = mapper(acc)
        assert pixels.shape == (4, 5, 3)
        assert pixels.dtype == np.uint8

    def test_reinhard_halves_unit_radiance(self):
        # 1 / (1 + 1) = 0.5, then 0.5 ** (1 / 2.2) * 255 = 186.08
        pixels = reinhard_tone_mapping(np.ones((1, 1, 3)))
        assert pixels.tolist() == [[[186, 186, 186]]]

    def test_auto_exposure_targets_midgray(self):
        # exposure 0.18 on a white image: 0.18 / 1.18 = 0.1525, encoded 108.48
        pixels = auto_exposure_tone_mapping(np.ones((2, 2, 3)))
        assert (pixels == 108).all()

    @pytest.mark.parametrize("mapper", [reinhard_tone_mapping, auto_exposure_tone_mapping])
    def test_other_mappers_blacken_invalid_radiance(self, mapper):
        acc = np.array([[[np.nan, -2.0, 0.5], [0.5, 0.5, 0.5]]])
        pixels = mapper(acc)
        assert pixels[0, 0, 0] == 0
        assert pixels[0, 0, 1] == 0
        assert pixels[0, 0, 2] > 0

    def test_save_image(self, tmp_path):
        fb = FrameBuffer(4, 2)
        fb.add_sample(1, 0, Vector3(1.0, 0.25, 0.0))
        path = tmp_path / "out.png"
        save_image(fb, str(path))
        with Image.open(path) as img:
            assert img.size == (4, 2)
            assert img.getpixel((1, 0)) == (255, 127, 0)
            assert img.getpixel((0, 1)) == (0, 0, 0)

    def test_unknown_tone_mapper(self, tmp_path):
        with pytest.raises(ValueError, match="Unknown tone mapper"):
            save_image(FrameBuffer(1, 1), str(tmp_path / "x.png"), tone_mapper="filmic")


class TestScenes:
    @pytest.mark.parametrize("name", sorted(SCENES))
    def test_scene_renders(self, name):
        scene, camera = SCENES[name](1.0, random.Random(0))
        fb = render(scene, camera, RenderSettings(width=4, height=4, samples_per_pixel=1,
                                                  max_depth=3, seed=0, workers=2))
        assert (fb.samples == 1).all()
        assert np.isfinite(fb.radiance).all()
        assert (fb.radiance >= 0).all()


class TestCli:
    def test_renders_to_file(self, tmp_path):
        out = tmp_path / "cli.png"
        code = main(["--scene", "two_perlin_spheres", "--output", str(out), "--width", "6",
                     "--samples", "1", "--max-depth", "2", "--workers", "2"])
        assert code == 0
        with Image.open(out) as img:
            assert img.size == (6, 3)

    def test_bad_settings_exit_code(self, tmp_path):
        code = main(["--output", str(tmp_path / "never.png"), "--samples", "0"])
        assert code == 2
        assert not (tmp_path / "never.png").exists()
