# renderer/raytracer.py
import logging
import random
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional
import numpy as np
from pathtracer.camera.camera import Camera
from pathtracer.core.vector import Vector3
from pathtracer.renderer.framebuffer import FrameBuffer
from pathtracer.renderer.integrator import ray_color
from pathtracer.renderer.scene import RenderSettings, Scene

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


def row_rng(seed: int, row: int) -> random.Random:
    """
    Independent generator for one image row. The stream depends only on
    (seed, row), never on which worker renders the row.
    """
    state = np.random.SeedSequence([seed, row]).generate_state(2)
    return random.Random((int(state[0]) << 32) | int(state[1]))


def partition_rows(height: int, workers: int) -> List[List[int]]:
    """Deal rows round-robin so every worker gets a share of each image region."""
    return [list(range(k, height, workers)) for k in range(min(workers, height))]


class Renderer:
    """
    Renders a scene into a FrameBuffer with a pool of worker threads.

    Each worker owns a fixed, disjoint set of rows for the whole job, so the
    frame buffer is written without locks. Scene, camera and textures are
    only read once rendering starts.

    The integrator is pure Python and holds the GIL, so extra workers buy
    little wall-clock speedup. What the pool guarantees is that the image
    depends only on the seed, never on the worker count or scheduling.
    """
    def __init__(self, settings: RenderSettings, progress: Optional[ProgressCallback] = None):
        self.settings = settings
        self.progress = progress
        self._rows_done = 0
        self._progress_lock = threading.Lock()

    def render_row(self, scene: Scene, camera: Camera, framebuffer: FrameBuffer, y: int):
        settings = self.settings
        rng = row_rng(settings.seed, y)
        width_scale = 1.0 / max(settings.width - 1, 1)
        height_scale = 1.0 / max(settings.height - 1, 1)
        # Row 0 is the top of the image, where t = 1.
        j = settings.height - 1 - y

        for x in range(settings.width):
            r = g = b = 0.0
            for _ in range(settings.samples_per_pixel):
                s = (x + rng.random()) * width_scale
                t = (j + rng.random()) * height_scale
                ray = camera.get_ray(s, t, rng)
                color = ray_color(ray, scene, settings.max_depth, rng)
                r += color.x
                g += color.y
                b += color.z
            framebuffer.add_sample(x, y, Vector3(r, g, b), settings.samples_per_pixel)

    def render_rows(self, scene: Scene, camera: Camera, framebuffer: FrameBuffer, rows: List[int]):
        for y in rows:
            self.render_row(scene, camera, framebuffer, y)
            self._row_finished()

    def _row_finished(self):
        with self._progress_lock:
            self._rows_done += 1
            done = self._rows_done
        if self.progress is not None:
            self.progress(done, self.settings.height)
        logger.debug(f"Finished {done}/{self.settings.height} rows")

    def render(self, scene: Scene, camera: Camera) -> FrameBuffer:
        settings = self.settings
        framebuffer = FrameBuffer(settings.width, settings.height)
        partitions = partition_rows(settings.height, settings.workers)
        self._rows_done = 0

        logger.info(f"Rendering {settings.width}x{settings.height}, "
                    f"{settings.samples_per_pixel} spp, depth {settings.max_depth}, "
                    f"{len(partitions)} workers")
        start = time.perf_counter()

        with ThreadPoolExecutor(max_workers=len(partitions), thread_name_prefix="render") as pool:
            futures = [pool.submit(self.render_rows, scene, camera, framebuffer, rows)
                       for rows in partitions]
            for future in futures:
                # Propagates any worker exception.
                future.result()

        logger.info(f"Rendered in {time.perf_counter() - start:.2f}s")
        return framebuffer


def render(scene: Scene, camera: Camera, settings: RenderSettings,
           progress: Optional[ProgressCallback] = None) -> FrameBuffer:
    """Render scene through camera; blocks until every pixel is sampled."""
    return Renderer(settings, progress).render(scene, camera)
