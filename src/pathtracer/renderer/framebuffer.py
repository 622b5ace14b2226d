# renderer/framebuffer.py
from typing import Tuple
import numpy as np
from pathtracer.core.vector import Vector3


class FrameBuffer:
    """
    Per-pixel radiance sums and sample counts. Row 0 is the top of the image.

    Writers must own disjoint rows; there is no locking.
    """
    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.radiance = np.zeros((height, width, 3), dtype=np.float64)
        self.samples = np.zeros((height, width), dtype=np.int64)

    def add_sample(self, x: int, y: int, color: Vector3, count: int = 1):
        """Add a (summed) radiance estimate covering count samples to pixel (x, y)."""
        self._check(x, y)
        pixel = self.radiance[y, x]
        pixel[0] += color.x
        pixel[1] += color.y
        pixel[2] += color.z
        self.samples[y, x] += count

    def get(self, x: int, y: int) -> Tuple[Vector3, int]:
        self._check(x, y)
        r, g, b = self.radiance[y, x]
        return Vector3(float(r), float(g), float(b)), int(self.samples[y, x])

    def _check(self, x: int, y: int):
        # numpy would wrap negative indices around
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} frame")

    def to_array(self) -> np.ndarray:
        """Mean radiance per pixel as a (height, width, 3) array; unsampled pixels are black."""
        counts = np.maximum(self.samples, 1)[:, :, np.newaxis]
        return self.radiance / counts
