import logging
import math
from typing import Union
import numpy as np
from PIL import Image
from pathtracer.core.vector import Vector3
from pathtracer.materials.perlin import NoiseKind, Perlin

logger = logging.getLogger(__name__)


class Texture:
    """Base class for all textures."""
    def value(self, u: float, v: float, p: Vector3) -> Vector3:
        """Color of the texture at surface coordinates (u, v) and world point p."""
        raise NotImplementedError("value() must be implemented by texture subclasses.")


def as_texture(color_or_texture: Union[Vector3, Texture]) -> Texture:
    """Wrap a plain color into a SolidColor, pass textures through."""
    if isinstance(color_or_texture, Vector3):
        return SolidColor(color_or_texture)
    return color_or_texture


class SolidColor(Texture):
    """A solid color texture."""
    def __init__(self, color: Vector3):
        self.color = color

    def value(self, u: float, v: float, p: Vector3) -> Vector3:
        return self.color


class CheckerTexture(Texture):
    """
    3D checker pattern: the sign of a product of sines over world coordinates
    picks between the even and odd textures.
    """
    def __init__(self, even: Union[Vector3, Texture], odd: Union[Vector3, Texture],
                 scale: float = 10.0):
        self.even = as_texture(even)
        self.odd = as_texture(odd)
        self.scale = scale

    def value(self, u: float, v: float, p: Vector3) -> Vector3:
        sines = (math.sin(self.scale * p.x)
                 * math.sin(self.scale * p.y)
                 * math.sin(self.scale * p.z))
        if sines < 0:
            return self.odd.value(u, v, p)
        return self.even.value(u, v, p)


class ImageTexture(Texture):
    """A texture from an image file."""
    # Returned when the image could not be loaded, so the problem stays visible.
    MISSING_COLOR = Vector3(0.0, 1.0, 1.0)

    def __init__(self, image_path: str):
        self.image_path = image_path
        try:
            with Image.open(image_path) as img:
                if img.mode != 'RGB':
                    img = img.convert('RGB')
                # Convert to numpy array for faster access
                self.data = np.asarray(img, dtype=np.float64) / 255.0
                self.width = img.width
                self.height = img.height
        except OSError as e:
            logger.warning(f"Could not load texture {image_path}: {e}")
            self.data = None
            self.width = 0
            self.height = 0

    @classmethod
    def from_array(cls, data: np.ndarray) -> "ImageTexture":
        """Build a texture from an (height, width, 3) array of floats in [0, 1]."""
        texture = cls.__new__(cls)
        texture.image_path = None
        texture.data = np.asarray(data, dtype=np.float64)
        texture.height, texture.width = texture.data.shape[:2]
        return texture

    def value(self, u: float, v: float, p: Vector3) -> Vector3:
        if self.data is None:
            return self.MISSING_COLOR

        u = min(max(u, 0.0), 1.0)
        v = 1.0 - min(max(v, 0.0), 1.0)  # image rows run top to bottom

        # Convert to pixel coordinates
        x = min(int(u * self.width), self.width - 1)
        y = min(int(v * self.height), self.height - 1)

        color = self.data[y, x]
        return Vector3(float(color[0]), float(color[1]), float(color[2]))


class NoiseTexture(Texture):
    """
    Grey-scale procedural texture driven by Perlin noise.
    """
    def __init__(self, perlin: Perlin, kind: NoiseKind = NoiseKind.MARBLE, scale: float = 1.0):
        self.perlin = perlin
        self.kind = kind
        self.scale = scale

    def intensity(self, p: Vector3) -> float:
        scaled = p * self.scale
        if self.kind is NoiseKind.TURBULENCE:
            return self.perlin.turbulence(scaled)
        if self.kind is NoiseKind.MARBLE:
            return 0.5 * (1.0 + math.sin(self.scale * p.z + 10.0 * self.perlin.turbulence(p)))
        if self.kind is NoiseKind.WITH_RANDOM_VECTORS:
            return 0.5 * (1.0 + self.perlin.noise(scaled, self.kind))
        return self.perlin.noise(scaled, self.kind)

    def value(self, u: float, v: float, p: Vector3) -> Vector3:
        n = self.intensity(p)
        return Vector3(n, n, n)
