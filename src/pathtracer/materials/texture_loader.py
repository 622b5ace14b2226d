# materials/texture_loader.py
import logging
import os
from PIL import Image, UnidentifiedImageError
from pathtracer.materials.textures import ImageTexture

logger = logging.getLogger(__name__)


def load_texture(image_path: str) -> ImageTexture:
    """
    Strict counterpart of ImageTexture(path): a bad file is an error here,
    not a cyan placeholder.

    Raises:
        FileNotFoundError: no file at image_path
        ValueError: the file exists but Pillow cannot decode it
    """
    if not os.path.exists(image_path):
        raise FileNotFoundError(f"Texture file not found: {image_path}")

    try:
        with Image.open(image_path) as img:
            img.verify()
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError(f"Unreadable texture {image_path}: {e}") from e

    texture = ImageTexture(image_path)
    logger.debug(f"Loaded texture {image_path} ({texture.width}x{texture.height})")
    return texture


def create_image_material(image_path: str, material_class, **material_params):
    """
    Build material_class around the texture at image_path, e.g.
    create_image_material("earth.jpg", Metal, fuzz=0.1).
    """
    return material_class(load_texture(image_path), **material_params)
