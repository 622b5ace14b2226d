from pathtracer.materials.perlin import Perlin, NoiseKind
from pathtracer.materials.textures import (
    Texture,
    SolidColor,
    CheckerTexture,
    ImageTexture,
    NoiseTexture,
    as_texture,
)
from pathtracer.materials.texture_loader import load_texture, create_image_material
from pathtracer.materials.pdf import PDF, CosinePDF, SpherePDF, HittablePDF, MixturePDF
from pathtracer.materials.material import Material, ScatterRecord
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.diffuse_light import DiffuseLight
from pathtracer.materials.isotropic import Isotropic

__all__ = [
    "Perlin",
    "NoiseKind",
    "Texture",
    "SolidColor",
    "CheckerTexture",
    "ImageTexture",
    "NoiseTexture",
    "as_texture",
    "load_texture",
    "create_image_material",
    "PDF",
    "CosinePDF",
    "SpherePDF",
    "HittablePDF",
    "MixturePDF",
    "Material",
    "ScatterRecord",
    "Lambertian",
    "Metal",
    "Dielectric",
    "DiffuseLight",
    "Isotropic",
]
