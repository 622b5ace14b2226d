# materials/diffuse_light.py
from typing import Optional, Union
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3, BLACK
from pathtracer.materials.material import Material, ScatterRecord
from pathtracer.materials.textures import Texture, as_texture


class DiffuseLight(Material):
    """
    Emissive material that provides constant radiance with optional texture support.

    Only the front face emits; flip the face of the object to light the other side.
    """
    def __init__(self, emit: Union[Vector3, Texture]):
        self.texture = as_texture(emit)

    def scatter(self, ray_in: Ray, rec, rng) -> Optional[ScatterRecord]:
        """
        Emissive materials do not scatter rays.
        """
        return None

    def emitted(self, rec, u: float, v: float, p: Vector3) -> Vector3:
        """
        Return the emitted radiance, which can be textured.

        Args:
            rec: The hit record, used for the face orientation.
            u (float): The horizontal texture coordinate.
            v (float): The vertical texture coordinate.
            p (Vector3): The hit point.

        Returns:
            Vector3: The emission color from the texture, black on back faces.
        """
        if not rec.front_face:
            return BLACK
        return self.texture.value(u, v, p)
