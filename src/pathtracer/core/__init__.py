from pathtracer.core.vector import Vector3, BLACK, WHITE
from pathtracer.core.ray import Ray
from pathtracer.core.aabb import AABB
from pathtracer.core.onb import ONB
from pathtracer.core.errors import EmptySceneError, DegenerateCameraError

__all__ = [
    "Vector3",
    "BLACK",
    "WHITE",
    "Ray",
    "AABB",
    "ONB",
    "EmptySceneError",
    "DegenerateCameraError",
]
