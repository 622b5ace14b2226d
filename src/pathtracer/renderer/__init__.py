from pathtracer.renderer.scene import Scene, RenderSettings, solid_background, sky_background
from pathtracer.renderer.framebuffer import FrameBuffer
from pathtracer.renderer.integrator import ray_color
from pathtracer.renderer.raytracer import Renderer, render
from pathtracer.renderer.tone_mapping import gamma_correct, reinhard_tone_mapping, save_image

__all__ = [
    "Scene",
    "RenderSettings",
    "solid_background",
    "sky_background",
    "FrameBuffer",
    "ray_color",
    "Renderer",
    "render",
    "gamma_correct",
    "reinhard_tone_mapping",
    "save_image",
]
