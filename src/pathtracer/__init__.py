"""CPU path tracer.

Subpackages:
    core: vectors, rays, bounding boxes and sampling helpers
    geometry: hittable primitives, transforms, volumes and the BVH
    materials: textures, Perlin noise, materials and sampling PDFs
    camera: thin-lens camera with motion blur
    renderer: scene, integrator, threaded driver and image output
"""

__version__ = "0.1.0"
