"""Scanline Monte Carlo path tracer.

This package renders scenes of spheres, planes and oriented boxes with
diffuse and metallic materials. Scanlines are traced in parallel by a pool
of worker threads; sample tables are precomputed with Taichi kernels.

Subpackages:
    core: Vectors, colors, sample tables, the path integrator and renderer
    geometry: Ray-intersectable primitives
    materials: Scattering models
    camera: Orthographic and pinhole ray generation
    scene: Scene container, JSON render jobs and the demo scene
    preview: Image export
"""

__version__ = "0.1.0"
