"""Built-in demo scene.

A small outdoor-style scene lit only by the ambient (sky) color:

- Gray diffuse ground plane at y = 0
- Red diffuse sphere in the middle
- Polished metal sphere on the left, fuzzy gold metal sphere on the right
- Blue diffuse box, rotated about the y axis, behind the spheres
- Pinhole camera slightly above the ground looking at the middle sphere

Example:
    >>> from src.pathtracer.scene.demo import create_demo_scene
    >>> scene, camera = create_demo_scene()
    >>> len(scene)
    5
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from src.pathtracer.camera.pinhole import PinholeCamera
from src.pathtracer.core.sampler import hemisphere_jittered, sphere_random, standard_sphere
from src.pathtracer.materials.lambertian import Lambertian
from src.pathtracer.materials.metal import Metal
from src.pathtracer.scene.manager import Scene

# Light blue sky, used as the renderer ambient color for this scene
SKY_COLOR = (0.7, 0.8, 1.0, 1.0)

GROUND_ALBEDO = (0.5, 0.5, 0.5)
DIFFUSE_SPHERE_ALBEDO = (0.8, 0.3, 0.3)
MIRROR_ALBEDO = (0.9, 0.9, 0.9)
GOLD_ALBEDO = (0.8, 0.6, 0.2)
GOLD_FUZZINESS = 0.3
BOX_ALBEDO = (0.2, 0.3, 0.8)


@dataclass
class DemoSceneParams:
    """Sampling quality of the demo materials.

    Attributes:
        diffuse_samples_per_axis: Grid size of the diffuse hemisphere tables.
        diffuse_exponent: Cosine-power exponent (1 = diffuse).
        fuzz_samples: Unit-ball sample count of the fuzzy metal.
        seed: Seed for the sample tables, None for OS entropy.
    """

    diffuse_samples_per_axis: int = 8
    diffuse_exponent: float = 1.0
    fuzz_samples: int = 128
    seed: int | None = None


def create_demo_scene(
    params: DemoSceneParams | None = None,
) -> tuple[Scene, PinholeCamera]:
    """Create the demo scene and its camera.

    Args:
        params: Optional sample-table settings.

    Returns:
        A tuple of (Scene, PinholeCamera).
    """
    if params is None:
        params = DemoSceneParams()
    rng = np.random.default_rng(params.seed)

    def diffuse(albedo: tuple[float, float, float]) -> Lambertian:
        samples = hemisphere_jittered(
            params.diffuse_samples_per_axis, params.diffuse_exponent, rng=rng
        )
        return Lambertian(samples, albedo=albedo)

    scene = Scene()
    scene.add_plane(point=(0.0, 0.0, 0.0), normal=(0.0, 1.0, 0.0), material=diffuse(GROUND_ALBEDO))
    scene.add_sphere(center=(0.0, 0.5, 0.0), radius=0.5, material=diffuse(DIFFUSE_SPHERE_ALBEDO))
    scene.add_sphere(
        center=(-1.1, 0.5, 0.0),
        radius=0.5,
        material=Metal(standard_sphere(), albedo=MIRROR_ALBEDO),
    )
    scene.add_sphere(
        center=(1.1, 0.5, 0.0),
        radius=0.5,
        material=Metal(
            sphere_random(params.fuzz_samples, rng=rng),
            albedo=GOLD_ALBEDO,
            fuzziness=GOLD_FUZZINESS,
        ),
    )
    scene.add_box(
        center=(0.6, 0.4, -1.6),
        size=(0.8, 0.8, 0.8),
        material=diffuse(BOX_ALBEDO),
        rotation=(0.0, math.radians(30.0), 0.0),
    )

    camera = PinholeCamera(
        eye=(0.0, 1.0, 4.0),
        lookat=(0.0, 0.5, 0.0),
        up=(0.0, 1.0, 0.0),
        focal_distance=2.0,
    )
    return scene, camera
