"""Scene module.

Components:
    manager: Scene container of primitives
    intersection: Nearest-hit resolution over a primitive list
    config: JSON render jobs (scene, camera and renderer settings)
    demo: Built-in demo scene

Note: config is NOT imported here because it depends on core.renderer,
which itself imports this package. Use src.pathtracer.scene.config directly.
"""

from .demo import DemoSceneParams, create_demo_scene
from .intersection import intersect_scene
from .manager import Scene

__all__ = [
    "Scene",
    "intersect_scene",
    "create_demo_scene",
    "DemoSceneParams",
]
