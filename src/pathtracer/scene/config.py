"""JSON render-job descriptions.

A render job is a JSON document with four sections:

    {
        "renderer": {
            "width": 320, "height": 240, "pixel_size": 0.01,
            "max_trace_depth": 8, "ambient_color": [0.5, 0.7, 1.0, 1.0],
            "num_render_threads": null, "seed": 7,
            "pixel_sampler": {"type": "jittered", "samples_per_axis": 4}
        },
        "camera": {
            "type": "pinhole", "eye": [0, 1, 4], "lookat": [0, 0.5, 0],
            "up": [0, 1, 0], "focal_distance": 2.0
        },
        "materials": {
            "ground": {"type": "lambertian", "albedo": [0.5, 0.5, 0.5],
                       "sampler": {"type": "jittered", "samples_per_axis": 8,
                                   "exponent": 1.0}},
            "mirror": {"type": "metal", "albedo": [0.8, 0.8, 0.8],
                       "fuzziness": 0.0,
                       "sampler": {"type": "random", "count": 64}}
        },
        "objects": [
            {"type": "plane", "point": [0, 0, 0], "normal": [0, 1, 0],
             "material": "ground"},
            {"type": "sphere", "center": [0, 0.5, 0], "radius": 0.5,
             "material": "mirror"},
            {"type": "box", "center": [1, 0.5, 0], "size": [1, 1, 1],
             "rotation": [0, 0.5, 0], "material": "ground"}
        ]
    }

Colors may be given as RGB (alpha 1) or RGBA. Every malformed entry is
reported as a ValueError naming the offending section.

Example:
    >>> from src.pathtracer.scene.config import load_render_job
    >>> job = load_render_job("scene.json")
    >>> renderer = Renderer(job.config)
    >>> renderer.render(job.camera, job.scene)
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import numpy as np

from src.pathtracer.camera.base import Camera
from src.pathtracer.camera.orthographic import OrthographicCamera
from src.pathtracer.camera.pinhole import PinholeCamera
from src.pathtracer.core import sampler as samplers
from src.pathtracer.core.renderer import RendererConfig
from src.pathtracer.core.sampler import DEFAULT_NUM_SETS, SampleSet
from src.pathtracer.materials.debug import NormalMaterial, NullMaterial
from src.pathtracer.materials.lambertian import Lambertian
from src.pathtracer.materials.material import Material
from src.pathtracer.materials.metal import Metal
from src.pathtracer.scene.manager import Scene

logger = logging.getLogger(__name__)

MATERIAL_TYPES = ("lambertian", "metal", "null", "normal")
OBJECT_TYPES = ("sphere", "plane", "box")
CAMERA_TYPES = ("pinhole", "orthographic")


@dataclass
class RenderJob:
    """Everything needed for one render() call.

    Attributes:
        scene: The primitives with their materials.
        camera: The view.
        config: Renderer settings.
    """

    scene: Scene
    camera: Camera
    config: RendererConfig


def _mapping(data: Any, section: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"Expected an object for {section}, got {type(data).__name__}")
    return data


def _require(data: Mapping[str, Any], key: str, section: str) -> Any:
    _mapping(data, section)
    try:
        return data[key]
    except KeyError:
        raise ValueError(f"Missing '{key}' in {section}") from None


def _type_of(data: Mapping[str, Any], allowed: tuple[str, ...], section: str) -> str:
    kind = str(_require(data, "type", section)).lower()
    if kind not in allowed:
        raise ValueError(f"Unknown {section} type '{kind}', expected one of {', '.join(allowed)}")
    return kind


def build_sampler(
    data: Mapping[str, Any] | None,
    kind: str,
    rng: np.random.Generator | None = None,
) -> SampleSet:
    """Build a sample table from its description.

    Args:
        data: The sampler description. None selects the single-sample
            "standard" table of the given kind.
        kind: "square" for pixel samplers, "hemisphere" for diffuse
            materials, "sphere" for metal fuzz.
        rng: Generator for jitter, rejection sampling and shuffles.

    Raises:
        ValueError: If the description is invalid.
    """
    if data is None:
        data = {"type": "standard"}
    section = f"{kind} sampler"
    _mapping(data, section)
    num_sets = int(data.get("num_sets", DEFAULT_NUM_SETS))

    if kind == "sphere":
        sampler_type = _type_of(data, ("standard", "random"), section)
        if sampler_type == "standard":
            return samplers.standard_sphere(num_sets=num_sets)
        count = int(_require(data, "count", section))
        return samplers.sphere_random(count, num_sets=num_sets, rng=rng)

    sampler_type = _type_of(data, ("standard", "regular", "jittered"), section)
    if kind == "square":
        if sampler_type == "standard":
            return samplers.standard(num_sets=num_sets)
        n = int(_require(data, "samples_per_axis", section))
        if sampler_type == "regular":
            return samplers.regular(n, num_sets=num_sets, rng=rng)
        return samplers.jittered(n, num_sets=num_sets, rng=rng)

    if kind == "hemisphere":
        if sampler_type == "standard":
            return samplers.standard_hemisphere(num_sets=num_sets)
        n = int(_require(data, "samples_per_axis", section))
        e = float(data.get("exponent", 1.0))
        if sampler_type == "regular":
            return samplers.hemisphere_regular(n, e, num_sets=num_sets, rng=rng)
        return samplers.hemisphere_jittered(n, e, num_sets=num_sets, rng=rng)

    raise ValueError(f"Unknown sampler kind '{kind}'")


def build_material(
    data: Mapping[str, Any],
    rng: np.random.Generator | None = None,
) -> Material:
    """Build a material from its description."""
    material_type = _type_of(data, MATERIAL_TYPES, "material")
    if material_type == "lambertian":
        return Lambertian(
            build_sampler(data.get("sampler"), "hemisphere", rng),
            albedo=_require(data, "albedo", "lambertian material"),
        )
    if material_type == "metal":
        return Metal(
            build_sampler(data.get("sampler"), "sphere", rng),
            albedo=_require(data, "albedo", "metal material"),
            fuzziness=float(data.get("fuzziness", 0.0)),
        )
    if material_type == "normal":
        return NormalMaterial()
    return NullMaterial()


def build_camera(data: Mapping[str, Any]) -> Camera:
    """Build a camera from its description."""
    camera_type = _type_of(data, CAMERA_TYPES, "camera")
    eye = _require(data, "eye", "camera")
    lookat = _require(data, "lookat", "camera")
    up = data.get("up", (0.0, 1.0, 0.0))
    if camera_type == "pinhole":
        return PinholeCamera(eye, lookat, up, float(_require(data, "focal_distance", "camera")))
    return OrthographicCamera(eye, lookat, up)


def build_scene(
    data: Mapping[str, Any],
    rng: np.random.Generator | None = None,
) -> Scene:
    """Build a scene from its "materials" and "objects" sections.

    Objects reference materials by name; a material used by several objects
    is built once and shared.

    Raises:
        ValueError: On unknown object or material types and on references
            to undefined materials.
    """
    _mapping(data, "scene")
    material_data = _mapping(data.get("materials", {}), "materials")
    materials = {name: build_material(desc, rng) for name, desc in material_data.items()}

    objects = data.get("objects", [])
    if not isinstance(objects, list):
        raise ValueError(f"Expected a list of objects, got {type(objects).__name__}")

    scene = Scene()
    for index, obj in enumerate(objects):
        section = f"object {index}"
        object_type = _type_of(obj, OBJECT_TYPES, section)
        material_name = _require(obj, "material", section)
        if material_name not in materials:
            raise ValueError(f"{section} references unknown material '{material_name}'")
        material = materials[material_name]

        if object_type == "sphere":
            scene.add_sphere(
                _require(obj, "center", section), float(_require(obj, "radius", section)), material
            )
        elif object_type == "plane":
            scene.add_plane(_require(obj, "point", section), _require(obj, "normal", section), material)
        else:
            scene.add_box(
                _require(obj, "center", section),
                _require(obj, "size", section),
                material,
                rotation=obj.get("rotation", (0.0, 0.0, 0.0)),
            )

    logger.debug("Built scene with %d materials and %d objects", len(materials), len(scene))
    return scene


def build_renderer_config(
    data: Mapping[str, Any],
    rng: np.random.Generator | None = None,
) -> RendererConfig:
    """Build renderer settings from the "renderer" section."""
    _mapping(data, "renderer")
    threads = data.get("num_render_threads")
    seed = data.get("seed")
    return RendererConfig(
        image_width=int(_require(data, "width", "renderer")),
        image_height=int(_require(data, "height", "renderer")),
        pixel_size=float(_require(data, "pixel_size", "renderer")),
        pixel_sampler=build_sampler(data.get("pixel_sampler"), "square", rng),
        max_trace_depth=int(data.get("max_trace_depth", 8)),
        ambient_color=data.get("ambient_color", (0.0, 0.0, 0.0, 1.0)),
        num_render_threads=None if threads is None else int(threads),
        seed=None if seed is None else int(seed),
    )


def load_render_job(
    source: str | Path | Mapping[str, Any],
    rng: np.random.Generator | None = None,
) -> RenderJob:
    """Load a render job from a JSON file or an already parsed mapping.

    When no generator is given and the renderer section has a seed, the
    sample tables are generated from that seed too, so the whole job is
    reproducible.

    Raises:
        ValueError: If the document is malformed.
        OSError: If the file cannot be read.
    """
    if isinstance(source, Mapping):
        data = source
    else:
        path = Path(source)
        logger.info("Loading render job from %s", path)
        try:
            data = json.loads(path.read_text())
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON in {path}: {exc}") from exc

    _mapping(data, "render job")
    renderer_data = _mapping(_require(data, "renderer", "render job"), "renderer")
    if rng is None and renderer_data.get("seed") is not None:
        rng = np.random.default_rng(int(renderer_data["seed"]))

    config = build_renderer_config(renderer_data, rng)
    camera = build_camera(_require(data, "camera", "render job"))
    scene = build_scene(data, rng)
    return RenderJob(scene=scene, camera=camera, config=config)
