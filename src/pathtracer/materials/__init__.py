"""Materials module for scattering models.

Components:
    material: Material interface and ScatterResult
    lambertian: Diffuse reflection from a hemisphere sample table
    metal: Mirror reflection with optional fuzz
    debug: NullMaterial (absorbs) and NormalMaterial (normal as color)
"""

from .debug import NormalMaterial, NullMaterial
from .lambertian import Lambertian
from .material import SCATTER_OFFSET, Material, ScatterResult
from .metal import Metal

__all__ = [
    "Material",
    "ScatterResult",
    "SCATTER_OFFSET",
    "Lambertian",
    "Metal",
    "NullMaterial",
    "NormalMaterial",
]
