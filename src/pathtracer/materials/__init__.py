"""Materials module for light scattering.

Components:
    material: Material kinds and parameters (Python side)
    matte: Lambertian scattering
    metal: Mirror reflection with optional fuzz
    glass: Refraction with Schlick reflectance
    scatter: Dispatch on material kind

Each scattering model has a deterministic form taking its random draws as
arguments (scatter_*) and a sampling form drawing them itself (sample_*).
"""

from .glass import is_entering, refraction_ratio, sample_glass, scatter_glass
from .material import DEFAULT_REFLECTANCE, DEFAULT_REFRACTIVE_INDEX, Material, MaterialKind
from .matte import sample_matte, scatter_matte
from .metal import sample_metal, scatter_metal
from .scatter import face_normal, scatter_material

__all__ = [
    # Descriptions
    "Material",
    "MaterialKind",
    "DEFAULT_REFLECTANCE",
    "DEFAULT_REFRACTIVE_INDEX",
    # Matte
    "scatter_matte",
    "sample_matte",
    # Metal
    "scatter_metal",
    "sample_metal",
    # Glass
    "scatter_glass",
    "sample_glass",
    "is_entering",
    "refraction_ratio",
    # Dispatch
    "face_normal",
    "scatter_material",
]
