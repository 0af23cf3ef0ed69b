"""Material dispatch.

Selects the scattering law for a hit from the material kind stored in the
surface registry. The set of kinds is closed (see MaterialKind); the final
branch is unreachable for registries built through the scene manager. It
trips a Taichi assertion when running with ``debug=True`` and otherwise
returns a NaN direction so that the corruption shows up in the output
instead of silently producing a zero ray.
"""

import taichi as ti
import taichi.math as tm

from pathtracer.core.ray import real, vec3
from pathtracer.materials.glass import sample_glass
from pathtracer.materials.material import MaterialKind
from pathtracer.materials.matte import sample_matte
from pathtracer.materials.metal import sample_metal

_MATTE = int(MaterialKind.MATTE)
_METAL = int(MaterialKind.METAL)
_GLASS = int(MaterialKind.GLASS)
_NAN = float("nan")


@ti.func
def face_normal(incident_direction: vec3, outward_normal: vec3) -> vec3:
    """Flip the outward normal so it faces against the incoming ray."""
    normal = outward_normal
    if tm.dot(outward_normal, incident_direction) > 0.0:
        normal = -outward_normal
    return normal


@ti.func
def scatter_material(
    kind: ti.i32,
    fuzz: real,
    ior: real,
    hollow: ti.i32,
    incident_direction: vec3,
    outward_normal: vec3,
) -> vec3:
    """Compute the outgoing direction at a hit.

    Args:
        kind: The MaterialKind value of the hit surface.
        fuzz: Metal fuzz.
        ior: Glass index of refraction.
        hollow: 1 if the hit sphere is hollow.
        incident_direction: The incoming ray direction.
        outward_normal: The unit normal pointing away from the surface.

    Returns:
        The scattered direction (unit length).
    """
    scattered = vec3(_NAN, _NAN, _NAN)

    if kind == _MATTE:
        scattered = sample_matte(face_normal(incident_direction, outward_normal))
    elif kind == _METAL:
        scattered = sample_metal(fuzz, incident_direction, face_normal(incident_direction, outward_normal))
    elif kind == _GLASS:
        scattered = sample_glass(ior, hollow, incident_direction, outward_normal)
    else:
        assert kind == _MATTE, "unknown material kind in surface registry"

    return scattered
