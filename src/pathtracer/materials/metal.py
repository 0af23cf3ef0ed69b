"""Metal (fuzzy specular) scattering.

The incoming direction is mirrored about the normal, as given and without
normalization, then perturbed by a random unit vector scaled by the fuzz:

    direction = unit(d - 2 (d . n) n + fuzz * unit(g)),  g ~ N(0, I3)

With large fuzz the perturbed direction can point below the surface. Such
rays are not absorbed or clamped; they continue through the surface.

Example:
    >>> # Inside a kernel:
    >>> # direction = sample_metal(fuzz, incident_direction, normal)
"""

import taichi as ti

from pathtracer.core.ray import random_gaussian, real, reflect, unit, vec3


@ti.func
def scatter_metal(fuzz: real, incident_direction: vec3, normal: vec3, gaussian: vec3) -> vec3:
    """Compute the fuzzy mirror direction from explicit random draws.

    Args:
        fuzz: Perturbation scale. 0 gives a perfect mirror.
        incident_direction: The incoming ray direction (any length).
        normal: The surface normal at the hit point (unit length).
        gaussian: Three standard-normal deviates.

    Returns:
        The scattered direction (unit length).
    """
    reflected = reflect(incident_direction, normal)
    return unit(reflected + fuzz * unit(gaussian))


@ti.func
def sample_metal(fuzz: real, incident_direction: vec3, normal: vec3) -> vec3:
    """Draw a fuzzy mirror direction from the Taichi random stream."""
    return scatter_metal(fuzz, incident_direction, normal, random_gaussian())
