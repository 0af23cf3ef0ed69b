"""Matte (Lambertian diffuse) scattering.

The bounce direction is the face normal plus a uniformly distributed unit
vector, normalized:

    direction = unit(n + unit(g)),  g ~ N(0, I3)

Adding a point on the unit sphere to the normal gives a cosine-weighted
distribution over the hemisphere around n. The degenerate case g parallel to
-n has probability zero and is not handled.

Example:
    >>> # Inside a kernel:
    >>> # direction = sample_matte(normal)
"""

import taichi as ti

from pathtracer.core.ray import random_gaussian, unit, vec3


@ti.func
def scatter_matte(normal: vec3, gaussian: vec3) -> vec3:
    """Compute the diffuse bounce direction from explicit random draws.

    Args:
        normal: The face normal at the hit point (unit length, facing the
            incoming ray).
        gaussian: Three standard-normal deviates.

    Returns:
        The scattered direction (unit length).
    """
    return unit(normal + unit(gaussian))


@ti.func
def sample_matte(normal: vec3) -> vec3:
    """Draw a diffuse bounce direction from the Taichi random stream."""
    return scatter_matte(normal, random_gaussian())
