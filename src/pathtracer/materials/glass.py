"""Glass (dielectric) scattering.

A dielectric both reflects and refracts. Given the outward normal n and the
incoming direction d:

1. Entry or exit is decided by the sign of n . d. A positive sign means the
   ray is leaving the medium, and n is flipped to face it.
2. The refraction ratio depends on the direction and on the hollow flag:

       ============  ===========  ===========
                     solid        hollow
       ============  ===========  ===========
       entering      1 / ior      ior
       exiting       ior          1 / ior
       ============  ===========  ===========

   A hollow sphere bounds a cavity of the surrounding medium, so nesting a
   hollow sphere inside a solid one of the same index models a glass shell.
3. cos_theta = -n . unit(d).
4. If ratio * sin_theta > 1 the ray is totally internally reflected.
5. Otherwise one uniform deviate is drawn and compared against the Schlick
   reflectance to choose between reflection and refraction.

Example:
    >>> # Inside a kernel:
    >>> # direction = sample_glass(ior, hollow, incident_direction, outward_normal)
"""

import taichi as ti
import taichi.math as tm

from pathtracer.core.ray import (
    random_uniform,
    real,
    reflect,
    refract,
    schlick_reflectance,
    unit,
    vec3,
)


@ti.func
def is_entering(incident_direction: vec3, outward_normal: vec3) -> ti.i32:
    """1 if the ray crosses the surface from outside, 0 if from inside."""
    return 1 if tm.dot(outward_normal, incident_direction) <= 0.0 else 0


@ti.func
def refraction_ratio(ior: real, entering: ti.i32, hollow: ti.i32) -> real:
    """Select n_incident / n_transmitted for a crossing.

    Args:
        ior: The material's index of refraction.
        entering: 1 if the ray enters the sphere.
        hollow: 1 if the sphere is hollow.

    Returns:
        1 / ior when entering a solid sphere or exiting a hollow one,
        ior when exiting a solid sphere or entering a hollow one.
    """
    ratio = ior
    if entering != hollow:
        ratio = 1.0 / ior
    return ratio


@ti.func
def crossing(ior: real, hollow: ti.i32, incident_direction: vec3, outward_normal: vec3):
    """Orient the normal against the ray and pick the refraction ratio.

    Returns:
        A tuple (normal, ratio, cos_theta, can_refract) where normal faces the
        incoming ray and can_refract is 0 on total internal reflection.
    """
    entering = is_entering(incident_direction, outward_normal)
    normal = outward_normal
    if entering == 0:
        normal = -outward_normal

    ratio = refraction_ratio(ior, entering, hollow)

    cos_theta = tm.min(-tm.dot(normal, unit(incident_direction)), 1.0)
    sin_theta = ti.sqrt(1.0 - cos_theta * cos_theta)
    can_refract = 1 if ratio * sin_theta <= 1.0 else 0
    return normal, ratio, cos_theta, can_refract


@ti.func
def scatter_glass(
    ior: real,
    hollow: ti.i32,
    incident_direction: vec3,
    outward_normal: vec3,
    uniform: real,
) -> vec3:
    """Compute the reflected or refracted direction from an explicit draw.

    Args:
        ior: Index of refraction.
        hollow: 1 if the hit sphere is hollow.
        incident_direction: The incoming ray direction (any length).
        outward_normal: The normal pointing away from the sphere center.
        uniform: A uniform deviate in [0, 1). Ignored on total internal
            reflection.

    Returns:
        The scattered direction (unit length).
    """
    normal, ratio, cos_theta, can_refract = crossing(ior, hollow, incident_direction, outward_normal)
    unit_direction = unit(incident_direction)

    scattered = vec3(0.0, 0.0, 0.0)
    if can_refract == 0:
        scattered = reflect(unit_direction, normal)
    elif uniform < schlick_reflectance(cos_theta, ratio):
        scattered = reflect(unit_direction, normal)
    else:
        scattered = refract(unit_direction, normal, cos_theta, ratio)

    return unit(scattered)


@ti.func
def sample_glass(ior: real, hollow: ti.i32, incident_direction: vec3, outward_normal: vec3) -> vec3:
    """Scatter off glass, drawing a uniform deviate only when refraction is possible."""
    normal, ratio, cos_theta, can_refract = crossing(ior, hollow, incident_direction, outward_normal)

    uniform = 1.0
    if can_refract == 1:
        uniform = random_uniform()

    return scatter_glass(ior, hollow, incident_direction, outward_normal, uniform)
