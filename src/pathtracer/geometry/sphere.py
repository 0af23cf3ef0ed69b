"""Sphere primitive and ray-sphere intersection.

The intersection solves |O + tD - C|^2 = r^2 in its half-b form:

    a      = D . D
    half_b = (O - C) . D
    c      = |O - C|^2 - r^2
    disc   = half_b^2 - a c

The smaller root is preferred when it lies past the minimum distance;
otherwise the larger root is returned. For a ray starting outside the sphere
this is the entry point, for a ray starting inside it is the exit point,
which is what dielectric interiors rely on.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from pathtracer.geometry.sphere import Sphere, intersect_sphere, vec3
    >>> # Inside a kernel:
    >>> # t = intersect_sphere(origin, direction, sphere, 1e-3)
"""

import taichi as ti
import taichi.math as tm

from pathtracer.core.ray import real, vec3

# Returned by intersect_sphere when the ray misses
NO_HIT = -1.0


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere.
        hollow: 1 if the sphere bounds a cavity of the surrounding medium,
            which swaps the refraction ratios used on entry and exit.
    """

    center: vec3
    radius: real
    hollow: ti.i32


@ti.func
def intersect_sphere(
    ray_origin: vec3,
    ray_direction: vec3,
    sphere: Sphere,
    min_distance: real,
) -> real:
    """Find the ray parameter at which a ray meets a sphere.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction vector of the ray (need not be unit).
        sphere: The sphere to test.
        min_distance: Roots at or below this distance fall back to the
            larger root.

    Returns:
        The parameter t of the intersection, or NO_HIT if the discriminant is
        negative. The returned t may still be below min_distance when both
        roots are; the resolver rejects those.
    """
    oc = ray_origin - sphere.center
    a = tm.dot(ray_direction, ray_direction)
    half_b = tm.dot(oc, ray_direction)
    c = tm.dot(oc, oc) - sphere.radius * sphere.radius
    discriminant = half_b * half_b - a * c

    t = NO_HIT
    if discriminant >= 0.0:
        sqrt_d = ti.sqrt(discriminant)
        t = (-half_b - sqrt_d) / a
        if t <= min_distance:
            t = (-half_b + sqrt_d) / a

    return t


@ti.func
def outward_normal(sphere: Sphere, point: vec3) -> vec3:
    """Unit normal pointing away from the sphere center at a surface point."""
    return (point - sphere.center) / sphere.radius


@ti.func
def make_sphere(center: vec3, radius: real, hollow: ti.i32) -> Sphere:
    """Create a sphere inside a kernel."""
    return Sphere(center=center, radius=radius, hollow=hollow)
