"""Ray data structure and vector utilities for the path tracer.

This module provides the fundamental Ray dataclass and the vector kernel used
by every other part of the renderer: arithmetic helpers, reflection and
refraction, the Schlick approximation and the random deviates the scattering
models consume. All operations are Taichi functions so they can be called from
inside kernels.

Vectors double as positions, directions and colors; nothing distinguishes
them structurally. All arithmetic is float64.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from pathtracer.core.ray import Ray, ray_at, vec3
    >>> # Inside a kernel:
    >>> # ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 1.0, 0.0))
    >>> # point = ray_at(ray, 5.0)
"""

import taichi as ti
import taichi.math as tm

# Scalar and vector types used throughout the renderer
real = ti.f64
vec3 = ti.types.vector(3, real)


@ti.dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction vector of the ray (vec3). Not required to be
            unit length; scattering models always return unit directions.
    """

    origin: vec3
    direction: vec3


@ti.func
def ray_at(ray: Ray, t: real) -> vec3:
    """Compute the point origin + t * direction."""
    return ray.origin + t * ray.direction


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    """Create a ray from origin and direction inside a kernel."""
    return Ray(origin=origin, direction=direction)


# =============================================================================
# Vector Utility Functions
# =============================================================================


@ti.func
def length(v: vec3) -> real:
    """Euclidean length of a vector."""
    return ti.sqrt(tm.dot(v, v))


@ti.func
def length_squared(v: vec3) -> real:
    """Squared length of a vector (no square root)."""
    return tm.dot(v, v)


@ti.func
def unit(v: vec3) -> vec3:
    """Scale a vector to unit length.

    A zero-length input yields NaN components; callers must guarantee a
    non-degenerate vector.
    """
    return v / ti.sqrt(tm.dot(v, v))


@ti.func
def dot(a: vec3, b: vec3) -> real:
    """Dot product a . b."""
    return tm.dot(a, b)


@ti.func
def cross(a: vec3, b: vec3) -> vec3:
    """Cross product a x b."""
    return tm.cross(a, b)


@ti.func
def power(v: vec3, exponent: real) -> vec3:
    """Raise each component to the given power (used for gamma correction)."""
    return vec3(ti.pow(v.x, exponent), ti.pow(v.y, exponent), ti.pow(v.z, exponent))


@ti.func
def lerp(a: vec3, b: vec3, s: real) -> vec3:
    """Linear interpolation: a at s = 0, b at s = 1."""
    return (1.0 - s) * a + s * b


@ti.func
def reflect(incident: vec3, normal: vec3) -> vec3:
    """Mirror an incident vector about a unit normal.

    The incident vector is used as given, without normalization, so the
    reflected vector has the same length.

    Args:
        incident: The incoming direction vector (pointing toward the surface).
        normal: The surface normal (unit length).

    Returns:
        incident - 2 (incident . normal) normal
    """
    return incident - 2.0 * tm.dot(incident, normal) * normal


@ti.func
def refract(unit_incident: vec3, normal: vec3, cos_theta: real, ratio: real) -> vec3:
    """Refract a unit incident vector through a surface using Snell's law.

    The refracted vector is split into a component perpendicular to the normal
    and one parallel to it:

        perp = ratio * (unit_incident + normal * cos_theta)
        parallel = -normal * sqrt(|1 - |perp|^2|)

    Total internal reflection must be ruled out by the caller; the absolute
    value only guards against tiny negative arguments from rounding.

    Args:
        unit_incident: The incoming direction (unit length).
        normal: The surface normal facing against the incident ray.
        cos_theta: Cosine of the incident angle, -normal . unit_incident.
        ratio: Ratio of refractive indices n_incident / n_transmitted.

    Returns:
        The refracted direction (unit length up to rounding).
    """
    perp = ratio * (unit_incident + normal * cos_theta)
    parallel = -normal * ti.sqrt(ti.abs(1.0 - tm.dot(perp, perp)))
    return perp + parallel


@ti.func
def schlick_reflectance(cosine: real, ratio: real) -> real:
    """Fresnel reflectance using Schlick's approximation.

    Args:
        cosine: Cosine of the angle between incident direction and normal.
        ratio: Ratio of refractive indices.

    Returns:
        r0 + (1 - r0)(1 - cosine)^5 with r0 = ((1 - ratio) / (1 + ratio))^2.
    """
    r0 = (1.0 - ratio) / (1.0 + ratio)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * ti.pow(1.0 - cosine, 5)


# =============================================================================
# Random Deviates
# =============================================================================


@ti.func
def random_uniform() -> real:
    """A uniform deviate in [0, 1)."""
    return ti.random(real)


@ti.func
def random_gaussian() -> vec3:
    """Three independent standard-normal deviates."""
    return vec3(ti.randn(real), ti.randn(real), ti.randn(real))


@ti.func
def random_unit_vector() -> vec3:
    """A random unit vector, uniformly distributed on the sphere.

    Normalizing an isotropic Gaussian vector gives a uniform direction with
    no rejection loop.
    """
    return unit(random_gaussian())
