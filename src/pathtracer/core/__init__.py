"""Core rendering module.

Components:
    ray: Ray data structure, vector kernel and random sampling helpers
    estimator: Depth-bounded path estimator and sky background
    sampler: Per-pixel sampling, averaging and output conversion

All compute-intensive operations are Taichi functions and kernels.
"""

from .ray import (
    Ray,
    cross,
    dot,
    length,
    length_squared,
    lerp,
    make_ray,
    power,
    random_gaussian,
    random_uniform,
    random_unit_vector,
    ray_at,
    real,
    reflect,
    refract,
    schlick_reflectance,
    unit,
    vec3,
)

# Note: estimator and sampler are NOT imported here to avoid circular imports.
# Import directly from pathtracer.core.estimator or pathtracer.core.sampler.

__all__ = [
    "Ray",
    "ray_at",
    "make_ray",
    "real",
    "vec3",
    "length",
    "length_squared",
    "unit",
    "dot",
    "cross",
    "power",
    "lerp",
    "reflect",
    "refract",
    "schlick_reflectance",
    "random_uniform",
    "random_gaussian",
    "random_unit_vector",
]
