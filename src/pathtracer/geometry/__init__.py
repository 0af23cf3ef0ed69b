"""Geometry module.

Components:
    sphere: Sphere primitive with ray-sphere intersection

Intersection routines are Taichi functions returning the hit distance, or
NO_HIT when the ray misses.
"""

from .sphere import NO_HIT, Sphere, intersect_sphere, make_sphere, outward_normal

__all__ = [
    "NO_HIT",
    "Sphere",
    "intersect_sphere",
    "make_sphere",
    "outward_normal",
]
