"""Path estimator for Monte Carlo light transport.

This module follows a single ray through the scene. At every hit the surface's
material scatters the ray and its reflectance attenuates the path; a ray that
escapes picks up the sky gradient. The path length is bounded by a depth
budget:

    depth <= 0                   -> black
    miss                         -> throughput * background(direction)
    hit with one bounce left     -> black (absorbed)
    hit otherwise                -> scatter, throughput *= reflectance, depth - 1

The recursion of the rendering equation is unrolled into a loop over the
depth budget, which keeps the estimator usable inside Taichi kernels. For a
given sequence of random draws the result equals the recursive definition
reflectance_1 * (reflectance_2 * (... * background)).

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from pathtracer.core.estimator import estimate
    >>> from pathtracer.scene.presets import create_default_scene
    >>> scene = create_default_scene().build()
    >>> color = estimate(scene, (0.0, 0.0, 0.0), (0.0, 1.0, 0.0), max_depth=5)
"""

from collections.abc import Sequence

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from pathtracer.core.ray import lerp, unit, vec3
from pathtracer.geometry.sphere import outward_normal
from pathtracer.materials.scatter import scatter_material
from pathtracer.scene.registry import MIN_DISTANCE, NO_SURFACE, resolve

# =============================================================================
# Rendering Constants
# =============================================================================

# Default path length budget
MAX_DEPTH = 5

# Sky gradient endpoints: white toward -z, sky blue toward +z
WHITE = vec3(1.0, 1.0, 1.0)
SKY_COLOR = vec3(0.5, 0.7, 1.0)


@ti.func
def background(direction: vec3) -> vec3:
    """Deterministic environment light for escaped rays.

    A vertical gradient on the z component of the unit direction, from white
    straight down to SKY_COLOR straight up.
    """
    s = 0.5 * (unit(direction).z + 1.0)
    return lerp(WHITE, SKY_COLOR, s)


@ti.func
def trace_path_with_stats(scene: ti.template(), ray_origin: vec3, ray_direction: vec3, max_depth: ti.i32):
    """Trace one path and report how it ended.

    Args:
        scene: The surface registry.
        ray_origin: The starting point of the ray.
        ray_direction: The direction of the ray (any length).
        max_depth: The bounce budget for this path.

    Returns:
        A tuple (color, scatters, inside_hits, escaped) where:
        - color: The radiance estimate (linear RGB, unclamped).
        - scatters: Number of bounces taken.
        - inside_hits: Number of hits on the inner side of a surface.
        - escaped: 1 if the path reached the background, 0 if absorbed.
    """
    color = vec3(0.0, 0.0, 0.0)
    throughput = vec3(1.0, 1.0, 1.0)
    origin = ray_origin
    direction = ray_direction
    remaining = max_depth

    scatters = 0
    inside_hits = 0
    escaped = 0
    active = 1

    for _ in range(max_depth):
        if active == 1:
            index, t = resolve(scene, origin, direction, MIN_DISTANCE)

            if index == NO_SURFACE:
                color = throughput * background(direction)
                escaped = 1
                active = 0
            elif remaining == 1:
                # Budget exhausted: the path is absorbed
                active = 0
            else:
                sphere = scene.sphere(index)
                hit_point = origin + t * direction
                normal = outward_normal(sphere, hit_point)
                if tm.dot(normal, direction) > 0.0:
                    inside_hits += 1

                direction = scatter_material(
                    scene.kinds[index],
                    scene.fuzzes[index],
                    scene.iors[index],
                    sphere.hollow,
                    direction,
                    normal,
                )
                origin = hit_point
                throughput *= scene.reflectances[index]
                remaining -= 1
                scatters += 1

    return color, scatters, inside_hits, escaped


@ti.func
def trace_path(scene: ti.template(), ray_origin: vec3, ray_direction: vec3, max_depth: ti.i32) -> vec3:
    """Estimate the radiance carried back along a ray."""
    color, _, _, _ = trace_path_with_stats(scene, ray_origin, ray_direction, max_depth)
    return color


# =============================================================================
# Python-callable API
# =============================================================================


@ti.kernel
def _estimate_kernel(
    scene: ti.template(),
    origins: ti.types.ndarray(),
    directions: ti.types.ndarray(),
    colors: ti.types.ndarray(),
    max_depth: ti.i32,
):
    """Trace one path per row of the input arrays."""
    for i in range(origins.shape[0]):
        origin = vec3(origins[i, 0], origins[i, 1], origins[i, 2])
        direction = vec3(directions[i, 0], directions[i, 1], directions[i, 2])
        color = trace_path(scene, origin, direction, max_depth)
        for c in ti.static(range(3)):
            colors[i, c] = color[c]


def _as_ray_batch(values: npt.ArrayLike, name: str) -> npt.NDArray[np.float64]:
    array = np.ascontiguousarray(values, dtype=np.float64)
    if array.ndim == 1:
        array = array.reshape(1, -1)
    if array.ndim != 2 or array.shape[1] != 3:
        raise ValueError(f"{name} must have shape (N, 3), got {array.shape}")
    return array


def estimate_rays(
    scene,
    origins: npt.ArrayLike,
    directions: npt.ArrayLike,
    max_depth: int = MAX_DEPTH,
) -> npt.NDArray[np.float64]:
    """Estimate the radiance for a batch of rays.

    Each ray is traced independently; Taichi's per-thread random streams keep
    parallel paths from sharing generator state.

    Args:
        scene: The surface registry (pathtracer.scene.registry.Scene).
        origins: Ray origins, shape (N, 3).
        directions: Ray directions, shape (N, 3), any length.
        max_depth: The bounce budget per path.

    Returns:
        Linear RGB colors, shape (N, 3), float64.

    Raises:
        ValueError: If the arrays are malformed or max_depth is negative.
    """
    if max_depth < 0:
        raise ValueError(f"max_depth must be non-negative, got {max_depth}")
    origins_arr = _as_ray_batch(origins, "origins")
    directions_arr = _as_ray_batch(directions, "directions")
    if origins_arr.shape != directions_arr.shape:
        raise ValueError(
            f"origins and directions differ in shape: {origins_arr.shape} vs {directions_arr.shape}"
        )

    colors = np.zeros_like(origins_arr)
    if origins_arr.shape[0] > 0:
        _estimate_kernel(scene, origins_arr, directions_arr, colors, max_depth)
    return colors


def estimate(
    scene,
    origin: Sequence[float],
    direction: Sequence[float],
    max_depth: int = MAX_DEPTH,
) -> tuple[float, float, float]:
    """Estimate the radiance carried back along a single ray.

    Args:
        scene: The surface registry.
        origin: The ray origin (x, y, z).
        direction: The ray direction (x, y, z).
        max_depth: The bounce budget.

    Returns:
        Tuple of (R, G, B) linear color values.
    """
    color = estimate_rays(scene, [origin], [direction], max_depth)[0]
    return (float(color[0]), float(color[1]), float(color[2]))
