"""Viewport camera for primary ray generation.

The camera sits at an origin and looks along +y through a flat viewport one
unit away. The world frame is z up and x to the right. The viewport is not
rotated relative to the camera.

A pixel (column, row) with sub-pixel jitter (du, dv) maps to the direction

    x = viewport_width  * ((column + du) / width  - 0.5)
    y = viewport_distance
    z = viewport_height * ((row + dv) / height - 0.5)

where row 0 is the bottom of the viewport. Directions are not normalized.

Example:
    >>> from pathtracer.camera.viewport import ViewportCamera
    >>> camera = ViewportCamera(origin=(0.0, 0.0, 0.0), aspect_ratio=16.0 / 9.0)
    >>> camera.viewport_width
    3.5555555555555554
"""

from dataclasses import dataclass

import taichi as ti

from pathtracer.core.ray import Ray, make_ray, random_uniform, real, vec3


@dataclass
class ViewportCamera:
    """Configuration for the viewport camera.

    Attributes:
        origin: Camera position in world space (x, y, z).
        aspect_ratio: Width divided by height of the viewport.
        viewport_height: Height of the viewport in world units.
        viewport_distance: Distance from the origin to the viewport along +y.
    """

    origin: tuple[float, float, float] = (0.0, 0.0, 0.0)
    aspect_ratio: float = 16.0 / 9.0
    viewport_height: float = 2.0
    viewport_distance: float = 1.0

    @property
    def viewport_width(self) -> float:
        """Width of the viewport in world units."""
        return self.viewport_height * self.aspect_ratio

    def origin_vec(self):
        """The origin as a Taichi vector, for passing into kernels."""
        return vec3(self.origin[0], self.origin[1], self.origin[2])

    def direction_for(self, u: float, v: float) -> tuple[float, float, float]:
        """Ray direction through normalized viewport coordinates (Python side).

        Args:
            u: Horizontal coordinate in [0, 1] (left to right).
            v: Vertical coordinate in [0, 1] (bottom to top).
        """
        return (
            self.viewport_width * (u - 0.5),
            self.viewport_distance,
            self.viewport_height * (v - 0.5),
        )


@ti.func
def viewport_ray(
    origin: vec3,
    viewport_width: real,
    viewport_height: real,
    viewport_distance: real,
    u: real,
    v: real,
) -> Ray:
    """Generate a ray through normalized viewport coordinates (u, v).

    Args:
        origin: Camera position.
        viewport_width: Width of the viewport.
        viewport_height: Height of the viewport.
        viewport_distance: Distance to the viewport along +y.
        u: Horizontal coordinate in [0, 1] (left to right).
        v: Vertical coordinate in [0, 1] (bottom to top).

    Returns:
        A Ray from the camera origin toward the viewport point.
    """
    direction = vec3(
        viewport_width * (u - 0.5),
        viewport_distance,
        viewport_height * (v - 0.5),
    )
    return make_ray(origin, direction)


@ti.func
def viewport_ray_jittered(
    origin: vec3,
    viewport_width: real,
    viewport_height: real,
    viewport_distance: real,
    column: ti.i32,
    row: ti.i32,
    width: ti.i32,
    height: ti.i32,
) -> Ray:
    """Generate a ray with a random sub-pixel offset for anti-aliasing.

    Args:
        column: Pixel column (0 = left).
        row: Pixel row (0 = bottom).
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        A Ray through a uniformly jittered point inside the pixel.
    """
    u = (ti.cast(column, real) + random_uniform()) / ti.cast(width, real)
    v = (ti.cast(row, real) + random_uniform()) / ti.cast(height, real)
    return viewport_ray(origin, viewport_width, viewport_height, viewport_distance, u, v)
