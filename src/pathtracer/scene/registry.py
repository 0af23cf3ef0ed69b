"""Surface registry and nearest-hit resolution.

The registry stores every sphere of a scene together with its material in
Taichi fields (Structure of Arrays layout). It is filled once at construction
and never modified afterwards, so any number of rays may query it
concurrently. Kernels receive the registry explicitly as a ``ti.template()``
argument; there is no module-level scene.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from pathtracer.materials.material import Material
    >>> from pathtracer.scene.registry import Scene, SurfaceSpec
    >>> scene = Scene([SurfaceSpec((0.0, 1.0, 0.0), 0.5, Material.matte())])
    >>> # Inside a kernel:
    >>> # index, t = resolve(scene, origin, direction, MIN_DISTANCE)
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import taichi as ti

from pathtracer.core.ray import real, vec3
from pathtracer.geometry.sphere import Sphere, intersect_sphere
from pathtracer.materials.material import Material

logger = logging.getLogger(__name__)

# Hits closer than this are rejected to avoid re-intersecting the surface a
# scattered ray starts on
MIN_DISTANCE = 1e-3

# Returned by resolve() when the ray escapes
NO_SURFACE = -1


@dataclass(frozen=True)
class SurfaceSpec:
    """A sphere and its material, as handed to the registry.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere.
        material: The material of the surface.
        hollow: Whether the sphere bounds a cavity (glass shells).
    """

    center: tuple[float, float, float]
    radius: float
    material: Material
    hollow: bool = False


@ti.data_oriented
class Scene:
    """Immutable, ordered registry of intersectable surfaces.

    Attributes:
        count: Number of surfaces.
        centers, radii, hollow: Sphere geometry per surface.
        kinds, reflectances, fuzzes, iors: Material data per surface.
    """

    def __init__(self, surfaces: Sequence[SurfaceSpec]) -> None:
        self._surfaces = tuple(surfaces)
        self.count = len(self._surfaces)

        # Taichi fields cannot have zero size
        capacity = max(self.count, 1)
        self.centers = ti.Vector.field(3, dtype=real, shape=capacity)
        self.radii = ti.field(dtype=real, shape=capacity)
        self.hollow = ti.field(dtype=ti.i32, shape=capacity)
        self.kinds = ti.field(dtype=ti.i32, shape=capacity)
        self.reflectances = ti.Vector.field(3, dtype=real, shape=capacity)
        self.fuzzes = ti.field(dtype=real, shape=capacity)
        self.iors = ti.field(dtype=real, shape=capacity)
        self._num_surfaces = ti.field(dtype=ti.i32, shape=())

        for i, surface in enumerate(self._surfaces):
            material = surface.material
            self.centers[i] = list(surface.center)
            self.radii[i] = surface.radius
            self.hollow[i] = int(surface.hollow)
            self.kinds[i] = int(material.kind)
            self.reflectances[i] = list(material.reflectance)
            self.fuzzes[i] = material.fuzz
            self.iors[i] = material.refractive_index
        self._num_surfaces[None] = self.count

        logger.debug("Built surface registry with %d surfaces", self.count)

    @property
    def surfaces(self) -> tuple[SurfaceSpec, ...]:
        """The registered surfaces, in registration order."""
        return self._surfaces

    def __len__(self) -> int:
        return self.count

    def __repr__(self) -> str:
        return f"Scene(surfaces={self.count})"

    @ti.func
    def sphere(self, index: ti.i32) -> Sphere:
        """The sphere stored at an index."""
        return Sphere(center=self.centers[index], radius=self.radii[index], hollow=self.hollow[index])

    @ti.func
    def num_surfaces(self) -> ti.i32:
        return self._num_surfaces[None]


@ti.func
def resolve(scene: ti.template(), ray_origin: vec3, ray_direction: vec3, min_distance: real):
    """Find the nearest surface hit by a ray.

    Every surface is asked for its intersection parameter. A candidate is
    accepted if it lies past min_distance and is strictly nearer than the
    best so far, so ties resolve to the first registered surface.

    Args:
        scene: The surface registry.
        ray_origin: The starting point of the ray.
        ray_direction: The direction vector of the ray.
        min_distance: Minimum accepted parameter.

    Returns:
        A tuple (index, t). index is NO_SURFACE if nothing was hit.
    """
    closest_index = NO_SURFACE
    closest_t = ti.cast(0.0, real)
    for i in range(scene.num_surfaces()):
        t = intersect_sphere(ray_origin, ray_direction, scene.sphere(i), min_distance)
        if t > min_distance and (closest_index == NO_SURFACE or t < closest_t):
            closest_index = i
            closest_t = t
    return closest_index, closest_t
