"""Scene manager for building surface registries.

The SceneManager collects materials and spheres on the Python side, assigns
material IDs, and turns the result into an immutable Scene registry with
build(). Scenes can be exported to and loaded from plain dictionaries or JSON
files.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from pathtracer.scene.manager import SceneManager
    >>> manager = SceneManager()
    >>> red = manager.add_matte_material(reflectance=(0.7, 0.3, 0.3))
    >>> manager.add_sphere(center=(0.0, 1.0, 0.0), radius=0.5, material_id=red)
    0
    >>> scene = manager.build()
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pathtracer.materials.material import DEFAULT_REFRACTIVE_INDEX, Material
from pathtracer.scene.registry import Scene, SurfaceSpec

logger = logging.getLogger(__name__)


@dataclass
class SphereInfo:
    """Information about a sphere in the scene.

    Attributes:
        sphere_index: Registration order of the sphere.
        center: The center of the sphere.
        radius: The radius of the sphere.
        material_id: The material ID assigned to the sphere.
        hollow: Whether the sphere bounds a cavity.
    """

    sphere_index: int
    center: tuple[float, float, float]
    radius: float
    material_id: int
    hollow: bool = False


@dataclass
class SceneConfig:
    """Configuration for scene serialization.

    Attributes:
        materials: List of material configurations.
        spheres: List of sphere configurations.
    """

    materials: list[dict[str, Any]] = field(default_factory=list)
    spheres: list[dict[str, Any]] = field(default_factory=list)


class SceneManager:
    """Builder for surface registries.

    Attributes:
        materials: Registered materials, indexed by material ID.
        spheres: Registered spheres, in registration order.

    Example:
        >>> manager = SceneManager()
        >>> gold = manager.add_metal_material(reflectance=(0.8, 0.6, 0.2), fuzz=1.0)
        >>> glass = manager.add_glass_material(refractive_index=1.5)
        >>> manager.add_sphere((1.0, 1.0, 0.0), 0.5, gold)
        0
        >>> manager.add_sphere((-1.0, 1.0, 0.0), 0.5, glass)
        1
    """

    def __init__(self) -> None:
        self.materials: list[Material] = []
        self.spheres: list[SphereInfo] = []

    def clear(self) -> None:
        """Remove all materials and spheres."""
        self.materials.clear()
        self.spheres.clear()

    # =========================================================================
    # Material Management
    # =========================================================================

    def add_material(self, material: Material) -> int:
        """Register a material.

        Returns:
            The material ID.
        """
        self.materials.append(material)
        return len(self.materials) - 1

    def add_matte_material(self, reflectance: tuple[float, float, float]) -> int:
        """Register a matte (Lambertian) material."""
        return self.add_material(Material.matte(reflectance))

    def add_metal_material(
        self,
        reflectance: tuple[float, float, float],
        fuzz: float = 0.0,
    ) -> int:
        """Register a metal material. fuzz 0 is a perfect mirror."""
        return self.add_material(Material.metal(reflectance, fuzz))

    def add_glass_material(
        self,
        refractive_index: float = DEFAULT_REFRACTIVE_INDEX,
        reflectance: tuple[float, float, float] = (1.0, 1.0, 1.0),
    ) -> int:
        """Register a glass (dielectric) material."""
        return self.add_material(Material.glass(refractive_index, reflectance))

    def get_material_count(self) -> int:
        """Get the total number of materials."""
        return len(self.materials)

    def get_material(self, material_id: int) -> Material | None:
        """Get a material by ID, or None if the ID is unknown."""
        if 0 <= material_id < len(self.materials):
            return self.materials[material_id]
        return None

    # =========================================================================
    # Primitive Management
    # =========================================================================

    def add_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        material_id: int,
        hollow: bool = False,
    ) -> int:
        """Add a sphere to the scene.

        Args:
            center: The center point of the sphere as (x, y, z).
            radius: The radius of the sphere.
            material_id: A material ID returned by add_*_material().
            hollow: Mark the sphere as bounding a cavity.

        Returns:
            The index of the added sphere.

        Raises:
            ValueError: If material_id is invalid.
        """
        if material_id < 0 or material_id >= len(self.materials):
            raise ValueError(f"Invalid material_id: {material_id}")

        info = SphereInfo(
            sphere_index=len(self.spheres),
            center=(float(center[0]), float(center[1]), float(center[2])),
            radius=float(radius),
            material_id=material_id,
            hollow=bool(hollow),
        )
        self.spheres.append(info)
        return info.sphere_index

    def add_matte_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        reflectance: tuple[float, float, float],
    ) -> tuple[int, int]:
        """Add a sphere with a new matte material.

        Returns:
            Tuple of (sphere_index, material_id).
        """
        material_id = self.add_matte_material(reflectance)
        return self.add_sphere(center, radius, material_id), material_id

    def add_metal_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        reflectance: tuple[float, float, float],
        fuzz: float = 0.0,
    ) -> tuple[int, int]:
        """Add a sphere with a new metal material.

        Returns:
            Tuple of (sphere_index, material_id).
        """
        material_id = self.add_metal_material(reflectance, fuzz)
        return self.add_sphere(center, radius, material_id), material_id

    def add_glass_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        refractive_index: float = DEFAULT_REFRACTIVE_INDEX,
        hollow: bool = False,
    ) -> tuple[int, int]:
        """Add a sphere with a new glass material.

        Returns:
            Tuple of (sphere_index, material_id).
        """
        material_id = self.add_glass_material(refractive_index)
        return self.add_sphere(center, radius, material_id, hollow=hollow), material_id

    def get_sphere_count(self) -> int:
        """Get the number of spheres."""
        return len(self.spheres)

    # =========================================================================
    # Registry Construction
    # =========================================================================

    def surfaces(self) -> list[SurfaceSpec]:
        """Resolve spheres and materials into registry entries."""
        return [
            SurfaceSpec(
                center=info.center,
                radius=info.radius,
                material=self.materials[info.material_id],
                hollow=info.hollow,
            )
            for info in self.spheres
        ]

    def build(self) -> Scene:
        """Create the immutable surface registry for rendering.

        Later changes to the manager do not affect scenes already built.
        """
        scene = Scene(self.surfaces())
        kinds = [m.kind.name.lower() for m in self.materials]
        logger.info(
            "Built scene: %d spheres, %d materials (%s)",
            len(self.spheres),
            len(self.materials),
            ", ".join(kinds) or "none",
        )
        return scene

    # =========================================================================
    # Scene Serialization
    # =========================================================================

    def to_config(self) -> SceneConfig:
        """Export the scene to a configuration object."""
        config = SceneConfig()
        for material in self.materials:
            config.materials.append(material.to_dict())
        for sphere in self.spheres:
            sphere_config: dict[str, Any] = {
                "center": list(sphere.center),
                "radius": sphere.radius,
                "material_id": sphere.material_id,
            }
            if sphere.hollow:
                sphere_config["hollow"] = True
            config.spheres.append(sphere_config)
        return config

    def from_config(self, config: SceneConfig) -> None:
        """Load a scene from a configuration object.

        Clears the current scene first.

        Raises:
            ValueError: If the configuration contains invalid data.
        """
        self.clear()

        # Materials first, spheres refer to them by ID
        for mat_config in config.materials:
            self.add_material(Material.from_dict(mat_config))

        for sphere_config in config.spheres:
            if not isinstance(sphere_config, dict):
                raise ValueError(f"Sphere configuration must be an object, got {type(sphere_config).__name__}")
            center_list = sphere_config.get("center", [0.0, 0.0, 0.0])
            if not isinstance(center_list, (list, tuple)) or len(center_list) != 3:
                raise ValueError(f"Sphere center must have 3 components, got {center_list!r}")
            center: tuple[float, float, float] = (
                center_list[0],
                center_list[1],
                center_list[2],
            )
            self.add_sphere(
                center,
                sphere_config.get("radius", 1.0),
                sphere_config.get("material_id", 0),
                hollow=sphere_config.get("hollow", False),
            )

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization)."""
        config = self.to_config()
        return {"materials": config.materials, "spheres": config.spheres}

    def from_dict(self, data: dict[str, Any]) -> None:
        """Load a scene from a dictionary with 'materials' and 'spheres' keys.

        Raises:
            ValueError: If data is not a dictionary or holds invalid entries.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Scene configuration must be an object, got {type(data).__name__}")
        config = SceneConfig(
            materials=data.get("materials", []),
            spheres=data.get("spheres", []),
        )
        self.from_config(config)

    def save_json(self, filepath: str | Path) -> None:
        """Write the scene to a JSON file."""
        Path(filepath).write_text(json.dumps(self.to_dict(), indent=2))
        logger.debug("Saved scene to %s", filepath)

    @classmethod
    def load_json(cls, filepath: str | Path) -> "SceneManager":
        """Create a manager from a JSON file written by save_json()."""
        manager = cls()
        manager.from_dict(json.loads(Path(filepath).read_text()))
        logger.debug("Loaded scene from %s", filepath)
        return manager
