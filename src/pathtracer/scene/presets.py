"""Preset scenes.

Two ready-made scenes in the camera's frame (z up, camera looking along +y):

- ``default``: three small spheres resting on a large ground sphere. A matte
  red sphere in the middle, a slightly fuzzy silver metal on the left and a
  fully fuzzy gold metal on the right.
- ``glass``: the default layout with the left sphere replaced by a glass
  shell, an outer glass sphere containing a hollow sphere of the same index.

Example:
    >>> from pathtracer.scene.presets import create_scene
    >>> manager, camera = create_scene("glass")
    >>> scene = manager.build()
"""

from collections.abc import Callable

from pathtracer.camera.viewport import ViewportCamera
from pathtracer.scene.manager import SceneManager

# =============================================================================
# Scene Constants
# =============================================================================

SPHERE_RADIUS = 0.5
GROUND_RADIUS = 100.0
GROUND_CENTER = (0.0, 1.0, -100.5)

MATTE_SPHERE_REFLECTANCE = (0.7, 0.3, 0.3)
GROUND_REFLECTANCE = (0.8, 0.8, 0.0)

SILVER_REFLECTANCE = (0.8, 0.8, 0.8)
SILVER_FUZZ = 0.3
GOLD_REFLECTANCE = (0.8, 0.6, 0.2)
GOLD_FUZZ = 1.0

GLASS_IOR = 1.5
# Radius of the hollow cavity inside the glass shell
SHELL_INNER_RADIUS = 0.4


def _add_shared_spheres(manager: SceneManager) -> None:
    manager.add_matte_sphere((0.0, 1.0, 0.0), SPHERE_RADIUS, MATTE_SPHERE_REFLECTANCE)
    manager.add_metal_sphere((1.0, 1.0, 0.0), SPHERE_RADIUS, GOLD_REFLECTANCE, GOLD_FUZZ)
    manager.add_matte_sphere(GROUND_CENTER, GROUND_RADIUS, GROUND_REFLECTANCE)


def create_default_scene() -> SceneManager:
    """Create the default four-sphere scene."""
    manager = SceneManager()
    manager.add_matte_sphere((0.0, 1.0, 0.0), SPHERE_RADIUS, MATTE_SPHERE_REFLECTANCE)
    manager.add_metal_sphere((-1.0, 1.0, 0.0), SPHERE_RADIUS, SILVER_REFLECTANCE, SILVER_FUZZ)
    manager.add_metal_sphere((1.0, 1.0, 0.0), SPHERE_RADIUS, GOLD_REFLECTANCE, GOLD_FUZZ)
    manager.add_matte_sphere(GROUND_CENTER, GROUND_RADIUS, GROUND_REFLECTANCE)
    return manager


def create_glass_scene() -> SceneManager:
    """Create the default scene with a glass shell on the left."""
    manager = SceneManager()
    _add_shared_spheres(manager)
    glass = manager.add_glass_material(GLASS_IOR)
    manager.add_sphere((-1.0, 1.0, 0.0), SPHERE_RADIUS, glass)
    manager.add_sphere((-1.0, 1.0, 0.0), SHELL_INNER_RADIUS, glass, hollow=True)
    return manager


PRESETS: dict[str, Callable[[], SceneManager]] = {
    "default": create_default_scene,
    "glass": create_glass_scene,
}


def create_scene(name: str = "default") -> tuple[SceneManager, ViewportCamera]:
    """Create a preset scene and the camera it is laid out for.

    Args:
        name: One of the keys of PRESETS.

    Returns:
        Tuple of (scene manager, camera).

    Raises:
        ValueError: If the preset name is unknown.
    """
    try:
        factory = PRESETS[name]
    except KeyError:
        raise ValueError(
            f"Unknown scene preset: {name!r} (available: {', '.join(sorted(PRESETS))})"
        ) from None
    return factory(), ViewportCamera()
