"""Scene module.

Components:
    registry: Immutable surface registry and nearest-hit resolution
    manager: Scene builder with material IDs and JSON serialization
    presets: Ready-made scenes

Surface data is stored in Taichi fields as a Structure-of-Arrays, indexed in
registration order.
"""

from .manager import SceneConfig, SceneManager, SphereInfo
from .presets import PRESETS, create_default_scene, create_glass_scene, create_scene
from .registry import MIN_DISTANCE, NO_SURFACE, Scene, SurfaceSpec, resolve

__all__ = [
    # Registry
    "Scene",
    "SurfaceSpec",
    "resolve",
    "MIN_DISTANCE",
    "NO_SURFACE",
    # Manager
    "SceneManager",
    "SceneConfig",
    "SphereInfo",
    # Presets
    "PRESETS",
    "create_scene",
    "create_default_scene",
    "create_glass_scene",
]
