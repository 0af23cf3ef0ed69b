"""Preview module for output and visualization.

Components:
    display: Gamma conversion and Matplotlib preview
    export: PNG export through Pillow

Example:
    >>> from pathtracer.preview import save_png, timestamped_path
    >>> from pathtracer.core.sampler import Renderer
    >>>
    >>> renderer = Renderer(scene, camera, 1920, 1080)
    >>> renderer.render(4)
    >>> save_png(renderer.get_image_uint8(), timestamped_path())
"""

from pathtracer.preview.display import DEFAULT_GAMMA_EXPONENT, apply_gamma, show_preview, to_uint8
from pathtracer.preview.export import DEFAULT_IMAGE_DIR, save_png, timestamped_path

__all__ = [
    # Display
    "DEFAULT_GAMMA_EXPONENT",
    "apply_gamma",
    "to_uint8",
    "show_preview",
    # Export
    "DEFAULT_IMAGE_DIR",
    "save_png",
    "timestamped_path",
]
