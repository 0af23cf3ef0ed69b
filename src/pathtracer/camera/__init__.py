"""Camera module for primary ray generation.

Ray generation uses normalized viewport coordinates:
    u in [0, 1]: left to right across image
    v in [0, 1]: bottom to top across image
"""

from .viewport import ViewportCamera, viewport_ray, viewport_ray_jittered

__all__ = [
    "ViewportCamera",
    "viewport_ray",
    "viewport_ray_jittered",
]
