"""Image export for rendered images.

Rendered images are written as 8-bit RGB PNG files through Pillow. By
default files are named after the current Unix time inside an ``images``
directory, e.g. ``images/1700000000.png``.

Example:
    >>> from pathtracer.preview.export import save_png, timestamped_path
    >>> # save_png(renderer.get_image_uint8(), timestamped_path())
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_DIR = "images"


def timestamped_path(directory: str | Path = DEFAULT_IMAGE_DIR, timestamp: float | None = None) -> Path:
    """Build an output path of the form <directory>/<unix-time>.png.

    Args:
        directory: Output directory.
        timestamp: Seconds since the epoch; defaults to now.
    """
    seconds = int(time.time() if timestamp is None else timestamp)
    return Path(directory) / f"{seconds}.png"


def save_png(image: npt.NDArray[np.uint8], filepath: str | Path) -> Path:
    """Save an 8-bit RGB image as a PNG file.

    Missing parent directories are created.

    Args:
        image: Array of shape (H, W, 3) with dtype uint8, row 0 at the top.
        filepath: Output file path.

    Returns:
        The path written.

    Raises:
        ValueError: If the array is not an (H, W, 3) uint8 image.
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) image, got shape {image.shape}")
    if image.dtype != np.uint8:
        raise ValueError(f"Expected dtype uint8, got {image.dtype}")

    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    PILImage.fromarray(image).save(path)
    logger.info("Saved %dx%d image to %s", image.shape[1], image.shape[0], path)
    return path
