"""Display conversion and Matplotlib preview for rendered images.

The renderer produces averaged linear radiance. For output it is gamma
corrected by raising each component to a power (0.5 by default, i.e. gamma 2),
scaled to [0, 255] and clamped.

Example:
    >>> import numpy as np
    >>> from pathtracer.preview.display import to_uint8
    >>> to_uint8(np.full((1, 1, 3), 0.25))
    array([[[127, 127, 127]]], dtype=uint8)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

if TYPE_CHECKING:
    from pathtracer.core.sampler import Renderer

# Exponent applied to linear color before quantization (gamma 2)
DEFAULT_GAMMA_EXPONENT = 0.5


def apply_gamma(
    image: npt.NDArray[np.floating],
    exponent: float = DEFAULT_GAMMA_EXPONENT,
) -> npt.NDArray[np.float64]:
    """Raise each component of a linear image to a power.

    Negative values are clamped to zero first so that fractional powers stay
    real. Values above one are left alone.

    Args:
        image: Linear image array of shape (H, W, 3).
        exponent: The power to apply (0.5 for gamma 2).

    Returns:
        Gamma corrected image.
    """
    image = np.maximum(np.asarray(image, dtype=np.float64), 0.0)
    if exponent == 1.0:
        return image
    return np.power(image, exponent)


def to_uint8(
    image: npt.NDArray[np.floating],
    exponent: float = DEFAULT_GAMMA_EXPONENT,
) -> npt.NDArray[np.uint8]:
    """Convert a linear image to 8-bit for display or export.

    Applies gamma correction, scales by 255 and clamps to [0, 255]. NaN
    pixels, which only arise from degenerate geometry, are written as black.

    Args:
        image: Linear image array of shape (H, W, 3).
        exponent: Gamma exponent.

    Returns:
        8-bit image array of shape (H, W, 3).
    """
    corrected = apply_gamma(image, exponent)
    scaled = np.nan_to_num(corrected * 255.0, nan=0.0, posinf=255.0)
    return np.clip(scaled, 0.0, 255.0).astype(np.uint8)


def show_preview(
    renderer: Renderer,
    *,
    exponent: float = DEFAULT_GAMMA_EXPONENT,
    title: str | None = None,
    figsize: tuple[float, float] = (12, 6.75),
    block: bool = True,
) -> None:
    """Display the current render as a Matplotlib figure.

    Args:
        renderer: The Renderer to display.
        exponent: Gamma exponent.
        title: Custom title (default shows sample count).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until figure is closed.
    """
    import matplotlib.pyplot as plt

    display_image = to_uint8(renderer.get_linear_image(), exponent)

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(display_image)
    ax.axis("off")
    ax.set_title(title if title is not None else f"Render Preview - {renderer.sample_count} SPP")

    plt.tight_layout()
    plt.show(block=block)
