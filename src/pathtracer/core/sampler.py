"""Sampler driver: per-pixel sampling, averaging and output conversion.

The Renderer traces jittered camera rays through every pixel, sums the
radiance estimates, and on readout divides by the number of samples taken.
Sampling is progressive: render() may be called repeatedly to add samples.

Pixels are stored as [column, row] with row 0 at the bottom of the viewport.
Images returned to Python are (height, width, 3) with row 0 at the top.

Every pixel is an independent Taichi loop iteration with its own random
stream, so the image is rendered in parallel without sharing generator state.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from pathtracer.core.sampler import Renderer
    >>> from pathtracer.scene.presets import create_scene
    >>> manager, camera = create_scene("default")
    >>> renderer = Renderer(manager.build(), camera, 320, 180)
    >>> renderer.render(4)
    >>> image = renderer.get_image_uint8()
"""

import logging
from collections.abc import Callable, Generator
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt
import taichi as ti

from pathtracer.camera.viewport import ViewportCamera, viewport_ray_jittered
from pathtracer.core.estimator import MAX_DEPTH, trace_path_with_stats
from pathtracer.core.ray import real, vec3
from pathtracer.preview.display import DEFAULT_GAMMA_EXPONENT, to_uint8

logger = logging.getLogger(__name__)

# Callback receives (current_samples, target_samples)
ProgressCallback = Callable[[int, int], None]

# Indices into the statistics counters
_ESCAPED = 0
_ABSORBED = 1
_SCATTERS = 2
_INSIDE_HITS = 3


@dataclass(frozen=True)
class PathStatistics:
    """Summary of the paths traced so far.

    Attributes:
        paths: Number of paths traced.
        escaped: Paths that reached the background.
        absorbed: Paths terminated by the depth budget.
        scatters: Total bounces over all paths.
        inside_hits: Hits on the inner side of a surface.
    """

    paths: int
    escaped: int
    absorbed: int
    scatters: int
    inside_hits: int

    @property
    def mean_path_length(self) -> float:
        """Average number of bounces per path."""
        return self.scatters / self.paths if self.paths else 0.0


@ti.data_oriented
class Renderer:
    """Progressive renderer for a scene seen through a viewport camera.

    Attributes:
        scene: The surface registry being rendered.
        camera: The ray source.
        width: Image width in pixels.
        height: Image height in pixels.
        max_depth: Bounce budget per path.
    """

    def __init__(
        self,
        scene,
        camera: ViewportCamera,
        width: int,
        height: int,
        max_depth: int = MAX_DEPTH,
    ) -> None:
        """Allocate the radiance buffer.

        Raises:
            ValueError: If the dimensions are not positive or max_depth is negative.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
        if max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {max_depth}")

        self.scene = scene
        self.camera = camera
        self._width = width
        self._height = height
        self.max_depth = max_depth

        self._radiance_sum = ti.Vector.field(3, dtype=real, shape=(width, height))
        self._stats = ti.field(dtype=ti.i64, shape=4)
        self._sample_count = 0
        self._target = 0

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def sample_count(self) -> int:
        """Number of samples accumulated per pixel."""
        return self._sample_count

    def reset(self) -> None:
        """Discard all accumulated samples and statistics."""
        self._radiance_sum.fill(0.0)
        self._stats.fill(0)
        self._sample_count = 0

    @ti.kernel
    def _render_samples(
        self,
        scene: ti.template(),
        origin: vec3,
        viewport_width: real,
        viewport_height: real,
        viewport_distance: real,
        num_samples: ti.i32,
        max_depth: ti.i32,
    ):
        """Add num_samples jittered samples to every pixel."""
        for column, row in self._radiance_sum:
            total = vec3(0.0, 0.0, 0.0)
            for _ in range(num_samples):
                ray = viewport_ray_jittered(
                    origin,
                    viewport_width,
                    viewport_height,
                    viewport_distance,
                    column,
                    row,
                    self._width,
                    self._height,
                )
                color, scatters, inside_hits, escaped = trace_path_with_stats(
                    scene, ray.origin, ray.direction, max_depth
                )
                total += color
                self._stats[_ESCAPED] += ti.cast(escaped, ti.i64)
                self._stats[_ABSORBED] += ti.cast(1 - escaped, ti.i64)
                self._stats[_SCATTERS] += ti.cast(scatters, ti.i64)
                self._stats[_INSIDE_HITS] += ti.cast(inside_hits, ti.i64)
            self._radiance_sum[column, row] += total

    def render(
        self,
        num_samples: int = 1,
        batch_size: int = 1,
        callback: ProgressCallback | None = None,
    ) -> None:
        """Accumulate samples into the radiance buffer.

        Args:
            num_samples: Number of samples to add per pixel.
            batch_size: Samples per kernel launch between callbacks.
            callback: Optional function called after each batch with
                (current_total_samples, target_total_samples).

        Raises:
            ValueError: If num_samples is negative or batch_size not positive.
        """
        for _ in self.render_progressive(num_samples, batch_size):
            if callback is not None:
                callback(self._sample_count, self._target)

    def render_progressive(
        self,
        num_samples: int = 1,
        batch_size: int = 1,
    ) -> Generator[tuple[int, int], None, None]:
        """Accumulate samples, yielding progress after each batch.

        Yields:
            Tuple of (current_total_samples, target_total_samples).
        """
        if num_samples < 0:
            raise ValueError(f"num_samples must be non-negative, got {num_samples}")
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {batch_size}")

        self._target = self._sample_count + num_samples
        camera = self.camera
        origin = camera.origin_vec()

        remaining = num_samples
        while remaining > 0:
            batch = min(batch_size, remaining)
            self._render_samples(
                self.scene,
                origin,
                camera.viewport_width,
                camera.viewport_height,
                camera.viewport_distance,
                batch,
                self.max_depth,
            )
            self._sample_count += batch
            remaining -= batch
            logger.debug("Rendered %d/%d samples per pixel", self._sample_count, self._target)
            yield (self._sample_count, self._target)

    def statistics(self) -> PathStatistics:
        """Counts of how the traced paths ended."""
        counts = self._stats.to_numpy()
        return PathStatistics(
            paths=self._sample_count * self._width * self._height,
            escaped=int(counts[_ESCAPED]),
            absorbed=int(counts[_ABSORBED]),
            scatters=int(counts[_SCATTERS]),
            inside_hits=int(counts[_INSIDE_HITS]),
        )

    def get_linear_image(self) -> npt.NDArray[np.float64]:
        """The averaged linear radiance as a (height, width, 3) array.

        Raises:
            RuntimeError: If no samples have been rendered.
        """
        if self._sample_count == 0:
            raise RuntimeError("No samples rendered yet. Call render() first.")

        # (width, height, 3) with row 0 at the bottom
        image = self._radiance_sum.to_numpy() / self._sample_count
        image = np.transpose(image, (1, 0, 2))
        return np.flipud(image).copy()

    def get_image_uint8(self, exponent: float = DEFAULT_GAMMA_EXPONENT) -> npt.NDArray[np.uint8]:
        """The gamma corrected 8-bit image, ready for the image sink."""
        return to_uint8(self.get_linear_image(), exponent)

    def __repr__(self) -> str:
        return (
            f"Renderer(width={self.width}, height={self.height}, "
            f"samples={self.sample_count}, max_depth={self.max_depth})"
        )
