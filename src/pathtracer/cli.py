"""Command-line interface for rendering a scene to a PNG file.

Usage:
    python -m pathtracer [options]

Options:
    --width WIDTH         Image width in pixels (default: 1920)
    --height HEIGHT       Image height in pixels (default: 1080)
    --samples SAMPLES     Samples per pixel (default: 4)
    --depth DEPTH         Bounce budget per path (default: 5)
    --scene NAME          Preset scene: default or glass (default: default)
    --scene-file PATH     Load the scene from a JSON file instead of a preset
    --output OUTPUT       Output file path (default: images/<unix-time>.png)
    --batch-size SIZE     Samples per progress update (default: 1)
    --seed SEED           Random seed (default: 0)
    --arch {cpu,gpu}      Taichi backend (default: cpu)
    --preview             Show the result in a Matplotlib window
    --verbose             Enable debug logging

Example:
    python -m pathtracer --width 320 --height 180 --samples 16 --scene glass
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import taichi as ti

logger = logging.getLogger(__name__)

_ARCHES = {"cpu": ti.cpu, "gpu": ti.gpu}


@dataclass
class RenderSettings:
    """Settings for one render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        samples: Samples per pixel.
        max_depth: Bounce budget per path.
        scene: Name of the preset scene.
        scene_file: JSON scene file, overrides the preset when set.
        output: Output PNG path; a timestamped path under images/ when unset.
        batch_size: Samples per kernel launch between progress reports.
        preview: Show the result in a Matplotlib window.
    """

    width: int = 1920
    height: int = 1080
    samples: int = 4
    max_depth: int = 5
    scene: str = "default"
    scene_file: Path | None = None
    output: Path | None = None
    batch_size: int = 1
    preview: bool = False

    def validate(self) -> None:
        """Check the settings.

        Raises:
            ValueError: If any numeric setting is out of range.
        """
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {self.width}x{self.height}")
        if self.samples <= 0:
            raise ValueError(f"samples must be positive, got {self.samples}")
        if self.max_depth < 0:
            raise ValueError(f"depth must be non-negative, got {self.max_depth}")
        if self.batch_size <= 0:
            raise ValueError(f"batch size must be positive, got {self.batch_size}")


def init_taichi(arch: str = "cpu", seed: int = 0) -> None:
    """Initialize Taichi in double precision with a fixed random seed.

    Raises:
        ValueError: If the backend name is unknown.
    """
    try:
        backend = _ARCHES[arch]
    except KeyError:
        raise ValueError(f"Unknown backend: {arch!r}") from None
    ti.init(arch=backend, default_fp=ti.f64, random_seed=seed)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    defaults = RenderSettings()
    parser = argparse.ArgumentParser(
        prog="pathtracer",
        description="Render a sphere scene with a Monte Carlo path tracer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=defaults.width,
        help=f"Image width in pixels (default: {defaults.width})",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=defaults.height,
        help=f"Image height in pixels (default: {defaults.height})",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=defaults.samples,
        help=f"Samples per pixel (default: {defaults.samples})",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=defaults.max_depth,
        help=f"Bounce budget per path (default: {defaults.max_depth})",
    )
    parser.add_argument(
        "--scene",
        choices=("default", "glass"),
        default=defaults.scene,
        help="Preset scene (default: default)",
    )
    parser.add_argument(
        "--scene-file",
        type=Path,
        default=None,
        help="Load the scene from a JSON file instead of a preset",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output file path (default: images/<unix-time>.png)",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=defaults.batch_size,
        help=f"Samples per progress update (default: {defaults.batch_size})",
    )
    parser.add_argument("--seed", type=int, default=0, help="Random seed (default: 0)")
    parser.add_argument(
        "--arch",
        choices=sorted(_ARCHES),
        default="cpu",
        help="Taichi backend (default: cpu)",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Show the result in a Matplotlib window",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def settings_from_args(args: argparse.Namespace) -> RenderSettings:
    """Convert parsed arguments into RenderSettings."""
    return RenderSettings(
        width=args.width,
        height=args.height,
        samples=args.samples,
        max_depth=args.depth,
        scene=args.scene,
        scene_file=args.scene_file,
        output=args.output,
        batch_size=args.batch_size,
        preview=args.preview,
    )


def render_to_file(settings: RenderSettings) -> Path:
    """Render the configured scene and save it as a PNG.

    Taichi must already be initialized and the settings validated.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports so kernels are defined after Taichi initialization
    from pathtracer.camera.viewport import ViewportCamera
    from pathtracer.core.sampler import Renderer
    from pathtracer.preview.export import save_png, timestamped_path
    from pathtracer.scene.manager import SceneManager
    from pathtracer.scene.presets import create_scene

    if settings.scene_file is not None:
        manager = SceneManager.load_json(settings.scene_file)
        camera = ViewportCamera()
    else:
        manager, camera = create_scene(settings.scene)
    camera.aspect_ratio = settings.width / settings.height

    renderer = Renderer(manager.build(), camera, settings.width, settings.height, settings.max_depth)
    logger.info(
        "Rendering %dx%d, %d samples per pixel, depth %d",
        settings.width,
        settings.height,
        settings.samples,
        settings.max_depth,
    )

    start_time = time.time()

    def progress_callback(current: int, target: int) -> None:
        elapsed = time.time() - start_time
        samples_per_sec = current / elapsed if elapsed > 0 else 0
        logger.info("Progress: %d/%d samples (%.1f spp/s)", current, target, samples_per_sec)

    renderer.render(settings.samples, settings.batch_size, callback=progress_callback)

    stats = renderer.statistics()
    logger.info(
        "Traced %d paths: %d escaped, %d absorbed, %.2f bounces per path",
        stats.paths,
        stats.escaped,
        stats.absorbed,
        stats.mean_path_length,
    )

    output = settings.output if settings.output is not None else timestamped_path()
    path = save_png(renderer.get_image_uint8(), output)
    logger.info("Total time: %.2fs", time.time() - start_time)

    if settings.preview:
        from pathtracer.preview.display import show_preview

        show_preview(renderer)

    return path


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s: %(message)s",
    )

    try:
        settings = settings_from_args(args)
        settings.validate()
        init_taichi(args.arch, args.seed)
        render_to_file(settings)
        return 0
    except (ValueError, OSError) as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
