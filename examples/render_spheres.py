#!/usr/bin/env python3
"""Render a preset sphere scene.

This script renders one of the preset scenes at a small size and saves it
under images/, printing progress as samples accumulate.

Usage:
    python examples/render_spheres.py [options]

Options:
    --scene NAME        Preset scene: default or glass (default: default)
    --width WIDTH       Image width in pixels (default: 480)
    --height HEIGHT     Image height in pixels (default: 270)
    --samples SAMPLES   Number of samples per pixel (default: 32)
    --batch-size SIZE   Samples per progress update (default: 4)

Example:
    python examples/render_spheres.py --scene glass --samples 64
"""

from __future__ import annotations

import argparse
import sys
import time

import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Render a preset sphere scene.")
    parser.add_argument("--scene", choices=("default", "glass"), default="default")
    parser.add_argument("--width", type=int, default=480)
    parser.add_argument("--height", type=int, default=270)
    parser.add_argument("--samples", type=int, default=32)
    parser.add_argument("--batch-size", type=int, default=4)
    return parser.parse_args()


def main() -> int:
    """Main entry point."""
    args = parse_args()
    ti.init(arch=ti.cpu, default_fp=ti.f64)

    # Lazy imports to allow Taichi initialization first
    from pathtracer.core.sampler import Renderer
    from pathtracer.preview.export import save_png, timestamped_path
    from pathtracer.scene.presets import create_scene

    manager, camera = create_scene(args.scene)
    camera.aspect_ratio = args.width / args.height
    renderer = Renderer(manager.build(), camera, args.width, args.height)

    start_time = time.time()

    def progress_callback(current: int, target: int) -> None:
        elapsed = time.time() - start_time
        samples_per_sec = current / elapsed if elapsed > 0 else 0
        print(
            f"\r  Progress: {current}/{target} samples - {samples_per_sec:.1f} spp/s",
            end="",
            flush=True,
        )

    print(f"Rendering '{args.scene}' at {args.width}x{args.height}, {args.samples} spp...")
    renderer.render(args.samples, args.batch_size, callback=progress_callback)
    print()

    stats = renderer.statistics()
    print(f"  {stats.escaped}/{stats.paths} paths escaped, {stats.mean_path_length:.2f} bounces per path")

    path = save_png(renderer.get_image_uint8(), timestamped_path())
    print(f"Saved to: {path.absolute()}")
    print(f"Total time: {time.time() - start_time:.2f}s")
    return 0


if __name__ == "__main__":
    sys.exit(main())
