#!/usr/bin/env python3
"""Render the demo scene.

This script demonstrates end-to-end tiled rendering of the demo scene. It
creates the scene, configures the ray-cast integrator, renders tile by tile
with progress output and saves a PNG.

Usage:
    python -m examples.render_scene [options]

Options:
    --width WIDTH           Image width in pixels (default: 320)
    --height HEIGHT         Image height in pixels (default: 240)
    --samples SAMPLES       Samples per pixel (default: 4)
    --tile-divider DIVIDER  Tiles per image axis (default: 8)
    --seed SEED             Jitter seed (default: 0)
    --gamma GAMMA           Output gamma (default: 2.2)
    --output OUTPUT         Output file path (default: demo_scene.png)
    --quiet                 Suppress progress output
    --verbose               Enable debug logging

Example:
    python -m examples.render_scene --width 160 --height 120 --samples 8
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the demo scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--width", type=int, default=320, help="Image width in pixels (default: 320)")
    parser.add_argument("--height", type=int, default=240, help="Image height in pixels (default: 240)")
    parser.add_argument("--samples", type=int, default=4, help="Samples per pixel (default: 4)")
    parser.add_argument(
        "--tile-divider",
        type=float,
        default=8.0,
        help="Tiles per image axis (default: 8)",
    )
    parser.add_argument("--seed", type=int, default=0, help="Jitter seed (default: 0)")
    parser.add_argument("--gamma", type=float, default=2.2, help="Output gamma (default: 2.2)")
    parser.add_argument(
        "--output",
        type=str,
        default="demo_scene.png",
        help="Output file path (default: demo_scene.png)",
    )
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args()


def render_demo_scene(
    width: int = 320,
    height: int = 240,
    samples: int = 4,
    tile_divider: float = 8.0,
    seed: int = 0,
    gamma: float = 2.2,
    output_path: str = "demo_scene.png",
    quiet: bool = False,
) -> Path:
    """Render the demo scene and save it to a file.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        samples: Samples per pixel.
        tile_divider: Tiles per image axis.
        seed: Seed for sub-pixel jitter.
        gamma: Gamma applied during finalization.
        output_path: Output file path (PNG).
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from src.retracer.core.integrator import RayCastIntegrator
    from src.retracer.core.renderer import Renderer, RenderResult
    from src.retracer.core.settings import RenderSettings
    from src.retracer.core.tiling import TileRect
    from src.retracer.preview.export import save_png
    from src.retracer.scene.demo import create_demo_scene

    if not quiet:
        print(f"Creating demo scene ({width}x{height})...")
    scene = create_demo_scene(width, height)

    settings = RenderSettings(
        tile_divider=tile_divider,
        samples_per_pixel=samples,
        seed=seed,
        gamma=gamma,
    )
    total_pixels = width * height
    done_pixels = 0

    def start_callback(tile_count: int) -> None:
        if not quiet:
            print(f"Rendering {tile_count} tiles...")

    def progress_callback(tile: TileRect) -> None:
        nonlocal done_pixels
        done_pixels += tile.area
        if not quiet:
            print(
                f"\r  Progress: {done_pixels}/{total_pixels} pixels "
                f"({100.0 * done_pixels / total_pixels:.1f}%)",
                end="",
                flush=True,
            )

    def complete_callback(result: RenderResult) -> None:
        if not quiet:
            print()  # Newline after progress
            print(f"Render time: {result.elapsed:.2f}s ({result.total_samples} samples)")

    renderer = Renderer(RayCastIntegrator())
    result = renderer.render(
        scene,
        settings,
        on_start=start_callback,
        on_progress=progress_callback,
        on_complete=complete_callback,
    )

    output_file = Path(output_path)
    save_png(result, str(output_file))
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    # Buffers are NumPy arrays, so the CPU backend avoids host/device copies
    ti.init(arch=ti.cpu)

    try:
        render_demo_scene(
            width=args.width,
            height=args.height,
            samples=args.samples,
            tile_divider=args.tile_divider,
            seed=args.seed,
            gamma=args.gamma,
            output_path=args.output,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
