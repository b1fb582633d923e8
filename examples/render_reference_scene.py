#!/usr/bin/env python3
"""Render the reference scene.

This script renders the reference scene (a green box and a blue ellipsoid lit
by a point light) with the fixed-step ray marcher and saves it as a PNG.

Usage:
    python -m examples.render_reference_scene [options]

Options:
    --width WIDTH        Image width in pixels (default: 200)
    --height HEIGHT      Image height in pixels (default: 200)
    --step STEP          Marching step size (default: 0.01)
    --output OUTPUT      Output file path (default: img.png)
    --band-rows ROWS     Rows per progress update (default: 20)
    --no-rotate          Save without the 180 degree rotation
    --quiet              Suppress progress output

Example:
    python -m examples.render_reference_scene --width 400 --height 400 --step 0.005
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the reference scene with the ray marcher.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=200,
        help="Image width in pixels (default: 200)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=200,
        help="Image height in pixels (default: 200)",
    )
    parser.add_argument(
        "--step",
        type=float,
        default=0.01,
        help="Marching step size (default: 0.01)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="img.png",
        help="Output file path (default: img.png)",
    )
    parser.add_argument(
        "--band-rows",
        type=int,
        default=20,
        help="Rows per progress update (default: 20)",
    )
    parser.add_argument(
        "--no-rotate",
        action="store_true",
        help="Save without the 180 degree rotation",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def render_reference_scene(
    width: int = 200,
    height: int = 200,
    step: float = 0.01,
    output_path: str = "img.png",
    band_rows: int = 20,
    rotate_180: bool = True,
    quiet: bool = False,
) -> Path:
    """Render the reference scene and save to file.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        step: Marching step size.
        output_path: Output file path (PNG).
        band_rows: Number of rows to render between progress updates.
        rotate_180: Rotate the saved image by 180 degrees.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from raymarcher.core.progressive import ProgressiveRenderer
    from raymarcher.preview.export import save_png
    from raymarcher.scene.reference import create_reference_scene

    if not quiet:
        print(f"Creating reference scene ({width}x{height}, step {step})...")

    scene, camera, config = create_reference_scene(width=width, height=height, step=step)

    renderer = ProgressiveRenderer(scene, camera, config)

    if not quiet:
        print(f"Marching {width * height} pixels...")

    start_time = time.time()

    def progress_callback(current: int, target: int) -> None:
        if not quiet:
            elapsed = time.time() - start_time
            progress_pct = (current / target) * 100 if target > 0 else 0
            rows_per_sec = current / elapsed if elapsed > 0 else 0
            print(
                f"\r  Progress: {current}/{target} rows "
                f"({progress_pct:.1f}%) - {rows_per_sec:.1f} rows/s",
                end="",
                flush=True,
            )

    renderer.render(band_rows=band_rows, callback=progress_callback)

    if not quiet:
        print()  # Newline after progress

    output_file = Path(output_path)
    save_png(renderer.get_image_numpy(), str(output_file), rotate_180=rotate_180)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    # Use GPU if available, fall back to CPU
    try:
        ti.init(arch=ti.gpu, default_fp=ti.f64)
        if not args.quiet:
            print("Using GPU backend")
    except Exception:
        ti.init(arch=ti.cpu, default_fp=ti.f64)
        if not args.quiet:
            print("Using CPU backend")

    try:
        render_reference_scene(
            width=args.width,
            height=args.height,
            step=args.step,
            output_path=args.output,
            band_rows=args.band_rows,
            rotate_180=not args.no_rotate,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
