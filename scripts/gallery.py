"""Render the example scenes with every projection on one page.

Uses matplotlib to lay the renders out side by side; every render is a
:class:`sdfray.Pixels` buffer converted with ``to_rgba()``.

Usage::

    python scripts/gallery.py                      # saves gallery.png
    python scripts/gallery.py --out my_file.png
    python scripts/gallery.py --res 64             # faster, lower quality
    python scripts/gallery.py --progressive 500    # add a partial render

Requirements: numpy, matplotlib
"""
from __future__ import annotations

import argparse
import logging
import os
import sys

# Ensure the repo root (parent of scripts/) is importable regardless of cwd
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np

from sdfray import model
from sdfray.examples import SierpinskiTetrahedron, Snowman, default_lights, ground_plane
from sdfray.examples.scene import ground_model
from sdfray.logging_config import setup_logging
from sdfray.progressive import render_partial_perspective
from sdfray.render import (
    render_orthographic,
    render_orthographic_shadow,
    render_orthographic_with_shadow,
    render_perspective,
)

logger = logging.getLogger("sdfray.gallery")


# ---------------------------------------------------------------------------
# Render catalogue  (label, pixels)
# ---------------------------------------------------------------------------

def _make_renders(res: int, pattern: str, progressive: int, seed: int) -> list[tuple[str, object]]:
    lights = default_lights()
    resolution = (res * 4 // 3, res)

    snowman = Snowman()
    on_ground = model.union([snowman, ground_model(height=-1.0)])
    fractal = SierpinskiTetrahedron(lod=4, smoothness=0.02).translate((0.0, 0.0, -3.0))

    # Orthographic views look down -Z from z = 0; keep the scene in front.
    ortho_snowman = Snowman(center=(0.0, 0.0, -2.0), size=0.35)
    ortho_ground = ground_plane(-0.35).rotate_x(np.deg2rad(30.0))

    renders = [
        ("perspective: snowman", render_perspective(on_ground, lights, resolution, pattern)),
        ("perspective: sierpinski", render_perspective(fractal, lights, resolution, pattern)),
        ("orthographic", render_orthographic(ortho_snowman, lights, resolution, pattern)),
        (
            "orthographic shadow",
            render_orthographic_shadow(ortho_ground, ortho_snowman, lights, resolution, pattern),
        ),
        (
            "orthographic with shadow",
            render_orthographic_with_shadow(ortho_ground, ortho_snowman, lights, resolution, pattern),
        ),
    ]

    if progressive > 0:
        render = render_partial_perspective(
            on_ground, lights, resolution, np.random.default_rng(seed), pattern
        )
        render.run(max_steps=progressive)
        renders.append((f"progressive: {progressive} px", render.pixels))

    return renders


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------

def render_gallery(renders, out_path: str, ncols: int = 3) -> None:
    nrows = (len(renders) + ncols - 1) // ncols
    fig, axes = plt.subplots(nrows, ncols, figsize=(ncols * 4.0, nrows * 3.2), facecolor="#111111")
    axes = np.atleast_1d(axes).ravel()

    for ax in axes:
        ax.set_facecolor("#111111")
        ax.set_axis_off()

    for ax, (label, pixels) in zip(axes, renders):
        rgba = np.clip(pixels.to_rgba(), 0.0, 1.0)
        ax.imshow(rgba, interpolation="nearest")
        ax.set_title(label, color="white", fontsize=8, pad=2)

    fig.suptitle("sdfray: sphere-traced SDF gallery", color="white", fontsize=12)
    plt.tight_layout(pad=0.4)
    fig.savefig(out_path, dpi=150, facecolor=fig.get_facecolor())
    plt.close(fig)
    logger.info("Saved: %s", out_path)


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Render the sdfray example scenes to a single PNG gallery."
    )
    parser.add_argument("--out", default="gallery.png", help="Output PNG path")
    parser.add_argument("--cols", type=int, default=3, help="Number of columns (default 3)")
    parser.add_argument("--res", type=int, default=96, help="Image height in pixels (default 96)")
    parser.add_argument("--pattern", default="1", choices=["1", "8"],
                        help="Multisample pattern (default 1)")
    parser.add_argument("--progressive", type=int, default=0,
                        help="Also show a progressive render after this many steps")
    parser.add_argument("--seed", type=int, default=0, help="Seed for the progressive render")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    setup_logging(logging.DEBUG if args.verbose else logging.INFO)
    renders = _make_renders(args.res, args.pattern, args.progressive, args.seed)
    render_gallery(renders, args.out, ncols=args.cols)


if __name__ == "__main__":
    main()
