#!/usr/bin/env python3
"""Render the three-emitter refraction sketch.

Traces the demo scene (two lenses, a mirror block, three Fresnel lines and
red, green and blue circular emitters) and writes it as a PNG through the
Taichi raster canvas and/or as an SVG.

Usage:
    python -m examples.render_emitters [options]

Options:
    --width WIDTH         Canvas width (default: 1000)
    --height HEIGHT       Canvas height (default: 1000)
    --ray-step DEGREES    Angle between emitted rays (default: 1.0)
    --style {line,point}  Draw full paths or segment end points (default: line)
    --png PATH            PNG output path (default: emitters.png)
    --svg PATH            Also write an SVG to PATH
    --tone-map METHOD     none, reinhard or exposure (default: reinhard)
    --verbose             Debug logging

Example:
    python -m examples.render_emitters --ray-step 0.5 --svg emitters.svg
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import taichi as ti

from raysketch.emitters import RayTraceStyle
from raysketch.logging_config import setup_logging
from raysketch.preview.display import TONE_MAP_METHODS

logger = logging.getLogger("raysketch.examples")


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the three-emitter refraction sketch.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--width", type=int, default=1000, help="Canvas width (default: 1000)")
    parser.add_argument("--height", type=int, default=1000, help="Canvas height (default: 1000)")
    parser.add_argument(
        "--ray-step",
        type=float,
        default=1.0,
        help="Angle in degrees between emitted rays (default: 1.0)",
    )
    parser.add_argument(
        "--style",
        choices=[s.value for s in RayTraceStyle],
        default=RayTraceStyle.LINE.value,
        help="Draw full ray paths or only segment end points (default: line)",
    )
    parser.add_argument(
        "--png", type=str, default="emitters.png", help="PNG output path (default: emitters.png)"
    )
    parser.add_argument("--svg", type=str, default=None, help="Optional SVG output path")
    parser.add_argument(
        "--tone-map",
        choices=TONE_MAP_METHODS,
        default="reinhard",
        help="Tone mapping for the PNG (default: reinhard)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args()


def render_emitters(
    width: int = 1000,
    height: int = 1000,
    ray_step: float = 1.0,
    style: RayTraceStyle = RayTraceStyle.LINE,
    png_path: str | None = "emitters.png",
    svg_path: str | None = None,
    tone_map: str = "reinhard",
) -> list[Path]:
    """Trace the demo scene and write the requested outputs.

    Returns:
        Paths of the written files.
    """
    # Lazy imports so Taichi is initialized before the canvas is built
    from raysketch.preview.export import save_png, save_svg
    from raysketch.preview.raster import RasterCanvas
    from raysketch.preview.svg import SVGContext
    from raysketch.scene.presets import create_demo_scene

    scene = create_demo_scene(width, height, ray_step=ray_step, style=style)
    scene.run()

    written: list[Path] = []
    if png_path:
        canvas = RasterCanvas(width, height, blend_mode="additive")
        scene.draw(canvas)
        written.append(save_png(canvas, png_path, tone_map=tone_map))
    if svg_path:
        context = SVGContext(width, height, background=(0.0, 0.0, 0.0))
        scene.draw(context)
        written.append(save_svg(context, svg_path))
    return written


def main() -> int:
    """Main entry point."""
    args = parse_args()
    setup_logging("DEBUG" if args.verbose else "INFO")

    ti.init(arch=ti.cpu)

    try:
        written = render_emitters(
            width=args.width,
            height=args.height,
            ray_step=args.ray_step,
            style=RayTraceStyle(args.style),
            png_path=args.png,
            svg_path=args.svg,
            tone_map=args.tone_map,
        )
    except ValueError as e:
        logger.error("Error: %s", e)
        return 1

    for path in written:
        logger.info("Wrote %s", path.absolute())
    return 0


if __name__ == "__main__":
    sys.exit(main())
