"""Writing sketches to disk.

Raster canvases are tone mapped, gamma encoded and saved as 8-bit PNG files
through Pillow. SVG contexts are serialized by svgwrite.

Example:
    >>> from raysketch.preview.export import save_png
    >>> from raysketch.preview.raster import RasterCanvas
    >>>
    >>> canvas = RasterCanvas(512, 512, blend_mode="additive")
    >>> save_png(canvas, "sketch.png", tone_map="reinhard")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from raysketch.preview.display import ToneMapMethod, as_image, process_image_for_display

if TYPE_CHECKING:
    from raysketch.preview.display import ImageSource
    from raysketch.preview.svg import SVGContext

logger = logging.getLogger(__name__)


def image_to_uint8(
    image: npt.NDArray[np.float32],
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 2.2,
    exposure: float = 1.0,
) -> npt.NDArray[np.uint8]:
    """Convert a linear float image to 8-bit after the display pipeline.

    Args:
        image: Linear image array of shape (H, W, 3).
        tone_map: Tone mapping method ("none", "reinhard", or "exposure").
        gamma: Gamma encoding value (default 2.2 for sRGB).
        exposure: Exposure for the "exposure" tone map.

    Returns:
        Array of shape (H, W, 3) with dtype uint8.
    """
    processed = process_image_for_display(
        image, tone_map=tone_map, gamma=gamma, exposure=exposure
    )
    return np.round(processed * 255).astype(np.uint8)


def save_png_from_array(
    image: npt.NDArray[np.float32],
    filepath: str | Path,
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 2.2,
    exposure: float = 1.0,
) -> Path:
    """Save a linear (H, W, 3) array as an 8-bit PNG and return its path."""
    path = Path(filepath)
    image_uint8 = image_to_uint8(image, tone_map=tone_map, gamma=gamma, exposure=exposure)
    PILImage.fromarray(image_uint8, mode="RGB").save(path)
    logger.info("Saved PNG %s (%dx%d)", path, image_uint8.shape[1], image_uint8.shape[0])
    return path


def save_png(
    source: ImageSource,
    filepath: str | Path,
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 2.2,
    exposure: float = 1.0,
) -> Path:
    """Save a RasterCanvas (or linear image array) as a PNG file.

    Args:
        source: Canvas or image to save.
        filepath: Output path, normally ending in ``.png``.
        tone_map: Tone mapping method ("none", "reinhard", or "exposure").
        gamma: Gamma encoding value (default 2.2 for sRGB).
        exposure: Exposure for the "exposure" tone map.

    Example:
        >>> canvas = RasterCanvas(256, 256)
        >>> save_png(canvas, "out.png", tone_map="exposure", exposure=0.5)
    """
    return save_png_from_array(
        as_image(source), filepath, tone_map=tone_map, gamma=gamma, exposure=exposure
    )


def save_svg(context: SVGContext, filepath: str | Path) -> Path:
    """Write an SVG context to ``filepath`` and return the path."""
    return context.save(filepath)


def compute_rmse(
    image_a: npt.NDArray[np.floating[npt.NBitBase]],
    image_b: npt.NDArray[np.floating[npt.NBitBase]],
) -> float:
    """Root mean squared error between two images of the same shape.

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(f"Image shapes must match: {image_a.shape} vs {image_b.shape}")

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
