"""Tone mapping and Matplotlib preview for raster sketches.

Ray paths drawn with additive blending accumulate values above 1.0 where many
rays overlap. These helpers compress such buffers into the displayable range
and show them in a Matplotlib window.

Example:
    >>> import numpy as np
    >>> from raysketch.preview.display import process_image_for_display
    >>> image = np.full((2, 2, 3), 3.0, dtype=np.float32)
    >>> float(process_image_for_display(image, tone_map="reinhard", gamma=1.0)[0, 0, 0])
    0.75
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal, Union

import numpy as np
import numpy.typing as npt

if TYPE_CHECKING:
    from raysketch.preview.raster import RasterCanvas

    ImageSource = Union[RasterCanvas, npt.NDArray[np.float32]]


# Type alias for tone mapping options
ToneMapMethod = Literal["none", "reinhard", "exposure"]

TONE_MAP_METHODS: tuple[str, ...] = ("none", "reinhard", "exposure")


def as_image(source: ImageSource) -> npt.NDArray[np.float32]:
    """Return the linear (H, W, 3) image held by a canvas or array."""
    if hasattr(source, "to_numpy"):
        return source.to_numpy()
    image = np.asarray(source, dtype=np.float32)
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) image, got shape {image.shape}")
    return image


def tone_map_reinhard(image: npt.NDArray[np.float32]) -> npt.NDArray[np.float32]:
    """Reinhard operator ``c / (1 + c)``, mapping [0, inf) onto [0, 1)."""
    image = np.maximum(image, 0.0)
    return (image / (1.0 + image)).astype(np.float32)


def tone_map_exposure(
    image: npt.NDArray[np.float32],
    exposure: float = 1.0,
) -> npt.NDArray[np.float32]:
    """Exposure operator ``1 - exp(-c * exposure)``.

    Args:
        image: Linear image array of shape (H, W, 3).
        exposure: Brightness multiplier; higher values brighten the result.
    """
    image = np.maximum(image, 0.0)
    return (1.0 - np.exp(-image * exposure)).astype(np.float32)


def apply_gamma(
    image: npt.NDArray[np.float32],
    gamma: float = 2.2,
) -> npt.NDArray[np.float32]:
    """Encode linear values in [0, 1] with ``value ** (1 / gamma)``."""
    if gamma <= 0:
        raise ValueError(f"Gamma must be positive, got {gamma}")
    if gamma == 1.0:
        return image

    # Negative values would produce NaN
    image = np.clip(image, 0.0, 1.0)
    return np.power(image, 1.0 / gamma).astype(np.float32)


def process_image_for_display(
    image: npt.NDArray[np.float32],
    tone_map: ToneMapMethod = "none",
    gamma: float = 2.2,
    exposure: float = 1.0,
) -> npt.NDArray[np.float32]:
    """Run the display pipeline: tone map, gamma encode, clamp to [0, 1].

    Args:
        image: Linear image array of shape (H, W, 3).
        tone_map: One of "none", "reinhard" or "exposure".
        gamma: Gamma encoding value (2.2 for sRGB, 1.0 to leave linear).
        exposure: Exposure used by the "exposure" tone map.

    Returns:
        A new float32 array in [0, 1].

    Raises:
        ValueError: If ``tone_map`` is not a known method.
    """
    result = image.copy()

    if tone_map == "reinhard":
        result = tone_map_reinhard(result)
    elif tone_map == "exposure":
        result = tone_map_exposure(result, exposure)
    elif tone_map != "none":
        raise ValueError(f"Unknown tone mapping method: {tone_map}")

    result = apply_gamma(result, gamma)
    return np.clip(result, 0.0, 1.0).astype(np.float32)


def show_preview(
    source: ImageSource,
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 2.2,
    exposure: float = 1.0,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 8),
    block: bool = True,
) -> None:
    """Show a canvas or image array in a Matplotlib figure.

    Args:
        source: A RasterCanvas or a linear (H, W, 3) array.
        tone_map: Tone mapping method.
        gamma: Gamma encoding value.
        exposure: Exposure for the "exposure" tone map.
        title: Figure title; defaults to the image size and tone map.
        figsize: Figure size in inches.
        block: Whether to block until the window is closed.
    """
    import matplotlib.pyplot as plt

    image = as_image(source)
    display_image = process_image_for_display(
        image, tone_map=tone_map, gamma=gamma, exposure=exposure
    )

    _, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(display_image)
    ax.axis("off")

    if title is None:
        height, width = image.shape[:2]
        title = f"Sketch {width}x{height}"
        if tone_map != "none":
            title += f" ({tone_map})"
    ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)


def show_comparison(
    image_a: ImageSource,
    image_b: ImageSource,
    *,
    labels: tuple[str, str] = ("A", "B"),
    tone_map: ToneMapMethod = "none",
    gamma: float = 2.2,
    diff_scale: float = 10.0,
    figsize: tuple[float, float] = (16, 6),
    block: bool = True,
) -> float:
    """Show two sketches side by side with their amplified difference.

    Returns:
        RMSE between the two images in display space.
    """
    import matplotlib.pyplot as plt

    from raysketch.preview.export import compute_rmse

    display_a = process_image_for_display(as_image(image_a), tone_map=tone_map, gamma=gamma)
    display_b = process_image_for_display(as_image(image_b), tone_map=tone_map, gamma=gamma)
    rmse = compute_rmse(display_a, display_b)

    diff = np.abs(display_a.astype(np.float64) - display_b.astype(np.float64))
    panels = (display_a, display_b, np.clip(diff * diff_scale, 0.0, 1.0))
    titles = (labels[0], labels[1], f"Difference ({diff_scale}x) - RMSE: {rmse:.6f}")

    _, axes = plt.subplots(1, 3, figsize=figsize)
    for ax, panel, panel_title in zip(axes, panels, titles):
        ax.imshow(panel)
        ax.set_title(panel_title)
        ax.axis("off")

    plt.tight_layout()
    plt.show(block=block)

    return rmse
