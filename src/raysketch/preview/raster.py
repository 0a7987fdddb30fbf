"""Taichi raster canvas for drawing shapes and ray paths.

The canvas is an RGB float buffer of shape (width, height) stored in a Taichi
vector field. Strokes are rasterized by distance: a pixel is covered when its
center lies within half the stroke width of the segment (or ring). Rays are
usually drawn with additive blending so overlapping paths accumulate light;
the result is tone mapped for display or export.

Coordinates follow the sketch plane: x to the right, y down, pixel (0, 0) at
the top-left corner.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raysketch.geometry.line import Line
    >>> from raysketch.preview.raster import RasterCanvas
    >>> canvas = RasterCanvas(64, 64)
    >>> canvas.line(Line.from_coords(0, 32, 63, 32))
    >>> canvas.to_numpy().shape
    (64, 64, 3)
"""

import math
from collections.abc import Iterable
from typing import Literal

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from raysketch.core.vector import Vector
from raysketch.geometry.bezier import BezierPath
from raysketch.geometry.circle import Circle
from raysketch.geometry.line import Line
from raysketch.geometry.rectangle import Rectangle
from raysketch.preview.style import DEFAULT_STYLE, Color, DrawingStyle

# Maximum supported canvas dimensions
MAX_CANVAS_WIDTH = 8192
MAX_CANVAS_HEIGHT = 8192

# Thinnest stroke that still covers a pixel center
MIN_HALF_WIDTH = 0.5

# Type alias for blending options
BlendMode = Literal["normal", "additive"]

_BLEND_CODES = {"normal": 0, "additive": 1}


@ti.data_oriented
class RasterCanvas:
    """Pixel buffer drawing context backed by a Taichi field.

    Attributes:
        width: Canvas width in pixels.
        height: Canvas height in pixels.
        blend_mode: "normal" composites with opacity, "additive" adds
            ``color * opacity`` to the pixel.
        pixels: ``ti.Vector.field(3, ti.f32)`` of shape (width, height).
    """

    def __init__(
        self,
        width: int,
        height: int,
        background: Color = (0.0, 0.0, 0.0),
        blend_mode: BlendMode = "normal",
    ):
        """Allocate the pixel buffer.

        Raises:
            ValueError: If the size is not positive or exceeds the maximum,
                or the blend mode is unknown.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        if width > MAX_CANVAS_WIDTH or height > MAX_CANVAS_HEIGHT:
            raise ValueError(
                f"Canvas dimensions ({width}x{height}) exceed maximum supported "
                f"({MAX_CANVAS_WIDTH}x{MAX_CANVAS_HEIGHT})"
            )

        self.width = int(width)
        self.height = int(height)
        self.blend_mode = blend_mode
        self._blend_code(blend_mode)
        self.background = background
        self.pixels = ti.Vector.field(3, dtype=ti.f32, shape=(self.width, self.height))
        self.clear()

    @staticmethod
    def _blend_code(blend_mode: str) -> int:
        if blend_mode not in _BLEND_CODES:
            raise ValueError(f"Unknown blend mode: {blend_mode}")
        return _BLEND_CODES[blend_mode]

    # =========================================================================
    # Kernels
    # =========================================================================

    @ti.kernel
    def _fill(self, r: ti.f32, g: ti.f32, b: ti.f32):
        for i, j in self.pixels:
            self.pixels[i, j] = tm.vec3(r, g, b)

    @ti.func
    def _blend(self, i: ti.i32, j: ti.i32, color: tm.vec3, alpha: ti.f32, additive: ti.i32):
        if additive != 0:
            self.pixels[i, j] += color * alpha
        else:
            self.pixels[i, j] = self.pixels[i, j] * (1.0 - alpha) + color * alpha

    @ti.func
    def _stroke_segment(
        self,
        a: tm.vec2,
        c: tm.vec2,
        half_width: ti.f32,
        color: tm.vec3,
        alpha: ti.f32,
        additive: ti.i32,
    ):
        ab = c - a
        len_sq = ab.dot(ab)

        x0 = ti.max(ti.cast(ti.floor(ti.min(a.x, c.x) - half_width), ti.i32), 0)
        x1 = ti.min(ti.cast(ti.ceil(ti.max(a.x, c.x) + half_width), ti.i32), self.width - 1)
        y0 = ti.max(ti.cast(ti.floor(ti.min(a.y, c.y) - half_width), ti.i32), 0)
        y1 = ti.min(ti.cast(ti.ceil(ti.max(a.y, c.y) + half_width), ti.i32), self.height - 1)

        for i in range(x0, x1 + 1):
            for j in range(y0, y1 + 1):
                p = tm.vec2(ti.cast(i, ti.f32) + 0.5, ti.cast(j, ti.f32) + 0.5)
                t = 0.0
                if len_sq > 0.0:
                    t = tm.clamp((p - a).dot(ab) / len_sq, 0.0, 1.0)
                if tm.length(p - (a + t * ab)) <= half_width:
                    self._blend(i, j, color, alpha, additive)

    @ti.kernel
    def _stroke_segments(
        self,
        segments: ti.types.ndarray(dtype=ti.f32, ndim=2),
        half_width: ti.f32,
        r: ti.f32,
        g: ti.f32,
        b: ti.f32,
        alpha: ti.f32,
        additive: ti.i32,
    ):
        # Additive blending is an atomic add, so segments run in parallel
        color = tm.vec3(r, g, b)
        for s in range(segments.shape[0]):
            a = tm.vec2(segments[s, 0], segments[s, 1])
            c = tm.vec2(segments[s, 2], segments[s, 3])
            self._stroke_segment(a, c, half_width, color, alpha, additive)

    @ti.kernel
    def _stroke_segments_ordered(
        self,
        segments: ti.types.ndarray(dtype=ti.f32, ndim=2),
        half_width: ti.f32,
        r: ti.f32,
        g: ti.f32,
        b: ti.f32,
        alpha: ti.f32,
        additive: ti.i32,
    ):
        # Normal blending reads the pixel before writing it; overlapping
        # segments must composite in draw order
        color = tm.vec3(r, g, b)
        ti.loop_config(serialize=True)
        for s in range(segments.shape[0]):
            a = tm.vec2(segments[s, 0], segments[s, 1])
            c = tm.vec2(segments[s, 2], segments[s, 3])
            self._stroke_segment(a, c, half_width, color, alpha, additive)

    @ti.kernel
    def _disc(
        self,
        cx: ti.f32,
        cy: ti.f32,
        inner: ti.f32,
        outer: ti.f32,
        x0: ti.i32,
        x1: ti.i32,
        y0: ti.i32,
        y1: ti.i32,
        r: ti.f32,
        g: ti.f32,
        b: ti.f32,
        alpha: ti.f32,
        additive: ti.i32,
    ):
        color = tm.vec3(r, g, b)
        for i, j in ti.ndrange((x0, x1), (y0, y1)):
            p = tm.vec2(ti.cast(i, ti.f32) + 0.5, ti.cast(j, ti.f32) + 0.5)
            d = tm.length(p - tm.vec2(cx, cy))
            if d >= inner and d <= outer:
                self._blend(i, j, color, alpha, additive)

    @ti.kernel
    def _convex_quad(
        self,
        quad: ti.types.ndarray(dtype=ti.f32, ndim=2),
        x0: ti.i32,
        x1: ti.i32,
        y0: ti.i32,
        y1: ti.i32,
        r: ti.f32,
        g: ti.f32,
        b: ti.f32,
        alpha: ti.f32,
        additive: ti.i32,
    ):
        color = tm.vec3(r, g, b)
        for i, j in ti.ndrange((x0, x1), (y0, y1)):
            p = tm.vec2(ti.cast(i, ti.f32) + 0.5, ti.cast(j, ti.f32) + 0.5)
            positive = 0
            negative = 0
            for k in range(4):
                a = tm.vec2(quad[k, 0], quad[k, 1])
                c = tm.vec2(quad[(k + 1) % 4, 0], quad[(k + 1) % 4, 1])
                side = (c.x - a.x) * (p.y - a.y) - (p.x - a.x) * (c.y - a.y)
                if side > 0.0:
                    positive += 1
                elif side < 0.0:
                    negative += 1
            if positive == 0 or negative == 0:
                self._blend(i, j, color, alpha, additive)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _pixel_bounds(
        self, min_x: float, min_y: float, max_x: float, max_y: float
    ) -> tuple[int, int, int, int]:
        """Clamped half-open pixel ranges covering a box."""
        x0 = max(int(math.floor(min_x)), 0)
        x1 = min(int(math.ceil(max_x)) + 1, self.width)
        y0 = max(int(math.floor(min_y)), 0)
        y1 = min(int(math.ceil(max_y)) + 1, self.height)
        return x0, max(x1, x0), y0, max(y1, y0)

    def _stroke_array(self, segments: npt.NDArray[np.float32], style: DrawingStyle) -> None:
        if style.stroke is None or len(segments) == 0:
            return
        half_width = max(style.stroke_width / 2, MIN_HALF_WIDTH)
        r, g, b = style.stroke
        additive = self._blend_code(self.blend_mode)
        kernel = self._stroke_segments if additive else self._stroke_segments_ordered
        kernel(
            np.ascontiguousarray(segments, dtype=np.float32),
            half_width,
            r,
            g,
            b,
            style.opacity,
            additive,
        )

    def _ring(
        self, center: Vector, inner: float, outer: float, color: Color, opacity: float
    ) -> None:
        x0, x1, y0, y1 = self._pixel_bounds(
            center.x - outer, center.y - outer, center.x + outer, center.y + outer
        )
        if x0 == x1 or y0 == y1:
            return
        r, g, b = color
        self._disc(
            center.x, center.y, inner, outer, x0, x1, y0, y1,
            r, g, b, opacity, self._blend_code(self.blend_mode),
        )

    # =========================================================================
    # Drawing context API
    # =========================================================================

    def clear(self, color: Color | None = None) -> None:
        """Fill the whole canvas with ``color`` (default: the background)."""
        r, g, b = color if color is not None else self.background
        self._fill(r, g, b)

    def line(self, line: Line, style: DrawingStyle = DEFAULT_STYLE) -> None:
        self.lines([line], style)

    def lines(self, lines: Iterable[Line], style: DrawingStyle = DEFAULT_STYLE) -> None:
        """Stroke many segments in one kernel launch."""
        segments = np.array(
            [(s.start.x, s.start.y, s.end.x, s.end.y) for s in lines], dtype=np.float32
        ).reshape(-1, 4)
        self._stroke_array(segments, style)

    def circle(self, circle: Circle, style: DrawingStyle = DEFAULT_STYLE) -> None:
        if style.fill is not None:
            self._ring(circle.center, 0.0, circle.radius, style.fill, style.opacity)
        if style.stroke is not None:
            half_width = max(style.stroke_width / 2, MIN_HALF_WIDTH)
            self._ring(
                circle.center,
                max(circle.radius - half_width, 0.0),
                circle.radius + half_width,
                style.stroke,
                style.opacity,
            )

    def rectangle(self, rect: Rectangle, style: DrawingStyle = DEFAULT_STYLE) -> None:
        if style.fill is not None:
            corners = rect.corners
            quad = np.array([(c.x, c.y) for c in corners], dtype=np.float32)
            x0, x1, y0, y1 = self._pixel_bounds(rect.min_x, rect.min_y, rect.max_x, rect.max_y)
            if x0 < x1 and y0 < y1:
                r, g, b = style.fill
                self._convex_quad(
                    quad, x0, x1, y0, y1, r, g, b, style.opacity,
                    self._blend_code(self.blend_mode),
                )
        self.lines(rect.edges, style)

    def path(self, path: BezierPath, style: DrawingStyle = DEFAULT_STYLE) -> None:
        self.lines(path.to_lines(), style)

    def point(self, point: Vector, style: DrawingStyle = DEFAULT_STYLE) -> None:
        """Draw a dot of radius ``stroke_width`` in the stroke color."""
        color = style.stroke if style.stroke is not None else style.fill
        if color is None:
            return
        self._ring(point, 0.0, max(style.stroke_width, MIN_HALF_WIDTH), color, style.opacity)

    # =========================================================================
    # Output
    # =========================================================================

    def to_numpy(self) -> npt.NDArray[np.float32]:
        """Linear image as an array of shape (height, width, 3)."""
        image = self.pixels.to_numpy()
        return np.transpose(image, (1, 0, 2)).astype(np.float32)

    def pixel(self, x: int, y: int) -> tuple[float, float, float]:
        value = self.pixels[x, y]
        return (float(value[0]), float(value[1]), float(value[2]))
