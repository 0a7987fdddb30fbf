"""Geometry module for shape primitives and their intersections.

Components:
    line: Line segments, normals and ray-segment hits
    circle: Circles, Bezier arcs and robust ray-circle hits
    rectangle: Rotatable rectangles, slab-method ray hits and BoundingBox
    bezier: Cubic Bezier paths, de Casteljau evaluation and smoothing
    polygon: Winding number point-in-polygon tests
    intersection: Pairwise shape intersections and line splitting
    boolean: Union / intersect of circles and rectangles by angular sweep
    hatch: Parallel hatch lines clipped to a shape, and overflowing variants
    noise: Perlin noise for generative sketches

Shapes are immutable dataclasses. Ray hits follow the pattern:
    point_or_none = shape.ray_hit(origin, direction, precision)
"""

from .bezier import BezierPath, BezierPoint, de_casteljau, split_curve
from .boolean import BooleanOperation, boolean_operation
from .circle import Circle
from .hatch import HatchFill, OverflowHatch
from .intersection import Shape, intersections, line_segments
from .line import Line
from .noise import PerlinNoise
from .polygon import contains_point, winding_number
from .rectangle import BoundingBox, Rectangle

__all__ = [
    "Line",
    "Circle",
    "Rectangle",
    "BoundingBox",
    "BezierPath",
    "BezierPoint",
    "de_casteljau",
    "split_curve",
    "contains_point",
    "winding_number",
    "Shape",
    "intersections",
    "line_segments",
    "BooleanOperation",
    "boolean_operation",
    "HatchFill",
    "OverflowHatch",
    "PerlinNoise",
]
