"""Cubic Bezier paths and de Casteljau evaluation.

A BezierPath starts at a point and continues through a sequence of
:class:`BezierPoint` anchors. An anchor with both control points is reached by
a cubic curve, an anchor without controls by a straight segment. Boolean
operations and circle arcs produce these paths; renderers consume them via
:meth:`BezierPath.to_svg_d` or :meth:`BezierPath.sampled`.

Example:
    >>> from raysketch.core.vector import Vector
    >>> from raysketch.geometry.bezier import de_casteljau
    >>> de_casteljau([Vector(0, 0), Vector(50, 100), Vector(100, 0)], 0.5)
    Vector(x=50.0, y=50.0, z=0.0)
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from raysketch.core.vector import Vector, lerp
from raysketch.geometry.line import Line

if TYPE_CHECKING:
    from raysketch.geometry.rectangle import Rectangle


# Samples per curved segment when flattening a path to a polyline
DEFAULT_CURVE_SAMPLES = 16


# =============================================================================
# de Casteljau
# =============================================================================


def de_casteljau(control_points: Sequence[Vector], t: float) -> Vector:
    """Evaluate a Bezier curve of any degree at ``t``.

    Values of ``t`` outside [0, 1] extrapolate the curve.

    Raises:
        ValueError: If no control points are given.
    """
    if not control_points:
        raise ValueError("Bezier curve needs at least one control point")

    points = list(control_points)
    n = len(points)
    for j in range(1, n):
        for k in range(n - j):
            points[k] = lerp(t, points[k], points[k + 1])
    return points[0]


def split_curve(
    control_points: Sequence[Vector], t: float
) -> tuple[list[Vector], list[Vector]]:
    """Split a Bezier curve at ``t`` into two curves of the same degree.

    Returns:
        ``(before, after)`` control point lists. ``before`` ends and ``after``
        starts at the point on the curve at ``t``.

    Raises:
        ValueError: If no control points are given.
    """
    if not control_points:
        raise ValueError("Bezier curve needs at least one control point")

    before = [control_points[0]]
    after = list(control_points)
    n = len(after)
    for j in range(1, n):
        for k in range(n - j):
            after[k] = lerp(t, after[k], after[k + 1])
            if k == 0:
                before.append(after[k])
    return before, after


def smooth_control_point(
    current: Vector,
    previous: Vector | None,
    following: Vector | None,
    reverse: bool = False,
    smoothing: float = 0.2,
) -> Vector:
    """Control point for ``current`` parallel to its neighbours' chord.

    Missing neighbours (path ends) are replaced by ``current`` itself.
    """
    prev_point = previous if previous is not None else current
    next_point = following if following is not None else current

    chord = next_point - prev_point
    length = chord.magnitude * smoothing
    angle = chord.heading + (math.pi if reverse else 0.0)
    return current + Vector.from_angle(angle, length)


# =============================================================================
# Paths
# =============================================================================


@dataclass(frozen=True)
class BezierPoint:
    """An anchor of a BezierPath.

    Attributes:
        point: The anchor position.
        control1: Control point leaving the previous anchor.
        control2: Control point entering this anchor.
    """

    point: Vector
    control1: Vector | None = None
    control2: Vector | None = None

    @property
    def is_curve(self) -> bool:
        return self.control1 is not None and self.control2 is not None


@dataclass(frozen=True)
class BezierPath:
    """A path of straight and cubic segments.

    Attributes:
        start: First point of the path.
        points: Anchors reached in order from ``start``.
    """

    start: Vector
    points: tuple[BezierPoint, ...] = ()

    @classmethod
    def from_points(
        cls,
        points: Sequence[Vector],
        smoothing: float = 0.2,
        closed: bool = False,
    ) -> BezierPath:
        """Smooth a polyline into a curve through the same points.

        Each control point is placed parallel to the chord between the
        neighbouring points, scaled by ``smoothing``.

        Raises:
            ValueError: If ``points`` is empty.
        """
        if not points:
            raise ValueError("Cannot build a path from no points")

        anchors = list(points)
        if closed:
            anchors.append(points[0])

        def neighbour(index: int) -> Vector | None:
            return anchors[index] if 0 <= index < len(anchors) else None

        bezier_points = []
        for index in range(1, len(anchors)):
            control1 = smooth_control_point(
                anchors[index - 1], neighbour(index - 2), anchors[index], False, smoothing
            )
            control2 = smooth_control_point(
                anchors[index], anchors[index - 1], neighbour(index + 1), True, smoothing
            )
            bezier_points.append(BezierPoint(anchors[index], control1, control2))

        return cls(start=anchors[0], points=tuple(bezier_points))

    @classmethod
    def polyline(cls, points: Sequence[Vector]) -> BezierPath:
        """Path of straight segments through ``points``."""
        if not points:
            raise ValueError("Cannot build a path from no points")
        return cls(start=points[0], points=tuple(BezierPoint(p) for p in points[1:]))

    @property
    def end(self) -> Vector:
        return self.points[-1].point if self.points else self.start

    def segments(self) -> list[list[Vector]]:
        """Control point lists per segment: 2 for lines, 4 for cubics."""
        result = []
        previous = self.start
        for anchor in self.points:
            if anchor.is_curve:
                result.append([previous, anchor.control1, anchor.control2, anchor.point])
            else:
                result.append([previous, anchor.point])
            previous = anchor.point
        return result

    def point_at(self, t: float) -> Vector:
        """Point at ``t`` in [0, 1] along the path, one equal share per segment."""
        segments = self.segments()
        if not segments:
            return self.start

        t = min(max(t, 0.0), 1.0)
        scaled = t * len(segments)
        index = min(int(scaled), len(segments) - 1)
        return de_casteljau(segments[index], scaled - index)

    def sampled(self, samples_per_curve: int = DEFAULT_CURVE_SAMPLES) -> list[Vector]:
        """Flatten the path to a polyline.

        Straight segments contribute their end point only; cubic segments are
        sampled ``samples_per_curve`` times.
        """
        result = [self.start]
        for segment in self.segments():
            if len(segment) == 2:
                result.append(segment[1])
                continue
            for t in np.linspace(0.0, 1.0, samples_per_curve + 1)[1:]:
                result.append(de_casteljau(segment, float(t)))
        return result

    def to_lines(self, samples_per_curve: int = DEFAULT_CURVE_SAMPLES) -> list[Line]:
        """Flattened path as consecutive line segments."""
        points = self.sampled(samples_per_curve)
        return [Line(a, b) for a, b in zip(points, points[1:])]

    @property
    def bounding_box(self) -> Rectangle:
        """Axis-aligned box around the sampled path."""
        from raysketch.geometry.rectangle import Rectangle

        points = self.sampled()
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        return Rectangle(
            x=min(xs), y=min(ys), width=max(xs) - min(xs), height=max(ys) - min(ys)
        )

    def extended(self, other: BezierPath) -> BezierPath:
        """Append ``other``, joining with a straight segment if needed."""
        joined = list(self.points)
        if not other.start.is_close(self.end):
            joined.append(BezierPoint(other.start))
        joined.extend(other.points)
        return BezierPath(start=self.start, points=tuple(joined))

    def to_svg_d(self) -> str:
        """SVG path data: ``M`` then ``C`` for curves and ``L`` for lines."""
        commands = [f"M {_fmt(self.start)}"]
        for anchor in self.points:
            if anchor.is_curve:
                commands.append(
                    f"C {_fmt(anchor.control1)} {_fmt(anchor.control2)} {_fmt(anchor.point)}"
                )
            else:
                commands.append(f"L {_fmt(anchor.point)}")
        return " ".join(commands)


def _fmt(point: Vector) -> str:
    return f"{_number(point.x)},{_number(point.y)}"


def _number(value: float) -> str:
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text
