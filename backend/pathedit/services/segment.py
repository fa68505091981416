"""
Segment math for path edges: straight lines and cubic Béziers.

A *segment* is the pair of anchors ``(anchor1, anchor2)`` bounding one
piece of a path.  It reduces to one of two geometric primitives:

- :class:`Line` when ``anchor1.handle_out`` and ``anchor2.handle_in``
  are both exactly zero;
- :class:`Cubic` otherwise, with control points
  ``anchor1.position + anchor1.handle_out`` and
  ``anchor2.position + anchor2.handle_in``.

Both primitives expose the same small interface (``closest_point``,
``length`` and ``bounding_box``) so callers obtain one with
:func:`primitive_from_segment` and never inspect its type.

Point projection onto a line is closed form.  For a cubic there is no
closed form, so :func:`position_and_time_at_closest_point_on_cubic`
runs a vectorised coarse scan with numpy followed by a golden‑section
refinement around the best sample.  The procedure is deterministic.
"""

from __future__ import annotations

import math
from typing import NamedTuple, Tuple, Union

import numpy as np

from .anchor import Anchor
from .bounding_box import BoundingBox
from .constants import (
    CUBIC_CLOSEST_POINT_SAMPLES,
    CUBIC_LENGTH_SUBDIVISIONS,
    CUBIC_MAX_ITERATIONS,
    CUBIC_TIME_TOLERANCE,
)
from .vec import Vec2

__all__ = [
    "Segment",
    "Line",
    "Cubic",
    "Primitive",
    "PositionAndTime",
    "is_segment_linear",
    "line_from_segment",
    "cubic_from_segment",
    "primitive_from_segment",
    "line_length",
    "cubic_length",
    "segment_length",
    "partial_segment_length",
    "point_on_cubic_at_time",
    "cubics_by_splitting_cubic_at_time",
    "cubic_by_trimming_cubic",
    "position_and_time_at_closest_point_on_line",
    "position_and_time_at_closest_point_on_cubic",
]

_INV_PHI = (math.sqrt(5.0) - 1.0) / 2.0

Segment = Tuple[Anchor, Anchor]


class PositionAndTime(NamedTuple):
    """Closest point on a primitive and its curve parameter in [0, 1]."""

    position: Vec2
    time: float


class Line(NamedTuple):
    """Straight segment from ``p1`` to ``p2``."""

    p1: Vec2
    p2: Vec2

    def closest_point(self, point: Vec2) -> PositionAndTime:
        return position_and_time_at_closest_point_on_line(point, self)

    def length(self) -> float:
        return line_length(self)

    def bounding_box(self) -> BoundingBox:
        return BoundingBox(self.p1.min(self.p2), self.p1.max(self.p2))


class Cubic(NamedTuple):
    """Cubic Bézier with end points ``p0``/``p3`` and controls ``c1``/``c2``."""

    p0: Vec2
    c1: Vec2
    c2: Vec2
    p3: Vec2

    def closest_point(self, point: Vec2) -> PositionAndTime:
        return position_and_time_at_closest_point_on_cubic(point, self)

    def length(self) -> float:
        return cubic_length(self)

    def bounding_box(self) -> BoundingBox:
        return BoundingBox.from_cubic(self)


Primitive = Union[Line, Cubic]


# ---------------------------------------------------------------------------
# Segment classification and construction


def is_segment_linear(segment: Segment) -> bool:
    """Return True when the segment has no curve influence.

    The test is exact; callers that want fuzzy linearity must round the
    handles beforehand.
    """
    anchor1, anchor2 = segment
    return anchor1.handle_out.is_zero() and anchor2.handle_in.is_zero()


def line_from_segment(segment: Segment) -> Line:
    anchor1, anchor2 = segment
    return Line(anchor1.position, anchor2.position)


def cubic_from_segment(segment: Segment) -> Cubic:
    anchor1, anchor2 = segment
    return Cubic(
        anchor1.position,
        anchor1.handle_out_point(),
        anchor2.handle_in_point(),
        anchor2.position,
    )


def primitive_from_segment(segment: Segment) -> Primitive:
    """Reduce a segment to a :class:`Line` or a :class:`Cubic`."""
    if is_segment_linear(segment):
        return line_from_segment(segment)
    return cubic_from_segment(segment)


# ---------------------------------------------------------------------------
# Lengths


def line_length(line: Line) -> float:
    return line.p1.distance(line.p2)


def _control_array(cubic: Cubic) -> np.ndarray:
    return np.array([[p.x, p.y] for p in cubic], dtype=float)


def _sample_cubic(cubic: Cubic, ts: np.ndarray) -> np.ndarray:
    """Evaluate ``cubic`` at every parameter in ``ts``; returns shape (n, 2)."""
    mt = 1.0 - ts
    basis = np.stack(
        [mt * mt * mt, 3.0 * mt * mt * ts, 3.0 * mt * ts * ts, ts * ts * ts],
        axis=1,
    )
    return basis @ _control_array(cubic)


def cubic_length(cubic: Cubic, subdivisions: int = CUBIC_LENGTH_SUBDIVISIONS) -> float:
    """Approximate arc length by summing chords of a uniform polyline.

    Raises:
        ValueError: If ``subdivisions`` is not positive.
    """
    if subdivisions <= 0:
        raise ValueError("subdivisions must be positive")
    pts = _sample_cubic(cubic, np.linspace(0.0, 1.0, subdivisions + 1))
    deltas = np.diff(pts, axis=0)
    return float(np.sum(np.hypot(deltas[:, 0], deltas[:, 1])))


def segment_length(segment: Segment) -> float:
    return primitive_from_segment(segment).length()


def partial_segment_length(segment: Segment, end_time: float) -> float:
    """Length of the segment from its start up to parameter ``end_time``."""
    end_time = min(max(end_time, 0.0), 1.0)
    if is_segment_linear(segment):
        return end_time * line_length(line_from_segment(segment))
    trimmed = cubic_by_trimming_cubic(cubic_from_segment(segment), 0.0, end_time)
    return cubic_length(trimmed)


# ---------------------------------------------------------------------------
# Cubic evaluation and subdivision


def point_on_cubic_at_time(cubic: Cubic, t: float) -> Vec2:
    if t == 0:
        return cubic.p0
    if t == 1:
        return cubic.p3
    mt = 1.0 - t
    a = mt * mt * mt
    b = 3.0 * mt * mt * t
    c = 3.0 * mt * t * t
    d = t * t * t
    p0, c1, c2, p3 = cubic
    return Vec2(
        a * p0.x + b * c1.x + c * c2.x + d * p3.x,
        a * p0.y + b * c1.y + c * c2.y + d * p3.y,
    )


def _lerp(a: Vec2, b: Vec2, t: float) -> Vec2:
    return Vec2(a.x + (b.x - a.x) * t, a.y + (b.y - a.y) * t)


def cubics_by_splitting_cubic_at_time(cubic: Cubic, t: float) -> Tuple[Cubic, Cubic]:
    """Split ``cubic`` at ``t`` with de Casteljau's construction."""
    p0, c1, c2, p3 = cubic
    q0 = _lerp(p0, c1, t)
    q1 = _lerp(c1, c2, t)
    q2 = _lerp(c2, p3, t)
    r0 = _lerp(q0, q1, t)
    r1 = _lerp(q1, q2, t)
    s = _lerp(r0, r1, t)
    return Cubic(p0, q0, r0, s), Cubic(s, r1, q2, p3)


def cubic_by_trimming_cubic(cubic: Cubic, start_time: float, end_time: float) -> Cubic:
    """Return the portion of ``cubic`` between ``start_time`` and ``end_time``."""
    if end_time <= start_time:
        p = point_on_cubic_at_time(cubic, start_time)
        return Cubic(p, p, p, p)
    left, _ = cubics_by_splitting_cubic_at_time(cubic, end_time)
    if start_time <= 0:
        return left
    _, middle = cubics_by_splitting_cubic_at_time(left, start_time / end_time)
    return middle


# ---------------------------------------------------------------------------
# Closest point


def position_and_time_at_closest_point_on_line(point: Vec2, line: Line) -> PositionAndTime:
    """Project ``point`` onto the segment ``line``.

    The parameter is clamped to [0, 1] so the result lies on the segment
    rather than its extension.  A zero‑length line yields ``time = 0`` at
    ``p1``.
    """
    p1, p2 = line
    direction = p2.sub(p1)
    denom = direction.length_squared()
    if denom == 0:
        return PositionAndTime(p1, 0.0)
    t = point.sub(p1).dot(direction) / denom
    t = min(max(t, 0.0), 1.0)
    return PositionAndTime(p1.add(direction.mul_scalar(t)), t)


def position_and_time_at_closest_point_on_cubic(point: Vec2, cubic: Cubic) -> PositionAndTime:
    """Find the point on ``cubic`` nearest to ``point``.

    1. Evaluate the curve at ``CUBIC_CLOSEST_POINT_SAMPLES + 1`` uniform
       parameters (endpoints included) and keep the nearest sample; the
       first minimum wins ties.
    2. Golden‑section search of the squared distance over the bracket
       formed by the neighbouring samples, clamped to [0, 1].
    3. Stop once the bracket is narrower than ``CUBIC_TIME_TOLERANCE`` or
       after ``CUBIC_MAX_ITERATIONS`` steps.

    The refined point replaces the best sample only if it is strictly
    closer.
    """
    n = CUBIC_CLOSEST_POINT_SAMPLES
    ts = np.linspace(0.0, 1.0, n + 1)
    pts = _sample_cubic(cubic, ts)
    d2 = (pts[:, 0] - point.x) ** 2 + (pts[:, 1] - point.y) ** 2
    best = int(np.argmin(d2))

    best_time = float(ts[best])
    best_pos = point_on_cubic_at_time(cubic, best_time)
    best_d2 = best_pos.distance_squared(point)

    def dist2(t: float) -> float:
        return point_on_cubic_at_time(cubic, t).distance_squared(point)

    lo = float(ts[max(best - 1, 0)])
    hi = float(ts[min(best + 1, n)])
    x1 = hi - _INV_PHI * (hi - lo)
    x2 = lo + _INV_PHI * (hi - lo)
    f1 = dist2(x1)
    f2 = dist2(x2)
    for _ in range(CUBIC_MAX_ITERATIONS):
        if hi - lo <= CUBIC_TIME_TOLERANCE:
            break
        if f1 <= f2:
            hi, x2, f2 = x2, x1, f1
            x1 = hi - _INV_PHI * (hi - lo)
            f1 = dist2(x1)
        else:
            lo, x1, f1 = x1, x2, f2
            x2 = lo + _INV_PHI * (hi - lo)
            f2 = dist2(x2)

    t = min(max(0.5 * (lo + hi), 0.0), 1.0)
    pos = point_on_cubic_at_time(cubic, t)
    if pos.distance_squared(point) < best_d2:
        return PositionAndTime(pos, t)
    return PositionAndTime(best_pos, best_time)
