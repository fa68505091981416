"""
Axis‑aligned bounding box for 2D geometry.

Unlike :class:`~pathedit.services.vec.Vec2` a ``BoundingBox`` is a
mutable accumulator: the ``expand_*`` methods grow the box in place and
return ``self`` so calls can be chained.  Use :meth:`BoundingBox.clone`
before inflating a box that is shared, e.g. a cached bounds value.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Sequence

from .vec import Vec2


@dataclass
class BoundingBox:
    """Box defined by its minimum and maximum corners (inclusive)."""

    min: Vec2 = field(default_factory=Vec2)
    max: Vec2 = field(default_factory=Vec2)

    def clone(self) -> "BoundingBox":
        return BoundingBox(self.min, self.max)

    def center(self) -> Vec2:
        return self.min.add(self.max).mul_scalar(0.5)

    def width(self) -> float:
        return self.max.x - self.min.x

    def height(self) -> float:
        return self.max.y - self.min.y

    def is_finite(self) -> bool:
        return self.min.is_finite() and self.max.is_finite()

    def canonicalize(self) -> "BoundingBox":
        """Swap corner components so that ``min <= max`` on both axes."""
        lo = self.min.min(self.max)
        hi = self.min.max(self.max)
        self.min, self.max = lo, hi
        return self

    def expand_to_include_point(self, point: Vec2) -> "BoundingBox":
        self.min = self.min.min(point)
        self.max = self.max.max(point)
        return self

    def expand_to_include_bounding_box(self, box: "BoundingBox") -> "BoundingBox":
        return self.expand_to_include_point(box.min).expand_to_include_point(box.max)

    def expand_scalar(self, distance: float) -> "BoundingBox":
        """Grow the box by ``distance`` in every direction."""
        self.min = self.min.sub_scalar(distance)
        self.max = self.max.add_scalar(distance)
        return self

    def contains_point(self, point: Vec2) -> bool:
        return (
            self.min.x <= point.x <= self.max.x
            and self.min.y <= point.y <= self.max.y
        )

    def contains_bounding_box(self, box: "BoundingBox") -> bool:
        return (
            box.min.x >= self.min.x
            and box.max.x <= self.max.x
            and box.min.y >= self.min.y
            and box.max.y <= self.max.y
        )

    def overlaps_bounding_box(self, box: "BoundingBox") -> bool:
        # Touching boxes count as overlapping.
        return (
            box.max.x >= self.min.x
            and box.min.x <= self.max.x
            and box.max.y >= self.min.y
            and box.min.y <= self.max.y
        )

    @classmethod
    def from_points(cls, points: Iterable[Vec2]) -> Optional["BoundingBox"]:
        """Return the smallest box containing ``points`` or ``None`` if empty."""
        box: Optional[BoundingBox] = None
        for p in points:
            if box is None:
                box = cls(p, p)
            else:
                box.expand_to_include_point(p)
        return box

    @classmethod
    def from_cubic(cls, cubic: Sequence[Vec2]) -> "BoundingBox":
        """Loose bound of a cubic's four control points.

        The curve lies inside its control polygon's convex hull, so this
        box always contains the curve even though it is not tight.
        """
        p0, p1, p2, p3 = cubic
        return cls(
            Vec2(min(p0.x, p1.x, p2.x, p3.x), min(p0.y, p1.y, p2.y, p3.y)),
            Vec2(max(p0.x, p1.x, p2.x, p3.x), max(p0.y, p1.y, p2.y, p3.y)),
        )

    @staticmethod
    def is_valid(box: Any) -> bool:
        return isinstance(box, BoundingBox) and Vec2.is_valid(box.min) and Vec2.is_valid(box.max)
