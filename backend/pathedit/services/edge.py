"""
Edge: a view over one segment of a path.

An ``Edge`` holds references to two anchors owned by a path plus some
bookkeeping about where the segment sits in its shape.  It never copies
or mutates the anchors.  Edges are transient: whenever the underlying
anchors change the caller rebuilds them with the helpers in
:mod:`pathedit.services.edge_helpers`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Hashable, NamedTuple, Optional, Tuple

from .anchor import Anchor
from .bounding_box import BoundingBox
from .path import Path
from .segment import (
    Cubic,
    Line,
    Primitive,
    Segment,
    cubic_from_segment,
    is_segment_linear,
    line_from_segment,
    primitive_from_segment,
    segment_length,
)
from .vec import Vec2

EdgeKey = Tuple[Hashable, ...]


class ClosestPoint(NamedTuple):
    """Nearest point on an edge to a query point."""

    position: Vec2
    time: float
    distance: float


@dataclass(eq=False)
class Edge:
    """One path segment between two anchors.

    Equality is object identity; use :meth:`key` to match rebuilt edges.

    Attributes:
        anchor1: Start anchor.
        anchor2: End anchor.
        index: Segment index within its path.
        path_index: Path index within a multi‑path shape.
        closed: Whether the parent path is closed.
        shape_id: Identifier of the owning shape, if any.
        path: The path the anchors belong to, if known.
    """

    anchor1: Anchor
    anchor2: Anchor
    index: int = 0
    path_index: int = 0
    closed: bool = False
    shape_id: Optional[str] = None
    path: Optional[Path] = field(default=None, repr=False)

    def key(self) -> EdgeKey:
        """Stable identity across rebuilds of the same physical edge.

        A shape id makes the key survive rebuilding the shape's paths.
        Without one the owning path object identifies the edge, and an
        edge built with neither is only equal to itself.
        """
        if self.shape_id is not None:
            return ("shape", self.shape_id, self.path_index, self.index)
        if self.path is not None:
            return ("path", id(self.path), self.index)
        return ("edge", id(self))

    def is_valid(self) -> bool:
        return Anchor.is_valid_anchor(self.anchor1) and Anchor.is_valid_anchor(self.anchor2)

    def segment(self) -> Segment:
        return (self.anchor1, self.anchor2)

    def is_linear(self) -> bool:
        return is_segment_linear(self.segment())

    def length(self) -> float:
        return segment_length(self.segment())

    def to_line(self) -> Line:
        return line_from_segment(self.segment())

    def to_cubic(self) -> Cubic:
        return cubic_from_segment(self.segment())

    def to_primitive(self) -> Primitive:
        return primitive_from_segment(self.segment())

    def to_path(self) -> Path:
        """Standalone two‑anchor path, e.g. for drawing a highlight."""
        return Path([self.anchor1.clone(), self.anchor2.clone()])

    def loose_bounding_box(self) -> BoundingBox:
        """Box over both anchor positions and, for curves, both control points."""
        return self.to_primitive().bounding_box()

    def closest_point(self, point: Any) -> ClosestPoint:
        """Find the closest point on the edge to ``point``.

        ``point`` may be anything :meth:`Vec2.coerce` accepts.  This is the
        single place where hit distance is derived.
        """
        p = Vec2.coerce(point)
        position, time = self.to_primitive().closest_point(p)
        return ClosestPoint(position, time, position.distance(p))
