"""
Pydantic data models for the edge hit‑testing API.

Clients (the editor canvas) post the paths they are currently showing
together with the pointer position or marquee box; the backend rebuilds
edges from those paths for every request.  Field names use camelCase to
match the JavaScript client.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from ..services.anchor import Anchor
from ..services.bounding_box import BoundingBox
from ..services.constants import DEFAULT_HIT_DISTANCE
from ..services.edge import Edge
from ..services.edge_hit_test import EdgeHitResult
from ..services.path import Path, Shape
from ..services.vec import Vec2


class Point(BaseModel):
    """A 2D point or offset."""

    x: float
    y: float

    def to_vec(self) -> Vec2:
        return Vec2(self.x, self.y)

    @classmethod
    def from_vec(cls, v: Vec2) -> "Point":
        return cls(x=v.x, y=v.y)


class AnchorModel(BaseModel):
    """Path vertex; handles are offsets relative to ``position``."""

    position: Point
    handleIn: Point = Field(default_factory=lambda: Point(x=0.0, y=0.0))
    handleOut: Point = Field(default_factory=lambda: Point(x=0.0, y=0.0))

    def to_anchor(self) -> Anchor:
        return Anchor(self.position.to_vec(), self.handleIn.to_vec(), self.handleOut.to_vec())


class PathModel(BaseModel):
    anchors: List[AnchorModel] = Field(default_factory=list)
    closed: bool = False

    def to_path(self) -> Path:
        return Path([a.to_anchor() for a in self.anchors], self.closed)


class BoxModel(BaseModel):
    """Axis‑aligned query box.  Corners are normalised server side."""

    min: Point
    max: Point

    def to_box(self) -> BoundingBox:
        return BoundingBox(self.min.to_vec(), self.max.to_vec()).canonicalize()


class ShapeRequest(BaseModel):
    """Common body: the paths of one shape on the canvas."""

    paths: List[PathModel] = Field(..., description="Paths making up the shape")
    shapeId: Optional[str] = Field(default=None, description="Identifier of the shape, if any")

    def to_shape(self) -> Shape:
        return Shape([p.to_path() for p in self.paths], self.shapeId)


class HitTestRequest(ShapeRequest):
    point: Point = Field(..., description="Query point in canvas coordinates")
    tolerance: float = Field(
        default=DEFAULT_HIT_DISTANCE,
        ge=0.0,
        description="Maximum distance from the point for an edge to count as hit",
    )


class BoxQueryRequest(ShapeRequest):
    box: BoxModel
    fullyContained: bool = Field(
        default=False,
        description="Require edges to lie entirely inside the box instead of overlapping it",
    )


class EdgeRef(BaseModel):
    """Identifies an edge within a shape."""

    shapeId: Optional[str] = None
    pathIndex: int
    index: int

    @classmethod
    def from_edge(cls, edge: Edge) -> "EdgeRef":
        return cls(shapeId=edge.shape_id, pathIndex=edge.path_index, index=edge.index)


class HitResult(BaseModel):
    edge: EdgeRef
    position: Point
    time: float = Field(..., description="Curve parameter of the closest point (0–1)")
    distance: float

    @classmethod
    def from_hit(cls, hit: EdgeHitResult) -> "HitResult":
        return cls(
            edge=EdgeRef.from_edge(hit.edge),
            position=Point.from_vec(hit.position),
            time=hit.time,
            distance=hit.distance,
        )


class HitTestResponse(BaseModel):
    hit: Optional[HitResult] = None


class HitTestAllResponse(BaseModel):
    hits: List[HitResult] = Field(default_factory=list, description="Hits sorted by distance")


class BoxQueryResponse(BaseModel):
    edges: List[EdgeRef] = Field(default_factory=list)


class EdgeLength(BaseModel):
    edge: EdgeRef
    linear: bool
    length: float


class EdgeLengthsResponse(BaseModel):
    edges: List[EdgeLength] = Field(default_factory=list)
    total: float = 0.0


class SelectionClickRequest(HitTestRequest):
    shapeId: str = Field(
        ...,
        description="Identifier of the shape; matches edges across requests",
    )
    additive: bool = Field(
        default=False,
        description="Toggle the hit edge instead of replacing the selection (shift‑click)",
    )


class SelectionResponse(BaseModel):
    selectionId: str
    edges: List[EdgeRef] = Field(default_factory=list, description="Selected edges in selection order")
