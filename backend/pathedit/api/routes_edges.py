"""
Routes for edge hit testing, marquee queries and edge selections.

Every request carries the paths of the shape under the pointer; edges
are rebuilt from those paths per request so the backend holds no copy
of the document.  Selections are the exception: they live in an
in‑memory registry keyed by ``selectionId`` and store edge references,
which stay meaningful across requests because selection membership is
keyed by ``(shapeId, pathIndex, index)``; clicks therefore require a
``shapeId``.
"""

from __future__ import annotations

import logging
import uuid
from typing import Dict

from fastapi import APIRouter, HTTPException, Response

from .models import (
    BoxQueryRequest,
    BoxQueryResponse,
    EdgeLength,
    EdgeLengthsResponse,
    EdgeRef,
    HitResult,
    HitTestAllResponse,
    HitTestRequest,
    HitTestResponse,
    SelectionClickRequest,
    SelectionResponse,
    ShapeRequest,
)
from ..services.edge_helpers import edges_from_item
from ..services.edge_hit_test import EdgeHitTester
from ..services.edge_selection import EdgeSelection

logger = logging.getLogger(__name__)

router = APIRouter()

# In‑memory registry of edge selections keyed by selectionId.
selection_registry: Dict[str, EdgeSelection] = {}


def _tester_for(body: HitTestRequest) -> EdgeHitTester:
    return EdgeHitTester(tolerance=body.tolerance).set_item(body.to_shape())


def _selection_or_404(selection_id: str) -> EdgeSelection:
    selection = selection_registry.get(selection_id)
    if selection is None:
        raise HTTPException(status_code=404, detail=f"Selection {selection_id} not found")
    return selection


def _snapshot(selection_id: str, selection: EdgeSelection) -> SelectionResponse:
    return SelectionResponse(
        selectionId=selection_id,
        edges=[EdgeRef.from_edge(e) for e in selection.all()],
    )


@router.post("/edges/hit-test", response_model=HitTestResponse)
async def hit_test(body: HitTestRequest) -> HitTestResponse:
    """Return the nearest edge within tolerance of the point, if any."""
    hit = _tester_for(body).test(body.point.to_vec())
    return HitTestResponse(hit=HitResult.from_hit(hit) if hit is not None else None)


@router.post("/edges/hit-test-all", response_model=HitTestAllResponse)
async def hit_test_all(body: HitTestRequest) -> HitTestAllResponse:
    """Return every edge within tolerance, nearest first."""
    hits = _tester_for(body).test_all(body.point.to_vec())
    return HitTestAllResponse(hits=[HitResult.from_hit(h) for h in hits])


@router.post("/edges/box", response_model=BoxQueryResponse)
async def box_query(body: BoxQueryRequest) -> BoxQueryResponse:
    """Return edges overlapping (or fully inside) the marquee box."""
    tester = EdgeHitTester().set_item(body.to_shape())
    edges = tester.test_box(body.box.to_box(), fully_contained=body.fullyContained)
    return BoxQueryResponse(edges=[EdgeRef.from_edge(e) for e in edges])


@router.post("/edges/length", response_model=EdgeLengthsResponse)
async def edge_lengths(body: ShapeRequest) -> EdgeLengthsResponse:
    """Return the length of every edge of the shape."""
    items = [
        EdgeLength(edge=EdgeRef.from_edge(e), linear=e.is_linear(), length=e.length())
        for e in edges_from_item(body.to_shape())
        if e.is_valid()
    ]
    return EdgeLengthsResponse(edges=items, total=sum(i.length for i in items))


@router.post("/selections", response_model=SelectionResponse, status_code=201)
async def create_selection() -> SelectionResponse:
    selection_id = str(uuid.uuid4())
    selection_registry[selection_id] = EdgeSelection()
    logger.info("Created edge selection %s", selection_id)
    return _snapshot(selection_id, selection_registry[selection_id])


@router.get("/selections/{selection_id}", response_model=SelectionResponse)
async def get_selection(selection_id: str) -> SelectionResponse:
    return _snapshot(selection_id, _selection_or_404(selection_id))


@router.post("/selections/{selection_id}/click", response_model=SelectionResponse)
async def click_selection(selection_id: str, body: SelectionClickRequest) -> SelectionResponse:
    """Apply a pointer click to the selection.

    A plain click selects only the hit edge, or clears the selection on
    a miss.  An additive click toggles the hit edge and ignores misses.
    """
    selection = _selection_or_404(selection_id)
    hit = _tester_for(body).test(body.point.to_vec())
    if body.additive:
        if hit is not None:
            selection.toggle(hit.edge)
    elif hit is not None:
        selection.set(hit.edge)
    else:
        selection.clear()
    return _snapshot(selection_id, selection)


@router.delete("/selections/{selection_id}", status_code=204, response_class=Response)
async def delete_selection(selection_id: str) -> Response:
    _selection_or_404(selection_id)
    del selection_registry[selection_id]
    logger.info("Deleted edge selection %s", selection_id)
    return Response(status_code=204)
