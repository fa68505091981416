"""
Helpers for extracting edges from paths and shapes.
"""

from __future__ import annotations

import math
from collections.abc import Sequence as SequenceABC
from typing import Any, Iterable, List, Optional, Sequence, Tuple, TypeVar

from .edge import Edge
from .path import Path

T = TypeVar("T")


def pairs(items: Sequence[T], loop: bool = False) -> List[Tuple[T, T]]:
    """Return adjacent pairs of ``items``.

    With ``loop`` a final pair from the last element back to the first is
    appended.  Fewer than two items yield no pairs.

    >>> pairs([1, 2, 3])
    [(1, 2), (2, 3)]
    >>> pairs([1, 2, 3], loop=True)
    [(1, 2), (2, 3), (3, 1)]
    """
    if len(items) < 2:
        return []
    result = list(zip(items[:-1], items[1:]))
    if loop:
        result.append((items[-1], items[0]))
    return result


def edges_from_path(path: Path, path_index: int = 0, shape_id: Optional[str] = None) -> List[Edge]:
    """Build the ordered edge list for one path.

    An open path of ``n`` anchors gives ``n - 1`` edges and a closed one
    gives ``n``; the wrap‑around edge carries index ``n - 1``.
    """
    anchors = getattr(path, "anchors", None)
    if not isinstance(anchors, SequenceABC) or isinstance(anchors, str):
        return []
    closed = bool(path.closed)
    return [
        Edge(a1, a2, index=i, path_index=path_index, closed=closed, shape_id=shape_id, path=path)
        for i, (a1, a2) in enumerate(pairs(anchors, loop=closed))
    ]


def edges_from_paths(paths: Iterable[Path], shape_id: Optional[str] = None) -> List[Edge]:
    edges: List[Edge] = []
    for path_index, path in enumerate(paths):
        edges.extend(edges_from_path(path, path_index=path_index, shape_id=shape_id))
    return edges


def edges_from_item(item: Any) -> List[Edge]:
    """Build edges from a :class:`Path` or any item exposing ``all_paths()``."""
    if item is None:
        return []
    if isinstance(item, Path):
        return edges_from_path(item)
    if hasattr(item, "all_paths"):
        return edges_from_paths(item.all_paths(), shape_id=getattr(item, "id", None))
    return []


def closest_edge_to_point(item: Any, point: Any, max_distance: float = math.inf):
    """Nearest edge of ``item`` to ``point`` within ``max_distance``.

    Returns an :class:`~pathedit.services.edge_hit_test.EdgeHitResult` or
    ``None``.
    """
    from .edge_hit_test import hit_test_edges  # Local import to avoid cycles

    return hit_test_edges(edges_from_item(item), point, max_distance=max_distance)
