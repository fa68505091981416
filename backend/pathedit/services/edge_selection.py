"""
Selection state for edges.

Edges are rebuilt whenever a path changes, so two ``Edge`` objects may
describe the same physical segment.  Membership is therefore keyed by
:meth:`Edge.key` (shape id or owning path, plus path and segment index)
rather than by object identity.  The edge object stored is the one first added.

Instead of publishing on a global event bus the selection accepts an
optional ``on_change`` callback, called with the selection after every
operation that changed its membership.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, Iterator, List, Optional

from .edge import Edge, EdgeKey

ChangeCallback = Callable[["EdgeSelection"], None]


class EdgeSelection:
    """Insertion‑ordered set of selected edges.

    Example::

        selection = EdgeSelection()
        selection.add(edge1).add(edge2)
        selection.has(edge1)   # True
        selection.toggle(edge1)  # False, edge1 is now deselected
    """

    def __init__(self, on_change: Optional[ChangeCallback] = None) -> None:
        self._edges: Dict[EdgeKey, Edge] = {}
        self.on_change = on_change

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change(self)

    @property
    def size(self) -> int:
        return len(self._edges)

    def __len__(self) -> int:
        return len(self._edges)

    def __iter__(self) -> Iterator[Edge]:
        return iter(self.all())

    def __contains__(self, edge: object) -> bool:
        return isinstance(edge, Edge) and self.has(edge)

    def is_empty(self) -> bool:
        return not self._edges

    def has(self, edge: Edge) -> bool:
        return edge.key() in self._edges

    def _insert(self, edge: Edge) -> bool:
        key = edge.key()
        if key in self._edges:
            return False
        self._edges[key] = edge
        return True

    def add(self, edge: Edge) -> "EdgeSelection":
        if self._insert(edge):
            self._changed()
        return self

    def add_all(self, edges: Iterable[Edge]) -> "EdgeSelection":
        changed = False
        for edge in edges:
            changed = self._insert(edge) or changed
        if changed:
            self._changed()
        return self

    def remove(self, edge: Edge) -> bool:
        """Deselect ``edge``; returns True if it was selected."""
        if self._edges.pop(edge.key(), None) is None:
            return False
        self._changed()
        return True

    def toggle(self, edge: Edge) -> bool:
        """Flip membership of ``edge``; returns True if it is now selected."""
        if self.has(edge):
            self.remove(edge)
            return False
        self.add(edge)
        return True

    def clear(self) -> "EdgeSelection":
        if self._edges:
            self._edges.clear()
            self._changed()
        return self

    def set(self, edge: Edge) -> "EdgeSelection":
        """Replace the selection with exactly ``edge``."""
        return self.set_all([edge])

    def set_all(self, edges: Iterable[Edge]) -> "EdgeSelection":
        before = list(self._edges)
        self._edges = {}
        for edge in edges:
            self._insert(edge)
        if list(self._edges) != before:
            self._changed()
        return self

    def all(self) -> List[Edge]:
        """Snapshot of the selected edges in insertion order."""
        return list(self._edges.values())

    def first(self) -> Optional[Edge]:
        return next(iter(self._edges.values()), None)

    def clone(self) -> "EdgeSelection":
        """Independent copy holding the same edge references.

        The callback is not carried over.
        """
        copy = EdgeSelection()
        copy._edges = dict(self._edges)
        return copy
