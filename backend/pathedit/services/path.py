"""
Minimal path and shape containers.

The editor's full document model (styles, transforms, bindings) lives
elsewhere; the edge kernel only needs an ordered anchor list with an
open/closed flag, and a shape grouping several such paths under an
identifier.  These classes provide exactly that.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .anchor import Anchor
from .vec import Vec2


@dataclass
class Path:
    """Ordered anchors, optionally closed back to the first anchor."""

    anchors: List[Anchor] = field(default_factory=list)
    closed: bool = False

    @classmethod
    def from_points(cls, points: Iterable[Vec2], closed: bool = False) -> "Path":
        """Build a polyline path (zero handles) through ``points``."""
        return cls([Anchor(Vec2.coerce(p)) for p in points], closed)


@dataclass
class Shape:
    """A set of paths drawn as one item, identified by ``id``."""

    paths: List[Path] = field(default_factory=list)
    id: Optional[str] = None

    def all_paths(self) -> List[Path]:
        return list(self.paths)
