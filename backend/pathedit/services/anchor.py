"""
Anchor points for paths.

An anchor is a path vertex with optional Bézier handles.  Handles are
stored as offsets relative to ``position``; a zero handle has no
influence on the curve.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .vec import Vec2


@dataclass
class Anchor:
    """Path vertex with incoming and outgoing handle offsets.

    Attributes:
        position: Absolute location of the vertex.
        handle_in: Incoming handle, relative to ``position``.
        handle_out: Outgoing handle, relative to ``position``.
    """

    position: Vec2 = field(default_factory=Vec2)
    handle_in: Vec2 = field(default_factory=Vec2)
    handle_out: Vec2 = field(default_factory=Vec2)

    def clone(self) -> "Anchor":
        return Anchor(self.position, self.handle_in, self.handle_out)

    def is_valid(self) -> bool:
        return (
            Vec2.is_valid(self.position)
            and Vec2.is_valid(self.handle_in)
            and Vec2.is_valid(self.handle_out)
        )

    def handle_in_point(self) -> Vec2:
        """Absolute position of the incoming control point."""
        return self.position.add(self.handle_in)

    def handle_out_point(self) -> Vec2:
        """Absolute position of the outgoing control point."""
        return self.position.add(self.handle_out)

    @staticmethod
    def is_valid_anchor(a: Any) -> bool:
        return isinstance(a, Anchor) and a.is_valid()
