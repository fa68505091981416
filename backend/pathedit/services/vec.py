"""
Two dimensional point/vector value type.

``Vec2`` is a frozen dataclass so instances can be shared freely
between anchors, edges and hit results without defensive copies.
Every operation returns a new value.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Vec2:
    """Immutable 2D vector.

    Attributes:
        x: Horizontal component.
        y: Vertical component.
    """

    x: float = 0.0
    y: float = 0.0

    def add(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def sub(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def mul_scalar(self, s: float) -> "Vec2":
        return Vec2(self.x * s, self.y * s)

    def add_scalar(self, s: float) -> "Vec2":
        return Vec2(self.x + s, self.y + s)

    def sub_scalar(self, s: float) -> "Vec2":
        return Vec2(self.x - s, self.y - s)

    def dot(self, other: "Vec2") -> float:
        return self.x * other.x + self.y * other.y

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def distance_squared(self, other: "Vec2") -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy

    def distance(self, other: "Vec2") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def min(self, other: "Vec2") -> "Vec2":
        return Vec2(min(self.x, other.x), min(self.y, other.y))

    def max(self, other: "Vec2") -> "Vec2":
        return Vec2(max(self.x, other.x), max(self.y, other.y))

    def clone(self) -> "Vec2":
        return Vec2(self.x, self.y)

    def is_zero(self) -> bool:
        """Exact zero test; no epsilon."""
        return self.x == 0 and self.y == 0

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    def __add__(self, other: "Vec2") -> "Vec2":
        return self.add(other)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return self.sub(other)

    def __mul__(self, s: float) -> "Vec2":
        return self.mul_scalar(s)

    __rmul__ = __mul__

    @staticmethod
    def is_valid(v: Any) -> bool:
        """Return True if ``v`` is a Vec2 with finite coordinates."""
        return isinstance(v, Vec2) and v.is_finite()

    @staticmethod
    def coerce(p: Any) -> "Vec2":
        """Convert a Vec2, an ``(x, y)`` sequence or an object with
        ``x``/``y`` attributes into a Vec2.

        Raises:
            TypeError: If ``p`` has none of these shapes.
        """
        if isinstance(p, Vec2):
            return p
        if hasattr(p, "x") and hasattr(p, "y"):
            return Vec2(float(p.x), float(p.y))
        if isinstance(p, (tuple, list)) and len(p) == 2:
            return Vec2(float(p[0]), float(p[1]))
        raise TypeError(f"cannot interpret {p!r} as a 2D point")
