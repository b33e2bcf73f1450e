"""
Axis-aligned rectangle used both for geographic extents (arc seconds) and
for screen bounds (pixels).

"top" is the larger y value. A geographic extent that straddles the
antimeridian has left > right, so the rectangle is not kept normalized.
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    left: float = 0.0
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0

    @classmethod
    def set_zero_size(cls, x: float, y: float) -> "Rect":
        """A degenerate rectangle at one point."""
        return cls(x, y, x, y)

    @property
    def width(self) -> float:
        return abs(self.right - self.left)

    @property
    def height(self) -> float:
        return abs(self.top - self.bottom)

    def extend(self, x: float, y: float) -> "Rect":
        """Smallest rectangle containing this one and the point."""
        return Rect(
            min(self.left, x),
            max(self.top, y),
            max(self.right, x),
            min(self.bottom, y),
        )

    def offset(self, dx: float, dy: float) -> "Rect":
        return Rect(self.left + dx, self.top + dy, self.right + dx, self.bottom + dy)

    def scale(self, n: float) -> "Rect":
        return Rect(self.left * n, self.top * n, self.right * n, self.bottom * n)

    def normalize(self) -> "Rect":
        return Rect(
            min(self.left, self.right),
            max(self.top, self.bottom),
            max(self.left, self.right),
            min(self.top, self.bottom),
        )

    def intersects(self, other: "Rect") -> bool:
        a = self.normalize()
        b = other.normalize()
        return (
            a.left <= b.right and b.left <= a.right
            and a.bottom <= b.top and b.bottom <= a.top
        )

    def inflate_to_the_nearest_integers(self) -> "Rect":
        """Round outward so integer iteration never misses a boundary value."""
        return Rect(
            math.floor(self.left),
            math.ceil(self.top),
            math.ceil(self.right),
            math.floor(self.bottom),
        )

    def contains_latitude(self, value: float) -> bool:
        """Whether a y value lies strictly between bottom and top."""
        return self.bottom < value < self.top
