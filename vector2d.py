import math
from dataclasses import dataclass
from typing import Sequence, Tuple


@dataclass(frozen=True)
class Vector2D:
    """Screen-space vector, y pointing down."""
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def from_sequence(cls, p: Sequence[float]) -> "Vector2D":
        return cls(p[0], p[1])

    def add(self, v: "Vector2D") -> "Vector2D":
        return Vector2D(self.x + v.x, self.y + v.y)

    def subtract(self, v: "Vector2D") -> "Vector2D":
        return Vector2D(self.x - v.x, self.y - v.y)

    def multiply(self, n: float) -> "Vector2D":
        return Vector2D(self.x * n, self.y * n)

    def divide(self, n: float) -> "Vector2D":
        return Vector2D(self.x / n, self.y / n)

    def negate(self) -> "Vector2D":
        return Vector2D(-self.x, -self.y)

    @property
    def length2(self) -> float:
        return self.x * self.x + self.y * self.y

    @property
    def length(self) -> float:
        return math.sqrt(self.length2)

    def normalize(self) -> "Vector2D":
        return self.divide(self.length or 1.0)

    def with_length(self, value: float) -> "Vector2D":
        return self.normalize().multiply(value)

    def rotate90ccw(self) -> "Vector2D":
        return Vector2D(self.y, -self.x)

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)
