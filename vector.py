"""
Unit-sphere vector algebra.

Points on the globe are handled as 3D vectors:
    x - right (0°N 0°E, the prime meridian on the equator)
    y - up (90°N, through the North Pole)
    z - forward (0°N 90°E)

All values are immutable; every operation returns a new value.
"""

import math
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np


@dataclass(frozen=True)
class Spherical:
    """Longitude (phi) and latitude (theta) in radians."""
    phi: float = 0.0     # rotation around the vertical axis
    theta: float = 0.0   # tilt relative to the horizontal plane


class RotationMatrix:
    """
    A 4x4 homogeneous matrix: identity, or a rotation about a unit axis.

    The elements are stored row by row and applied to row vectors, so
    v' = [x, y, z, 1] @ elements.
    """

    __slots__ = ("elements",)

    def __init__(self, axis: Optional["Vector"] = None, angle: Optional[float] = None):
        if axis is None or angle is None:
            self.elements = np.identity(4)
            return

        c = math.cos(angle)
        s = math.sin(angle)
        t = 1.0 - c
        x, y, z = axis.x, axis.y, axis.z
        tx = t * x
        ty = t * y

        # Rodrigues rotation, transposed for row vectors
        self.elements = np.array([
            [tx * x + c,     tx * y + s * z, tx * z - s * y, 0.0],
            [tx * y - s * z, ty * y + c,     ty * z + s * x, 0.0],
            [tx * z + s * y, ty * z - s * x, t * z * z + c,  0.0],
            [0.0,            0.0,            0.0,            1.0],
        ])

    def __repr__(self) -> str:
        return f"RotationMatrix({self.elements.tolist()})"


@dataclass(frozen=True)
class Vector:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def from_spherical(cls, s: Spherical) -> "Vector":
        """Unit vector pointing at a longitude/latitude pair."""
        cos_theta = math.cos(s.theta)
        return cls(
            math.cos(s.phi) * cos_theta,
            math.sin(s.theta),
            math.sin(s.phi) * cos_theta,
        )

    @classmethod
    def from_array(cls, a: np.ndarray) -> "Vector":
        return cls(float(a[0]), float(a[1]), float(a[2]))

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z])

    def to_spherical(self) -> Spherical:
        # asin is undefined past ±1, which rounding can reach
        return Spherical(
            math.atan2(self.z, self.x),
            math.asin(float(np.clip(self.y, -1.0, 1.0))),
        )

    @property
    def length2(self) -> float:
        return self.dot(self)

    @property
    def length(self) -> float:
        return math.sqrt(self.length2)

    def dot(self, v: "Vector") -> float:
        return self.x * v.x + self.y * v.y + self.z * v.z

    def cross(self, v: "Vector") -> "Vector":
        return Vector(
            self.y * v.z - self.z * v.y,
            self.z * v.x - self.x * v.z,
            self.x * v.y - self.y * v.x,
        )

    def negate(self) -> "Vector":
        return Vector(-self.x, -self.y, -self.z)

    def multiply(self, m: Union[RotationMatrix, float]) -> "Vector":
        """
        Scale by a number, or transform by a homogeneous matrix.

        The matrix product is followed by the perspective divide by w.
        """
        if isinstance(m, RotationMatrix):
            h = np.array([self.x, self.y, self.z, 1.0]) @ m.elements
            return Vector.from_array(h[:3] / h[3])
        return Vector(self.x * m, self.y * m, self.z * m)

    def divide(self, n: float) -> "Vector":
        return self.multiply(1.0 / n)

    def normalize(self) -> "Vector":
        """Unit vector in the same direction; the zero vector stays zero."""
        length = self.length
        if length == 0.0:
            return self
        return self.divide(length)

    def angle_between(self, v: "Vector") -> float:
        """
        Angle between two vectors in radians.

        Returns π/2 when either vector has zero length.
        """
        denominator = math.sqrt(self.length2 * v.length2)
        if denominator == 0.0:
            return math.pi * 0.5
        return math.acos(float(np.clip(self.dot(v) / denominator, -1.0, 1.0)))
