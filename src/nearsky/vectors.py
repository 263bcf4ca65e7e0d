"""Cartesian 3-vectors for Sun-frame conversions and orbit determination."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vector3:
    """Immutable Cartesian triple (AU, or AU per canonical time unit)."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, s: float) -> Vector3:
        return Vector3(s * self.x, s * self.y, s * self.z)

    __rmul__ = __mul__

    def __truediv__(self, s: float) -> Vector3:
        return Vector3(self.x / s, self.y / s, self.z / s)

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def dot(self, other: Vector3) -> float:
        """Dot product."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector3) -> Vector3:
        """Cross product self x other."""
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def magnitude(self) -> float:
        """Euclidean norm."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def angle(self, other: Vector3) -> float:
        """Angle between two vectors in radians.

        Returns 0 when either vector is zero. The cosine is clamped so that
        round-off never pushes acos outside its domain.
        """
        denom = self.magnitude() * other.magnitude()
        if denom == 0.0:
            return 0.0
        c = self.dot(other) / denom
        return math.acos(max(-1.0, min(1.0, c)))

    def as_tuple(self) -> tuple[float, float, float]:
        """Return components as a fixed-length tuple."""
        return (self.x, self.y, self.z)


ZERO = Vector3()
UNIT_Z = Vector3(0.0, 0.0, 1.0)
