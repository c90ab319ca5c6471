"""
2D vector and point primitives used by every space object
"""

from __future__ import annotations

import math
from dataclasses import dataclass


class DegenerateVectorError(ValueError):
    """Raised when a direction is requested from a zero-length vector"""


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


@dataclass(frozen=True)
class Vector2D:
    """Immutable displacement / velocity in field units"""
    dx: float = 0.0
    dy: float = 0.0

    def __add__(self, other: Vector2D) -> Vector2D:
        return Vector2D(self.dx + other.dx, self.dy + other.dy)

    def __sub__(self, other: Vector2D) -> Vector2D:
        return Vector2D(self.dx - other.dx, self.dy - other.dy)

    def __neg__(self) -> Vector2D:
        return Vector2D(-self.dx, -self.dy)

    def __mul__(self, scalar: float) -> Vector2D:
        return Vector2D(self.dx * scalar, self.dy * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vector2D:
        return Vector2D(self.dx / scalar, self.dy / scalar)

    @property
    def magnitude(self) -> float:
        return math.hypot(self.dx, self.dy)

    @property
    def unit(self) -> Vector2D:
        length = self.magnitude
        if length == 0.0:
            raise DegenerateVectorError("Cannot normalize a zero-length vector")
        return Vector2D(self.dx / length, self.dy / length)

    @property
    def normal(self) -> Vector2D:
        """Counter-clockwise perpendicular of the same length"""
        return Vector2D(-self.dy, self.dx)

    def dot(self, other: Vector2D) -> float:
        return self.dx * other.dx + self.dy * other.dy

    def scalar_project(self, target: Vector2D) -> float:
        return self.dot(target.unit)

    def vector_project(self, target: Vector2D) -> Vector2D:
        direction = target.unit
        return direction * self.dot(direction)


@dataclass(frozen=True)
class Point2D:
    """Immutable position inside (or near) the space field"""
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vector2D) -> Point2D:
        return Point2D(self.x + other.dx, self.y + other.dy)

    def __sub__(self, other):
        # point - point is a displacement, point - vector is a point
        if isinstance(other, Point2D):
            return Vector2D(self.x - other.x, self.y - other.y)
        return Point2D(self.x - other.dx, self.y - other.dy)

    def distance(self, other: Point2D) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def to_vector(self) -> Vector2D:
        return Vector2D(self.x, self.y)
