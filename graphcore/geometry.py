"""Plane geometry primitives shared by the graph model and the viewer."""

from __future__ import annotations
from dataclasses import dataclass
import math

# Below this norm a vector has no usable direction.
EPSILON = 1e-9


@dataclass(frozen=True)
class Vector:
    dx: float
    dy: float

    @property
    def norm(self) -> float:
        return math.hypot(self.dx, self.dy)

    @property
    def orthogonal(self) -> Vector:
        return Vector(-self.dy, self.dx)

    def scale_by(self, c: float) -> Vector:
        return Vector(self.dx * c, self.dy * c)

    def add(self, other: Vector) -> Vector:
        return Vector(self.dx + other.dx, self.dy + other.dy)

    def unit(self) -> Vector:
        """Unit vector in the same direction; the zero vector stays zero."""
        norm = self.norm
        if norm < EPSILON:
            return Vector(0.0, 0.0)
        return self.scale_by(1 / norm)


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def distance_from(self, p: Point) -> Vector:
        """Displacement from `p` to this point."""
        return Vector(self.x - p.x, self.y - p.y)

    def add(self, d: Vector) -> Point:
        return Point(self.x + d.dx, self.y + d.dy)

    def sub(self, d: Vector) -> Point:
        return Point(self.x - d.dx, self.y - d.dy)

    def as_displacement(self) -> Vector:
        return Vector(self.x, self.y)

    @staticmethod
    def midpoint(a: Point, b: Point) -> Point:
        return Point((a.x + b.x) / 2, (a.y + b.y) / 2)
