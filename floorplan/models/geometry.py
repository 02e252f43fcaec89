"""Plane geometry value types, in millimeters.

Points and vectors are immutable; every operation returns a new value.
"""

from __future__ import annotations
import math
from pydantic import BaseModel, ConfigDict


class Vector(BaseModel):
    """Displacement on the drawing plane."""
    model_config = ConfigDict(frozen=True)

    x: float
    y: float

    @classmethod
    def between(cls, start: Point, end: Point) -> Vector:
        return cls(x=end.x - start.x, y=end.y - start.y)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> Vector:
        """Unit vector, or the zero vector for (near) zero input."""
        ln = self.length()
        if ln < 1e-10:
            return Vector(x=0.0, y=0.0)
        return Vector(x=self.x / ln, y=self.y / ln)

    def perpendicular(self) -> Vector:
        """Quarter turn counterclockwise."""
        return Vector(x=-self.y, y=self.x)

    def dot(self, other: Vector) -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: Vector) -> float:
        """z component of the 3D cross product; zero for parallel vectors."""
        return self.x * other.y - self.y * other.x

    def __mul__(self, scalar: float) -> Vector:
        return Vector(x=self.x * scalar, y=self.y * scalar)


class Point(BaseModel):
    """Position on the drawing plane (world or wall-local frame)."""
    model_config = ConfigDict(frozen=True)

    x: float
    y: float

    def distance_to(self, other: Point) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def lerp(self, other: Point, t: float) -> Point:
        return self.moved(Vector.between(self, other) * t)

    def moved(self, v: Vector, distance: float = 1.0) -> Point:
        return Point(x=self.x + v.x * distance, y=self.y + v.y * distance)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    def __add__(self, other: Point) -> Point:
        return Point(x=self.x + other.x, y=self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(x=self.x - other.x, y=self.y - other.y)

    def __mul__(self, scalar: float) -> Point:
        return Point(x=self.x * scalar, y=self.y * scalar)


class CuttingLine(BaseModel):
    """A user-drawn trim gesture in world space. Never stored in the scene."""
    start: Point
    end: Point

    def direction(self) -> Vector:
        return Vector.between(self.start, self.end)

    def is_finite(self) -> bool:
        return self.start.is_finite() and self.end.is_finite()


def direction_from_points(start: Point, end: Point) -> Vector:
    return Vector.between(start, end)


def offset_point(p: Point, v: Vector, d: float) -> Point:
    """Move p by distance d along unit vector v."""
    return p.moved(v, d)


def rotate_about(center: Point, dx: float, dy: float, degrees: float) -> Point:
    """Rotate the local offset (dx, dy) by degrees and add it to center."""
    r = math.radians(degrees)
    c, s = math.cos(r), math.sin(r)
    return Point(x=center.x + dx * c - dy * s, y=center.y + dx * s + dy * c)
