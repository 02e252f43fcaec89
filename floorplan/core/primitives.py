"""Pure geometry helpers shared by the commit and slice algorithms."""

from __future__ import annotations
import math
from typing import TYPE_CHECKING, Sequence

from floorplan.models import Point, Vector

if TYPE_CHECKING:
    from floorplan.models import ShapeBase


DET_EPSILON = 1e-10


def _solve(p1: Point, p2: Point, p3: Point, p4: Point) -> tuple[float, float] | None:
    """Parameters (t, u) of the crossing of p1->p2 and p3->p4, or None if parallel."""
    r = Vector.between(p1, p2)
    s = Vector.between(p3, p4)
    q = Vector.between(p1, p3)
    det = r.cross(s)
    if abs(det) < DET_EPSILON:
        return None
    return q.cross(s) / det, q.cross(r) / det


def segment_intersect(p1: Point, p2: Point, p3: Point, p4: Point) -> Point | None:
    """Crossing point of two segments, interior to both.

    Touching at an endpoint does not count, so segments that share a
    vertex are never split there.
    """
    tu = _solve(p1, p2, p3, p4)
    if tu is None:
        return None
    t, u = tu
    if 0 < t < 1 and 0 < u < 1:
        return p1.moved(Vector.between(p1, p2), t)
    return None


def segments_intersect(p1: Point, p2: Point, p3: Point, p4: Point) -> bool:
    tu = _solve(p1, p2, p3, p4)
    if tu is None:
        return False
    t, u = tu
    return 0 < t < 1 and 0 < u < 1


def is_perpendicular(dir_a: Vector, dir_b: Vector, tolerance_deg: float = 5.0) -> bool:
    """True when two directions are within tolerance of 90 degrees."""
    a = dir_a.normalized()
    b = dir_b.normalized()
    if a.length() == 0 or b.length() == 0:
        return False
    return abs(a.dot(b)) < math.cos(math.radians(90.0 - tolerance_deg))


def points_close(a: Point, b: Point, tolerance: float) -> bool:
    return a.distance_to(b) <= tolerance


def is_degenerate_segment(a: Point, b: Point, min_length: float = 0.0) -> bool:
    """Zero-length (or shorter than min_length) or non-finite segment."""
    if not (a.is_finite() and b.is_finite()):
        return True
    d = a.distance_to(b)
    return d == 0 or d < min_length


def bounding_box(points: Sequence[Point]) -> tuple[float, float, float, float]:
    """(min_x, min_y, max_x, max_y) of a non-empty point list."""
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return min(xs), min(ys), max(xs), max(ys)


def bbox_center(points: Sequence[Point]) -> Point:
    x0, y0, x1, y1 = bounding_box(points)
    return Point(x=(x0 + x1) / 2, y=(y0 + y1) / 2)


def polygon_from_shape(shape: ShapeBase, segments: int = 32) -> list[Point] | None:
    """World-space boundary of a shape, or None for shapes without one."""
    poly = shape.boundary_polygon(segments)
    if poly is None or len(poly) < 2:
        return None
    return poly


def snap_to_axis(origin: Point, pt: Point, tolerance_deg: float = 6.0) -> Point:
    """Snap pt onto the horizontal or vertical through origin when close."""
    dx = pt.x - origin.x
    dy = pt.y - origin.y
    if dx == 0 and dy == 0:
        return pt
    angle = abs(math.degrees(math.atan2(dy, dx))) % 180
    if angle <= tolerance_deg or angle >= 180 - tolerance_deg:
        return Point(x=pt.x, y=origin.y)
    if abs(angle - 90) <= tolerance_deg:
        return Point(x=origin.x, y=pt.y)
    return pt
