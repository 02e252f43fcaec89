"""Vector shape models.

Shapes form a tagged union on ``type``. Every variant knows how to produce
its boundary polygon in world space; variants without a derivable
boundary return ``None`` and are left alone by wall intersection and
slicing.
"""

from __future__ import annotations
import math
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, field_validator

from .geometry import Point, rotate_about


ELLIPSE_SEGMENTS = 32


class ShapeBase(BaseModel):
    """Fields shared by every shape kind."""
    id: str
    x: float = 0.0          # Anchor in world space
    y: float = 0.0
    rotation: float = 0.0   # Degrees
    width: float = 0.0
    height: float = 0.0
    points: list[Point] | None = None   # Relative to the anchor
    fill: str = "transparent"
    stroke: str = "#000000"
    stroke_width: float = 2.0
    z_index: int = 0

    @field_validator("points")
    @classmethod
    def _at_least_two_points(cls, v: list[Point] | None) -> list[Point] | None:
        if v is not None and len(v) < 2:
            raise ValueError("a point list needs at least 2 points")
        return v

    @property
    def anchor(self) -> Point:
        return Point(x=self.x, y=self.y)

    def world_points(self) -> list[Point] | None:
        if not self.points:
            return None
        return [Point(x=p.x + self.x, y=p.y + self.y) for p in self.points]

    def boundary_polygon(self, segments: int = ELLIPSE_SEGMENTS) -> list[Point] | None:
        """Closed boundary in world space, or None when there is none."""
        return self.world_points()

    def translate(self, dx: float, dy: float) -> None:
        self.x += dx
        self.y += dy


class RectangleShape(ShapeBase):
    type: Literal["rectangle"] = "rectangle"

    def boundary_polygon(self, segments: int = ELLIPSE_SEGMENTS) -> list[Point] | None:
        explicit = self.world_points()
        if explicit is not None:
            return explicit
        hw, hh = self.width / 2, self.height / 2
        c = self.anchor
        return [
            rotate_about(c, -hw, -hh, self.rotation),
            rotate_about(c, hw, -hh, self.rotation),
            rotate_about(c, hw, hh, self.rotation),
            rotate_about(c, -hw, hh, self.rotation),
        ]


class EllipseShape(ShapeBase):
    type: Literal["ellipse"] = "ellipse"

    def boundary_polygon(self, segments: int = ELLIPSE_SEGMENTS) -> list[Point] | None:
        explicit = self.world_points()
        if explicit is not None:
            return explicit
        hw, hh = self.width / 2, self.height / 2
        c = self.anchor
        out = []
        for i in range(segments):
            a = i / segments * 2 * math.pi
            out.append(rotate_about(c, math.cos(a) * hw, math.sin(a) * hh, self.rotation))
        return out


class PolygonShape(ShapeBase):
    type: Literal["polygon"] = "polygon"


class LineShape(ShapeBase):
    """Open polyline; its point list is still sliced as a closed ring."""
    type: Literal["line"] = "line"


class FreehandShape(ShapeBase):
    """Freehand stroke. Has no boundary polygon."""
    type: Literal["freehand"] = "freehand"

    def boundary_polygon(self, segments: int = ELLIPSE_SEGMENTS) -> list[Point] | None:
        return None


Shape = Annotated[
    Union[RectangleShape, EllipseShape, PolygonShape, LineShape, FreehandShape],
    Field(discriminator="type"),
]
