from .geometry import (
    Point, Vector, CuttingLine, direction_from_points, offset_point, rotate_about,
)
from .wall import Wall, WallEdge, DEFAULT_GAP, DEFAULT_THICKNESS
from .shapes import (
    Shape, ShapeBase, RectangleShape, EllipseShape, PolygonShape, LineShape,
    FreehandShape,
)
from .parameters import EditorParams, WallStyle

__all__ = [
    "Point", "Vector", "CuttingLine", "direction_from_points", "offset_point",
    "rotate_about",
    "Wall", "WallEdge", "DEFAULT_GAP", "DEFAULT_THICKNESS",
    "Shape", "ShapeBase", "RectangleShape", "EllipseShape", "PolygonShape",
    "LineShape", "FreehandShape",
    "EditorParams", "WallStyle",
]
