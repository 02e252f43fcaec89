"""Trim/slice engine: cuts shapes and walls along a user-drawn line."""

from __future__ import annotations
import logging

from pydantic import BaseModel

from floorplan.models import (
    Point, Wall, WallEdge, CuttingLine, PolygonShape, ShapeBase, EditorParams,
)
from floorplan.core.primitives import (
    segment_intersect, polygon_from_shape, bounding_box, bbox_center,
)
from floorplan.core.scene import SceneGraph, new_id

logger = logging.getLogger(__name__)

TWO_POINTS_NOTICE = "Slice line must intersect shape at 2 points"


class ShapeCrossing(BaseModel):
    point: Point
    edge_index: int
    distance: float     # From the start of the crossed polygon edge


class SliceNotice(BaseModel):
    """Informational, non-fatal outcome for one entity."""
    entity_id: str
    message: str


class SliceResult(BaseModel):
    removed_ids: list[str] = []
    created_shapes: list[PolygonShape] = []
    created_walls: list[Wall] = []
    updated_wall_ids: list[str] = []
    notices: list[SliceNotice] = []

    @property
    def mutated(self) -> bool:
        return bool(
            self.removed_ids or self.created_shapes
            or self.created_walls or self.updated_wall_ids
        )


# ----------------------------------------------------------------------
# Shapes
# ----------------------------------------------------------------------

def polygon_crossings(polygon: list[Point], line: CuttingLine) -> list[ShapeCrossing]:
    """Crossings of the cutting line with each edge of a closed polygon."""
    out: list[ShapeCrossing] = []
    n = len(polygon)
    for i in range(n):
        a = polygon[i]
        b = polygon[(i + 1) % n]
        p = segment_intersect(line.start, line.end, a, b)
        if p is not None:
            out.append(ShapeCrossing(point=p, edge_index=i, distance=a.distance_to(p)))
    out.sort(key=lambda c: (c.edge_index, c.distance))
    return out


def split_polygon(
    polygon: list[Point], first: ShapeCrossing, second: ShapeCrossing,
) -> tuple[list[Point], list[Point]]:
    """Two boundary walks between the cut points, each closed by the chord.

    Part A runs I1, vertices after I1's edge up to I2's edge, I2.
    Part B runs I2, vertices after I2's edge around to I1's edge, I1.
    """
    n = len(polygon)

    def walk(frm: ShapeCrossing, to: ShapeCrossing) -> list[Point]:
        pts = [frm.point]
        i = frm.edge_index
        while True:
            i = (i + 1) % n
            pts.append(polygon[i])
            if i == to.edge_index:
                break
        pts.append(to.point)
        return pts

    return walk(first, second), walk(second, first)


def _polygon_shape(source: ShapeBase, world: list[Point], z_index: int) -> PolygonShape:
    center = bbox_center(world)
    x0, y0, x1, y1 = bounding_box(world)
    return PolygonShape(
        id=new_id("shape"),
        x=center.x,
        y=center.y,
        rotation=0.0,
        width=x1 - x0,
        height=y1 - y0,
        points=[Point(x=p.x - center.x, y=p.y - center.y) for p in world],
        fill=source.fill,
        stroke=source.stroke,
        stroke_width=source.stroke_width,
        z_index=z_index,
    )


def slice_shape(
    scene: SceneGraph, shape: ShapeBase, line: CuttingLine,
    params: EditorParams, result: SliceResult,
) -> None:
    polygon = polygon_from_shape(shape, params.ellipse_segments)
    if polygon is None:
        return
    crossings = polygon_crossings(polygon, line)
    if not crossings:
        return
    if len(crossings) == 1:
        logger.debug("Shape %s crossed once; not sliced", shape.id)
        result.notices.append(SliceNotice(entity_id=shape.id, message=TWO_POINTS_NOTICE))
        return
    first, second = crossings[0], crossings[1]
    if first.edge_index == second.edge_index:
        return

    part_a, part_b = split_polygon(polygon, first, second)
    z_index = scene.next_z_index()
    scene.remove_shape(shape.id)
    result.removed_ids.append(shape.id)
    for offset, part in enumerate((part_a, part_b)):
        new_shape = _polygon_shape(shape, part, z_index + offset)
        scene.add_shape(new_shape)
        result.created_shapes.append(new_shape)
    logger.info("Sliced shape %s into %d + %d vertices", shape.id, len(part_a), len(part_b))


# ----------------------------------------------------------------------
# Walls
# ----------------------------------------------------------------------

def _first_crossed_edge(wall: Wall, line: CuttingLine) -> tuple[int, Point] | None:
    for k in range(len(wall.edges)):
        a, b = wall.world_segment(k)
        p = segment_intersect(line.start, line.end, a, b)
        if p is not None:
            return k, p
    return None


def _component(wall: Wall, keep: set[int], wall_id: str, z_index: int) -> Wall:
    """Copy the nodes in ``keep`` and the edges between them into a new wall."""
    order = sorted(keep)
    index = {old: new for new, old in enumerate(order)}
    part = Wall(
        id=wall_id,
        nodes=[wall.world_node(i) for i in order],
        edges=[
            WallEdge(a=index[e.a], b=index[e.b], thickness=e.thickness)
            for e in wall.edges if e.a in keep and e.b in keep
        ],
        closed=False,
        gap=wall.gap,
        fill=wall.fill,
        stroke=wall.stroke,
        stroke_width=wall.stroke_width,
        z_index=z_index,
    )
    part.recenter()
    return part


def slice_wall(
    scene: SceneGraph, wall: Wall, line: CuttingLine,
    params: EditorParams, result: SliceResult,
) -> None:
    """Cut the first crossed edge of a wall, splitting it if disconnected."""
    hit = _first_crossed_edge(wall, line)
    if hit is None:
        return
    k, p = hit
    edge = wall.edges[k]
    local = wall.to_local(p)

    # Two separate nodes at the same spot leave a physical gap.
    wall.nodes.append(Point(x=local.x, y=local.y))
    n1 = len(wall.nodes) - 1
    wall.nodes.append(Point(x=local.x, y=local.y))
    n2 = len(wall.nodes) - 1
    wall.edges[k:k + 1] = [
        WallEdge(a=edge.a, b=n1, thickness=edge.thickness),
        WallEdge(a=n2, b=edge.b, thickness=edge.thickness),
    ]
    wall.closed = False

    reachable = wall.nodes_reachable_from(edge.a)
    if len(reachable) == len(wall.nodes):
        wall.prune_short_edges(params.min_edge_length)
        wall.recenter()
        result.updated_wall_ids.append(wall.id)
        logger.info("Cut wall %s; still connected", wall.id)
        return

    rest = set(range(len(wall.nodes))) - reachable
    kept = _component(wall, reachable, wall.id, wall.z_index)
    split = _component(wall, rest, new_id("wall"), scene.next_z_index())
    for part in (kept, split):
        part.prune_short_edges(params.min_edge_length)

    # A component pruned down to nothing is dropped.
    position = scene.walls.index(wall)
    if kept.edges:
        scene.walls[position] = kept
        result.updated_wall_ids.append(kept.id)
    else:
        scene.walls.pop(position)
        result.removed_ids.append(wall.id)
    if split.edges:
        scene.add_wall(split)
        result.created_walls.append(split)
    logger.info("Cut wall %s into %s and %s", wall.id, kept.id, split.id)


# ----------------------------------------------------------------------
# Entry point
# ----------------------------------------------------------------------

def slice_scene(
    scene: SceneGraph, line: CuttingLine, params: EditorParams | None = None,
) -> SliceResult:
    """Apply one trim gesture to every shape and wall in the scene."""
    if params is None:
        params = EditorParams()
    result = SliceResult()
    if not line.is_finite():
        return result

    for shape in list(scene.shapes):
        slice_shape(scene, shape, line, params, result)
    for wall in list(scene.walls):
        slice_wall(scene, wall, line, params, result)

    if not result.mutated:
        logger.debug("Slice touched nothing")
    return result
