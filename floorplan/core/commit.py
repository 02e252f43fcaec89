"""Segment commit: turns a finished wall draft into scene walls.

The algorithm runs in six phases:

1. closure snap: a draft ending on its own start becomes an exact loop
2. connection detection at both draft ends against existing wall endpoints
3. create a new wall, or
4. merge into the connected wall, trimming both sides of each joint
5. split every crossing between edges of different walls
6. fold coincident nodes and prune degenerate edges
"""

from __future__ import annotations
import logging
from typing import Literal, Sequence

from pydantic import BaseModel

from floorplan.models import (
    Point, Wall, EditorParams, WallStyle, direction_from_points, offset_point,
)
from floorplan.core.primitives import (
    segment_intersect, is_perpendicular, is_degenerate_segment,
)
from floorplan.core.scene import SceneGraph, new_id

logger = logging.getLogger(__name__)

# Crossings closer than this to a segment end are shared vertices, not cuts.
SPLIT_EPSILON = 1e-6


class ConnectionMatch(BaseModel):
    """An existing wall endpoint that a draft end snapped to."""
    end: Literal["start", "end"]
    wall_id: str
    edge_index: int
    node_index: int
    point: Point            # World position of the matched node
    distance: float
    perpendicular: bool


class Joint(BaseModel):
    wall_id: str
    point: Point
    kind: Literal["butt", "oblique"]
    trimmed_existing: bool
    trimmed_draft: bool


class CommitResult(BaseModel):
    """Outcome of one segment commit."""
    wall_id: str
    created: bool
    closed: bool = False
    merged_wall_ids: list[str] = []
    absorbed_wall_ids: list[str] = []
    joints: list[Joint] = []
    intersections: list[Point] = []
    removed_wall_ids: list[str] = []


# ----------------------------------------------------------------------
# Draft preparation
# ----------------------------------------------------------------------

def clean_draft(points: Sequence[Point]) -> list[Point]:
    """Drop non-finite points and zero-length steps."""
    out: list[Point] = []
    for p in points:
        if not p.is_finite():
            logger.debug("Dropping non-finite draft point %s", p)
            continue
        if out and is_degenerate_segment(out[-1], p):
            continue
        out.append(Point(x=p.x, y=p.y))
    return out


def snap_closure(points: list[Point], tolerance: float) -> bool:
    """Make the draft an exact loop when it ends on its start."""
    if len(points) < 4:
        return False
    if points[-1].distance_to(points[0]) > tolerance:
        return False
    points[-1] = Point(x=points[0].x, y=points[0].y)
    return True


# ----------------------------------------------------------------------
# Connection detection
# ----------------------------------------------------------------------

def find_connection(
    scene: SceneGraph,
    pt: Point,
    toward: Point,
    end: Literal["start", "end"],
    params: EditorParams,
) -> ConnectionMatch | None:
    """Closest existing edge endpoint within the snap threshold.

    ``toward`` is the neighbouring draft point, giving the draft's
    direction away from the connection.
    """
    best: ConnectionMatch | None = None
    draft_dir = direction_from_points(pt, toward)
    for wall in scene.walls:
        for k, e in enumerate(wall.edges):
            for node in (e.a, e.b):
                wp = wall.world_node(node)
                d = wp.distance_to(pt)
                if d > params.snap_threshold:
                    continue
                if best is not None and d >= best.distance:
                    continue
                edge_dir = direction_from_points(wp, wall.world_node(e.other(node)))
                best = ConnectionMatch(
                    end=end,
                    wall_id=wall.id,
                    edge_index=k,
                    node_index=node,
                    point=wp,
                    distance=d,
                    perpendicular=is_perpendicular(
                        draft_dir, edge_dir, params.perpendicular_tolerance_deg,
                    ),
                )
    return best


# ----------------------------------------------------------------------
# Trimming
# ----------------------------------------------------------------------

def trim_existing_edge(wall: Wall, joint: int, far: int, distance: float) -> bool:
    """Pull the main run of edge (joint, far) back from the joint by distance.

    The edge is split so that the long part ends ``distance`` short of the
    joint node and a short joint edge links it to the joint. Edges not
    longer than twice the distance are left alone.

    The trim is topological only: the new node is collinear and the joint
    edge is kept, so the offset outline of the wall does not change. It
    marks where the main run ends for callers that build joint geometry.
    """
    k = wall.find_edge(joint, far)
    if k is None or distance <= 0:
        return False
    a = wall.nodes[joint]
    b = wall.nodes[far]
    length = a.distance_to(b)
    if length <= 2 * distance:
        return False
    unit = direction_from_points(a, b).normalized()
    wall.split_edge(k, offset_point(a, unit, distance))
    return True


def trim_draft_end(points: list[Point], end: Literal["start", "end"], distance: float) -> bool:
    """Insert a joint point ``distance`` in from one end of the draft."""
    if len(points) < 2 or distance <= 0:
        return False
    if end == "start":
        joint, nxt = points[0], points[1]
    else:
        joint, nxt = points[-1], points[-2]
    length = joint.distance_to(nxt)
    if length <= 2 * distance:
        return False
    cut = offset_point(joint, direction_from_points(joint, nxt).normalized(), distance)
    if end == "start":
        points.insert(1, cut)
    else:
        points.insert(len(points) - 1, cut)
    return True


# ----------------------------------------------------------------------
# Create / merge
# ----------------------------------------------------------------------

def _add_polyline(wall: Wall, points: Sequence[Point], params: EditorParams) -> None:
    idx = [wall.add_node(wall.to_local(p), params.node_merge_tolerance) for p in points]
    for i, j in zip(idx, idx[1:]):
        wall.add_edge(i, j, params.default_thickness)


def create_wall(
    scene: SceneGraph,
    points: Sequence[Point],
    closed: bool,
    params: EditorParams,
    style: WallStyle,
) -> Wall:
    wall = Wall(
        id=new_id("wall"),
        gap=params.default_gap,
        fill=style.fill,
        stroke=style.stroke,
        stroke_width=style.stroke_width,
        z_index=scene.next_z_index(),
        closed=closed,
    )
    _add_polyline(wall, points, params)
    wall.recenter()
    scene.add_wall(wall)
    return wall


def merge_into(
    scene: SceneGraph,
    points: list[Point],
    matches: list[ConnectionMatch],
    params: EditorParams,
    result: CommitResult,
    closed: bool = False,
) -> Wall:
    """Attach the draft to the first matched wall, absorbing any other.

    A closed draft has only its start matched; both of its ends are
    snapped and trimmed so the loop still closes on the joint node.
    """
    target = scene.get_wall(matches[0].wall_id)
    # Resolve far ends first; trimming renumbers edges.
    far_nodes = [
        scene.get_wall(m.wall_id).edges[m.edge_index].other(m.node_index)
        for m in matches
    ]

    for m, far in zip(matches, far_nodes):
        wall = scene.get_wall(m.wall_id)
        # Exact snap: no residual gap at the joint.
        if m.end == "start":
            points[0] = Point(x=m.point.x, y=m.point.y)
        if m.end == "end" or closed:
            points[-1] = Point(x=m.point.x, y=m.point.y)

        trimmed_existing = trim_existing_edge(wall, m.node_index, far, wall.gap)
        trimmed_draft = trim_draft_end(points, m.end, wall.gap)
        if closed:
            trimmed_draft = trim_draft_end(points, "end", wall.gap) or trimmed_draft
        result.joints.append(Joint(
            wall_id=target.id,
            point=m.point,
            kind="butt" if m.perpendicular else "oblique",
            trimmed_existing=trimmed_existing,
            trimmed_draft=trimmed_draft,
        ))

    for m in matches[1:]:
        if m.wall_id == target.id or m.wall_id in result.absorbed_wall_ids:
            continue
        other = scene.remove_wall(m.wall_id)
        target.absorb(other, params.node_merge_tolerance)
        result.absorbed_wall_ids.append(other.id)
        logger.debug("Wall %s absorbed into %s", other.id, target.id)

    _add_polyline(target, points, params)
    target.recenter()
    target.closed = target.is_single_cycle()
    return target


# ----------------------------------------------------------------------
# Global intersection pass
# ----------------------------------------------------------------------

def _near_end(p: Point, a: Point, b: Point) -> bool:
    return p.distance_to(a) < SPLIT_EPSILON or p.distance_to(b) < SPLIT_EPSILON


def _split_first_crossing(w1: Wall, w2: Wall) -> Point | None:
    for k1 in range(len(w1.edges)):
        a1, b1 = w1.world_segment(k1)
        for k2 in range(len(w2.edges)):
            a2, b2 = w2.world_segment(k2)
            p = segment_intersect(a1, b1, a2, b2)
            if p is None or _near_end(p, a1, b1) or _near_end(p, a2, b2):
                continue
            w1.split_edge(k1, w1.to_local(p))
            w2.split_edge(k2, w2.to_local(p))
            return p
    return None


def split_intersections(scene: SceneGraph) -> tuple[list[Point], set[str]]:
    """Split both edges at every crossing between two different walls."""
    hits: list[Point] = []
    touched: set[str] = set()
    walls = scene.walls
    for i in range(len(walls)):
        for j in range(i + 1, len(walls)):
            while True:
                p = _split_first_crossing(walls[i], walls[j])
                if p is None:
                    break
                hits.append(p)
                touched.update((walls[i].id, walls[j].id))
    return hits, touched


def cleanup_walls(scene: SceneGraph, wall_ids: set[str], params: EditorParams) -> list[str]:
    """Fold coincident nodes, prune short edges, drop emptied walls."""
    removed: list[str] = []
    for wall_id in sorted(wall_ids):
        wall = scene.find_wall(wall_id)
        if wall is None:
            continue
        wall.merge_coincident_nodes(params.coincident_tolerance)
        pruned = wall.prune_short_edges(params.min_edge_length)
        if pruned:
            logger.debug("Pruned %d short edge(s) from %s", pruned, wall_id)
        if not wall.edges:
            scene.remove_wall(wall_id)
            removed.append(wall_id)
            continue
        wall.recenter()
    return removed


# ----------------------------------------------------------------------
# Entry point
# ----------------------------------------------------------------------

def commit_draft(
    scene: SceneGraph,
    draft: Sequence[Point],
    params: EditorParams | None = None,
    style: WallStyle | None = None,
) -> CommitResult | None:
    """Commit a drawn polyline into the scene. Returns None for a no-op."""
    if params is None:
        params = EditorParams()
    if style is None:
        style = WallStyle()

    points = clean_draft(draft)
    if len(points) < 2:
        logger.debug("Draft too short to commit (%d usable points)", len(points))
        return None

    closed = snap_closure(points, params.closure_tolerance)

    matches: list[ConnectionMatch] = []
    start = find_connection(scene, points[0], points[1], "start", params)
    if start is not None:
        matches.append(start)
    if not closed:
        end = find_connection(scene, points[-1], points[-2], "end", params)
        if end is not None:
            matches.append(end)

    if not matches:
        wall = create_wall(scene, points, closed, params, style)
        result = CommitResult(wall_id=wall.id, created=True)
    else:
        result = CommitResult(wall_id=matches[0].wall_id, created=False)
        wall = merge_into(scene, points, matches, params, result, closed)
        result.merged_wall_ids.append(wall.id)

    hits, touched = split_intersections(scene)
    result.intersections = hits
    touched.add(wall.id)
    result.removed_wall_ids = cleanup_walls(scene, touched, params)

    survivor = scene.find_wall(wall.id)
    if survivor is not None and not result.created:
        survivor.closed = survivor.is_single_cycle()
    # A drawn loop stays closed when merged into a longer wall.
    result.closed = survivor is not None and (closed or survivor.closed)

    logger.info(
        "Committed draft of %d points: wall=%s created=%s joints=%d crossings=%d",
        len(points), wall.id, result.created, len(result.joints), len(hits),
    )
    return result
