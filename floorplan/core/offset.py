"""Offset geometry builder: turns a wall centerline graph into paintable lines.

The builder is pure: it reads a wall and returns new point lists. The
renderer calls it on every paint, so equal input must give equal output;
iteration order therefore depends only on node and edge order.
"""

from __future__ import annotations

from pydantic import BaseModel

from floorplan.models import Point, Wall, direction_from_points, offset_point
from floorplan.core.scene import SceneGraph


class CapLine(BaseModel):
    """Short segment closing an open wall end between outer and inner lines."""
    start: Point
    end: Point


class OffsetChain(BaseModel):
    """Outer/inner polylines for one chain of connected edges."""
    nodes: list[int]
    outer: list[Point]
    inner: list[Point]


class OffsetGeometry(BaseModel):
    """Everything a renderer needs to paint one wall as a double line."""
    wall_id: str
    outer: list[Point] = []
    inner: list[Point] = []
    closed: bool = False
    chains: list[OffsetChain] = []
    caps: list[CapLine] = []


def wall_chains(wall: Wall) -> list[list[int]]:
    """Split a wall's edges into walkable node sequences.

    Walks start from dead ends first, then from any edge not yet
    visited (which covers loops and the remaining branches).
    """
    adj = wall.neighbors()
    used: set[tuple[int, int]] = set()

    def key(i: int, j: int) -> tuple[int, int]:
        return (i, j) if i < j else (j, i)

    def walk(start: int) -> list[int]:
        chain = [start]
        cur = start
        while True:
            nxt = next((m for m in adj[cur] if key(cur, m) not in used), None)
            if nxt is None:
                return chain
            used.add(key(cur, nxt))
            chain.append(nxt)
            cur = nxt

    chains: list[list[int]] = []
    for i in range(len(wall.nodes)):
        if len(adj[i]) == 1 and key(i, adj[i][0]) not in used:
            chains.append(walk(i))
    for e in wall.edges:
        if e.key() not in used:
            chains.append(walk(e.a))
    return chains


def _offset_chain(points: list[Point], half: float) -> tuple[list[Point], list[Point]]:
    outer: list[Point] = []
    inner: list[Point] = []
    for start, end in zip(points, points[1:]):
        d = direction_from_points(start, end)
        if d.length() == 0:
            continue
        n = d.normalized().perpendicular()
        outer.append(offset_point(start, n, half))
        outer.append(offset_point(end, n, half))
        inner.append(offset_point(start, n, -half))
        inner.append(offset_point(end, n, -half))
    return outer, inner


def build_offset_geometry(wall: Wall, gap: float | None = None) -> OffsetGeometry:
    """Outer and inner polylines of a wall, offset by half the gap each side."""
    half = (wall.gap if gap is None else gap) / 2
    result = OffsetGeometry(wall_id=wall.id, closed=wall.closed)

    for chain in wall_chains(wall):
        world = [wall.world_node(i) for i in chain]
        outer, inner = _offset_chain(world, half)
        if not outer:
            continue
        loop = chain[0] == chain[-1]
        if wall.closed and loop:
            outer.append(outer[0])
            inner.append(inner[0])
        elif not loop:
            result.caps.append(CapLine(start=outer[0], end=inner[0]))
            result.caps.append(CapLine(start=outer[-1], end=inner[-1]))
        result.chains.append(OffsetChain(nodes=chain, outer=outer, inner=inner))
        result.outer.extend(outer)
        result.inner.extend(inner)

    return result


def build_all_offsets(scene: SceneGraph) -> list[OffsetGeometry]:
    """Offset geometry for every wall, lowest z-index first."""
    walls = sorted(scene.walls, key=lambda w: w.z_index)
    return [build_offset_geometry(w) for w in walls]
