"""Wall graph model: one wall's centerline topology plus per-edge thickness.

Nodes live in a flat list and edges refer to them by position, so a wall
never holds references into another wall. Node coordinates are stored
relative to the wall's anchor ``(x, y)``; the anchor is kept at the
bounding-box centre of the nodes by :meth:`Wall.recenter`.
"""

from __future__ import annotations
from collections import deque

from pydantic import BaseModel, model_validator

from .geometry import Point


DEFAULT_THICKNESS = 150.0
DEFAULT_GAP = 150.0


class WallEdge(BaseModel):
    """Undirected edge between two node indices of the same wall."""
    a: int
    b: int
    thickness: float = DEFAULT_THICKNESS

    def key(self) -> tuple[int, int]:
        return (self.a, self.b) if self.a < self.b else (self.b, self.a)

    def touches(self, index: int) -> bool:
        return self.a == index or self.b == index

    def other(self, index: int) -> int:
        return self.b if self.a == index else self.a


class Wall(BaseModel):
    """A connected (or formerly connected) structure of wall centerlines."""
    id: str
    nodes: list[Point] = []
    edges: list[WallEdge] = []
    closed: bool = False
    gap: float = DEFAULT_GAP
    fill: str = "#000000"
    stroke: str = "#000000"
    stroke_width: float = 2.0
    z_index: int = 0
    x: float = 0.0      # Anchor (bounding-box centre) in world space
    y: float = 0.0

    # ------------------------------------------------------------------
    # Coordinate frames
    # ------------------------------------------------------------------

    @property
    def anchor(self) -> Point:
        return Point(x=self.x, y=self.y)

    def to_local(self, p: Point) -> Point:
        return Point(x=p.x - self.x, y=p.y - self.y)

    def world_node(self, index: int) -> Point:
        n = self.nodes[index]
        return Point(x=n.x + self.x, y=n.y + self.y)

    def world_nodes(self) -> list[Point]:
        return [self.world_node(i) for i in range(len(self.nodes))]

    def world_segment(self, edge_index: int) -> tuple[Point, Point]:
        e = self.edges[edge_index]
        return self.world_node(e.a), self.world_node(e.b)

    def world_segments(self) -> list[tuple[Point, Point]]:
        return [self.world_segment(i) for i in range(len(self.edges))]

    def edge_length(self, edge_index: int) -> float:
        e = self.edges[edge_index]
        return self.nodes[e.a].distance_to(self.nodes[e.b])

    def translate(self, dx: float, dy: float) -> None:
        """Move the whole wall; node coordinates are relative and unchanged."""
        self.x += dx
        self.y += dy

    def scale(self, factor: float) -> None:
        """Scale the wall about its anchor."""
        self.nodes = [Point(x=n.x * factor, y=n.y * factor) for n in self.nodes]

    def recenter(self) -> None:
        """Move the anchor to the bounding-box centre, keeping world positions."""
        if not self.nodes:
            return
        world = self.world_nodes()
        xs = [p.x for p in world]
        ys = [p.y for p in world]
        cx = (min(xs) + max(xs)) / 2
        cy = (min(ys) + max(ys)) / 2
        self.nodes = [Point(x=p.x - cx, y=p.y - cy) for p in world]
        self.x = cx
        self.y = cy

    # ------------------------------------------------------------------
    # Graph construction
    # ------------------------------------------------------------------

    def find_node(self, pt: Point, tolerance: float) -> int | None:
        """Index of the closest node within tolerance of a local point."""
        best: int | None = None
        best_d = tolerance
        for i, n in enumerate(self.nodes):
            d = n.distance_to(pt)
            if d <= best_d:
                best, best_d = i, d
        return best

    def add_node(self, pt: Point, tolerance: float = 0.5) -> int:
        """Add a local point, reusing an existing node within tolerance."""
        existing = self.find_node(pt, tolerance)
        if existing is not None:
            return existing
        self.nodes.append(Point(x=pt.x, y=pt.y))
        return len(self.nodes) - 1

    def find_edge(self, i: int, j: int) -> int | None:
        key = (i, j) if i < j else (j, i)
        for k, e in enumerate(self.edges):
            if e.key() == key:
                return k
        return None

    def has_edge(self, i: int, j: int) -> bool:
        return self.find_edge(i, j) is not None

    def add_edge(self, i: int, j: int, thickness: float | None = None) -> bool:
        """Connect two nodes. Returns False when nothing was added."""
        if i == j or not (0 <= i < len(self.nodes)) or not (0 <= j < len(self.nodes)):
            return False
        if self.has_edge(i, j):
            return False
        if thickness is None:
            thickness = self.edges[0].thickness if self.edges else DEFAULT_THICKNESS
        self.edges.append(WallEdge(a=i, b=j, thickness=thickness))
        return True

    def remove_edge(self, edge_index: int) -> WallEdge:
        return self.edges.pop(edge_index)

    def split_edge(self, edge_index: int, pt: Point) -> int:
        """Split an edge at a local point with a new node; returns its index."""
        e = self.edges[edge_index]
        self.nodes.append(Point(x=pt.x, y=pt.y))
        m = len(self.nodes) - 1
        self.edges[edge_index:edge_index + 1] = [
            WallEdge(a=e.a, b=m, thickness=e.thickness),
            WallEdge(a=m, b=e.b, thickness=e.thickness),
        ]
        return m

    def absorb(self, other: Wall, tolerance: float = 0.5) -> None:
        """Fold another wall's nodes and edges into this graph."""
        mapping = {
            i: self.add_node(self.to_local(other.world_node(i)), tolerance)
            for i in range(len(other.nodes))
        }
        for e in other.edges:
            self.add_edge(mapping[e.a], mapping[e.b], e.thickness)

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def degree(self, index: int) -> int:
        return sum(1 for e in self.edges if e.touches(index))

    def neighbors(self) -> dict[int, list[int]]:
        adj: dict[int, list[int]] = {i: [] for i in range(len(self.nodes))}
        for e in self.edges:
            adj[e.a].append(e.b)
            adj[e.b].append(e.a)
        return adj

    def nodes_reachable_from(self, start: int) -> set[int]:
        """Breadth-first traversal over edges."""
        if not (0 <= start < len(self.nodes)):
            return set()
        adj = self.neighbors()
        seen = {start}
        queue = deque([start])
        while queue:
            n = queue.popleft()
            for m in adj[n]:
                if m not in seen:
                    seen.add(m)
                    queue.append(m)
        return seen

    def is_single_cycle(self) -> bool:
        """True when the edges form one loop through every node."""
        n = len(self.nodes)
        if n < 3 or len(self.edges) != n:
            return False
        if any(self.degree(i) != 2 for i in range(n)):
            return False
        return len(self.nodes_reachable_from(0)) == n

    # ------------------------------------------------------------------
    # Cleanup
    # ------------------------------------------------------------------

    def merge_coincident_nodes(self, tolerance: float) -> int:
        """Fold nodes closer than tolerance into the lowest index."""
        mapping: dict[int, int] = {}
        for i, n in enumerate(self.nodes):
            if i in mapping:
                continue
            for j in range(i + 1, len(self.nodes)):
                if j not in mapping and n.distance_to(self.nodes[j]) <= tolerance:
                    mapping[j] = i
        if not mapping:
            return 0
        self._remap(mapping)
        self.remove_orphan_nodes()
        return len(mapping)

    def prune_short_edges(self, min_length: float) -> int:
        """Contract edges shorter than min_length. Returns edges removed."""
        before = len(self.edges)
        while True:
            short = next(
                (k for k in range(len(self.edges)) if self.edge_length(k) < min_length),
                None,
            )
            if short is None:
                break
            e = self.edges[short]
            self._remap({e.b: e.a})
        removed = before - len(self.edges)
        if removed:
            self.remove_orphan_nodes()
        return removed

    def remove_orphan_nodes(self) -> int:
        """Drop nodes without edges and renumber the rest."""
        used = set()
        for e in self.edges:
            used.add(e.a)
            used.add(e.b)
        keep = [i for i in range(len(self.nodes)) if i in used]
        if len(keep) == len(self.nodes):
            return 0
        index = {old: new for new, old in enumerate(keep)}
        removed = len(self.nodes) - len(keep)
        self.nodes = [self.nodes[i] for i in keep]
        self.edges = [
            WallEdge(a=index[e.a], b=index[e.b], thickness=e.thickness)
            for e in self.edges
        ]
        return removed

    def _remap(self, mapping: dict[int, int]) -> None:
        """Rewrite edge endpoints, dropping self-loops and duplicates."""
        seen: set[tuple[int, int]] = set()
        edges: list[WallEdge] = []
        for e in self.edges:
            a = mapping.get(e.a, e.a)
            b = mapping.get(e.b, e.b)
            if a == b:
                continue
            key = (a, b) if a < b else (b, a)
            if key in seen:
                continue
            seen.add(key)
            edges.append(WallEdge(a=a, b=b, thickness=e.thickness))
        self.edges = edges

    def topology_error(self) -> str | None:
        """Describe the first broken index, self-loop or duplicate edge."""
        n = len(self.nodes)
        keys = set()
        for k, e in enumerate(self.edges):
            if not (0 <= e.a < n) or not (0 <= e.b < n):
                return f"edge {k} ({e.a}, {e.b}) refers to a missing node; wall has {n}"
            if e.a == e.b:
                return f"edge {k} is a self-loop on node {e.a}"
            if e.key() in keys:
                return f"edge {k} duplicates ({e.a}, {e.b})"
            keys.add(e.key())
        if not all(p.is_finite() for p in self.nodes):
            return "wall has a non-finite node"
        return None

    def is_valid(self) -> bool:
        return self.topology_error() is None

    @model_validator(mode="after")
    def check_topology(self) -> Wall:
        error = self.topology_error()
        if error is not None:
            raise ValueError(error)
        return self
