"""Shared fixtures for the floor plan editor tests."""
import pytest
from floorplan.models import Point, Wall, EditorParams, RectangleShape
from floorplan.core.scene import SceneGraph
from floorplan.core.commit import commit_draft
from floorplan.services.editor_service import EditorService


def pts(*coords):
    """Point list from (x, y) tuples."""
    return [Point(x=x, y=y) for x, y in coords]


def make_wall(wall_id, coords, closed=False):
    """Wall from a world-space polyline, anchored at its bounding-box centre."""
    wall = Wall(id=wall_id)
    idx = [wall.add_node(p) for p in pts(*coords)]
    for i, j in zip(idx, idx[1:]):
        wall.add_edge(i, j)
    wall.closed = closed
    wall.recenter()
    return wall


def world_coords(wall):
    return sorted((round(p.x, 6), round(p.y, 6)) for p in wall.world_nodes())


@pytest.fixture
def params():
    return EditorParams()


@pytest.fixture
def scene():
    return SceneGraph()


@pytest.fixture
def square_scene(params):
    """Scene holding one closed 1000 x 1000 wall loop."""
    s = SceneGraph()
    commit_draft(s, pts((0, 0), (1000, 0), (1000, 1000), (0, 1000), (0, 0)), params)
    return s


@pytest.fixture
def rectangle():
    """100 x 100 rectangle with corners (0,0) and (100,100)."""
    return RectangleShape(id="rect-1", x=50, y=50, width=100, height=100, z_index=1)


@pytest.fixture
def service():
    return EditorService()
