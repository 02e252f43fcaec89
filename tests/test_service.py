"""Tests for command dispatch (core/registry.py) and the EditorService facade."""
import pytest
from pydantic import BaseModel, ValidationError
from floorplan.models import Point, Vector, CuttingLine, EditorParams
from floorplan.commands.base import EditorCommand
from floorplan.core.context import EditorContext
from floorplan.core.errors import EntityNotFoundError, UnknownCommandError
from floorplan.core.registry import CommandRegistry, create_default_registry
from floorplan.services.editor_service import EditorService
from conftest import make_wall


def draw(service, *coords):
    service.begin_wall_draft(Point(x=coords[0][0], y=coords[0][1]))
    for x, y in coords[1:]:
        service.append_wall_draft_point(Point(x=x, y=y))
    return service.commit_wall_draft()


# --- registry ---

def test_default_registry_commands():
    ids = {c.get_id() for c in create_default_registry().list_commands()}
    assert ids == {
        "wall.begin", "wall.append", "wall.preview", "wall.commit", "wall.cancel",
        "trim.slice", "history.undo", "history.redo",
    }


def test_unknown_command():
    with pytest.raises(UnknownCommandError):
        create_default_registry().dispatch(EditorContext(), "wall.explode", {})


def test_invalid_payload():
    with pytest.raises(ValidationError):
        create_default_registry().dispatch(EditorContext(), "wall.begin", {"point": {"x": 1}})


def test_custom_command_registration():
    class Ping(EditorCommand):
        def get_id(self):
            return "debug.ping"

        def get_name(self):
            return "Ping"

        def execute(self, context, payload):
            return None

    registry = CommandRegistry()
    registry.register(Ping())
    assert registry.get_command("debug.ping") is not None
    assert registry.dispatch(EditorContext(), "debug.ping") is None
    registry.unregister("debug.ping")
    assert registry.list_commands() == []


def test_dispatch_accepts_payload_model():
    registry = create_default_registry()
    ctx = EditorContext()
    ctx.scene.add_wall(make_wall("w", [(0, 0), (1000, 0), (2000, 0)]))
    line = CuttingLine(start=Point(x=500, y=-100), end=Point(x=500, y=100))
    result = registry.dispatch(ctx, "trim.slice", line)
    assert isinstance(result, BaseModel)
    assert len(ctx.scene.walls) == 2


def test_command_receives_its_typed_payload():
    class Echo(EditorCommand[CuttingLine]):
        payload_model = CuttingLine

        def get_id(self):
            return "debug.echo"

        def get_name(self):
            return "Echo"

        def execute(self, context, payload):
            return payload

    registry = CommandRegistry()
    registry.register(Echo())
    out = registry.dispatch(EditorContext(), "debug.echo",
                            {"start": {"x": 0, "y": 0}, "end": {"x": 5, "y": 0}})
    assert isinstance(out, CuttingLine)
    assert out.direction() == Vector(x=5, y=0)


def test_foreign_payload_model_is_revalidated():
    registry = create_default_registry()
    with pytest.raises(ValidationError):
        registry.dispatch(EditorContext(), "wall.begin", Point(x=1, y=2))


# --- drawing through the service ---

def test_draw_and_commit(service):
    state = service.begin_wall_draft(Point(x=0, y=0))
    assert state.drawing
    service.update_wall_draft_preview(Point(x=300, y=0))
    state = service.append_wall_draft_point(Point(x=1000, y=0))
    assert len(state.points) == 2
    result = service.commit_wall_draft()
    assert result.created
    assert len(service.list_walls()) == 1


def test_rejected_click_is_reported(service):
    service.begin_wall_draft(Point(x=0, y=0))
    state = service.append_wall_draft_point(Point(x=0, y=0))
    assert not state.accepted
    assert len(state.points) == 1


def test_cancel_leaves_scene_untouched(service):
    service.begin_wall_draft(Point(x=0, y=0))
    service.append_wall_draft_point(Point(x=1000, y=0))
    state = service.cancel_wall_draft()
    assert not state.drawing
    assert service.list_walls() == []
    assert service.commit_wall_draft() is None


def test_commit_without_draft_is_not_recorded(service):
    assert service.commit_wall_draft() is None
    assert not service.context.history.can_undo


# --- undo / redo ---

def test_undo_redo_commit(service):
    draw(service, (0, 0), (1000, 0))
    outcome = service.undo()
    assert outcome.applied
    assert service.list_walls() == []
    assert outcome.can_redo
    service.redo()
    assert len(service.list_walls()) == 1


def test_undo_cancels_active_draft(service):
    draw(service, (0, 0), (1000, 0))
    service.begin_wall_draft(Point(x=0, y=500))
    service.undo()
    assert not service.context.session.is_drawing


def test_history_depth_from_params():
    service = EditorService(EditorParams(history_depth=2))
    for i in range(4):
        draw(service, (0, i * 1000), (500, i * 1000))
    assert len(service.context.history) == 2


# --- slicing and offsets ---

def test_slice_at(service):
    draw(service, (0, 0), (1000, 0), (2000, 0))
    result = service.slice_at(CuttingLine(start=Point(x=500, y=-100), end=Point(x=500, y=100)))
    assert len(result.created_walls) == 1
    assert len(service.list_walls()) == 2
    assert service.context.history.can_undo


def test_offsets(service):
    result = draw(service, (0, 0), (1000, 0))
    geo = service.build_offset_geometry(result.wall_id)
    assert geo.wall_id == result.wall_id
    assert len(service.build_all_offsets()) == 1


def test_offset_unknown_wall(service):
    with pytest.raises(EntityNotFoundError):
        service.build_offset_geometry("wall-missing")


# --- direct scene edits ---

def test_add_update_remove_shape(service):
    shape = service.add_shape({"type": "rectangle", "id": "r", "x": 0, "y": 0, "width": 10, "height": 10})
    assert shape.type == "rectangle"
    updated = service.update_shape("r", {"type": "ellipse"})
    assert updated.type == "ellipse"
    assert updated.width == 10
    service.remove_shape("r")
    assert service.list_shapes() == []
    with pytest.raises(EntityNotFoundError):
        service.remove_shape("r")


def test_add_and_update_wall(service):
    wall = service.add_wall(make_wall("w", [(0, 0), (100, 0)]))
    assert service.next_z_index() == wall.z_index + 1
    updated = service.update_wall("w", {"gap": 200, "id": "other"})
    assert updated.id == "w"
    assert updated.gap == 200
    service.remove_wall("w")
    assert service.list_walls() == []


def test_update_wall_rejects_dangling_edge(service):
    service.add_wall(make_wall("w", [(0, 0), (100, 0)]))
    depth = len(service.context.history)
    with pytest.raises(ValidationError, match="missing node"):
        service.update_wall("w", {"edges": [{"a": 0, "b": 9}]})
    wall = service.list_walls()[0]
    assert [e.key() for e in wall.edges] == [(0, 1)]
    assert len(service.context.history) == depth
    assert service.build_offset_geometry("w").outer


def test_update_wall_nodes_are_pruned_and_recentered(service):
    service.add_wall(make_wall("w", [(0, 0), (100, 0), (200, 0)]))
    nodes = [{"x": 0, "y": 0}, {"x": 0.5, "y": 0}, {"x": 300, "y": 0}]
    wall = service.update_wall("w", {"x": 0, "y": 0, "nodes": nodes})
    assert len(wall.edges) == 1
    assert len(wall.nodes) == 2
    assert (wall.x, wall.y) == (150.0, 0.0)
    assert sorted(p.x for p in wall.world_nodes()) == [0.0, 300.0]
    assert all(wall.edge_length(k) >= service.context.params.min_edge_length
               for k in range(len(wall.edges)))


def test_added_wall_closure_follows_its_graph(service):
    wall = service.add_wall(make_wall("w", [(0, 0), (100, 0), (100, 100)], closed=True))
    assert not wall.closed
