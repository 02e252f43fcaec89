"""Tests for undo/redo history (core/history.py)."""
from floorplan.core.history import SceneHistory
from floorplan.core.scene import SceneGraph
from conftest import make_wall


def _scene_with(*ids):
    s = SceneGraph()
    for i, wall_id in enumerate(ids):
        s.add_wall(make_wall(wall_id, [(0, i * 100), (100, i * 100)]))
    return s


def test_identical_snapshots_stored_once():
    h = SceneHistory()
    s = _scene_with("a")
    assert h.record(s)
    assert not h.record(s)
    assert len(h) == 1


def test_depth_evicts_oldest():
    h = SceneHistory(depth=3)
    s = SceneGraph()
    for i in range(5):
        s.add_wall(make_wall(f"w{i}", [(0, i), (100, i)]))
        h.record(s)
    assert len(h) == 3


def test_undo_and_redo_restore_scene():
    h = SceneHistory()
    s = SceneGraph()
    h.record(s)
    s.add_wall(make_wall("a", [(0, 0), (100, 0)]))
    h.record(s)

    assert h.undo(s)
    assert s.walls == []
    assert h.can_redo
    assert h.redo(s)
    assert [w.id for w in s.walls] == ["a"]
    assert not h.can_redo


def test_snapshots_are_independent_copies():
    h = SceneHistory()
    s = _scene_with("a")
    h.record(s)
    s.walls[0].translate(500, 0)
    h.record(s)
    h.undo(s)
    assert s.walls[0].x == 50.0


def test_undo_without_history():
    h = SceneHistory()
    s = SceneGraph()
    assert not h.undo(s)
    h.record(s)
    assert not h.can_undo
    assert not h.undo(s)
    assert not h.redo(s)


def test_new_record_clears_redo():
    h = SceneHistory()
    s = SceneGraph()
    h.record(s)
    s.add_wall(make_wall("a", [(0, 0), (100, 0)]))
    h.record(s)
    h.undo(s)
    s.add_wall(make_wall("b", [(0, 50), (100, 50)]))
    h.record(s)
    assert not h.can_redo


def test_clear():
    h = SceneHistory()
    h.record(_scene_with("a"))
    h.clear()
    assert len(h) == 0
