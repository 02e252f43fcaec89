"""Tests for the HTTP API (api/routes.py)."""
import pytest
from fastapi.testclient import TestClient
from floorplan.api import routes
from floorplan.api.main import create_app
from floorplan.services.editor_service import EditorService


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(routes, "_service", EditorService())
    return TestClient(create_app())


def run(client, command_id, payload=None):
    return client.post(f"/api/commands/{command_id}", json={"payload": payload or {}})


def draw(client, *coords):
    run(client, "wall.begin", {"point": {"x": coords[0][0], "y": coords[0][1]}})
    for x, y in coords[1:]:
        run(client, "wall.append", {"point": {"x": x, "y": y}})
    return run(client, "wall.commit")


def test_health(client):
    assert client.get("/api/health").json() == {"status": "ok"}


def test_list_commands(client):
    ids = {c["id"] for c in client.get("/api/commands").json()}
    assert "wall.commit" in ids
    assert "trim.slice" in ids


def test_empty_scene(client):
    body = client.get("/api/scene").json()
    assert body == {"walls": [], "shapes": [], "next_z_index": 1}


def test_draw_wall(client):
    resp = draw(client, (0, 0), (1000, 0))
    assert resp.status_code == 200
    body = resp.json()
    assert body["command"] == "wall.commit"
    assert body["result"]["created"]
    assert body["can_undo"]
    walls = client.get("/api/scene").json()["walls"]
    assert len(walls) == 1
    assert walls[0]["id"] == body["result"]["wall_id"]


def test_draft_state_reported(client):
    body = run(client, "wall.begin", {"point": {"x": 0, "y": 0}}).json()
    assert body["result"]["drawing"]
    assert body["result"]["points"] == [{"x": 0.0, "y": 0.0}]


def test_unknown_command_is_404(client):
    assert run(client, "wall.explode").status_code == 404


def test_bad_payload_is_422(client):
    assert run(client, "wall.begin", {"point": {"x": "left"}}).status_code == 422


def test_slice_command(client):
    draw(client, (0, 0), (1000, 0), (2000, 0))
    resp = run(client, "trim.slice", {"start": {"x": 500, "y": -100}, "end": {"x": 500, "y": 100}})
    assert resp.status_code == 200
    assert len(resp.json()["result"]["created_walls"]) == 1
    assert len(client.get("/api/scene").json()["walls"]) == 2


def test_wall_offset(client):
    wall_id = draw(client, (0, 0), (1000, 0)).json()["result"]["wall_id"]
    body = client.get(f"/api/walls/{wall_id}/offset").json()
    assert body["outer"] == [{"x": 0.0, "y": 75.0}, {"x": 1000.0, "y": 75.0}]
    assert len(body["caps"]) == 2


def test_wall_offset_missing(client):
    assert client.get("/api/walls/nope/offset").status_code == 404


def test_delete_wall(client):
    wall_id = draw(client, (0, 0), (1000, 0)).json()["result"]["wall_id"]
    assert client.delete(f"/api/walls/{wall_id}").json()["walls"] == []
    assert client.delete(f"/api/walls/{wall_id}").status_code == 404


def test_add_and_delete_shape(client):
    shape = {"type": "rectangle", "id": "r1", "x": 50, "y": 50, "width": 100, "height": 100}
    body = client.post("/api/shapes", json=shape).json()
    assert body["shapes"][0]["type"] == "rectangle"
    assert body["next_z_index"] == 1
    assert client.delete("/api/shapes/r1").json()["shapes"] == []
    assert client.delete("/api/shapes/r1").status_code == 404


def test_invalid_shape_is_422(client):
    assert client.post("/api/shapes", json={"type": "hexagon", "id": "h"}).status_code == 422
    bad_points = {"type": "polygon", "id": "p", "points": [{"x": 0, "y": 0}]}
    assert client.post("/api/shapes", json=bad_points).status_code == 422


def test_undo_redo(client):
    draw(client, (0, 0), (1000, 0))
    assert client.post("/api/undo").json()["walls"] == []
    assert len(client.post("/api/redo").json()["walls"]) == 1
