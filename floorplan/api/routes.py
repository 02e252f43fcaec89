"""FastAPI route definitions.

Editor errors propagate to the handlers registered in ``main.create_app``:
unknown ids become 404, malformed payloads 422.
"""

from __future__ import annotations
from typing import Any

from fastapi import APIRouter, Body

from floorplan.core.offset import OffsetGeometry
from floorplan.services.editor_service import EditorService
from floorplan.api.schemas import (
    SceneResponse, CommandRequest, CommandResponse, CommandInfo,
)

router = APIRouter()

# Shared service instance
_service = EditorService()


def get_service() -> EditorService:
    return _service


def _scene() -> SceneResponse:
    return SceneResponse(
        walls=_service.list_walls(),
        shapes=_service.list_shapes(),
        next_z_index=_service.next_z_index(),
    )


@router.get("/scene", response_model=SceneResponse)
def get_scene() -> SceneResponse:
    """Every wall and shape currently in the scene."""
    return _scene()


@router.get("/commands", response_model=list[CommandInfo])
def list_commands() -> list[CommandInfo]:
    """List all dispatchable commands."""
    return [CommandInfo(**c) for c in _service.list_commands()]


@router.post("/commands/{command_id}", response_model=CommandResponse)
def run_command(command_id: str, request: CommandRequest) -> CommandResponse:
    """Dispatch one input event to the editor core."""
    result = _service.dispatch(command_id, request.payload)
    history = _service.context.history
    return CommandResponse(
        command=command_id,
        result=result.model_dump(mode="json") if result is not None else None,
        can_undo=history.can_undo,
        can_redo=history.can_redo,
    )


@router.get("/walls/{wall_id}/offset", response_model=OffsetGeometry)
def wall_offset(wall_id: str) -> OffsetGeometry:
    """Outer/inner polylines for painting one wall."""
    return _service.build_offset_geometry(wall_id)


@router.delete("/walls/{wall_id}", response_model=SceneResponse)
def delete_wall(wall_id: str) -> SceneResponse:
    _service.remove_wall(wall_id)
    return _scene()


@router.post("/shapes", response_model=SceneResponse)
def add_shape(shape: dict[str, Any] = Body(...)) -> SceneResponse:
    """Add a rectangle, ellipse, line, polygon or freehand shape."""
    _service.add_shape(shape)
    return _scene()


@router.delete("/shapes/{shape_id}", response_model=SceneResponse)
def delete_shape(shape_id: str) -> SceneResponse:
    _service.remove_shape(shape_id)
    return _scene()


@router.post("/undo", response_model=SceneResponse)
def undo() -> SceneResponse:
    _service.undo()
    return _scene()


@router.post("/redo", response_model=SceneResponse)
def redo() -> SceneResponse:
    _service.redo()
    return _scene()


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
