"""API request/response schemas."""

from __future__ import annotations
from typing import Any

from pydantic import BaseModel

from floorplan.models import Wall, Shape


class SceneResponse(BaseModel):
    """Full scene as sent to the frontend."""
    walls: list[Wall]
    shapes: list[Shape]
    next_z_index: int


class CommandRequest(BaseModel):
    """Request body for /commands/{command_id}."""
    payload: dict[str, Any] = {}


class CommandResponse(BaseModel):
    """Command result plus whether the scene can be undone/redone."""
    command: str
    result: dict[str, Any] | None
    can_undo: bool
    can_redo: bool


class CommandInfo(BaseModel):
    id: str
    name: str
