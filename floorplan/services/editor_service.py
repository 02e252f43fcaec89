"""High-level editor service: facade for the host application and the API."""

from __future__ import annotations
import threading
from typing import Any

from pydantic import BaseModel

from floorplan.models import (
    Point, Wall, ShapeBase, CuttingLine, EditorParams, WallStyle,
)
from floorplan.core.context import EditorContext
from floorplan.core.commit import CommitResult
from floorplan.core.offset import OffsetGeometry, build_offset_geometry, build_all_offsets
from floorplan.core.registry import CommandRegistry, create_default_registry
from floorplan.core.scene import SceneGraph, parse_shape
from floorplan.core.slicer import SliceResult
from floorplan.commands.wall import DraftState
from floorplan.commands.history import HistoryOutcome


class EditorService:
    """Owns one editing session and serialises every call into it."""

    def __init__(
        self,
        params: EditorParams | None = None,
        style: WallStyle | None = None,
        registry: CommandRegistry | None = None,
    ) -> None:
        self.registry = registry or create_default_registry()
        self.context = EditorContext(
            params=params or EditorParams(),
            style=style or WallStyle(),
        )
        self._lock = threading.RLock()

    @property
    def scene(self) -> SceneGraph:
        return self.context.scene

    # Command dispatch

    def dispatch(self, command_id: str, payload: dict[str, Any] | BaseModel | None = None) -> BaseModel | None:
        with self._lock:
            return self.registry.dispatch(self.context, command_id, payload)

    def list_commands(self) -> list[dict[str, str]]:
        return [
            {"id": c.get_id(), "name": c.get_name()}
            for c in self.registry.list_commands()
        ]

    # Wall drawing

    def begin_wall_draft(self, point: Point) -> DraftState:
        return self.dispatch("wall.begin", {"point": point})  # type: ignore[return-value]

    def append_wall_draft_point(self, point: Point) -> DraftState:
        return self.dispatch("wall.append", {"point": point})  # type: ignore[return-value]

    def update_wall_draft_preview(self, point: Point) -> DraftState:
        return self.dispatch("wall.preview", {"point": point})  # type: ignore[return-value]

    def commit_wall_draft(self) -> CommitResult | None:
        return self.dispatch("wall.commit")  # type: ignore[return-value]

    def cancel_wall_draft(self) -> DraftState:
        return self.dispatch("wall.cancel")  # type: ignore[return-value]

    # Trim

    def slice_at(self, line: CuttingLine) -> SliceResult:
        return self.dispatch("trim.slice", line)  # type: ignore[return-value]

    # Rendering

    def build_offset_geometry(self, wall_id: str) -> OffsetGeometry:
        with self._lock:
            return build_offset_geometry(self.scene.get_wall(wall_id))

    def build_all_offsets(self) -> list[OffsetGeometry]:
        with self._lock:
            return build_all_offsets(self.scene)

    # Direct scene access, snapshotted like any other mutation

    def list_walls(self) -> list[Wall]:
        with self._lock:
            return self.scene.list_walls()

    def list_shapes(self) -> list[ShapeBase]:
        with self._lock:
            return self.scene.list_shapes()

    def _settle(self, wall: Wall) -> None:
        """Prune, recenter and re-derive closure after a direct graph edit."""
        wall.prune_short_edges(self.context.params.min_edge_length)
        wall.recenter()
        wall.closed = wall.is_single_cycle()

    def add_wall(self, wall: Wall) -> Wall:
        with self._lock:
            self._settle(wall)
            added = self.scene.add_wall(wall)
            self.context.history.record(self.scene)
            return added

    def update_wall(self, wall_id: str, updates: dict[str, Any]) -> Wall:
        with self._lock:
            wall = self.scene.update_wall(wall_id, updates)
            if "nodes" in updates or "edges" in updates:
                self._settle(wall)
            self.context.history.record(self.scene)
            return wall

    def remove_wall(self, wall_id: str) -> Wall:
        with self._lock:
            wall = self.scene.remove_wall(wall_id)
            self.context.history.record(self.scene)
            return wall

    def add_shape(self, shape: ShapeBase | dict[str, Any]) -> ShapeBase:
        with self._lock:
            if isinstance(shape, dict):
                shape = parse_shape(shape)
            added = self.scene.add_shape(shape)
            self.context.history.record(self.scene)
            return added

    def update_shape(self, shape_id: str, updates: dict[str, Any]) -> ShapeBase:
        with self._lock:
            shape = self.scene.update_shape(shape_id, updates)
            self.context.history.record(self.scene)
            return shape

    def remove_shape(self, shape_id: str) -> ShapeBase:
        with self._lock:
            shape = self.scene.remove_shape(shape_id)
            self.context.history.record(self.scene)
            return shape

    def next_z_index(self) -> int:
        with self._lock:
            return self.scene.next_z_index()

    # History

    def undo(self) -> HistoryOutcome:
        return self.dispatch("history.undo")  # type: ignore[return-value]

    def redo(self) -> HistoryOutcome:
        return self.dispatch("history.redo")  # type: ignore[return-value]
