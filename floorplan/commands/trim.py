"""Trim tool command: one cutting gesture across the whole scene."""

from __future__ import annotations

from floorplan.commands.base import EditorCommand
from floorplan.core.context import EditorContext
from floorplan.core.slicer import SliceResult, slice_scene
from floorplan.models import CuttingLine


class SliceCommand(EditorCommand[CuttingLine]):
    """Cut every shape and wall crossed by the line (pointer-down to pointer-up)."""

    payload_model = CuttingLine
    mutates = True

    def get_id(self) -> str:
        return "trim.slice"

    def get_name(self) -> str:
        return "Trim"

    def execute(self, context: EditorContext, payload: CuttingLine) -> SliceResult:
        return slice_scene(context.scene, payload, context.params)
