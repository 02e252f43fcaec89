"""Wall tool commands: build a draft click by click and commit it."""

from __future__ import annotations

from pydantic import BaseModel

from floorplan.commands.base import EditorCommand, EmptyPayload
from floorplan.core.context import EditorContext
from floorplan.core.commit import CommitResult
from floorplan.models import Point


class PointPayload(BaseModel):
    point: Point


class DraftState(BaseModel):
    """Current draft as reported back to the UI."""
    drawing: bool
    points: list[Point]
    preview: Point | None = None
    accepted: bool = True


def _draft_state(context: EditorContext, accepted: bool = True) -> DraftState:
    s = context.session
    return DraftState(
        drawing=s.is_drawing, points=list(s.points), preview=s.preview, accepted=accepted,
    )


class BeginWallDraftCommand(EditorCommand[PointPayload]):
    payload_model = PointPayload

    def get_id(self) -> str:
        return "wall.begin"

    def get_name(self) -> str:
        return "Start Wall"

    def execute(self, context: EditorContext, payload: PointPayload) -> DraftState:
        accepted = context.session.begin(payload.point)
        return _draft_state(context, accepted)


class AppendWallDraftPointCommand(EditorCommand[PointPayload]):
    payload_model = PointPayload

    def get_id(self) -> str:
        return "wall.append"

    def get_name(self) -> str:
        return "Add Wall Point"

    def execute(self, context: EditorContext, payload: PointPayload) -> DraftState:
        accepted = context.session.append(payload.point)
        return _draft_state(context, accepted)


class UpdateWallDraftPreviewCommand(EditorCommand[PointPayload]):
    payload_model = PointPayload

    def get_id(self) -> str:
        return "wall.preview"

    def get_name(self) -> str:
        return "Move Wall Preview"

    def execute(self, context: EditorContext, payload: PointPayload) -> DraftState:
        context.session.update_preview(payload.point)
        return _draft_state(context)


class CommitWallDraftCommand(EditorCommand[EmptyPayload]):
    mutates = True

    def get_id(self) -> str:
        return "wall.commit"

    def get_name(self) -> str:
        return "Finish Wall"

    def execute(self, context: EditorContext, payload: EmptyPayload) -> CommitResult | None:
        return context.session.commit(context.scene)


class CancelWallDraftCommand(EditorCommand[EmptyPayload]):

    def get_id(self) -> str:
        return "wall.cancel"

    def get_name(self) -> str:
        return "Cancel Wall"

    def execute(self, context: EditorContext, payload: EmptyPayload) -> DraftState:
        context.session.cancel()
        return _draft_state(context)
