"""Undo and redo as dispatchable commands."""

from __future__ import annotations

from pydantic import BaseModel

from floorplan.commands.base import EditorCommand, EmptyPayload
from floorplan.core.context import EditorContext


class HistoryOutcome(BaseModel):
    applied: bool
    can_undo: bool
    can_redo: bool


def _outcome(context: EditorContext, applied: bool) -> HistoryOutcome:
    h = context.history
    return HistoryOutcome(applied=applied, can_undo=h.can_undo, can_redo=h.can_redo)


class UndoCommand(EditorCommand[EmptyPayload]):

    def get_id(self) -> str:
        return "history.undo"

    def get_name(self) -> str:
        return "Undo"

    def execute(self, context: EditorContext, payload: EmptyPayload) -> HistoryOutcome:
        context.session.cancel()
        return _outcome(context, context.history.undo(context.scene))


class RedoCommand(EditorCommand[EmptyPayload]):

    def get_id(self) -> str:
        return "history.redo"

    def get_name(self) -> str:
        return "Redo"

    def execute(self, context: EditorContext, payload: EmptyPayload) -> HistoryOutcome:
        context.session.cancel()
        return _outcome(context, context.history.redo(context.scene))
