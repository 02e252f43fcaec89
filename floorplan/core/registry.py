"""Command registry: stores editor commands and dispatches input to them."""

from __future__ import annotations
import logging
from typing import Any

from pydantic import BaseModel

from floorplan.commands.base import EditorCommand
from floorplan.core.context import EditorContext
from floorplan.core.errors import UnknownCommandError

logger = logging.getLogger(__name__)


class CommandRegistry:
    """
    Central registry for all editor commands.

    Commands are registered at startup. ``dispatch`` is the single entry
    point the host calls, synchronously, once per input event.
    """

    def __init__(self) -> None:
        self._commands: dict[str, EditorCommand] = {}

    def register(self, command: EditorCommand) -> None:
        """Register an editor command."""
        self._commands[command.get_id()] = command

    def unregister(self, command_id: str) -> None:
        """Remove a command from the registry."""
        self._commands.pop(command_id, None)

    def get_command(self, command_id: str) -> EditorCommand | None:
        return self._commands.get(command_id)

    def list_commands(self) -> list[EditorCommand]:
        """Return all registered commands."""
        return list(self._commands.values())

    def dispatch(
        self,
        context: EditorContext,
        command_id: str,
        payload: dict[str, Any] | BaseModel | None = None,
    ) -> BaseModel | None:
        """
        Validate the payload, run the command and snapshot on mutation.

        Raises UnknownCommandError for unregistered ids and pydantic's
        ValidationError for malformed payloads; geometry problems never
        raise.
        """
        command = self._commands.get(command_id)
        if command is None:
            raise UnknownCommandError(f"unknown command {command_id!r}")

        if isinstance(payload, command.payload_model):
            args = payload
        else:
            if isinstance(payload, BaseModel):
                payload = payload.model_dump()
            args = command.payload_model.model_validate(payload or {})

        result = command.execute(context, args)
        if command.mutates and result is not None:
            if context.history.record(context.scene):
                logger.debug("Snapshot after %s (%d in history)", command_id, len(context.history))
        return result


def create_default_registry() -> CommandRegistry:
    """Create a registry with all standard editor commands."""
    from floorplan.commands.wall import (
        BeginWallDraftCommand, AppendWallDraftPointCommand,
        UpdateWallDraftPreviewCommand, CommitWallDraftCommand,
        CancelWallDraftCommand,
    )
    from floorplan.commands.trim import SliceCommand
    from floorplan.commands.history import UndoCommand, RedoCommand

    registry = CommandRegistry()
    for command in (
        BeginWallDraftCommand(),
        AppendWallDraftPointCommand(),
        UpdateWallDraftPreviewCommand(),
        CommitWallDraftCommand(),
        CancelWallDraftCommand(),
        SliceCommand(),
        UndoCommand(),
        RedoCommand(),
    ):
        registry.register(command)
    return registry
