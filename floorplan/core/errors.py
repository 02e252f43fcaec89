"""Exceptions raised for caller mistakes. Bad geometry never raises."""

from __future__ import annotations


class EditorError(ValueError):
    """Base class for editor core errors."""


class EntityNotFoundError(EditorError, KeyError):
    """No wall or shape with the given id exists in the scene."""

    def __init__(self, kind: str, entity_id: str) -> None:
        super().__init__(f"{kind} {entity_id!r} not found")
        self.kind = kind
        self.entity_id = entity_id

    def __str__(self) -> str:
        return self.args[0]


class UnknownCommandError(EditorError):
    """No command is registered under the given id."""
