"""Abstract base class for all editor commands.

Every input the host application forwards (a click, a pointer move, a
trim gesture) is dispatched as one command. Commands are:
- Synchronous: each runs to completion before the next input is handled
- Typed: the payload is validated against ``payload_model`` first
- Honest about mutation: ``mutates`` tells the dispatcher to snapshot
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel

from floorplan.core.context import EditorContext


class EmptyPayload(BaseModel):
    """Payload for commands that take no arguments."""


P = TypeVar("P", bound=BaseModel)


class EditorCommand(ABC, Generic[P]):
    """
    Base class for all editor commands.

    Subclasses implement `get_id()`, `get_name()` and `execute()`, and
    parameterise the class with the model named in `payload_model`.
    The dispatcher validates the payload, calls `execute()` and records a
    history snapshot when `mutates` is set.
    """

    payload_model: type[BaseModel] = EmptyPayload

    # Whether a successful run changes the scene.
    mutates: bool = False

    @abstractmethod
    def get_id(self) -> str:
        """Unique identifier for this command (e.g., 'wall.commit')."""
        ...

    @abstractmethod
    def get_name(self) -> str:
        """Human-readable name (e.g., 'Finish Wall')."""
        ...

    @abstractmethod
    def execute(self, context: EditorContext, payload: P) -> BaseModel | None:
        """Run the command against the context and return its result model."""
        ...
