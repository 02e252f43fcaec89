"""Undo/redo history of scene snapshots."""

from __future__ import annotations
from collections import deque

from floorplan.core.scene import SceneGraph


class SceneHistory:
    """
    Bounded undo/redo stacks of deep-copied scenes.

    ``record`` is called after every successful mutation with the new
    state. Consecutive identical snapshots are stored once and the oldest
    entry is dropped once ``depth`` is exceeded.
    """

    def __init__(self, depth: int = 50) -> None:
        self.depth = depth
        self._past: deque[SceneGraph] = deque(maxlen=depth)
        self._future: list[SceneGraph] = []

    def __len__(self) -> int:
        return len(self._past)

    @property
    def can_undo(self) -> bool:
        return len(self._past) > 1

    @property
    def can_redo(self) -> bool:
        return bool(self._future)

    def record(self, scene: SceneGraph) -> bool:
        """Store a snapshot of scene. Returns False if it matched the last one."""
        snap = scene.snapshot()
        if self._past and self._past[-1] == snap:
            return False
        self._past.append(snap)
        self._future.clear()
        return True

    def undo(self, scene: SceneGraph) -> bool:
        """Restore the previous snapshot into scene."""
        if not self.can_undo:
            return False
        self._future.append(self._past.pop())
        scene.restore(self._past[-1])
        return True

    def redo(self, scene: SceneGraph) -> bool:
        if not self._future:
            return False
        snap = self._future.pop()
        self._past.append(snap)
        scene.restore(snap)
        return True

    def clear(self) -> None:
        self._past.clear()
        self._future.clear()
