"""Editor context: everything a command may read or write."""

from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field

from floorplan.models import EditorParams, WallStyle
from floorplan.core.drawing import WallDrawingSession
from floorplan.core.history import SceneHistory
from floorplan.core.scene import SceneGraph


class EditorContext(BaseModel):
    """
    Holds the state of one editing session.

    The scene is the only thing commands mutate; the drawing session and
    the history are carried alongside so commands can reach them.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    scene: SceneGraph = Field(default_factory=SceneGraph)
    params: EditorParams = Field(default_factory=EditorParams)
    style: WallStyle = Field(default_factory=WallStyle)
    session: WallDrawingSession = None  # type: ignore[assignment]
    history: SceneHistory = None  # type: ignore[assignment]

    def model_post_init(self, __context: object) -> None:
        if self.session is None:
            self.session = WallDrawingSession(self.params, self.style)
        if self.history is None:
            self.history = SceneHistory(self.params.history_depth)
            self.history.record(self.scene)
