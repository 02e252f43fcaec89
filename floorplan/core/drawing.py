"""Wall drawing session: collects a draft polyline until commit or cancel."""

from __future__ import annotations
import logging
from enum import Enum

from floorplan.models import Point, EditorParams, WallStyle
from floorplan.core.commit import CommitResult, commit_draft
from floorplan.core.primitives import snap_to_axis
from floorplan.core.scene import SceneGraph

logger = logging.getLogger(__name__)


class DrawingState(str, Enum):
    IDLE = "idle"
    DRAWING = "drawing"


class WallDrawingSession:
    """
    Idle -> Drawing -> Idle state machine for the wall tool.

    Clicks append draft points; pointer movement only moves the preview
    endpoint. Nothing touches the scene until ``commit``.
    """

    def __init__(self, params: EditorParams | None = None, style: WallStyle | None = None) -> None:
        self.params = params or EditorParams()
        self.style = style or WallStyle()
        self.state = DrawingState.IDLE
        self.points: list[Point] = []
        self.preview: Point | None = None

    @property
    def is_drawing(self) -> bool:
        return self.state == DrawingState.DRAWING

    def _accept(self, pt: Point) -> Point | None:
        if not pt.is_finite():
            logger.debug("Ignoring non-finite draft point %s", pt)
            return None
        if self.params.ortho_snap and self.points:
            pt = snap_to_axis(self.points[-1], pt, self.params.ortho_snap_tolerance_deg)
        return pt

    def begin(self, pt: Point) -> bool:
        if self.is_drawing:
            return False
        accepted = self._accept(pt)
        if accepted is None:
            return False
        self.points = [accepted]
        self.preview = None
        self.state = DrawingState.DRAWING
        return True

    def append(self, pt: Point) -> bool:
        """Add one segment from the previous point. Zero-length clicks are dropped."""
        if not self.is_drawing:
            return False
        accepted = self._accept(pt)
        if accepted is None or accepted.distance_to(self.points[-1]) == 0:
            return False
        self.points.append(accepted)
        self.preview = None
        return True

    def update_preview(self, pt: Point) -> None:
        if not self.is_drawing:
            return
        self.preview = self._accept(pt)

    def segments(self) -> list[tuple[Point, Point]]:
        """Committed draft segments plus the preview segment, if any."""
        segs = list(zip(self.points, self.points[1:]))
        if self.preview is not None and self.points:
            segs.append((self.points[-1], self.preview))
        return segs

    def commit(self, scene: SceneGraph) -> CommitResult | None:
        """Run segment commit on the draft and return to idle."""
        if not self.is_drawing:
            return None
        points = self.points
        self.reset()
        return commit_draft(scene, points, self.params, self.style)

    def cancel(self) -> None:
        if self.is_drawing:
            logger.debug("Draft of %d points discarded", len(self.points))
        self.reset()

    def reset(self) -> None:
        self.state = DrawingState.IDLE
        self.points = []
        self.preview = None
