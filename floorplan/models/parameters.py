"""Editor tolerances and defaults."""

from __future__ import annotations
from pydantic import BaseModel


class EditorParams(BaseModel):
    """Tunable tolerances for drawing, committing and slicing (millimeters)."""
    snap_threshold: float = 10.0            # Draft end to existing wall endpoint
    node_merge_tolerance: float = 0.5       # Node dedup inside one wall
    closure_tolerance: float = 1.0          # Last draft point to first point
    min_edge_length: float = 0.8            # Shorter edges are pruned
    coincident_tolerance: float = 1e-9      # Exact duplicates after splitting
    perpendicular_tolerance_deg: float = 5.0
    ellipse_segments: int = 32
    default_gap: float = 150.0              # Double-line spacing, also joint trim
    default_thickness: float = 150.0
    history_depth: int = 50
    ortho_snap: bool = False                # Snap draft points to 0/90 degrees
    ortho_snap_tolerance_deg: float = 6.0


class WallStyle(BaseModel):
    """Paint defaults applied to newly created walls."""
    fill: str = "#000000"
    stroke: str = "#000000"
    stroke_width: float = 2.0
