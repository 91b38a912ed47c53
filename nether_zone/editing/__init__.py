"""
Editing Layer
=============

Bounded Context: Interactive reshaping of the detection zone.

Responsibilities:
- Drag state machine (idle / body / handle) and commit validation
- Hit testing pointer positions against handles and body (UI layer)
- OpenCV mouse callback adapter

Design Philosophy:
- Every commit keeps the zone inside the unit square and above min size
- Rejected candidates are silent no-ops
- Zone published as an immutable snapshot
"""

from nether_zone.editing.editor import (
    DragMode,
    DragSession,
    HandleId,
    ZoneEditor,
    resize_candidate,
    translate_candidate,
    validate_candidate,
)
from nether_zone.editing.hit_test import HANDLE_HITBOX_PX, HitTarget, handle_positions, hit_test
from nether_zone.editing.gestures import MouseDragController

__all__ = [
    "DragMode",
    "DragSession",
    "HandleId",
    "ZoneEditor",
    "resize_candidate",
    "translate_candidate",
    "validate_candidate",
    "HANDLE_HITBOX_PX",
    "HitTarget",
    "handle_positions",
    "hit_test",
    "MouseDragController",
]
