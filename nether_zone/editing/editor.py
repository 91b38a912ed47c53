"""
Zone Editor Module
==================

Interactive zone reshaping: body drag (translate) and 8-handle resize.

Design:
- Tagged drag session (DragMode + initial rect + active handle)
- All arithmetic relative to the drag-start rectangle (no drift)
- Single commit path: clamp position, clamp size, reject degenerate
- Zone published as an immutable snapshot swapped under a lock
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from nether_zone.analytics.observable import ObservableValue
from nether_zone.geometry.shapes import DEFAULT_ZONE, MIN_DIMENSION, NormalizedRect, clamp
from nether_zone.logging import LogEvent, StructuredLogger


class HandleId(str, Enum):
    """The eight resize handles."""

    TOP_LEFT = "top_left"
    TOP_CENTER = "top_center"
    TOP_RIGHT = "top_right"
    MIDDLE_LEFT = "middle_left"
    MIDDLE_RIGHT = "middle_right"
    BOTTOM_LEFT = "bottom_left"
    BOTTOM_CENTER = "bottom_center"
    BOTTOM_RIGHT = "bottom_right"


class DragMode(str, Enum):
    """What the current gesture is manipulating."""

    IDLE = "idle"
    BODY = "body"
    HANDLE = "handle"


@dataclass(frozen=True)
class DragSession:
    """
    Ephemeral drag state, owned by ZoneEditor.

    Attributes:
        mode: Tag of the session
        initial_rect: Zone snapshot at drag start (None when idle)
        active_handle: Handle being dragged (HANDLE mode only)
    """

    mode: DragMode = DragMode.IDLE
    initial_rect: Optional[NormalizedRect] = None
    active_handle: Optional[HandleId] = None

    @property
    def is_active(self) -> bool:
        return self.mode is not DragMode.IDLE


IDLE_SESSION = DragSession()

# Per-handle coefficients applied to (dx, dy):
#   x += kx * dx, y += ky * dy, width += kw * dx, height += kh * dy
_HANDLE_RULES: Dict[HandleId, Tuple[int, int, int, int]] = {
    HandleId.TOP_LEFT: (1, 1, -1, -1),
    HandleId.TOP_CENTER: (0, 1, 0, -1),
    HandleId.TOP_RIGHT: (0, 1, 1, -1),
    HandleId.MIDDLE_LEFT: (1, 0, -1, 0),
    HandleId.MIDDLE_RIGHT: (0, 0, 1, 0),
    HandleId.BOTTOM_LEFT: (1, 0, -1, 1),
    HandleId.BOTTOM_CENTER: (0, 0, 0, 1),
    HandleId.BOTTOM_RIGHT: (0, 0, 1, 1),
}

Candidate = Tuple[float, float, float, float]


def resize_candidate(initial: NormalizedRect, handle: HandleId, dx: float, dy: float) -> Candidate:
    """
    Apply a handle's edge adjustments to the drag-start rectangle.

    Returns:
        Unvalidated (x, y, width, height); may be negative or out of bounds
    """
    kx, ky, kw, kh = _HANDLE_RULES[HandleId(handle)]
    return (
        initial.x + kx * dx,
        initial.y + ky * dy,
        initial.width + kw * dx,
        initial.height + kh * dy,
    )


def translate_candidate(initial: NormalizedRect, dx: float, dy: float) -> Candidate:
    """Move the drag-start rectangle, keeping it inside the unit square."""
    return (
        clamp(initial.x + dx, 0.0, 1.0 - initial.width),
        clamp(initial.y + dy, 0.0, 1.0 - initial.height),
        initial.width,
        initial.height,
    )


def validate_candidate(candidate: Candidate) -> Optional[NormalizedRect]:
    """
    Clamp a candidate into the unit square and enforce the minimum size.

    Position is clamped first, so the size ceiling reflects the clamped
    origin.

    Returns:
        The committed rectangle, or None if the candidate is rejected
    """
    x, y, width, height = candidate
    x = clamp(x, 0.0, 1.0)
    y = clamp(y, 0.0, 1.0)
    width = clamp(width, 0.0, 1.0 - x)
    height = clamp(height, 0.0, 1.0 - y)

    if width > MIN_DIMENSION and height > MIN_DIMENSION:
        return NormalizedRect(x=x, y=y, width=width, height=height)
    return None


class ZoneEditor:
    """
    Owns the zone rectangle and the drag state machine.

    Thread Safety:
    - Gesture methods must be called sequentially (one gesture at a time)
    - current_zone may be read from any thread; it is an immutable
      snapshot swapped under a lock

    Usage:
        editor = ZoneEditor()

        editor.begin_handle_drag(HandleId.MIDDLE_RIGHT)
        editor.update_handle_drag(HandleId.MIDDLE_RIGHT, 0.1, 0.0)
        editor.end_handle_drag()

        zone = editor.current_zone
    """

    def __init__(
        self,
        initial_zone: NormalizedRect = DEFAULT_ZONE,
        logger: Optional[StructuredLogger] = None,
    ):
        """
        Args:
            initial_zone: Zone before any edit
            logger: Structured logger (default: component "editor")
        """
        self.logger = logger or StructuredLogger(component="editor")
        self._zone = ObservableValue(initial_zone, error_handler=self._on_observer_error)
        self._session = IDLE_SESSION

    # ===== Published state =====

    @property
    def current_zone(self) -> NormalizedRect:
        """Latest committed zone (immutable snapshot)."""
        return self._zone.value

    @property
    def session(self) -> DragSession:
        """Current drag session (IDLE_SESSION when no gesture is active)."""
        return self._session

    def subscribe(self, observer: Callable[[NormalizedRect, NormalizedRect], None]) -> Callable[[], None]:
        """
        Observe committed zone changes.

        Args:
            observer: Called with (old_zone, new_zone)

        Returns:
            Unsubscribe function
        """
        return self._zone.subscribe(observer)

    # ===== Body drag =====

    def begin_body_drag(self) -> None:
        """Start translating the whole rectangle."""
        self._begin(DragSession(mode=DragMode.BODY, initial_rect=self.current_zone))

    def update_body_drag(self, delta_x: float, delta_y: float) -> bool:
        """
        Translate relative to the drag-start rectangle.

        Args:
            delta_x: Pointer translation / container width
            delta_y: Pointer translation / container height

        Returns:
            True if a new zone was committed
        """
        if self._session.mode is not DragMode.BODY:
            self.begin_body_drag()

        initial = self._session.initial_rect
        return self._commit(translate_candidate(initial, delta_x, delta_y))

    def end_body_drag(self) -> None:
        """Close the body drag session."""
        self._end()

    # ===== Handle drag =====

    def begin_handle_drag(self, handle: HandleId) -> None:
        """Start resizing via one handle."""
        self._begin(DragSession(
            mode=DragMode.HANDLE,
            initial_rect=self.current_zone,
            active_handle=HandleId(handle),
        ))

    def update_handle_drag(self, handle: HandleId, delta_x: float, delta_y: float) -> bool:
        """
        Resize relative to the drag-start rectangle.

        Candidates that would leave the unit square are clamped; candidates
        at or below the minimum size are dropped and the zone is kept.

        Returns:
            True if a new zone was committed
        """
        if self._session.mode is not DragMode.HANDLE:
            self.begin_handle_drag(handle)

        initial = self._session.initial_rect
        return self._commit(resize_candidate(initial, handle, delta_x, delta_y))

    def end_handle_drag(self) -> None:
        """Close the handle drag session."""
        self._end()

    # ===== Direct replacement =====

    def set_zone(self, zone: NormalizedRect) -> None:
        """Replace the zone outright (e.g. from configuration)."""
        self._zone.set(zone)

    # ===== Internals =====

    def _begin(self, session: DragSession) -> None:
        self._session = session
        self.logger.debug(
            event=LogEvent.ZONE_DRAG_STARTED,
            message=f"{session.mode.value} drag started",
            metadata={
                'handle': session.active_handle.value if session.active_handle else None,
                'zone': session.initial_rect.to_dict(),
            }
        )

    def _end(self) -> None:
        if not self._session.is_active:
            return
        mode = self._session.mode
        self._session = IDLE_SESSION
        self.logger.info(
            event=LogEvent.ZONE_DRAG_ENDED,
            message=f"{mode.value} drag ended",
            metadata={'zone': self.current_zone.to_dict()}
        )

    def _commit(self, candidate: Candidate) -> bool:
        committed = validate_candidate(candidate)
        if committed is None:
            self.logger.debug(
                event=LogEvent.ZONE_UPDATE_REJECTED,
                message="Drag candidate rejected",
                metadata={'candidate': list(candidate)}
            )
            return False

        changed = self._zone.set(committed)

        if changed:
            self.logger.debug(
                event=LogEvent.ZONE_UPDATED,
                message="Zone updated",
                metadata={'zone': committed.to_dict()}
            )
        return True

    def _on_observer_error(self, error: Exception) -> None:
        self.logger.error(
            event=LogEvent.OBSERVER_ERROR,
            message="Zone observer raised",
            exc_info=error
        )
