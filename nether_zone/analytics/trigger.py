"""
Rising Edge Trigger Module
==========================

Stateful edge detector for the human-in-zone signal.

Design:
- Tagged state (EdgeState.LOW / EdgeState.HIGH), explicit transitions
- Clean API: update() returns whether a rising edge fired
- Thread-safety via encapsulation (caller must synchronize)
- Can be reset
"""

from enum import Enum
from typing import Callable, Optional


class EdgeState(str, Enum):
    """Last observed level of the signal."""

    LOW = "low"
    HIGH = "high"


class RisingEdgeTrigger:
    """
    Fires once on every False -> True transition of a boolean signal.

    Design Philosophy:
    - Single Responsibility: only tracks the previous level
    - Order-sensitive: feed frames strictly in order
    - Callback is optional; update() also reports the edge

    Transitions:
        LOW  + False -> LOW   (no fire)
        LOW  + True  -> HIGH  (FIRE)
        HIGH + True  -> HIGH  (no fire)
        HIGH + False -> LOW   (no fire)

    Usage:
        trigger = RisingEdgeTrigger(on_rising_edge=audio.play_cue)

        # Each frame
        fired = trigger.update(in_zone)
    """

    def __init__(self, on_rising_edge: Optional[Callable[[], None]] = None):
        """
        Args:
            on_rising_edge: Called with no arguments exactly once per rising edge
        """
        self._state = EdgeState.LOW
        self._on_rising_edge = on_rising_edge
        self._edge_count = 0

    @property
    def state(self) -> EdgeState:
        """Current tagged state."""
        return self._state

    @property
    def edge_count(self) -> int:
        """Number of rising edges fired since creation or reset."""
        return self._edge_count

    def update(self, value: bool) -> bool:
        """
        Feed the signal for one frame.

        Args:
            value: Current level of the signal

        Returns:
            True if this update was a rising edge
        """
        rising = bool(value) and self._state is EdgeState.LOW
        self._state = EdgeState.HIGH if value else EdgeState.LOW

        if rising:
            self._edge_count += 1
            if self._on_rising_edge is not None:
                self._on_rising_edge()

        return rising

    def reset(self) -> None:
        """Return to LOW so that the next True fires again."""
        self._state = EdgeState.LOW
        self._edge_count = 0

    def __repr__(self) -> str:
        """Human-readable representation."""
        return f"RisingEdgeTrigger(state={self._state.value}, edges={self._edge_count})"
