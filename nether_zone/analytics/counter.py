"""
Monitor Counter Module
======================

Stateful accumulator for zone monitoring statistics.

Design:
- Mutable state (counters)
- Immutable snapshots (MonitorStats)
- Reset capability
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass(frozen=True)
class MonitorStats:
    """
    Immutable statistics snapshot for the monitored zone.

    Design:
    - Frozen dataclass (thread-safe read)
    - Value object (no identity)
    - Can be serialized to JSON via to_dict()
    """

    frames_processed: int = 0
    pose_failures: int = 0
    people_seen: int = 0
    entries: int = 0
    is_human_detected: bool = False

    def __str__(self) -> str:
        """Human-readable representation."""
        status = "IN ZONE" if self.is_human_detected else "clear"
        return f"{status} | entries={self.entries} | frames={self.frames_processed}"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class MonitorCounter:
    """
    Stateful counter for monitor statistics.

    Design:
    - Mutable accumulators (private state)
    - Public immutable snapshots (get_stats())
    - Thread-safety via encapsulation (caller must synchronize if multi-threaded)

    Usage:
        counter = MonitorCounter()

        # Each frame
        counter.update(people=2, in_zone=True, rising_edge=True)

        stats = counter.get_stats()  # Immutable
    """

    def __init__(self):
        self._frames_processed = 0
        self._pose_failures = 0
        self._people_seen = 0
        self._entries = 0
        self._is_human_detected = False

    def update(self, people: int, in_zone: bool, rising_edge: bool) -> None:
        """
        Record one processed frame.

        Args:
            people: Number of pose observations in the frame
            in_zone: Detector output for the frame
            rising_edge: Whether the trigger fired on this frame
        """
        self._frames_processed += 1
        self._people_seen = people
        self._is_human_detected = in_zone
        if rising_edge:
            self._entries += 1

    def record_pose_failure(self) -> None:
        """Count a frame whose pose inference failed."""
        self._pose_failures += 1

    def get_stats(self) -> MonitorStats:
        """
        Get immutable statistics snapshot.

        Returns:
            Frozen MonitorStats with current state
        """
        return MonitorStats(
            frames_processed=self._frames_processed,
            pose_failures=self._pose_failures,
            people_seen=self._people_seen,
            entries=self._entries,
            is_human_detected=self._is_human_detected,
        )

    def reset(self) -> None:
        """Reset all counters to zero."""
        self._frames_processed = 0
        self._pose_failures = 0
        self._people_seen = 0
        self._entries = 0
        self._is_human_detected = False
