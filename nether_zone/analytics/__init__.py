"""
Analytics Layer
===============

Bounded Context: Stateful signal processing and statistics tracking.

Responsibilities:
- Rising edge detection of the human-in-zone signal (mutable state)
- Observable published state (detection flag)
- Generate immutable statistics snapshots

Design Philosophy:
- Mutable accumulators (RisingEdgeTrigger, MonitorCounter)
- Immutable outputs (MonitorStats)
- Thread-safe via encapsulation
- Clear state management
"""

from nether_zone.analytics.trigger import EdgeState, RisingEdgeTrigger
from nether_zone.analytics.observable import ObservableValue
from nether_zone.analytics.counter import MonitorCounter, MonitorStats

__all__ = [
    "EdgeState",
    "RisingEdgeTrigger",
    "ObservableValue",
    "MonitorCounter",
    "MonitorStats",
]
