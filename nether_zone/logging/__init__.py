"""
Structured Logging for Nether
=============================

Bounded Context: Observability

JSON-structured logging for the monitor, editor and audio boundary.

Public API
----------
    LogEvent: Typed event names (enum)
    StructuredLogger: Component logger with typed events
    JSONFormatter: One JSON object per record
    create_logger: Factory function

Example:
    >>> from nether_zone.logging import StructuredLogger, LogEvent
    >>> logger = StructuredLogger(component="monitor")
    >>> logger.info(
    ...     event=LogEvent.ZONE_ENTERED,
    ...     message="Human entered zone",
    ...     metadata={'frame_id': 123}
    ... )
"""

from .events import LogEvent
from .structured import JSONFormatter, StructuredLogger, create_logger

__all__ = [
    'JSONFormatter',
    'LogEvent',
    'StructuredLogger',
    'create_logger',
]
