"""
Structured JSON Logger
======================

Bounded Context: Observability Infrastructure

Records carry typed fields (component, event, metadata) as LogRecord
attributes; JSONFormatter renders them as one JSON object per line.

Design:
- Fields travel on the record, not inside the message, so plain
  handlers (e.g. the CLI's root handler) still print readable text
- Disabled levels are skipped before any metadata is serialized
- Thread-safe (standard logging module)

Output of the default handler:
    {"timestamp": "2026-01-30T15:30:45.123456+00:00", "level": "INFO",
     "component": "monitor", "event": "zone.entered",
     "message": "Human entered zone", "metadata": {"frame_id": 123}}
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .events import LogEvent


class JSONFormatter(logging.Formatter):
    """Render a record emitted by StructuredLogger as a JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'component': getattr(record, 'component', record.name),
            'event': getattr(record, 'event', None),
            'message': record.getMessage(),
        }

        metadata = getattr(record, 'metadata', None)
        if metadata:
            entry['metadata'] = metadata

        if record.exc_info and record.exc_info[1] is not None:
            error = record.exc_info[1]
            entry['exception'] = {
                'type': type(error).__name__,
                'message': str(error),
            }

        return json.dumps(entry, default=str)


class StructuredLogger:
    """
    Component logger with typed events.

    Usage:
        logger = StructuredLogger(component="monitor")
        logger.info(
            event=LogEvent.ZONE_ENTERED,
            message="Human entered zone",
            metadata={'frame_id': 123}
        )
    """

    def __init__(
        self,
        component: str,
        level: int = logging.INFO,
        logger_name: Optional[str] = None
    ):
        """
        Args:
            component: Component identifier (e.g. "monitor", "editor")
            level: Logging level (default: INFO)
            logger_name: Underlying logger name (default: nether.<component>)
        """
        self.component = component
        self.logger = logging.getLogger(logger_name or f"nether.{component}")
        self.logger.setLevel(level)

        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(JSONFormatter())
            self.logger.addHandler(handler)

    def log(
        self,
        level: int,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[BaseException] = None
    ) -> None:
        """Emit one structured record."""
        if not self.logger.isEnabledFor(level):
            return

        self.logger.log(
            level,
            message,
            exc_info=exc_info,
            extra={
                'component': self.component,
                'event': LogEvent(event).value,
                'metadata': dict(metadata) if metadata else None,
            }
        )

    def debug(self, event: LogEvent, message: str, metadata: Optional[Dict[str, Any]] = None) -> None:
        """Per-frame and per-drag-update events."""
        self.log(logging.DEBUG, event, message, metadata)

    def info(self, event: LogEvent, message: str, metadata: Optional[Dict[str, Any]] = None) -> None:
        self.log(logging.INFO, event, message, metadata)

    def warning(self, event: LogEvent, message: str, metadata: Optional[Dict[str, Any]] = None) -> None:
        self.log(logging.WARNING, event, message, metadata)

    def error(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[BaseException] = None
    ) -> None:
        """
        Log an error, optionally with the exception that caused it.

        The exception is attached to the record (traceback included when
        it was raised) and summarized in the JSON output.
        """
        self.log(logging.ERROR, event, message, metadata, exc_info)

    def set_level(self, level: int) -> None:
        self.logger.setLevel(level)


def create_logger(component: str, level: int = logging.INFO) -> StructuredLogger:
    """
    Factory function to create a configured StructuredLogger.

    Example:
        >>> logger = create_logger("editor", level=logging.DEBUG)
    """
    return StructuredLogger(component=component, level=level)
