"""
Structured Logging for Palisade
===============================

Bounded Context: Observability

JSON-structured logging for production observability.

Design:
- JSON output (parseable by ELK, CloudWatch, Loki)
- Typed events (enums prevent typos)
- Contextual metadata (session_id, point_count, etc.)
- Thread-safe

Public API
----------
    LogEvent: Typed event names (enum)
    StructuredLogger: JSON logger implementation
    create_logger: Factory function

Example:
    >>> from palisade_mqtt.logging import create_logger, LogEvent
    >>> logger = create_logger("controller")
    >>> logger.info(
    ...     event=LogEvent.VALIDATION_PUBLISHED,
    ...     message="Published validation result",
    ...     metadata={'point_count': 4, 'is_valid': True}
    ... )
"""

from .events import LogEvent
from .structured import StructuredLogger, create_logger

__all__ = [
    'LogEvent',
    'StructuredLogger',
    'create_logger',
]
