"""
Palisade MQTT Communication Package
===================================

Bounded Context: Communication and observability for geofence editing

Publishes the latest validation state of an editing session so that
collaborators (map overlay, error/warning panels, submit gate) can render
it without running the validation engine themselves.

Architecture:
- schemas/: Immutable message DTOs
- publishers/: Message producers (ValidationStatePublisher)
- logging/: Structured JSON logging for observability

Public API
----------
Schemas:
    Timestamp, ValidationStateMessage

Publishers:
    BasePublisher, ValidationStatePublisher

Logging:
    LogEvent, StructuredLogger, create_logger

Example:
    >>> from palisade_mqtt import ValidationStatePublisher, create_logger
    >>>
    >>> publisher = ValidationStatePublisher(
    ...     broker_host="localhost",
    ...     topic="palisade/data/validation/editor_01",
    ...     session_id="editor_01",
    ...     logger=create_logger("publisher")
    ... )
    >>> publisher.connect()
    >>> controller.subscribe(publisher.on_result)
"""

__version__ = "1.0.0"

# Schemas
from .schemas import (
    Timestamp,
    ValidationStateMessage,
)

# Publishers
from .publishers import (
    BasePublisher,
    ValidationStatePublisher,
)

# Logging
from .logging import (
    LogEvent,
    StructuredLogger,
    create_logger,
)

__all__ = [
    '__version__',
    # Schemas
    'Timestamp',
    'ValidationStateMessage',
    # Publishers
    'BasePublisher',
    'ValidationStatePublisher',
    # Logging
    'LogEvent',
    'StructuredLogger',
    'create_logger',
]
