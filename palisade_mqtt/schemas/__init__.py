"""
Message Schemas
===============

Bounded Context: Immutable message DTOs for MQTT transport.

Types:
    Timestamp: ISO 8601 timestamp wrapper
    ValidationStateMessage: Published validation pass
"""

from .common import Timestamp
from .validation_state import ValidationStateMessage, SCHEMA_VERSION

__all__ = [
    'Timestamp',
    'ValidationStateMessage',
    'SCHEMA_VERSION',
]
