"""
MQTT Publishers
===============

Bounded Context: Message production to MQTT broker.

Publishers:
    BasePublisher: Connection lifecycle + JSON publish (abstract)
    ValidationStatePublisher: Retained validation state per session
"""

from .base import BasePublisher
from .validation_state import ValidationStatePublisher

__all__ = [
    'BasePublisher',
    'ValidationStatePublisher',
]
