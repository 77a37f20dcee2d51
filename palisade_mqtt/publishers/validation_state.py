"""
Validation State Publisher
==========================

Bounded Context: Validation State Message Production

Design:
- Inherits from BasePublisher (connection management)
- Formats ValidationStateMessage to JSON
- Retained publication: late subscribers get the latest state
- Callable as a RevalidationController subscriber

Message Flow:
    RevalidationController → (boundary, result) → ValidationStatePublisher → MQTT Broker

Example:
    >>> publisher = ValidationStatePublisher(
    ...     broker_host="localhost",
    ...     topic="palisade/data/validation/editor_01",
    ...     session_id="editor_01",
    ...     logger=create_logger("publisher")
    ... )
    >>> publisher.connect()
    >>> controller.subscribe(publisher.on_result)
"""

from typing import Dict, Any, Optional, Sequence

from palisade_zone import Point, ValidationResult
from .base import BasePublisher
from ..schemas import ValidationStateMessage
from ..logging import StructuredLogger, LogEvent


class ValidationStatePublisher(BasePublisher):
    """
    Publisher for validation state messages.

    Attributes:
        Same as BasePublisher, plus:
        session_id: Editing session the state belongs to
        last_message: Last message handed to publish (None before first)
    """

    def __init__(
        self,
        broker_host: str,
        topic: str,
        session_id: str,
        logger: StructuredLogger,
        broker_port: int = 1883,
        client_id: str = "palisade_state_publisher",
        username: Optional[str] = None,
        password: Optional[str] = None,
        qos: int = 1
    ):
        super().__init__(
            broker_host=broker_host,
            broker_port=broker_port,
            topic=topic,
            client_id=client_id,
            logger=logger,
            username=username,
            password=password,
            qos=qos
        )
        self.session_id = session_id
        self.last_message: Optional[ValidationStateMessage] = None

    def format_message(self, state_msg: ValidationStateMessage) -> Dict[str, Any]:
        """
        Format ValidationStateMessage to JSON-compatible dict.

        Raises:
            ValueError: If the message cannot be serialized
        """
        try:
            formatted = state_msg.to_dict()
        except (AttributeError, TypeError) as e:
            self.logger.error(
                event=LogEvent.SERIALIZATION_ERROR,
                message="Failed to serialize validation state",
                exc_info=e,
                metadata={'session_id': self.session_id}
            )
            raise ValueError(f"Failed to format validation state: {e}") from e

        self.logger.info(
            event=LogEvent.VALIDATION_STATE_SERIALIZED,
            message="Serialized validation state",
            metadata={
                'session_id': state_msg.session_id,
                'point_count': state_msg.point_count,
                'is_valid': state_msg.result.is_valid
            }
        )
        return formatted

    def publish_state(self, state_msg: ValidationStateMessage) -> bool:
        """
        Publish validation state (retained).

        Returns:
            True if published successfully, False otherwise
        """
        self.last_message = state_msg
        return self.publish(self.format_message(state_msg), retain=True)

    def on_result(self, boundary: Sequence[Point], result: ValidationResult) -> None:
        """Controller subscriber: publish every new result."""
        self.publish_state(
            ValidationStateMessage.from_result(
                session_id=self.session_id,
                boundary=boundary,
                result=result
            )
        )
