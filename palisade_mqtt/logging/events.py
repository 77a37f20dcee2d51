"""
Structured Log Event Types
==========================

Bounded Context: Observability Event Taxonomy

This module defines typed event names for structured logging.

Design:
- Enum-based (prevents typos, enables autocomplete)
- Hierarchical naming (namespace.category.action)
- Searchable in log aggregators (Elasticsearch, CloudWatch Insights)

Event Naming Convention:
    <component>.<category>.<action>

    component: boundary, validation, mqtt, error
    category: changed, scheduled, published
    action: success, failed

Example Log Query (CloudWatch Insights):
    fields @timestamp, event, message, metadata.point_count
    | filter event = "validation.published"
    | stats count() by bin(5m)
"""

from enum import Enum


class LogEvent(str, Enum):
    """
    Typed log event names for structured logging.

    Categories:
    - boundary.*: Edits to the candidate boundary
    - validation.*: Debounced validation lifecycle
    - mqtt.*: MQTT broker interactions
    - error.*: Error conditions
    """

    # ========== Boundary Events ==========
    BOUNDARY_CHANGED = "boundary.changed"
    """Candidate boundary replaced by an edit."""

    BOUNDARY_EDIT_REJECTED = "boundary.edit_rejected"
    """Edit command could not be applied (bad index, bad payload)."""

    # ========== Validation Events ==========
    VALIDATION_SCHEDULED = "validation.scheduled"
    """Debounce timer armed."""

    VALIDATION_CANCELLED = "validation.cancelled"
    """Pending debounce timer cancelled by a newer edit or teardown."""

    VALIDATION_PUBLISHED = "validation.published"
    """Validation pass ran and its result was published."""

    VALIDATION_FORCED = "validation.forced"
    """Synchronous validation requested (submission path)."""

    VALIDATION_STATE_SERIALIZED = "validation.state.serialized"
    """Validation state message serialized to JSON."""

    # ========== MQTT Events ==========
    MQTT_CONNECTED = "mqtt.connected"
    """MQTT broker connection established."""

    MQTT_DISCONNECTED = "mqtt.disconnected"
    """MQTT broker connection lost."""

    MQTT_PUBLISH_SUCCESS = "mqtt.publish.success"
    """Message successfully published to broker."""

    MQTT_PUBLISH_FAILED = "mqtt.publish.failed"
    """Message publication failed."""

    # ========== Error Events ==========
    SERIALIZATION_ERROR = "error.serialization"
    """Failed to serialize message to JSON."""

    SUBSCRIBER_ERROR = "error.subscriber"
    """A result subscriber raised while being notified."""

    MQTT_CONNECTION_ERROR = "error.mqtt_connection"
    """Failed to connect to MQTT broker."""

    MQTT_PUBLISH_ERROR = "error.mqtt_publish"
    """Error during message publication."""


# Event categories for filtering
BOUNDARY_EVENTS = {
    LogEvent.BOUNDARY_CHANGED,
    LogEvent.BOUNDARY_EDIT_REJECTED,
}

VALIDATION_EVENTS = {
    LogEvent.VALIDATION_SCHEDULED,
    LogEvent.VALIDATION_CANCELLED,
    LogEvent.VALIDATION_PUBLISHED,
    LogEvent.VALIDATION_FORCED,
    LogEvent.VALIDATION_STATE_SERIALIZED,
}

MQTT_EVENTS = {
    LogEvent.MQTT_CONNECTED,
    LogEvent.MQTT_DISCONNECTED,
    LogEvent.MQTT_PUBLISH_SUCCESS,
    LogEvent.MQTT_PUBLISH_FAILED,
}

ERROR_EVENTS = {
    LogEvent.SERIALIZATION_ERROR,
    LogEvent.SUBSCRIBER_ERROR,
    LogEvent.MQTT_CONNECTION_ERROR,
    LogEvent.MQTT_PUBLISH_ERROR,
}
