"""
palisade_control - Edit-command plane for the geofence editor

Bounded Context: MQTT-based command-and-control
Responsibilities:
  - MQTT connection management (Control Plane)
  - Command registration and validation
  - Command execution delegation

Architecture:
  - CommandRegistry: Edit command table with required payload fields
  - MQTTControlPlane: MQTT client + command reception
  - QoS 1 for edit commands (at-least-once delivery)
"""

from .registry import CommandRegistry, CommandNotAvailableError, CommandPayloadError, EditCommand
from .plane import MQTTControlPlane

__all__ = [
    "CommandRegistry",
    "CommandNotAvailableError",
    "CommandPayloadError",
    "EditCommand",
    "MQTTControlPlane",
]
