"""
Configuration schema for the geofence editor service.

Defines the editing session settings (debounce quiet period, initial
boundary) and MQTT transport settings, loaded from YAML.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple
import yaml

from palisade_editor.controller import DEFAULT_QUIET_PERIOD_MS

MAX_QUIET_PERIOD_MS = 10_000.0


@dataclass(frozen=True)
class MQTTConfig:
    """MQTT broker configuration."""

    broker: str = "localhost"
    port: int = 1883
    username: Optional[str] = None
    password: Optional[str] = None
    qos: int = 1  # Control and state are not fire-and-forget

    command_topic: str = "palisade/control/{session_id}/commands"
    status_topic: str = "palisade/control/{session_id}/status"
    state_topic: str = "palisade/data/validation/{session_id}"

    def __post_init__(self):
        """Validate MQTT configuration."""
        if not self.broker:
            raise ValueError("MQTT broker cannot be empty")

        if not 1 <= self.port <= 65535:
            raise ValueError(
                f"MQTT port must be in [1, 65535], got {self.port}"
            )

        if self.qos not in {0, 1, 2}:
            raise ValueError(
                f"MQTT QoS must be 0, 1, or 2, got {self.qos}"
            )

    def topics_for(self, session_id: str) -> Tuple[str, str, str]:
        """(command, status, state) topics for a session."""
        return (
            self.command_topic.format(session_id=session_id),
            self.status_topic.format(session_id=session_id),
            self.state_topic.format(session_id=session_id),
        )


@dataclass(frozen=True)
class EditorConfig:
    """
    Main configuration for the editor service.

    Immutable after construction (frozen dataclass).
    """

    session_id: str
    quiet_period_ms: float = DEFAULT_QUIET_PERIOD_MS
    mqtt_config: MQTTConfig = field(default_factory=MQTTConfig)
    initial_boundary: List[Tuple[float, float]] = field(default_factory=list)

    def __post_init__(self):
        """Validate editor configuration."""
        if not self.session_id:
            raise ValueError("session_id cannot be empty")

        if not 0 < self.quiet_period_ms <= MAX_QUIET_PERIOD_MS:
            raise ValueError(
                f"quiet_period_ms must be in (0, {MAX_QUIET_PERIOD_MS:g}], "
                f"got {self.quiet_period_ms}"
            )

        for pair in self.initial_boundary:
            if len(pair) != 2:
                raise ValueError(
                    f"initial_boundary entries must be [latitude, longitude], got {pair}"
                )

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "EditorConfig":
        """
        Load configuration from YAML file.

        Example YAML:
            session_id: "editor_01"
            quiet_period_ms: 300

            mqtt_config:
              broker: "localhost"
              port: 1883
              username: null
              password: null
              qos: 1

            initial_boundary:
              - [23.301624, 85.327065]
              - [23.301700, 85.327100]
              - [23.301750, 85.327150]
        """
        with open(yaml_path) as f:
            data = yaml.safe_load(f) or {}

        mqtt_config_data = data.get("mqtt_config") or {}
        mqtt_config = MQTTConfig(**mqtt_config_data)

        initial_boundary = [
            tuple(pair) for pair in data.get("initial_boundary") or []
        ]

        return cls(
            session_id=data["session_id"],
            quiet_period_ms=float(data.get("quiet_period_ms", DEFAULT_QUIET_PERIOD_MS)),
            mqtt_config=mqtt_config,
            initial_boundary=initial_boundary,
        )
