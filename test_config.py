"""
Test Editor Configuration
=========================

EditorConfig / MQTTConfig loading from YAML and validation.

Usage:
    pytest test_config.py
"""

import textwrap

import pytest

from palisade_editor import DEFAULT_QUIET_PERIOD_MS, EditorConfig, MQTTConfig


def write_yaml(tmp_path, content: str):
    path = tmp_path / "editor_config.yaml"
    path.write_text(textwrap.dedent(content))
    return path


def test_from_yaml_full(tmp_path):
    path = write_yaml(tmp_path, """
        session_id: "field_07"
        quiet_period_ms: 500

        mqtt_config:
          broker: "mqtt.local"
          port: 8883
          username: "editor"
          password: "secret"
          qos: 2

        initial_boundary:
          - [23.301624, 85.327065]
          - [23.301700, 85.327100]
          - [23.301750, 85.327150]
    """)

    config = EditorConfig.from_yaml(path)

    assert config.session_id == "field_07"
    assert config.quiet_period_ms == 500.0
    assert config.mqtt_config.broker == "mqtt.local"
    assert config.mqtt_config.port == 8883
    assert config.mqtt_config.qos == 2
    assert config.initial_boundary[0] == (23.301624, 85.327065)
    assert len(config.initial_boundary) == 3


def test_from_yaml_defaults(tmp_path):
    path = write_yaml(tmp_path, """
        session_id: "editor_01"
    """)

    config = EditorConfig.from_yaml(path)

    assert config.quiet_period_ms == DEFAULT_QUIET_PERIOD_MS
    assert config.mqtt_config == MQTTConfig()
    assert config.initial_boundary == []


def test_topics_are_session_scoped():
    command, status, state = MQTTConfig().topics_for("editor_01")

    assert command == "palisade/control/editor_01/commands"
    assert status == "palisade/control/editor_01/status"
    assert state == "palisade/data/validation/editor_01"


def test_missing_session_id(tmp_path):
    path = write_yaml(tmp_path, """
        quiet_period_ms: 300
    """)

    with pytest.raises(KeyError):
        EditorConfig.from_yaml(path)


@pytest.mark.parametrize("quiet_period_ms", [0, -1, 10_001])
def test_quiet_period_bounds(quiet_period_ms):
    with pytest.raises(ValueError):
        EditorConfig(session_id="editor_01", quiet_period_ms=quiet_period_ms)


@pytest.mark.parametrize("kwargs", [
    {"broker": ""},
    {"port": 0},
    {"port": 70000},
    {"qos": 3},
])
def test_mqtt_config_validation(kwargs):
    with pytest.raises(ValueError):
        MQTTConfig(**kwargs)


def test_initial_boundary_pairs_checked():
    with pytest.raises(ValueError):
        EditorConfig(session_id="editor_01", initial_boundary=[(1.0, 2.0, 3.0)])


def test_unknown_mqtt_key_rejected(tmp_path):
    path = write_yaml(tmp_path, """
        session_id: "editor_01"
        mqtt_config:
          brokr: "typo"
    """)

    with pytest.raises(TypeError):
        EditorConfig.from_yaml(path)
