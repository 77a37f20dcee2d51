"""
Test Palisade CLI
=================

Offline `check` command and MQTT command payload building.

Usage:
    pytest test_cli.py
"""

import json
import textwrap

import pytest

from palisade_cli import main
from palisade_cli.cli import EXIT_INVALID, build_command, build_parser, command_topic
from palisade_editor import MQTTConfig


def write_boundary(tmp_path, content: str):
    path = tmp_path / "boundary.yaml"
    path.write_text(textwrap.dedent(content))
    return str(path)


def test_check_valid_open_boundary(tmp_path, capsys):
    path = write_boundary(tmp_path, """
        points:
          - [0, 0]
          - {latitude: 0, longitude: 1}
          - [1, 0]
    """)

    assert main(["check", path]) == 0

    report = json.loads(capsys.readouterr().out)
    assert report["point_count"] == 3
    assert report["result"]["is_valid"] is True
    assert report["closed_boundary"][-1] == {"latitude": 0, "longitude": 0}


def test_check_invalid_boundary(tmp_path, capsys):
    path = write_boundary(tmp_path, """
        points:
          - [0, 0]
          - [0, 1]
    """)

    assert main(["check", path]) == EXIT_INVALID

    report = json.loads(capsys.readouterr().out)
    assert report["result"]["errors"][0]["code"] == "MIN_POINTS"
    assert "closed_boundary" not in report


@pytest.mark.parametrize("content", ["other: 1\n", "points: [[0, 0, 0]]\n", "points: [\n"])
def test_check_bad_file(tmp_path, capsys, content):
    path = tmp_path / "bad.yaml"
    path.write_text(content)

    assert main(["check", str(path)]) == 1
    assert "Error" in capsys.readouterr().err


def test_check_missing_file(tmp_path):
    assert main(["check", str(tmp_path / "missing.yaml")]) == 1


def test_no_command_prints_help(capsys):
    assert main([]) == 1
    assert "usage" in capsys.readouterr().out


@pytest.mark.parametrize("argv, expected", [
    (["add-point", "1.5", "2.5"], {"command": "add_point", "latitude": 1.5, "longitude": 2.5}),
    (["move-point", "2", "1", "0"],
     {"command": "move_point", "index": 2, "latitude": 1.0, "longitude": 0.0}),
    (["delete-point", "0"], {"command": "delete_point", "index": 0}),
    (["clear"], {"command": "clear"}),
    (["validate-now"], {"command": "validate_now"}),
    (["status"], {"command": "status"}),
])
def test_build_command(argv, expected):
    args = build_parser().parse_args(argv)

    assert build_command(args) == expected


def test_set_boundary_payload(tmp_path):
    path = write_boundary(tmp_path, """
        points:
          - [0, 0]
          - [0, 1]
          - [1, 0]
    """)
    args = build_parser().parse_args(["set-boundary", path])

    command = build_command(args)

    assert command["command"] == "set_boundary"
    assert command["points"][2] == {"latitude": 1, "longitude": 0}


def test_command_topic_templates():
    assert command_topic("editor_01") == "palisade/control/editor_01/commands"
    assert command_topic("yard_3", "sites/{session_id}/cmd") == "sites/yard_3/cmd"
    with pytest.raises(ValueError):
        command_topic("yard_3", "sites/{site}/cmd")


class RecordingClient:
    """Stands in for MQTTCommandClient; records instead of publishing."""

    sent = []

    def __init__(self, broker, port):
        self.broker = broker
        self.port = port

    def send_command(self, topic, command, qos=1):
        self.sent.append((topic, command, qos))


@pytest.fixture
def recorded(monkeypatch):
    monkeypatch.setattr("palisade_cli.cli.MQTTCommandClient", RecordingClient)
    monkeypatch.setattr(RecordingClient, "sent", [])
    return RecordingClient.sent


def test_commands_go_to_configured_topic(recorded):
    code = main(["--session-id", "yard_3", "--topic", "sites/{session_id}/cmd", "clear"])

    assert code == 0
    assert recorded == [("sites/yard_3/cmd", {"command": "clear"}, 1)]


def test_default_topic_matches_editor_config(recorded):
    assert main(["--session-id", "editor_07", "status"]) == 0

    topic, command, qos = recorded[0]
    assert topic == MQTTConfig().topics_for("editor_07")[0]
    assert command == {"command": "status"}


def test_bad_topic_template_is_an_error(recorded, capsys):
    assert main(["--topic", "sites/{site}/cmd", "clear"]) == 1
    assert recorded == []
    assert "Invalid command topic template" in capsys.readouterr().err
