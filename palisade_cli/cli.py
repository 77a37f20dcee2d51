"""
Palisade CLI - Main entry point.

Sends edit commands to an editor service over MQTT, and validates
boundary files offline.
"""

import argparse
import json
import sys
import yaml
from pathlib import Path
from typing import Any, Dict, List

from palisade_zone import IssueCode, Point, auto_close, parse_points, validate_boundary
from palisade_editor.config import MQTTConfig
from .mqtt_client import MQTTCommandClient

EXIT_INVALID = 2
DEFAULT_COMMAND_TOPIC = MQTTConfig.command_topic


def load_yaml_config(config_path: str) -> Dict[str, Any]:
    """
    Load YAML configuration file.

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If YAML is invalid
    """
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(path) as f:
            return yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {config_path}: {e}")


def load_boundary(config_path: str) -> List[Point]:
    """
    Load boundary points from YAML.

    Example YAML:
        points:
          - [23.301624, 85.327065]
          - {latitude: 23.301700, longitude: 85.327100}
    """
    data = load_yaml_config(config_path)
    if 'points' not in data:
        raise ValueError(f"Missing 'points' in {config_path}")
    return parse_points(data['points'])


def check_boundary(points: List[Point]) -> Dict[str, Any]:
    """Validate points offline; include the closed boundary when needed."""
    result = validate_boundary(points)
    report: Dict[str, Any] = {
        'point_count': len(points),
        'result': result.to_dict(),
    }
    if result.is_valid and IssueCode.AUTO_CLOSE in result.warning_codes:
        report['closed_boundary'] = [p.to_dict() for p in auto_close(points)]
    return report


def command_topic(session_id: str, template: str = DEFAULT_COMMAND_TOPIC) -> str:
    """
    Resolve the command topic of a session.

    Raises:
        ValueError: If template has placeholders other than {session_id}
    """
    try:
        return template.format(session_id=session_id)
    except (KeyError, IndexError) as e:
        raise ValueError(f"Invalid command topic template {template!r}: {e}") from e


def send_command(
    command: Dict[str, Any],
    session_id: str = "editor_01",
    broker: str = "localhost",
    port: int = 1883,
    topic_template: str = DEFAULT_COMMAND_TOPIC
) -> None:
    """Send command to an editor service via MQTT."""
    topic = command_topic(session_id, topic_template)

    client = MQTTCommandClient(broker=broker, port=port)
    client.send_command(topic, command, qos=1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Palisade CLI - Geofence boundary editing and validation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Validate a boundary file offline (exit 2 if invalid)
  palisade-cli check config/boundaries/home.yaml

  # Replace the boundary of a running session
  palisade-cli set-boundary config/boundaries/home.yaml

  # Vertex edits
  palisade-cli add-point 23.301624 85.327065
  palisade-cli move-point 2 23.301750 85.327150
  palisade-cli delete-point 0

  # Simple commands (no arguments)
  palisade-cli clear
  palisade-cli validate-now
  palisade-cli status

  # Session whose service uses a custom command_topic
  palisade-cli --session-id yard_3 --topic "sites/{session_id}/geofence/cmd" clear
"""
    )

    parser.add_argument("--session-id", default="editor_01",
                        help="Target session ID (default: editor_01)")
    parser.add_argument("--broker", default="localhost",
                        help="MQTT broker host (default: localhost)")
    parser.add_argument("--port", type=int, default=1883,
                        help="MQTT broker port (default: 1883)")
    parser.add_argument("--topic", default=DEFAULT_COMMAND_TOPIC,
                        help=f"Command topic template (default: {DEFAULT_COMMAND_TOPIC})")

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    check = subparsers.add_parser('check', help='Validate a boundary YAML file offline')
    check.add_argument('config', help='Path to boundary YAML')

    set_boundary = subparsers.add_parser('set-boundary', help='Replace boundary from YAML')
    set_boundary.add_argument('config', help='Path to boundary YAML')

    add_point = subparsers.add_parser('add-point', help='Append a vertex')
    add_point.add_argument('latitude', type=float)
    add_point.add_argument('longitude', type=float)

    move_point = subparsers.add_parser('move-point', help='Move a vertex')
    move_point.add_argument('index', type=int, help='0-based vertex index')
    move_point.add_argument('latitude', type=float)
    move_point.add_argument('longitude', type=float)

    delete_point = subparsers.add_parser('delete-point', help='Remove a vertex')
    delete_point.add_argument('index', type=int, help='0-based vertex index')

    subparsers.add_parser('clear', help='Remove all vertices')
    subparsers.add_parser('validate-now', help='Validate immediately')
    subparsers.add_parser('status', help='Query session status')

    return parser


def build_command(args: argparse.Namespace) -> Dict[str, Any]:
    """Translate parsed arguments into an MQTT command payload."""
    if args.command == 'set-boundary':
        points = load_boundary(args.config)
        return {'command': 'set_boundary', 'points': [p.to_dict() for p in points]}

    if args.command == 'add-point':
        return {'command': 'add_point', 'latitude': args.latitude, 'longitude': args.longitude}

    if args.command == 'move-point':
        return {
            'command': 'move_point',
            'index': args.index,
            'latitude': args.latitude,
            'longitude': args.longitude,
        }

    if args.command == 'delete-point':
        return {'command': 'delete_point', 'index': args.index}

    # clear, validate-now, status
    return {'command': args.command.replace('-', '_')}


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        if args.command == 'check':
            report = check_boundary(load_boundary(args.config))
            print(json.dumps(report, indent=2))
            return 0 if report['result']['is_valid'] else EXIT_INVALID

        send_command(build_command(args), args.session_id, args.broker, args.port,
                     topic_template=args.topic)
        return 0

    except (OSError, ValueError, TypeError, RuntimeError) as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
