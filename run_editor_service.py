#!/usr/bin/env python3
"""
Geofence Editor Service - Entry Point
=====================================

This script starts one Palisade editing session, which:
- Receives boundary edit commands via the MQTT control plane
- Debounces edits and revalidates the boundary after a quiet period
- Publishes each validation result to MQTT (retained)

Usage:
    python run_editor_service.py --config config/palisade_editor/editor_config.yaml

Architecture:
    - EditorService: Session orchestrator (palisade_editor)
    - MQTTControlPlane: Command handler (palisade_control)
    - ValidationStatePublisher: Publishes validation results (palisade_mqtt)

Lifecycle:
    1. Load configuration from YAML
    2. Setup logging (console + file)
    3. Create control plane and publisher
    4. Create EditorService and register commands
    5. Start service (non-blocking)
    6. Wait for stop signal (Ctrl+C or SIGTERM)
    7. Graceful shutdown

Logs:
    - Console: INFO level
    - File: logs/editor.log (INFO level)
"""

import argparse
import signal
import sys
import logging
from pathlib import Path
from typing import Optional

from palisade_control import MQTTControlPlane
from palisade_editor import EditorConfig, EditorService
from palisade_mqtt import ValidationStatePublisher, create_logger


# ─────────────────────────────────────────────────────────────────────────────
# Logging Setup
# ─────────────────────────────────────────────────────────────────────────────

def setup_logging(log_file: Optional[Path] = None) -> logging.Logger:
    """
    Setup logging for the editor service.

    Args:
        log_file: Optional path to log file (default: logs/editor.log)

    Returns:
        Logger instance for the editor
    """
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
            *(
                [logging.FileHandler(log_file)]
                if log_file
                else []
            )
        ]
    )

    return logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Main Service
# ─────────────────────────────────────────────────────────────────────────────

class EditorApp:
    """
    Application wrapper for EditorService.

    Handles:
    - Configuration loading
    - Component initialization (control plane, publisher)
    - Signal handling (SIGTERM, SIGINT)
    - Graceful shutdown
    """

    def __init__(self, config_path: Path, log_file: Optional[Path] = None):
        self.config_path = config_path
        self.log_file = log_file
        self.logger = setup_logging(log_file)

        # Components (initialized in setup())
        self.config: Optional[EditorConfig] = None
        self.control_plane: Optional[MQTTControlPlane] = None
        self.state_publisher: Optional[ValidationStatePublisher] = None
        self.service: Optional[EditorService] = None

        self._shutdown_requested = False

    def setup(self):
        """Load configuration and build all components."""
        self.logger.info("=" * 80)
        self.logger.info("🚀 Palisade Geofence Editor - Starting")
        self.logger.info("=" * 80)

        self.logger.info(f"📄 Loading configuration: {self.config_path}")
        self.config = EditorConfig.from_yaml(self.config_path)
        self.logger.info(f"✅ Configuration loaded (session_id={self.config.session_id})")

        mqtt = self.config.mqtt_config
        command_topic, status_topic, state_topic = mqtt.topics_for(self.config.session_id)

        self.logger.info("🔌 Creating MQTT control plane")
        self.control_plane = MQTTControlPlane(
            broker_host=mqtt.broker,
            broker_port=mqtt.port,
            command_topic=command_topic,
            status_topic=status_topic,
            client_id=f"editor_{self.config.session_id}",
            username=mqtt.username,
            password=mqtt.password,
        )

        self.logger.info("📤 Creating validation state publisher")
        self.state_publisher = ValidationStatePublisher(
            broker_host=mqtt.broker,
            broker_port=mqtt.port,
            topic=state_topic,
            session_id=self.config.session_id,
            logger=create_logger(component="mqtt_publisher"),
            client_id=f"publisher_validation_{self.config.session_id}",
            username=mqtt.username,
            password=mqtt.password,
            qos=mqtt.qos,
        )
        self.logger.info(f"  - Command topic: {command_topic}")
        self.logger.info(f"  - State topic: {state_topic}")

        self.service = EditorService(
            config=self.config,
            control_plane=self.control_plane,
            state_publisher=self.state_publisher,
        )
        self.service.setup()
        self.logger.info("✅ Service created")
        self.logger.info("=" * 80)

    def run(self):
        """Run the editor service. Blocks until shutdown is requested."""
        if not self.service:
            raise RuntimeError("Service not initialized. Call setup() first.")

        signal.signal(signal.SIGTERM, self._signal_handler)
        signal.signal(signal.SIGINT, self._signal_handler)

        try:
            if not self.service.start():
                raise RuntimeError("Could not connect to MQTT broker")

            self.logger.info("✅ Service started successfully")
            self.logger.info("Press Ctrl+C to stop")
            self.logger.info("=" * 80)

            self.service.wait()

        except KeyboardInterrupt:
            self.logger.info("\n⚠️  KeyboardInterrupt received")
            self.shutdown()

        except Exception as e:
            self.logger.error(f"❌ Service error: {e}", exc_info=True)
            self.shutdown()
            sys.exit(1)

    def shutdown(self):
        """
        Graceful shutdown of all components.

        Order:
        1. Stop service (controller, publisher)
        2. Disconnect control plane
        """
        if self._shutdown_requested:
            self.logger.warning("⚠️  Shutdown already in progress")
            return

        self._shutdown_requested = True

        self.logger.info("=" * 80)
        self.logger.info("🛑 Shutting down editor service")
        self.logger.info("=" * 80)

        if self.service:
            try:
                self.service.stop()
            except Exception as e:
                self.logger.error(f"❌ Error stopping service: {e}")

        if self.control_plane:
            try:
                self.control_plane.disconnect()
                self.logger.info("✅ Control plane disconnected")
            except Exception as e:
                self.logger.error(f"❌ Error disconnecting control plane: {e}")

        self.logger.info("✅ Shutdown complete")

    def _signal_handler(self, signum, frame):
        signal_name = signal.Signals(signum).name
        self.logger.info(f"\n⚠️  Received signal {signal_name} ({signum})")
        self.shutdown()
        sys.exit(0)


# ─────────────────────────────────────────────────────────────────────────────
# CLI
# ─────────────────────────────────────────────────────────────────────────────

def parse_args():
    parser = argparse.ArgumentParser(
        description="Palisade Geofence Editor - debounced boundary validation over MQTT",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Start with default config
  python run_editor_service.py --config config/palisade_editor/editor_config.yaml

  # Start without file logging (console only)
  python run_editor_service.py --config config/palisade_editor/editor_config.yaml --no-log-file
        """
    )

    parser.add_argument(
        '--config',
        type=Path,
        required=True,
        help='Path to editor configuration YAML file'
    )

    parser.add_argument(
        '--log-file',
        type=Path,
        default=Path('logs/editor.log'),
        help='Path to log file (default: logs/editor.log)'
    )

    parser.add_argument(
        '--no-log-file',
        action='store_true',
        help='Disable file logging (console only)'
    )

    return parser.parse_args()


def main():
    args = parse_args()

    log_file = None if args.no_log_file else args.log_file

    if not args.config.exists():
        print(f"❌ Error: Configuration file not found: {args.config}", file=sys.stderr)
        sys.exit(1)

    app = EditorApp(config_path=args.config, log_file=log_file)

    try:
        app.setup()
        app.run()
    except Exception as e:
        print(f"❌ Fatal error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
