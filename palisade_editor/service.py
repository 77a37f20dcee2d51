"""
Editor Service - geofence editing session orchestrator.

Wires the pieces of one editing session together:
- MQTTControlPlane receives edit commands (add/move/delete/replace)
- BoundaryEditor applies them and feeds the RevalidationController
- RevalidationController debounces and runs the validation engine
- ValidationStatePublisher publishes each result (retained)

Threading Model:
- Control Plane Thread (paho-mqtt internal, command handlers)
- Timer threads (ThreadingScheduler, one armed at a time)
- Publisher network thread (paho-mqtt internal)
"""

import logging
import threading
from typing import Any, Dict, Optional

from palisade_zone import parse_points, points_from_pairs
from palisade_editor.config import EditorConfig
from palisade_editor.controller import RevalidationController
from palisade_editor.editor import BoundaryEditor
from palisade_editor.scheduling import Scheduler
from palisade_mqtt.logging import create_logger

logger = logging.getLogger(__name__)


class EditorService:
    """
    One geofence editing session exposed over MQTT.

    Usage:
        config = EditorConfig.from_yaml("config.yaml")
        control_plane = MQTTControlPlane(...)
        state_publisher = ValidationStatePublisher(...)

        service = EditorService(config, control_plane, state_publisher)
        service.setup()
        service.start()
        service.wait()  # Blocks until stop()
    """

    def __init__(
        self,
        config: EditorConfig,
        control_plane,  # MQTTControlPlane
        state_publisher,  # ValidationStatePublisher
        scheduler: Optional[Scheduler] = None,
    ):
        self.config = config
        self.control_plane = control_plane
        self.state_publisher = state_publisher

        self.controller = RevalidationController(
            scheduler=scheduler,
            quiet_period_ms=config.quiet_period_ms,
            logger=create_logger("controller"),
        )
        self.editor = BoundaryEditor(self.controller)

        self._stop_event = threading.Event()
        self._unsubscribe = None

        logger.info(
            f"EditorService initialized for session_id={config.session_id} "
            f"(quiet_period_ms={config.quiet_period_ms:g})"
        )

    def setup(self) -> None:
        """Register edit commands and subscribe the state publisher."""
        registry = self.control_plane.command_registry

        registry.register('set_boundary', self._handle_set_boundary,
                          "Replace the boundary", fields=('points',))
        registry.register('add_point', self._handle_add_point,
                          "Append a vertex", fields=('latitude', 'longitude'))
        registry.register('move_point', self._handle_move_point,
                          "Move a vertex", fields=('index', 'latitude', 'longitude'))
        registry.register('delete_point', self._handle_delete_point,
                          "Remove a vertex", fields=('index',))
        registry.register('clear', self._handle_clear, "Remove all vertices")
        registry.register('validate_now', self._handle_validate_now,
                          "Validate immediately and publish the result")
        registry.register('status', self._handle_status,
                          "Publish session status, latest result and command table")

        self._unsubscribe = self.controller.subscribe(self.state_publisher.on_result)

        if self.config.initial_boundary:
            self.editor.replace(points_from_pairs(self.config.initial_boundary))

        logger.info(f"Registered commands: {', '.join(sorted(registry.available_commands))}")

    # ===== Command handlers (MQTT thread) =====

    def _handle_set_boundary(self, data: Dict[str, Any]) -> None:
        self.editor.replace(parse_points(data['points']))

    def _handle_add_point(self, data: Dict[str, Any]) -> None:
        self.editor.add_point(data['latitude'], data['longitude'])

    def _handle_move_point(self, data: Dict[str, Any]) -> None:
        self.editor.move_point(data['index'], data['latitude'], data['longitude'])

    def _handle_delete_point(self, data: Dict[str, Any]) -> None:
        self.editor.delete_point(data['index'])

    def _handle_clear(self, data: Dict[str, Any]) -> None:
        self.editor.clear()

    def _handle_validate_now(self, data: Dict[str, Any]) -> None:
        result = self.controller.validate_now()
        self.control_plane.publish_status("validated", result=result.to_dict())

    def _handle_status(self, data: Dict[str, Any]) -> None:
        self.control_plane.publish_status(
            "state",
            session_id=self.config.session_id,
            controller_state=self.controller.state.value,
            point_count=len(self.editor),
            validation_count=self.controller.validation_count,
            result=self.controller.current_state().to_dict(),
            commands=self.control_plane.command_registry.describe(),
        )

    # ===== Lifecycle =====

    def start(self) -> bool:
        """
        Connect publisher and control plane (non-blocking).

        Returns:
            True if both connected
        """
        publisher_ok = self.state_publisher.connect()
        plane_ok = self.control_plane.connect()
        if not (publisher_ok and plane_ok):
            logger.error(
                f"❌ Failed to start (publisher={publisher_ok}, control_plane={plane_ok})"
            )
            return False

        logger.info("✅ EditorService started")
        return True

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until stop() is called (or timeout)."""
        return self._stop_event.wait(timeout=timeout)

    def stop(self) -> None:
        """End the editing session. Safe to call multiple times."""
        if self._stop_event.is_set():
            return

        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.controller.close()
        self.state_publisher.disconnect()
        self._stop_event.set()
        logger.info("✅ EditorService stopped")
