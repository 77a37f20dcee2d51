"""
Palisade Editor - Debounced geofence revalidation.

Components:
    RevalidationController: Debounced validation of the candidate boundary
    BoundaryEditor: Vertex edit operations feeding the controller
    Schedulers: ThreadingScheduler, AsyncioScheduler, ManualScheduler
    EditorConfig / MQTTConfig: YAML configuration
    EditorService: MQTT-exposed editing session
"""

from palisade_editor.scheduling import (
    Scheduler,
    TimerHandle,
    ThreadingScheduler,
    AsyncioScheduler,
    ManualScheduler,
)
from palisade_editor.controller import (
    RevalidationController,
    ControllerState,
    DEFAULT_QUIET_PERIOD_MS,
)
from palisade_editor.editor import BoundaryEditor
from palisade_editor.config import EditorConfig, MQTTConfig
from palisade_editor.service import EditorService

__all__ = [
    "Scheduler",
    "TimerHandle",
    "ThreadingScheduler",
    "AsyncioScheduler",
    "ManualScheduler",
    "RevalidationController",
    "ControllerState",
    "DEFAULT_QUIET_PERIOD_MS",
    "BoundaryEditor",
    "EditorConfig",
    "MQTTConfig",
    "EditorService",
]

__version__ = "1.0.0"
