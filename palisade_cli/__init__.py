"""
Palisade CLI - Command-line interface for the geofence editor.

Provides:
- Offline validation of boundary files (check)
- MQTT edit commands for a running EditorService
"""

from .cli import main

__all__ = ["main"]
