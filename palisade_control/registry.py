"""
CommandRegistry - Edit command table with payload contracts

Bounded Context: Which edit commands a session accepts, and what they carry
Responsibilities:
  - Register edit commands with handlers and required payload fields
  - Reject unknown commands and payloads missing a required field before
    the handler (and so the boundary) is touched
  - Describe the command table (used by the status reply)

Threading: Thread-safe (uses lock for write operations)
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Set, Tuple
import threading


class CommandNotAvailableError(Exception):
    """Raised when attempting to execute an unregistered command"""
    pass


class CommandPayloadError(ValueError):
    """Raised when a command payload lacks a required field"""

    def __init__(self, command: str, missing: Tuple[str, ...]):
        self.command = command
        self.missing = missing
        super().__init__(
            f"Command '{command}' missing required field(s): {', '.join(missing)}"
        )


@dataclass(frozen=True)
class EditCommand:
    """
    One entry of the command table.

    Attributes:
        name: Command name as sent on the wire (lowercase)
        handler: Callable receiving the full JSON payload
        description: Human-readable help text
        fields: Payload keys that must be present (values are checked by
                the handler and the validation engine, not here)
    """
    name: str
    handler: Callable[[Dict[str, Any]], Any]
    description: str
    fields: Tuple[str, ...] = ()

    def missing_fields(self, payload: Dict[str, Any]) -> Tuple[str, ...]:
        return tuple(f for f in self.fields if f not in payload)

    def to_dict(self) -> Dict[str, Any]:
        return {'description': self.description, 'fields': list(self.fields)}


class CommandRegistry:
    """
    Table of edit commands accepted by one editing session.

    Example:
        registry = CommandRegistry()
        registry.register('delete_point', service.delete_point,
                          "Remove a vertex", fields=('index',))

        registry.execute('delete_point', {'command': 'delete_point', 'index': 2})
        registry.execute('delete_point', {'command': 'delete_point'})
        # -> CommandPayloadError: missing required field(s): index
    """

    def __init__(self):
        self._commands: Dict[str, EditCommand] = {}
        self._lock = threading.Lock()

    def register(
        self,
        command: str,
        handler: Callable[[Dict[str, Any]], Any],
        description: str,
        fields: Tuple[str, ...] = ()
    ) -> EditCommand:
        """
        Register a command.

        Raises:
            ValueError: If command already registered
        """
        entry = EditCommand(
            name=command.lower(),
            handler=handler,
            description=description,
            fields=tuple(fields)
        )
        with self._lock:
            if entry.name in self._commands:
                raise ValueError(f"Command '{entry.name}' already registered")
            self._commands[entry.name] = entry
        return entry

    def execute(self, command: str, command_data: Optional[Dict[str, Any]] = None) -> None:
        """
        Check the payload contract, then run the handler.

        Args:
            command: Command name
            command_data: Full JSON payload (defaults to {"command": command})

        Raises:
            CommandNotAvailableError: If command not registered
            CommandPayloadError: If a required field is missing
        """
        entry = self._commands.get(command)
        if entry is None:
            raise CommandNotAvailableError(
                f"Command '{command}' not available. "
                f"Available commands: {', '.join(sorted(self.available_commands))}"
            )

        payload = command_data if command_data is not None else {'command': command}
        missing = entry.missing_fields(payload)
        if missing:
            raise CommandPayloadError(command, missing)

        entry.handler(payload)

    def is_available(self, command: str) -> bool:
        return command in self._commands

    @property
    def available_commands(self) -> Set[str]:
        """Snapshot of all registered commands."""
        return set(self._commands.keys())

    def describe(self) -> Dict[str, Dict[str, Any]]:
        """Command table as JSON-compatible dict (name -> description, fields)."""
        return {name: entry.to_dict() for name, entry in sorted(self._commands.items())}
