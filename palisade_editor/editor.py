"""
Boundary Editor
===============

Edit-stream adapter between a drawing surface (or remote commands) and
the RevalidationController.

Every edit builds a new immutable boundary and forwards it wholesale; no
history is kept.
"""

from typing import Any, List, Optional, Sequence, Tuple

from palisade_zone import Point, auto_close
from palisade_mqtt.logging import StructuredLogger, LogEvent, create_logger
from palisade_editor.controller import RevalidationController


class BoundaryEditor:
    """
    Applies map-style vertex edits to the candidate boundary.

    Operations mirror a drawing surface: click-to-add, drag-to-move,
    click-to-delete, clear-all, and wholesale replacement.
    """

    def __init__(
        self,
        controller: RevalidationController,
        initial: Optional[Sequence[Point]] = None,
        logger: Optional[StructuredLogger] = None
    ):
        self.controller = controller
        self._logger = logger or create_logger("editor")
        self._points: Tuple[Point, ...] = tuple(initial or ())
        if self._points:
            self._commit(self._points, "initial")

    @property
    def points(self) -> Tuple[Point, ...]:
        return self._points

    def __len__(self) -> int:
        return len(self._points)

    def _commit(self, points: Sequence[Point], operation: str) -> Tuple[Point, ...]:
        points = tuple(points)
        self.controller.on_boundary_changed(points)
        self._points = points
        self._logger.debug(
            event=LogEvent.BOUNDARY_CHANGED,
            message="Boundary edited",
            metadata={'operation': operation, 'point_count': len(self._points)}
        )
        return self._points

    def _check_index(self, index: int, operation: str) -> int:
        if isinstance(index, bool) or not isinstance(index, int):
            error: Exception = TypeError(
                f"Point index must be an int, got {type(index).__name__}"
            )
        elif not 0 <= index < len(self._points):
            error = IndexError(
                f"Point index {index} out of range (boundary has {len(self._points)} points)"
            )
        else:
            return index

        self._logger.warning(
            event=LogEvent.BOUNDARY_EDIT_REJECTED,
            message=str(error),
            metadata={'operation': operation, 'index': index}
        )
        raise error

    def replace(self, points: Sequence[Point]) -> Tuple[Point, ...]:
        """Replace the whole boundary."""
        return self._commit(points, "replace")

    def add_point(self, latitude: Any, longitude: Any) -> Tuple[Point, ...]:
        """Append a vertex (click on map)."""
        return self._commit([*self._points, Point(latitude, longitude)], "add_point")

    def move_point(self, index: int, latitude: Any, longitude: Any) -> Tuple[Point, ...]:
        """
        Move vertex index (drag on map).

        Raises:
            TypeError: If index is not an int
            IndexError: If index is out of range
        """
        index = self._check_index(index, "move_point")
        points: List[Point] = list(self._points)
        points[index] = Point(latitude, longitude)
        return self._commit(points, "move_point")

    def delete_point(self, index: int) -> Tuple[Point, ...]:
        """
        Remove vertex index (click on marker).

        Raises:
            TypeError: If index is not an int
            IndexError: If index is out of range
        """
        index = self._check_index(index, "delete_point")
        return self._commit(self._points[:index] + self._points[index + 1:], "delete_point")

    def clear(self) -> Tuple[Point, ...]:
        """Remove all vertices."""
        return self._commit((), "clear")

    def closed_boundary(self) -> List[Point]:
        """Current boundary with the closing point appended if needed."""
        return auto_close(self._points)
