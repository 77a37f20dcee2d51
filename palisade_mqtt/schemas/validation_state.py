"""
Validation State Message Schema
===============================

Bounded Context: Validation state published to UI collaborators

Message Flow:
    RevalidationController → ValidationStateMessage → ValidationStatePublisher
        → MQTT (retained) → map overlay / error panel / submit gate
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from palisade_zone import IssueCode, Point, ValidationResult, auto_close
from .common import Timestamp

SCHEMA_VERSION = "1.0"


@dataclass(frozen=True)
class ValidationStateMessage:
    """
    Snapshot of one published validation pass.

    Attributes:
        schema_version: Message schema version
        timestamp: Publication time
        session_id: Editing session identifier
        boundary: Boundary the result was computed for
        result: Validation outcome
        closed_boundary: Boundary with closing point appended, only when
                         the result is valid and carries AUTO_CLOSE

    Example:
        >>> msg = ValidationStateMessage.from_result(
        ...     session_id="editor_01",
        ...     boundary=points,
        ...     result=validate_boundary(points),
        ... )
        >>> msg.to_dict()['result']['is_valid']
        True
    """
    schema_version: str
    timestamp: Timestamp
    session_id: str
    boundary: Tuple[Point, ...]
    result: ValidationResult
    closed_boundary: Optional[Tuple[Point, ...]] = None

    @classmethod
    def from_result(
        cls,
        session_id: str,
        boundary,
        result: ValidationResult
    ) -> 'ValidationStateMessage':
        """Build a message, deriving closed_boundary from the result."""
        boundary = tuple(boundary)
        closed = None
        if result.is_valid and IssueCode.AUTO_CLOSE in result.warning_codes:
            closed = tuple(auto_close(boundary))

        return cls(
            schema_version=SCHEMA_VERSION,
            timestamp=Timestamp.now(),
            session_id=session_id,
            boundary=boundary,
            result=result,
            closed_boundary=closed
        )

    @property
    def point_count(self) -> int:
        return len(self.boundary)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        data: Dict[str, Any] = {
            'schema_version': self.schema_version,
            'timestamp': self.timestamp.to_dict(),
            'session_id': self.session_id,
            'boundary': [p.to_dict() for p in self.boundary],
            'result': self.result.to_dict(),
        }
        if self.closed_boundary is not None:
            data['closed_boundary'] = [p.to_dict() for p in self.closed_boundary]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ValidationStateMessage':
        """Deserialize from dict.

        Raises:
            ValueError: If required keys missing
        """
        try:
            closed: Optional[List[Dict[str, Any]]] = data.get('closed_boundary')
            return cls(
                schema_version=data['schema_version'],
                timestamp=Timestamp(value=data['timestamp']),
                session_id=data['session_id'],
                boundary=tuple(Point.from_dict(p) for p in data['boundary']),
                result=ValidationResult.from_dict(data['result']),
                closed_boundary=(
                    tuple(Point.from_dict(p) for p in closed)
                    if closed is not None else None
                )
            )
        except KeyError as e:
            raise ValueError(f"Missing required field in validation state: {e}")
