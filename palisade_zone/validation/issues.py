"""
Validation Issue Types
======================

Bounded Context: Validation findings and results.

Design Principles:
- Immutability: frozen=True prevents accidental mutation
- Fixed-field records with enumerated codes (branch on code, not message)
- Validity derived from errors (cannot disagree with them)
- Serialization: to_dict()/from_dict() for JSON export

Types:
- IssueCode: Stable symbolic tag for a finding
- Issue: One finding (field, message, code)
- PointResult: Result of a single coordinate check
- ValidationResult: Result of a full boundary check
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple


class IssueCode(str, Enum):
    """Issue code enumeration."""

    # Blocking
    MIN_POINTS = "MIN_POINTS"
    INVALID_COORDINATE = "INVALID_COORDINATE"
    INVALID_LATITUDE = "INVALID_LATITUDE"
    LATITUDE_OUT_OF_RANGE = "LATITUDE_OUT_OF_RANGE"
    INVALID_LONGITUDE = "INVALID_LONGITUDE"
    LONGITUDE_OUT_OF_RANGE = "LONGITUDE_OUT_OF_RANGE"

    # Advisory
    AUTO_CLOSE = "AUTO_CLOSE"
    SELF_INTERSECTION = "SELF_INTERSECTION"


BLOCKING_CODES = frozenset({
    IssueCode.MIN_POINTS,
    IssueCode.INVALID_COORDINATE,
    IssueCode.INVALID_LATITUDE,
    IssueCode.LATITUDE_OUT_OF_RANGE,
    IssueCode.INVALID_LONGITUDE,
    IssueCode.LONGITUDE_OUT_OF_RANGE,
})

ADVISORY_CODES = frozenset({
    IssueCode.AUTO_CLOSE,
    IssueCode.SELF_INTERSECTION,
})


@dataclass(frozen=True)
class Issue:
    """
    Single validation finding.

    Attributes:
        field: "coordinates", "coordinates[i]" (0-indexed), or
               "latitude"/"longitude" for single-point checks
        message: Human-readable text (1-indexed point numbers)
        code: Stable symbolic tag

    Example:
        >>> Issue(field="coordinates", message="Polygon will be automatically closed",
        ...       code=IssueCode.AUTO_CLOSE).to_dict()
        {'field': 'coordinates', 'message': 'Polygon will be automatically closed', 'code': 'AUTO_CLOSE'}
    """
    field: str
    message: str
    code: IssueCode

    @property
    def is_blocking(self) -> bool:
        return self.code in BLOCKING_CODES

    def to_dict(self) -> Dict[str, str]:
        """Serialize to JSON-compatible dict."""
        return {
            'field': self.field,
            'message': self.message,
            'code': self.code.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Issue':
        """Deserialize from dict.

        Raises:
            ValueError: If required keys missing or code unknown
        """
        try:
            return cls(
                field=data['field'],
                message=data['message'],
                code=IssueCode(data['code'])
            )
        except KeyError as e:
            raise ValueError(f"Missing required Issue field: {e}")


@dataclass(frozen=True)
class PointResult:
    """Outcome of validate_point (errors only, never warnings)."""
    errors: Tuple[Issue, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of one boundary validation pass.

    Invariants:
        - is_valid is True iff errors is empty
        - warnings never affect validity

    Example:
        >>> result = ValidationResult.provisional()
        >>> result.is_valid
        True
    """
    errors: Tuple[Issue, ...] = ()
    warnings: Tuple[Issue, ...] = ()

    @classmethod
    def provisional(cls) -> 'ValidationResult':
        """Initial state before any validation pass has run."""
        return cls()

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def error_codes(self) -> Tuple[IssueCode, ...]:
        return tuple(issue.code for issue in self.errors)

    @property
    def warning_codes(self) -> Tuple[IssueCode, ...]:
        return tuple(issue.code for issue in self.warnings)

    def has_code(self, code: IssueCode) -> bool:
        """True if any error or warning carries code."""
        return code in self.error_codes or code in self.warning_codes

    def as_tuple(self) -> Tuple[bool, Tuple[Issue, ...], Tuple[Issue, ...]]:
        """(is_valid, errors, warnings)."""
        return (self.is_valid, self.errors, self.warnings)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {
            'is_valid': self.is_valid,
            'errors': [issue.to_dict() for issue in self.errors],
            'warnings': [issue.to_dict() for issue in self.warnings],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ValidationResult':
        """Deserialize from dict (is_valid is recomputed, not trusted)."""
        return cls(
            errors=tuple(Issue.from_dict(e) for e in data.get('errors', [])),
            warnings=tuple(Issue.from_dict(w) for w in data.get('warnings', []))
        )

    def __str__(self) -> str:
        status = "VALID" if self.is_valid else "INVALID"
        return f"{status}: errors={len(self.errors)}, warnings={len(self.warnings)}"
