"""Integrity violation classification.

Every rejected write that passed authorization carries one of these
reasons so callers can react without parsing messages.
"""

from enum import Enum

from src.core.enums import ErrorCode


class ViolationReason(str, Enum):
    """Why an authorized write was rejected."""

    RANGE = "range"
    """Numeric field outside its allowed range (negative price, rating 7)."""

    ENUMERATION = "enumeration"
    """Value not drawn from a closed enumeration (status, role)."""

    REQUIRED = "required"
    """Required text field missing or blank."""

    UNIQUENESS = "uniqueness"
    """Duplicate review triple or bookmark pair."""

    REFERENCE = "reference"
    """Foreign key points at a row that does not exist."""

    IMMUTABLE_FIELD = "immutable_field"
    """Update touched a field that may not change on this path."""

    TRANSITION = "transition"
    """Order status change outside the lifecycle."""

    CONSISTENCY = "consistency"
    """Derived amount disagrees with its inputs (subtotal, order total)."""

    CONSTRAINT = "constraint"
    """Database constraint rejected the write."""

    @property
    def error_code(self) -> ErrorCode:
        """Machine-readable error code for this reason."""
        return _ERROR_CODES[self]


_ERROR_CODES: dict[ViolationReason, ErrorCode] = {
    ViolationReason.RANGE: ErrorCode.INTEGRITY_RANGE_VIOLATION,
    ViolationReason.ENUMERATION: ErrorCode.INTEGRITY_ENUMERATION_VIOLATION,
    ViolationReason.REQUIRED: ErrorCode.INTEGRITY_REQUIRED_FIELD,
    ViolationReason.UNIQUENESS: ErrorCode.INTEGRITY_UNIQUENESS_VIOLATION,
    ViolationReason.REFERENCE: ErrorCode.INTEGRITY_REFERENCE_VIOLATION,
    ViolationReason.IMMUTABLE_FIELD: ErrorCode.INTEGRITY_IMMUTABLE_FIELD,
    ViolationReason.TRANSITION: ErrorCode.INTEGRITY_TRANSITION_VIOLATION,
    ViolationReason.CONSISTENCY: ErrorCode.INTEGRITY_CONSISTENCY_VIOLATION,
    ViolationReason.CONSTRAINT: ErrorCode.INTEGRITY_CONSTRAINT_FAILED,
}
