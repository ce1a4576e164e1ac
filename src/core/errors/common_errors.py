"""Common error classes used across all layers.

Error Types:
- ValidationError: Input validation failures (malformed requests)
- AuthorizationError: The actor may not perform the operation on the row.
  Also returned when the addressed row does not exist, so callers cannot
  probe for rows they are not allowed to see.
- IntegrityViolationError: An authorized write would break a structural
  invariant (range, enumeration, uniqueness, reference, ...).

Usage:
    from src.core.errors import IntegrityViolationError
    from src.core.enums import ErrorCode
    from src.core.result import Failure

    return Failure(IntegrityViolationError(
        code=ErrorCode.INTEGRITY_RANGE_VIOLATION,
        message="price must be >= 0",
        reason=ViolationReason.RANGE,
        entity="products",
        field="price",
    ))
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from src.core.errors.domain_error import DomainError

if TYPE_CHECKING:
    from src.domain.enums.violation_reason import ViolationReason


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        code: ErrorCode enum.
        message: Human-readable message.
        field: Field name that failed validation.
        details: Additional context.
    """

    field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthorizationError(DomainError):
    """Authorization failure (no permission, or no such row).

    Attributes:
        code: ErrorCode enum.
        message: Human-readable message.
        details: Additional context.
    """

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class IntegrityViolationError(DomainError):
    """Structural invariant violation on an otherwise authorized write.

    Attributes:
        code: ErrorCode enum.
        message: Human-readable message.
        reason: Classified violation reason.
        entity: Table name of the offending row.
        field: Column (or column group) that broke the invariant.
        details: Additional context.
    """

    reason: "ViolationReason"
    entity: str
    field: str | None = None
