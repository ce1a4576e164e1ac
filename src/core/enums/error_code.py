"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention.
Used with Result types for railway-oriented programming.

Categories:
- Validation errors (INVALID_*, VALIDATION_*)
- Authorization errors (PERMISSION_*)
- Integrity violations (INTEGRITY_*)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable).

    Error codes follow ENTITY_ACTION_REASON naming convention.
    """

    # Validation errors
    VALIDATION_FAILED = "validation_failed"
    INVALID_INPUT = "invalid_input"

    # Authorization errors
    PERMISSION_DENIED = "permission_denied"

    # Integrity violations
    INTEGRITY_RANGE_VIOLATION = "integrity_range_violation"
    INTEGRITY_ENUMERATION_VIOLATION = "integrity_enumeration_violation"
    INTEGRITY_REQUIRED_FIELD = "integrity_required_field"
    INTEGRITY_UNIQUENESS_VIOLATION = "integrity_uniqueness_violation"
    INTEGRITY_REFERENCE_VIOLATION = "integrity_reference_violation"
    INTEGRITY_IMMUTABLE_FIELD = "integrity_immutable_field"
    INTEGRITY_TRANSITION_VIOLATION = "integrity_transition_violation"
    INTEGRITY_CONSISTENCY_VIOLATION = "integrity_consistency_violation"
    INTEGRITY_CONSTRAINT_FAILED = "integrity_constraint_failed"

    # Business rule violations
    PRODUCT_UNAVAILABLE = "product_unavailable"
    INSUFFICIENT_STOCK = "insufficient_stock"
    MIXED_FARMER_ORDER = "mixed_farmer_order"
