"""Policy and integrity error messages.

Message constants used when building AuthorizationError and
IntegrityViolationError values.

Architecture:
    - Domain layer errors (no infrastructure dependencies)
    - Used in Result types (railway-oriented programming)
    - Never raised as exceptions (return Failure(error) instead)
"""


class PolicyError:
    """Policy outcome message constants.

    Error Categories:
        - Denials: ACCESS_DENIED (also used for rows that do not exist)
        - Integrity: per-reason message templates
        - Order placement: PRODUCT_UNAVAILABLE, INSUFFICIENT_STOCK, MIXED_FARMERS
    """

    # -------------------------------------------------------------------------
    # Denials
    # -------------------------------------------------------------------------

    ACCESS_DENIED = "Row not found or access denied"
    """Single message for every denial, so a missing row looks like a forbidden one."""

    # -------------------------------------------------------------------------
    # Integrity
    # -------------------------------------------------------------------------

    REQUIRED_FIELD = "{field} is required"
    INVALID_ENUMERATION = "{field} must be one of: {allowed}"
    DUPLICATE_ROW = "A row with the same ({fields}) already exists"
    MISSING_REFERENCE = "{field} references a missing {target} row"
    IMMUTABLE_FIELD = "{field} cannot be changed"
    INVALID_TRANSITION = "Order status cannot change from {current} to {target}"
    INVALID_INITIAL_STATE = "A new order must start with {field} {expected}"
    SUBTOTAL_MISMATCH = "subtotal must equal quantity x unit_price ({expected})"
    TOTAL_MISMATCH = "total_amount must equal the sum of item subtotals ({expected})"

    # -------------------------------------------------------------------------
    # Order placement
    # -------------------------------------------------------------------------

    PRODUCT_UNAVAILABLE = "Product is not available for ordering"
    INSUFFICIENT_STOCK = "Requested quantity exceeds available stock"
    MIXED_FARMERS = "All products in an order must belong to the same farmer"
    EMPTY_ORDER = "An order needs at least one item"
