"""Payment status enumeration.

Payment is tracked independently of fulfilment (OrderStatus).
"""

from enum import Enum


class PaymentStatus(str, Enum):
    """Payment status of an order."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"

    @classmethod
    def values(cls) -> list[str]:
        """Get all payment status values as strings."""
        return [status.value for status in cls]
