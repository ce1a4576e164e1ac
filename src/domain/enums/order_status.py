"""Order status enumeration.

Defines the fulfilment lifecycle of an order.
"""

from enum import Enum


class OrderStatus(str, Enum):
    """Order fulfilment status.

    **Lifecycle Flow**:
        PENDING → CONFIRMED → SHIPPED → DELIVERED (normal flow)
        PENDING / CONFIRMED / SHIPPED → CANCELLED

    **Terminal States**: DELIVERED, CANCELLED (no outgoing transitions)

    Payment is tracked separately (see PaymentStatus).
    """

    PENDING = "pending"
    """Placed by the buyer, awaiting the farmer's confirmation."""

    CONFIRMED = "confirmed"
    """Accepted by the farmer."""

    SHIPPED = "shipped"
    """Handed over for delivery."""

    DELIVERED = "delivered"
    """Received by the buyer. Qualifies the buyer to review the products."""

    CANCELLED = "cancelled"
    """Cancelled before delivery."""

    @classmethod
    def terminal_states(cls) -> list["OrderStatus"]:
        """Get statuses with no outgoing transition.

        Returns:
            list[OrderStatus]: DELIVERED and CANCELLED.
        """
        return [cls.DELIVERED, cls.CANCELLED]

    def is_terminal(self) -> bool:
        """Check if no further status change is possible."""
        return self in self.terminal_states()

    def allowed_transitions(self) -> frozenset["OrderStatus"]:
        """Get the statuses reachable in one step from this status.

        Returns:
            frozenset[OrderStatus]: Next statuses (empty for terminal states).
        """
        return _TRANSITIONS[self]

    def can_transition_to(self, target: "OrderStatus") -> bool:
        """Check if this status may move to target in one step.

        Args:
            target: Proposed next status.

        Returns:
            bool: True if the transition is part of the lifecycle.
        """
        return target in _TRANSITIONS[self]

    @classmethod
    def values(cls) -> list[str]:
        """Get all status values as strings."""
        return [status.value for status in cls]


_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}
