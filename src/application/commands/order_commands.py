"""Order commands (CQRS write operations).

All commands are immutable (frozen=True) and use keyword-only arguments
(kw_only=True). Handlers return Result types.
"""

from dataclasses import dataclass
from typing import Any
from uuid import UUID

from src.domain.entities import Actor
from src.domain.enums.order_status import OrderStatus
from src.domain.enums.payment_status import PaymentStatus


@dataclass(frozen=True, kw_only=True)
class OrderLine:
    """Requested quantity of one product.

    Attributes:
        product_id: Product to order.
        quantity: Units requested.
    """

    product_id: UUID
    quantity: int


@dataclass(frozen=True, kw_only=True)
class PlaceOrder:
    """Buyer places an order with a single farmer.

    Prices are taken from the live product rows, never from the caller.

    Attributes:
        actor: Ordering buyer.
        lines: Products and quantities (all from one farmer).
        delivery_address: Structured delivery address.
        notes: Special instructions.

    Example:
        >>> command = PlaceOrder(
        ...     actor=buyer,
        ...     lines=[OrderLine(product_id=ghee.id, quantity=2)],
        ...     delivery_address={"city": "Pune", "pincode": "411001"},
        ... )
        >>> result = await handler.handle(command)
    """

    actor: Actor
    lines: list[OrderLine]
    delivery_address: dict[str, Any]
    notes: str | None = None


@dataclass(frozen=True, kw_only=True)
class UpdateOrderStatus:
    """Farmer moves an order along its lifecycle or records payment.

    Attributes:
        actor: Farmer on the order.
        order_id: Order to update.
        status: New fulfilment status (None = unchanged).
        payment_status: New payment status (None = unchanged).
    """

    actor: Actor
    order_id: UUID
    status: OrderStatus | None = None
    payment_status: PaymentStatus | None = None
