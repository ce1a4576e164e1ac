"""Order line item entity."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal
from typing import ClassVar
from uuid import UUID

from src.domain.enums.permission import EntityType


@dataclass(kw_only=True)
class OrderItem:
    """Line item of an order.

    unit_price is a snapshot of the product price at placement time.

    Attributes:
        id: Item identifier.
        order_id: Parent order.
        product_id: Ordered product.
        quantity: Units ordered (> 0).
        unit_price: Price per unit at placement.
        subtotal: Line total, expected to equal quantity x unit_price.
        created_at: Creation timestamp.
    """

    entity_type: ClassVar[EntityType] = EntityType.ORDER_ITEMS

    id: UUID
    order_id: UUID
    product_id: UUID
    quantity: int
    unit_price: Decimal
    subtotal: Decimal
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def expected_subtotal(self) -> Decimal:
        """Compute quantity x unit_price."""
        return self.unit_price * self.quantity
