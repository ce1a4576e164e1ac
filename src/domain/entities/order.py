"""Order domain entity.

Links one buyer and one farmer. total_amount is fixed at placement.
Fulfilment (status) and payment (payment_status) are tracked independently.

Lifecycle:
    pending → confirmed → shipped → delivered
    pending / confirmed / shipped → cancelled
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any, ClassVar
from uuid import UUID

from src.domain.enums.order_status import OrderStatus
from src.domain.enums.payment_status import PaymentStatus
from src.domain.enums.permission import EntityType


@dataclass(kw_only=True)
class Order:
    """Order placed by a buyer with a single farmer.

    Attributes:
        id: Order identifier.
        buyer_id: Buyer account id.
        farmer_id: Farmer account id.
        total_amount: Sum of line-item subtotals at placement time.
        status: Fulfilment status.
        payment_status: Payment status.
        delivery_address: Structured delivery address.
        notes: Special instructions from the buyer.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    entity_type: ClassVar[EntityType] = EntityType.ORDERS

    id: UUID
    buyer_id: UUID
    farmer_id: UUID
    total_amount: Decimal
    delivery_address: dict[str, Any]
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    notes: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def involves(self, user_id: UUID) -> bool:
        """Check if user_id is the buyer or the farmer on this order."""
        return user_id in (self.buyer_id, self.farmer_id)

    def is_delivered(self) -> bool:
        """Check if the order reached the delivered state."""
        return self.status == OrderStatus.DELIVERED
