"""Product review entity.

A buyer may review a product once per qualifying order. The review is a
verified purchase when the buyer has a delivered order containing the
product, which the insert policy requires.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import ClassVar
from uuid import UUID

from src.domain.enums.permission import EntityType


@dataclass(kw_only=True)
class Review:
    """Buyer's rating of a product.

    Attributes:
        id: Review identifier.
        product_id: Reviewed product.
        buyer_id: Reviewing buyer.
        order_id: Order justifying the review (weak reference).
        rating: Integer in [1, 5].
        comment: Optional review text.
        is_verified_purchase: Set when the buyer has a delivered order for the product.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    entity_type: ClassVar[EntityType] = EntityType.REVIEWS

    id: UUID
    product_id: UUID
    buyer_id: UUID
    rating: int
    order_id: UUID | None = None
    comment: str | None = None
    is_verified_purchase: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))
