"""Direct message entity.

Messages may point at a product or an order for context. Those links are
weak: deleting the product or order nulls the link and keeps the message.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import ClassVar
from uuid import UUID

from src.domain.enums.permission import EntityType


@dataclass(kw_only=True)
class Message:
    """Message from one account to another.

    Attributes:
        id: Message identifier.
        sender_id: Sending account.
        receiver_id: Receiving account.
        content: Message body.
        product_id: Optional product context.
        order_id: Optional order context.
        is_read: Set by the receiver.
        created_at: Creation timestamp.
    """

    entity_type: ClassVar[EntityType] = EntityType.MESSAGES

    id: UUID
    sender_id: UUID
    receiver_id: UUID
    content: str
    product_id: UUID | None = None
    order_id: UUID | None = None
    is_read: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
