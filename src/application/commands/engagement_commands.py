"""Review, messaging and resource commands (CQRS write operations)."""

from dataclasses import dataclass
from uuid import UUID

from src.domain.entities import Actor


@dataclass(frozen=True, kw_only=True)
class SubmitReview:
    """Buyer reviews a product they received.

    Attributes:
        actor: Reviewing buyer.
        product_id: Reviewed product.
        rating: 1 to 5.
        order_id: Delivered order the review refers to.
        comment: Optional text.
    """

    actor: Actor
    product_id: UUID
    rating: int
    order_id: UUID | None = None
    comment: str | None = None


@dataclass(frozen=True, kw_only=True)
class SendMessage:
    """Send a direct message, optionally about a product or order.

    Attributes:
        actor: Sender.
        receiver_id: Receiving account.
        content: Message body.
        product_id: Optional product context.
        order_id: Optional order context.
    """

    actor: Actor
    receiver_id: UUID
    content: str
    product_id: UUID | None = None
    order_id: UUID | None = None


@dataclass(frozen=True, kw_only=True)
class MarkMessageRead:
    """Receiver marks a message as read.

    Attributes:
        actor: Receiver.
        message_id: Message to mark.
    """

    actor: Actor
    message_id: UUID


@dataclass(frozen=True, kw_only=True)
class RecordResourceView:
    """Count one view of an educational resource.

    Attributes:
        actor: Viewer (any actor who may read the resource).
        resource_id: Viewed resource.
    """

    actor: Actor
    resource_id: UUID
