"""Message database model.

Product and order links are weak references (SET NULL on delete).
"""

from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseModel


class Message(BaseModel):
    """Direct message between two accounts.

    Indexes:
        - ix_messages_sender_id / ix_messages_receiver_id: Inbox lookups
        - idx_messages_unread: Partial index on unread messages (PostgreSQL)
    """

    __tablename__ = "messages"

    sender_id: Mapped[UUID] = mapped_column(
        ForeignKey("user_profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    receiver_id: Mapped[UUID] = mapped_column(
        ForeignKey("user_profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    product_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("products.id", ondelete="SET NULL"),
        nullable=True,
    )

    order_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("orders.id", ondelete="SET NULL"),
        nullable=True,
    )

    content: Mapped[str] = mapped_column(Text, nullable=False)

    is_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (
        Index(
            "idx_messages_unread",
            "receiver_id",
            postgresql_where="is_read = false",
        ),
    )
