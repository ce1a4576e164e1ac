"""Order database model.

Status and payment status are stored as lowercase strings and mapped to
OrderStatus / PaymentStatus by the row store.
"""

from decimal import Decimal
from typing import Any
from uuid import UUID

from sqlalchemy import CheckConstraint, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel, JSONDocument


class Order(BaseMutableModel):
    """Order between one buyer and one farmer.

    Indexes:
        - ix_orders_buyer_id / ix_orders_farmer_id: Dashboard lookups
        - ix_orders_status: Status filters
    """

    __tablename__ = "orders"

    buyer_id: Mapped[UUID] = mapped_column(
        ForeignKey("user_profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="FK to user_profiles (buyer)",
    )

    farmer_id: Mapped[UUID] = mapped_column(
        ForeignKey("user_profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="FK to user_profiles (farmer)",
    )

    total_amount: Mapped[Decimal] = mapped_column(
        Numeric(precision=10, scale=2), nullable=False
    )

    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="pending", index=True
    )

    payment_status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="pending"
    )

    delivery_address: Mapped[dict[str, Any]] = mapped_column(
        JSONDocument,
        nullable=False,
        comment="Structured delivery address",
    )

    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        CheckConstraint("total_amount >= 0", name="ck_orders_total_amount"),
        CheckConstraint(
            "status IN ('pending', 'confirmed', 'shipped', 'delivered', 'cancelled')",
            name="ck_orders_status",
        ),
        CheckConstraint(
            "payment_status IN ('pending', 'completed', 'failed', 'refunded')",
            name="ck_orders_payment_status",
        ),
    )
