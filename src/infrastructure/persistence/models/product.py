"""Product database model.

Architecture:
    - Products belong to a farmer (CASCADE on account delete)
    - Category is a weak reference (SET NULL on category delete)
    - images/tags are text[] on PostgreSQL, JSON lists elsewhere
"""

from decimal import Decimal
from uuid import UUID

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel, TextArray


class Product(BaseMutableModel):
    """Product listing owned by a farmer.

    Indexes:
        - ix_products_farmer_id: Farmer dashboard lookups
        - ix_products_category_id: Category filter
        - ix_products_is_active: Catalog visibility
        - idx_products_tags: GIN index on tags (PostgreSQL)
    """

    __tablename__ = "products"

    farmer_id: Mapped[UUID] = mapped_column(
        ForeignKey("user_profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="FK to user_profiles (owning farmer)",
    )

    category_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("product_categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
        comment="FK to product_categories",
    )

    name: Mapped[str] = mapped_column(Text, nullable=False)

    description: Mapped[str] = mapped_column(Text, nullable=False)

    price: Mapped[Decimal] = mapped_column(
        Numeric(precision=10, scale=2),
        nullable=False,
        comment="Unit price (INR)",
    )

    unit: Mapped[str] = mapped_column(String(32), nullable=False, default="kg")

    stock_quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    low_stock_threshold: Mapped[int] = mapped_column(
        Integer, nullable=False, default=10
    )

    images: Mapped[list[str]] = mapped_column(TextArray, nullable=False, default=list)

    is_organic: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    is_traditional: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )

    processing_method: Mapped[str | None] = mapped_column(Text, nullable=True)

    shelf_life_days: Mapped[int | None] = mapped_column(Integer, nullable=True)

    tags: Mapped[list[str]] = mapped_column(TextArray, nullable=False, default=list)

    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, index=True
    )

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price"),
        CheckConstraint("stock_quantity >= 0", name="ck_products_stock_quantity"),
        Index("idx_products_tags", "tags", postgresql_using="gin"),
    )
