"""create_marketplace_schema

Revision ID: 3f9c2d1a7b45
Revises:
Create Date: 2025-10-19 08:47:08.000000+00:00

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f9c2d1a7b45"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(mutable: bool = True) -> list[sa.Column]:
    columns = [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        )
    ]
    if mutable:
        columns.append(
            sa.Column(
                "updated_at",
                sa.DateTime(timezone=True),
                server_default=sa.text("now()"),
                nullable=False,
            )
        )
    return columns


def upgrade() -> None:
    """Create marketplace tables."""
    op.create_table(
        "user_profiles",
        sa.Column("id", sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.Column(
            "role",
            sa.String(length=20),
            nullable=False,
            comment="admin, farmer or buyer",
        ),
        sa.Column("full_name", sa.Text(), nullable=False),
        sa.Column("phone", sa.String(length=32), nullable=True),
        sa.Column(
            "language_preference",
            sa.String(length=8),
            nullable=False,
            server_default="en",
            comment="Preferred UI language code",
        ),
        sa.Column("state", sa.String(length=100), nullable=True),
        sa.Column("district", sa.String(length=100), nullable=True),
        sa.Column("profile_image_url", sa.Text(), nullable=True),
        sa.Column(
            "is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "role IN ('admin', 'farmer', 'buyer')", name="ck_user_profiles_role"
        ),
    )
    op.create_index(op.f("ix_user_profiles_role"), "user_profiles", ["role"])
    op.create_index(op.f("ix_user_profiles_created_at"), "user_profiles", ["created_at"])
    op.create_index(op.f("ix_user_profiles_state"), "user_profiles", ["state"])

    op.create_table(
        "product_categories",
        sa.Column("id", sa.Uuid(), nullable=False),
        *_timestamps(mutable=False),
        sa.Column("name_en", sa.Text(), nullable=False, comment="English name"),
        sa.Column("name_hi", sa.Text(), nullable=False, comment="Hindi name"),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("icon", sa.String(length=64), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_product_categories_created_at"), "product_categories", ["created_at"]
    )

    op.create_table(
        "products",
        sa.Column("id", sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.Column(
            "farmer_id",
            sa.Uuid(),
            nullable=False,
            comment="FK to user_profiles (owning farmer)",
        ),
        sa.Column(
            "category_id",
            sa.Uuid(),
            nullable=True,
            comment="FK to product_categories",
        ),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column(
            "price",
            sa.Numeric(precision=10, scale=2),
            nullable=False,
            comment="Unit price (INR)",
        ),
        sa.Column("unit", sa.String(length=32), server_default="kg", nullable=False),
        sa.Column(
            "stock_quantity", sa.Integer(), server_default=sa.text("0"), nullable=False
        ),
        sa.Column(
            "low_stock_threshold",
            sa.Integer(),
            server_default=sa.text("10"),
            nullable=False,
        ),
        sa.Column(
            "images",
            postgresql.ARRAY(sa.Text()),
            server_default=sa.text("'{}'"),
            nullable=False,
        ),
        sa.Column(
            "is_organic", sa.Boolean(), server_default=sa.text("false"), nullable=False
        ),
        sa.Column(
            "is_traditional",
            sa.Boolean(),
            server_default=sa.text("false"),
            nullable=False,
        ),
        sa.Column("processing_method", sa.Text(), nullable=True),
        sa.Column("shelf_life_days", sa.Integer(), nullable=True),
        sa.Column(
            "tags",
            postgresql.ARRAY(sa.Text()),
            server_default=sa.text("'{}'"),
            nullable=False,
        ),
        sa.Column(
            "is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["farmer_id"], ["user_profiles.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["category_id"], ["product_categories.id"], ondelete="SET NULL"
        ),
        sa.CheckConstraint("price >= 0", name="ck_products_price"),
        sa.CheckConstraint("stock_quantity >= 0", name="ck_products_stock_quantity"),
    )
    op.create_index(op.f("ix_products_farmer_id"), "products", ["farmer_id"])
    op.create_index(op.f("ix_products_category_id"), "products", ["category_id"])
    op.create_index(op.f("ix_products_is_active"), "products", ["is_active"])
    op.create_index(op.f("ix_products_created_at"), "products", ["created_at"])
    op.create_index(
        "idx_products_tags", "products", ["tags"], postgresql_using="gin"
    )

    op.create_table(
        "orders",
        sa.Column("id", sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.Column(
            "buyer_id",
            sa.Uuid(),
            nullable=False,
            comment="FK to user_profiles (buyer)",
        ),
        sa.Column(
            "farmer_id",
            sa.Uuid(),
            nullable=False,
            comment="FK to user_profiles (farmer)",
        ),
        sa.Column("total_amount", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column(
            "status", sa.String(length=20), server_default="pending", nullable=False
        ),
        sa.Column(
            "payment_status",
            sa.String(length=20),
            server_default="pending",
            nullable=False,
        ),
        sa.Column(
            "delivery_address",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            comment="Structured delivery address",
        ),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["buyer_id"], ["user_profiles.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["farmer_id"], ["user_profiles.id"], ondelete="CASCADE"
        ),
        sa.CheckConstraint("total_amount >= 0", name="ck_orders_total_amount"),
        sa.CheckConstraint(
            "status IN ('pending', 'confirmed', 'shipped', 'delivered', 'cancelled')",
            name="ck_orders_status",
        ),
        sa.CheckConstraint(
            "payment_status IN ('pending', 'completed', 'failed', 'refunded')",
            name="ck_orders_payment_status",
        ),
    )
    op.create_index(op.f("ix_orders_buyer_id"), "orders", ["buyer_id"])
    op.create_index(op.f("ix_orders_farmer_id"), "orders", ["farmer_id"])
    op.create_index(op.f("ix_orders_status"), "orders", ["status"])
    op.create_index(op.f("ix_orders_created_at"), "orders", ["created_at"])

    op.create_table(
        "order_items",
        sa.Column("id", sa.Uuid(), nullable=False),
        *_timestamps(mutable=False),
        sa.Column("order_id", sa.Uuid(), nullable=False),
        sa.Column("product_id", sa.Uuid(), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("unit_price", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("subtotal", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["order_id"], ["orders.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["product_id"], ["products.id"], ondelete="CASCADE"),
        sa.CheckConstraint("quantity > 0", name="ck_order_items_quantity"),
        sa.CheckConstraint("unit_price >= 0", name="ck_order_items_unit_price"),
        sa.CheckConstraint("subtotal >= 0", name="ck_order_items_subtotal"),
    )
    op.create_index(op.f("ix_order_items_order_id"), "order_items", ["order_id"])
    op.create_index(op.f("ix_order_items_product_id"), "order_items", ["product_id"])
    op.create_index(op.f("ix_order_items_created_at"), "order_items", ["created_at"])

    op.create_table(
        "reviews",
        sa.Column("id", sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.Column("product_id", sa.Uuid(), nullable=False),
        sa.Column("buyer_id", sa.Uuid(), nullable=False),
        sa.Column("order_id", sa.Uuid(), nullable=True),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("comment", sa.Text(), nullable=True),
        sa.Column(
            "is_verified_purchase",
            sa.Boolean(),
            server_default=sa.text("false"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["product_id"], ["products.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["buyer_id"], ["user_profiles.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["order_id"], ["orders.id"], ondelete="SET NULL"),
        sa.CheckConstraint("rating >= 1 AND rating <= 5", name="ck_reviews_rating"),
        sa.UniqueConstraint(
            "product_id", "buyer_id", "order_id", name="uq_reviews_product_buyer_order"
        ),
    )
    op.create_index(op.f("ix_reviews_product_id"), "reviews", ["product_id"])
    op.create_index(op.f("ix_reviews_buyer_id"), "reviews", ["buyer_id"])
    op.create_index(op.f("ix_reviews_created_at"), "reviews", ["created_at"])

    op.create_table(
        "messages",
        sa.Column("id", sa.Uuid(), nullable=False),
        *_timestamps(mutable=False),
        sa.Column("sender_id", sa.Uuid(), nullable=False),
        sa.Column("receiver_id", sa.Uuid(), nullable=False),
        sa.Column("product_id", sa.Uuid(), nullable=True),
        sa.Column("order_id", sa.Uuid(), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "is_read", sa.Boolean(), server_default=sa.text("false"), nullable=False
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["sender_id"], ["user_profiles.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["receiver_id"], ["user_profiles.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["product_id"], ["products.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["order_id"], ["orders.id"], ondelete="SET NULL"),
    )
    op.create_index(op.f("ix_messages_sender_id"), "messages", ["sender_id"])
    op.create_index(op.f("ix_messages_receiver_id"), "messages", ["receiver_id"])
    op.create_index(op.f("ix_messages_created_at"), "messages", ["created_at"])
    op.create_index(
        "idx_messages_unread",
        "messages",
        ["receiver_id"],
        postgresql_where=sa.text("is_read = false"),
    )

    op.create_table(
        "educational_resources",
        sa.Column("id", sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.Column("title_en", sa.Text(), nullable=False),
        sa.Column("title_hi", sa.Text(), nullable=False),
        sa.Column("content_en", sa.Text(), nullable=False),
        sa.Column("content_hi", sa.Text(), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=False),
        sa.Column(
            "tags",
            postgresql.ARRAY(sa.Text()),
            server_default=sa.text("'{}'"),
            nullable=False,
        ),
        sa.Column("author_id", sa.Uuid(), nullable=True),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column(
            "is_published",
            sa.Boolean(),
            server_default=sa.text("false"),
            nullable=False,
        ),
        sa.Column(
            "view_count", sa.Integer(), server_default=sa.text("0"), nullable=False
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["author_id"], ["user_profiles.id"], ondelete="SET NULL"
        ),
        sa.CheckConstraint(
            "view_count >= 0", name="ck_educational_resources_view_count"
        ),
    )
    op.create_index(
        op.f("ix_educational_resources_category"),
        "educational_resources",
        ["category"],
    )
    op.create_index(
        op.f("ix_educational_resources_is_published"),
        "educational_resources",
        ["is_published"],
    )
    op.create_index(
        op.f("ix_educational_resources_created_at"),
        "educational_resources",
        ["created_at"],
    )
    op.create_index(
        "idx_educational_resources_tags",
        "educational_resources",
        ["tags"],
        postgresql_using="gin",
    )

    op.create_table(
        "resource_bookmarks",
        sa.Column("id", sa.Uuid(), nullable=False),
        *_timestamps(mutable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("resource_id", sa.Uuid(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["user_profiles.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["resource_id"], ["educational_resources.id"], ondelete="CASCADE"
        ),
        sa.UniqueConstraint(
            "user_id", "resource_id", name="uq_resource_bookmarks_user_resource"
        ),
    )
    op.create_index(
        op.f("ix_resource_bookmarks_user_id"), "resource_bookmarks", ["user_id"]
    )
    op.create_index(
        op.f("ix_resource_bookmarks_created_at"), "resource_bookmarks", ["created_at"]
    )


def downgrade() -> None:
    """Drop marketplace tables."""
    # Dependents first; indexes go with their tables
    for table in (
        "resource_bookmarks",
        "educational_resources",
        "messages",
        "reviews",
        "order_items",
        "orders",
        "products",
        "product_categories",
        "user_profiles",
    ):
        op.drop_table(table)
