"""Row-level policy rules.

One pure function per (entity, operation). Each takes the actor and a
PolicyContext and returns True to allow. A rule whose required row is
missing from the context denies.

Ownership model:
    - self-owned rows: accounts, products, bookmarks
    - rows shared by a fixed pair: orders (buyer/farmer), messages
      (sender/receiver)
    - shared reference data: categories, published resources
"""

from src.domain.entities import (
    Actor,
    EducationalResource,
    Message,
    Order,
    OrderItem,
    Product,
    ResourceBookmark,
    Review,
    UserProfile,
)
from src.domain.enums.user_role import UserRole
from src.domain.policies.context import PolicyContext


def always(actor: Actor, ctx: PolicyContext) -> bool:
    """Allow unconditionally (public reference data)."""
    return True


def admin_only(actor: Actor, ctx: PolicyContext) -> bool:
    """Allow administrators only."""
    return actor.is_admin


# =============================================================================
# Accounts
# =============================================================================


def account_read(actor: Actor, ctx: PolicyContext) -> bool:
    """Owner or admin."""
    row = ctx.current
    if not isinstance(row, UserProfile):
        return False
    return row.id == actor.user_id or actor.is_admin


def account_insert(actor: Actor, ctx: PolicyContext) -> bool:
    """An identity may only create its own profile, under its own role.

    Sign-up never grants admin.
    """
    row = ctx.proposed
    if not isinstance(row, UserProfile):
        return False
    return (
        row.id == actor.user_id
        and row.role == actor.role
        and row.role != UserRole.ADMIN
    )


def account_update(actor: Actor, ctx: PolicyContext) -> bool:
    """Owner only, and the role stays as stored."""
    current, proposed = ctx.current, ctx.proposed
    if not isinstance(current, UserProfile) or not isinstance(proposed, UserProfile):
        return False
    return current.id == actor.user_id and proposed.role == current.role


# Account delete is admin_only: it models removal of the identity.


# =============================================================================
# Products
# =============================================================================


def product_read(actor: Actor, ctx: PolicyContext) -> bool:
    """Owner, admin, or a buyer while the product is active."""
    row = ctx.current
    if not isinstance(row, Product):
        return False
    if row.farmer_id == actor.user_id or actor.is_admin:
        return True
    return actor.is_buyer and row.is_active


def product_insert(actor: Actor, ctx: PolicyContext) -> bool:
    """A farmer listing a product under their own id."""
    row = ctx.proposed
    if not isinstance(row, Product):
        return False
    return row.farmer_id == actor.user_id and actor.is_farmer


def product_update(actor: Actor, ctx: PolicyContext) -> bool:
    """Owner, without handing the product to someone else."""
    current, proposed = ctx.current, ctx.proposed
    if not isinstance(current, Product) or not isinstance(proposed, Product):
        return False
    return current.farmer_id == actor.user_id and proposed.farmer_id == actor.user_id


def product_delete(actor: Actor, ctx: PolicyContext) -> bool:
    """Owner only."""
    row = ctx.current
    if not isinstance(row, Product):
        return False
    return row.farmer_id == actor.user_id


# =============================================================================
# Orders
# =============================================================================


def order_read(actor: Actor, ctx: PolicyContext) -> bool:
    """Buyer or farmer on the order, or admin."""
    row = ctx.current
    if not isinstance(row, Order):
        return False
    return row.involves(actor.user_id) or actor.is_admin


def order_insert(actor: Actor, ctx: PolicyContext) -> bool:
    """A buyer placing an order as themselves."""
    row = ctx.proposed
    if not isinstance(row, Order):
        return False
    return row.buyer_id == actor.user_id and actor.is_buyer


def order_update(actor: Actor, ctx: PolicyContext) -> bool:
    """The order's farmer, keeping themselves as farmer."""
    current, proposed = ctx.current, ctx.proposed
    if not isinstance(current, Order) or not isinstance(proposed, Order):
        return False
    return current.farmer_id == actor.user_id and proposed.farmer_id == actor.user_id


# =============================================================================
# Order items
# =============================================================================


def order_item_read(actor: Actor, ctx: PolicyContext) -> bool:
    """Buyer or farmer on the parent order."""
    if not isinstance(ctx.current, OrderItem) or ctx.parent_order is None:
        return False
    return ctx.parent_order.involves(actor.user_id)


def order_item_insert(actor: Actor, ctx: PolicyContext) -> bool:
    """Buyer on the parent order."""
    if not isinstance(ctx.proposed, OrderItem) or ctx.parent_order is None:
        return False
    return ctx.parent_order.buyer_id == actor.user_id


# =============================================================================
# Reviews
# =============================================================================


def review_insert(actor: Actor, ctx: PolicyContext) -> bool:
    """A buyer reviewing, as themselves, a product they received.

    A review naming an order must be backed by that order.
    """
    row = ctx.proposed
    if not isinstance(row, Review):
        return False
    return (
        row.buyer_id == actor.user_id
        and actor.is_buyer
        and ctx.has_delivered_purchase
    )


def review_update(actor: Actor, ctx: PolicyContext) -> bool:
    """Author of the review, keeping authorship."""
    current, proposed = ctx.current, ctx.proposed
    if not isinstance(current, Review) or not isinstance(proposed, Review):
        return False
    return current.buyer_id == actor.user_id and proposed.buyer_id == actor.user_id


# =============================================================================
# Messages
# =============================================================================


def message_read(actor: Actor, ctx: PolicyContext) -> bool:
    """Sender or receiver."""
    row = ctx.current
    if not isinstance(row, Message):
        return False
    return actor.user_id in (row.sender_id, row.receiver_id)


def message_insert(actor: Actor, ctx: PolicyContext) -> bool:
    """Sender writes as themselves."""
    row = ctx.proposed
    if not isinstance(row, Message):
        return False
    return row.sender_id == actor.user_id


def message_update(actor: Actor, ctx: PolicyContext) -> bool:
    """Receiver only (marking as read)."""
    current, proposed = ctx.current, ctx.proposed
    if not isinstance(current, Message) or not isinstance(proposed, Message):
        return False
    return (
        current.receiver_id == actor.user_id
        and proposed.receiver_id == actor.user_id
    )


# =============================================================================
# Educational resources
# =============================================================================


def resource_read(actor: Actor, ctx: PolicyContext) -> bool:
    """Published, authored by the actor, or admin."""
    row = ctx.current
    if not isinstance(row, EducationalResource):
        return False
    return row.is_published or row.author_id == actor.user_id or actor.is_admin


# =============================================================================
# Bookmarks
# =============================================================================


def bookmark_owner(actor: Actor, ctx: PolicyContext) -> bool:
    """Bookmark owner for every operation.

    Checks every row present in the context, so an update cannot move a
    bookmark to another account.
    """
    rows = [row for row in (ctx.current, ctx.proposed) if row is not None]
    if not rows or not all(isinstance(row, ResourceBookmark) for row in rows):
        return False
    return all(row.user_id == actor.user_id for row in rows)
