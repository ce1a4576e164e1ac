"""Declarative integrity metadata for every entity.

Single source of truth for the structural invariants the persisted layout
enforces: foreign keys with their delete behavior, unique keys, numeric
ranges, required text fields and the fields an update may change. The
integrity validators, the in-memory store and the SQLAlchemy models all
describe the same constraints.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from src.domain.enums.permission import EntityType


class OnDelete(str, Enum):
    """Effect of deleting a referenced row on the referencing rows."""

    CASCADE = "CASCADE"
    SET_NULL = "SET NULL"


@dataclass(frozen=True, slots=True)
class Reference:
    """Foreign key from ``field`` to the id of ``target``."""

    field: str
    target: EntityType
    on_delete: OnDelete


@dataclass(frozen=True, slots=True)
class Bound:
    """Inclusive numeric bound for a field (None = unbounded)."""

    field: str
    minimum: Decimal | int | None = None
    maximum: Decimal | int | None = None

    def admits(self, value: Decimal | int | float) -> bool:
        """Check if value is finite and lies within the bound."""
        if not Decimal(value).is_finite():
            return False
        if self.minimum is not None and value < self.minimum:
            return False
        if self.maximum is not None and value > self.maximum:
            return False
        return True

    def describe(self) -> str:
        """Human-readable form of the bound (e.g. ``rating in [1, 5]``)."""
        if self.maximum is None:
            return f"{self.field} must be >= {self.minimum}"
        return f"{self.field} must be in [{self.minimum}, {self.maximum}]"


REFERENCES: dict[EntityType, tuple[Reference, ...]] = {
    EntityType.ACCOUNTS: (),
    EntityType.CATEGORIES: (),
    EntityType.PRODUCTS: (
        Reference("farmer_id", EntityType.ACCOUNTS, OnDelete.CASCADE),
        Reference("category_id", EntityType.CATEGORIES, OnDelete.SET_NULL),
    ),
    EntityType.ORDERS: (
        Reference("buyer_id", EntityType.ACCOUNTS, OnDelete.CASCADE),
        Reference("farmer_id", EntityType.ACCOUNTS, OnDelete.CASCADE),
    ),
    EntityType.ORDER_ITEMS: (
        Reference("order_id", EntityType.ORDERS, OnDelete.CASCADE),
        Reference("product_id", EntityType.PRODUCTS, OnDelete.CASCADE),
    ),
    EntityType.REVIEWS: (
        Reference("product_id", EntityType.PRODUCTS, OnDelete.CASCADE),
        Reference("buyer_id", EntityType.ACCOUNTS, OnDelete.CASCADE),
        Reference("order_id", EntityType.ORDERS, OnDelete.SET_NULL),
    ),
    EntityType.MESSAGES: (
        Reference("sender_id", EntityType.ACCOUNTS, OnDelete.CASCADE),
        Reference("receiver_id", EntityType.ACCOUNTS, OnDelete.CASCADE),
        Reference("product_id", EntityType.PRODUCTS, OnDelete.SET_NULL),
        Reference("order_id", EntityType.ORDERS, OnDelete.SET_NULL),
    ),
    EntityType.RESOURCES: (
        Reference("author_id", EntityType.ACCOUNTS, OnDelete.SET_NULL),
    ),
    EntityType.BOOKMARKS: (
        Reference("user_id", EntityType.ACCOUNTS, OnDelete.CASCADE),
        Reference("resource_id", EntityType.RESOURCES, OnDelete.CASCADE),
    ),
}

# SQL semantics: a NULL component never collides with another row.
UNIQUE_KEYS: dict[EntityType, tuple[tuple[str, ...], ...]] = {
    EntityType.REVIEWS: (("product_id", "buyer_id", "order_id"),),
    EntityType.BOOKMARKS: (("user_id", "resource_id"),),
}

BOUNDS: dict[EntityType, tuple[Bound, ...]] = {
    EntityType.PRODUCTS: (
        Bound("price", minimum=Decimal("0")),
        Bound("stock_quantity", minimum=0),
    ),
    EntityType.ORDERS: (Bound("total_amount", minimum=Decimal("0")),),
    EntityType.ORDER_ITEMS: (
        Bound("quantity", minimum=1),
        Bound("unit_price", minimum=Decimal("0")),
        Bound("subtotal", minimum=Decimal("0")),
    ),
    EntityType.REVIEWS: (Bound("rating", minimum=1, maximum=5),),
    EntityType.RESOURCES: (Bound("view_count", minimum=0),),
}

REQUIRED_TEXT: dict[EntityType, tuple[str, ...]] = {
    EntityType.ACCOUNTS: ("full_name",),
    EntityType.CATEGORIES: ("name_en", "name_hi"),
    EntityType.PRODUCTS: ("name", "description", "unit"),
    EntityType.MESSAGES: ("content",),
    EntityType.RESOURCES: ("title_en", "title_hi", "content_en", "content_hi", "category"),
}

ALWAYS_IMMUTABLE: frozenset[str] = frozenset({"id", "created_at"})

# Fields an update may change (updated_at is maintained by the store);
# entities absent here may change any field other than ALWAYS_IMMUTABLE.
# An empty set means rows are never updated.
UPDATABLE_FIELDS: dict[EntityType, frozenset[str]] = {
    EntityType.ORDERS: frozenset({"status", "payment_status", "notes"}),
    EntityType.ORDER_ITEMS: frozenset(),
    EntityType.REVIEWS: frozenset({"rating", "comment"}),
    EntityType.MESSAGES: frozenset({"is_read"}),
}


def referencing(target: EntityType) -> list[tuple[EntityType, Reference]]:
    """List every (entity, reference) pair pointing at target.

    Args:
        target: Referenced entity.

    Returns:
        Pairs in declaration order.
    """
    return [
        (entity, reference)
        for entity, references in REFERENCES.items()
        for reference in references
        if reference.target == target
    ]
