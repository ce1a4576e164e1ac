"""Permission components for row-level authorization.

A policy check is expressed as (actor, entity, operation, row). EntityType
values double as the persisted table names; Operation values match the
Casbin policy format.

Usage:
    from src.domain.enums import EntityType, Operation

    decision = evaluate(actor, EntityType.PRODUCTS, Operation.UPDATE, context)
"""

from enum import Enum


class EntityType(str, Enum):
    """Entities (tables) protected by the policy model."""

    ACCOUNTS = "user_profiles"
    """Account profiles with roles."""

    CATEGORIES = "product_categories"
    """Product categories (reference data)."""

    PRODUCTS = "products"
    """Product listings owned by farmers."""

    ORDERS = "orders"
    """Orders between one buyer and one farmer."""

    ORDER_ITEMS = "order_items"
    """Line items of an order."""

    REVIEWS = "reviews"
    """Product reviews by buyers."""

    MESSAGES = "messages"
    """Direct messages between accounts."""

    RESOURCES = "educational_resources"
    """Admin-authored educational content."""

    BOOKMARKS = "resource_bookmarks"
    """Per-account bookmarks of educational resources."""

    @classmethod
    def values(cls) -> list[str]:
        """Get all entity values as strings.

        Returns:
            list[str]: List of table names.
        """
        return [entity.value for entity in cls]


class Operation(str, Enum):
    """Operations that can be requested on a row."""

    READ = "read"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"

    @property
    def is_write(self) -> bool:
        """Whether the operation mutates the store."""
        return self is not Operation.READ

    @classmethod
    def values(cls) -> list[str]:
        """Get all operation values as strings.

        Returns:
            list[str]: List of operation values.
        """
        return [operation.value for operation in cls]


class Decision(str, Enum):
    """Binary outcome of policy evaluation."""

    ALLOW = "allow"
    DENY = "deny"

    @classmethod
    def of(cls, allowed: bool) -> "Decision":
        """Convert a boolean rule outcome into a Decision."""
        return cls.ALLOW if allowed else cls.DENY
