"""Marketplace queries (CQRS read operations).

Queries are immutable dataclasses with question-like names. They never
change state; handlers return only rows the actor may read.
"""

from dataclasses import dataclass
from uuid import UUID

from src.domain.entities import Actor


@dataclass(frozen=True, kw_only=True)
class ListCatalog:
    """Buyer-facing product catalog.

    Only products that are readable, active and in stock are listed.

    Attributes:
        actor: Browsing actor.
        search: Case-insensitive term matched against name and description.
        organic_only: Only organic products.
        traditional_only: Only traditionally made products.
        category_id: Only products of this category.

    Example:
        >>> query = ListCatalog(actor=buyer, search="ghee", organic_only=True)
        >>> result = await handler.handle(query)
    """

    actor: Actor
    search: str | None = None
    organic_only: bool = False
    traditional_only: bool = False
    category_id: UUID | None = None


@dataclass(frozen=True, kw_only=True)
class GetInbox:
    """Messages sent and received by the actor.

    Attributes:
        actor: Inbox owner.
    """

    actor: Actor


@dataclass(frozen=True, kw_only=True)
class ListLowStockProducts:
    """Farmer's own products at or below their low-stock threshold.

    Attributes:
        actor: Farmer.
    """

    actor: Actor
