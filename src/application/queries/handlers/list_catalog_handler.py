"""ListCatalog query handler.

Architecture:
- Returns Result[DTO, DomainError] (explicit error handling)
- Visibility comes from the product read rule (row filter); the catalog
  narrows further to listed products and the requested filters
"""

from dataclasses import dataclass
from typing import Any

from src.application.queries.marketplace_queries import ListCatalog
from src.application.services.policy_enforcer import PolicyEnforcer
from src.core.errors import DomainError
from src.core.result import Result, Success
from src.domain.entities import Product
from src.domain.enums.permission import EntityType


@dataclass
class CatalogResult:
    """Catalog listing.

    Attributes:
        products: Listed products, newest first.
        total_count: Number of products listed.
    """

    products: list[Product]
    total_count: int


class ListCatalogHandler:
    """Handler for ListCatalog query."""

    def __init__(self, enforcer: PolicyEnforcer) -> None:
        self._enforcer = enforcer

    async def handle(self, query: ListCatalog) -> Result[CatalogResult, DomainError]:
        """Handle ListCatalog query.

        Returns:
            Success(CatalogResult). Never fails: unreadable rows are dropped.
        """
        filters: dict[str, Any] = {"is_active": True}
        if query.organic_only:
            filters["is_organic"] = True
        if query.traditional_only:
            filters["is_traditional"] = True
        if query.category_id is not None:
            filters["category_id"] = query.category_id

        rows = await self._enforcer.read_many(query.actor, EntityType.PRODUCTS, **filters)
        products = [
            product
            for product in rows
            if isinstance(product, Product)
            and product.is_listed()
            and (not query.search or product.matches_search(query.search))
        ]
        return Success(value=CatalogResult(products=products, total_count=len(products)))
