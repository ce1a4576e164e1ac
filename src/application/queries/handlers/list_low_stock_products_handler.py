"""ListLowStockProducts query handler."""

from src.application.queries.marketplace_queries import ListLowStockProducts
from src.application.services.policy_enforcer import PolicyEnforcer
from src.core.errors import DomainError
from src.core.result import Result, Success
from src.domain.entities import Product
from src.domain.enums.permission import EntityType


class ListLowStockProductsHandler:
    """Handler for ListLowStockProducts query.

    Lists the actor's own products whose stock is at or below their
    low_stock_threshold, for the farmer dashboard alert.
    """

    def __init__(self, enforcer: PolicyEnforcer) -> None:
        self._enforcer = enforcer

    async def handle(
        self, query: ListLowStockProducts
    ) -> Result[list[Product], DomainError]:
        """Handle ListLowStockProducts query.

        Returns:
            Success(list[Product]) ordered by stock_quantity ascending.
        """
        rows = await self._enforcer.read_many(
            query.actor, EntityType.PRODUCTS, farmer_id=query.actor.user_id
        )
        low = [row for row in rows if isinstance(row, Product) and row.is_low_stock()]
        low.sort(key=lambda product: product.stock_quantity)
        return Success(value=low)
