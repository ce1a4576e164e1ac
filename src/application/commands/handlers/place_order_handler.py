"""PlaceOrder command handler.

Flow:
1. Reject an empty order
2. Merge repeated products into one line
3. Read every product through the enforcer (live price and stock)
4. Require a single farmer, listed products and enough stock
5. Build the order and its items (unit_price snapshot, subtotal,
   total_amount = sum of subtotals)
6. Insert order + items as one atomic unit
7. Return the stored order and items

Architecture:
- Application layer ONLY imports from domain layer and application services
- Authorization and integrity are delegated to PolicyEnforcer
"""

from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from uuid_extensions import uuid7

from src.application.commands.order_commands import PlaceOrder
from src.application.services.policy_enforcer import PolicyEnforcer
from src.core.enums import ErrorCode
from src.core.errors import DomainError, ValidationError
from src.core.result import Failure, Result, Success
from src.domain.entities import Order, OrderItem, Product
from src.domain.enums.permission import EntityType
from src.domain.errors import PolicyError


@dataclass
class PlacedOrder:
    """Stored order and its line items.

    Attributes:
        order: Order row.
        items: Line items, in request order.
    """

    order: Order
    items: list[OrderItem]


class PlaceOrderHandler:
    """Handler for PlaceOrder command.

    Dependencies (injected via constructor):
        - PolicyEnforcer: Authorized, validated reads and writes
    """

    def __init__(self, enforcer: PolicyEnforcer) -> None:
        """Initialize handler.

        Args:
            enforcer: Policy enforcer.
        """
        self._enforcer = enforcer

    async def handle(self, cmd: PlaceOrder) -> Result[PlacedOrder, DomainError]:
        """Handle PlaceOrder command.

        Args:
            cmd: PlaceOrder command.

        Returns:
            Success(PlacedOrder) with the committed rows.
            Failure(ValidationError) for empty, mixed-farmer, unavailable or
            out-of-stock requests; Failure(AuthorizationError |
            IntegrityViolationError) from the enforcer otherwise.
        """
        if not cmd.lines:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.INVALID_INPUT,
                    message=PolicyError.EMPTY_ORDER,
                    field="lines",
                )
            )

        quantities: dict[UUID, int] = {}
        for line in cmd.lines:
            quantities[line.product_id] = quantities.get(line.product_id, 0) + line.quantity

        products: list[Product] = []
        for product_id in quantities:
            read = await self._enforcer.read(cmd.actor, EntityType.PRODUCTS, product_id)
            if isinstance(read, Failure):
                return read
            products.append(read.value)

        if len({product.farmer_id for product in products}) > 1:
            return self._rejected(ErrorCode.MIXED_FARMER_ORDER, PolicyError.MIXED_FARMERS)

        for product in products:
            if not product.is_active:
                return self._rejected(
                    ErrorCode.PRODUCT_UNAVAILABLE, PolicyError.PRODUCT_UNAVAILABLE
                )
            if product.stock_quantity < quantities[product.id]:
                return self._rejected(
                    ErrorCode.INSUFFICIENT_STOCK, PolicyError.INSUFFICIENT_STOCK
                )

        order_id = uuid7()
        items = [
            OrderItem(
                id=uuid7(),
                order_id=order_id,
                product_id=product.id,
                quantity=quantities[product.id],
                unit_price=product.price,
                subtotal=product.price * quantities[product.id],
            )
            for product in products
        ]
        order = Order(
            id=order_id,
            buyer_id=cmd.actor.user_id,
            farmer_id=products[0].farmer_id,
            total_amount=sum((item.subtotal for item in items), Decimal("0")),
            delivery_address=cmd.delivery_address,
            notes=cmd.notes,
        )

        result = await self._enforcer.insert_all(cmd.actor, [order, *items])
        if isinstance(result, Failure):
            return result
        stored_order, *stored_items = result.value
        return Success(value=PlacedOrder(order=stored_order, items=stored_items))

    @staticmethod
    def _rejected(code: ErrorCode, message: str) -> Failure[ValidationError]:
        return Failure(error=ValidationError(code=code, message=message, field="lines"))
