"""Tests for PlaceOrderHandler and UpdateOrderStatusHandler.

Reference:
    - src/application/commands/handlers/place_order_handler.py
    - src/application/commands/handlers/update_order_status_handler.py
"""

from decimal import Decimal

import pytest

from src.application.commands import OrderLine, PlaceOrder, UpdateOrderStatus
from src.application.commands.handlers.place_order_handler import (
    PlacedOrder,
    PlaceOrderHandler,
)
from src.application.commands.handlers.update_order_status_handler import (
    UpdateOrderStatusHandler,
)
from src.core.enums import ErrorCode
from src.core.errors import AuthorizationError, IntegrityViolationError, ValidationError
from src.core.result import Failure, Success
from src.domain.enums import EntityType, OrderStatus, PaymentStatus, ViolationReason
from tests.conftest import create_order, create_product

ADDRESS = {"line1": "12 Market Road", "city": "Pune", "pincode": "411001"}


@pytest.fixture
def place_order(enforcer) -> PlaceOrderHandler:
    return PlaceOrderHandler(enforcer=enforcer)


@pytest.fixture
def update_status(enforcer) -> UpdateOrderStatusHandler:
    return UpdateOrderStatusHandler(enforcer=enforcer)


def order_command(buyer, *lines: tuple) -> PlaceOrder:
    return PlaceOrder(
        actor=buyer,
        lines=[OrderLine(product_id=product.id, quantity=qty) for product, qty in lines],
        delivery_address=ADDRESS,
    )


# =============================================================================
# PlaceOrder
# =============================================================================


class TestPlaceOrderHandler:
    """Tests for PlaceOrderHandler."""

    async def test_two_at_fifty_totals_one_hundred(self, place_order, store, buyer, farmer):
        product = create_product(farmer, price=Decimal("50.00"))
        store.seed(product)

        result = await place_order.handle(order_command(buyer, (product, 2)))

        assert isinstance(result, Success)
        placed = result.value
        assert isinstance(placed, PlacedOrder)
        assert placed.order.total_amount == Decimal("100.00")
        assert placed.order.status is OrderStatus.PENDING
        assert placed.order.payment_status is PaymentStatus.PENDING
        assert placed.order.farmer_id == farmer.user_id
        assert placed.order.delivery_address == ADDRESS
        item, = placed.items
        assert item.order_id == placed.order.id
        assert item.unit_price == Decimal("50.00")
        assert item.subtotal == Decimal("100.00")
        assert store.count(EntityType.ORDERS) == 1
        assert store.count(EntityType.ORDER_ITEMS) == 1

    async def test_total_sums_every_line(self, place_order, store, buyer, farmer):
        ghee = create_product(farmer, price=Decimal("50.00"))
        pickle = create_product(farmer, name="Mango Pickle", price=Decimal("12.50"))
        store.seed(ghee, pickle)

        result = await place_order.handle(order_command(buyer, (ghee, 1), (pickle, 4)))

        assert result.value.order.total_amount == Decimal("100.00")
        assert [item.product_id for item in result.value.items] == [ghee.id, pickle.id]

    async def test_repeated_product_merged_into_one_line(
        self, place_order, store, buyer, farmer
    ):
        product = create_product(farmer)
        store.seed(product)

        result = await place_order.handle(order_command(buyer, (product, 1), (product, 2)))

        item, = result.value.items
        assert item.quantity == 3

    async def test_stock_left_untouched(self, place_order, enforcer, store, buyer, farmer):
        product = create_product(farmer, stock_quantity=5)
        store.seed(product)

        await place_order.handle(order_command(buyer, (product, 2)))

        stored = await enforcer.read(farmer, EntityType.PRODUCTS, product.id)
        assert stored.value.stock_quantity == 5

    async def test_empty_order_rejected(self, place_order, buyer):
        result = await place_order.handle(order_command(buyer))

        assert isinstance(result, Failure)
        assert isinstance(result.error, ValidationError)
        assert result.error.code is ErrorCode.INVALID_INPUT

    async def test_mixed_farmers_rejected(
        self, place_order, store, buyer, farmer, other_farmer
    ):
        mine = create_product(farmer)
        theirs = create_product(other_farmer)
        store.seed(mine, theirs)

        result = await place_order.handle(order_command(buyer, (mine, 1), (theirs, 1)))

        assert isinstance(result, Failure)
        assert result.error.code is ErrorCode.MIXED_FARMER_ORDER
        assert store.count(EntityType.ORDERS) == 0

    @pytest.mark.parametrize("stock", [0, 1])
    async def test_insufficient_stock_rejected(
        self, place_order, store, buyer, farmer, stock
    ):
        product = create_product(farmer, stock_quantity=stock)
        store.seed(product)

        result = await place_order.handle(order_command(buyer, (product, 2)))

        assert isinstance(result, Failure)
        assert result.error.code is ErrorCode.INSUFFICIENT_STOCK
        assert store.count(EntityType.ORDERS) == 0

    async def test_inactive_product_looks_missing(self, place_order, store, buyer, farmer):
        product = create_product(farmer, is_active=False)
        store.seed(product)

        result = await place_order.handle(order_command(buyer, (product, 1)))

        assert isinstance(result, Failure)
        assert isinstance(result.error, AuthorizationError)

    async def test_farmer_cannot_place_orders(self, place_order, store, farmer):
        product = create_product(farmer)
        store.seed(product)

        result = await place_order.handle(order_command(farmer, (product, 1)))

        assert isinstance(result, Failure)
        assert isinstance(result.error, AuthorizationError)
        assert store.count(EntityType.ORDERS) == 0

    async def test_zero_quantity_is_range_violation(self, place_order, store, buyer, farmer):
        product = create_product(farmer)
        store.seed(product)

        result = await place_order.handle(order_command(buyer, (product, 0)))

        assert isinstance(result.error, IntegrityViolationError)
        assert result.error.reason is ViolationReason.RANGE
        assert store.count(EntityType.ORDERS) == 0


# =============================================================================
# UpdateOrderStatus
# =============================================================================


class TestUpdateOrderStatusHandler:
    """Tests for UpdateOrderStatusHandler."""

    async def test_farmer_walks_full_lifecycle(self, update_status, store, buyer, farmer):
        order = create_order(buyer, farmer)
        store.seed(order)

        for status in (OrderStatus.CONFIRMED, OrderStatus.SHIPPED, OrderStatus.DELIVERED):
            result = await update_status.handle(
                UpdateOrderStatus(actor=farmer, order_id=order.id, status=status)
            )
            assert isinstance(result, Success)
            assert result.value.status is status

    async def test_payment_only_keeps_status(self, update_status, store, buyer, farmer):
        order = create_order(buyer, farmer)
        store.seed(order)

        result = await update_status.handle(
            UpdateOrderStatus(
                actor=farmer,
                order_id=order.id,
                payment_status=PaymentStatus.COMPLETED,
            )
        )

        assert result.value.status is OrderStatus.PENDING
        assert result.value.payment_status is PaymentStatus.COMPLETED

    async def test_skipping_shipment_rejected(self, update_status, store, buyer, farmer):
        order = create_order(buyer, farmer, status=OrderStatus.CONFIRMED)
        store.seed(order)

        result = await update_status.handle(
            UpdateOrderStatus(actor=farmer, order_id=order.id, status=OrderStatus.DELIVERED)
        )

        assert isinstance(result.error, IntegrityViolationError)
        assert result.error.reason is ViolationReason.TRANSITION

    async def test_cancelled_order_is_final(self, update_status, store, buyer, farmer):
        order = create_order(buyer, farmer, status=OrderStatus.CANCELLED)
        store.seed(order)

        result = await update_status.handle(
            UpdateOrderStatus(actor=farmer, order_id=order.id, status=OrderStatus.PENDING)
        )

        assert result.error.reason is ViolationReason.TRANSITION

    async def test_buyer_cannot_change_status(self, update_status, store, buyer, farmer):
        order = create_order(buyer, farmer)
        store.seed(order)

        result = await update_status.handle(
            UpdateOrderStatus(actor=buyer, order_id=order.id, status=OrderStatus.CANCELLED)
        )

        assert isinstance(result.error, AuthorizationError)

    async def test_other_farmer_cannot_see_order(
        self, update_status, store, buyer, farmer, other_farmer
    ):
        order = create_order(buyer, farmer)
        store.seed(order)

        result = await update_status.handle(
            UpdateOrderStatus(
                actor=other_farmer, order_id=order.id, status=OrderStatus.CONFIRMED
            )
        )

        assert isinstance(result.error, AuthorizationError)
