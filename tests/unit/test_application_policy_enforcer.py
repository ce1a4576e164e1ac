"""Tests for src/application/services/policy_enforcer.py.

Runs the enforcer over the in-memory row store and the real Casbin
capability matrix, so role gate, row rules, integrity checks, cascades
and atomicity are exercised together.

Reference:
    - src/application/services/policy_enforcer.py
    - src/infrastructure/persistence/stores/in_memory_store.py
"""

from dataclasses import replace
from decimal import Decimal

import pytest
from uuid_extensions import uuid7

from src.application.dtos import PolicyRequest
from src.application.services.policy_enforcer import PolicyEnforcer
from src.core.enums import ErrorCode
from src.core.errors import AuthorizationError, IntegrityViolationError, ValidationError
from src.core.result import Failure, Success
from src.domain.entities import EducationalResource, Message, Review
from src.domain.enums import (
    EntityType,
    Operation,
    OrderStatus,
    PaymentStatus,
    UserRole,
    ViolationReason,
)
from tests.conftest import (
    create_bookmark,
    create_category,
    create_delivered_purchase,
    create_message,
    create_order,
    create_order_item,
    create_product,
    create_profile,
    create_resource,
    create_review,
)


def assert_denied(result) -> None:
    assert isinstance(result, Failure)
    assert isinstance(result.error, AuthorizationError)
    assert result.error.code is ErrorCode.PERMISSION_DENIED


def assert_violation(result, reason: ViolationReason, field: str | None = None) -> None:
    assert isinstance(result, Failure)
    assert isinstance(result.error, IntegrityViolationError)
    assert result.error.reason is reason
    if field is not None:
        assert result.error.field == field


# =============================================================================
# Reads
# =============================================================================


class TestReads:
    """Tests for read and read_many."""

    async def test_owner_reads_profile(self, enforcer, buyer):
        result = await enforcer.read(buyer, EntityType.ACCOUNTS, buyer.user_id)

        assert isinstance(result, Success)
        assert result.value.id == buyer.user_id
        assert result.value.role is UserRole.BUYER

    async def test_missing_row_and_forbidden_row_deny_identically(
        self, enforcer, buyer, other_buyer
    ):
        """A missing row cannot be told apart from one the actor may not see."""
        forbidden = await enforcer.read(buyer, EntityType.ACCOUNTS, other_buyer.user_id)
        missing = await enforcer.read(buyer, EntityType.ACCOUNTS, uuid7())

        assert_denied(forbidden)
        assert_denied(missing)
        assert forbidden.error == missing.error

    async def test_admin_lists_every_account_buyer_only_own(self, enforcer, admin, buyer):
        every = await enforcer.read_many(admin, EntityType.ACCOUNTS)
        own = await enforcer.read_many(buyer, EntityType.ACCOUNTS)

        assert len(every) == 5
        assert [profile.id for profile in own] == [buyer.user_id]

    async def test_inactive_product_hidden_from_buyer(
        self, enforcer, store, buyer, farmer, admin
    ):
        product = create_product(farmer, is_active=False)
        store.seed(product)

        assert_denied(await enforcer.read(buyer, EntityType.PRODUCTS, product.id))
        assert isinstance(await enforcer.read(farmer, EntityType.PRODUCTS, product.id), Success)
        assert isinstance(await enforcer.read(admin, EntityType.PRODUCTS, product.id), Success)
        assert await enforcer.read_many(buyer, EntityType.PRODUCTS) == []

    async def test_read_many_applies_filters(self, enforcer, store, buyer, farmer, other_farmer):
        mine = create_product(farmer)
        theirs = create_product(other_farmer)
        store.seed(mine, theirs)

        rows = await enforcer.read_many(buyer, EntityType.PRODUCTS, farmer_id=farmer.user_id)

        assert [row.id for row in rows] == [mine.id]

    async def test_order_items_visible_to_order_parties(
        self, enforcer, store, buyer, other_buyer, farmer
    ):
        product = create_product(farmer)
        order = create_order(buyer, farmer)
        item = create_order_item(order, product)
        store.seed(product, order, item)

        assert len(await enforcer.read_many(buyer, EntityType.ORDER_ITEMS)) == 1
        assert len(await enforcer.read_many(farmer, EntityType.ORDER_ITEMS)) == 1
        assert await enforcer.read_many(other_buyer, EntityType.ORDER_ITEMS) == []

    async def test_denial_is_logged_without_row_contents(
        self, enforcer, mock_logger, buyer, other_buyer
    ):
        await enforcer.read(buyer, EntityType.ACCOUNTS, other_buyer.user_id)

        event, = mock_logger.warning.call_args.args
        context = mock_logger.warning.call_args.kwargs
        assert event == "policy_denied"
        assert context["stage"] == "rule"
        assert context["entity"] == "user_profiles"
        assert "full_name" not in context


# =============================================================================
# Inserts
# =============================================================================


class TestInserts:
    """Tests for insert and insert_all."""

    async def test_farmer_lists_product(self, enforcer, store, farmer):
        product = create_product(farmer)

        result = await enforcer.insert(farmer, product)

        assert isinstance(result, Success)
        assert result.value.id == product.id
        assert store.count(EntityType.PRODUCTS) == 1

    async def test_role_gate_short_circuits(self, enforcer, store, mock_logger, buyer):
        """A buyer cannot attempt a product insert at all."""
        result = await enforcer.insert(buyer, create_product(buyer))

        assert_denied(result)
        assert mock_logger.warning.call_args.kwargs["stage"] == "role_gate"
        assert store.count(EntityType.PRODUCTS) == 0

    async def test_negative_price_rejected(self, enforcer, store, farmer):
        result = await enforcer.insert(farmer, create_product(farmer, price=Decimal("-5")))

        assert_violation(result, ViolationReason.RANGE, "price")
        assert store.count(EntityType.PRODUCTS) == 0

    async def test_nan_price_is_range_violation(self, enforcer, store, farmer):
        result = await enforcer.insert(farmer, create_product(farmer, price=Decimal("NaN")))

        assert_violation(result, ViolationReason.RANGE, "price")
        assert store.count(EntityType.PRODUCTS) == 0

    async def test_missing_category_is_reference_violation(self, enforcer, farmer):
        product = create_product(farmer, category_id=uuid7())

        result = await enforcer.insert(farmer, product)

        assert_violation(result, ViolationReason.REFERENCE, "category_id")
        assert result.error.code is ErrorCode.INTEGRITY_REFERENCE_VIOLATION

    async def test_duplicate_primary_key_is_constraint_violation(self, enforcer, farmer):
        product = create_product(farmer)
        await enforcer.insert(farmer, product)

        result = await enforcer.insert(farmer, product)

        assert_violation(result, ViolationReason.CONSTRAINT)

    async def test_denial_reported_before_integrity(self, enforcer, farmer, other_farmer):
        """An unauthorized write never reveals integrity details."""
        product = create_product(other_farmer, price=Decimal("-5"))

        assert_denied(await enforcer.insert(farmer, product))

    async def test_bookmark_unique_per_user_and_resource(self, enforcer, store, buyer):
        resource = create_resource()
        store.seed(resource)

        first = await enforcer.insert(buyer, create_bookmark(buyer, resource))
        second = await enforcer.insert(buyer, create_bookmark(buyer, resource))

        assert isinstance(first, Success)
        assert_violation(second, ViolationReason.UNIQUENESS, "user_id,resource_id")

    async def test_order_with_items_inserted_atomically(
        self, enforcer, store, buyer, farmer
    ):
        product = create_product(farmer)
        store.seed(product)
        order = create_order(buyer, farmer, total_amount=Decimal("100.00"))
        item = create_order_item(order, product, quantity=2)

        result = await enforcer.insert_all(buyer, [order, item])

        assert isinstance(result, Success)
        assert [row.id for row in result.value] == [order.id, item.id]
        assert store.count(EntityType.ORDERS) == 1
        assert store.count(EntityType.ORDER_ITEMS) == 1

    async def test_order_inserted_as_delivered_rejected(
        self, enforcer, store, buyer, farmer
    ):
        """A delivered order cannot be created, so it cannot back a review."""
        product = create_product(farmer)
        store.seed(product)
        order = create_order(buyer, farmer, status=OrderStatus.DELIVERED)

        result = await enforcer.insert_all(buyer, [order, create_order_item(order, product)])
        review = await enforcer.insert(buyer, create_review(buyer, product, order_id=order.id))

        assert_violation(result, ViolationReason.TRANSITION, "status")
        assert store.count(EntityType.ORDERS) == 0
        assert_denied(review)

    async def test_order_inserted_as_paid_rejected(self, enforcer, store, buyer, farmer):
        order = create_order(buyer, farmer, payment_status=PaymentStatus.COMPLETED)

        result = await enforcer.insert(buyer, order)

        assert_violation(result, ViolationReason.TRANSITION, "payment_status")
        assert store.count(EntityType.ORDERS) == 0

    async def test_subtotal_mismatch_rolls_back_whole_unit(
        self, enforcer, store, buyer, farmer
    ):
        product = create_product(farmer)
        store.seed(product)
        order = create_order(buyer, farmer, total_amount=Decimal("90.00"))
        item = create_order_item(order, product, quantity=2, subtotal=Decimal("90.00"))

        result = await enforcer.insert_all(buyer, [order, item])

        assert_violation(result, ViolationReason.CONSISTENCY, "subtotal")
        assert store.count(EntityType.ORDERS) == 0
        assert store.count(EntityType.ORDER_ITEMS) == 0

    async def test_total_mismatch_rejected(self, enforcer, store, buyer, farmer):
        product = create_product(farmer)
        store.seed(product)
        order = create_order(buyer, farmer, total_amount=Decimal("10.00"))
        item = create_order_item(order, product, quantity=2)

        result = await enforcer.insert_all(buyer, [order, item])

        assert_violation(result, ViolationReason.CONSISTENCY, "total_amount")
        assert store.count(EntityType.ORDERS) == 0

    async def test_subtotal_check_can_be_switched_off(
        self, store, role_gate, mock_logger, buyer, farmer
    ):
        lenient = PolicyEnforcer(
            store=store,
            role_gate=role_gate,
            logger=mock_logger,
            enforce_line_item_subtotal=False,
        )
        product = create_product(farmer)
        store.seed(product)
        order = create_order(buyer, farmer, total_amount=Decimal("90.00"))
        item = create_order_item(order, product, quantity=2, subtotal=Decimal("90.00"))

        assert isinstance(await lenient.insert_all(buyer, [order, item]), Success)

    async def test_denied_row_rolls_back_earlier_rows(
        self, enforcer, store, buyer, other_buyer, farmer
    ):
        product = create_product(farmer)
        foreign_order = create_order(other_buyer, farmer)
        store.seed(product, foreign_order)
        own_order = create_order(buyer, farmer)
        own_item = create_order_item(own_order, product)
        foreign_item = create_order_item(foreign_order, product)

        result = await enforcer.insert_all(buyer, [own_order, own_item, foreign_item])

        assert_denied(result)
        assert store.count(EntityType.ORDERS) == 1
        assert store.count(EntityType.ORDER_ITEMS) == 0

    async def test_insert_all_empty_is_noop(self, enforcer, buyer):
        assert await enforcer.insert_all(buyer, []) == Success(value=[])


# =============================================================================
# Reviews
# =============================================================================


class TestReviews:
    """Tests for verified-purchase reviews."""

    async def test_review_without_delivered_purchase_denied(
        self, enforcer, store, buyer, farmer
    ):
        product = create_product(farmer)
        pending = create_order(buyer, farmer)
        store.seed(product, pending, create_order_item(pending, product))

        result = await enforcer.insert(buyer, create_review(buyer, product, order_id=pending.id))

        assert_denied(result)
        assert store.count(EntityType.REVIEWS) == 0

    async def test_review_allowed_once_per_product_buyer_order(
        self, enforcer, store, buyer, farmer
    ):
        product = create_product(farmer)
        order, item = create_delivered_purchase(buyer, farmer, product)
        store.seed(product, order, item)

        first = await enforcer.insert(buyer, create_review(buyer, product, order_id=order.id))
        second = await enforcer.insert(
            buyer, create_review(buyer, product, order_id=order.id, rating=1)
        )

        assert isinstance(first, Success)
        assert isinstance(first.value, Review)
        assert first.value.is_verified_purchase is True
        assert_violation(second, ViolationReason.UNIQUENESS, "product_id,buyer_id,order_id")

    async def test_other_buyer_cannot_piggyback_on_purchase(
        self, enforcer, store, buyer, other_buyer, farmer
    ):
        product = create_product(farmer)
        order, item = create_delivered_purchase(buyer, farmer, product)
        store.seed(product, order, item)

        result = await enforcer.insert(other_buyer, create_review(other_buyer, product))

        assert_denied(result)

    async def test_review_must_cite_own_delivered_order(
        self, enforcer, store, buyer, other_buyer, farmer
    ):
        product = create_product(farmer)
        order, item = create_delivered_purchase(buyer, farmer, product)
        foreign_order, foreign_item = create_delivered_purchase(other_buyer, farmer, product)
        unrelated = create_order(buyer, farmer, status=OrderStatus.DELIVERED)
        store.seed(product, order, item, foreign_order, foreign_item, unrelated)

        for order_id in (foreign_order.id, unrelated.id, uuid7()):
            result = await enforcer.insert(
                buyer, create_review(buyer, product, order_id=order_id)
            )
            assert_denied(result)
        assert store.count(EntityType.REVIEWS) == 0

        own = await enforcer.insert(buyer, create_review(buyer, product, order_id=order.id))
        assert isinstance(own, Success)

    async def test_review_update_cannot_forge_verification(
        self, enforcer, store, buyer, farmer
    ):
        product = create_product(farmer)
        review = create_review(buyer, product)
        store.seed(product, review)

        edited = await enforcer.update(buyer, replace(review, rating=4, comment="Good"))
        forged = await enforcer.update(buyer, replace(review, is_verified_purchase=True))

        assert isinstance(edited, Success)
        assert edited.value.rating == 4
        assert_violation(forged, ViolationReason.IMMUTABLE_FIELD, "is_verified_purchase")


# =============================================================================
# Updates
# =============================================================================


class TestUpdates:
    """Tests for update."""

    async def test_role_change_denied_even_for_owner(self, enforcer, store, farmer):
        profile = create_profile(farmer)

        result = await enforcer.update(farmer, replace(profile, role=UserRole.ADMIN))

        assert_denied(result)
        stored = await enforcer.read(farmer, EntityType.ACCOUNTS, farmer.user_id)
        assert stored.value.role is UserRole.FARMER

    async def test_owner_updates_profile(self, enforcer, farmer):
        stored = await enforcer.read(farmer, EntityType.ACCOUNTS, farmer.user_id)
        profile = stored.value

        result = await enforcer.update(farmer, replace(profile, district="Nashik"))

        assert isinstance(result, Success)
        assert result.value.district == "Nashik"
        assert result.value.updated_at >= profile.updated_at

    async def test_admin_cannot_update_other_profile(self, enforcer, admin, buyer):
        stored = await enforcer.read(admin, EntityType.ACCOUNTS, buyer.user_id)
        profile = stored.value

        assert_denied(await enforcer.update(admin, replace(profile, role=UserRole.FARMER)))
        assert_denied(
            await enforcer.update(
                admin, replace(profile, full_name="Renamed", is_active=False)
            )
        )
        unchanged = await enforcer.read(buyer, EntityType.ACCOUNTS, buyer.user_id)
        assert unchanged.value == profile

    async def test_farmer_confirms_order(self, enforcer, store, buyer, farmer):
        order = create_order(buyer, farmer)
        store.seed(order)

        result = await enforcer.update(farmer, replace(order, status=OrderStatus.CONFIRMED))

        assert isinstance(result, Success)
        assert result.value.status is OrderStatus.CONFIRMED

    async def test_skipping_lifecycle_rejected(self, enforcer, store, buyer, farmer):
        order = create_order(buyer, farmer)
        store.seed(order)

        result = await enforcer.update(farmer, replace(order, status=OrderStatus.DELIVERED))

        assert_violation(result, ViolationReason.TRANSITION, "status")
        assert result.error.code is ErrorCode.INTEGRITY_TRANSITION_VIOLATION

    async def test_buyer_cannot_update_order(self, enforcer, store, buyer, farmer):
        order = create_order(buyer, farmer)
        store.seed(order)

        assert_denied(
            await enforcer.update(buyer, replace(order, status=OrderStatus.CANCELLED))
        )

    async def test_order_amount_immutable(self, enforcer, store, buyer, farmer):
        order = create_order(buyer, farmer)
        store.seed(order)

        result = await enforcer.update(farmer, replace(order, total_amount=Decimal("1")))

        assert_violation(result, ViolationReason.IMMUTABLE_FIELD, "total_amount")

    async def test_receiver_marks_read_sender_denied(self, enforcer, store, buyer, farmer):
        """Receiver may mark read; the sender's identical update is denied."""
        message = create_message(buyer, farmer)
        store.seed(message)
        proposed = replace(message, is_read=True)

        by_sender = await enforcer.update(buyer, proposed)
        by_receiver = await enforcer.update(farmer, proposed)

        assert_denied(by_sender)
        assert isinstance(by_receiver, Success)
        assert isinstance(by_receiver.value, Message)
        assert by_receiver.value.is_read is True

    async def test_update_of_missing_row_denied(self, enforcer, farmer):
        assert_denied(await enforcer.update(farmer, create_product(farmer)))


# =============================================================================
# Deletes and cascades
# =============================================================================


class TestDeletes:
    """Tests for delete and its cascades."""

    async def test_product_delete_cascades(self, enforcer, store, buyer, farmer):
        product = create_product(farmer)
        order, item = create_delivered_purchase(buyer, farmer, product)
        review = create_review(buyer, product, order_id=order.id)
        message = create_message(buyer, farmer, product_id=product.id)
        store.seed(product, order, item, review, message)

        result = await enforcer.delete(farmer, EntityType.PRODUCTS, product.id)

        assert result == Success(value=None)
        assert store.count(EntityType.ORDER_ITEMS) == 0
        assert store.count(EntityType.REVIEWS) == 0
        assert store.count(EntityType.ORDERS) == 1
        kept = await enforcer.read(buyer, EntityType.MESSAGES, message.id)
        assert kept.value.product_id is None

    async def test_account_delete_cascades(self, enforcer, store, admin, buyer, farmer):
        product = create_product(farmer)
        order = create_order(buyer, farmer)
        item = create_order_item(order, product)
        message = create_message(buyer, farmer)
        resource = create_resource(author_id=farmer.user_id)
        bookmark = create_bookmark(farmer, resource)
        store.seed(product, order, item, message, resource, bookmark)

        result = await enforcer.delete(admin, EntityType.ACCOUNTS, farmer.user_id)

        assert isinstance(result, Success)
        assert store.count(EntityType.ACCOUNTS) == 4
        for entity in (
            EntityType.PRODUCTS,
            EntityType.ORDERS,
            EntityType.ORDER_ITEMS,
            EntityType.MESSAGES,
            EntityType.BOOKMARKS,
        ):
            assert store.count(entity) == 0
        kept = await enforcer.read(admin, EntityType.RESOURCES, resource.id)
        assert isinstance(kept.value, EducationalResource)
        assert kept.value.author_id is None

    async def test_order_delete_nulls_review_and_message_links(
        self, enforcer, store, buyer, farmer
    ):
        product = create_product(farmer)
        order, item = create_delivered_purchase(buyer, farmer, product)
        review = create_review(buyer, product, order_id=order.id)
        message = create_message(buyer, farmer, order_id=order.id)
        store.seed(product, order, item, review, message)

        async with store.transaction() as session:
            await session.delete(EntityType.ORDERS, order.id)

        assert store.count(EntityType.ORDER_ITEMS) == 0
        kept_review = await enforcer.read(buyer, EntityType.REVIEWS, review.id)
        kept_message = await enforcer.read(buyer, EntityType.MESSAGES, message.id)
        assert kept_review.value.order_id is None
        assert kept_message.value.order_id is None

    async def test_category_delete_nulls_products(self, enforcer, store, admin, farmer):
        category = create_category()
        product = create_product(farmer, category_id=category.id)
        store.seed(category, product)

        await enforcer.delete(admin, EntityType.CATEGORIES, category.id)

        stored = await enforcer.read(farmer, EntityType.PRODUCTS, product.id)
        assert stored.value.category_id is None

    async def test_orders_never_deleted(self, enforcer, store, admin, buyer, farmer):
        order = create_order(buyer, farmer)
        store.seed(order)

        for actor in (admin, buyer, farmer):
            assert_denied(await enforcer.delete(actor, EntityType.ORDERS, order.id))
        assert store.count(EntityType.ORDERS) == 1

    async def test_other_farmer_cannot_delete_product(
        self, enforcer, store, farmer, other_farmer
    ):
        product = create_product(farmer)
        store.seed(product)

        assert_denied(await enforcer.delete(other_farmer, EntityType.PRODUCTS, product.id))
        assert store.count(EntityType.PRODUCTS) == 1


# =============================================================================
# Resource views
# =============================================================================


class TestRecordView:
    """Tests for record_view."""

    async def test_view_increments_counter(self, enforcer, store, buyer, farmer):
        resource = create_resource()
        store.seed(resource)

        await enforcer.record_view(buyer, resource.id)
        result = await enforcer.record_view(farmer, resource.id)

        assert isinstance(result, Success)
        assert result.value.view_count == 2

    async def test_unpublished_resource_not_counted(self, enforcer, store, buyer):
        resource = create_resource(is_published=False)
        store.seed(resource)

        assert_denied(await enforcer.record_view(buyer, resource.id))


# =============================================================================
# execute
# =============================================================================


class TestExecute:
    """Tests for PolicyRequest dispatch."""

    async def test_read_by_id(self, enforcer, buyer):
        request = PolicyRequest(
            actor=buyer,
            entity=EntityType.ACCOUNTS,
            operation=Operation.READ,
            row_id=buyer.user_id,
        )

        result = await enforcer.execute(request)

        assert isinstance(result, Success)
        assert result.value.id == buyer.user_id

    async def test_read_without_id_lists(self, enforcer, store, buyer, farmer):
        store.seed(create_message(buyer, farmer), create_message(farmer, buyer))
        request = PolicyRequest(
            actor=buyer,
            entity=EntityType.MESSAGES,
            operation=Operation.READ,
            filters={"sender_id": buyer.user_id},
        )

        result = await enforcer.execute(request)

        assert isinstance(result, Success)
        assert len(result.value) == 1

    async def test_insert_and_delete(self, enforcer, farmer):
        product = create_product(farmer)

        inserted = await enforcer.execute(
            PolicyRequest(
                actor=farmer, entity=EntityType.PRODUCTS, operation=Operation.INSERT, row=product
            )
        )
        deleted = await enforcer.execute(
            PolicyRequest(
                actor=farmer,
                entity=EntityType.PRODUCTS,
                operation=Operation.DELETE,
                row_id=product.id,
            )
        )

        assert isinstance(inserted, Success)
        assert deleted == Success(value=None)

    @pytest.mark.parametrize(
        "operation,field",
        [
            (Operation.INSERT, "row"),
            (Operation.UPDATE, "row"),
            (Operation.DELETE, "row_id"),
        ],
    )
    async def test_missing_payload_is_invalid(self, enforcer, farmer, operation, field):
        request = PolicyRequest(actor=farmer, entity=EntityType.PRODUCTS, operation=operation)

        result = await enforcer.execute(request)

        assert isinstance(result, Failure)
        assert isinstance(result.error, ValidationError)
        assert result.error.code is ErrorCode.INVALID_INPUT
        assert result.error.field == field

    async def test_row_must_match_entity(self, enforcer, farmer):
        request = PolicyRequest(
            actor=farmer,
            entity=EntityType.ORDERS,
            operation=Operation.INSERT,
            row=create_product(farmer),
        )

        result = await enforcer.execute(request)

        assert isinstance(result.error, ValidationError)
