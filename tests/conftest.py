"""Pytest configuration and shared fixtures.

Provides:
1. Actors for each role (admin, two farmers, two buyers)
2. Row factories with sensible defaults for every entity
3. A PolicyEnforcer over the in-memory row store and the real Casbin
   capability matrix, with the accounts already seeded
"""

from decimal import Decimal
from typing import Any
from unittest.mock import MagicMock
from uuid import UUID

import pytest
from uuid_extensions import uuid7

from src.application.services.policy_enforcer import PolicyEnforcer
from src.domain.entities import (
    Actor,
    Category,
    EducationalResource,
    Message,
    Order,
    OrderItem,
    Product,
    ResourceBookmark,
    Review,
    UserProfile,
)
from src.domain.enums import OrderStatus, UserRole
from src.infrastructure.authorization.casbin_role_gate import CasbinRoleGate
from src.infrastructure.persistence.stores.in_memory_store import InMemoryRowStore


# =============================================================================
# Row factories
# =============================================================================


def create_actor(role: UserRole, user_id: UUID | None = None) -> Actor:
    """Helper to create an Actor (fresh uuid7 id unless given)."""
    return Actor(user_id=user_id or uuid7(), role=role)


def create_profile(actor: Actor, **overrides: Any) -> UserProfile:
    """Helper to create the profile row of an actor."""
    values: dict[str, Any] = {
        "id": actor.user_id,
        "role": actor.role,
        "full_name": f"Test {actor.role.value.title()}",
        "state": "Maharashtra",
    }
    return UserProfile(**(values | overrides))


def create_category(**overrides: Any) -> Category:
    """Helper to create a Category."""
    values: dict[str, Any] = {
        "id": uuid7(),
        "name_en": "Dairy Products",
        "name_hi": "डेयरी उत्पाद",
        "icon": "dairy",
    }
    return Category(**(values | overrides))


def create_product(farmer: Actor, **overrides: Any) -> Product:
    """Helper to create an active, stocked Product owned by farmer."""
    values: dict[str, Any] = {
        "id": uuid7(),
        "farmer_id": farmer.user_id,
        "name": "Desi Cow Ghee",
        "description": "Hand-churned ghee from grass-fed cows",
        "price": Decimal("50.00"),
        "unit": "kg",
        "stock_quantity": 25,
    }
    return Product(**(values | overrides))


def create_order(buyer: Actor, farmer: Actor, **overrides: Any) -> Order:
    """Helper to create a pending Order between buyer and farmer."""
    values: dict[str, Any] = {
        "id": uuid7(),
        "buyer_id": buyer.user_id,
        "farmer_id": farmer.user_id,
        "total_amount": Decimal("100.00"),
        "delivery_address": {"city": "Pune", "pincode": "411001"},
    }
    return Order(**(values | overrides))


def create_order_item(order: Order, product: Product, quantity: int = 2, **overrides: Any) -> OrderItem:
    """Helper to create a consistent OrderItem (subtotal = quantity x price)."""
    values: dict[str, Any] = {
        "id": uuid7(),
        "order_id": order.id,
        "product_id": product.id,
        "quantity": quantity,
        "unit_price": product.price,
        "subtotal": product.price * quantity,
    }
    return OrderItem(**(values | overrides))


def create_review(buyer: Actor, product: Product, **overrides: Any) -> Review:
    """Helper to create a Review."""
    values: dict[str, Any] = {
        "id": uuid7(),
        "product_id": product.id,
        "buyer_id": buyer.user_id,
        "rating": 5,
        "comment": "Excellent quality",
    }
    return Review(**(values | overrides))


def create_message(sender: Actor, receiver: Actor, **overrides: Any) -> Message:
    """Helper to create an unread Message."""
    values: dict[str, Any] = {
        "id": uuid7(),
        "sender_id": sender.user_id,
        "receiver_id": receiver.user_id,
        "content": "Is the ghee available in 500g packs?",
    }
    return Message(**(values | overrides))


def create_resource(**overrides: Any) -> EducationalResource:
    """Helper to create a published EducationalResource."""
    values: dict[str, Any] = {
        "id": uuid7(),
        "title_en": "Food Safety and Packaging",
        "title_hi": "खाद्य सुरक्षा और पैकेजिंग",
        "content_en": "Essential guidelines for safe food processing.",
        "content_hi": "सुरक्षित खाद्य प्रसंस्करण के लिए आवश्यक दिशानिर्देश।",
        "category": "Production",
        "tags": ["safety", "packaging"],
        "is_published": True,
    }
    return EducationalResource(**(values | overrides))


def create_bookmark(user: Actor, resource: EducationalResource, **overrides: Any) -> ResourceBookmark:
    """Helper to create a ResourceBookmark."""
    values: dict[str, Any] = {
        "id": uuid7(),
        "user_id": user.user_id,
        "resource_id": resource.id,
    }
    return ResourceBookmark(**(values | overrides))


def create_delivered_purchase(
    buyer: Actor, farmer: Actor, product: Product
) -> tuple[Order, OrderItem]:
    """Helper to create a delivered order containing product."""
    order = create_order(buyer, farmer, status=OrderStatus.DELIVERED)
    return order, create_order_item(order, product)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def admin() -> Actor:
    return create_actor(UserRole.ADMIN)


@pytest.fixture
def farmer() -> Actor:
    return create_actor(UserRole.FARMER)


@pytest.fixture
def other_farmer() -> Actor:
    return create_actor(UserRole.FARMER)


@pytest.fixture
def buyer() -> Actor:
    return create_actor(UserRole.BUYER)


@pytest.fixture
def other_buyer() -> Actor:
    return create_actor(UserRole.BUYER)


@pytest.fixture
def mock_logger() -> MagicMock:
    """Logger double recording every call."""
    return MagicMock()


@pytest.fixture
def role_gate(mock_logger: MagicMock) -> CasbinRoleGate:
    """Role gate loaded from the bundled capability matrix."""
    return CasbinRoleGate.from_files(mock_logger)


@pytest.fixture
def store(admin, farmer, other_farmer, buyer, other_buyer) -> InMemoryRowStore:
    """In-memory store with one profile per fixture actor."""
    row_store = InMemoryRowStore()
    row_store.seed(
        *(
            create_profile(actor)
            for actor in (admin, farmer, other_farmer, buyer, other_buyer)
        )
    )
    return row_store


@pytest.fixture
def enforcer(
    store: InMemoryRowStore, role_gate: CasbinRoleGate, mock_logger: MagicMock
) -> PolicyEnforcer:
    """PolicyEnforcer over the seeded in-memory store."""
    return PolicyEnforcer(store=store, role_gate=role_gate, logger=mock_logger)


# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with in-memory dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests with a real database"
    )
