"""Database models for the persistence layer.

SQLAlchemy models mapping one table per entity. Domain entities
(dataclasses) live in src/domain/entities/ and are mapped to and from
these models by the SQLAlchemy row store.

MODELS_BY_ENTITY maps each EntityType to its model class.
"""

from src.domain.enums.permission import EntityType
from src.infrastructure.persistence.base import BaseModel
from src.infrastructure.persistence.models.category import Category
from src.infrastructure.persistence.models.educational_resource import (
    EducationalResource,
)
from src.infrastructure.persistence.models.message import Message
from src.infrastructure.persistence.models.order import Order
from src.infrastructure.persistence.models.order_item import OrderItem
from src.infrastructure.persistence.models.product import Product
from src.infrastructure.persistence.models.resource_bookmark import ResourceBookmark
from src.infrastructure.persistence.models.review import Review
from src.infrastructure.persistence.models.user_profile import UserProfile

MODELS_BY_ENTITY: dict[EntityType, type[BaseModel]] = {
    EntityType.ACCOUNTS: UserProfile,
    EntityType.CATEGORIES: Category,
    EntityType.PRODUCTS: Product,
    EntityType.ORDERS: Order,
    EntityType.ORDER_ITEMS: OrderItem,
    EntityType.REVIEWS: Review,
    EntityType.MESSAGES: Message,
    EntityType.RESOURCES: EducationalResource,
    EntityType.BOOKMARKS: ResourceBookmark,
}

__all__ = [
    "BaseModel",
    "Category",
    "EducationalResource",
    "MODELS_BY_ENTITY",
    "Message",
    "Order",
    "OrderItem",
    "Product",
    "ResourceBookmark",
    "Review",
    "UserProfile",
]
