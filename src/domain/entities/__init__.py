"""Domain entities.

Every persisted entity exposes its table through the ``entity_type``
class attribute. ``Row`` is the union of all of them.
"""

from src.domain.entities.actor import Actor
from src.domain.entities.category import Category
from src.domain.entities.educational_resource import EducationalResource
from src.domain.entities.message import Message
from src.domain.entities.order import Order
from src.domain.entities.order_item import OrderItem
from src.domain.entities.product import Product
from src.domain.entities.resource_bookmark import ResourceBookmark
from src.domain.entities.review import Review
from src.domain.entities.user_profile import UserProfile
from src.domain.enums.permission import EntityType

type Row = (
    UserProfile
    | Category
    | Product
    | Order
    | OrderItem
    | Review
    | Message
    | EducationalResource
    | ResourceBookmark
)

ENTITY_CLASSES: dict[EntityType, type] = {
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
    "Actor",
    "Category",
    "ENTITY_CLASSES",
    "EducationalResource",
    "Message",
    "Order",
    "OrderItem",
    "Product",
    "ResourceBookmark",
    "Review",
    "Row",
    "UserProfile",
]
