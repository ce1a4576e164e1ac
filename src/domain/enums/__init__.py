"""Domain enums for business logic.

This package contains enumerations used throughout the domain layer.

Available Enums:
    - UserRole: Account roles (admin, farmer, buyer)
    - EntityType: Protected entities (one per table)
    - Operation: Row operations (read, insert, update, delete)
    - Decision: Policy outcome (allow, deny)
    - OrderStatus: Order fulfilment lifecycle
    - PaymentStatus: Order payment state
    - ViolationReason: Classification of integrity violations
"""

from src.domain.enums.order_status import OrderStatus
from src.domain.enums.payment_status import PaymentStatus
from src.domain.enums.permission import Decision, EntityType, Operation
from src.domain.enums.user_role import UserRole
from src.domain.enums.violation_reason import ViolationReason

__all__ = [
    "Decision",
    "EntityType",
    "Operation",
    "OrderStatus",
    "PaymentStatus",
    "UserRole",
    "ViolationReason",
]
