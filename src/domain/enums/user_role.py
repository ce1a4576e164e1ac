"""Account roles for marketplace authorization.

Every account carries exactly one role, fixed at sign-up. Roles are flat
(no inheritance): what a role may do is decided per entity and operation
by the policy rules in src/domain/policies.

Usage:
    from src.domain.enums import UserRole

    if actor.role == UserRole.ADMIN:
        # Admin-only logic
"""

from enum import Enum


class UserRole(str, Enum):
    """Account roles.

    String Enum:
        Inherits from str for easy serialization and Casbin compatibility.
        Values are lowercase to match the persisted column and Casbin policy format.
    """

    ADMIN = "admin"
    """Platform administrator.

    Capabilities:
        - Read every account, product and order
        - Manage product categories and educational resources
    """

    FARMER = "farmer"
    """Seller of value-added agricultural products.

    Capabilities:
        - Create and manage own products
        - Read and progress orders placed with them
    """

    BUYER = "buyer"
    """Customer purchasing products.

    Capabilities:
        - Browse active products
        - Place orders and review delivered purchases
    """

    @classmethod
    def values(cls) -> list[str]:
        """Get all role values as strings.

        Returns:
            list[str]: List of role values ['admin', 'farmer', 'buyer'].
        """
        return [role.value for role in cls]

    @classmethod
    def is_valid(cls, value: str) -> bool:
        """Check if a string is a valid role.

        Args:
            value: String to check.

        Returns:
            bool: True if value is a valid role.
        """
        return value in cls.values()
