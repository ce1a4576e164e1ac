"""Actor value type.

The authenticated identity issuing an operation, together with the role
recorded on its account. Actors are immutable for the duration of a request.
"""

from dataclasses import dataclass
from uuid import UUID

from src.domain.enums.user_role import UserRole


@dataclass(frozen=True, slots=True, kw_only=True)
class Actor:
    """Identity and role of the caller.

    Attributes:
        user_id: Account identifier of the caller.
        role: Role of the caller's account.
    """

    user_id: UUID
    role: UserRole

    @property
    def is_admin(self) -> bool:
        """Whether the actor is an administrator."""
        return self.role == UserRole.ADMIN

    @property
    def is_farmer(self) -> bool:
        """Whether the actor is a farmer."""
        return self.role == UserRole.FARMER

    @property
    def is_buyer(self) -> bool:
        """Whether the actor is a buyer."""
        return self.role == UserRole.BUYER
