"""Account (user profile) domain entity.

One profile per authenticated identity. The profile id IS the identity id,
which is what makes self-registration checkable (actor == new row id).

Business Rules:
    - role is fixed at creation; the ordinary update path may not change it
    - profiles are mutated by their owner (or an admin)
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import ClassVar
from uuid import UUID

from src.domain.enums.permission import EntityType
from src.domain.enums.user_role import UserRole


@dataclass(kw_only=True)
class UserProfile:
    """Marketplace account profile.

    Attributes:
        id: Identity of the account owner.
        role: admin, farmer or buyer.
        full_name: Display name.
        phone: Contact phone number.
        language_preference: Preferred UI language code (en, hi, ...).
        state: State/region.
        district: District within the state.
        profile_image_url: Avatar URL.
        is_active: Account active status.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    entity_type: ClassVar[EntityType] = EntityType.ACCOUNTS

    id: UUID
    role: UserRole
    full_name: str
    phone: str | None = None
    language_preference: str = "en"
    state: str | None = None
    district: str | None = None
    profile_image_url: str | None = None
    is_active: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))
