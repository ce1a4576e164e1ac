"""Resource bookmark entity (account x resource join)."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import ClassVar
from uuid import UUID

from src.domain.enums.permission import EntityType


@dataclass(kw_only=True)
class ResourceBookmark:
    """Bookmark of an educational resource, unique per (user, resource)."""

    entity_type: ClassVar[EntityType] = EntityType.BOOKMARKS

    id: UUID
    user_id: UUID
    resource_id: UUID
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
