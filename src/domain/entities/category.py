"""Product category reference data (bilingual)."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import ClassVar
from uuid import UUID

from src.domain.enums.permission import EntityType


@dataclass(kw_only=True)
class Category:
    """Product category with English and Hindi names.

    Attributes:
        id: Category identifier.
        name_en: English name.
        name_hi: Hindi name.
        description: Optional description.
        icon: Icon identifier used by clients.
        created_at: Creation timestamp.
    """

    entity_type: ClassVar[EntityType] = EntityType.CATEGORIES

    id: UUID
    name_en: str
    name_hi: str
    description: str | None = None
    icon: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
