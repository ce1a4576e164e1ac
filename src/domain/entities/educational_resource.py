"""Educational resource entity (bilingual articles for farmers)."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import ClassVar
from uuid import UUID

from src.domain.enums.permission import EntityType


@dataclass(kw_only=True)
class EducationalResource:
    """Admin-authored guide with English and Hindi content.

    Attributes:
        id: Resource identifier.
        title_en: English title.
        title_hi: Hindi title.
        content_en: English body.
        content_hi: Hindi body.
        category: Free-form resource category.
        tags: Searchable tags.
        author_id: Authoring admin (nulled if the account is removed).
        image_url: Featured image.
        is_published: Visibility flag.
        view_count: Number of recorded views.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    entity_type: ClassVar[EntityType] = EntityType.RESOURCES

    id: UUID
    title_en: str
    title_hi: str
    content_en: str
    content_hi: str
    category: str
    tags: list[str] = field(default_factory=list)
    author_id: UUID | None = None
    image_url: str | None = None
    is_published: bool = False
    view_count: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))
