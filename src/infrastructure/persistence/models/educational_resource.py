"""Educational resource database model (bilingual, admin-authored)."""

from uuid import UUID

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel, TextArray


class EducationalResource(BaseMutableModel):
    """Educational article.

    Indexes:
        - ix_educational_resources_category: Category filter
        - ix_educational_resources_is_published: Public listing
        - idx_educational_resources_tags: GIN index on tags (PostgreSQL)
    """

    __tablename__ = "educational_resources"

    title_en: Mapped[str] = mapped_column(Text, nullable=False)

    title_hi: Mapped[str] = mapped_column(Text, nullable=False)

    content_en: Mapped[str] = mapped_column(Text, nullable=False)

    content_hi: Mapped[str] = mapped_column(Text, nullable=False)

    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    tags: Mapped[list[str]] = mapped_column(TextArray, nullable=False, default=list)

    author_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("user_profiles.id", ondelete="SET NULL"),
        nullable=True,
    )

    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    is_published: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, index=True
    )

    view_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        CheckConstraint("view_count >= 0", name="ck_educational_resources_view_count"),
        Index("idx_educational_resources_tags", "tags", postgresql_using="gin"),
    )
