"""Resource bookmark database model."""

from uuid import UUID

from sqlalchemy import ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseModel


class ResourceBookmark(BaseModel):
    """An account's bookmark of an educational resource."""

    __tablename__ = "resource_bookmarks"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("user_profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    resource_id: Mapped[UUID] = mapped_column(
        ForeignKey("educational_resources.id", ondelete="CASCADE"),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("user_id", "resource_id", name="uq_resource_bookmarks_user_resource"),
    )
