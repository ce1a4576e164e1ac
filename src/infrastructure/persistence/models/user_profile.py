"""User profile database model.

One row per identity. The id is the identity id (supplied by the caller,
not generated).
"""

from sqlalchemy import Boolean, CheckConstraint, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel


class UserProfile(BaseMutableModel):
    """Account profile with role and contact details.

    Indexes:
        - ix_user_profiles_role: Filter by role (admin dashboards)
        - ix_user_profiles_state: Regional lookups
    """

    __tablename__ = "user_profiles"

    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        index=True,
        comment="admin, farmer or buyer",
    )

    full_name: Mapped[str] = mapped_column(Text, nullable=False)

    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)

    language_preference: Mapped[str] = mapped_column(
        String(8),
        nullable=False,
        default="en",
        comment="Preferred UI language code",
    )

    state: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)

    district: Mapped[str | None] = mapped_column(String(100), nullable=True)

    profile_image_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    __table_args__ = (
        CheckConstraint(
            "role IN ('admin', 'farmer', 'buyer')", name="ck_user_profiles_role"
        ),
    )
