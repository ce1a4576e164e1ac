"""Product category database model (bilingual reference data)."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseModel


class Category(BaseModel):
    """Product category with English and Hindi names."""

    __tablename__ = "product_categories"

    name_en: Mapped[str] = mapped_column(Text, nullable=False, comment="English name")

    name_hi: Mapped[str] = mapped_column(Text, nullable=False, comment="Hindi name")

    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    icon: Mapped[str | None] = mapped_column(String(64), nullable=True)
