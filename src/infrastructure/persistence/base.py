"""Base model and mixins for all database tables.

This module provides:
- BaseModel: Base class for ALL models (provides id, created_at)
- TimestampMixin: Internal mixin that adds updated_at
- BaseMutableModel: Base for rows that can be updated (combines above)

Following hexagonal architecture:
- Domain entities do NOT inherit from these classes
- The SQLAlchemy row store maps rows to/from domain entities

Architecture:
    BaseModel (id, created_at)
        ↑
        ├── BaseMutableModel (+ updated_at via TimestampMixin)
        │   ├── UserProfile, Product, Order, Review
        │   └── EducationalResource
        │
        └── Category, OrderItem, Message, ResourceBookmark (no updated_at)

Note: The generic Uuid type keeps the models usable on SQLite for tests.
"""

from datetime import datetime
from typing import Any
from uuid import UUID as PythonUUID

from sqlalchemy import JSON, DateTime, Text, Uuid, func
from sqlalchemy.dialects.postgresql import ARRAY, JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from uuid_extensions import uuid7


class BaseModel(DeclarativeBase):
    """Base class for all database models.

    Provides:
    - id: UUID primary key (uuid7 when not supplied)
    - created_at: Creation timestamp (UTC, set by the database if absent)
    """

    __abstract__ = True

    id: Mapped[PythonUUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid7,
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"

    def to_dict(self) -> dict[str, Any]:
        """Column values keyed by attribute name (for debugging)."""
        return {column.key: getattr(self, column.key) for column in self.__table__.columns}


class TimestampMixin:
    """Mixin for mutable models that track updates."""

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )


class BaseMutableModel(TimestampMixin, BaseModel):
    """Base class for models whose rows can be updated.

    Provides:
        - id, created_at (from BaseModel)
        - updated_at (from TimestampMixin)
    """

    __abstract__ = True


# Portable column types: JSONB / text[] on PostgreSQL, JSON elsewhere.
JSONDocument = JSON().with_variant(JSONB(), "postgresql")
TextArray = JSON().with_variant(ARRAY(Text()), "postgresql")
