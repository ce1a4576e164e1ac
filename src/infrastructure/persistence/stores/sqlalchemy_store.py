"""SQLAlchemy row store.

Implements RowStore on top of Database (PostgreSQL via asyncpg, SQLite
via aiosqlite for tests). Domain entities are mapped to and from the
models in src.infrastructure.persistence.models.

Architecture:
    - Deletes go through Core DELETE so the database applies ON DELETE
      CASCADE / SET NULL
    - The delivered-purchase lookup uses SELECT ... FOR UPDATE on
      PostgreSQL, pinning the order rows until the review is written
    - sqlalchemy.exc.IntegrityError is translated to StoreConstraintError
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import fields
from datetime import UTC, datetime
from enum import Enum
from typing import Any
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import ENTITY_CLASSES, EducationalResource, Row
from src.domain.enums.order_status import OrderStatus
from src.domain.enums.payment_status import PaymentStatus
from src.domain.enums.permission import EntityType
from src.domain.enums.user_role import UserRole
from src.domain.protocols import StoreConstraintError
from src.infrastructure.persistence.base import BaseModel
from src.infrastructure.persistence.database import Database
from src.infrastructure.persistence.models import (
    MODELS_BY_ENTITY,
    Order as OrderModel,
    OrderItem as OrderItemModel,
)

# Columns stored as strings that map to domain enums.
_ENUM_COLUMNS: dict[str, type[Enum]] = {
    "role": UserRole,
    "status": OrderStatus,
    "payment_status": PaymentStatus,
}


def _to_column(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, list):
        return list(value)
    return value


class SQLAlchemyStoreSession:
    """StoreSession bound to one AsyncSession transaction."""

    def __init__(self, session: AsyncSession, *, lock_rows: bool) -> None:
        """Initialize session wrapper.

        Args:
            session: Session inside an open transaction.
            lock_rows: Use SELECT ... FOR UPDATE where row locks matter.
        """
        self._session = session
        self._lock_rows = lock_rows
        self.last_entity: EntityType | None = None

    # =========================================================================
    # Mapping
    # =========================================================================

    def _to_domain(self, model: BaseModel, entity: EntityType) -> Row:
        entity_class = ENTITY_CLASSES[entity]
        values: dict[str, Any] = {}
        for entity_field in fields(entity_class):
            value = getattr(model, entity_field.name)
            if entity_field.name in _ENUM_COLUMNS and value is not None:
                value = _ENUM_COLUMNS[entity_field.name](value)
            elif isinstance(value, datetime) and value.tzinfo is None:
                # SQLite drops the offset; everything is stored in UTC
                value = value.replace(tzinfo=UTC)
            elif isinstance(value, list):
                value = list(value)
            values[entity_field.name] = value
        return entity_class(**values)

    def _to_model(self, row: Row) -> BaseModel:
        model_class = MODELS_BY_ENTITY[row.entity_type]
        return model_class(
            **{
                entity_field.name: _to_column(getattr(row, entity_field.name))
                for entity_field in fields(row)
            }
        )

    # =========================================================================
    # Reads
    # =========================================================================

    async def get(self, entity: EntityType, row_id: UUID) -> Row | None:
        model_class = MODELS_BY_ENTITY[entity]
        stmt = (
            select(model_class)
            .where(model_class.id == row_id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model, entity) if model is not None else None

    async def list(self, entity: EntityType, **equals: Any) -> list[Row]:
        model_class = MODELS_BY_ENTITY[entity]
        stmt = (
            select(model_class)
            .where(
                *(
                    getattr(model_class, name) == _to_column(value)
                    for name, value in equals.items()
                )
            )
            .order_by(model_class.created_at.desc())
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return [self._to_domain(model, entity) for model in result.scalars().all()]

    async def exists(self, entity: EntityType, row_id: UUID) -> bool:
        model_class = MODELS_BY_ENTITY[entity]
        stmt = select(model_class.id).where(model_class.id == row_id).limit(1)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def has_duplicate(self, row: Row, columns: tuple[str, ...]) -> bool:
        values = [_to_column(getattr(row, column)) for column in columns]
        if any(value is None for value in values):
            return False
        model_class = MODELS_BY_ENTITY[row.entity_type]
        stmt = (
            select(model_class.id)
            .where(
                model_class.id != row.id,
                *(
                    getattr(model_class, column) == value
                    for column, value in zip(columns, values)
                ),
            )
            .limit(1)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def has_delivered_purchase(
        self, buyer_id: UUID, product_id: UUID, order_id: UUID | None = None
    ) -> bool:
        stmt = (
            select(OrderModel.id)
            .join(OrderItemModel, OrderItemModel.order_id == OrderModel.id)
            .where(
                OrderModel.buyer_id == buyer_id,
                OrderModel.status == OrderStatus.DELIVERED.value,
                OrderItemModel.product_id == product_id,
            )
        )
        if order_id is not None:
            stmt = stmt.where(OrderModel.id == order_id)
        if self._lock_rows:
            stmt = stmt.with_for_update(of=OrderModel)
        result = await self._session.execute(stmt)
        return result.first() is not None

    # =========================================================================
    # Writes
    # =========================================================================

    async def insert(self, row: Row) -> Row:
        self.last_entity = row.entity_type
        model = self._to_model(row)
        self._session.add(model)
        await self._session.flush()
        return self._to_domain(model, row.entity_type)

    async def update(self, row: Row) -> Row:
        entity = row.entity_type
        self.last_entity = entity
        model_class = MODELS_BY_ENTITY[entity]
        model = await self._session.get(model_class, row.id, populate_existing=True)
        if model is None:
            raise StoreConstraintError(entity.value, "row does not exist")
        for entity_field in fields(row):
            if entity_field.name in ("id", "created_at"):
                continue
            setattr(model, entity_field.name, _to_column(getattr(row, entity_field.name)))
        if hasattr(model, "updated_at"):
            model.updated_at = datetime.now(UTC)
        await self._session.flush()
        return self._to_domain(model, entity)

    async def delete(self, entity: EntityType, row_id: UUID) -> None:
        self.last_entity = entity
        model_class = MODELS_BY_ENTITY[entity]
        await self._session.execute(delete(model_class).where(model_class.id == row_id))
        # Cascaded rows may still sit in the identity map
        self._session.expunge_all()

    async def increment_view_count(self, resource_id: UUID) -> EducationalResource | None:
        self.last_entity = EntityType.RESOURCES
        model_class = MODELS_BY_ENTITY[EntityType.RESOURCES]
        await self._session.execute(
            update(model_class)
            .where(model_class.id == resource_id)
            .values(
                view_count=model_class.view_count + 1,
                updated_at=datetime.now(UTC),
            )
        )
        resource = await self.get(EntityType.RESOURCES, resource_id)
        return resource if isinstance(resource, EducationalResource) else None


class SQLAlchemyRowStore:
    """RowStore backed by a SQLAlchemy Database.

    Example:
        >>> store = SQLAlchemyRowStore(Database(settings.database_url))
        >>> async with store.transaction() as session:
        ...     product = await session.get(EntityType.PRODUCTS, product_id)
    """

    def __init__(self, database: Database) -> None:
        self._database = database

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[SQLAlchemyStoreSession]:
        """Open a unit of work; commit on normal exit, roll back on error.

        Raises:
            StoreConstraintError: The database rejected a write.
        """
        store_session: SQLAlchemyStoreSession | None = None
        try:
            async with self._database.transaction() as session:
                store_session = SQLAlchemyStoreSession(
                    session, lock_rows=self._database.is_postgresql
                )
                yield store_session
        except IntegrityError as e:
            entity = store_session.last_entity if store_session else None
            raise StoreConstraintError(
                entity.value if entity else "unknown",
                str(e.orig),
            ) from e
