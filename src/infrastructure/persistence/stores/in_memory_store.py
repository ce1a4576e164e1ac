"""In-memory row store.

Implements RowStore over plain dictionaries, for tests and for embedding
the policy model without a database.

Concurrency:
    Transactions are serialized by an asyncio.Lock. Each transaction works
    on a copy of the tables and swaps it in only when the block exits
    normally, so a failed unit leaves no trace.

Cascades follow src.domain.schema.REFERENCES, the same metadata the
SQLAlchemy models declare as ON DELETE actions.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from copy import deepcopy
from dataclasses import replace
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from src.domain.entities import EducationalResource, Order, OrderItem, Row
from src.domain.enums.order_status import OrderStatus
from src.domain.enums.permission import EntityType
from src.domain.protocols import StoreConstraintError
from src.domain.schema import OnDelete, referencing

type Tables = dict[EntityType, dict[UUID, Row]]


class InMemoryStoreSession:
    """StoreSession over one transaction's working copy of the tables."""

    def __init__(self, tables: Tables) -> None:
        self._tables = tables

    async def get(self, entity: EntityType, row_id: UUID) -> Row | None:
        row = self._tables[entity].get(row_id)
        return deepcopy(row) if row is not None else None

    async def list(self, entity: EntityType, **equals: Any) -> list[Row]:
        rows = [
            deepcopy(row)
            for row in self._tables[entity].values()
            if all(getattr(row, name) == value for name, value in equals.items())
        ]
        rows.sort(key=lambda row: row.created_at, reverse=True)
        return rows

    async def exists(self, entity: EntityType, row_id: UUID) -> bool:
        return row_id in self._tables[entity]

    async def has_duplicate(self, row: Row, columns: tuple[str, ...]) -> bool:
        values = tuple(getattr(row, column) for column in columns)
        if any(value is None for value in values):
            return False
        return any(
            other.id != row.id
            and tuple(getattr(other, column) for column in columns) == values
            for other in self._tables[row.entity_type].values()
        )

    async def has_delivered_purchase(
        self, buyer_id: UUID, product_id: UUID, order_id: UUID | None = None
    ) -> bool:
        delivered = {
            order.id
            for order in self._tables[EntityType.ORDERS].values()
            if isinstance(order, Order)
            and order.buyer_id == buyer_id
            and order.status == OrderStatus.DELIVERED
            and (order_id is None or order.id == order_id)
        }
        return any(
            isinstance(item, OrderItem)
            and item.order_id in delivered
            and item.product_id == product_id
            for item in self._tables[EntityType.ORDER_ITEMS].values()
        )

    async def insert(self, row: Row) -> Row:
        table = self._tables[row.entity_type]
        if row.id in table:
            raise StoreConstraintError(row.entity_type.value, "duplicate primary key")
        table[row.id] = deepcopy(row)
        return deepcopy(row)

    async def update(self, row: Row) -> Row:
        table = self._tables[row.entity_type]
        if row.id not in table:
            raise StoreConstraintError(row.entity_type.value, "row does not exist")
        if hasattr(row, "updated_at"):
            row = replace(row, updated_at=datetime.now(UTC))
        table[row.id] = deepcopy(row)
        return deepcopy(row)

    async def delete(self, entity: EntityType, row_id: UUID) -> None:
        if self._tables[entity].pop(row_id, None) is None:
            return
        for source, reference in referencing(entity):
            table = self._tables[source]
            for other_id in list(table):
                # Earlier cascades may have removed or rewritten the row
                other = table.get(other_id)
                if other is None or getattr(other, reference.field) != row_id:
                    continue
                if reference.on_delete is OnDelete.CASCADE:
                    await self.delete(source, other_id)
                else:
                    table[other_id] = replace(other, **{reference.field: None})

    async def increment_view_count(self, resource_id: UUID) -> EducationalResource | None:
        table = self._tables[EntityType.RESOURCES]
        resource = table.get(resource_id)
        if not isinstance(resource, EducationalResource):
            return None
        updated = replace(
            resource,
            view_count=resource.view_count + 1,
            updated_at=datetime.now(UTC),
        )
        table[resource_id] = updated
        return deepcopy(updated)


class InMemoryRowStore:
    """Copy-on-write dictionary store implementing RowStore.

    Example:
        >>> store = InMemoryRowStore()
        >>> async with store.transaction() as session:
        ...     await session.insert(profile)
    """

    def __init__(self) -> None:
        self._tables: Tables = {entity: {} for entity in EntityType}
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[InMemoryStoreSession]:
        """Open a unit of work; commit on normal exit, discard on error."""
        async with self._lock:
            working: Tables = {entity: dict(rows) for entity, rows in self._tables.items()}
            yield InMemoryStoreSession(working)
            self._tables = working

    def count(self, entity: EntityType) -> int:
        """Number of committed rows of an entity."""
        return len(self._tables[entity])

    def seed(self, *rows: Row) -> None:
        """Write rows directly, bypassing policy (fixtures and bootstrap data)."""
        for row in rows:
            self._tables[row.entity_type][row.id] = deepcopy(row)
