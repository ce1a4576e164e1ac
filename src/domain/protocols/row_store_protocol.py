"""Row store protocol (port) for policy-checked persistence.

The enforcer never talks to a database directly. It opens a unit of work
on a RowStore and issues reads and writes through the yielded
StoreSession. Everything done inside one ``transaction()`` block commits
together or not at all.

Implementations:
    - SQLAlchemyRowStore: PostgreSQL / SQLite through SQLAlchemy async
    - InMemoryRowStore: copy-on-write dictionaries (tests, embedding)

Usage:
    async with store.transaction() as session:
        order = await session.get(EntityType.ORDERS, order_id)
        await session.update(replace(order, status=OrderStatus.CONFIRMED))
"""

from contextlib import AbstractAsyncContextManager
from typing import Any, Protocol
from uuid import UUID

from src.domain.entities import EducationalResource, Row
from src.domain.enums.permission import EntityType


class StoreConstraintError(Exception):
    """Backend rejected a write on a declared constraint.

    Raised out of ``RowStore.transaction()`` after rollback. Covers
    constraints a concurrent writer can break between check and write.

    Attributes:
        entity: Table of the rejected write.
        detail: Backend message (no row contents).
    """

    def __init__(self, entity: str, detail: str) -> None:
        super().__init__(detail)
        self.entity = entity
        self.detail = detail


class StoreSession(Protocol):
    """Operations available inside one store transaction.

    Write methods assume the caller already authorized and validated the
    row. Referential and uniqueness checks are exposed separately so the
    caller can report them as integrity violations before writing.
    """

    async def get(self, entity: EntityType, row_id: UUID) -> Row | None:
        """Fetch a row by id.

        Returns:
            Row or None if not found.
        """
        ...

    async def list(self, entity: EntityType, **equals: Any) -> list[Row]:
        """List rows whose fields equal the given values.

        Args:
            entity: Entity to list.
            **equals: Field name to value filters (AND-ed).

        Returns:
            Matching rows ordered by created_at, newest first.
        """
        ...

    async def exists(self, entity: EntityType, row_id: UUID) -> bool:
        """Check if a row with this id exists."""
        ...

    async def has_duplicate(self, row: Row, columns: tuple[str, ...]) -> bool:
        """Check if another row shares the values of columns with row.

        SQL semantics: if any of row's values is None there is no duplicate.
        """
        ...

    async def has_delivered_purchase(
        self, buyer_id: UUID, product_id: UUID, order_id: UUID | None = None
    ) -> bool:
        """Check if buyer has a delivered order containing product.

        With order_id, only that order qualifies.

        Implementations lock the qualifying order rows for the rest of
        the transaction so the status cannot change under the caller.
        """
        ...

    async def insert(self, row: Row) -> Row:
        """Insert a row and return it as stored."""
        ...

    async def update(self, row: Row) -> Row:
        """Replace the stored row with the same id; refreshes updated_at."""
        ...

    async def delete(self, entity: EntityType, row_id: UUID) -> None:
        """Delete a row, applying CASCADE and SET NULL to referencing rows."""
        ...

    async def increment_view_count(self, resource_id: UUID) -> EducationalResource | None:
        """Atomically add one to a resource's view_count.

        Returns:
            Updated resource, or None if it does not exist.
        """
        ...


class RowStore(Protocol):
    """Factory for store transactions."""

    def transaction(self) -> AbstractAsyncContextManager[StoreSession]:
        """Open a unit of work.

        Commits when the block exits normally, rolls back if it raises.

        Raises:
            StoreConstraintError: The backend rejected a write on a
                constraint (raised from the block, after rollback).
        """
        ...
