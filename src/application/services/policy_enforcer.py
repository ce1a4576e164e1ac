"""Policy enforcer service.

Evaluation surface of the authorization and integrity model. Every
request goes through the same pipeline:

Flow:
1. Role gate: can this role attempt (entity, operation) at all?
2. Open a store transaction
3. Load the addressed row and the facts the rule needs (parent order,
   delivered purchase)
4. Evaluate the row-level rule (DENY short-circuits before any write)
5. Integrity checks on writes (ranges, enumerations, required text,
   immutable fields, transitions, line-item consistency, references,
   uniqueness)
6. Write; commit on success, roll back the whole unit on any failure

A missing row and a forbidden row produce the same AuthorizationError so
callers cannot probe for rows they may not see.

Architecture:
    - Application service; depends only on domain protocols
    - Returns Result types, never raises for denials or violations
"""

from collections.abc import Iterable, Sequence
from dataclasses import replace
from typing import Any
from uuid import UUID

from src.application.dtos.policy_dtos import PolicyRequest
from src.core.enums import ErrorCode
from src.core.errors import (
    AuthorizationError,
    DomainError,
    IntegrityViolationError,
    ValidationError,
)
from src.core.result import Failure, Result, Success
from src.domain.entities import (
    Actor,
    EducationalResource,
    Order,
    OrderItem,
    Review,
    Row,
)
from src.domain.enums.permission import Decision, EntityType, Operation
from src.domain.enums.violation_reason import ViolationReason
from src.domain.errors import PolicyError
from src.domain.policies import PolicyContext, evaluate
from src.domain.protocols import (
    LoggerProtocol,
    RoleGateProtocol,
    RowStore,
    StoreConstraintError,
    StoreSession,
)
from src.domain.schema import REFERENCES, UNIQUE_KEYS
from src.domain.validators import (
    check_line_item,
    check_new_order,
    check_order_total,
    check_row,
    check_update,
    violation,
)


class _Rejected(Exception):
    """Aborts a store transaction with a domain error (triggers rollback)."""

    def __init__(self, error: DomainError) -> None:
        super().__init__(error.message)
        self.error = error


class PolicyEnforcer:
    """Authorize and validate every read and write against a row store.

    Dependencies (injected via constructor):
        - RowStore: Transactional row storage
        - RoleGateProtocol: Coarse role capability check
        - LoggerProtocol: Structured decision logging

    Example:
        >>> enforcer = PolicyEnforcer(store=store, role_gate=gate, logger=logger)
        >>> result = await enforcer.read(buyer, EntityType.ORDERS, order_id)
        >>> match result:
        ...     case Success(value=order):
        ...         ...
        ...     case Failure(error=error):
        ...         ...
    """

    def __init__(
        self,
        store: RowStore,
        role_gate: RoleGateProtocol,
        logger: LoggerProtocol,
        *,
        enforce_line_item_subtotal: bool = True,
    ) -> None:
        """Initialize enforcer.

        Args:
            store: Row store to read from and write to.
            role_gate: Role capability gate.
            logger: Structured logger.
            enforce_line_item_subtotal: Reject order items whose subtotal is
                not quantity x unit_price, and orders whose total disagrees
                with the items written alongside them.
        """
        self._store = store
        self._role_gate = role_gate
        self._logger = logger
        self._enforce_line_item_subtotal = enforce_line_item_subtotal

    # =========================================================================
    # Reads
    # =========================================================================

    async def read(
        self, actor: Actor, entity: EntityType, row_id: UUID
    ) -> Result[Row, AuthorizationError]:
        """Read one row.

        Args:
            actor: Caller.
            entity: Entity of the row.
            row_id: Row id.

        Returns:
            Success(row) if the read rule allows it.
            Failure(AuthorizationError) if denied or the row does not exist.
        """
        if not self._role_gate.allows(actor.role, entity, Operation.READ):
            return self._deny(actor, entity, Operation.READ, row_id, stage="role_gate")

        async with self._store.transaction() as session:
            row = await session.get(entity, row_id)
            if row is None:
                return self._deny(actor, entity, Operation.READ, row_id, stage="lookup")
            ctx = await self._read_context(session, row)

        if evaluate(actor, entity, Operation.READ, ctx) is Decision.DENY:
            return self._deny(actor, entity, Operation.READ, row_id, stage="rule")

        self._allow(actor, entity, Operation.READ, row_id)
        return Success(value=row)

    async def read_many(
        self, actor: Actor, entity: EntityType, **equals: Any
    ) -> list[Row]:
        """List the rows the actor may read.

        Acts as a row filter: rows the read rule denies are silently
        dropped, and a role without read capability gets an empty list.

        Args:
            actor: Caller.
            entity: Entity to list.
            **equals: Field equality filters applied before the rule.

        Returns:
            Readable rows, newest first.
        """
        if not self._role_gate.allows(actor.role, entity, Operation.READ):
            self._logger.debug(
                "policy_denied",
                actor_id=str(actor.user_id),
                role=actor.role.value,
                entity=entity.value,
                operation=Operation.READ.value,
                stage="role_gate",
            )
            return []

        visible: list[Row] = []
        async with self._store.transaction() as session:
            rows = await session.list(entity, **equals)
            orders: dict[UUID, Order | None] = {}
            for row in rows:
                ctx = await self._read_context(session, row, orders)
                if evaluate(actor, entity, Operation.READ, ctx) is Decision.ALLOW:
                    visible.append(row)
        return visible

    # =========================================================================
    # Writes
    # =========================================================================

    async def insert(self, actor: Actor, row: Row) -> Result[Row, DomainError]:
        """Insert one row.

        Returns:
            Success(stored row) or Failure(AuthorizationError |
            IntegrityViolationError).
        """
        result = await self.insert_all(actor, [row])
        match result:
            case Success(value=stored):
                return Success(value=stored[0])
            case Failure(error=error):
                return Failure(error=error)

    async def insert_all(
        self, actor: Actor, rows: Sequence[Row]
    ) -> Result[list[Row], DomainError]:
        """Insert several rows as one atomic unit.

        Rows are written in order, so an order item may follow its order in
        the same call. Any denial or violation rolls back every row.

        Args:
            actor: Caller.
            rows: Rows to insert.

        Returns:
            Success(stored rows, in input order) or Failure with the first
            denial or violation.
        """
        if not rows:
            return Success(value=[])

        for entity in {row.entity_type for row in rows}:
            if not self._role_gate.allows(actor.role, entity, Operation.INSERT):
                return self._deny(actor, entity, Operation.INSERT, None, stage="role_gate")

        stored: list[Row] = []
        entity = rows[0].entity_type
        try:
            async with self._store.transaction() as session:
                for row in rows:
                    entity = row.entity_type
                    ctx = await self._insert_context(session, row)
                    if evaluate(actor, entity, Operation.INSERT, ctx) is Decision.DENY:
                        raise _Rejected(self._denial())
                    if isinstance(row, Review):
                        row = replace(row, is_verified_purchase=True)
                    await self._check_integrity(session, row)
                    stored.append(await session.insert(row))
                if self._enforce_line_item_subtotal:
                    self._raise_on_failure(self._check_batch_consistency(stored))
        except _Rejected as rejected:
            return self._reject(actor, Operation.INSERT, entity, rejected.error)
        except StoreConstraintError as exc:
            return self._violated(actor, Operation.INSERT, self._constraint_error(exc))

        for entity in {row.entity_type for row in stored}:
            self._logger.info(
                "write_committed",
                actor_id=str(actor.user_id),
                entity=entity.value,
                operation=Operation.INSERT.value,
                count=sum(1 for row in stored if row.entity_type == entity),
            )
        return Success(value=stored)

    async def update(self, actor: Actor, proposed: Row) -> Result[Row, DomainError]:
        """Replace a stored row with proposed (same id).

        Args:
            actor: Caller.
            proposed: Full replacement row.

        Returns:
            Success(stored row) or Failure(AuthorizationError |
            IntegrityViolationError).
        """
        entity = proposed.entity_type
        if not self._role_gate.allows(actor.role, entity, Operation.UPDATE):
            return self._deny(actor, entity, Operation.UPDATE, proposed.id, stage="role_gate")

        try:
            async with self._store.transaction() as session:
                current = await session.get(entity, proposed.id)
                if current is None:
                    raise _Rejected(self._denial())
                ctx = PolicyContext(
                    current=current,
                    proposed=proposed,
                    parent_order=await self._parent_order(session, current),
                )
                if evaluate(actor, entity, Operation.UPDATE, ctx) is Decision.DENY:
                    raise _Rejected(self._denial())
                self._raise_on_failure(check_row(proposed))
                self._raise_on_failure(check_update(current, proposed))
                await self._check_references(session, proposed)
                await self._check_uniqueness(session, proposed)
                stored = await session.update(proposed)
        except _Rejected as rejected:
            return self._reject(actor, Operation.UPDATE, entity, rejected.error, proposed.id)
        except StoreConstraintError as exc:
            return self._violated(actor, Operation.UPDATE, self._constraint_error(exc))

        self._logger.info(
            "write_committed",
            actor_id=str(actor.user_id),
            entity=entity.value,
            operation=Operation.UPDATE.value,
            row_id=str(stored.id),
        )
        return Success(value=stored)

    async def delete(
        self, actor: Actor, entity: EntityType, row_id: UUID
    ) -> Result[None, DomainError]:
        """Delete a row and apply its cascades atomically.

        Returns:
            Success(None) or Failure(AuthorizationError).
        """
        if not self._role_gate.allows(actor.role, entity, Operation.DELETE):
            return self._deny(actor, entity, Operation.DELETE, row_id, stage="role_gate")

        try:
            async with self._store.transaction() as session:
                current = await session.get(entity, row_id)
                if current is None:
                    raise _Rejected(self._denial())
                ctx = PolicyContext(current=current)
                if evaluate(actor, entity, Operation.DELETE, ctx) is Decision.DENY:
                    raise _Rejected(self._denial())
                await session.delete(entity, row_id)
        except _Rejected as rejected:
            return self._reject(actor, Operation.DELETE, entity, rejected.error, row_id)
        except StoreConstraintError as exc:
            return self._violated(actor, Operation.DELETE, self._constraint_error(exc))

        self._logger.info(
            "write_committed",
            actor_id=str(actor.user_id),
            entity=entity.value,
            operation=Operation.DELETE.value,
            row_id=str(row_id),
        )
        return Success(value=None)

    async def record_view(
        self, actor: Actor, resource_id: UUID
    ) -> Result[EducationalResource, AuthorizationError]:
        """Increment a resource's view counter.

        Needs read access only; the counter is the single field touched,
        so this is not a general update.

        Returns:
            Success(updated resource) or Failure(AuthorizationError).
        """
        entity = EntityType.RESOURCES
        if not self._role_gate.allows(actor.role, entity, Operation.READ):
            return self._deny(actor, entity, Operation.READ, resource_id, stage="role_gate")

        try:
            async with self._store.transaction() as session:
                current = await session.get(entity, resource_id)
                if current is None:
                    raise _Rejected(self._denial())
                ctx = PolicyContext(current=current)
                if evaluate(actor, entity, Operation.READ, ctx) is Decision.DENY:
                    raise _Rejected(self._denial())
                updated = await session.increment_view_count(resource_id)
                if updated is None:
                    raise _Rejected(self._denial())
        except _Rejected as rejected:
            return self._reject(actor, Operation.READ, entity, rejected.error, resource_id)

        return Success(value=updated)

    async def execute(self, request: PolicyRequest) -> Result[Any, DomainError]:
        """Dispatch a PolicyRequest to the matching operation.

        Returns:
            Success(row | rows | None) or Failure(error). A request missing
            the row or row_id its operation needs fails with ValidationError.
        """
        actor, entity = request.actor, request.entity
        match request.operation:
            case Operation.READ if request.row_id is not None:
                return await self.read(actor, entity, request.row_id)
            case Operation.READ:
                return Success(value=await self.read_many(actor, entity, **request.filters))
            case Operation.INSERT if request.row is not None:
                if request.row.entity_type != entity:
                    return self._invalid_request("row", "row does not match entity")
                return await self.insert(actor, request.row)
            case Operation.UPDATE if request.row is not None:
                if request.row.entity_type != entity:
                    return self._invalid_request("row", "row does not match entity")
                return await self.update(actor, request.row)
            case Operation.DELETE if request.row_id is not None:
                return await self.delete(actor, entity, request.row_id)
            case Operation.DELETE:
                return self._invalid_request("row_id", "row_id is required")
            case _:
                return self._invalid_request("row", "row is required")

    # =========================================================================
    # Context resolution
    # =========================================================================

    async def _parent_order(
        self,
        session: StoreSession,
        row: Row,
        cache: dict[UUID, Order | None] | None = None,
    ) -> Order | None:
        if not isinstance(row, OrderItem):
            return None
        if cache is not None and row.order_id in cache:
            return cache[row.order_id]
        order = await session.get(EntityType.ORDERS, row.order_id)
        parent = order if isinstance(order, Order) else None
        if cache is not None:
            cache[row.order_id] = parent
        return parent

    async def _read_context(
        self,
        session: StoreSession,
        row: Row,
        cache: dict[UUID, Order | None] | None = None,
    ) -> PolicyContext:
        return PolicyContext(
            current=row,
            parent_order=await self._parent_order(session, row, cache),
        )

    async def _insert_context(self, session: StoreSession, row: Row) -> PolicyContext:
        delivered = False
        if isinstance(row, Review):
            delivered = await session.has_delivered_purchase(
                row.buyer_id, row.product_id, row.order_id
            )
        return PolicyContext(
            proposed=row,
            parent_order=await self._parent_order(session, row),
            has_delivered_purchase=delivered,
        )

    # =========================================================================
    # Integrity
    # =========================================================================

    async def _check_integrity(self, session: StoreSession, row: Row) -> None:
        self._raise_on_failure(check_row(row))
        if isinstance(row, Order):
            self._raise_on_failure(check_new_order(row))
        await self._check_references(session, row)
        await self._check_uniqueness(session, row)

    async def _check_references(self, session: StoreSession, row: Row) -> None:
        for reference in REFERENCES[row.entity_type]:
            target_id = getattr(row, reference.field)
            if target_id is None:
                continue
            if not await session.exists(reference.target, target_id):
                self._raise_on_failure(
                    violation(
                        ViolationReason.REFERENCE,
                        row.entity_type,
                        PolicyError.MISSING_REFERENCE.format(
                            field=reference.field, target=reference.target.value
                        ),
                        field=reference.field,
                    )
                )

    async def _check_uniqueness(self, session: StoreSession, row: Row) -> None:
        for columns in UNIQUE_KEYS.get(row.entity_type, ()):
            if await session.has_duplicate(row, columns):
                self._raise_on_failure(
                    violation(
                        ViolationReason.UNIQUENESS,
                        row.entity_type,
                        PolicyError.DUPLICATE_ROW.format(fields=", ".join(columns)),
                        field=",".join(columns),
                    )
                )

    def _check_batch_consistency(
        self, rows: Iterable[Row]
    ) -> Result[None, IntegrityViolationError]:
        rows = list(rows)
        items = [row for row in rows if isinstance(row, OrderItem)]
        for item in items:
            result = check_line_item(item)
            if isinstance(result, Failure):
                return result
        for order in (row for row in rows if isinstance(row, Order)):
            result = check_order_total(
                order, [item for item in items if item.order_id == order.id]
            )
            if isinstance(result, Failure):
                return result
        return Success(value=None)

    @staticmethod
    def _raise_on_failure(result: Result[None, IntegrityViolationError]) -> None:
        if isinstance(result, Failure):
            raise _Rejected(result.error)

    @staticmethod
    def _constraint_error(exc: StoreConstraintError) -> IntegrityViolationError:
        return IntegrityViolationError(
            code=ErrorCode.INTEGRITY_CONSTRAINT_FAILED,
            message=exc.detail,
            reason=ViolationReason.CONSTRAINT,
            entity=exc.entity,
        )

    # =========================================================================
    # Outcomes
    # =========================================================================

    @staticmethod
    def _denial() -> AuthorizationError:
        return AuthorizationError(
            code=ErrorCode.PERMISSION_DENIED,
            message=PolicyError.ACCESS_DENIED,
        )

    def _deny(
        self,
        actor: Actor,
        entity: EntityType,
        operation: Operation,
        row_id: UUID | None,
        *,
        stage: str,
    ) -> Failure[AuthorizationError]:
        self._logger.warning(
            "policy_denied",
            actor_id=str(actor.user_id),
            role=actor.role.value,
            entity=entity.value,
            operation=operation.value,
            row_id=str(row_id) if row_id else None,
            stage=stage,
        )
        return Failure(error=self._denial())

    def _allow(
        self,
        actor: Actor,
        entity: EntityType,
        operation: Operation,
        row_id: UUID | None,
    ) -> None:
        self._logger.debug(
            "policy_allowed",
            actor_id=str(actor.user_id),
            entity=entity.value,
            operation=operation.value,
            row_id=str(row_id) if row_id else None,
        )

    def _violated(
        self, actor: Actor, operation: Operation, error: IntegrityViolationError
    ) -> Failure[IntegrityViolationError]:
        self._logger.warning(
            "integrity_violation",
            actor_id=str(actor.user_id),
            entity=error.entity,
            operation=operation.value,
            reason=error.reason.value,
            field=error.field,
        )
        return Failure(error=error)

    def _reject(
        self,
        actor: Actor,
        operation: Operation,
        entity: EntityType,
        error: DomainError,
        row_id: UUID | None = None,
    ) -> Failure[DomainError]:
        if isinstance(error, IntegrityViolationError):
            return self._violated(actor, operation, error)
        return self._deny(actor, entity, operation, row_id, stage="rule")

    @staticmethod
    def _invalid_request(field: str, message: str) -> Failure[ValidationError]:
        return Failure(
            error=ValidationError(
                code=ErrorCode.INVALID_INPUT,
                message=message,
                field=field,
            )
        )
