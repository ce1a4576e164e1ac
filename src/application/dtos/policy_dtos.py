"""Policy request DTOs.

Inbound request object for PolicyEnforcer.execute(). Embedding
applications translate their own transport (HTTP body, RPC message,
queue payload) into a PolicyRequest.
"""

from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from src.domain.entities import Actor, Row
from src.domain.enums.permission import EntityType, Operation


@dataclass(frozen=True, kw_only=True)
class PolicyRequest:
    """One (actor, entity, operation, row) request.

    Which of row / row_id is needed depends on the operation:
        - READ: row_id for a single row, neither for a filtered listing
        - INSERT, UPDATE: row
        - DELETE: row_id

    Attributes:
        actor: Caller identity and role.
        entity: Target entity.
        operation: Requested operation.
        row: Proposed row for writes.
        row_id: Addressed row for single reads and deletes.
        filters: Equality filters for listings.

    Example:
        >>> request = PolicyRequest(
        ...     actor=buyer,
        ...     entity=EntityType.ORDERS,
        ...     operation=Operation.READ,
        ...     filters={"buyer_id": buyer.user_id},
        ... )
        >>> result = await enforcer.execute(request)
    """

    actor: Actor
    entity: EntityType
    operation: Operation
    row: Row | None = None
    row_id: UUID | None = None
    filters: dict[str, Any] = field(default_factory=dict)
