"""Structural integrity checks for authorized writes.

Pure functions over entity rows. Each returns ``Success(None)`` when the
row (or the change) keeps every invariant, otherwise ``Failure`` carrying
an IntegrityViolationError classified by ViolationReason.

Checks that need storage (uniqueness, referential existence) live in the
row stores; everything decidable from the rows alone lives here.

Reference:
    - src/domain/schema.py (declarative constraint metadata)
"""

from dataclasses import fields
from decimal import Decimal
from enum import Enum
from typing import Any

from src.core.errors import IntegrityViolationError
from src.core.result import Failure, Result, Success
from src.domain.entities import Order, OrderItem, Row
from src.domain.enums.order_status import OrderStatus
from src.domain.enums.payment_status import PaymentStatus
from src.domain.enums.permission import EntityType
from src.domain.enums.user_role import UserRole
from src.domain.enums.violation_reason import ViolationReason
from src.domain.errors import PolicyError
from src.domain.schema import (
    ALWAYS_IMMUTABLE,
    BOUNDS,
    REQUIRED_TEXT,
    UPDATABLE_FIELDS,
)

# Closed enumerations per entity: field name -> enum class.
ENUMERATIONS: dict[EntityType, dict[str, type[Enum]]] = {
    EntityType.ACCOUNTS: {"role": UserRole},
    EntityType.ORDERS: {"status": OrderStatus, "payment_status": PaymentStatus},
}

# Maintained by the store on every update.
_STORE_MANAGED = frozenset({"updated_at"})


def violation(
    reason: ViolationReason,
    entity: EntityType,
    message: str,
    field: str | None = None,
) -> Failure[IntegrityViolationError]:
    """Build a Failure for an integrity violation.

    Args:
        reason: Classified violation reason.
        entity: Entity of the offending row.
        message: Human-readable message.
        field: Offending field (or comma-separated field group).

    Returns:
        Failure wrapping IntegrityViolationError.
    """
    return Failure(
        error=IntegrityViolationError(
            code=reason.error_code,
            message=message,
            reason=reason,
            entity=entity.value,
            field=field,
        )
    )


def _enum_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def check_row(row: Row) -> Result[None, IntegrityViolationError]:
    """Check the single-row invariants of a row about to be written.

    Order of checks: enumerations, required text, numeric ranges.

    Args:
        row: Entity row (insert candidate or proposed update).

    Returns:
        Success(None) if valid, Failure otherwise.
    """
    entity = row.entity_type

    for name, enum_class in ENUMERATIONS.get(entity, {}).items():
        allowed = [member.value for member in enum_class]
        if _enum_value(getattr(row, name)) not in allowed:
            return violation(
                ViolationReason.ENUMERATION,
                entity,
                PolicyError.INVALID_ENUMERATION.format(
                    field=name, allowed=", ".join(allowed)
                ),
                field=name,
            )

    for name in REQUIRED_TEXT.get(entity, ()):
        value = getattr(row, name)
        if not isinstance(value, str) or not value.strip():
            return violation(
                ViolationReason.REQUIRED,
                entity,
                PolicyError.REQUIRED_FIELD.format(field=name),
                field=name,
            )

    for bound in BOUNDS.get(entity, ()):
        value = getattr(row, bound.field)
        if value is not None and not bound.admits(value):
            return violation(
                ViolationReason.RANGE, entity, bound.describe(), field=bound.field
            )

    return Success(value=None)


def check_update(current: Row, proposed: Row) -> Result[None, IntegrityViolationError]:
    """Check that an update only changes fields it may change.

    id and created_at never change. Orders may change status,
    payment_status and notes; reviews rating and comment; messages only
    is_read; order items nothing.
    A status change must follow the order lifecycle (same status is a no-op).
    Run check_row on proposed first so enumerations are already valid.

    Args:
        current: Stored row.
        proposed: Replacement row with the same id.

    Returns:
        Success(None) if the change is permitted, Failure otherwise.
    """
    entity = current.entity_type
    updatable = UPDATABLE_FIELDS.get(entity)

    for entity_field in fields(current):
        name = entity_field.name
        if name in _STORE_MANAGED:
            continue
        if getattr(current, name) == getattr(proposed, name):
            continue
        if name in ALWAYS_IMMUTABLE or (updatable is not None and name not in updatable):
            return violation(
                ViolationReason.IMMUTABLE_FIELD,
                entity,
                PolicyError.IMMUTABLE_FIELD.format(field=name),
                field=name,
            )

    if isinstance(current, Order) and isinstance(proposed, Order):
        return check_status_transition(current.status, proposed.status)

    return Success(value=None)


def check_status_transition(
    current: OrderStatus | str, target: OrderStatus | str
) -> Result[None, IntegrityViolationError]:
    """Check an order status change against the lifecycle.

    Args:
        current: Stored status.
        target: Proposed status.

    Returns:
        Success(None) for lifecycle moves and same-status updates.
    """
    current_status = OrderStatus(_enum_value(current))
    target_status = OrderStatus(_enum_value(target))
    if current_status == target_status or current_status.can_transition_to(target_status):
        return Success(value=None)
    return violation(
        ViolationReason.TRANSITION,
        EntityType.ORDERS,
        PolicyError.INVALID_TRANSITION.format(
            current=current_status.value, target=target_status.value
        ),
        field="status",
    )


def check_new_order(order: Order) -> Result[None, IntegrityViolationError]:
    """Check that an order is created at the start of both lifecycles.

    Later states are only reachable through status updates, so an order
    inserted as delivered (or paid) would skip the lifecycle.
    """
    initial = (
        ("status", OrderStatus.PENDING),
        ("payment_status", PaymentStatus.PENDING),
    )
    for name, expected in initial:
        if _enum_value(getattr(order, name)) != expected.value:
            return violation(
                ViolationReason.TRANSITION,
                EntityType.ORDERS,
                PolicyError.INVALID_INITIAL_STATE.format(
                    field=name, expected=expected.value
                ),
                field=name,
            )
    return Success(value=None)


def check_line_item(item: OrderItem) -> Result[None, IntegrityViolationError]:
    """Check subtotal == quantity x unit_price."""
    expected = item.expected_subtotal()
    if Decimal(item.subtotal) != expected:
        return violation(
            ViolationReason.CONSISTENCY,
            EntityType.ORDER_ITEMS,
            PolicyError.SUBTOTAL_MISMATCH.format(expected=expected),
            field="subtotal",
        )
    return Success(value=None)


def check_order_total(
    order: Order, items: list[OrderItem]
) -> Result[None, IntegrityViolationError]:
    """Check total_amount == sum of the subtotals of items written with it.

    Args:
        order: Order row.
        items: Items of this order written in the same unit.

    Returns:
        Success(None) if consistent (or no items), Failure otherwise.
    """
    if not items:
        return Success(value=None)
    expected = sum((Decimal(item.subtotal) for item in items), Decimal("0"))
    if Decimal(order.total_amount) != expected:
        return violation(
            ViolationReason.CONSISTENCY,
            EntityType.ORDERS,
            PolicyError.TOTAL_MISMATCH.format(expected=expected),
            field="total_amount",
        )
    return Success(value=None)
