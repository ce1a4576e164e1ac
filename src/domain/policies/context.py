"""Inputs to a policy rule beyond the actor.

Rules are pure: every fact they need about stored state is resolved by
the caller (inside the write transaction) and handed over here.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.domain.entities import Order, Row


@dataclass(frozen=True, slots=True, kw_only=True)
class PolicyContext:
    """Row snapshot and related facts for one policy decision.

    Attributes:
        current: Stored row (read, update, delete).
        proposed: Candidate row (insert, update).
        parent_order: Order owning an order item.
        has_delivered_purchase: Whether the actor has a delivered order
            containing the reviewed product (the review's own order when
            it names one).
    """

    current: "Row | None" = None
    proposed: "Row | None" = None
    parent_order: "Order | None" = None
    has_delivered_purchase: bool = False
