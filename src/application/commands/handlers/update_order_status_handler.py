"""UpdateOrderStatus command handler.

Flow:
1. Read the order through the enforcer
2. Apply the requested status / payment_status
3. Update through the enforcer (farmer-only rule, lifecycle check)
"""

from dataclasses import replace

from src.application.commands.order_commands import UpdateOrderStatus
from src.application.services.policy_enforcer import PolicyEnforcer
from src.core.errors import DomainError
from src.core.result import Failure, Result
from src.domain.entities import Order
from src.domain.enums.permission import EntityType


class UpdateOrderStatusHandler:
    """Handler for UpdateOrderStatus command."""

    def __init__(self, enforcer: PolicyEnforcer) -> None:
        self._enforcer = enforcer

    async def handle(self, cmd: UpdateOrderStatus) -> Result[Order, DomainError]:
        """Handle UpdateOrderStatus command.

        Returns:
            Success(Order) with the stored order.
            Failure(AuthorizationError) if the actor is not the order's farmer.
            Failure(IntegrityViolationError) for transitions outside the
            lifecycle.
        """
        read = await self._enforcer.read(cmd.actor, EntityType.ORDERS, cmd.order_id)
        if isinstance(read, Failure):
            return read

        order = read.value
        proposed = replace(
            order,
            status=cmd.status if cmd.status is not None else order.status,
            payment_status=(
                cmd.payment_status
                if cmd.payment_status is not None
                else order.payment_status
            ),
        )
        return await self._enforcer.update(cmd.actor, proposed)
