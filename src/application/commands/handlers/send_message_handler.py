"""SendMessage command handler."""

from uuid_extensions import uuid7

from src.application.commands.engagement_commands import SendMessage
from src.application.services.policy_enforcer import PolicyEnforcer
from src.core.errors import DomainError
from src.core.result import Result
from src.domain.entities import Message


class SendMessageHandler:
    """Handler for SendMessage command.

    The sender is always the actor; the receiver must exist.
    """

    def __init__(self, enforcer: PolicyEnforcer) -> None:
        self._enforcer = enforcer

    async def handle(self, cmd: SendMessage) -> Result[Message, DomainError]:
        """Handle SendMessage command.

        Returns:
            Success(Message) or Failure(IntegrityViolationError) for blank
            content or a missing receiver, product or order.
        """
        message = Message(
            id=uuid7(),
            sender_id=cmd.actor.user_id,
            receiver_id=cmd.receiver_id,
            content=cmd.content,
            product_id=cmd.product_id,
            order_id=cmd.order_id,
        )
        return await self._enforcer.insert(cmd.actor, message)
