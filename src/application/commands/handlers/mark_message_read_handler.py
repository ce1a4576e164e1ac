"""MarkMessageRead command handler.

Flow:
1. Read the message (sender or receiver may read it)
2. Update with is_read=True (only the receiver may update)
"""

from dataclasses import replace

from src.application.commands.engagement_commands import MarkMessageRead
from src.application.services.policy_enforcer import PolicyEnforcer
from src.core.errors import DomainError
from src.core.result import Failure, Result, Success
from src.domain.entities import Message
from src.domain.enums.permission import EntityType


class MarkMessageReadHandler:
    """Handler for MarkMessageRead command."""

    def __init__(self, enforcer: PolicyEnforcer) -> None:
        self._enforcer = enforcer

    async def handle(self, cmd: MarkMessageRead) -> Result[Message, DomainError]:
        """Handle MarkMessageRead command.

        Marking an already-read message succeeds without a write.

        Returns:
            Success(Message) or Failure(AuthorizationError) when the actor
            is not the receiver.
        """
        read = await self._enforcer.read(cmd.actor, EntityType.MESSAGES, cmd.message_id)
        if isinstance(read, Failure):
            return read

        message = read.value
        if message.is_read and message.receiver_id == cmd.actor.user_id:
            return Success(value=message)
        return await self._enforcer.update(cmd.actor, replace(message, is_read=True))
