"""GetInbox query handler."""

from dataclasses import dataclass

from src.application.queries.marketplace_queries import GetInbox
from src.application.services.policy_enforcer import PolicyEnforcer
from src.core.errors import DomainError
from src.core.result import Result, Success
from src.domain.entities import Message
from src.domain.enums.permission import EntityType


@dataclass
class InboxResult:
    """Messages of one account.

    Attributes:
        received: Messages received, newest first.
        sent: Messages sent, newest first.
        unread_count: Received messages not yet read.
    """

    received: list[Message]
    sent: list[Message]
    unread_count: int


class GetInboxHandler:
    """Handler for GetInbox query."""

    def __init__(self, enforcer: PolicyEnforcer) -> None:
        self._enforcer = enforcer

    async def handle(self, query: GetInbox) -> Result[InboxResult, DomainError]:
        """Handle GetInbox query.

        Returns:
            Success(InboxResult).
        """
        user_id = query.actor.user_id
        received = await self._enforcer.read_many(
            query.actor, EntityType.MESSAGES, receiver_id=user_id
        )
        sent = await self._enforcer.read_many(
            query.actor, EntityType.MESSAGES, sender_id=user_id
        )
        inbox = InboxResult(
            received=received,
            sent=sent,
            unread_count=sum(1 for message in received if not message.is_read),
        )
        return Success(value=inbox)
