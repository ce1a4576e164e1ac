"""RecordResourceView command handler."""

from src.application.commands.engagement_commands import RecordResourceView
from src.application.services.policy_enforcer import PolicyEnforcer
from src.core.errors import AuthorizationError
from src.core.result import Result
from src.domain.entities import EducationalResource


class RecordResourceViewHandler:
    """Handler for RecordResourceView command.

    Any actor who can read the resource may count a view; the counter is
    incremented atomically in the store.
    """

    def __init__(self, enforcer: PolicyEnforcer) -> None:
        self._enforcer = enforcer

    async def handle(
        self, cmd: RecordResourceView
    ) -> Result[EducationalResource, AuthorizationError]:
        """Handle RecordResourceView command.

        Returns:
            Success(EducationalResource) with the new view_count, or
            Failure(AuthorizationError) for unpublished or missing resources.
        """
        return await self._enforcer.record_view(cmd.actor, cmd.resource_id)
