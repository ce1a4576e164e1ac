"""SubmitReview command handler.

The delivered-purchase requirement is checked by the review insert rule
inside the write transaction; the stored review is marked as a verified
purchase.
"""

from uuid_extensions import uuid7

from src.application.commands.engagement_commands import SubmitReview
from src.application.services.policy_enforcer import PolicyEnforcer
from src.core.errors import DomainError
from src.core.result import Result
from src.domain.entities import Review


class SubmitReviewHandler:
    """Handler for SubmitReview command."""

    def __init__(self, enforcer: PolicyEnforcer) -> None:
        self._enforcer = enforcer

    async def handle(self, cmd: SubmitReview) -> Result[Review, DomainError]:
        """Handle SubmitReview command.

        Returns:
            Success(Review) with is_verified_purchase set.
            Failure(AuthorizationError) without a delivered purchase.
            Failure(IntegrityViolationError) for an out-of-range rating or a
            second review of the same (product, order).
        """
        review = Review(
            id=uuid7(),
            product_id=cmd.product_id,
            buyer_id=cmd.actor.user_id,
            order_id=cmd.order_id,
            rating=cmd.rating,
            comment=cmd.comment,
        )
        return await self._enforcer.insert(cmd.actor, review)
