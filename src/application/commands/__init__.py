"""Commands - Write operations that change state.

Commands represent user intent to perform an action. They are immutable
dataclasses with imperative names (PlaceOrder, SubmitReview).

Each command has a corresponding handler in commands/handlers.
"""

from src.application.commands.engagement_commands import (
    MarkMessageRead,
    RecordResourceView,
    SendMessage,
    SubmitReview,
)
from src.application.commands.order_commands import (
    OrderLine,
    PlaceOrder,
    UpdateOrderStatus,
)

__all__ = [
    # Order commands
    "OrderLine",
    "PlaceOrder",
    "UpdateOrderStatus",
    # Engagement commands
    "MarkMessageRead",
    "RecordResourceView",
    "SendMessage",
    "SubmitReview",
]
