"""Policy enforcer and handler factories.

The enforcer is app-scoped: it holds no per-request state, and every
call opens its own store transaction.
"""

from functools import lru_cache

from src.application.commands.handlers.mark_message_read_handler import (
    MarkMessageReadHandler,
)
from src.application.commands.handlers.place_order_handler import PlaceOrderHandler
from src.application.commands.handlers.record_resource_view_handler import (
    RecordResourceViewHandler,
)
from src.application.commands.handlers.send_message_handler import SendMessageHandler
from src.application.commands.handlers.submit_review_handler import (
    SubmitReviewHandler,
)
from src.application.commands.handlers.update_order_status_handler import (
    UpdateOrderStatusHandler,
)
from src.application.queries.handlers.get_inbox_handler import GetInboxHandler
from src.application.queries.handlers.list_catalog_handler import ListCatalogHandler
from src.application.queries.handlers.list_low_stock_products_handler import (
    ListLowStockProductsHandler,
)
from src.application.services.policy_enforcer import PolicyEnforcer
from src.core.config import get_settings
from src.core.container.authorization import get_role_gate
from src.core.container.infrastructure import get_logger, get_row_store


@lru_cache()
def get_policy_enforcer() -> PolicyEnforcer:
    """Get the policy enforcer singleton (app-scoped).

    Returns:
        PolicyEnforcer wired to the SQLAlchemy row store, the Casbin role
        gate and the application logger.
    """
    return PolicyEnforcer(
        store=get_row_store(),
        role_gate=get_role_gate(),
        logger=get_logger(),
        enforce_line_item_subtotal=get_settings().enforce_line_item_subtotal,
    )


def get_place_order_handler() -> PlaceOrderHandler:
    return PlaceOrderHandler(get_policy_enforcer())


def get_update_order_status_handler() -> UpdateOrderStatusHandler:
    return UpdateOrderStatusHandler(get_policy_enforcer())


def get_submit_review_handler() -> SubmitReviewHandler:
    return SubmitReviewHandler(get_policy_enforcer())


def get_send_message_handler() -> SendMessageHandler:
    return SendMessageHandler(get_policy_enforcer())


def get_mark_message_read_handler() -> MarkMessageReadHandler:
    return MarkMessageReadHandler(get_policy_enforcer())


def get_record_resource_view_handler() -> RecordResourceViewHandler:
    return RecordResourceViewHandler(get_policy_enforcer())


def get_list_catalog_handler() -> ListCatalogHandler:
    return ListCatalogHandler(get_policy_enforcer())


def get_get_inbox_handler() -> GetInboxHandler:
    return GetInboxHandler(get_policy_enforcer())


def get_list_low_stock_products_handler() -> ListLowStockProductsHandler:
    return ListLowStockProductsHandler(get_policy_enforcer())
