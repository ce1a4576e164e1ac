"""Container module - Centralized dependency injection.

Re-exports all factory functions from submodules:

    from src.core.container import get_logger, get_policy_enforcer

The container is organized into modules:
- infrastructure: logging, database, row store
- authorization: Casbin role gate
- handlers: policy enforcer and command/query handlers
"""

from src.core.config import get_settings

# Infrastructure services
from src.core.container.infrastructure import (
    get_database,
    get_logger,
    get_row_store,
)

# Authorization
from src.core.container.authorization import get_role_gate

# Enforcer and handlers
from src.core.container.handlers import (
    get_get_inbox_handler,
    get_list_catalog_handler,
    get_list_low_stock_products_handler,
    get_mark_message_read_handler,
    get_place_order_handler,
    get_policy_enforcer,
    get_record_resource_view_handler,
    get_send_message_handler,
    get_submit_review_handler,
    get_update_order_status_handler,
)

__all__ = [
    # Settings
    "get_settings",
    # Infrastructure
    "get_database",
    "get_logger",
    "get_row_store",
    # Authorization
    "get_role_gate",
    # Enforcer and handlers
    "get_get_inbox_handler",
    "get_list_catalog_handler",
    "get_list_low_stock_products_handler",
    "get_mark_message_read_handler",
    "get_place_order_handler",
    "get_policy_enforcer",
    "get_record_resource_view_handler",
    "get_send_message_handler",
    "get_submit_review_handler",
    "get_update_order_status_handler",
]
