"""Policy Registry - single source of truth for row-level rules.

Maps every allowed (entity, operation) pair to its rule. Pairs absent
from the registry evaluate to DENY, so the table is total.

Usage:
    from src.domain.policies import PolicyContext, evaluate

    decision = evaluate(actor, EntityType.ORDERS, Operation.READ,
                        PolicyContext(current=order))
    if decision is Decision.DENY:
        ...
"""

from typing import Callable

from src.domain.entities import Actor
from src.domain.enums.permission import Decision, EntityType, Operation
from src.domain.policies import rules
from src.domain.policies.context import PolicyContext

type PolicyRule = Callable[[Actor, PolicyContext], bool]

_E = EntityType
_O = Operation

POLICY_REGISTRY: dict[tuple[EntityType, Operation], PolicyRule] = {
    # Accounts
    (_E.ACCOUNTS, _O.READ): rules.account_read,
    (_E.ACCOUNTS, _O.INSERT): rules.account_insert,
    (_E.ACCOUNTS, _O.UPDATE): rules.account_update,
    (_E.ACCOUNTS, _O.DELETE): rules.admin_only,
    # Categories
    (_E.CATEGORIES, _O.READ): rules.always,
    (_E.CATEGORIES, _O.INSERT): rules.admin_only,
    (_E.CATEGORIES, _O.UPDATE): rules.admin_only,
    (_E.CATEGORIES, _O.DELETE): rules.admin_only,
    # Products
    (_E.PRODUCTS, _O.READ): rules.product_read,
    (_E.PRODUCTS, _O.INSERT): rules.product_insert,
    (_E.PRODUCTS, _O.UPDATE): rules.product_update,
    (_E.PRODUCTS, _O.DELETE): rules.product_delete,
    # Orders (never deleted directly)
    (_E.ORDERS, _O.READ): rules.order_read,
    (_E.ORDERS, _O.INSERT): rules.order_insert,
    (_E.ORDERS, _O.UPDATE): rules.order_update,
    # Order items (immutable once written)
    (_E.ORDER_ITEMS, _O.READ): rules.order_item_read,
    (_E.ORDER_ITEMS, _O.INSERT): rules.order_item_insert,
    # Reviews
    (_E.REVIEWS, _O.READ): rules.always,
    (_E.REVIEWS, _O.INSERT): rules.review_insert,
    (_E.REVIEWS, _O.UPDATE): rules.review_update,
    # Messages
    (_E.MESSAGES, _O.READ): rules.message_read,
    (_E.MESSAGES, _O.INSERT): rules.message_insert,
    (_E.MESSAGES, _O.UPDATE): rules.message_update,
    # Educational resources
    (_E.RESOURCES, _O.READ): rules.resource_read,
    (_E.RESOURCES, _O.INSERT): rules.admin_only,
    (_E.RESOURCES, _O.UPDATE): rules.admin_only,
    (_E.RESOURCES, _O.DELETE): rules.admin_only,
    # Bookmarks
    (_E.BOOKMARKS, _O.READ): rules.bookmark_owner,
    (_E.BOOKMARKS, _O.INSERT): rules.bookmark_owner,
    (_E.BOOKMARKS, _O.UPDATE): rules.bookmark_owner,
    (_E.BOOKMARKS, _O.DELETE): rules.bookmark_owner,
}


def get_rule(entity: EntityType, operation: Operation) -> PolicyRule | None:
    """Get the rule registered for a pair.

    Args:
        entity: Target entity.
        operation: Requested operation.

    Returns:
        Rule function, or None if the pair is always denied.
    """
    return POLICY_REGISTRY.get((entity, operation))


def evaluate(
    actor: Actor,
    entity: EntityType,
    operation: Operation,
    ctx: PolicyContext,
) -> Decision:
    """Decide whether actor may perform operation on the row in ctx.

    Args:
        actor: Caller identity and role.
        entity: Target entity.
        operation: Requested operation.
        ctx: Row snapshot and related facts.

    Returns:
        Decision.ALLOW or Decision.DENY. Unregistered pairs deny.
    """
    rule = get_rule(entity, operation)
    if rule is None:
        return Decision.DENY
    return Decision.of(rule(actor, ctx))


def get_statistics() -> dict[str, int]:
    """Count registered and always-denied pairs."""
    total = len(EntityType) * len(Operation)
    return {
        "total_pairs": total,
        "registered_rules": len(POLICY_REGISTRY),
        "denied_pairs": total - len(POLICY_REGISTRY),
    }
