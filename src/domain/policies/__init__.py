"""Row-level policy model.

Usage:
    from src.domain.policies import PolicyContext, evaluate
"""

from src.domain.policies.context import PolicyContext
from src.domain.policies.registry import (
    POLICY_REGISTRY,
    PolicyRule,
    evaluate,
    get_rule,
    get_statistics,
)

__all__ = [
    "POLICY_REGISTRY",
    "PolicyContext",
    "PolicyRule",
    "evaluate",
    "get_rule",
    "get_statistics",
]
