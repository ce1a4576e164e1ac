"""Application services."""

from src.application.services.policy_enforcer import PolicyEnforcer

__all__ = ["PolicyEnforcer"]
