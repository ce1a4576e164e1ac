"""Domain errors package.

Usage:
    from src.domain.errors import PolicyError
"""

from src.domain.errors.policy_error import PolicyError

__all__ = ["PolicyError"]
