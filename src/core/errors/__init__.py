"""Core errors package.

Exports all core-level error classes for convenient importing.

Usage:
    from src.core.errors import DomainError, AuthorizationError
"""

from src.core.errors.common_errors import (
    AuthorizationError,
    IntegrityViolationError,
    ValidationError,
)
from src.core.errors.domain_error import DomainError

__all__ = [
    "AuthorizationError",
    "DomainError",
    "IntegrityViolationError",
    "ValidationError",
]
