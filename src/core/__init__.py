"""Core shared kernel.

This module provides foundational utilities used across all architectural layers:
- Result types for railway-oriented programming
- Base error classes for denials and integrity violations
- Settings loaded from the environment

The core module has NO dependencies on other application layers.
"""

from src.core.errors import (
    AuthorizationError,
    DomainError,
    IntegrityViolationError,
    ValidationError,
)
from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success

__all__ = [
    "AuthorizationError",
    "DomainError",
    "ErrorCode",
    "Failure",
    "IntegrityViolationError",
    "Result",
    "Success",
    "ValidationError",
]
