"""Result types for railway-oriented programming.

Policy evaluation and integrity checks never raise for expected outcomes.
A denied write or a broken invariant is returned as data so callers can
branch on it explicitly.

Usage:
    result = await enforcer.insert(actor, product)
    match result:
        case Success(value=row):
            print(f"Stored {row.id}")
        case Failure(error=error):
            print(f"Rejected: {error}")
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Represents a successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Represents a failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


# Type alias for Result union
type Result[T, E] = Success[T] | Failure[E]
