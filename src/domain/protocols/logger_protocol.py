"""LoggerProtocol definition for structured logging.

Backend-agnostic port for structured logs. Implementations MUST keep logs
structured (key-value context) and MUST NOT log row contents: policy
events carry ids, entity names and decisions only.

Log Levels:
    - DEBUG: Allowed decisions, store internals
    - INFO: Committed writes
    - WARNING: Denials and integrity violations
    - ERROR: Store failures
    - CRITICAL: Unrecoverable failures

Usage:
    from src.core.container import get_logger

    logger = get_logger()
    logger.warning("policy_denied", entity="orders", operation="update")

    scoped = logger.bind(actor_id=str(actor.user_id))
    scoped.info("write_committed", entity="products", row_id=str(row.id))
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters."""

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level message.

        Args:
            message: Event name or short message.
            **context: Structured key-value context fields.
        """
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level message."""
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level message."""
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level message with optional exception details.

        Args:
            message: Event name or short message.
            error: Optional exception; adapters add error_type and
                error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level message."""
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return a new logger with permanently bound context.

        The original logger is unchanged.

        Example:
            actor_logger = logger.bind(actor_id=str(actor.user_id), role="buyer")
            actor_logger.warning("policy_denied", entity="orders")
        """
        ...

    def with_context(self, **context: Any) -> LoggerProtocol:
        """Alias for bind()."""
        ...
