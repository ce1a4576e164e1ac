"""Console logging adapter.

Writes structured logs to stdout through structlog.
- Development: colored human-readable renderer
- Testing/CI: one JSON object per line

Structurally compatible with LoggerProtocol (no inheritance). Context
keys whose value is None are dropped so optional ids do not clutter
policy events.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


def _drop_none(
    logger: Any, method_name: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    return {key: value for key, value in event_dict.items() if value is not None}


class ConsoleAdapter:
    """Console logger.

    Args:
        use_json: JSON output when True, human-readable when False.
        level: Minimum level name (DEBUG, INFO, ...).
    """

    def __init__(self, *, use_json: bool = False, level: str = "INFO") -> None:
        processors: list[structlog.types.Processor] = [
            _drop_none,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
        ]
        if use_json:
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.dev.ConsoleRenderer(colors=True))

        structlog.configure(
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(
                logging.getLevelNamesMapping().get(level.upper(), logging.INFO)
            ),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
            cache_logger_on_first_use=True,
        )
        self._logger = structlog.get_logger()

    def debug(self, message: str, /, **context: Any) -> None:
        self._logger.debug(message, **context)

    def info(self, message: str, /, **context: Any) -> None:
        self._logger.info(message, **context)

    def warning(self, message: str, /, **context: Any) -> None:
        self._logger.warning(message, **context)

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error, adding error_type and error_message when given."""
        self._logger.error(message, **_with_error(error, context))

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical failure, adding error_type and error_message when given."""
        self._logger.critical(message, **_with_error(error, context))

    def bind(self, **context: Any) -> ConsoleAdapter:
        """Return a new adapter with context bound to every later log."""
        bound_adapter = ConsoleAdapter.__new__(ConsoleAdapter)
        bound_adapter._logger = self._logger.bind(**context)
        return bound_adapter

    def with_context(self, **context: Any) -> ConsoleAdapter:
        """Alias for bind()."""
        return self.bind(**context)


def _with_error(error: Exception | None, context: dict[str, Any]) -> dict[str, Any]:
    if error is not None:
        context["error_type"] = type(error).__name__
        context["error_message"] = str(error)
    return context
