"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Logging (structlog console adapter)
- Database (PostgreSQL / SQLite)
- Row store (SQLAlchemy)

Tests reset a singleton with ``factory.cache_clear()``.
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from src.core.config import get_settings
from src.core.enums import Environment
from src.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from src.domain.protocols.logger_protocol import LoggerProtocol
    from src.domain.protocols.row_store_protocol import RowStore


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Adapter selection is centralized here (composition root):
    - development/production: ConsoleAdapter (human-readable)
    - testing/ci: ConsoleAdapter (JSON)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from src.infrastructure.logging.console_adapter import ConsoleAdapter

    settings = get_settings()
    use_json = settings.environment in {Environment.TESTING, Environment.CI}
    return ConsoleAdapter(use_json=use_json, level=settings.log_level)


@lru_cache()
def get_database() -> Database:
    """Get database manager singleton (app-scoped).

    Returns:
        Database manager built from settings.database_url.
    """
    settings = get_settings()
    return Database(
        database_url=settings.database_url,
        echo=settings.db_echo,
    )


@lru_cache()
def get_row_store() -> "RowStore":
    """Get the SQLAlchemy row store singleton (app-scoped).

    Returns:
        RowStore over get_database().
    """
    from src.infrastructure.persistence.stores.sqlalchemy_store import (
        SQLAlchemyRowStore,
    )

    return SQLAlchemyRowStore(get_database())
