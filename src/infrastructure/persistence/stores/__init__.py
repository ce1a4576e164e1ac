"""Row store implementations (RowStore protocol)."""

from src.infrastructure.persistence.stores.in_memory_store import InMemoryRowStore
from src.infrastructure.persistence.stores.sqlalchemy_store import SQLAlchemyRowStore

__all__ = ["InMemoryRowStore", "SQLAlchemyRowStore"]
