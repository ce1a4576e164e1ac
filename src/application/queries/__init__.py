"""Queries - Read operations that never change state."""

from src.application.queries.marketplace_queries import (
    GetInbox,
    ListCatalog,
    ListLowStockProducts,
)

__all__ = [
    "GetInbox",
    "ListCatalog",
    "ListLowStockProducts",
]
