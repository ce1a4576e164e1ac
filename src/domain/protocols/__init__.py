"""Domain protocols (ports) package.

Infrastructure adapters implement these protocols without inheritance.

Usage:
    from src.domain.protocols import LoggerProtocol, RoleGateProtocol, RowStore
"""

from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.role_gate_protocol import RoleGateProtocol
from src.domain.protocols.row_store_protocol import (
    RowStore,
    StoreConstraintError,
    StoreSession,
)

__all__ = [
    "LoggerProtocol",
    "RoleGateProtocol",
    "RowStore",
    "StoreConstraintError",
    "StoreSession",
]
