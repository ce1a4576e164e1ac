"""Database persistence infrastructure.

- Base models and portable column types
- Database connection and session management
- Row stores (SQLAlchemy and in-memory)
"""

from src.infrastructure.persistence.base import BaseModel
from src.infrastructure.persistence.database import Database

__all__ = [
    "BaseModel",
    "Database",
]
