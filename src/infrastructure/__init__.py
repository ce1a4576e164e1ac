"""Infrastructure layer - Adapters for the domain protocols.

Structure:
- persistence/: SQLAlchemy models, Database, row stores
- authorization/: Casbin role gate
- logging/: structlog console adapter

The infrastructure layer depends on the domain layer (implements protocols)
but the domain layer does NOT depend on infrastructure.
"""
