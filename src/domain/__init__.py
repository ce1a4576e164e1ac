"""Domain layer - Pure business logic.

This layer contains the marketplace entities, the row-level policy rules,
the integrity validators and the protocols (ports) infrastructure adapters
implement. The domain layer has NO dependencies on any framework or
infrastructure - it is pure Python.

Structure:
- entities/: Domain entities (one per table) and the Actor
- enums/: Roles, entities, operations, order lifecycle, violation reasons
- policies/: Row-level rules keyed by (entity, operation)
- validators/: Structural integrity checks
- protocols/: Ports (row store, role gate, logger)
- schema.py: Declarative constraint metadata

The domain layer defines WHAT the marketplace allows, not HOW it's stored.
"""
