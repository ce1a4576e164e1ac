"""Role gate protocol (port) for coarse capability checks.

The gate answers one question: may an actor with this role attempt this
operation on this entity at all? It runs before any row is loaded, so
requests no role could ever satisfy are denied without touching storage.
Row-level rules (src.domain.policies) still decide every request the
gate lets through.

Implementations:
    - CasbinRoleGate: pycasbin enforcer over a static capability matrix
"""

from typing import Protocol

from src.domain.enums.permission import EntityType, Operation
from src.domain.enums.user_role import UserRole


class RoleGateProtocol(Protocol):
    """Protocol for role-level capability checks.

    Error Handling:
        Fail-closed: any internal error is logged and reported as False.
    """

    def allows(self, role: UserRole, entity: EntityType, operation: Operation) -> bool:
        """Check if role may attempt operation on entity.

        Args:
            role: Actor's role.
            entity: Target entity.
            operation: Requested operation.

        Returns:
            bool: True if the role has the capability.
        """
        ...
