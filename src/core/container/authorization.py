"""Authorization dependency factories.

Casbin role gate built from the capability matrix shipped with
src/infrastructure/authorization (model.conf + policy.csv).
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from src.core.container.infrastructure import get_logger

if TYPE_CHECKING:
    from src.domain.protocols.role_gate_protocol import RoleGateProtocol


@lru_cache()
def get_role_gate() -> "RoleGateProtocol":
    """Get the role gate singleton (app-scoped).

    Returns:
        CasbinRoleGate loaded from the bundled model and policy files.
    """
    from src.infrastructure.authorization.casbin_role_gate import CasbinRoleGate

    return CasbinRoleGate.from_files(get_logger())
